from __future__ import annotations

import importlib.util
import unittest
from collections import deque


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for broadcast engine tests")
class ContainerKindTests(unittest.TestCase):
    def test_ordered_containers_are_rebuilt_in_kind(self) -> None:
        from apl_jax import add_all, add_map

        self.assertEqual(add_all((10, 20, 30), 5), (15, 25, 35))
        self.assertEqual(add_map(deque([1, 2]), deque([3, 4])), deque([4, 6]))
        self.assertIsInstance(add_map(deque([1, 2]), deque([3, 4])), deque)

    def test_sets_keep_membership(self) -> None:
        from apl_jax import add_all, sign_map

        self.assertEqual(add_all({1, 2, 3}, 10), {11, 12, 13})
        self.assertEqual(sign_map(frozenset({-5, -2, 3})), frozenset({-1, 1}))
        self.assertIsInstance(sign_map(frozenset({-5, -2, 3})), frozenset)

    def test_list_subclass_is_preserved(self) -> None:
        from apl_jax import negate_map

        class Row(list):
            pass

        out = negate_map(Row([1, -2]))
        self.assertIsInstance(out, Row)
        self.assertEqual(out, [-1, 2])

    def test_other_iterables_become_lists(self) -> None:
        from apl_jax import add, map_pairwise, negate_map

        self.assertEqual(negate_map(range(3)), [0, -1, -2])
        self.assertEqual(map_pairwise((i for i in range(3)), [1, 1, 1], add), [1, 2, 3])

    def test_empty_containers(self) -> None:
        from apl_jax import add_all, add_map

        self.assertEqual(add_map([], []), [])
        self.assertEqual(add_all((), 5), ())


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for broadcast engine tests")
class CombinatorTests(unittest.TestCase):
    def test_map_pairwise_with_any_binary_function(self) -> None:
        from apl_jax import map_pairwise

        self.assertEqual(map_pairwise([1, 2], [3, 4], lambda a, b: a * 10 + b), [13, 24])

    def test_map_scalar_pairs_every_item_with_the_value(self) -> None:
        from apl_jax import map_scalar

        seen = []

        def record(item, value):
            seen.append(value)
            return item - value

        self.assertEqual(map_scalar([10, 20, 30], 1, record), [9, 19, 29])
        self.assertEqual(seen, [1, 1, 1])

    def test_map_each(self) -> None:
        from apl_jax import map_each

        self.assertEqual(map_each([1, 2, 3], lambda v: v * v), [1, 4, 9])

    def test_length_mismatch_raises(self) -> None:
        from apl_jax import APLLengthError, add_map, map_pairwise

        with self.assertRaises(APLLengthError):
            add_map([1, 2, 3], [1, 2])
        with self.assertRaises(APLLengthError):
            map_pairwise([1], (i for i in range(2)), lambda a, b: a)

    def test_unsupported_containers_raise(self) -> None:
        from apl_jax import APLTypeError, add_all, negate_map

        for bad in ("abc", b"abc", {1: 2}, 5):
            with self.subTest(bad=bad):
                with self.assertRaises(APLTypeError):
                    negate_map(bad)
        with self.assertRaises(APLTypeError):
            add_all("12", 1)


if __name__ == "__main__":
    unittest.main()
