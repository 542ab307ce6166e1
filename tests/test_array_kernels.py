from __future__ import annotations

import importlib.util
import math
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for array kernel tests")
class ArrayContainerTests(unittest.TestCase):
    def _assert_list_close(self, got, want, *, places: int = 5) -> None:
        got_list = got.tolist() if hasattr(got, "tolist") else list(got)
        self.assertEqual(len(got_list), len(want))
        for g, w in zip(got_list, want, strict=True):
            if isinstance(w, float) and math.isnan(w):
                self.assertTrue(math.isnan(g))
            else:
                self.assertAlmostEqual(float(g), float(w), places=places)

    def test_pairwise_and_scalar_maps_return_arrays(self) -> None:
        import jax.numpy as jnp

        from apl_jax import add_all, add_map, residue_map

        nums = jnp.asarray([10, 20, 30])
        fives = jnp.asarray([5, 5, 5])
        out = add_map(nums, fives)
        self.assertIsInstance(out, jnp.ndarray)
        self.assertEqual(out.tolist(), [15, 25, 35])
        self.assertEqual(add_all(nums, 5).tolist(), [15, 25, 35])
        self.assertEqual(residue_map(jnp.asarray([11, 22, 33]), jnp.asarray([5, 0, 5])).tolist(), [1, 0, 3])

    def test_integer_division_truncates(self) -> None:
        import jax.numpy as jnp

        from apl_jax import divide_map

        out = divide_map(jnp.asarray([7, -7, 30]), jnp.asarray([2, 2, 5]))
        self.assertEqual(out.tolist(), [3, -3, 6])
        self.assertTrue(jnp.issubdtype(out.dtype, jnp.integer))

    def test_integer_division_is_exact_past_float32(self) -> None:
        import jax.numpy as jnp

        from apl_jax import divide_all, divide_map

        big = jnp.asarray([16777217, -16777219, 2**31 - 1], dtype=jnp.int32)
        out = divide_map(big, jnp.asarray([1, 2, 1], dtype=jnp.int32))
        self.assertEqual(out.dtype, jnp.int32)
        self.assertEqual(out.tolist(), [16777217, -8388609, 2**31 - 1])
        self.assertEqual(divide_all(big, 1).tolist(), big.tolist())

    def test_exponential_kernel_takes_integer_powers(self) -> None:
        import jax.numpy as jnp

        from apl_jax import exponential_map

        self._assert_list_close(exponential_map(jnp.asarray([0, 2])), [1.0, 7.3890560989306495])
        with self.assertRaises(TypeError):
            exponential_map(jnp.asarray([1.0, 2.5]))

    def test_float_division_by_zero_gives_infinity(self) -> None:
        import jax.numpy as jnp

        from apl_jax import divide_all, reciprocal_map

        self.assertEqual(divide_all(jnp.asarray([1.0, -1.0]), 0.0).tolist(), [math.inf, -math.inf])
        self.assertEqual(reciprocal_map(jnp.asarray([0.0, 4.0])).tolist(), [math.inf, 0.25])

    def test_kernel_path_matches_item_path(self) -> None:
        import jax.numpy as jnp

        from apl_jax import map_each, monadic

        values = jnp.asarray([-2.5, -0.0, 0.0, 1.25, 3.0])
        cases = [
            (monadic.sign_map, monadic.sign),
            (monadic.absolute_map, monadic.absolute),
            (monadic.floor_map, monadic.floor),
            (monadic.ceiling_map, monadic.ceiling),
            (monadic.negate_map, monadic.negate),
            (monadic.logical_not_map, monadic.logical_not),
        ]
        for mapped, scalar in cases:
            with self.subTest(fn=scalar.__name__):
                self.assertEqual(mapped(values).tolist(), map_each(values, scalar).tolist())

    def test_sign_of_zero_in_arrays(self) -> None:
        import jax.numpy as jnp

        from apl_jax import sign_map

        self.assertEqual(sign_map(jnp.asarray([-2, 0, 3])).tolist(), [-1, 1, 1])

    def test_circle_map_on_arrays(self) -> None:
        import jax.numpy as jnp

        from apl_jax import circle_map, circle_map32

        values = jnp.asarray([0.7, 1.7], dtype=jnp.float32)
        self._assert_list_close(circle_map(1, values), [0.644217687237691, math.sin(1.7)])
        self._assert_list_close(circle_map(-4, values), [math.nan, 1.3747727084867518])
        self._assert_list_close(circle_map(-5, jnp.asarray([-jnp.inf])), [-math.inf])
        self._assert_list_close(circle_map(8, values), [math.nan, math.nan])
        out32 = circle_map32(-3, values)
        self.assertEqual(out32.dtype, jnp.float32)
        self._assert_list_close(out32, [0.6107259643892086, math.atan(1.7)])

    def test_roll_map_on_arrays(self) -> None:
        import jax.numpy as jnp

        from apl_jax import JaxRandomSource, roll_map

        out = roll_map(jnp.asarray([10.0, -10.0, 0.0]), source=JaxRandomSource(seed=5))
        self.assertIsInstance(out, jnp.ndarray)
        values = out.tolist()
        self.assertTrue(0.0 <= values[0] < 10.0)
        self.assertTrue(-10.0 < values[1] <= 0.0)
        self.assertEqual(values[2], 0.0)

    def test_rank_two_arrays_are_rejected(self) -> None:
        import jax.numpy as jnp

        from apl_jax import APLTypeError, negate_map

        with self.assertRaises(APLTypeError):
            negate_map(jnp.zeros((2, 2)))

    def test_length_mismatch_on_arrays(self) -> None:
        import jax.numpy as jnp

        from apl_jax import APLLengthError, add_map

        with self.assertRaises(APLLengthError):
            add_map(jnp.asarray([1, 2, 3]), jnp.asarray([1, 2]))


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for array kernel tests")
class KernelCacheTests(unittest.TestCase):
    def test_kernels_are_compiled_once(self) -> None:
        import jax.numpy as jnp

        from apl_jax import kernel_cache_stats, multiply_map
        from apl_jax.kernels import kernels_enabled

        if not kernels_enabled():
            self.skipTest("compiled kernels disabled by APL_JAX_DISABLE_JITTED_KERNELS")

        kernel_cache_stats(reset=True)
        values = jnp.asarray([1.0, 2.0])
        multiply_map(values, values)
        multiply_map(values, values)
        stats = kernel_cache_stats()
        self.assertEqual(stats["misses"], 1)
        self.assertEqual(stats["hits"], 1)
        self.assertEqual(stats["size"], 1)
        self.assertTrue(stats["enabled"])


if __name__ == "__main__":
    unittest.main()
