"""Elementwise application of scalar functions over containers.

Three combinators cover every mapped primitive:

- ``map_each`` applies a monadic function to every item.
- ``map_pairwise`` zips two containers and applies a dyadic function to
  each pair. Operands must have the same number of items.
- ``map_scalar`` pairs every item with one fixed value.

The result is rebuilt into the container kind of the (left) operand. When
the operands are JAX arrays and a compiled kernel is named, the whole array
goes through the kernel instead of a Python loop.
"""

from __future__ import annotations

from typing import Callable

from . import kernels
from .errors import APLLengthError
from .values import ValueKind, is_jax_array, rebuild, validate_container


def _use_kernel(kernel: str | None, *operands: object) -> bool:
    return kernel is not None and kernels.kernels_enabled() and all(is_jax_array(op) for op in operands)


def map_each(values, fn: Callable[[object], object], *, kernel: str | None = None):
    validate_container(values, where="operand")
    if _use_kernel(kernel, values):
        compiled = kernels.unary_kernel(kernel)
        if compiled is not None:
            return compiled(values)
    return rebuild(values, (fn(item) for item in values))


def map_pairwise(lhs, rhs, fn: Callable[[object, object], object], *, kernel: str | None = None):
    if validate_container(lhs, where="left operand") == ValueKind.ITERABLE:
        lhs = list(lhs)
    if validate_container(rhs, where="right operand") == ValueKind.ITERABLE:
        rhs = list(rhs)
    left_len, right_len = len(lhs), len(rhs)
    if left_len != right_len:
        raise APLLengthError(f"pairwise operands differ in length: {left_len} and {right_len}")
    if _use_kernel(kernel, lhs, rhs):
        compiled = kernels.binary_kernel(kernel)
        if compiled is not None:
            return compiled(lhs, rhs)
    return rebuild(lhs, (fn(l_item, r_item) for l_item, r_item in zip(lhs, rhs, strict=True)))


def map_scalar(values, value, fn: Callable[[object, object], object], *, kernel: str | None = None):
    validate_container(values, where="operand")
    if _use_kernel(kernel, values):
        compiled = kernels.binary_kernel(kernel)
        if compiled is not None:
            return compiled(values, value)
    return rebuild(values, (fn(item, value) for item in values))
