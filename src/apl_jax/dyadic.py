"""Dyadic scalar primitives with pairwise (``_map``) and scalar (``_all``) forms.

Every body is the same generic step: apply the operand type's own operator,
then convert the result back to that type when both operands share it. Mixed
operands (``int`` with ``float``, say) keep Python's numeric promotion.

Float operands are computed as float64 with IEEE semantics, so division by
zero and out-of-domain powers give ``inf``/``nan`` instead of raising. This
matches what the JAX array kernels produce.
"""

from __future__ import annotations

import operator
from typing import Callable

import numpy as np
from jax import lax

from .broadcast import map_pairwise, map_scalar
from .values import coerce_like, is_integral, is_jax_array, same_representation, zero_like


def _is_ieee_float(value: object) -> bool:
    return isinstance(value, (float, np.floating))


def _apply(op: Callable[[object, object], object], lhs, rhs):
    same = same_representation(lhs, rhs)
    if _is_ieee_float(lhs) or _is_ieee_float(rhs):
        with np.errstate(all="ignore"):
            result = op(np.float64(lhs), np.float64(rhs))
        return coerce_like(lhs, result) if same else float(result)
    result = op(lhs, rhs)
    if same:
        return coerce_like(lhs, result)
    return result


def _truncating_divide(lhs, rhs):
    if is_jax_array(lhs):
        return lax.div(lhs, rhs)
    quotient = abs(lhs) // abs(rhs)
    if (lhs < 0) != (rhs < 0):
        quotient = -quotient
    return coerce_like(lhs, quotient)


def add(lhs, rhs):
    """Add ``y+x``."""
    return _apply(operator.add, lhs, rhs)


def subtract(lhs, rhs):
    """Subtract ``y-x``."""
    return _apply(operator.sub, lhs, rhs)


def multiply(lhs, rhs):
    """Multiply ``y×x``."""
    return _apply(operator.mul, lhs, rhs)


def divide(lhs, rhs):
    """Divide ``y÷x``.

    Integers truncate toward zero exactly (``divide(7, 2) == 3``, also far
    beyond float precision). An integer zero divisor is left to the
    representation (Python ints raise ``ZeroDivisionError``); a float zero
    divisor gives ``inf`` or ``nan``.
    """
    if same_representation(lhs, rhs) and is_integral(lhs):
        return _truncating_divide(lhs, rhs)
    return _apply(operator.truediv, lhs, rhs)


def power(lhs, rhs):
    """``lhs`` raised to ``rhs``; base and exponent share a type.

    Float results outside the reals (``power(-8.0, 0.5)``) are ``nan``.
    """
    return _apply(operator.pow, lhs, rhs)


def residue(lhs, rhs):
    """Remainder of ``lhs`` divided by ``rhs``.

    Uses floor modulo, so the result takes the sign of the divisor:
    ``residue(-7, 5) == 3``, where a truncating remainder would give ``-2``.
    A zero divisor gives zero in the type of ``lhs``.
    """
    if rhs == zero_like(rhs):
        return zero_like(lhs)
    return _apply(operator.mod, lhs, rhs)


def _pairwise(fn: Callable[[object, object], object]) -> Callable[[object, object], object]:
    name = fn.__name__

    def mapped(lhs, rhs):
        return map_pairwise(lhs, rhs, fn, kernel=name)

    mapped.__name__ = mapped.__qualname__ = f"{name}_map"
    mapped.__doc__ = f"Apply ``{name}`` to corresponding items of two equal-length containers."
    return mapped


def _against(fn: Callable[[object, object], object]) -> Callable[[object, object], object]:
    name = fn.__name__

    def mapped(values, value):
        return map_scalar(values, value, fn, kernel=name)

    mapped.__name__ = mapped.__qualname__ = f"{name}_all"
    mapped.__doc__ = f"Apply ``{name}`` between every item of ``values`` and ``value``."
    return mapped


add_map = _pairwise(add)
add_all = _against(add)
subtract_map = _pairwise(subtract)
subtract_all = _against(subtract)
multiply_map = _pairwise(multiply)
multiply_all = _against(multiply)
divide_map = _pairwise(divide)
divide_all = _against(divide)
power_map = _pairwise(power)
power_all = _against(power)
residue_map = _pairwise(residue)
residue_all = _against(residue)
