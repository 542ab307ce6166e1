"""Monadic scalar primitives and their elementwise forms.

Generic primitives keep the representation of their argument: ``sign(-3)``
is the int ``-1``, ``sign(jnp.float32(2))`` is a float32 array. The float
primitives (reciprocal, exponential, natural_log, pi_times) compute in
float64 with IEEE semantics, so division by zero and out-of-domain logs give
``inf``/``nan`` instead of raising.
"""

from __future__ import annotations

import math
import operator
from typing import Callable

import jax.numpy as jnp
import numpy as np

from .broadcast import map_each
from .rng import RandomSource, default_source
from .values import coerce_like, is_integral, is_jax_array, scalar_like, zero_like


def sign(x):
    """Signum ``×x``.

    ``-1`` when ``x`` is below zero, ``1`` otherwise. Zero counts as positive,
    so ``sign(0) == 1``.
    """
    if x < zero_like(x):
        return scalar_like(x, -1)
    return scalar_like(x, 1)


def absolute(x):
    """Magnitude ``|x``, computed as ``x × sign(x)``."""
    return coerce_like(x, x * sign(x))


def floor(x):
    """Largest integral value not greater than ``x``.

    No comparison tolerance is applied near integers.
    """
    if is_jax_array(x):
        return x if is_integral(x) else jnp.floor(x)
    if isinstance(x, (float, np.floating)):
        return type(x)(np.floor(x))
    return coerce_like(x, math.floor(x))


def ceiling(x):
    """Smallest integral value not less than ``x``."""
    if is_jax_array(x):
        return x if is_integral(x) else jnp.ceil(x)
    if isinstance(x, (float, np.floating)):
        return type(x)(np.ceil(x))
    return coerce_like(x, math.ceil(x))


def negate(x):
    return coerce_like(x, -x)


def identity(x):
    """Identity ``+x``: the argument itself."""
    return x


def reciprocal(x) -> float:
    """``1÷x``; ``reciprocal(0.0)`` is ``inf``."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(1.0) / np.float64(x))


def exponential(x) -> float:
    """e raised to the integer power ``x``."""
    n = operator.index(x)
    with np.errstate(over="ignore", under="ignore"):
        return float(np.float64(np.e) ** n)


def natural_log(x) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log(np.float64(x)))


def pi_times(x) -> float:
    return float(np.float64(x) * np.pi)


def logical_not(x) -> bool:
    """``True`` when ``|x`` is zero."""
    return bool(absolute(x) == zero_like(x))


def roll(x, *, source: RandomSource | None = None):
    """Random draw between zero and ``x``.

    Draws from ``[0, x)`` for positive ``x`` and from ``(x, 0]`` for negative
    ``x``: the end at zero is always the inclusive one. Integral arguments
    draw integers. ``roll(0)`` is zero.
    """
    if source is None:
        source = default_source()
    zero = zero_like(x)
    if x == zero:
        return zero
    negative = bool(x < zero)
    bound = -x if negative else x
    if is_integral(x):
        drawn = source.integers(0, int(bound))
    else:
        drawn = source.uniform(0.0, float(bound))
    result = coerce_like(x, -drawn if negative else drawn)
    if not is_integral(x) and abs(result) >= bound:
        # Narrowing a float64 draw can round onto ``x`` itself.
        result = _toward_zero(result)
    return result


def _toward_zero(value):
    if is_jax_array(value):
        return jnp.nextafter(value, jnp.zeros_like(value))
    if isinstance(value, np.floating):
        return np.nextafter(value, type(value)(0))
    return type(value)(np.nextafter(float(value), 0.0))


def _each(fn: Callable[[object], object]) -> Callable[[object], object]:
    name = fn.__name__

    def mapped(values):
        return map_each(values, fn, kernel=name)

    mapped.__name__ = mapped.__qualname__ = f"{name}_map"
    mapped.__doc__ = f"Apply ``{name}`` to every item of ``values``, keeping the container kind."
    return mapped


sign_map = _each(sign)
absolute_map = _each(absolute)
floor_map = _each(floor)
ceiling_map = _each(ceiling)
negate_map = _each(negate)
identity_map = _each(identity)
reciprocal_map = _each(reciprocal)
exponential_map = _each(exponential)
natural_log_map = _each(natural_log)
pi_times_map = _each(pi_times)
logical_not_map = _each(logical_not)


def roll_map(values, *, source: RandomSource | None = None):
    """Independent ``roll`` of every item, drawing from one source."""
    if source is None:
        source = default_source()
    return map_each(values, lambda item: roll(item, source=source))
