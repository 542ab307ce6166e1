"""Circle function ``y○x``: trigonometric, hyperbolic and inverse transforms.

| code | meaning           | code | meaning           |
|------|-------------------|------|-------------------|
|  0   | (1-x*2)*0.5       |      |                   |
|  1   | sin x             |  -1  | arcsin x          |
|  2   | cos x             |  -2  | arccos x          |
|  3   | tan x             |  -3  | arctan x          |
|  4   | (1+x*2)*0.5       |  -4  | (-1+x*2)*0.5      |
|  5   | sinh x            |  -5  | arcsinh x         |
|  6   | cosh x            |  -6  | arccosh x         |
|  7   | tanh x            |  -7  | arctanh x         |

There is no error channel in ``circle``: unknown codes and arguments outside
a transform's domain both give NaN. ``circle_checked`` tells the two cases
apart and ``circle_strict`` raises instead.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Callable, Final

import jax.numpy as jnp
import numpy as np

from .broadcast import map_each
from .errors import APLDomainError
from .kernels import circle_kernel, kernels_enabled
from .values import is_jax_array, validate_container


def _arcsinh(x: np.float64) -> np.float64:
    if x == -np.inf:
        return np.float64(-np.inf)
    return np.log(x + np.sqrt(1.0 + x**2))


_CIRCLE_FUNCTIONS: Final[dict[int, Callable[[np.float64], np.float64]]] = {
    0: lambda x: np.sqrt(1.0 - x**2),
    1: np.sin,
    2: np.cos,
    3: np.tan,
    4: lambda x: np.sqrt(1.0 + x**2),
    5: np.sinh,
    6: np.cosh,
    7: np.tanh,
    -1: np.arcsin,
    -2: np.arccos,
    -3: np.arctan,
    -4: lambda x: np.sqrt(-1.0 + x**2),
    -5: _arcsinh,
    -6: lambda x: np.log(x + np.sqrt(x - 1.0) * np.sqrt(x + 1.0)),
    -7: lambda x: 0.5 * (np.log(1.0 + x) - np.log(1.0 - x)),
}

CIRCLE_NAMES: Final[dict[str, int]] = {
    "sinarccos": 0,
    "sin": 1,
    "cos": 2,
    "tan": 3,
    "secarctan": 4,
    "sinh": 5,
    "cosh": 6,
    "tanh": 7,
    "arcsin": -1,
    "arccos": -2,
    "arctan": -3,
    "tanarcsec": -4,
    "arcsinh": -5,
    "arccosh": -6,
    "arctanh": -7,
}


@dataclass(frozen=True)
class CircleResult:
    code: int
    argument: float
    value: float
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def circle_code(name: str) -> int:
    try:
        return CIRCLE_NAMES[name]
    except KeyError:
        raise APLDomainError(f"unknown circle function name {name!r}") from None


def circle(code: int, x: float) -> float:
    """Apply the circle transform selected by ``code`` to ``x``."""
    fn = _CIRCLE_FUNCTIONS.get(operator.index(code))
    if fn is None:
        return math.nan
    with np.errstate(all="ignore"):
        return float(fn(np.float64(x)))


def circle_checked(code: int, x: float) -> CircleResult:
    """Like ``circle`` but tags invalid codes and domain violations.

    A NaN argument propagates as a successful NaN result.
    """
    code = operator.index(code)
    argument = float(x)
    value = circle(code, argument)
    error = None
    if code not in _CIRCLE_FUNCTIONS:
        error = f"unknown circle code {code}"
    elif math.isnan(value) and not math.isnan(argument):
        error = f"argument {argument!r} is outside the domain of circle code {code}"
    return CircleResult(code=code, argument=argument, value=value, error=error)


def circle_strict(code: int, x: float) -> float:
    result = circle_checked(code, x)
    if not result.ok:
        raise APLDomainError(result.error)
    return result.value


def circle_map(code: int, values):
    """``circle(code, v)`` for every float64 item ``v`` of ``values``."""
    code = operator.index(code)
    if is_jax_array(values) and kernels_enabled():
        validate_container(values, where="operand")
        return circle_kernel(code)(values)
    return map_each(values, lambda item: circle(code, item))


def circle_map32(code: int, values):
    """``circle_map`` for float32 items: widen, dispatch, narrow."""
    code = operator.index(code)
    if is_jax_array(values) and kernels_enabled():
        validate_container(values, where="operand")
        return circle_kernel(code)(values.astype(jnp.float32))
    return map_each(values, lambda item: np.float32(circle(code, float(item))))
