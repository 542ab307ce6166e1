"""Compiled whole-array kernels used when a container is a JAX array."""

from __future__ import annotations

import logging
import os
from typing import Callable, Final

import jax
from jax import lax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_USE_JITTED_KERNELS: Final[bool] = os.environ.get("APL_JAX_DISABLE_JITTED_KERNELS", "0") != "1"


def _same_dtype_result(w: jnp.ndarray, x: jnp.ndarray, result: jnp.ndarray) -> jnp.ndarray:
    # Same-representation operands convert the result back, mixed ones keep promotion.
    if jnp.result_type(w) == jnp.result_type(x):
        return result.astype(jnp.result_type(w))
    return result


def _sign_array(x: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(x < 0, -1, 1).astype(x.dtype)


def _floor_array(x: jnp.ndarray) -> jnp.ndarray:
    if jnp.issubdtype(x.dtype, jnp.integer):
        return x
    return jnp.floor(x)


def _ceiling_array(x: jnp.ndarray) -> jnp.ndarray:
    if jnp.issubdtype(x.dtype, jnp.integer):
        return x
    return jnp.ceil(x)


def _residue_array(w: jnp.ndarray, x: jnp.ndarray) -> jnp.ndarray:
    zero_divisor = x == 0
    safe = jnp.where(zero_divisor, jnp.ones_like(x), x)
    out = jnp.where(zero_divisor, jnp.zeros_like(jnp.mod(w, safe)), jnp.mod(w, safe))
    return _same_dtype_result(w, x, out)


def _as_float_array(x: jnp.ndarray) -> jnp.ndarray:
    return x.astype(jnp.promote_types(x.dtype, jnp.float32))


def _divide_array(w: jnp.ndarray, x: jnp.ndarray) -> jnp.ndarray:
    same = jnp.result_type(w) == jnp.result_type(x)
    if same and jnp.issubdtype(jnp.result_type(w), jnp.integer):
        ww, xx = jnp.broadcast_arrays(w, jnp.asarray(x, dtype=jnp.result_type(w)))
        return lax.div(ww, xx)
    return _same_dtype_result(w, x, w / x)


def _exponential_array(x: jnp.ndarray) -> jnp.ndarray:
    if not jnp.issubdtype(x.dtype, jnp.integer):
        raise TypeError(f"exponential requires integer powers, got dtype {x.dtype}")
    return jnp.exp(_as_float_array(x))


_UNARY_OPS: Final[dict[str, Callable[[jnp.ndarray], jnp.ndarray]]] = {
    "identity": lambda x: x,
    "negate": lambda x: -x,
    "sign": _sign_array,
    "absolute": lambda x: x * _sign_array(x),
    "floor": _floor_array,
    "ceiling": _ceiling_array,
    "logical_not": lambda x: x * _sign_array(x) == 0,
    "reciprocal": lambda x: 1 / _as_float_array(x),
    "exponential": _exponential_array,
    "natural_log": lambda x: jnp.log(_as_float_array(x)),
    "pi_times": lambda x: _as_float_array(x) * jnp.pi,
}

_BINARY_OPS: Final[dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]]] = {
    "add": lambda w, x: _same_dtype_result(w, x, w + x),
    "subtract": lambda w, x: _same_dtype_result(w, x, w - x),
    "multiply": lambda w, x: _same_dtype_result(w, x, w * x),
    "divide": _divide_array,
    "power": lambda w, x: _same_dtype_result(w, x, w**x),
    "residue": _residue_array,
}


def _circle_neg5(x: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(x == -jnp.inf, -jnp.inf, jnp.log(x + jnp.sqrt(1 + x * x)))


_CIRCLE_OPS: Final[dict[int, Callable[[jnp.ndarray], jnp.ndarray]]] = {
    0: lambda x: jnp.sqrt(1 - x * x),
    1: jnp.sin,
    2: jnp.cos,
    3: jnp.tan,
    4: lambda x: jnp.sqrt(1 + x * x),
    5: jnp.sinh,
    6: jnp.cosh,
    7: jnp.tanh,
    -1: jnp.arcsin,
    -2: jnp.arccos,
    -3: jnp.arctan,
    -4: lambda x: jnp.sqrt(-1 + x * x),
    -5: _circle_neg5,
    -6: lambda x: jnp.log(x + jnp.sqrt(x - 1) * jnp.sqrt(x + 1)),
    -7: lambda x: 0.5 * (jnp.log(1 + x) - jnp.log(1 - x)),
}

_KERNEL_CACHE: dict[tuple[str, object], Callable] = {}
_KERNEL_CACHE_STATS: dict[str, int] = {"hits": 0, "misses": 0}


def kernels_enabled() -> bool:
    return _USE_JITTED_KERNELS


def _cached_kernel(key: tuple[str, object], build: Callable[[], Callable]) -> Callable:
    fn = _KERNEL_CACHE.get(key)
    if fn is not None:
        _KERNEL_CACHE_STATS["hits"] += 1
        return fn
    _KERNEL_CACHE_STATS["misses"] += 1
    logger.debug("compiling array kernel %s:%s", *key)
    fn = jax.jit(build())
    _KERNEL_CACHE[key] = fn
    return fn


def unary_kernel(name: str) -> Callable[[jnp.ndarray], jnp.ndarray] | None:
    if name not in _UNARY_OPS:
        return None
    return _cached_kernel(("unary", name), lambda: _UNARY_OPS[name])


def binary_kernel(name: str) -> Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray] | None:
    if name not in _BINARY_OPS:
        return None
    return _cached_kernel(("binary", name), lambda: _BINARY_OPS[name])


def circle_kernel(code: int) -> Callable[[jnp.ndarray], jnp.ndarray]:
    op = _CIRCLE_OPS.get(code)

    def build() -> Callable[[jnp.ndarray], jnp.ndarray]:
        if op is None:
            return lambda x: jnp.full(x.shape, jnp.nan, dtype=_as_float_array(x).dtype)
        return lambda x: op(_as_float_array(x))

    return _cached_kernel(("circle", code), build)


def kernel_cache_stats(*, reset: bool = False) -> dict[str, float | int]:
    hits = _KERNEL_CACHE_STATS["hits"]
    misses = _KERNEL_CACHE_STATS["misses"]
    total = hits + misses
    stats: dict[str, float | int] = {
        "hits": hits,
        "misses": misses,
        "size": len(_KERNEL_CACHE),
        "enabled": _USE_JITTED_KERNELS,
        "hit_rate": float(hits / total) if total else 0.0,
    }
    if reset:
        _KERNEL_CACHE.clear()
        _KERNEL_CACHE_STATS["hits"] = 0
        _KERNEL_CACHE_STATS["misses"] = 0
    return stats
