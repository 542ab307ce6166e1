"""Value model: scalar kinds, container kinds and type-preserving conversion."""

from __future__ import annotations

import collections
import numbers
from collections.abc import Iterable, Mapping
from enum import Enum

import jax.numpy as jnp

from .errors import APLTypeError


class ValueKind(str, Enum):
    SCALAR = "scalar"
    ARRAY = "array"
    SEQUENCE = "sequence"
    SET = "set"
    ITERABLE = "iterable"


# Containers rebuilt with their own constructor from an iterable of items.
_REBUILDABLE: tuple[type, ...] = (list, tuple, set, frozenset, collections.deque)


def is_jax_array(value: object) -> bool:
    return isinstance(value, jnp.ndarray)


def is_integral(value: object) -> bool:
    if is_jax_array(value):
        return bool(jnp.issubdtype(value.dtype, jnp.integer))
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def kind_of(value: object) -> ValueKind:
    if is_jax_array(value):
        return ValueKind.SCALAR if value.ndim == 0 else ValueKind.ARRAY
    if isinstance(value, (set, frozenset)):
        return ValueKind.SET
    if isinstance(value, (list, tuple, collections.deque)):
        return ValueKind.SEQUENCE
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return ValueKind.SCALAR
    return ValueKind.ITERABLE


def validate_container(value: object, *, where: str = "argument") -> ValueKind:
    """Check ``value`` can be mapped over and return its container kind."""
    kind = kind_of(value)
    if is_jax_array(value):
        if value.ndim != 1:
            raise APLTypeError(f"{where} must be a rank-1 array, got rank {value.ndim}")
        return kind
    if kind != ValueKind.SCALAR:
        return kind
    if isinstance(value, (str, bytes)):
        raise APLTypeError(f"{where} must be a container of numbers, not {type(value).__name__}")
    if isinstance(value, Mapping):
        raise APLTypeError(f"{where} must be a container of numbers, not a mapping")
    raise APLTypeError(f"{where} has unsupported container type {type(value).__name__}")


def rebuild(container: object, items: Iterable) -> object:
    """Collect ``items`` back into the same kind of container as ``container``."""
    kind = kind_of(container)
    if kind == ValueKind.ARRAY:
        items = list(items)
        if not items:
            return jnp.asarray([], dtype=container.dtype)
        if all(is_jax_array(item) for item in items):
            return jnp.stack(items, axis=0)
        return jnp.asarray(items)
    if kind == ValueKind.ITERABLE:
        return list(items)
    if type(container) in _REBUILDABLE or isinstance(container, (list, set)):
        return type(container)(items)
    return list(items)


def zero_like(value):
    if is_jax_array(value):
        return jnp.zeros(value.shape, dtype=value.dtype)
    return type(value)(0)


def scalar_like(value, n: int):
    """Build the integer ``n`` in the representation of ``value``."""
    if is_jax_array(value):
        return jnp.asarray(n, dtype=value.dtype)
    return type(value)(n)


def coerce_like(value, result):
    """Convert an operator ``result`` back to the representation of ``value``."""
    if is_jax_array(value):
        if is_jax_array(result) and result.dtype == value.dtype:
            return result
        return jnp.asarray(result).astype(value.dtype)
    if type(result) is type(value):
        return result
    return type(value)(result)


def same_representation(lhs: object, rhs: object) -> bool:
    if is_jax_array(lhs) and is_jax_array(rhs):
        return lhs.dtype == rhs.dtype
    return type(lhs) is type(rhs)
