"""Non-scalar helpers."""

from __future__ import annotations

import itertools
import operator
from typing import Callable, Iterable, TypeVar

import jax.numpy as jnp

from .errors import APLDomainError

T = TypeVar("T")


def _length(n) -> int:
    count = operator.index(n)
    if count < 0:
        raise APLDomainError(f"reshape requires a non-negative length, got {count}")
    return count


def reshape(n, value: T, *, into: Callable[[Iterable[T]], object] = list):
    """``n⍴value``: a container of ``n`` copies of ``value``, built by ``into``."""
    return into(itertools.repeat(value, _length(n)))


def reshape_array(n, value, dtype=None) -> jnp.ndarray:
    return jnp.full((_length(n),), value, dtype=dtype)
