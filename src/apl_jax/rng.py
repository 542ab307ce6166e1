"""Uniform random sources consumed by ``roll``."""

from __future__ import annotations

import logging
import os
import threading
from typing import Final, Protocol

import jax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_SEED_ENV: Final[str] = "APL_JAX_SEED"
_INT32_MIN: Final[int] = -(2**31)
_INT32_MAX: Final[int] = 2**31 - 1


class RandomSource(Protocol):
    def uniform(self, low: float, high: float) -> float:
        """Draw a float from ``[low, high)``."""
        ...

    def integers(self, low: int, high: int) -> int:
        """Draw an int from ``[low, high)``."""
        ...


class JaxRandomSource:
    """Seeded source splitting a ``jax.random`` key once per draw.

    Safe to share between threads: key splitting happens under a lock.
    Integer bounds inside int32 use ``jax.random.randint``; wider bounds are
    drawn exactly from 32-bit words.
    """

    def __init__(self, seed: int = 0) -> None:
        self.seed = int(seed)
        self._key = jax.random.PRNGKey(self.seed)
        self._lock = threading.Lock()

    def _next_key(self):
        with self._lock:
            self._key, sub = jax.random.split(self._key)
        return sub

    def uniform(self, low: float, high: float) -> float:
        if not low < high:
            raise ValueError(f"uniform requires low < high, got [{low}, {high})")
        unit = float(jax.random.uniform(self._next_key()))
        return low + (high - low) * unit

    def integers(self, low: int, high: int) -> int:
        if not low < high:
            raise ValueError(f"integers requires low < high, got [{low}, {high})")
        if _INT32_MIN <= low and high <= _INT32_MAX:
            return int(jax.random.randint(self._next_key(), (), low, high))
        return low + self._wide_below(high - low)

    def _wide_below(self, span: int) -> int:
        # Rejection sampling over 32-bit words; each attempt succeeds with p > 1/2.
        nbits = (span - 1).bit_length()
        words = -(-nbits // 32)
        mask = (1 << nbits) - 1
        while True:
            chunk = jax.random.bits(self._next_key(), (words,), dtype=jnp.uint32)
            value = 0
            for word in chunk.tolist():
                value = (value << 32) | int(word)
            value &= mask
            if value < span:
                return value


_DEFAULT_SOURCE: RandomSource | None = None
_DEFAULT_SOURCE_LOCK = threading.Lock()


def _default_seed() -> int:
    raw = os.environ.get(_SEED_ENV)
    if raw is not None:
        return int(raw)
    return int.from_bytes(os.urandom(4), "little")


def default_source() -> RandomSource:
    """Process-wide source, created on first use."""
    global _DEFAULT_SOURCE
    with _DEFAULT_SOURCE_LOCK:
        if _DEFAULT_SOURCE is None:
            seed = _default_seed()
            logger.debug("seeding default random source with %d", seed)
            _DEFAULT_SOURCE = JaxRandomSource(seed)
        return _DEFAULT_SOURCE


def set_default_source(source: RandomSource | None) -> None:
    """Replace the process-wide source; ``None`` reseeds on next use."""
    global _DEFAULT_SOURCE
    with _DEFAULT_SOURCE_LOCK:
        _DEFAULT_SOURCE = source
