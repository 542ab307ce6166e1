"""Structured error types for callers that want more than sentinels."""

from __future__ import annotations

from typing import Callable


class APLError(Exception):
    """Base class for structured apl-jax errors."""


class APLRuntimeError(APLError):
    """Generic failure while applying a primitive."""


class APLLengthError(APLRuntimeError):
    """Pairwise operands do not have the same number of items."""


class APLDomainError(APLRuntimeError):
    """Argument lies outside the domain of the primitive."""


class APLTypeError(APLRuntimeError):
    """Operand or container kind is not supported."""


def classify_runtime_exception(err: Exception) -> APLRuntimeError:
    """Best-effort classification of a raw representation failure."""
    if isinstance(err, APLRuntimeError):
        return err

    message = str(err) or type(err).__name__
    lowered = message.lower()

    if isinstance(err, (ZeroDivisionError, OverflowError)):
        return APLDomainError(message)

    length_markers = (
        "length",
        "shorter",
        "longer",
    )
    if any(marker in lowered for marker in length_markers):
        return APLLengthError(message)

    if isinstance(err, TypeError):
        return APLTypeError(message)

    domain_markers = (
        "domain",
        "math",
        "invalid",
        "negative",
        "overflow",
    )
    if isinstance(err, ValueError) or any(marker in lowered for marker in domain_markers):
        return APLDomainError(message)

    return APLRuntimeError(message)


def call_with_errors(fn: Callable[..., object], *args, **kwargs):
    """Call a primitive, re-raising raw failures as structured errors."""
    try:
        return fn(*args, **kwargs)
    except APLError:
        raise
    except Exception as err:
        raise classify_runtime_exception(err) from err
