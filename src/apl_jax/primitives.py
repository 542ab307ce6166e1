"""A+ glyph table tying each primitive symbol to its monadic and dyadic forms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final

from . import monadic
from .circle import circle
from .dyadic import add, divide, multiply, power, residue, subtract
from .errors import APLDomainError


def _residue_apl(w, x):
    return residue(x, w)


@dataclass(frozen=True)
class Primitive:
    glyph: str
    monadic: Callable[[object], object] | None
    dyadic: Callable[[object, object], object] | None


# Dyadic entries take (w, x) in APL order: w is the left argument.
GLYPHS: Final[dict[str, Primitive]] = {
    p.glyph: p
    for p in (
        Primitive("+", monadic.identity, add),
        Primitive("-", monadic.negate, subtract),
        Primitive("×", monadic.sign, multiply),
        Primitive("÷", monadic.reciprocal, divide),
        Primitive("*", monadic.exponential, power),
        Primitive("⍟", monadic.natural_log, None),
        Primitive("○", monadic.pi_times, circle),
        Primitive("|", monadic.absolute, _residue_apl),
        Primitive("⌊", monadic.floor, None),
        Primitive("⌈", monadic.ceiling, None),
        Primitive("?", monadic.roll, None),
        Primitive("~", monadic.logical_not, None),
    )
}


def lookup(glyph: str) -> Primitive:
    try:
        return GLYPHS[glyph]
    except KeyError:
        raise APLDomainError(f"unknown primitive glyph {glyph!r}") from None


def apply_glyph(glyph: str, x, w=None):
    """Apply ``glyph`` monadically to ``x``, or dyadically as ``w glyph x``."""
    primitive = lookup(glyph)
    if w is None:
        if primitive.monadic is None:
            raise APLDomainError(f"{glyph} has no monadic form")
        return primitive.monadic(x)
    if primitive.dyadic is None:
        raise APLDomainError(f"{glyph} has no dyadic form")
    return primitive.dyadic(w, x)
