"""apl-jax public API."""

from .broadcast import map_each, map_pairwise, map_scalar
from .circle import (
    CIRCLE_NAMES,
    CircleResult,
    circle,
    circle_checked,
    circle_code,
    circle_map,
    circle_map32,
    circle_strict,
)
from .dyadic import (
    add,
    add_all,
    add_map,
    divide,
    divide_all,
    divide_map,
    multiply,
    multiply_all,
    multiply_map,
    power,
    power_all,
    power_map,
    residue,
    residue_all,
    residue_map,
    subtract,
    subtract_all,
    subtract_map,
)
from .errors import (
    APLDomainError,
    APLError,
    APLLengthError,
    APLRuntimeError,
    APLTypeError,
    call_with_errors,
)
from .kernels import kernel_cache_stats
from .monadic import (
    absolute,
    absolute_map,
    ceiling,
    ceiling_map,
    exponential,
    exponential_map,
    floor,
    floor_map,
    identity,
    identity_map,
    logical_not,
    logical_not_map,
    natural_log,
    natural_log_map,
    negate,
    negate_map,
    pi_times,
    pi_times_map,
    reciprocal,
    reciprocal_map,
    roll,
    roll_map,
    sign,
    sign_map,
)
from .nonscalar import reshape, reshape_array
from .primitives import GLYPHS, Primitive, apply_glyph
from .rng import JaxRandomSource, RandomSource, default_source, set_default_source

__all__ = [
    "sign",
    "sign_map",
    "absolute",
    "absolute_map",
    "floor",
    "floor_map",
    "ceiling",
    "ceiling_map",
    "negate",
    "negate_map",
    "identity",
    "identity_map",
    "reciprocal",
    "reciprocal_map",
    "exponential",
    "exponential_map",
    "natural_log",
    "natural_log_map",
    "pi_times",
    "pi_times_map",
    "logical_not",
    "logical_not_map",
    "roll",
    "roll_map",
    "add",
    "add_map",
    "add_all",
    "subtract",
    "subtract_map",
    "subtract_all",
    "multiply",
    "multiply_map",
    "multiply_all",
    "divide",
    "divide_map",
    "divide_all",
    "power",
    "power_map",
    "power_all",
    "residue",
    "residue_map",
    "residue_all",
    "circle",
    "circle_map",
    "circle_map32",
    "circle_checked",
    "circle_strict",
    "circle_code",
    "CircleResult",
    "CIRCLE_NAMES",
    "map_each",
    "map_pairwise",
    "map_scalar",
    "reshape",
    "reshape_array",
    "GLYPHS",
    "Primitive",
    "apply_glyph",
    "RandomSource",
    "JaxRandomSource",
    "default_source",
    "set_default_source",
    "kernel_cache_stats",
    "call_with_errors",
    "APLError",
    "APLRuntimeError",
    "APLLengthError",
    "APLDomainError",
    "APLTypeError",
]
