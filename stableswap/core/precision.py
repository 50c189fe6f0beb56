"""
Decimal precision normalization.

Invariant math runs at the greater of the precisions in play; amounts are
rescaled back to each asset's native precision on the way out. Downscaling
truncates toward zero.
"""

from __future__ import annotations

from ..errors import ValidationError
from ..kernels.python.uint import U8_MAX, U128_MAX, checked, require_int, require_uint


def _require_precision(name: str, value: int) -> None:
    require_int(name, value)
    if not (0 <= value <= U8_MAX):
        raise ValidationError(f"{name} must be in [0, {U8_MAX}]: {value}")


def adjust_precision(value: int, current_precision: int, new_precision: int) -> int:
    """
    Rescale `value` from `current_precision` decimals to `new_precision` decimals.

    Raises MathError if the upscaled value does not fit u128.
    """
    require_uint("value", value)
    _require_precision("current_precision", current_precision)
    _require_precision("new_precision", new_precision)

    if current_precision == new_precision:
        return value
    if current_precision < new_precision:
        return checked(value * 10 ** (new_precision - current_precision), U128_MAX, what="adjust_precision")
    return value // 10 ** (current_precision - new_precision)


def greater_precision(*precisions: int) -> int:
    """The precision all invariant math is carried out at."""
    if not precisions:
        raise ValidationError("at least one precision is required")
    for p in precisions:
        _require_precision("precision", p)
    return max(precisions)
