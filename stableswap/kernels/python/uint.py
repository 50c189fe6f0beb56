"""
Checked unsigned integer helpers.

Python integers are unbounded, so the fixed widths the pool math relies on are
enforced explicitly here:
- amounts and results are u128,
- intermediate invariant arithmetic is u256,
- cumulative prices wrap modulo 2**128.
"""

from __future__ import annotations

from ...errors import MathError, ValidationError


U8_MAX = (1 << 8) - 1
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_uint(name: str, value: int, max_value: int = U128_MAX) -> int:
    """Validate a caller-supplied unsigned amount."""
    require_int(name, value)
    if value < 0:
        raise ValidationError(f"{name} must be non-negative: {value}")
    if value > max_value:
        raise MathError(f"{name} overflows: {value} > {max_value}")
    return value


def checked(value: int, max_value: int = U256_MAX, *, what: str = "value") -> int:
    """Return `value` if it fits [0, max_value], otherwise raise MathError."""
    if value < 0:
        raise MathError(f"{what} underflow: {value}")
    if value > max_value:
        raise MathError(f"{what} overflow: {value}")
    return value


def checked_sub(a: int, b: int, *, what: str = "subtraction") -> int:
    if b > a:
        raise MathError(f"{what} underflow: {a} - {b}")
    return a - b


def checked_div(numerator: int, denominator: int, *, what: str = "division") -> int:
    if denominator == 0:
        raise MathError(f"{what}: division by zero")
    return numerator // denominator


def ceil_div(numerator: int, denominator: int, *, what: str = "division") -> int:
    if denominator == 0:
        raise MathError(f"{what}: division by zero")
    return (numerator + denominator - 1) // denominator


def wrapping_add_u128(a: int, b: int) -> int:
    """u128 addition with wraparound (cumulative price counters)."""
    return (a + b) & U128_MAX
