"""Exception types for the stableswap engine.

Every failure belongs to exactly one category:

- ``ValidationError``: malformed or out-of-bounds input,
- ``MathError``: overflow, underflow or division by zero,
- ``ConvergenceError``: a Newton-Raphson solver hit its iteration cap,
- ``StateError``: an amplification ramp request that the current ramp forbids.

Each category also derives from the closest builtin so that callers which only
know about ``ValueError`` / ``ArithmeticError`` keep working.
"""

from __future__ import annotations

from typing import Optional


class StableSwapError(Exception):
    """Base class for all engine errors."""


class ValidationError(StableSwapError, ValueError):
    """Raised when an input is malformed or outside its allowed domain."""


class MathError(StableSwapError, ArithmeticError):
    """Raised on overflow, underflow or division by zero."""


class ConvergenceError(StableSwapError, RuntimeError):
    """Raised when an iterative solver does not converge within its cap."""

    def __init__(self, solver: str, iterations: int, last: int, previous: Optional[int] = None) -> None:
        self.solver = solver
        self.iterations = iterations
        self.last = last
        self.previous = previous
        super().__init__(
            f"{solver} did not converge after {iterations} iterations (last={last}, previous={previous})"
        )


class StateError(StableSwapError, ValueError):
    """Raised when the amplification ramp state rejects a transition."""


class IncorrectAmpError(ValidationError):
    def __init__(self, max_amp: int) -> None:
        super().__init__(f"Amp coefficient must be greater than 0 and less than or equal to {max_amp}")


class MaxAmpChangeError(StateError):
    def __init__(self, max_amp_change: int) -> None:
        super().__init__(
            f"The difference between the old and new amp value must not exceed {max_amp_change} times"
        )


class MinAmpChangingTimeError(StateError):
    def __init__(self, min_amp_changing_time: int) -> None:
        super().__init__(
            f"Amp coefficient cannot be changed more often than once per {min_amp_changing_time} seconds"
        )


class DoublingAssetsError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Doubling assets in asset infos")


class InitParamsNotFoundError(ValidationError):
    def __init__(self) -> None:
        super().__init__("You need to provide init params")


class ZeroAmountError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Event of zero transfer")


class SingleTokenProvideError(ValidationError):
    def __init__(self) -> None:
        super().__init__("It is not possible to provide liquidity with one token for an empty pool")


class LiquidityAmountTooSmallError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Insufficient amount of liquidity")


class AllowedSpreadError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Provided spread amount exceeds allowed limit")


class MaxSpreadError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Operation exceeds max spread limit")


class AssetMismatchError(ValidationError):
    """Raised when an asset does not belong to the pair."""
