"""
Pool reserve snapshots.

Reserves are owned by the host: they are read fresh for every operation and
never cached by the engine beyond a single call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..errors import AssetMismatchError, ValidationError


# Type aliases
AssetId = str  # native denom or token contract address
Amount = int  # Non-negative integer, u128 range


@dataclass(frozen=True)
class Reserve:
    """One asset slot of a pool: balance plus decimal precision."""

    info: AssetId
    amount: Amount
    precision: int

    def __post_init__(self) -> None:
        if not isinstance(self.info, str) or not self.info:
            raise ValidationError("reserve asset id must be a non-empty string")
        for name in ("amount", "precision"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValidationError(f"{name} must be non-negative: {v}")


@dataclass(frozen=True)
class PoolReserves:
    """Both reserves of a pair, in the pair's canonical asset order."""

    asset0: Reserve
    asset1: Reserve

    def __post_init__(self) -> None:
        if self.asset0.info == self.asset1.info:
            raise ValidationError("pool reserves must hold two distinct assets")

    def __iter__(self):
        return iter((self.asset0, self.asset1))

    @property
    def amounts(self) -> Tuple[Amount, Amount]:
        return self.asset0.amount, self.asset1.amount

    @property
    def precisions(self) -> Tuple[int, int]:
        return self.asset0.precision, self.asset1.precision

    def index_of(self, info: AssetId) -> int:
        if info == self.asset0.info:
            return 0
        if info == self.asset1.info:
            return 1
        raise AssetMismatchError(f"asset {info!r} does not belong to the pair")

    def offer_ask(self, offer_info: AssetId) -> Tuple[Reserve, Reserve]:
        """Return (offer_reserve, ask_reserve) for an asset being offered."""
        if self.index_of(offer_info) == 0:
            return self.asset0, self.asset1
        return self.asset1, self.asset0
