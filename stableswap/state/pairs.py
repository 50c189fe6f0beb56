"""
Pair state carried between operations.

The host persists this object and hands it back on the next call; the engine
only ever returns new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ..core.amp_ramp import AmplificationState
from ..core.price_accumulator import PriceAccumulatorState
from ..errors import AssetMismatchError, DoublingAssetsError, ValidationError
from .balances import AssetId, PoolReserves


@dataclass(frozen=True)
class PairState:
    asset_infos: Tuple[AssetId, AssetId]
    amp: AmplificationState
    prices: PriceAccumulatorState = field(default_factory=PriceAccumulatorState)

    def __post_init__(self) -> None:
        if not isinstance(self.asset_infos, tuple) or len(self.asset_infos) != 2:
            raise ValidationError("asset_infos must be a pair of asset ids")
        for info in self.asset_infos:
            if not isinstance(info, str) or not info:
                raise ValidationError("asset ids must be non-empty strings")
        if self.asset_infos[0] == self.asset_infos[1]:
            raise DoublingAssetsError()

    def check_reserves(self, reserves: PoolReserves) -> None:
        """Reserves must be given in the pair's asset order."""
        if tuple(r.info for r in reserves) != self.asset_infos:
            raise AssetMismatchError(
                f"reserves {reserves.asset0.info!r}, {reserves.asset1.info!r} do not match pair {self.asset_infos!r}"
            )
