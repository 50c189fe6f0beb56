"""
State snapshots for stableswap pairs.

`pairs.PairState` depends on the core accumulator types and is imported from
`stableswap.state.pairs` (or `stableswap.core`) directly.
"""

from .balances import Amount, AssetId, PoolReserves, Reserve

__all__ = [
    "Amount",
    "AssetId",
    "PoolReserves",
    "Reserve",
]
