"""
StableSwap pair engine.

Integer-only pricing, liquidity and TWAP logic for two-asset stableswap pools.
"""

from .core import (
    PairConfig,
    PairState,
    instantiate_pair,
    provide_liquidity,
    query_config,
    query_cumulative_prices,
    query_share,
    reverse_simulate,
    simulate,
    swap,
    update_config,
    withdraw_liquidity,
)
from .errors import StableSwapError

__all__ = [
    "PairConfig",
    "PairState",
    "StableSwapError",
    "instantiate_pair",
    "provide_liquidity",
    "query_config",
    "query_cumulative_prices",
    "query_share",
    "reverse_simulate",
    "simulate",
    "swap",
    "update_config",
    "withdraw_liquidity",
]
