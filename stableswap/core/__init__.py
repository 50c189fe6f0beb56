"""
Core stableswap algorithms
"""

from .amp_ramp import (
    AmplificationState,
    amp_as_fraction,
    current_amp,
    init_amp_state,
    start_ramp,
    stop_ramp,
)
from .params import PairConfig, default_pair_config, load_pair_config
from .precision import adjust_precision, greater_precision
from .price_accumulator import PriceAccumulatorState, accumulate_prices
from .stableswap import assert_max_spread, compute_global_fee, compute_offer_amount, compute_swap
from .liquidity import ProvideResult, compute_provide, compute_withdraw
from .pair import (
    PairState,
    StartChangingAmp,
    StopChangingAmp,
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

__all__ = [
    "AmplificationState",
    "amp_as_fraction",
    "current_amp",
    "init_amp_state",
    "start_ramp",
    "stop_ramp",
    "PairConfig",
    "default_pair_config",
    "load_pair_config",
    "adjust_precision",
    "greater_precision",
    "PriceAccumulatorState",
    "accumulate_prices",
    "assert_max_spread",
    "compute_global_fee",
    "compute_offer_amount",
    "compute_swap",
    "ProvideResult",
    "compute_provide",
    "compute_withdraw",
    "PairState",
    "StartChangingAmp",
    "StopChangingAmp",
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
