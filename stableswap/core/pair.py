"""
Pair operations (functional core).

This module wires the calculators into the operations a stableswap pair
exposes. Each function is pure: it takes the pair state plus fresh reserve
snapshots and returns a result and, for state-changing operations, the next
PairState. Transfers, minting and persistence stay with the host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from fractions import Fraction
from typing import Optional, Tuple, Union

from ..errors import InitParamsNotFoundError
from ..state.balances import Amount, AssetId, PoolReserves
from ..state.pairs import PairState
from .amp_ramp import amp_as_fraction, current_amp, init_amp_state, start_ramp, stop_ramp
from .liquidity import ProvideResult, compute_provide, compute_withdraw
from .params import PairConfig, as_fraction, default_pair_config
from .price_accumulator import PriceAccumulatorState, accumulate_prices
from .stableswap import assert_max_spread, compute_offer_amount, compute_swap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapResponse:
    offer_asset: AssetId
    ask_asset: AssetId
    offer_amount: Amount
    return_amount: Amount
    spread_amount: Amount
    commission_amount: Amount


@dataclass(frozen=True)
class SimulationResponse:
    return_amount: Amount
    spread_amount: Amount
    commission_amount: Amount


@dataclass(frozen=True)
class ReverseSimulationResponse:
    offer_amount: Amount
    spread_amount: Amount
    commission_amount: Amount


@dataclass(frozen=True)
class CumulativePricesResponse:
    price0_cumulative: int
    price1_cumulative: int
    total_share: Amount


@dataclass(frozen=True)
class ConfigResponse:
    block_time_last: int
    amp: Fraction


@dataclass(frozen=True)
class StartChangingAmp:
    next_amp: int
    next_amp_time: int


@dataclass(frozen=True)
class StopChangingAmp:
    pass


AmpUpdate = Union[StartChangingAmp, StopChangingAmp]


def instantiate_pair(asset_infos: Tuple[AssetId, AssetId], amp: Optional[int], now: int) -> PairState:
    """Create the state of a new pair with amplification `amp` (raw)."""
    if amp is None:
        raise InitParamsNotFoundError()
    return PairState(asset_infos=tuple(asset_infos), amp=init_amp_state(amp, now))


def _accumulate(state: PairState, reserves: PoolReserves, now: int, config: PairConfig) -> PriceAccumulatorState:
    return accumulate_prices(
        state.prices,
        now,
        reserves.asset0.amount,
        reserves.asset0.precision,
        reserves.asset1.amount,
        reserves.asset1.precision,
        current_amp(state.amp, now),
        twap_precision=config.twap_precision,
    )


def _optional_fraction(name: str, value) -> Optional[Fraction]:
    return None if value is None else as_fraction(name, value)


def simulate(
    state: PairState,
    reserves: PoolReserves,
    offer_asset: AssetId,
    offer_amount: Amount,
    now: int,
    *,
    config: Optional[PairConfig] = None,
) -> SimulationResponse:
    config = config or default_pair_config()
    state.check_reserves(reserves)
    offer_pool, ask_pool = reserves.offer_ask(offer_asset)
    return_amount, spread_amount, commission_amount = compute_swap(
        offer_pool.amount,
        offer_pool.precision,
        ask_pool.amount,
        ask_pool.precision,
        offer_amount,
        config.fee_bps,
        current_amp(state.amp, now),
    )
    return SimulationResponse(
        return_amount=return_amount,
        spread_amount=spread_amount,
        commission_amount=commission_amount,
    )


def reverse_simulate(
    state: PairState,
    reserves: PoolReserves,
    ask_asset: AssetId,
    ask_amount: Amount,
    now: int,
    *,
    config: Optional[PairConfig] = None,
) -> ReverseSimulationResponse:
    config = config or default_pair_config()
    state.check_reserves(reserves)
    ask_pool, offer_pool = reserves.offer_ask(ask_asset)
    offer_amount, spread_amount, commission_amount = compute_offer_amount(
        offer_pool.amount,
        offer_pool.precision,
        ask_pool.amount,
        ask_pool.precision,
        ask_amount,
        config.fee_bps,
        current_amp(state.amp, now),
    )
    return ReverseSimulationResponse(
        offer_amount=offer_amount,
        spread_amount=spread_amount,
        commission_amount=commission_amount,
    )


def swap(
    state: PairState,
    reserves: PoolReserves,
    offer_asset: AssetId,
    offer_amount: Amount,
    now: int,
    *,
    belief_price=None,
    max_spread=None,
    config: Optional[PairConfig] = None,
) -> Tuple[SwapResponse, PairState]:
    """
    Execute a swap against pre-swap `reserves`.

    The max-spread check runs on the gross return (return + commission).
    """
    config = config or default_pair_config()
    sim = simulate(state, reserves, offer_asset, offer_amount, now, config=config)

    assert_max_spread(
        _optional_fraction("belief_price", belief_price),
        _optional_fraction("max_spread", max_spread),
        offer_amount,
        sim.return_amount + sim.commission_amount,
        sim.spread_amount,
        default_max_spread=config.default_max_spread,
        max_allowed_spread=config.max_allowed_spread,
    )

    _, ask_pool = reserves.offer_ask(offer_asset)
    next_state = replace(state, prices=_accumulate(state, reserves, now, config))
    logger.debug(
        "swap %d %s -> %d %s (spread=%d, commission=%d)",
        offer_amount,
        offer_asset,
        sim.return_amount,
        ask_pool.info,
        sim.spread_amount,
        sim.commission_amount,
    )
    response = SwapResponse(
        offer_asset=offer_asset,
        ask_asset=ask_pool.info,
        offer_amount=offer_amount,
        return_amount=sim.return_amount,
        spread_amount=sim.spread_amount,
        commission_amount=sim.commission_amount,
    )
    return response, next_state


def provide_liquidity(
    state: PairState,
    reserves: PoolReserves,
    deposits: Tuple[Amount, Amount],
    total_supply: Amount,
    now: int,
    *,
    config: Optional[PairConfig] = None,
) -> Tuple[ProvideResult, PairState]:
    """Mint shares for `deposits` (in pair asset order) against pre-deposit `reserves`."""
    config = config or default_pair_config()
    state.check_reserves(reserves)
    result = compute_provide(
        reserves,
        deposits,
        total_supply,
        current_amp(state.amp, now),
        lp_precision=config.lp_token_precision,
    )
    next_state = replace(state, prices=_accumulate(state, reserves, now, config))
    logger.debug("provide %d/%d -> %d shares", result.deposit0, result.deposit1, result.share)
    return result, next_state


def withdraw_liquidity(
    state: PairState,
    reserves: PoolReserves,
    amount: Amount,
    total_supply: Amount,
    now: int,
    *,
    config: Optional[PairConfig] = None,
) -> Tuple[Tuple[Amount, Amount], PairState]:
    """Burn `amount` shares; returns the refunded assets in pair asset order."""
    config = config or default_pair_config()
    state.check_reserves(reserves)
    refunds = compute_withdraw(reserves, amount, total_supply)
    next_state = replace(state, prices=_accumulate(state, reserves, now, config))
    logger.debug("withdraw %d shares -> %d/%d", amount, refunds[0], refunds[1])
    return refunds, next_state


def query_share(reserves: PoolReserves, amount: Amount, total_supply: Amount) -> Tuple[Amount, Amount]:
    return compute_withdraw(reserves, amount, total_supply)


def query_cumulative_prices(
    state: PairState,
    reserves: PoolReserves,
    total_share: Amount,
    now: int,
    *,
    config: Optional[PairConfig] = None,
) -> CumulativePricesResponse:
    """Cumulative prices as of `now`, without committing them."""
    config = config or default_pair_config()
    state.check_reserves(reserves)
    prices = _accumulate(state, reserves, now, config)
    return CumulativePricesResponse(
        price0_cumulative=prices.price0_cumulative,
        price1_cumulative=prices.price1_cumulative,
        total_share=total_share,
    )


def query_config(state: PairState, now: int) -> ConfigResponse:
    return ConfigResponse(
        block_time_last=state.prices.block_time_last,
        amp=amp_as_fraction(current_amp(state.amp, now)),
    )


def update_config(state: PairState, params: AmpUpdate, now: int) -> PairState:
    """Apply an amplification update message."""
    if isinstance(params, StartChangingAmp):
        amp = start_ramp(state.amp, now, params.next_amp, params.next_amp_time)
    elif isinstance(params, StopChangingAmp):
        amp = stop_ramp(state.amp, now)
    else:
        raise TypeError(f"unsupported amp update: {params!r}")
    return replace(state, amp=amp)
