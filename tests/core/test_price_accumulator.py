# [TESTER] v1

from __future__ import annotations

import pytest

from stableswap.core.price_accumulator import PriceAccumulatorState, accumulate_prices
from stableswap.errors import ValidationError
from stableswap.kernels.python.uint import U128_MAX

AMP_100 = 10_000
PRICE_PRECISION = 10**6


def test_first_accumulation() -> None:
    state = accumulate_prices(PriceAccumulatorState(), 1000, 250_000000, 6, 500_000000, 6, AMP_100)
    assert state == PriceAccumulatorState(
        price0_cumulative=1_008_302000,
        price1_cumulative=991_669000,
        block_time_last=1000,
    )
    assert state.price0_cumulative // PRICE_PRECISION == 1008
    assert state.price1_cumulative // PRICE_PRECISION == 991


def test_same_timestamp_is_a_no_op() -> None:
    state = PriceAccumulatorState(PRICE_PRECISION, 2 * PRICE_PRECISION, 1000)
    assert accumulate_prices(state, 1000, 250_000000, 6, 500_000000, 6, AMP_100) is state
    assert accumulate_prices(state, 999, 250_000000, 6, 500_000000, 6, AMP_100) is state


def test_accumulation_adds_to_previous_values() -> None:
    state = PriceAccumulatorState(500 * PRICE_PRECISION, 2000 * PRICE_PRECISION, 1000)
    state = accumulate_prices(state, 1500, 250_000000, 6, 500_000000, 6, AMP_100)
    assert state.block_time_last == 1500
    assert state.price0_cumulative // PRICE_PRECISION == 1004
    assert state.price1_cumulative // PRICE_PRECISION == 2495
    assert (state.price0_cumulative, state.price1_cumulative) == (1_004_151000, 2_495_834500)


def test_mixed_precision_prices_are_reported_at_twap_precision() -> None:
    state = accumulate_prices(PriceAccumulatorState(), 1000, 250_000000, 6, 500_00000000, 8, AMP_100)
    assert (state.price0_cumulative, state.price1_cumulative) == (1_008_301600, 991_668600)


def test_empty_reserve_only_moves_the_clock() -> None:
    state = PriceAccumulatorState(7, 9, 10)
    nxt = accumulate_prices(state, 20, 0, 6, 500_000000, 6, AMP_100)
    assert nxt == PriceAccumulatorState(7, 9, 20)


def test_cumulative_prices_wrap_around_u128() -> None:
    state = PriceAccumulatorState(U128_MAX, 0, 0)
    state = accumulate_prices(state, 1000, 250_000000, 6, 500_000000, 6, AMP_100)
    assert state.price0_cumulative == 1_008_302000 - 1
    assert state.price1_cumulative == 991_669000


def test_state_rejects_out_of_range_values() -> None:
    with pytest.raises(ValidationError):
        PriceAccumulatorState(-1, 0, 0)
    with pytest.raises(ValidationError, match="must fit u128"):
        PriceAccumulatorState(U128_MAX + 1, 0, 0)
