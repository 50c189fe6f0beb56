"""Property tests for the invariant solvers."""

from __future__ import annotations

import importlib.util
import math

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from stableswap.core.stableswap import compute_offer_amount, compute_swap
from stableswap.kernels.python.stableswap_v1 import AMP_PRECISION, MAX_AMP, N_COINS, calc_ask_amount, solve_d, solve_y

amps = st.integers(min_value=1, max_value=MAX_AMP).map(lambda a: a * AMP_PRECISION)
reserves = st.integers(min_value=10**6, max_value=10**15)


@st.composite
def pools(draw):
    x = draw(reserves)
    # Keep the pool within a 1:10 imbalance.
    y = draw(st.integers(min_value=max(10**6, x // 10), max_value=min(10**15, x * 10)))
    return x, y


@settings(max_examples=200, deadline=None)
@given(amp=amps, pool=pools())
def test_solve_d_lies_between_geometric_and_arithmetic_sum(amp, pool) -> None:
    x, y = pool
    d = solve_d(amp * N_COINS, x, y)
    # D ranges from constant-product (2 * sqrt(xy)) to constant-sum (x + y).
    lower = 2 * math.isqrt(x * y)
    assert lower - 2 <= d <= x + y + 1


@settings(max_examples=200, deadline=None)
@given(amp=amps, pool=pools())
def test_solve_y_recovers_the_reserve_that_produced_d(amp, pool) -> None:
    x, y = pool
    leverage = amp * N_COINS
    d = solve_d(leverage, x, y)
    y2 = solve_y(leverage, x, d)
    # D itself is only exact to one unit, which can move y by a second unit at low amp.
    assert abs(y2 - y) <= 2


@settings(max_examples=150, deadline=None)
@given(amp=amps, pool=pools(), data=st.data())
def test_ask_amount_never_exceeds_ask_pool_and_is_monotone(amp, pool, data) -> None:
    x, y = pool
    small = data.draw(st.integers(min_value=x // 10**4 + 1, max_value=x))
    large = data.draw(st.integers(min_value=small, max_value=2 * x))

    out_small = calc_ask_amount(x, y, small, amp)
    out_large = calc_ask_amount(x, y, large, amp)

    assert 0 <= out_small <= y
    assert 0 <= out_large <= y
    # Newton rounding can shave a couple of units off either quote.
    assert out_large + 2 >= out_small



@st.composite
def near_balanced_swaps(draw):
    x = draw(reserves)
    y = draw(st.integers(min_value=max(10**6, x // 2), max_value=min(10**15, x * 2)))
    smaller = min(x, y)
    offer = draw(st.integers(min_value=smaller // 10**4 + 1, max_value=smaller // 10))
    return x, y, offer


@settings(max_examples=200, deadline=None)
@given(amp=amps, swap=near_balanced_swaps())
def test_offer_amount_inverts_swap_without_fee(amp, swap) -> None:
    x, y, offer = swap
    return_amount, spread_amount, commission_amount = compute_swap(x, 6, y, 6, offer, 0, amp)
    assert commission_amount == 0

    offer_back, spread_back, commission_back = compute_offer_amount(x, 6, y, 6, return_amount, 0, amp)
    assert abs(offer_back - offer) <= 1
    assert commission_back == 0
    assert abs(spread_back - spread_amount) <= 1
