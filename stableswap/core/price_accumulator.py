"""
Cumulative (TWAP) price accumulator.

Each cumulative price grows by `time_elapsed * price` where price is the
amount of the other asset released for one whole unit, at TWAP_PRECISION
decimals. Counters are u128 and wrap on overflow; readers take differences.

At most one update per timestamp: calling again at the same (or an earlier)
time returns the state unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ValidationError
from ..kernels.python.stableswap_v1 import calc_ask_amount
from ..kernels.python.uint import U64_MAX, U128_MAX, checked, require_int, require_uint, wrapping_add_u128
from ..state.balances import Amount
from .params import TWAP_PRECISION
from .precision import adjust_precision, greater_precision


@dataclass(frozen=True)
class PriceAccumulatorState:
    price0_cumulative: int = 0
    price1_cumulative: int = 0
    block_time_last: int = 0

    def __post_init__(self) -> None:
        for name in ("price0_cumulative", "price1_cumulative", "block_time_last"):
            v = getattr(self, name)
            require_int(name, v)
            if v < 0:
                raise ValidationError(f"{name} must be non-negative: {v}")
        for name in ("price0_cumulative", "price1_cumulative"):
            if getattr(self, name) > U128_MAX:
                raise ValidationError(f"{name} must fit u128")


def _price_term(time_elapsed: int, offer: int, ask: int, unit: int, amp: int, precision: int, twap_precision: int) -> int:
    price = calc_ask_amount(offer, ask, unit, amp)
    term = checked(time_elapsed * price, U128_MAX, what="cumulative price term")
    return adjust_precision(term, precision, twap_precision)


def accumulate_prices(
    state: PriceAccumulatorState,
    now: int,
    x: Amount,
    x_precision: int,
    y: Amount,
    y_precision: int,
    amp: int,
    *,
    twap_precision: int = TWAP_PRECISION,
) -> PriceAccumulatorState:
    """
    Advance the cumulative prices to `now` using reserves (x, y).

    Prices only move when both reserves are non-empty; `block_time_last`
    always moves to `now`.
    """
    require_uint("now", now, U64_MAX)
    if now <= state.block_time_last:
        return state

    precision = greater_precision(x_precision, y_precision, twap_precision)
    x = adjust_precision(x, x_precision, precision)
    y = adjust_precision(y, y_precision, precision)

    time_elapsed = now - state.block_time_last

    price0_cumulative = state.price0_cumulative
    price1_cumulative = state.price1_cumulative

    if x != 0 and y != 0:
        unit = adjust_precision(1, 0, precision)
        price0_cumulative = wrapping_add_u128(
            price0_cumulative, _price_term(time_elapsed, x, y, unit, amp, precision, twap_precision)
        )
        price1_cumulative = wrapping_add_u128(
            price1_cumulative, _price_term(time_elapsed, y, x, unit, amp, precision, twap_precision)
        )

    return PriceAccumulatorState(
        price0_cumulative=price0_cumulative,
        price1_cumulative=price1_cumulative,
        block_time_last=now,
    )
