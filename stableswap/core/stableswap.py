"""
StableSwap swap calculator.

Composes precision normalization with the invariant kernel:
- `compute_swap`: offer amount -> (return, spread, commission),
- `compute_offer_amount`: desired ask amount -> (offer, spread, commission),
- `assert_max_spread`: slippage protection for an executed quote.

Spread is measured against a 1:1 exchange rate: any shortfall below parity is
spread, never negative. Commission is taken from the ask side and stays in the
pool.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Optional, Tuple

from ..errors import AllowedSpreadError, MathError, MaxSpreadError, ValidationError
from ..kernels.python.stableswap_v1 import calc_ask_amount, calc_offer_amount
from ..kernels.python.uint import require_int, require_uint
from ..state.balances import Amount
from .params import BPS_DENOM, DEFAULT_SLIPPAGE, GLOBAL_FEE_BPS, MAX_ALLOWED_SLIPPAGE
from .precision import adjust_precision, greater_precision


def _require_fee_bps(fee_bps: int) -> None:
    require_int("fee_bps", fee_bps)
    if not (0 <= fee_bps <= BPS_DENOM):
        raise ValidationError(f"fee_bps must be in [0, {BPS_DENOM}]: {fee_bps}")


def compute_global_fee() -> int:
    """Commission rate in basis points (0.3%)."""
    return GLOBAL_FEE_BPS


def compute_swap(
    offer_pool: Amount,
    offer_precision: int,
    ask_pool: Amount,
    ask_precision: int,
    offer_amount: Amount,
    fee_bps: int,
    amp: int,
) -> Tuple[Amount, Amount, Amount]:
    """
    Quote an exact-in swap.

    Returns (return_amount, spread_amount, commission_amount), all in ask
    precision. `amp` is the current AMP_PRECISION-scaled amplification.
    """
    _require_fee_bps(fee_bps)
    require_uint("offer_amount", offer_amount)

    precision = greater_precision(offer_precision, ask_precision)
    offer_pool = adjust_precision(offer_pool, offer_precision, precision)
    ask_pool = adjust_precision(ask_pool, ask_precision, precision)
    offer_amount = adjust_precision(offer_amount, offer_precision, precision)

    return_amount = calc_ask_amount(offer_pool, ask_pool, offer_amount, amp)

    # Assets are assumed to trade 1:1, so any rate below 1 counts as spread.
    spread_amount = max(offer_amount - return_amount, 0)
    commission_amount = return_amount * fee_bps // BPS_DENOM
    return_amount = return_amount - commission_amount

    return (
        adjust_precision(return_amount, precision, ask_precision),
        adjust_precision(spread_amount, precision, ask_precision),
        adjust_precision(commission_amount, precision, ask_precision),
    )


def compute_offer_amount(
    offer_pool: Amount,
    offer_precision: int,
    ask_pool: Amount,
    ask_precision: int,
    ask_amount: Amount,
    fee_bps: int,
    amp: int,
) -> Tuple[Amount, Amount, Amount]:
    """
    Quote an exact-out swap.

    The ask amount is grossed up by the commission before inverting the
    invariant. Returns (offer_amount, spread_amount, commission_amount) with
    the offer in offer precision and spread / commission in ask precision.
    """
    _require_fee_bps(fee_bps)
    require_uint("ask_amount", ask_amount)
    if fee_bps == BPS_DENOM:
        raise ValidationError("cannot compute with 100% fee")

    precision = greater_precision(offer_precision, ask_precision)
    offer_pool = adjust_precision(offer_pool, offer_precision, precision)
    ask_pool = adjust_precision(ask_pool, ask_precision, precision)
    ask_amount = adjust_precision(ask_amount, ask_precision, precision)

    before_commission_deduction = ask_amount * BPS_DENOM // (BPS_DENOM - fee_bps)

    offer_amount = calc_offer_amount(offer_pool, ask_pool, before_commission_deduction, amp)

    spread_amount = max(offer_amount - before_commission_deduction, 0)
    commission_amount = before_commission_deduction * fee_bps // BPS_DENOM

    return (
        adjust_precision(offer_amount, precision, offer_precision),
        adjust_precision(spread_amount, precision, ask_precision),
        adjust_precision(commission_amount, precision, ask_precision),
    )


def assert_max_spread(
    belief_price: Optional[Fraction],
    max_spread: Optional[Fraction],
    offer_amount: Amount,
    return_amount: Amount,
    spread_amount: Amount,
    *,
    default_max_spread: Fraction = DEFAULT_SLIPPAGE,
    max_allowed_spread: Fraction = MAX_ALLOWED_SLIPPAGE,
) -> None:
    """
    Slippage check for a swap.

    With a belief price the spread is recomputed against the return implied by
    that price; otherwise the quote's own spread is used.
    """
    for name, v in (
        ("offer_amount", offer_amount),
        ("return_amount", return_amount),
        ("spread_amount", spread_amount),
    ):
        require_uint(name, v)

    if max_spread is None:
        max_spread = default_max_spread
    if max_spread > max_allowed_spread:
        raise AllowedSpreadError()

    if belief_price is not None:
        if belief_price <= 0:
            raise ValidationError(f"belief_price must be positive: {belief_price}")
        expected_return = int(offer_amount / Fraction(belief_price))
        if return_amount < expected_return:
            spread = expected_return - return_amount
            if Fraction(spread, expected_return) > max_spread:
                raise MaxSpreadError()
        return

    total = return_amount + spread_amount
    if total == 0:
        raise MathError("spread ratio: division by zero")
    if Fraction(spread_amount, total) > max_spread:
        raise MaxSpreadError()
