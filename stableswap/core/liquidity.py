"""
Liquidity operations: share minting for deposits and pro-rata withdrawals.

Deposits are priced with the invariant (D before vs. D after). At exactly the
minimum amplification the pool behaves close to constant-product, so deposits
are first capped to the current reserve ratio.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from ..errors import (
    LiquidityAmountTooSmallError,
    SingleTokenProvideError,
    ValidationError,
    ZeroAmountError,
)
from ..kernels.python.stableswap_v1 import MINIMUM_AMP, N_COINS, solve_d
from ..kernels.python.uint import U128_MAX, U256_MAX, ceil_div, checked, checked_div, require_uint
from ..state.balances import Amount, PoolReserves
from .params import LP_TOKEN_PRECISION
from .precision import adjust_precision, greater_precision


@dataclass(frozen=True)
class ProvideResult:
    share: Amount
    deposit0: Amount
    deposit1: Amount

    @property
    def deposits(self) -> Tuple[Amount, Amount]:
        return self.deposit0, self.deposit1


def ratio_capped_deposits(
    reserve_a: Amount,
    reserve_b: Amount,
    amount_a: Amount,
    amount_b: Amount,
) -> Tuple[Amount, Amount]:
    """
    Cap deposits to the current reserve ratio (rounding the optimum up).

    optimal_b = ceil(reserve_b * amount_a / reserve_a)
    optimal_a = ceil(reserve_a * amount_b / reserve_b)

    If amount_b exceeds optimal_b it is clamped; otherwise amount_a is clamped
    when it exceeds optimal_a.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("amount_a", amount_a),
        ("amount_b", amount_b),
    ):
        require_uint(name, v)
    if reserve_a == 0 or reserve_b == 0:
        raise ValidationError("ratio capping requires non-empty reserves")

    optimal_b = checked(ceil_div(reserve_b * amount_a, reserve_a), U128_MAX, what="optimal_b")
    optimal_a = checked(ceil_div(reserve_a * amount_b, reserve_b), U128_MAX, what="optimal_a")

    if amount_b > optimal_b:
        amount_b = optimal_b
    elif amount_a > optimal_a:
        amount_a = optimal_a
    return amount_a, amount_b


def compute_provide(
    reserves: PoolReserves,
    deposits: Tuple[Amount, Amount],
    total_supply: Amount,
    amp: int,
    *,
    lp_precision: int = LP_TOKEN_PRECISION,
) -> ProvideResult:
    """
    Compute the pool share minted for a deposit.

    - First deposit (total_supply == 0): share = isqrt(d0 * d1) at the greater
      asset precision, rescaled to `lp_precision`.
    - Otherwise: share = total_supply * (D_after - D_before) / D_before.

    `reserves` are the pre-deposit reserves; the returned deposits are the
    amounts actually used (they differ from the request only at MINIMUM_AMP).
    """
    deposit0, deposit1 = deposits
    require_uint("deposit0", deposit0)
    require_uint("deposit1", deposit1)
    require_uint("total_supply", total_supply)

    if deposit0 == 0 and deposit1 == 0:
        raise ZeroAmountError()

    reserve0, reserve1 = reserves.amounts
    for deposit, reserve in ((deposit0, reserve0), (deposit1, reserve1)):
        if deposit == 0 and reserve == 0:
            raise SingleTokenProvideError()

    if amp == MINIMUM_AMP and reserve0 != 0 and reserve1 != 0:
        deposit0, deposit1 = ratio_capped_deposits(reserve0, reserve1, deposit0, deposit1)

    precision0, precision1 = reserves.precisions
    precision = greater_precision(precision0, precision1)
    deposit_amount0 = adjust_precision(deposit0, precision0, precision)
    deposit_amount1 = adjust_precision(deposit1, precision1, precision)

    if total_supply == 0:
        product = checked(deposit_amount0 * deposit_amount1, U256_MAX, what="initial share product")
        share = adjust_precision(math.isqrt(product), precision, lp_precision)
    else:
        leverage = amp * N_COINS
        pool_amount0 = adjust_precision(reserve0, precision0, precision)
        pool_amount1 = adjust_precision(reserve1, precision1, precision)

        d_before = solve_d(leverage, pool_amount0, pool_amount1)

        pool_amount0 = checked(pool_amount0 + deposit_amount0, U128_MAX, what="pool amount 0")
        pool_amount1 = checked(pool_amount1 + deposit_amount1, U128_MAX, what="pool amount 1")
        d_after = solve_d(leverage, pool_amount0, pool_amount1)

        if d_before >= d_after:
            raise LiquidityAmountTooSmallError()

        share = checked(
            checked_div(total_supply * (d_after - d_before), d_before, what="share"),
            U128_MAX,
            what="share",
        )

    if share == 0:
        raise LiquidityAmountTooSmallError()

    return ProvideResult(share=share, deposit0=deposit0, deposit1=deposit1)


def compute_withdraw(
    reserves: PoolReserves,
    amount: Amount,
    total_supply: Amount,
) -> Tuple[Amount, Amount]:
    """
    Assets owned by `amount` pool shares (pro-rata, floor rounding).

    Returns (0, 0) when total_supply is zero.
    """
    require_uint("amount", amount)
    require_uint("total_supply", total_supply)
    if amount > total_supply and total_supply != 0:
        raise ValidationError(f"Cannot burn more shares than supply: {amount} > {total_supply}")

    if total_supply == 0:
        return 0, 0

    reserve0, reserve1 = reserves.amounts
    return reserve0 * amount // total_supply, reserve1 * amount // total_supply
