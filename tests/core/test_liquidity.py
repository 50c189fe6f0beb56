# [TESTER] v1

from __future__ import annotations

import pytest

from stableswap.core.liquidity import ProvideResult, compute_provide, compute_withdraw, ratio_capped_deposits
from stableswap.errors import (
    LiquidityAmountTooSmallError,
    MathError,
    SingleTokenProvideError,
    StableSwapError,
    ValidationError,
    ZeroAmountError,
)
from stableswap.kernels.python.stableswap_v1 import MINIMUM_AMP
from stableswap.state.balances import PoolReserves, Reserve

AMP_100 = 10_000


def _reserves(amount0: int, amount1: int, precision0: int = 6, precision1: int = 6) -> PoolReserves:
    return PoolReserves(Reserve("uusd", amount0, precision0), Reserve("asset0000", amount1, precision1))


def test_first_deposit_mints_geometric_mean() -> None:
    result = compute_provide(_reserves(0, 0), (100, 100), 0, AMP_100)
    assert result == ProvideResult(share=100, deposit0=100, deposit1=100)


def test_first_deposit_mixed_precision_is_rescaled_to_lp_precision() -> None:
    result = compute_provide(_reserves(0, 0, 6, 8), (100_000000, 100_00000000), 0, AMP_100)
    assert result.share == 100_000000


def test_follow_up_deposit_is_priced_by_invariant_growth() -> None:
    result = compute_provide(_reserves(100, 100), (50, 50), 100, AMP_100)
    assert result.share == 50
    assert result.deposits == (50, 50)


def test_single_sided_deposit_into_funded_pool() -> None:
    result = compute_provide(_reserves(1_000_000000, 1_000_000000), (100_000000, 0), 1_000_000000, AMP_100)
    assert result.share == 49_988186


def test_minimum_amp_caps_deposits_to_pool_ratio() -> None:
    result = compute_provide(_reserves(100, 150), (20, 54), 100, MINIMUM_AMP)
    assert result.deposits == (20, 30)
    assert result.share == 20


def test_ratio_capped_deposits_rounds_optimum_up() -> None:
    assert ratio_capped_deposits(100, 150, 20, 54) == (20, 30)
    assert ratio_capped_deposits(100, 150, 40, 30) == (20, 30)
    assert ratio_capped_deposits(3, 7, 1, 5) == (1, 3)
    assert ratio_capped_deposits(100, 150, 20, 30) == (20, 30)
    with pytest.raises(ValidationError, match="non-empty reserves"):
        ratio_capped_deposits(0, 150, 20, 30)


def test_zero_deposit_is_rejected() -> None:
    with pytest.raises(ZeroAmountError, match="zero transfer"):
        compute_provide(_reserves(100, 100), (0, 0), 100, AMP_100)


def test_single_token_into_empty_pool_is_rejected() -> None:
    with pytest.raises(SingleTokenProvideError, match="one token for an empty pool"):
        compute_provide(_reserves(0, 0), (100, 0), 0, AMP_100)


def test_dust_deposit_mints_nothing() -> None:
    with pytest.raises(LiquidityAmountTooSmallError, match="Insufficient amount of liquidity"):
        compute_provide(_reserves(10**12, 10**12), (1, 0), 1, AMP_100)


def test_withdraw_is_pro_rata() -> None:
    assert compute_withdraw(_reserves(250, 1000), 250, 500) == (125, 500)
    assert compute_withdraw(_reserves(250, 1000), 500, 500) == (250, 1000)
    assert compute_withdraw(_reserves(250, 1000), 1, 3) == (83, 333)


def test_withdraw_from_empty_supply_returns_nothing() -> None:
    assert compute_withdraw(_reserves(250, 1000), 0, 0) == (0, 0)


def test_withdraw_more_than_supply_is_rejected() -> None:
    with pytest.raises(ValidationError, match="more shares than supply"):
        compute_withdraw(_reserves(250, 1000), 501, 500)


def test_deposit_against_drained_side_is_a_math_error() -> None:
    # Outstanding shares but one empty reserve: D before the deposit is zero.
    with pytest.raises(MathError, match="share: division by zero"):
        compute_provide(_reserves(0, 1_000), (10, 10), 100, AMP_100)
    with pytest.raises(StableSwapError):
        compute_provide(_reserves(1_000, 0), (10, 10), 100, AMP_100)
