from __future__ import annotations

from fractions import Fraction

import pytest

from stableswap.core.stableswap import assert_max_spread
from stableswap.errors import AllowedSpreadError, MathError, MaxSpreadError, ValidationError

ONE_PERCENT = Fraction(1, 100)


def test_belief_price_spread_boundary() -> None:
    # Belief price 1200: 1_200_000_000 offered should return 1_000_000.
    with pytest.raises(MaxSpreadError, match="exceeds max spread limit"):
        assert_max_spread(Fraction(1200), ONE_PERCENT, 1_200_000_000, 989_999, 0)
    assert_max_spread(Fraction(1200), ONE_PERCENT, 1_200_000_000, 990_000, 0)


def test_belief_price_ignores_better_than_expected_return() -> None:
    assert_max_spread(Fraction(1200), Fraction(0), 1_200_000_000, 2_000_000, 0)


def test_quote_spread_boundary_without_belief_price() -> None:
    with pytest.raises(MaxSpreadError):
        assert_max_spread(None, ONE_PERCENT, 1_200_000_000, 989_999, 10_001)
    assert_max_spread(None, ONE_PERCENT, 1_200_000_000, 990_000, 10_000)


def test_default_max_spread_applies_when_none_given() -> None:
    # 0.5% default: 5 / 1000 passes, 6 / 1000 fails.
    assert_max_spread(None, None, 1_000, 995, 5)
    with pytest.raises(MaxSpreadError):
        assert_max_spread(None, None, 1_000, 994, 6)


def test_max_spread_above_ceiling_is_rejected() -> None:
    with pytest.raises(AllowedSpreadError, match="exceeds allowed limit"):
        assert_max_spread(None, Fraction(51, 100), 1_000, 1_000, 0)
    assert_max_spread(None, Fraction(1, 2), 1_000, 1_000, 0)


def test_custom_limits() -> None:
    with pytest.raises(AllowedSpreadError):
        assert_max_spread(
            None,
            Fraction(2, 100),
            1_000,
            1_000,
            0,
            default_max_spread=Fraction(1, 100),
            max_allowed_spread=Fraction(1, 100),
        )


def test_zero_quote_is_a_math_error() -> None:
    with pytest.raises(MathError, match="division by zero"):
        assert_max_spread(None, None, 1_000, 0, 0)


def test_non_positive_belief_price_is_rejected() -> None:
    with pytest.raises(ValidationError, match="belief_price must be positive"):
        assert_max_spread(Fraction(0), None, 1_000, 1_000, 0)
