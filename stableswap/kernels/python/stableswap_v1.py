"""
StableSwap invariant kernel (2 coins, v1 semantics).

Invariant, with A the amplification and n = 2:

    A * n**n * S + D = A * n**n * D + D**(n+1) / (n**n * P)

where S = x + y and P = x * y. Amplification values are carried pre-multiplied
by AMP_PRECISION, and `leverage = amp * N_COINS` plays the role of A * n**n.

Both solvers are Newton-Raphson fixed-point iterations in integer arithmetic:
- `solve_d` finds D for reserves (x, y),
- `solve_y` finds the reserve y that keeps D fixed for a given x.

They stop once two consecutive iterates differ by at most 1 and raise
ConvergenceError when the iteration cap is reached first. Intermediates are
checked against u256, results against u128.
"""

from __future__ import annotations

import logging

from ...errors import ConvergenceError, MathError, ValidationError
from .uint import U128_MAX, U256_MAX, checked, checked_sub, require_int, require_uint


N_COINS = 2
AMP_PRECISION = 100
MAX_AMP = 1_000_000
MAX_AMP_CHANGE = 10
MIN_AMP_CHANGING_TIME = 86_400
MINIMUM_AMP = 1 * AMP_PRECISION
ITERATIONS = 255

logger = logging.getLogger(__name__)


def _require_leverage(leverage: int) -> None:
    require_int("leverage", leverage)
    if leverage < AMP_PRECISION:
        raise ValidationError(f"leverage must be at least {AMP_PRECISION}: {leverage}")
    if leverage > MAX_AMP * AMP_PRECISION * N_COINS:
        raise ValidationError(f"leverage exceeds maximum: {leverage}")


def _converged(a: int, b: int) -> bool:
    # Equality with the precision of 1
    return abs(a - b) <= 1


def solve_d(leverage: int, x: int, y: int, *, iterations: int = ITERATIONS) -> int:
    """
    Compute the invariant D for normalized reserves (x, y).

    D_P = D**3 / (4 * x * y)
    D' = (leverage * S / AMP_PRECISION + 2 * D_P) * D
         / ((leverage - AMP_PRECISION) * D / AMP_PRECISION + 3 * D_P)

    Starting guess is D = S. Returns 0 if either reserve is zero.
    """
    _require_leverage(leverage)
    require_uint("x", x)
    require_uint("y", y)

    if x == 0 or y == 0:
        return 0

    sum_x = x + y
    x_times_coins = x * N_COINS
    y_times_coins = y * N_COINS
    d = sum_x
    d_prev = d

    for i in range(iterations):
        d_product = checked(d * d, U256_MAX, what="D*D") // x_times_coins
        d_product = checked(d_product * d, U256_MAX, what="D_P*D") // y_times_coins
        d_prev = d

        numerator = checked(
            (leverage * sum_x // AMP_PRECISION + d_product * N_COINS) * d, U256_MAX, what="D numerator"
        )
        denominator = checked(
            (leverage - AMP_PRECISION) * d // AMP_PRECISION + (N_COINS + 1) * d_product,
            U256_MAX,
            what="D denominator",
        )
        if denominator == 0:
            raise MathError("D denominator is zero")
        d = numerator // denominator

        if _converged(d, d_prev):
            logger.debug("solve_d converged in %d iterations (leverage=%d, D=%d)", i + 1, leverage, d)
            return checked(d, U128_MAX, what="D")

    logger.error("solve_d did not converge (leverage=%d, x=%d, y=%d)", leverage, x, y)
    raise ConvergenceError("solve_d", iterations, d, d_prev)


def solve_y(leverage: int, known_balance: int, d: int, *, iterations: int = ITERATIONS) -> int:
    """
    Compute the other reserve y such that (known_balance, y) has invariant `d`.

    Solves y**2 + (b - D) * y = c iteratively:
        c = D**3 * AMP_PRECISION / (4 * leverage * x)
        b = x + D * AMP_PRECISION / leverage
        y' = (y**2 + c) / (2 * y + b - D)
    starting from y = D.
    """
    _require_leverage(leverage)
    x = require_uint("known_balance", known_balance)
    require_uint("d", d)

    if x == 0:
        raise MathError("solve_y: division by zero (known_balance is 0)")

    c = checked(d * d, U256_MAX, what="D*D") // (x * N_COINS)
    c = checked(c * d * AMP_PRECISION, U256_MAX, what="c") // (leverage * N_COINS)
    b = x + d * AMP_PRECISION // leverage

    y = d
    y_prev = y
    for i in range(iterations):
        y_prev = y
        numerator = checked(y * y + c, U256_MAX, what="y numerator")
        denominator = checked_sub(2 * y + b, d, what="y denominator")
        if denominator == 0:
            raise MathError("solve_y: division by zero")
        y = numerator // denominator

        if _converged(y, y_prev):
            logger.debug("solve_y converged in %d iterations (leverage=%d, y=%d)", i + 1, leverage, y)
            return checked(y, U128_MAX, what="y")

    logger.error("solve_y did not converge (leverage=%d, x=%d, D=%d)", leverage, x, d)
    raise ConvergenceError("solve_y", iterations, y, y_prev)


def calc_ask_amount(offer_pool: int, ask_pool: int, offer_amount: int, amp: int) -> int:
    """Ask-side amount released for `offer_amount`, before any commission."""
    require_uint("offer_amount", offer_amount)
    leverage = amp * N_COINS
    d = solve_d(leverage, offer_pool, ask_pool)
    new_offer_pool = checked(offer_pool + offer_amount, U128_MAX, what="new offer pool")
    new_ask_pool = solve_y(leverage, new_offer_pool, d)
    return checked_sub(ask_pool, new_ask_pool, what="return amount")


def calc_offer_amount(offer_pool: int, ask_pool: int, ask_amount: int, amp: int) -> int:
    """Offer-side amount required to release `ask_amount`, before any commission."""
    require_uint("ask_amount", ask_amount)
    leverage = amp * N_COINS
    new_ask_pool = checked_sub(ask_pool, ask_amount, what="new ask pool")
    d = solve_d(leverage, offer_pool, ask_pool)
    new_offer_pool = solve_y(leverage, new_ask_pool, d)
    return checked_sub(new_offer_pool, offer_pool, what="offer amount")
