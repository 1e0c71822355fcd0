"""Exact-precision StableSwap quotes in native token decimals.

The tolerant path in quotes.py works on balances already normalized to 18
decimals. That cannot promise wei-level agreement for tokens with
non-standard decimals or a live exchange rate (oracle, ERC4626 vault,
rebasing). This adapter takes native balances plus the pool's stored rate
vector and reproduces the CurveStableSwapNGViews operation order:

    xp[k] = rates[k] * balances[k] / PRECISION
    ... solve on xp ...
    result = value * PRECISION / rates[j]

Rates must come from the pool itself (stored_rates()); they cannot be
derived from decimals for rate-bearing tokens.

amp is the contract's A_precise (A * A_PRECISION), not Ann.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from curve_amm_math.constants import FEE_DENOMINATOR, PRECISION
from curve_amm_math.errors import DomainError, ParameterRangeError
from curve_amm_math.safe_int import S
from curve_amm_math.validation import (
    check_amount,
    check_amounts,
    check_balances,
    check_index,
    check_pair,
    check_rates,
)

from .fees import dynamic_fee, token_fee
from .math import get_d, get_y, get_y_d

logger = structlog.get_logger()


def xp_mem(rates: Sequence[int], balances: Sequence[int]) -> list[int]:
    """Rate-scaled balances: rates[k] * balances[k] / PRECISION."""
    check_rates(rates, len(balances))
    check_balances(balances)
    return [(S(rate) * balance // PRECISION).value for rate, balance in zip(rates, balances)]


def get_dy(
    i: int,
    j: int,
    dx: int,
    balances: Sequence[int],
    rates: Sequence[int],
    amp: int,
    base_fee: int,
    fee_multiplier: int,
) -> int:
    """Output of coin j (native decimals) for dx of coin i (native decimals).

    Args:
        i: Input coin index
        j: Output coin index
        dx: Input amount in coin i's native decimals
        balances: Pool balances in native decimals
        rates: Stored rate per coin (10**(36 - decimals) times any live rate)
        amp: A * A_PRECISION
        base_fee: Pool fee, in FEE_DENOMINATOR units
        fee_multiplier: Off-peg fee multiplier, in FEE_DENOMINATOR units

    Returns:
        Output amount in coin j's native decimals
    """
    n = len(balances)
    check_pair(i, j, n)
    check_amount(dx, "dx")
    if dx == 0:
        return 0

    xp = xp_mem(rates, balances)
    ann = amp * n

    x = xp[i] + (S(dx) * rates[i] // PRECISION).value
    d = get_d(xp, ann)
    y = get_y(i, j, x, xp, ann, d)
    dy = S(xp[j]).saturating_sub(y).saturating_sub(1)

    fee = (
        S(dynamic_fee((xp[i] + x) // 2, (xp[j] + y) // 2, base_fee, fee_multiplier))
        * dy
        // FEE_DENOMINATOR
    )
    return ((dy - fee) * PRECISION // rates[j]).value


def get_dx(
    i: int,
    j: int,
    dy: int,
    balances: Sequence[int],
    rates: Sequence[int],
    amp: int,
    base_fee: int,
    fee_multiplier: int,
) -> int:
    """Input of coin i (native decimals) needed for dy of coin j (native decimals).

    Matches the view's get_dx: the fee is taken at current balances and the
    target balance of j is

        xp[j] - (dy * rates[j] / PRECISION + 1) * FEE_DENOMINATOR / (FEE_DENOMINATOR - fee)

    Returns:
        Required input in coin i's native decimals; 0 if dy is 0 or the pool
        cannot pay it
    """
    n = len(balances)
    check_pair(i, j, n)
    check_amount(dy, "dy")
    if dy == 0:
        return 0
    if dy >= balances[j]:
        logger.debug("exact_get_dx_exceeds_balance", j=j, dy=dy, balance=balances[j])
        return 0

    xp = xp_mem(rates, balances)
    ann = amp * n
    d = get_d(xp, ann)

    fee = dynamic_fee(xp[i], xp[j], base_fee, fee_multiplier)
    if fee >= FEE_DENOMINATOR:
        raise ParameterRangeError(f"Dynamic fee {fee} leaves nothing to trade")

    dy_with_fee = (S(dy) * rates[j] // PRECISION + 1) * FEE_DENOMINATOR // (FEE_DENOMINATOR - fee)
    if dy_with_fee >= xp[j]:
        logger.debug("exact_get_dx_exceeds_balance", j=j, dy=dy, balance=balances[j])
        return 0
    y = S(xp[j]) - dy_with_fee

    x = get_y(j, i, y.value, xp, ann, d)
    return (S(x).saturating_sub(xp[i]) * PRECISION // rates[i]).value


def calc_token_amount(
    amounts: Sequence[int],
    is_deposit: bool,
    balances: Sequence[int],
    rates: Sequence[int],
    amp: int,
    total_supply: int,
    base_fee: int,
    fee_multiplier: int,
) -> int:
    """LP tokens minted or burned for native-decimal `amounts`.

    Unlike the normalized path, the per-coin imbalance fee is dynamic: it is
    evaluated at (rate-scaled old + new balance, (D0 + D1) / N), as the view
    does.

    Returns:
        LP tokens to mint (deposit) or burn (withdrawal)

    Raises:
        DomainError: If a withdrawal exceeds a balance
    """
    n = len(balances)
    check_amounts(amounts, n)
    check_amount(total_supply, "total_supply")

    xp = xp_mem(rates, balances)
    ann = amp * n
    d0 = S(get_d(xp, ann))

    if is_deposit:
        new_balances = [(S(b) + a).value for b, a in zip(balances, amounts)]
    else:
        new_balances = [(S(b) - a).value for b, a in zip(balances, amounts)]

    d1 = S(get_d(xp_mem(rates, new_balances), ann))

    if total_supply == 0:
        logger.debug("exact_first_deposit", minted=d1.value)
        return d1.value
    if d0 == 0:
        raise DomainError("Pool has LP supply but zero invariant")

    fee_i = token_fee(base_fee, n)
    ys = (d0 + d1) // n
    for k in range(n):
        ideal_balance = d1 * balances[k] // d0
        new_balance = new_balances[k]
        difference = ideal_balance.abs_diff(new_balance)
        xs = S(rates[k]) * (balances[k] + new_balance) // PRECISION
        dynamic_fee_k = dynamic_fee(xs.value, ys.value, fee_i, fee_multiplier)
        new_balances[k] = (S(new_balance) - S(dynamic_fee_k) * difference // FEE_DENOMINATOR).value

    d2 = S(get_d(xp_mem(rates, new_balances), ann))

    diff = d2 - d0 if is_deposit else d0 - d2
    return (diff * total_supply // d0).value


def calc_withdraw_one_coin(
    burn_amount: int,
    i: int,
    balances: Sequence[int],
    rates: Sequence[int],
    amp: int,
    total_supply: int,
    base_fee: int,
    fee_multiplier: int,
) -> tuple[int, int]:
    """Coin i (native decimals) received for burning burn_amount LP tokens.

    Returns:
        Tuple of (amount received, fee charged), in coin i's native decimals

    Raises:
        DomainError: If total_supply is zero or burn_amount exceeds it
    """
    n = len(balances)
    check_index(i, n)
    check_amount(burn_amount, "burn_amount")
    if total_supply == 0:
        raise DomainError("Cannot withdraw from a pool with zero LP supply")
    if burn_amount > total_supply:
        raise DomainError(f"burn_amount {burn_amount} exceeds total supply {total_supply}")

    xp = xp_mem(rates, balances)
    ann = amp * n
    d0 = S(get_d(xp, ann))
    d1 = d0 - S(burn_amount) * d0 // total_supply
    new_y = get_y_d(i, xp, ann, d1.value)

    fee_i = token_fee(base_fee, n)
    ys = (d0 + d1) // (2 * n)
    xp_reduced = list(xp)
    for k in range(n):
        if k == i:
            dx_expected = (S(xp[k]) * d1 // d0).saturating_sub(new_y)
            xavg = (xp[k] + new_y) // 2
        else:
            dx_expected = S(xp[k]) - S(xp[k]) * d1 // d0
            xavg = xp[k]
        dynamic_fee_k = dynamic_fee(xavg, ys.value, fee_i, fee_multiplier)
        xp_reduced[k] = (S(xp_reduced[k]) - S(dynamic_fee_k) * dx_expected // FEE_DENOMINATOR).value

    dy = S(xp_reduced[i]).saturating_sub(get_y_d(i, xp_reduced, ann, d1.value))
    dy_0 = S(xp[i]).saturating_sub(new_y) * PRECISION // rates[i]
    dy = dy.saturating_sub(1) * PRECISION // rates[i]

    return dy.value, dy_0.saturating_sub(dy).value
