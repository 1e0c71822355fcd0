"""CryptoSwap deposit and withdrawal quotes.

The same ideal-balance construction as the StableSwap liquidity quotes, run
on the pool's scaled balances with the curvature solvers: the change is
compared with a pool that moved proportionally from D0 to D1, and each coin
pays token_fee(mid_fee) on its deviation before D2 is solved.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from curve_amm_math.constants import FEE_DENOMINATOR, PRECISION
from curve_amm_math.errors import DomainError
from curve_amm_math.models.pools import CryptoSwapParams
from curve_amm_math.safe_int import S, SafeInt
from curve_amm_math.validation import check_amount, check_amounts, check_index

from .fees import token_fee
from .math import newton_d, newton_y
from .quotes import pool_d, scale_balances

logger = structlog.get_logger()


def _require_supply(params: CryptoSwapParams) -> int:
    if params.total_supply is None:
        raise DomainError("Liquidity quotes need the pool's total_supply")
    return params.total_supply


def _unscale(params: CryptoSwapParams, amount: SafeInt, i: int) -> int:
    """Scaled amount of coin i back to its native decimals."""
    if i > 0:
        amount = amount * PRECISION // params.price_scale[i - 1]
    return (amount // params.coin_precisions[i]).value


def calc_token_amount(
    params: CryptoSwapParams,
    amounts: Sequence[int],
    is_deposit: bool,
) -> int:
    """LP tokens minted by a deposit, or burned by a withdrawal, of `amounts`.

    Algorithm:
        1. D0 from the pool (stored or solved), D1 from the scaled balances
           after applying amounts
        2. First deposit (total_supply == 0): mint D1
        3. ideal_i = xp_i * D1 / D0; charge token_fee on |new_i - ideal_i|
        4. D2 from the fee-reduced balances
        5. Deposit: supply * (D2 - D0) / D0; withdrawal: supply * (D0 - D2) / D0,
           floored at 0

    Args:
        params: Pool snapshot, including total_supply
        amounts: Amount of each coin in native decimals
        is_deposit: True to deposit, False to withdraw

    Returns:
        LP tokens to mint (deposit) or burn (withdrawal)

    Raises:
        DomainError: If a withdrawal exceeds a balance, total_supply is
            missing, or the pool has supply but no invariant
    """
    n = params.n_coins
    check_amounts(amounts, n)
    total_supply = _require_supply(params)

    precisions = params.coin_precisions
    if is_deposit:
        new_balances = [(S(b) + a).value for b, a in zip(params.balances, amounts)]
    else:
        new_balances = [(S(b) - a).value for b, a in zip(params.balances, amounts)]

    new_xp = scale_balances(new_balances, precisions, params.price_scale)
    d1 = S(newton_d(params.a, params.gamma, new_xp))

    if total_supply == 0:
        logger.debug("cryptoswap_first_deposit", minted=d1.value)
        return d1.value
    if not any(amounts):
        return 0

    d0 = S(pool_d(params))
    if d0 == 0:
        raise DomainError("Pool has LP supply but zero invariant")

    xp = scale_balances(params.balances, precisions, params.price_scale)
    fee = token_fee(params.mid_fee, n)
    xp_reduced = []
    for x, new_x in zip(xp, new_xp):
        ideal_balance = S(x) * d1 // d0
        difference = ideal_balance.abs_diff(new_x)
        xp_reduced.append((S(new_x) - S(fee) * difference // FEE_DENOMINATOR).value)
    d2 = newton_d(params.a, params.gamma, xp_reduced)

    diff = S(d2).saturating_sub(d0) if is_deposit else d0.saturating_sub(d2)
    return (S(total_supply) * diff // d0).value


def calc_withdraw_one_coin(
    params: CryptoSwapParams,
    token_amount: int,
    i: int,
) -> tuple[int, int]:
    """Coin i received for burning token_amount LP tokens, and the fee charged.

    Algorithm:
        1. D1 = D0 - token_amount * D0 / supply
        2. new_y = newton_y(A, gamma, xp, D1, i)
        3. Expected per-coin deltas toward the D1-implied balances, reduced
           by token_fee(mid_fee)
        4. dy = xp_reduced[i] - newton_y(A, gamma, xp_reduced, D1, i) - 1
        5. fee = xp[i] - new_y - dy
        6. Both scaled back to coin i's native decimals

    Args:
        params: Pool snapshot, including total_supply
        token_amount: LP tokens to burn
        i: Index of the coin to withdraw

    Returns:
        Tuple of (amount received, fee charged), in coin i's native
        decimals and floored at 0

    Raises:
        DomainError: If total_supply is missing or zero, or token_amount
            exceeds it
    """
    n = params.n_coins
    check_index(i, n)
    check_amount(token_amount, "token_amount")
    total_supply = _require_supply(params)
    if total_supply == 0:
        raise DomainError("Cannot withdraw from a pool with zero LP supply")
    if token_amount > total_supply:
        raise DomainError(f"token_amount {token_amount} exceeds total supply {total_supply}")
    if token_amount == 0:
        return 0, 0

    xp = scale_balances(params.balances, params.coin_precisions, params.price_scale)
    d0 = S(pool_d(params))
    d1 = d0 - S(token_amount) * d0 // total_supply
    new_y = newton_y(params.a, params.gamma, xp, d1.value, i)

    fee = S(token_fee(params.mid_fee, n))
    xp_reduced = []
    for k, x in enumerate(xp):
        if k == i:
            dx_expected = (S(x) * d1 // d0).saturating_sub(new_y)
        else:
            dx_expected = S(x) - S(x) * d1 // d0
        xp_reduced.append((S(x) - fee * dx_expected // FEE_DENOMINATOR).value)

    final_y = newton_y(params.a, params.gamma, xp_reduced, d1.value, i)
    dy = S(xp_reduced[i]).saturating_sub(final_y).saturating_sub(1)
    fee_charged = S(xp[i]).saturating_sub(new_y).saturating_sub(dy)

    logger.debug("cryptoswap_withdraw_one_coin", i=i, token_amount=token_amount, dy=dy.value)
    return _unscale(params, dy, i), _unscale(params, fee_charged, i)
