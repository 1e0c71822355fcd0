"""StableSwap deposit and withdrawal quotes on normalized balances.

Both operations compare the pool after the change with an "ideal" pool that
moved proportionally from the current one, and charge the per-coin
imbalance fee base_fee * N / (4 * (N - 1)) on the deviation.
"""

from collections.abc import Sequence

import structlog

from curve_amm_math.constants import FEE_DENOMINATOR
from curve_amm_math.errors import DomainError
from curve_amm_math.safe_int import S
from curve_amm_math.validation import check_amount, check_amounts, check_fee, check_index

from .fees import token_fee
from .math import get_d, get_y_d

logger = structlog.get_logger()


def calc_token_amount(
    amounts: Sequence[int],
    is_deposit: bool,
    xp: Sequence[int],
    ann: int,
    total_supply: int,
    base_fee: int,
) -> int:
    """LP tokens minted by a deposit, or burned by a withdrawal, of `amounts`.

    Algorithm:
        1. D0 from current balances, D1 after applying amounts
        2. First deposit (total_supply == 0): mint D1
        3. ideal_i = xp_i * D1 / D0; charge token_fee on |new_i - ideal_i|
        4. D2 from the fee-reduced balances
        5. Deposit: supply * (D2 - D0) / D0; withdrawal: supply * (D0 - D2) / D0

    Args:
        amounts: Amount of each coin (normalized)
        is_deposit: True to deposit, False to withdraw
        xp: Current pool balances (normalized)
        ann: A * A_PRECISION * N_COINS
        total_supply: Current LP token supply
        base_fee: Pool fee, in FEE_DENOMINATOR units

    Returns:
        LP tokens to mint (deposit) or burn (withdrawal)

    Raises:
        DomainError: If a withdrawal exceeds a balance, or the pool has
            supply but no balances
    """
    n = len(xp)
    check_amounts(amounts, n)
    check_amount(total_supply, "total_supply")
    check_fee(base_fee, "base_fee")

    if is_deposit:
        new_xp = [(S(x) + a).value for x, a in zip(xp, amounts)]
    else:
        new_xp = [(S(x) - a).value for x, a in zip(xp, amounts)]

    d0 = S(get_d(xp, ann))
    d1 = S(get_d(new_xp, ann))

    if total_supply == 0:
        logger.debug("stableswap_first_deposit", minted=d1.value)
        return d1.value
    if d0 == 0:
        raise DomainError("Pool has LP supply but zero invariant")

    fee = token_fee(base_fee, n)
    xp_reduced = []
    for x, new_x in zip(xp, new_xp):
        ideal_balance = S(x) * d1 // d0
        difference = ideal_balance.abs_diff(new_x)
        xp_reduced.append((S(new_x) - S(fee) * difference // FEE_DENOMINATOR).value)
    d2 = S(get_d(xp_reduced, ann))

    diff = d2 - d0 if is_deposit else d0 - d2
    return (S(total_supply) * diff // d0).value


def calc_withdraw_one_coin(
    token_amount: int,
    i: int,
    xp: Sequence[int],
    ann: int,
    total_supply: int,
    base_fee: int,
) -> tuple[int, int]:
    """Coin i received for burning token_amount LP tokens, and the fee charged.

    Algorithm:
        1. D1 = D0 - token_amount * D0 / total_supply
        2. new_y = get_y_d(i, xp, Ann, D1)
        3. Expected per-coin deltas toward the D1-implied balances, reduced
           by the imbalance fee
        4. dy = xp_reduced[i] - get_y_d(i, xp_reduced, Ann, D1) - 1
        5. fee = xp[i] - new_y - dy

    Args:
        token_amount: LP tokens to burn
        i: Index of the coin to withdraw
        xp: Current pool balances (normalized)
        ann: A * A_PRECISION * N_COINS
        total_supply: Current LP token supply
        base_fee: Pool fee, in FEE_DENOMINATOR units

    Returns:
        Tuple of (amount received, fee charged), both floored at 0

    Raises:
        DomainError: If total_supply is zero or token_amount exceeds it
    """
    n = len(xp)
    check_index(i, n)
    check_amount(token_amount, "token_amount")
    check_fee(base_fee, "base_fee")
    if total_supply == 0:
        raise DomainError("Cannot withdraw from a pool with zero LP supply")
    if token_amount > total_supply:
        raise DomainError(f"token_amount {token_amount} exceeds total supply {total_supply}")

    d0 = S(get_d(xp, ann))
    d1 = d0 - S(token_amount) * d0 // total_supply
    new_y = get_y_d(i, xp, ann, d1.value)

    fee = S(token_fee(base_fee, n))
    xp_reduced = []
    for k, x in enumerate(xp):
        if k == i:
            dx_expected = (S(x) * d1 // d0).saturating_sub(new_y)
        else:
            dx_expected = S(x) - S(x) * d1 // d0
        xp_reduced.append((S(x) - fee * dx_expected // FEE_DENOMINATOR).value)

    final_y = get_y_d(i, xp_reduced, ann, d1.value)
    dy = S(xp_reduced[i]).saturating_sub(final_y).saturating_sub(1)
    fee_amount = S(xp[i]).saturating_sub(new_y).saturating_sub(dy)

    return dy.value, fee_amount.value
