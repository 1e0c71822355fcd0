"""StableSwap invariant and balance solvers.

Newton's method on the StableSwap invariant

    A*n^n*sum(x) + D = A*D*n^n + D^(n+1) / (n^n * prod(x))

Every expression is evaluated in the same order as the StableSwapNG
contracts; integer division does not associate, so regrouping a product or
a quotient changes results by a few wei.

All inputs are balances in one common unit (18-decimal normalized for the
tolerant path, rate-scaled for the exact adapter) and Ann = A * A_PRECISION * N.
"""

from collections.abc import Sequence

from curve_amm_math.constants import A_PRECISION, MAX_ITERATIONS
from curve_amm_math.convergence import report_non_convergence
from curve_amm_math.errors import DomainError
from curve_amm_math.safe_int import S, SafeInt
from curve_amm_math.validation import (
    check_amount,
    check_ann,
    check_balances,
    check_index,
    check_pair,
    check_stableswap_coins,
)


def compute_ann(a: int, n_coins: int, is_a_precise: bool = False) -> int:
    """Convert a raw A into Ann = A * A_PRECISION * N_COINS.

    Args:
        a: Amplification parameter
        n_coins: Number of coins in the pool
        is_a_precise: True if a is already multiplied by A_PRECISION
            (the value returned by A_precise())
    """
    if is_a_precise:
        return a * n_coins
    return a * A_PRECISION * n_coins


def get_d(xp: Sequence[int], ann: int) -> int:
    """Calculate the StableSwap invariant D.

    Algorithm:
        1. Initial guess: D = sum(xp)
        2. D_P = D^(n+1) / (n^n * prod(xp)), built one balance at a time
        3. D = (Ann*S/A_PRECISION + D_P*n) * D /
               ((Ann - A_PRECISION)*D/A_PRECISION + (n+1)*D_P)
        4. Stop when |D - D_prev| <= 1, or after MAX_ITERATIONS

    Args:
        xp: Pool balances in a common unit
        ann: A * A_PRECISION * N_COINS

    Returns:
        The invariant D; 0 for an empty pool

    Raises:
        DomainError: If one balance is zero while others are not
        ParameterRangeError: If Ann or the coin count is out of range
    """
    check_stableswap_coins(len(xp))
    check_ann(ann)
    check_balances(xp)

    n_coins = S(len(xp))
    n_coins_pow = n_coins**len(xp)

    s = S(sum(xp))
    if s == 0:
        return 0
    for k, x in enumerate(xp):
        if x == 0:
            raise DomainError(f"Balance at index {k} is zero in a non-empty pool")

    s_ann = S(ann)
    d = s
    d_prev = d
    for _ in range(MAX_ITERATIONS):
        d_p = d
        for x in xp:
            d_p = d_p * d // x
        d_p = d_p // n_coins_pow

        d_prev = d
        numerator = (s_ann * s // A_PRECISION + d_p * n_coins) * d
        denominator = (s_ann - A_PRECISION) * d // A_PRECISION + (n_coins + 1) * d_p
        d = numerator // denominator

        if d.abs_diff(d_prev) <= 1:
            return d.value

    report_non_convergence("stableswap.get_d", MAX_ITERATIONS, d.value, d_prev.value)
    return d.value


def _newton_y(c: SafeInt, b: SafeInt, d: SafeInt, solver: str) -> int:
    """Iterate y = (y^2 + c) / (2y + b - D) from y = D."""
    y = d
    y_prev = y
    for _ in range(MAX_ITERATIONS):
        y_prev = y
        y = (y * y + c) // (S(2) * y + b - d)

        if y.abs_diff(y_prev) <= 1:
            return y.value

    report_non_convergence(solver, MAX_ITERATIONS, y.value, y_prev.value)
    return y.value


def get_y(i: int, j: int, x: int, xp: Sequence[int], ann: int, d: int) -> int:
    """Solve for xp[j] after xp[i] becomes x, holding D constant.

    The quadratic y^2 + c = y*(2y + b - D) uses
    c = D^(n+1) / (n^n * prod(x_k, k != j) * Ann * n) and
    b = sum(x_k, k != j) + D / Ann, with x substituted at index i.

    Args:
        i: Index of the coin whose balance changes
        j: Index of the coin to solve for
        x: New balance of coin i
        xp: Current pool balances
        ann: A * A_PRECISION * N_COINS
        d: Invariant to preserve (from get_d)

    Returns:
        New balance of coin j

    Raises:
        InvalidIndex: If i or j is out of range, or i == j
        DomainError: If a balance other than j is zero
    """
    n = len(xp)
    check_pair(i, j, n)
    check_ann(ann)
    check_amount(x, "x")
    check_balances(xp)

    n_coins = S(n)
    sd = S(d)
    c = sd
    s_ = S.zero()
    for k in range(n):
        if k == i:
            _x = x
        elif k != j:
            _x = xp[k]
        else:
            continue
        if _x == 0:
            raise DomainError(f"Balance at index {k} is zero")
        s_ = s_ + _x
        c = c * sd // (n_coins * _x)

    c = c * sd * A_PRECISION // (n_coins * ann)
    b = s_ + sd * A_PRECISION // ann

    return _newton_y(c, b, sd, "stableswap.get_y")


def get_y_d(i: int, xp: Sequence[int], ann: int, d: int) -> int:
    """Solve for xp[i] given all other balances and a target D.

    Used by the liquidity path, where D changes (single-coin withdrawal)
    rather than being preserved by a swap.

    Args:
        i: Index of the coin to solve for
        xp: Pool balances (xp[i] itself is ignored)
        ann: A * A_PRECISION * N_COINS
        d: Target invariant

    Returns:
        Balance of coin i satisfying the invariant at d

    Raises:
        InvalidIndex: If i is out of range
        DomainError: If another balance is zero
    """
    n = len(xp)
    check_index(i, n)
    check_ann(ann)
    check_balances(xp)

    n_coins = S(n)
    sd = S(d)
    c = sd
    s_ = S.zero()
    for k in range(n):
        if k == i:
            continue
        if xp[k] == 0:
            raise DomainError(f"Balance at index {k} is zero")
        s_ = s_ + xp[k]
        c = c * sd // (n_coins * xp[k])

    c = c * sd * A_PRECISION // (n_coins * ann)
    b = s_ + sd * A_PRECISION // ann

    return _newton_y(c, b, sd, "stableswap.get_y_d")
