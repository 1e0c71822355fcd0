"""CryptoSwap invariant and balance solvers (2 and 3 coins).

Newton's method on the curve-v2 A/gamma invariant. The 2-coin forms follow
the Twocrypto contracts and the 3-coin forms follow Tricrypto; they differ
in how the curvature ratio K0 and the initial guesses are built, and those
truncation orders are kept per coin count.

Balances are in the pool's internal unit: precision-scaled, and multiplied
by price_scale / PRECISION for every coin after the first. A is the
on-chain value (A * N**N * A_MULTIPLIER).
"""

from collections.abc import Sequence

from curve_amm_math.constants import A_MULTIPLIER, MAX_ITERATIONS, PRECISION
from curve_amm_math.convergence import report_non_convergence
from curve_amm_math.errors import DomainError
from curve_amm_math.safe_int import S, SafeInt
from curve_amm_math.validation import (
    check_a_gamma,
    check_balances,
    check_cryptoswap_coins,
    check_index,
)

# Relative convergence floor: 1e-14 of the value being solved
CONVERGENCE_DIVISOR = 10**14

# Absolute convergence floor for newton_y
MIN_CONVERGENCE_LIMIT = 100


def geometric_mean(x: Sequence[int]) -> int:
    """(x[0] * x[1] * ...) ** (1/N) by Newton's method.

    Args:
        x: Balances sorted from high to low, all positive

    Returns:
        The integer geometric mean
    """
    n = len(x)
    d = S(x[0])
    d_prev = d

    for _ in range(MAX_ITERATIONS):
        d_prev = d
        if n == 2:
            d = (d + S(x[0]) * x[1] // d) // n
        else:
            tmp = S(PRECISION)
            for _x in x:
                tmp = tmp * _x // d
            d = d * ((n - 1) * PRECISION + tmp) // (n * PRECISION)

        diff = d.abs_diff(d_prev)
        if diff <= 1 or diff * PRECISION < d:
            return d.value

    report_non_convergence("cryptoswap.geometric_mean", MAX_ITERATIONS, d.value, d_prev.value)
    return d.value


def _k0(x: Sequence[int], d: SafeInt) -> SafeInt:
    """K0 = PRECISION * N**N * prod(x) / D**N, in the contract's truncation order."""
    n = len(x)
    if n == 2:
        return S(PRECISION * n**2) * x[0] // d * x[1] // d

    k0 = S(PRECISION)
    for _x in x:
        k0 = k0 * _x * n // d
    return k0


def _g1k0(gamma: int, k0: SafeInt) -> SafeInt:
    """|gamma + PRECISION - K0| + 1."""
    g1k0 = S(gamma) + PRECISION
    if g1k0 > k0:
        return g1k0 - k0 + 1
    return k0 - g1k0 + 1


def _mul1(d: SafeInt, gamma: int, g1k0: SafeInt, ann: int) -> SafeInt:
    """D / (A * N**N) * g1k0**2 / gamma**2, scaled by PRECISION."""
    return S(PRECISION) * d // gamma * g1k0 // gamma * g1k0 * A_MULTIPLIER // ann


def newton_d(ann: int, gamma: int, x_unsorted: Sequence[int]) -> int:
    """Calculate the CryptoSwap invariant D.

    Starts from the constant-product invariant N * geometric_mean(x) and
    iterates until |D - D_prev| * 1e14 < max(1e16, D).

    Args:
        ann: On-chain A (includes N**N and A_MULTIPLIER)
        gamma: Curvature parameter
        x_unsorted: Scaled pool balances

    Returns:
        The invariant D; 0 for an empty pool

    Raises:
        ParameterRangeError: If A, gamma or the coin count is out of range
        DomainError: If one balance is zero while others are not
    """
    n = len(x_unsorted)
    check_cryptoswap_coins(n)
    check_a_gamma(ann, gamma, n)
    check_balances(x_unsorted)

    if not any(x_unsorted):
        return 0
    if not all(x_unsorted):
        raise DomainError("CryptoSwap invariant needs every balance positive")

    x = sorted(x_unsorted, reverse=True)

    d = S(n) * geometric_mean(x)
    s = S(sum(x))
    d_prev = d

    for _ in range(MAX_ITERATIONS):
        d_prev = d

        k0 = _k0(x, d)
        g1k0 = _g1k0(gamma, k0)
        mul1 = _mul1(d, gamma, g1k0, ann)

        # 2*N*K0 / _g1k0
        mul2 = S(2 * PRECISION) * n * k0 // g1k0

        neg_fprime = (s + s * mul2 // PRECISION) + mul1 * n // k0 - mul2 * d // PRECISION

        # D -= f / fprime
        d_plus = d * (neg_fprime + s) // neg_fprime
        d_minus = d * d // neg_fprime
        if k0 < PRECISION:
            d_minus = d_minus + d * (mul1 // neg_fprime) // PRECISION * (S(PRECISION) - k0) // k0
        else:
            d_minus = d_minus - d * (mul1 // neg_fprime) // PRECISION * (k0 - PRECISION) // k0

        if d_plus > d_minus:
            d = d_plus - d_minus
        else:
            d = (d_minus - d_plus) // 2

        diff = d.abs_diff(d_prev)
        if diff * CONVERGENCE_DIVISOR < d.max(10**16):
            return d.value

    report_non_convergence("cryptoswap.newton_d", MAX_ITERATIONS, d.value, d_prev.value)
    return d.value


def _newton_y_seed(x: Sequence[int], d: SafeInt, i: int) -> tuple[SafeInt, SafeInt, SafeInt, SafeInt]:
    """Initial y, K0_i, S_i and convergence limit for newton_y.

    K0_i = PRECISION * N**(N-1) * prod(x_k, k != i) / D**(N-1) and
    S_i = sum(x_k, k != i).
    """
    n = len(x)
    if n == 2:
        x_j = S(x[1 - i])
        y = d * d // (x_j * n**2)
        k0_i = S(PRECISION * n) * x_j // d
        convergence_limit = (x_j // CONVERGENCE_DIVISOR).max(d // CONVERGENCE_DIVISOR)
        return y, k0_i, x_j, convergence_limit.max(MIN_CONVERGENCE_LIMIT)

    x_sorted = list(x)
    x_sorted[i] = 0
    x_sorted.sort(reverse=True)

    y = d // n
    k0_i = S(PRECISION)
    s_i = S.zero()
    # Small x first for y, large x first for K0_i
    for k in range(2, n + 1):
        _x = x_sorted[n - k]
        y = y * d // (S(_x) * n)
        s_i = s_i + _x
    for k in range(n - 1):
        k0_i = k0_i * x_sorted[k] * n // d

    convergence_limit = S(x_sorted[0] // CONVERGENCE_DIVISOR).max(d // CONVERGENCE_DIVISOR)
    return y, k0_i, s_i, convergence_limit.max(MIN_CONVERGENCE_LIMIT)


def newton_y(ann: int, gamma: int, x: Sequence[int], d: int, i: int) -> int:
    """Solve for x[i] given the other balances and the invariant D.

    Each step is a rational Newton update. When the linearized derivative
    would go negative the previous guess is halved instead. Stops when
    |y - y_prev| < max(convergence_limit, y / 1e14), where the limit is
    max(x_max / 1e14, D / 1e14, 100) over the other balances.

    Args:
        ann: On-chain A (includes N**N and A_MULTIPLIER)
        gamma: Curvature parameter
        x: Scaled pool balances (x[i] itself is ignored)
        d: Invariant
        i: Index of the balance to solve for

    Returns:
        The balance of coin i

    Raises:
        InvalidIndex: If i is out of range
        ParameterRangeError: If A, gamma or the coin count is out of range
        DomainError: If D or another balance is zero
    """
    n = len(x)
    check_cryptoswap_coins(n)
    check_index(i, n)
    check_a_gamma(ann, gamma, n)
    check_balances(x)
    if d <= 0:
        raise DomainError("CryptoSwap balance solve needs a positive invariant")
    for k in range(n):
        if k != i and x[k] == 0:
            raise DomainError(f"Balance at index {k} is zero")

    sd = S(d)
    y, k0_i, s_i, convergence_limit = _newton_y_seed(x, sd, i)
    y_prev = y

    for _ in range(MAX_ITERATIONS):
        y_prev = y

        k0 = k0_i * y * n // sd
        s = s_i + y

        g1k0 = _g1k0(gamma, k0)
        mul1 = _mul1(sd, gamma, g1k0, ann)

        # 2*K0 / _g1k0
        mul2 = S(PRECISION) + S(2 * PRECISION) * k0 // g1k0

        yfprime = S(PRECISION) * y + s * mul2 + mul1
        dyfprime = sd * mul2
        if yfprime < dyfprime:
            y = y_prev // 2
            continue
        yfprime = yfprime - dyfprime
        fprime = yfprime // y

        # y -= f / f_prime;  y = (y * fprime - f) / fprime
        y_minus = mul1 // fprime
        y_plus = (yfprime + S(PRECISION) * sd) // fprime + y_minus * PRECISION // k0
        y_minus = y_minus + S(PRECISION) * s // fprime

        if y_plus < y_minus:
            y = y_prev // 2
        else:
            y = y_plus - y_minus

        if y.abs_diff(y_prev) < convergence_limit.max(y // CONVERGENCE_DIVISOR):
            return y.value

    report_non_convergence("cryptoswap.newton_y", MAX_ITERATIONS, y.value, y_prev.value)
    return y.value
