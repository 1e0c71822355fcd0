"""CryptoSwap fees.

The swap fee slides between mid_fee and out_fee with the pool's balance:
K = PRECISION * N**N * prod(xp) / sum(xp)**N is 1e18 for a balanced pool
and falls toward 0 as the pool drains. K is evaluated left to right as
PRECISION * N**N * xp[0] / s * xp[1] / s ..., the NG pools' order.
"""

from collections.abc import Sequence

from curve_amm_math.constants import FEE_DENOMINATOR, PRECISION
from curve_amm_math.errors import ParameterRangeError
from curve_amm_math.safe_int import S
from curve_amm_math.validation import check_balances, check_cryptoswap_coins, check_fee


def check_fee_params(mid_fee: int, out_fee: int, fee_gamma: int) -> None:
    """Raise ParameterRangeError unless 0 <= mid_fee <= out_fee < FEE_DENOMINATOR and fee_gamma > 0."""
    check_fee(mid_fee, "mid_fee")
    check_fee(out_fee, "out_fee")
    if mid_fee > out_fee:
        raise ParameterRangeError(f"mid_fee {mid_fee} exceeds out_fee {out_fee}")
    if fee_gamma <= 0:
        raise ParameterRangeError(f"fee_gamma must be positive, got {fee_gamma}")


def reduction_coefficient(xp: Sequence[int], fee_gamma: int) -> int:
    """f = fee_gamma / (fee_gamma + PRECISION - K), in PRECISION units.

    Returns PRECISION for an empty pool.
    """
    n = len(xp)
    s = sum(xp)
    if s == 0:
        return PRECISION

    k = S(PRECISION * n**n)
    for x in xp:
        k = k * x // s

    return (S(fee_gamma) * PRECISION // (S(fee_gamma) + PRECISION - k)).value


def dynamic_fee(xp: Sequence[int], fee_gamma: int, mid_fee: int, out_fee: int) -> int:
    """Swap fee for the scaled balances xp, in FEE_DENOMINATOR units.

    fee = (mid_fee * f + out_fee * (PRECISION - f)) / PRECISION

    Args:
        xp: Scaled pool balances (post-trade for a swap quote)
        fee_gamma: Fee interpolation parameter
        mid_fee: Fee at a balanced pool
        out_fee: Fee at a fully imbalanced pool

    Returns:
        Fee in FEE_DENOMINATOR units; mid_fee for an empty pool

    Raises:
        ParameterRangeError: If the fee parameters are out of range
    """
    check_cryptoswap_coins(len(xp))
    check_fee_params(mid_fee, out_fee, fee_gamma)
    check_balances(xp)

    f = reduction_coefficient(xp, fee_gamma)
    return (mid_fee * f + out_fee * (PRECISION - f)) // PRECISION


def token_fee(mid_fee: int, n_coins: int) -> int:
    """Per-coin imbalance fee for liquidity operations: mid_fee * N / (4 * (N - 1))."""
    check_fee(mid_fee, "mid_fee")
    return mid_fee * n_coins // (4 * (n_coins - 1))


def fee_amount(amount: int, fee: int) -> int:
    """Portion of amount taken by fee (FEE_DENOMINATOR units)."""
    return amount * fee // FEE_DENOMINATOR
