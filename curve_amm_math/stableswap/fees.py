"""StableSwap dynamic (off-peg) fee."""

from curve_amm_math.constants import FEE_DENOMINATOR
from curve_amm_math.safe_int import S
from curve_amm_math.validation import check_fee


def dynamic_fee(xpi: int, xpj: int, base_fee: int, fee_multiplier: int) -> int:
    """Fee for a trade between two coins, raised as the pair drifts off peg.

    fee = multiplier * base / ((multiplier - 1) * 4 * xpi * xpj / (xpi + xpj)^2 + 1)

    with all ratios in FEE_DENOMINATOR units. A balanced pair pays base_fee;
    the fee approaches multiplier * base_fee as one side drains. Quotes pass
    the average of pre- and post-trade balances, as the pool's views do.

    Args:
        xpi: Balance of the first coin (normalized)
        xpj: Balance of the second coin (normalized)
        base_fee: Pool fee, in FEE_DENOMINATOR units
        fee_multiplier: Off-peg fee multiplier, in FEE_DENOMINATOR units

    Returns:
        Fee in FEE_DENOMINATOR units

    Raises:
        ParameterRangeError: If base_fee is outside [0, FEE_DENOMINATOR)
        DomainError: If both balances are zero and the multiplier is active
    """
    check_fee(base_fee, "base_fee")
    if fee_multiplier <= FEE_DENOMINATOR:
        return base_fee

    xps2 = (S(xpi) + xpj) ** 2
    fee = (
        S(fee_multiplier)
        * base_fee
        // ((S(fee_multiplier) - FEE_DENOMINATOR) * 4 * xpi * xpj // xps2 + FEE_DENOMINATOR)
    )
    return fee.value


def token_fee(base_fee: int, n_coins: int) -> int:
    """Per-coin imbalance fee for liquidity operations: fee * N / (4 * (N - 1))."""
    return base_fee * n_coins // (4 * (n_coins - 1))
