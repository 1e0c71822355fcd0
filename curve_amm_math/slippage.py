"""Slippage helpers for building min_dy arguments."""

from curve_amm_math.errors import ParameterRangeError

BPS_DENOMINATOR = 10_000

# Accepted slippage range in basis points (0.1% - 50%)
MIN_SLIPPAGE_BPS = 10
MAX_SLIPPAGE_BPS = 5_000
DEFAULT_SLIPPAGE_BPS = "100"


def calculate_min_dy(expected_output: int, slippage_bps: int) -> str:
    """Minimum acceptable output for a quote, as a decimal string.

    Args:
        expected_output: Quote from get_dy
        slippage_bps: Tolerated slippage in basis points (100 = 1%)
    """
    min_dy = expected_output * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR
    return str(min_dy)


def validate_slippage(slippage: str | None) -> int:
    """Parse a slippage string in basis points, defaulting to 1%.

    Raises:
        ParameterRangeError: If the value is not an integer in [10, 5000]
    """
    raw = DEFAULT_SLIPPAGE_BPS if slippage is None else slippage
    try:
        bps = int(raw, 10)
    except ValueError as err:
        raise ParameterRangeError(f"Invalid slippage: {slippage}") from err

    if bps < MIN_SLIPPAGE_BPS or bps > MAX_SLIPPAGE_BPS:
        raise ParameterRangeError(
            f"Invalid slippage: {slippage}. Must be {MIN_SLIPPAGE_BPS}-{MAX_SLIPPAGE_BPS} bps"
        )
    return bps
