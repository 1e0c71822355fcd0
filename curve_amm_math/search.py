"""Monotone search strategies over a forward quote.

CryptoSwap has no closed-form inverse of get_dy, so reverse quotes bisect on
the input amount. Both strategies take the forward quote as a callable and
assume it is non-decreasing in its argument.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from curve_amm_math.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from curve_amm_math.errors import DomainError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = structlog.get_logger()


def find_min_input(
    get_amount_out: Callable[[int], int],
    target_out: int,
    upper_bound: int,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> int:
    """Find an input whose forward quote yields at least target_out.

    Bisects [0, upper_bound]. Stops when the bracket is at most 1 wide, when
    an output lands within target_out / tolerance_denominator above the
    target, or after max_iterations steps. Always resolves to the high end of
    the bracket, so the returned input over-estimates rather than falls short.

    Args:
        get_amount_out: Forward quote, input amount -> output amount
        target_out: Required output
        upper_bound: Initial high end of the bracket
        config: Search configuration

    Returns:
        Input amount satisfying get_amount_out(result) >= target_out

    Raises:
        DomainError: If even upper_bound cannot produce target_out
    """
    if target_out == 0:
        return 0

    if get_amount_out(upper_bound) < target_out:
        raise DomainError(
            f"Output {target_out} unreachable with input up to {upper_bound}"
        )

    tolerance = target_out // config.tolerance_denominator
    low = 0
    high = upper_bound
    iterations = 0

    for iterations in range(1, config.max_iterations + 1):
        if high - low <= 1:
            break
        mid = (low + high) // 2
        out = get_amount_out(mid)
        if out >= target_out:
            high = mid
            if out - target_out <= tolerance:
                break
        else:
            low = mid

    logger.debug(
        "find_min_input_done",
        target_out=target_out,
        amount_in=high,
        iterations=iterations,
    )
    return high


def find_peg_point(
    get_amount_out: Callable[[int], int],
    low: int,
    high: int,
    precision: int,
) -> int:
    """Largest input in [low, high] (to within precision) whose output is >= the input.

    The caller guarantees the rate at low is at least 1:1.

    Args:
        get_amount_out: Forward quote, input amount -> output amount
        low: Input known to trade at >= 1:1
        high: Upper bound on the search
        precision: Stop once the bracket is at most this wide

    Returns:
        The low end of the final bracket
    """
    while high - low > precision:
        mid = (low + high) // 2
        if get_amount_out(mid) >= mid:
            low = mid
        else:
            high = mid
    return low
