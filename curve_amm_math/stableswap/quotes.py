"""StableSwap swap quotes on 18-decimal normalized balances.

get_dy matches CurveStableSwapNGViews.get_dy. get_dx inverts it
algebraically with the fee estimated at pre-trade balances, so it is an
approximation of the view's inverse (within about 1%), not an exact one.
"""

from collections.abc import Sequence

import structlog

from curve_amm_math.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from curve_amm_math.constants import FEE_DENOMINATOR
from curve_amm_math.errors import ParameterRangeError
from curve_amm_math.safe_int import S
from curve_amm_math.search import find_peg_point as _bisect_peg_point
from curve_amm_math.validation import check_amount, check_pair

from .fees import dynamic_fee
from .math import get_d, get_y

logger = structlog.get_logger()


def get_dy(
    i: int,
    j: int,
    dx: int,
    xp: Sequence[int],
    ann: int,
    base_fee: int,
    fee_multiplier: int,
) -> int:
    """Output of coin j for dx of coin i, after fees.

    Algorithm:
        1. D from the pre-trade balances
        2. y = get_y(i, j, xp[i] + dx, xp, Ann, D)
        3. dy = xp[j] - y - 1 (1 wei rounding protection)
        4. Fee at the average of pre- and post-trade balances

    Args:
        i: Input coin index
        j: Output coin index
        dx: Input amount (normalized)
        xp: Pool balances (normalized)
        ann: A * A_PRECISION * N_COINS
        base_fee: Pool fee, in FEE_DENOMINATOR units
        fee_multiplier: Off-peg fee multiplier, in FEE_DENOMINATOR units

    Returns:
        Output amount, never negative
    """
    check_pair(i, j, len(xp))
    check_amount(dx, "dx")
    if dx == 0:
        return 0

    x = xp[i] + dx
    d = get_d(xp, ann)
    y = get_y(i, j, x, xp, ann, d)
    dy = S(xp[j]).saturating_sub(y).saturating_sub(1)

    fee = dynamic_fee((xp[i] + x) // 2, (xp[j] + y) // 2, base_fee, fee_multiplier)
    fee_amount = dy * fee // FEE_DENOMINATOR

    return (dy - fee_amount).value


def get_dx(
    i: int,
    j: int,
    dy: int,
    xp: Sequence[int],
    ann: int,
    base_fee: int,
    fee_multiplier: int,
) -> int:
    """Input of coin i needed to receive dy of coin j.

    Grosses dy up by the fee at the current balances, then solves the
    invariant with the roles of i and j swapped.

    Args:
        i: Input coin index
        j: Output coin index
        dy: Desired output amount (normalized)
        xp: Pool balances (normalized)
        ann: A * A_PRECISION * N_COINS
        base_fee: Pool fee, in FEE_DENOMINATOR units
        fee_multiplier: Off-peg fee multiplier, in FEE_DENOMINATOR units

    Returns:
        Required input amount; 0 if dy is 0 or the pool cannot pay it
    """
    check_pair(i, j, len(xp))
    check_amount(dy, "dy")
    if dy == 0:
        return 0
    if dy >= xp[j]:
        logger.debug("stableswap_get_dx_exceeds_balance", j=j, dy=dy, balance=xp[j])
        return 0

    d = get_d(xp, ann)

    fee = dynamic_fee(xp[i], xp[j], base_fee, fee_multiplier)
    if fee >= FEE_DENOMINATOR:
        raise ParameterRangeError(f"Dynamic fee {fee} leaves nothing to trade")
    dy_with_fee = S(dy) * FEE_DENOMINATOR // (FEE_DENOMINATOR - fee)

    if dy_with_fee >= xp[j]:
        logger.debug(
            "stableswap_get_dx_exceeds_balance",
            j=j,
            dy_with_fee=dy_with_fee.value,
            balance=xp[j],
        )
        return 0
    new_y = S(xp[j]) - dy_with_fee

    x = get_y(j, i, new_y.value, xp, ann, d)
    return (S(x) + 1).saturating_sub(xp[i]).value


def find_peg_point(
    i: int,
    j: int,
    xp: Sequence[int],
    ann: int,
    base_fee: int,
    fee_multiplier: int,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> int:
    """Largest input of coin i that still returns at least as much coin j.

    Only a pool holding more j than i pays a rebalancing bonus, so the search
    runs over [0, xp[j] - xp[i]].

    Returns:
        Input amount at the peg point (within config.peg_precision); 0 if no
        input trades at or above 1:1
    """
    check_pair(i, j, len(xp))
    if xp[i] >= xp[j]:
        return 0

    return _bisect_peg_point(
        lambda dx: get_dy(i, j, dx, xp, ann, base_fee, fee_multiplier),
        0,
        xp[j] - xp[i],
        config.peg_precision,
    )
