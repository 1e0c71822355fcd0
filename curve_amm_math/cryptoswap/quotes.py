"""CryptoSwap swap quotes.

Quotes take a CryptoSwapParams snapshot with native-decimal balances.
Balances are scaled into the pool's internal unit (18 decimals, priced in
coin 0) before solving, and results are scaled back to the output coin's
native decimals.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from curve_amm_math.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from curve_amm_math.constants import PRECISION
from curve_amm_math.models.pools import CryptoSwapParams
from curve_amm_math.safe_int import S
from curve_amm_math.search import find_min_input
from curve_amm_math.search import find_peg_point as _bisect_peg_point
from curve_amm_math.validation import check_amount, check_balances, check_pair

from .fees import dynamic_fee, fee_amount
from .math import newton_d, newton_y

logger = structlog.get_logger()


def default_precisions(n_coins: int) -> list[int]:
    """Precisions for a pool of 18-decimal tokens."""
    return [1] * n_coins


def scale_balances(
    balances: Sequence[int],
    precisions: Sequence[int],
    price_scale: Sequence[int],
) -> list[int]:
    """Native balances to the pool's internal unit.

    xp[0] = balances[0] * precisions[0]
    xp[k] = balances[k] * precisions[k] * price_scale[k - 1] / PRECISION
    """
    check_balances(balances)
    xp = [balances[0] * precisions[0]]
    for k in range(1, len(balances)):
        xp.append(balances[k] * precisions[k] * price_scale[k - 1] // PRECISION)
    return xp


def pool_d(params: CryptoSwapParams) -> int:
    """The stored invariant, or newton_D of the current scaled balances."""
    if params.d is not None:
        return params.d
    xp = scale_balances(params.balances, params.coin_precisions, params.price_scale)
    return newton_d(params.a, params.gamma, xp)


def get_dy(params: CryptoSwapParams, i: int, j: int, dx: int) -> int:
    """Output of coin j for dx of coin i, after fees, in native decimals.

    Algorithm:
        1. Add dx to balance i and scale the balances
        2. y = newton_y(A, gamma, xp, D, j) with D from before the trade
        3. dy = xp[j] - y - 1, unscaled to coin j
        4. Fee from the post-trade balances (xp[j] = y)

    Returns:
        Output amount, never negative
    """
    n = params.n_coins
    check_pair(i, j, n)
    check_amount(dx, "dx")
    if dx == 0:
        return 0

    precisions = params.coin_precisions
    balances = list(params.balances)
    balances[i] += dx

    xp = scale_balances(balances, precisions, params.price_scale)
    d = pool_d(params)

    y = newton_y(params.a, params.gamma, xp, d, j)
    dy = S(xp[j]).saturating_sub(y).saturating_sub(1)
    if dy == 0:
        logger.debug("cryptoswap_get_dy_no_output", i=i, j=j, dx=dx)
        return 0

    xp[j] = y
    if j > 0:
        dy = dy * PRECISION // params.price_scale[j - 1]
    dy = dy // precisions[j]

    fee = dynamic_fee(xp, params.fee_gamma, params.mid_fee, params.out_fee)
    return (dy - fee_amount(dy.value, fee)).value


def get_dx(
    params: CryptoSwapParams,
    i: int,
    j: int,
    dy: int,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> int:
    """Input of coin i needed to receive at least dy of coin j.

    Bisects get_dy over [0, balances[i] * upper_bound_multiplier]. The
    result never undershoots: get_dy(result) >= dy.

    Returns:
        Required input in coin i's native decimals; 0 if dy is 0 or at
        least the pool's whole balance of j

    Raises:
        DomainError: If no input up to the search bound produces dy
    """
    check_pair(i, j, params.n_coins)
    check_amount(dy, "dy")
    if dy == 0:
        return 0
    if dy >= params.balances[j]:
        logger.debug("cryptoswap_get_dx_exceeds_balance", j=j, dy=dy, balance=params.balances[j])
        return 0

    upper_bound = params.balances[i] * config.upper_bound_multiplier
    dx = find_min_input(lambda amount: get_dy(params, i, j, amount), dy, upper_bound, config)
    logger.debug("cryptoswap_get_dx_search_done", i=i, j=j, dy=dy, dx=dx)
    return dx


def find_peg_point(
    params: CryptoSwapParams,
    i: int,
    j: int,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> int:
    """Largest input of coin i that still returns at least as much coin j.

    Meaningful between coins trading near 1:1. Searches from one whole
    token up to the sum of all balances.

    Returns:
        Input amount at the peg point (within config.peg_precision); 0 if
        one token in already returns less than one token out
    """
    check_pair(i, j, params.n_coins)
    one_token = PRECISION
    if get_dy(params, i, j, one_token) < one_token:
        return 0

    return _bisect_peg_point(
        lambda dx: get_dy(params, i, j, dx),
        one_token,
        sum(params.balances),
        config.peg_precision,
    )
