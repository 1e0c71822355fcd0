"""StableSwap (pegged-asset) pool math.

Supports 2-8 coin pools. Functions in math, fees, quotes and liquidity work
on 18-decimal normalized balances with Ann = A * A_PRECISION * N; the exact
module works on native balances plus the pool's rate vector.
"""

from . import exact
from .fees import dynamic_fee, token_fee
from .liquidity import calc_token_amount, calc_withdraw_one_coin
from .math import compute_ann, get_d, get_y, get_y_d
from .pool import StableSwapPool
from .quotes import find_peg_point, get_dx, get_dy

__all__ = [
    # Solvers
    "compute_ann",
    "get_d",
    "get_y",
    "get_y_d",
    # Fees
    "dynamic_fee",
    "token_fee",
    # Quotes
    "get_dy",
    "get_dx",
    "find_peg_point",
    # Liquidity
    "calc_token_amount",
    "calc_withdraw_one_coin",
    # Exact-precision adapter
    "exact",
    # Facade
    "StableSwapPool",
]
