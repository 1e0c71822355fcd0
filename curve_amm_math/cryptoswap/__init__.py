"""CryptoSwap (volatile-asset, curve v2) pool math for 2 and 3 coins.

Solvers in math work on scaled balances with the on-chain A; quotes and
liquidity take a CryptoSwapParams snapshot with native balances.
"""

from .fees import dynamic_fee, token_fee
from .liquidity import calc_token_amount, calc_withdraw_one_coin
from .math import geometric_mean, newton_d, newton_y
from .pool import CryptoSwapPool
from .quotes import default_precisions, find_peg_point, get_dx, get_dy, pool_d, scale_balances

__all__ = [
    # Solvers
    "geometric_mean",
    "newton_d",
    "newton_y",
    # Fees
    "dynamic_fee",
    "token_fee",
    # Quotes
    "scale_balances",
    "default_precisions",
    "pool_d",
    "get_dy",
    "get_dx",
    "find_peg_point",
    # Liquidity
    "calc_token_amount",
    "calc_withdraw_one_coin",
    # Facade
    "CryptoSwapPool",
]
