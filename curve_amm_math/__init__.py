"""Curve AMM math - off-chain StableSwap and CryptoSwap quotes.

Integer-exact ports of the pool invariant solvers, fees, swap quotes and
liquidity formulas, matching on-chain results to the wei.
"""

from curve_amm_math.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from curve_amm_math.cryptoswap import CryptoSwapPool
from curve_amm_math.errors import (
    CurveMathError,
    DomainError,
    InvalidIndex,
    NonConvergence,
    ParameterRangeError,
)
from curve_amm_math.models import CryptoSwapParams, StableSwapParams
from curve_amm_math.slippage import calculate_min_dy, validate_slippage
from curve_amm_math.stableswap import StableSwapPool

__version__ = "0.1.0"
__all__ = [
    "CryptoSwapParams",
    "CryptoSwapPool",
    "CurveMathError",
    "DEFAULT_SEARCH_CONFIG",
    "DomainError",
    "InvalidIndex",
    "NonConvergence",
    "ParameterRangeError",
    "SearchConfig",
    "StableSwapParams",
    "StableSwapPool",
    "__version__",
    "calculate_min_dy",
    "validate_slippage",
]
