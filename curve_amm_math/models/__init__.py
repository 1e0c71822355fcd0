"""Pydantic models for pool parameter snapshots."""

from curve_amm_math.models.pools import CryptoSwapParams, StableSwapParams
from curve_amm_math.models.types import Uint256, validate_uint256

__all__ = [
    "CryptoSwapParams",
    "StableSwapParams",
    "Uint256",
    "validate_uint256",
]
