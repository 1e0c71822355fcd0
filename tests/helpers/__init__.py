"""Test helpers module for shared test utilities.

- constants: Pool parameters and amounts shared across test modules
"""

from tests.helpers.constants import (
    CRYPTO2_A,
    CRYPTO2_FEE_GAMMA,
    CRYPTO2_GAMMA,
    CRYPTO2_MID_FEE,
    CRYPTO2_OUT_FEE,
    ONE,
    STABLE_A,
    STABLE_FEE,
    STABLE_OFFPEG_MULTIPLIER,
    TRICRYPTO_A,
    TRICRYPTO_GAMMA,
)

__all__ = [
    "ONE",
    "STABLE_A",
    "STABLE_FEE",
    "STABLE_OFFPEG_MULTIPLIER",
    "CRYPTO2_A",
    "CRYPTO2_GAMMA",
    "CRYPTO2_MID_FEE",
    "CRYPTO2_OUT_FEE",
    "CRYPTO2_FEE_GAMMA",
    "TRICRYPTO_A",
    "TRICRYPTO_GAMMA",
]
