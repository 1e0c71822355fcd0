"""Pytest configuration and fixtures."""

import pytest

from curve_amm_math.models import CryptoSwapParams, StableSwapParams
from tests.helpers.constants import (
    CRYPTO2_A,
    CRYPTO2_FEE_GAMMA,
    CRYPTO2_GAMMA,
    CRYPTO2_MID_FEE,
    CRYPTO2_OUT_FEE,
    ONE,
    RATE_6,
    RATE_18,
    STABLE_A,
    STABLE_FEE,
    STABLE_OFFPEG_MULTIPLIER,
    TRICRYPTO_A,
    TRICRYPTO_FEE_GAMMA,
    TRICRYPTO_GAMMA,
    TRICRYPTO_MID_FEE,
    TRICRYPTO_OUT_FEE,
    TRICRYPTO_PRECISIONS,
    TRICRYPTO_PRICE_SCALE,
)


@pytest.fixture
def balanced_xp() -> list[int]:
    """Two normalized balances of 1000 tokens each."""
    return [1000 * ONE, 1000 * ONE]


@pytest.fixture
def stable_ann() -> int:
    """Ann for A=100 in a 2-coin pool."""
    return STABLE_A * 100 * 2


@pytest.fixture
def stable_params() -> StableSwapParams:
    """Balanced 2-coin StableSwap snapshot on normalized balances."""
    return StableSwapParams(
        balances=(1000 * ONE, 1000 * ONE),
        A=STABLE_A,
        fee=STABLE_FEE,
        offpeg_fee_multiplier=STABLE_OFFPEG_MULTIPLIER,
        total_supply=2000 * ONE,
    )


@pytest.fixture
def stable_exact_params() -> StableSwapParams:
    """Balanced USDC/DAI StableSwap snapshot on native balances."""
    return StableSwapParams(
        balances=(1000 * 10**6, 1000 * ONE),
        A=STABLE_A,
        fee=STABLE_FEE,
        offpeg_fee_multiplier=STABLE_OFFPEG_MULTIPLIER,
        total_supply=2000 * ONE,
        rates=(RATE_6, RATE_18),
    )


@pytest.fixture
def crypto2_params() -> CryptoSwapParams:
    """Balanced 2-coin CryptoSwap snapshot at a 1:1 price scale."""
    return CryptoSwapParams(
        balances=(1000 * ONE, 1000 * ONE),
        A=CRYPTO2_A,
        gamma=CRYPTO2_GAMMA,
        mid_fee=CRYPTO2_MID_FEE,
        out_fee=CRYPTO2_OUT_FEE,
        fee_gamma=CRYPTO2_FEE_GAMMA,
        price_scale=(ONE,),
        total_supply=1000 * ONE,
    )


@pytest.fixture
def tricrypto_params() -> CryptoSwapParams:
    """Balanced USDC/WBTC/WETH snapshot: $3M per coin."""
    return CryptoSwapParams(
        balances=(3_000_000 * 10**6, 100 * 10**8, 1500 * ONE),
        A=TRICRYPTO_A,
        gamma=TRICRYPTO_GAMMA,
        mid_fee=TRICRYPTO_MID_FEE,
        out_fee=TRICRYPTO_OUT_FEE,
        fee_gamma=TRICRYPTO_FEE_GAMMA,
        price_scale=TRICRYPTO_PRICE_SCALE,
        precisions=TRICRYPTO_PRECISIONS,
        total_supply=1000 * ONE,
    )
