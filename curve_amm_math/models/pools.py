"""Pool parameter snapshots.

A snapshot is everything the math needs about one pool at one block. The
retrieval layer that fills it (batched RPC calls) lives outside this
package; these models only validate shape and integer ranges. Formula
ranges (A, gamma, fees) are checked by the math that consumes them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from curve_amm_math.constants import (
    CRYPTOSWAP_COIN_COUNTS,
    STABLESWAP_MAX_COINS,
    STABLESWAP_MIN_COINS,
)

from .types import Uint256


class StableSwapParams(BaseModel):
    """Snapshot of a StableSwap (NG) pool.

    Attributes:
        balances: Per-coin balances. Normalized to 18 decimals when rates is
            None, native decimals otherwise.
        a: Amplification parameter as returned by A() (not A_PRECISION-scaled)
        fee: Base fee in FEE_DENOMINATOR units (4000000 = 0.04%)
        offpeg_fee_multiplier: Off-peg multiplier in FEE_DENOMINATOR units
        total_supply: LP token supply, needed for liquidity quotes
        rates: stored_rates() of the pool. When present, quotes go through
            the exact-precision adapter on native balances.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    balances: tuple[Uint256, ...]
    a: Uint256 = Field(alias="A")
    fee: Uint256
    offpeg_fee_multiplier: Uint256
    total_supply: Uint256 | None = None
    rates: tuple[Uint256, ...] | None = None

    @property
    def n_coins(self) -> int:
        return len(self.balances)

    @model_validator(mode="after")
    def _check_shape(self) -> StableSwapParams:
        if not STABLESWAP_MIN_COINS <= self.n_coins <= STABLESWAP_MAX_COINS:
            raise ValueError(
                f"StableSwap pools hold {STABLESWAP_MIN_COINS}-{STABLESWAP_MAX_COINS} coins, "
                f"got {self.n_coins}"
            )
        if self.rates is not None and len(self.rates) != self.n_coins:
            raise ValueError(f"Expected {self.n_coins} rates, got {len(self.rates)}")
        return self


class CryptoSwapParams(BaseModel):
    """Snapshot of a CryptoSwap pool (Twocrypto-NG or Tricrypto-NG).

    Attributes:
        balances: Per-coin balances in native decimals
        a: On-chain A (already includes N**N and A_MULTIPLIER)
        gamma: Curvature parameter
        d: Stored invariant D; recomputed from balances when None
        mid_fee: Fee at a balanced pool, FEE_DENOMINATOR units
        out_fee: Fee at a fully imbalanced pool, FEE_DENOMINATOR units
        fee_gamma: Fee interpolation parameter
        price_scale: Price of each non-base coin in units of coin 0
            (N - 1 entries, 18 decimals)
        precisions: 10**(18 - decimals) per coin; defaults to all ones
        total_supply: LP token supply, needed for liquidity quotes
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    balances: tuple[Uint256, ...]
    a: Uint256 = Field(alias="A")
    gamma: Uint256
    d: Uint256 | None = Field(default=None, alias="D")
    mid_fee: Uint256
    out_fee: Uint256
    fee_gamma: Uint256
    price_scale: tuple[Uint256, ...]
    precisions: tuple[Uint256, ...] | None = None
    total_supply: Uint256 | None = None

    @property
    def n_coins(self) -> int:
        return len(self.balances)

    @property
    def coin_precisions(self) -> tuple[int, ...]:
        """Precisions, defaulting to 1 for every coin (18-decimal tokens)."""
        if self.precisions is None:
            return (1,) * self.n_coins
        return self.precisions

    @model_validator(mode="after")
    def _check_shape(self) -> CryptoSwapParams:
        if self.n_coins not in CRYPTOSWAP_COIN_COUNTS:
            raise ValueError(f"CryptoSwap pools hold 2 or 3 coins, got {self.n_coins}")
        if len(self.price_scale) != self.n_coins - 1:
            raise ValueError(
                f"Expected {self.n_coins - 1} price_scale entries, got {len(self.price_scale)}"
            )
        if self.precisions is not None and len(self.precisions) != self.n_coins:
            raise ValueError(f"Expected {self.n_coins} precisions, got {len(self.precisions)}")
        return self
