"""StableSwap pool facade.

Binds a validated StableSwapParams snapshot to the quote and liquidity
functions. Snapshots with a rate vector are quoted through the exact
adapter on native balances; snapshots without one go through the tolerant
path on normalized balances.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from curve_amm_math.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from curve_amm_math.constants import A_PRECISION
from curve_amm_math.errors import DomainError
from curve_amm_math.models.pools import StableSwapParams
from curve_amm_math.search import find_peg_point
from curve_amm_math.validation import check_pair

from . import exact, liquidity, quotes
from .math import compute_ann, get_d

logger = structlog.get_logger()


class StableSwapPool:
    """Quotes for one StableSwap pool snapshot.

    Attributes:
        params: The validated snapshot
    """

    def __init__(self, params: StableSwapParams) -> None:
        self.params = params

    @classmethod
    def from_dict(cls, data: dict) -> StableSwapPool:
        """Build a pool from a raw snapshot (ints or decimal strings)."""
        return cls(StableSwapParams.model_validate(data))

    def __repr__(self) -> str:
        return f"StableSwapPool(n_coins={self.n_coins}, A={self.params.a}, exact={self.is_exact})"

    @property
    def n_coins(self) -> int:
        return self.params.n_coins

    @property
    def is_exact(self) -> bool:
        """True when quotes use the exact-precision adapter."""
        return self.params.rates is not None

    @property
    def ann(self) -> int:
        return compute_ann(self.params.a, self.n_coins)

    @property
    def amp(self) -> int:
        """A_precise: A * A_PRECISION."""
        return self.params.a * A_PRECISION

    def _total_supply(self) -> int:
        if self.params.total_supply is None:
            raise DomainError("Liquidity quotes need the pool's total_supply")
        return self.params.total_supply

    def get_d(self) -> int:
        """Invariant of the pool, on normalized (or rate-scaled) balances."""
        if self.is_exact:
            return get_d(exact.xp_mem(self.params.rates, self.params.balances), self.ann)
        return get_d(self.params.balances, self.ann)

    def get_dy(self, i: int, j: int, dx: int) -> int:
        """Output of coin j for dx of coin i."""
        p = self.params
        if self.is_exact:
            logger.debug("stableswap_pool_exact_quote", i=i, j=j, dx=dx)
            return exact.get_dy(
                i, j, dx, p.balances, p.rates, self.amp, p.fee, p.offpeg_fee_multiplier
            )
        return quotes.get_dy(i, j, dx, p.balances, self.ann, p.fee, p.offpeg_fee_multiplier)

    def get_dx(self, i: int, j: int, dy: int) -> int:
        """Input of coin i needed to receive dy of coin j."""
        p = self.params
        if self.is_exact:
            return exact.get_dx(
                i, j, dy, p.balances, p.rates, self.amp, p.fee, p.offpeg_fee_multiplier
            )
        return quotes.get_dx(i, j, dy, p.balances, self.ann, p.fee, p.offpeg_fee_multiplier)

    def calc_token_amount(self, amounts: Sequence[int], is_deposit: bool) -> int:
        """LP tokens minted (deposit) or burned (withdrawal) for amounts."""
        p = self.params
        if self.is_exact:
            return exact.calc_token_amount(
                amounts,
                is_deposit,
                p.balances,
                p.rates,
                self.amp,
                self._total_supply(),
                p.fee,
                p.offpeg_fee_multiplier,
            )
        return liquidity.calc_token_amount(
            amounts, is_deposit, p.balances, self.ann, self._total_supply(), p.fee
        )

    def calc_withdraw_one_coin(self, token_amount: int, i: int) -> tuple[int, int]:
        """Coin i received for burning token_amount LP tokens, and the fee charged."""
        p = self.params
        if self.is_exact:
            return exact.calc_withdraw_one_coin(
                token_amount,
                i,
                p.balances,
                p.rates,
                self.amp,
                self._total_supply(),
                p.fee,
                p.offpeg_fee_multiplier,
            )
        return liquidity.calc_withdraw_one_coin(
            token_amount, i, p.balances, self.ann, self._total_supply(), p.fee
        )

    def find_peg_point(
        self,
        i: int,
        j: int,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ) -> int:
        """Largest input of coin i that still returns at least as much coin j.

        For an exact snapshot the comparison is in native units, so it is
        only meaningful between coins with the same decimals and rate.
        """
        p = self.params
        if not self.is_exact:
            return quotes.find_peg_point(
                i, j, p.balances, self.ann, p.fee, p.offpeg_fee_multiplier, config
            )

        check_pair(i, j, self.n_coins)
        if p.balances[i] >= p.balances[j]:
            return 0
        return find_peg_point(
            lambda dx: self.get_dy(i, j, dx),
            0,
            p.balances[j] - p.balances[i],
            config.peg_precision,
        )
