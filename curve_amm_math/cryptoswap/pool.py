"""CryptoSwap pool facade."""

from __future__ import annotations

from collections.abc import Sequence

from curve_amm_math.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from curve_amm_math.models.pools import CryptoSwapParams

from . import liquidity, quotes


class CryptoSwapPool:
    """Quotes for one CryptoSwap pool snapshot (2 or 3 coins).

    Attributes:
        params: The validated snapshot
        config: Search configuration for reverse quotes and peg points
    """

    def __init__(
        self,
        params: CryptoSwapParams,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ) -> None:
        self.params = params
        self.config = config

    @classmethod
    def from_dict(cls, data: dict, config: SearchConfig = DEFAULT_SEARCH_CONFIG) -> CryptoSwapPool:
        """Build a pool from a raw snapshot (ints or decimal strings)."""
        return cls(CryptoSwapParams.model_validate(data), config)

    def __repr__(self) -> str:
        return (
            f"CryptoSwapPool(n_coins={self.n_coins}, A={self.params.a}, "
            f"gamma={self.params.gamma})"
        )

    @property
    def n_coins(self) -> int:
        return self.params.n_coins

    @property
    def xp(self) -> list[int]:
        """Balances in the pool's internal unit."""
        return quotes.scale_balances(
            self.params.balances, self.params.coin_precisions, self.params.price_scale
        )

    def get_d(self) -> int:
        return quotes.pool_d(self.params)

    def get_dy(self, i: int, j: int, dx: int) -> int:
        return quotes.get_dy(self.params, i, j, dx)

    def get_dx(self, i: int, j: int, dy: int) -> int:
        return quotes.get_dx(self.params, i, j, dy, self.config)

    def calc_token_amount(self, amounts: Sequence[int], is_deposit: bool) -> int:
        return liquidity.calc_token_amount(self.params, amounts, is_deposit)

    def calc_withdraw_one_coin(self, token_amount: int, i: int) -> tuple[int, int]:
        return liquidity.calc_withdraw_one_coin(self.params, token_amount, i)

    def find_peg_point(self, i: int, j: int) -> int:
        return quotes.find_peg_point(self.params, i, j, self.config)
