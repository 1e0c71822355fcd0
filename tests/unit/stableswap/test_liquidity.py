"""Tests for StableSwap deposit and withdrawal quotes."""

import pytest

from curve_amm_math.errors import DomainError
from curve_amm_math.stableswap import calc_token_amount, calc_withdraw_one_coin
from tests.helpers.constants import ONE, STABLE_FEE

SUPPLY = 2000 * ONE


class TestCalcTokenAmount:
    """Tests for calc_token_amount."""

    def test_balanced_deposit_pays_no_fee(self, balanced_xp, stable_ann):
        """A proportional deposit mints exactly its share."""
        minted = calc_token_amount(
            [10 * ONE, 10 * ONE], True, balanced_xp, stable_ann, SUPPLY, STABLE_FEE
        )
        assert minted == 20 * ONE

    def test_balanced_withdrawal(self, balanced_xp, stable_ann):
        """A proportional withdrawal burns exactly its share."""
        burned = calc_token_amount(
            [10 * ONE, 10 * ONE], False, balanced_xp, stable_ann, SUPPLY, STABLE_FEE
        )
        assert burned == 20 * ONE

    def test_single_sided_deposit_pays_fee(self, balanced_xp, stable_ann):
        """A one-coin deposit mints slightly less than its value."""
        minted = calc_token_amount(
            [10 * ONE, 0], True, balanced_xp, stable_ann, SUPPLY, STABLE_FEE
        )
        assert minted == 9_997_753_700_465_021_081

    def test_first_deposit_mints_d(self, balanced_xp, stable_ann):
        """With no supply the deposit mints D of the new balances."""
        minted = calc_token_amount([10 * ONE, 10 * ONE], True, balanced_xp, stable_ann, 0, STABLE_FEE)
        assert minted == 2020 * ONE

    def test_first_deposit_into_empty_pool(self, stable_ann):
        """Seeding an empty pool mints the invariant of the seed."""
        minted = calc_token_amount([ONE, ONE], True, [0, 0], stable_ann, 0, STABLE_FEE)
        assert minted == 2 * ONE

    def test_withdraw_more_than_balance_raises(self, balanced_xp, stable_ann):
        """Removing more than the pool holds is a domain error."""
        with pytest.raises(DomainError):
            calc_token_amount([2000 * ONE, 0], False, balanced_xp, stable_ann, SUPPLY, STABLE_FEE)


class TestCalcWithdrawOneCoin:
    """Tests for calc_withdraw_one_coin."""

    def test_withdraw_ten_lp(self, balanced_xp, stable_ann):
        """Burning 10 LP of 2000 returns just under 10 tokens of one coin."""
        dy, fee = calc_withdraw_one_coin(10 * ONE, 0, balanced_xp, stable_ann, SUPPLY, STABLE_FEE)
        assert dy == 9_997_751_386_871_226_536
        assert fee == 1_999_850_752_537_373

    def test_output_plus_fee_close_to_share(self, balanced_xp, stable_ann):
        """Output plus fee is close to the burned share of D."""
        dy, fee = calc_withdraw_one_coin(10 * ONE, 1, balanced_xp, stable_ann, SUPPLY, STABLE_FEE)
        assert abs(dy + fee - 10 * ONE) < ONE // 1000

    def test_zero_supply_raises(self, balanced_xp, stable_ann):
        """A pool with no LP supply cannot be withdrawn from."""
        with pytest.raises(DomainError):
            calc_withdraw_one_coin(ONE, 0, balanced_xp, stable_ann, 0, STABLE_FEE)

    def test_more_than_supply_raises(self, balanced_xp, stable_ann):
        """Burning more than the supply is a domain error."""
        with pytest.raises(DomainError):
            calc_withdraw_one_coin(SUPPLY + 1, 0, balanced_xp, stable_ann, SUPPLY, STABLE_FEE)
