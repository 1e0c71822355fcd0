"""Tests for the CryptoSwap invariant and balance solvers."""

import pytest

import curve_amm_math.cryptoswap.math as crypto_math
from curve_amm_math.cryptoswap import geometric_mean, newton_d, newton_y
from curve_amm_math.errors import DomainError, InvalidIndex, NonConvergence, ParameterRangeError
from tests.helpers.constants import (
    CRYPTO2_A,
    CRYPTO2_GAMMA,
    ONE,
    TRICRYPTO_A,
    TRICRYPTO_GAMMA,
)


class TestGeometricMean:
    """Tests for geometric_mean."""

    def test_equal_balances(self):
        """The mean of equal values is that value."""
        assert geometric_mean([1000 * ONE, 1000 * ONE]) == 1000 * ONE
        assert geometric_mean([3 * ONE, 3 * ONE, 3 * ONE]) == 3 * ONE

    def test_two_coins(self):
        """sqrt(4 * 1) = 2."""
        assert geometric_mean([4 * ONE, ONE]) == 2 * ONE

    def test_three_coins_truncates(self):
        """cbrt(8 * 4 * 2) = 4, within 1 wei of truncation."""
        assert geometric_mean([8 * ONE, 4 * ONE, 2 * ONE]) == 4 * ONE - 1


class TestNewtonD:
    """Tests for newton_d."""

    def test_balanced_two_coins(self):
        """A balanced pool has D equal to the sum of balances."""
        assert newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [1000 * ONE, 1000 * ONE]) == 2000 * ONE

    def test_balanced_three_coins(self):
        """A balanced 3-coin pool has D equal to the sum of balances."""
        xp = [3_000_000 * ONE] * 3
        assert newton_d(TRICRYPTO_A, TRICRYPTO_GAMMA, xp) == 9_000_000 * ONE

    def test_imbalanced(self):
        """Imbalance lowers D below the sum, above the constant-product value."""
        d = newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [800 * ONE, 1200 * ONE])
        assert d == 1_961_984_378_433_645_970_351

    def test_order_independent(self):
        """Balances are sorted before solving."""
        assert newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [800 * ONE, 1200 * ONE]) == newton_d(
            CRYPTO2_A, CRYPTO2_GAMMA, [1200 * ONE, 800 * ONE]
        )

    def test_empty_pool(self):
        """An empty pool has D = 0."""
        assert newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [0, 0]) == 0

    def test_partial_zero_raises(self):
        """One empty side is a domain error."""
        with pytest.raises(DomainError):
            newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [1000 * ONE, 0])

    def test_a_out_of_range_raises(self):
        """A below the safe minimum is rejected."""
        with pytest.raises(ParameterRangeError):
            newton_d(1, CRYPTO2_GAMMA, [ONE, ONE])

    def test_gamma_out_of_range_raises(self):
        """gamma = 0 and gamma above the maximum are rejected."""
        with pytest.raises(ParameterRangeError):
            newton_d(CRYPTO2_A, 0, [ONE, ONE])
        with pytest.raises(ParameterRangeError):
            newton_d(CRYPTO2_A, 10**18, [ONE, ONE])

    def test_four_coins_raises(self):
        """Only 2- and 3-coin pools are supported."""
        with pytest.raises(ParameterRangeError):
            newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [ONE] * 4)

    def test_non_convergence_warns(self, monkeypatch):
        """Hitting the iteration cap warns and returns the last iterate."""
        monkeypatch.setattr(crypto_math, "MAX_ITERATIONS", 1)
        with pytest.warns(NonConvergence):
            d = newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [800 * ONE, 1200 * ONE])
        assert d > 0


class TestNewtonY:
    """Tests for newton_y."""

    def test_scenario_b_converges_and_preserves_invariant(self):
        """After a 10-token trade y converges and reproduces D within 1e-14 relative."""
        d = newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [1000 * ONE, 1000 * ONE])
        y = newton_y(CRYPTO2_A, CRYPTO2_GAMMA, [1010 * ONE, 1000 * ONE], d, 1)
        assert y == 990_011_459_164_321_137_220

        d_back = newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [1010 * ONE, y])
        assert abs(d_back - d) * 10**14 < d

    def test_solve_for_first_coin(self):
        """Solving coin 0 of a balanced pool returns its balance within tolerance."""
        d = 2000 * ONE
        y = newton_y(CRYPTO2_A, CRYPTO2_GAMMA, [0, 1000 * ONE], d, 0)
        assert abs(y - 1000 * ONE) * 10**14 < 1000 * ONE

    def test_three_coins(self):
        """Each coin of a balanced 3-coin pool solves back to its balance."""
        xp = [3_000_000 * ONE] * 3
        d = newton_d(TRICRYPTO_A, TRICRYPTO_GAMMA, xp)
        for i in range(3):
            y = newton_y(TRICRYPTO_A, TRICRYPTO_GAMMA, xp, d, i)
            assert abs(y - xp[i]) * 10**14 < xp[i]

    def test_zero_d_raises(self):
        """D = 0 is a domain error."""
        with pytest.raises(DomainError):
            newton_y(CRYPTO2_A, CRYPTO2_GAMMA, [ONE, ONE], 0, 0)

    def test_zero_other_balance_raises(self):
        """A zero balance on another coin is a domain error."""
        with pytest.raises(DomainError):
            newton_y(CRYPTO2_A, CRYPTO2_GAMMA, [ONE, 0], 2 * ONE, 0)

    def test_index_out_of_range_raises(self):
        """i outside the pool is an invalid index."""
        with pytest.raises(InvalidIndex):
            newton_y(CRYPTO2_A, CRYPTO2_GAMMA, [ONE, ONE], 2 * ONE, 2)

    def test_non_convergence_warns(self, monkeypatch):
        """The balance solver warns at its iteration cap."""
        d = newton_d(CRYPTO2_A, CRYPTO2_GAMMA, [1000 * ONE, 1000 * ONE])
        monkeypatch.setattr(crypto_math, "MAX_ITERATIONS", 1)
        with pytest.warns(NonConvergence):
            newton_y(CRYPTO2_A, CRYPTO2_GAMMA, [1500 * ONE, 1000 * ONE], d, 1)
