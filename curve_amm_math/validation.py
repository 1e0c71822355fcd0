"""Input checks shared by the StableSwap and CryptoSwap math.

Each check raises at the lowest layer that consumes the value; callers
above never re-validate.
"""

from __future__ import annotations

from collections.abc import Sequence

from curve_amm_math.constants import (
    A_PRECISION,
    CRYPTOSWAP_COIN_COUNTS,
    FEE_DENOMINATOR,
    MAX_GAMMA,
    MIN_GAMMA,
    STABLESWAP_MAX_COINS,
    STABLESWAP_MIN_COINS,
    cryptoswap_max_a,
    cryptoswap_min_a,
)
from curve_amm_math.errors import DomainError, InvalidIndex, ParameterRangeError


def check_index(i: int, n_coins: int, name: str = "i") -> None:
    """Raise InvalidIndex unless 0 <= i < n_coins."""
    if i < 0 or i >= n_coins:
        raise InvalidIndex(f"{name}={i} out of range for {n_coins} coins")


def check_pair(i: int, j: int, n_coins: int) -> None:
    """Raise InvalidIndex unless i and j are distinct coins of the pool."""
    check_index(i, n_coins, "i")
    check_index(j, n_coins, "j")
    if i == j:
        raise InvalidIndex(f"Cannot swap coin {i} with itself")


def check_amount(amount: int, name: str = "amount") -> None:
    """Raise ParameterRangeError for a negative amount."""
    if amount < 0:
        raise ParameterRangeError(f"{name} must be non-negative, got {amount}")


def check_amounts(amounts: Sequence[int], n_coins: int) -> None:
    """Raise ParameterRangeError unless amounts has one non-negative entry per coin."""
    if len(amounts) != n_coins:
        raise ParameterRangeError(f"Expected {n_coins} amounts, got {len(amounts)}")
    for k, amount in enumerate(amounts):
        check_amount(amount, f"amounts[{k}]")


def check_balances(balances: Sequence[int]) -> None:
    """Raise DomainError if any balance is negative."""
    for k, balance in enumerate(balances):
        if balance < 0:
            raise DomainError(f"Balance at index {k} must be non-negative, got {balance}")


def check_stableswap_coins(n_coins: int) -> None:
    if not STABLESWAP_MIN_COINS <= n_coins <= STABLESWAP_MAX_COINS:
        raise ParameterRangeError(
            f"StableSwap pools hold {STABLESWAP_MIN_COINS}-{STABLESWAP_MAX_COINS} coins, "
            f"got {n_coins}"
        )


def check_cryptoswap_coins(n_coins: int) -> None:
    if n_coins not in CRYPTOSWAP_COIN_COUNTS:
        raise ParameterRangeError(f"CryptoSwap pools hold 2 or 3 coins, got {n_coins}")


def check_ann(ann: int) -> None:
    """Ann must keep (Ann - A_PRECISION) non-negative in the D iteration."""
    if ann < A_PRECISION:
        raise ParameterRangeError(f"Ann must be at least {A_PRECISION}, got {ann}")


def check_fee(fee: int, name: str = "fee") -> None:
    """Raise ParameterRangeError unless 0 <= fee < FEE_DENOMINATOR."""
    if fee < 0 or fee >= FEE_DENOMINATOR:
        raise ParameterRangeError(f"{name} must be in [0, {FEE_DENOMINATOR}), got {fee}")


def check_a_gamma(a: int, gamma: int, n_coins: int) -> None:
    """Range checks on the CryptoSwap A and gamma (dev: unsafe values A / gamma)."""
    min_a, max_a = cryptoswap_min_a(n_coins), cryptoswap_max_a(n_coins)
    if a < min_a or a > max_a:
        raise ParameterRangeError(f"A={a} outside safe range [{min_a}, {max_a}]")
    if gamma < MIN_GAMMA or gamma > MAX_GAMMA:
        raise ParameterRangeError(f"gamma={gamma} outside safe range [{MIN_GAMMA}, {MAX_GAMMA}]")


def check_rates(rates: Sequence[int], n_coins: int) -> None:
    """Raise ParameterRangeError unless there is one positive rate per coin."""
    if len(rates) != n_coins:
        raise ParameterRangeError(f"Expected {n_coins} rates, got {len(rates)}")
    for k, rate in enumerate(rates):
        if rate <= 0:
            raise ParameterRangeError(f"rates[{k}] must be positive, got {rate}")
