"""Tests for SafeInt unsigned arithmetic wrapper."""

import pytest

from curve_amm_math.errors import CurveMathError, DomainError
from curve_amm_math.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_large(self):
        """SafeInt holds values beyond uint256 until converted."""
        assert SafeInt(10**90).value == 10**90

    def test_from_invalid_type_raises(self):
        """SafeInt rejects str, float and bool."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt

    def test_zero_constructor(self):
        """SafeInt.zero() creates zero value."""
        assert SafeInt.zero().value == 0


class TestSafeIntArithmetic:
    """Tests for arithmetic operators."""

    def test_add(self):
        """Addition works with SafeInt and int on either side."""
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_sub(self):
        """Subtraction to a non-negative result succeeds."""
        assert (S(10) - 3).value == 7
        assert (S(10) - 10).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            S(3) - 10
        with pytest.raises(Underflow):
            3 - S(10)

    def test_mul(self):
        """Multiplication works with SafeInt and int."""
        assert (S(6) * 7).value == 42
        assert (7 * S(6)).value == 42

    def test_pow(self):
        """Exponentiation by an int."""
        assert (S(3) ** 3).value == 27

    def test_floordiv_truncates(self):
        """Floor division truncates."""
        assert (S(10) // 3).value == 3

    def test_floordiv_by_zero_raises(self):
        """Division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            S(10) // 0
        with pytest.raises(DivisionByZero):
            10 // S(0)

    def test_left_to_right_evaluation(self):
        """a * b // c // d is evaluated left to right, as on-chain."""
        assert (S(7) * 10 // 3 // 2).value == (7 * 10 // 3) // 2
        assert (S(10) // 3 * 3).value == 9


class TestSafeIntComparison:
    """Tests for comparison operators."""

    def test_eq(self):
        """Equality with SafeInt and int."""
        assert S(5) == S(5)
        assert S(5) == 5
        assert S(5) != 6

    def test_ordering(self):
        """Ordering against SafeInt and int."""
        assert S(5) < 6
        assert S(5) <= S(5)
        assert S(6) > 5
        assert S(6) >= S(6)

    def test_hash_matches_int(self):
        """SafeInt hashes like its value."""
        assert hash(S(42)) == hash(42)


class TestSafeIntConversion:
    """Tests for conversion to builtins."""

    def test_int_and_index(self):
        """int() and range() accept SafeInt."""
        assert int(S(42)) == 42
        assert list(range(S(3))) == [0, 1, 2]

    def test_bool(self):
        """Zero is falsy, non-zero truthy."""
        assert not S(0)
        assert S(1)

    def test_str_and_repr(self):
        """str gives the digits, repr names the class."""
        assert str(S(42)) == "42"
        assert repr(S(42)) == "SafeInt(42)"


class TestSafeIntNamedOps:
    """Tests for named operations."""

    def test_abs_diff(self):
        """abs_diff is symmetric."""
        assert S(3).abs_diff(10).value == 7
        assert S(10).abs_diff(S(3)).value == 7

    def test_max(self):
        """max returns the larger value."""
        assert S(3).max(10).value == 10
        assert S(10).max(3).value == 10

    def test_saturating_sub(self):
        """saturating_sub clamps at zero."""
        assert S(10).saturating_sub(3).value == 7
        assert S(3).saturating_sub(10).value == 0


class TestSafeIntExceptionHierarchy:
    """SafeInt errors belong to the package taxonomy."""

    @pytest.mark.parametrize("error", [DivisionByZero, Underflow])
    def test_errors_are_domain_errors(self, error):
        """Every SafeInt error is a SafeIntError, DomainError and CurveMathError."""
        assert issubclass(error, SafeIntError)
        assert issubclass(error, DomainError)
        assert issubclass(error, CurveMathError)

    def test_catch_as_arithmetic_error(self):
        """A SafeInt error can be caught as ArithmeticError."""
        with pytest.raises(ArithmeticError):
            S(1) - 2
