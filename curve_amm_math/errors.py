"""Curve math error classes.

Every error raised by the package derives from CurveMathError. The concrete
classes also derive from the matching builtin (ArithmeticError, IndexError,
ValueError) so callers can catch them either way.
"""


class CurveMathError(Exception):
    """Base error for Curve math operations."""

    pass


class DomainError(CurveMathError, ArithmeticError):
    """A balance or amount makes a ratio or product undefined.

    Raised for a zero balance among non-zero ones, a zero LP supply where a
    share is computed, or a request larger than the pool can serve.
    """

    pass


class InvalidIndex(CurveMathError, IndexError):
    """Coin index out of range, or input and output index are equal."""

    pass


class ParameterRangeError(CurveMathError, ValueError):
    """Amplification, gamma, fee or rate parameter outside its valid range."""

    pass


class NonConvergence(CurveMathError, RuntimeWarning):
    """A Newton iteration exhausted its iteration cap.

    Issued through warnings.warn, never raised by the solvers themselves: the
    last iterate is still returned. Use
    ``warnings.simplefilter("error", NonConvergence)`` to turn it into an
    exception.
    """

    pass
