"""Router error classes.

Arithmetic failures derive from ArithmeticError so callers that only care
about numeric problems can catch them without importing this module.
"""


class RouterError(Exception):
    """Base error for routing operations."""

    pass


class DecimalMathError(RouterError, ArithmeticError):
    """Base class for checked decimal arithmetic errors."""

    pass


class Overflow(DecimalMathError):
    """Result falls outside the representable range of the numeric type."""

    pass


class DivideByZero(DecimalMathError):
    """Division by a zero value (zero or degenerate relative price)."""

    pass


class OptimizerFailure(RouterError):
    """The quasi-Newton minimizer reported non-convergence or an internal error."""

    pass


class InvalidCFMM(RouterError, ValueError):
    """CFMM parameters are inconsistent (lengths, token ids or fee)."""

    pass


class InvalidObjective(RouterError, ValueError):
    """Objective parameters are inconsistent (output token out of range)."""

    pass
