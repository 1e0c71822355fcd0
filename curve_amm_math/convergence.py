"""Non-convergence reporting for the Newton solvers.

Solvers return their last iterate when the cap is hit. This module makes
that visible: a structlog warning for operators, and a NonConvergence
warning that tests and strict callers can catch or escalate.
"""

import warnings

import structlog

from curve_amm_math.errors import NonConvergence

logger = structlog.get_logger()


def report_non_convergence(
    solver: str,
    iterations: int,
    last_value: int,
    previous_value: int,
) -> None:
    """Log and warn that `solver` stopped at its iteration cap."""
    logger.warning(
        "solver_did_not_converge",
        solver=solver,
        iterations=iterations,
        last_value=last_value,
        previous_value=previous_value,
    )
    warnings.warn(
        NonConvergence(
            f"{solver} did not converge after {iterations} iterations "
            f"(last={last_value}, previous={previous_value})"
        ),
        stacklevel=3,
    )
