"""Search configuration for reverse quotes and peg-point lookups."""

from dataclasses import dataclass

from curve_amm_math.constants import MAX_ITERATIONS, PRECISION


@dataclass(frozen=True)
class SearchConfig:
    """Knobs for the bounded binary searches used where no closed-form inverse exists.

    Attributes:
        max_iterations: Cap on bisection steps (default: 255)
        upper_bound_multiplier: Upper bracket for a reverse quote, as a multiple
            of the input coin's current balance (default: 10)
        tolerance_denominator: A reverse-quote search stops once the output
            overshoots the target by at most target / tolerance_denominator
            (default: 10,000, i.e. 1 bp)
        peg_precision: Bracket width at which a peg-point search stops
            (default: 10 tokens of 18 decimals)
    """

    max_iterations: int = MAX_ITERATIONS
    upper_bound_multiplier: int = 10
    tolerance_denominator: int = 10_000
    peg_precision: int = 10 * PRECISION


# Default configuration instance
DEFAULT_SEARCH_CONFIG = SearchConfig()
