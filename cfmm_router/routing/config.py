"""Minimizer configuration for the router."""

from dataclasses import dataclass

from cfmm_router.constants import FLOAT_EPSILON


@dataclass(frozen=True)
class RouterConfig:
    """Settings for the L-BFGS-B run inside Router.route().

    The objective's lower/upper limits are always passed to the minimizer as
    box constraints, so prices outside the feasible region are never evaluated.

    Attributes:
        history_size: Number of correction pairs kept by L-BFGS (default: 5)
        factr: Relative objective reduction tolerance, in multiples of double
            machine epsilon (default: 1e3)
        pgtol: Projected gradient tolerance (default: 1e-5)
        max_iterations: Iteration cap (default: 15,000)
        max_evaluations: Objective evaluation cap (default: 15,000)
        price_floor: Smallest lower bound handed to the minimizer, so that no
            price can reach zero. The numeric backend's min_price() applies
            when it is larger (default: double machine epsilon)
    """

    history_size: int = 5
    factr: float = 1e3
    pgtol: float = 1e-5

    # Caps
    max_iterations: int = 15_000
    max_evaluations: int = 15_000

    # Bounds
    price_floor: float = FLOAT_EPSILON


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()
