"""Input and output models for the hosting system."""

from cfmm_router.models.problem import BasketLiquidationSpec, PoolSpec, RoutingProblem
from cfmm_router.models.result import PoolTradeResult, RouteResult
from cfmm_router.models.types import AmountString, DecimalString, FeeString

__all__ = [
    "AmountString",
    "BasketLiquidationSpec",
    "DecimalString",
    "FeeString",
    "PoolSpec",
    "PoolTradeResult",
    "RouteResult",
    "RoutingProblem",
]
