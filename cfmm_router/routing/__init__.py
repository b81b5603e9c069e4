"""Router, its configuration and evaluation context."""

from cfmm_router.routing.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from cfmm_router.routing.context import RoutingContext, compute_trades
from cfmm_router.routing.router import PoolTrade, RouteReport, Router

__all__ = [
    "DEFAULT_ROUTER_CONFIG",
    "PoolTrade",
    "RouteReport",
    "Router",
    "RouterConfig",
    "RoutingContext",
    "compute_trades",
]
