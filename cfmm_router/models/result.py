"""Pydantic models for routing results handed back to the hosting system."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from cfmm_router.models.types import AmountString, DecimalString
from cfmm_router.routing.router import Router


class PoolTradeResult(BaseModel):
    """Trade against one pool, in the pool's local token order."""

    token_ids: list[int] = Field(alias="tokenIds")
    sell: list[AmountString] = Field(description="Amounts tendered to the pool.")
    buy: list[AmountString] = Field(description="Amounts received from the pool.")

    model_config = {"populate_by_name": True}


class RouteResult(BaseModel):
    """Outcome of Router.route().

    net_flows is positive for tokens received by the router and negative for
    tokens tendered. reserves holds each pool's reserves as read when the
    result was built.
    """

    market_prices: list[DecimalString] = Field(alias="marketPrices")
    net_flows: list[DecimalString] = Field(alias="netFlows")
    trades: list[PoolTradeResult]
    reserves: list[list[AmountString]]

    model_config = {"populate_by_name": True}

    @classmethod
    def from_router(cls, router: Router[Any]) -> RouteResult:
        return cls(
            market_prices=[str(p) for p in router.market_prices],
            net_flows=[str(f) for f in router.net_flows()],
            trades=[
                PoolTradeResult(
                    token_ids=trade.token_ids,
                    sell=[str(s) for s in trade.sell],
                    buy=[str(b) for b in trade.buy],
                )
                for trade in router.trades()
            ],
            reserves=[[str(r) for r in cfmm.get_reserves()] for cfmm in router.cfmms],
        )
