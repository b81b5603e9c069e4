"""Pydantic models describing a routing problem.

A hosting system reads pool reserves and fees, picks the token space and
the basket to liquidate, and hands them over as a RoutingProblem.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from cfmm_router.cfmm.product_two_coin import ProductTwoCoin
from cfmm_router.constants import DEFAULT_FEE
from cfmm_router.math.decimal_math import T
from cfmm_router.math.signed_decimal import SignedDecimal
from cfmm_router.models.types import AmountString, FeeString
from cfmm_router.objectives.basket_liquidation import BasketLiquidation
from cfmm_router.routing.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from cfmm_router.routing.router import Router


class PoolSpec(BaseModel):
    """A two-coin constant-product pool."""

    reserves: list[AmountString] = Field(min_length=2, max_length=2)
    fee: FeeString = Field(default=DEFAULT_FEE, description="Fee multiplier, e.g. '0.997'")
    token_ids: list[int] = Field(
        alias="tokenIds",
        min_length=2,
        max_length=2,
        description="Global indices of the pool's two tokens.",
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _distinct_tokens(self) -> PoolSpec:
        if self.token_ids[0] == self.token_ids[1]:
            raise ValueError(f"Pool token ids must be distinct, got {self.token_ids}")
        if min(self.token_ids) < 0:
            raise ValueError(f"Pool token ids must be non-negative, got {self.token_ids}")
        return self

    def to_cfmm(self, numeric: type[T]) -> ProductTwoCoin[T]:
        return ProductTwoCoin(
            reserves=[numeric.from_str(r) for r in self.reserves],
            fee=numeric.from_str(self.fee),
            token_ids=list(self.token_ids),
        )


class BasketLiquidationSpec(BaseModel):
    """Basket of tokens to liquidate into one output token."""

    output_token_id: int = Field(alias="outputTokenId", ge=0)
    delta_in: list[AmountString] = Field(
        alias="deltaIn",
        min_length=1,
        description="Amount of each token to tender, indexed by token id.",
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _output_in_range(self) -> BasketLiquidationSpec:
        if self.output_token_id >= len(self.delta_in):
            raise ValueError(
                f"Output token {self.output_token_id} out of range for {len(self.delta_in)} tokens"
            )
        return self

    def to_objective(self, numeric: type[T]) -> BasketLiquidation[T]:
        return BasketLiquidation(
            output_token_id=self.output_token_id,
            delta_in=[numeric.from_str(d) for d in self.delta_in],
        )


class RoutingProblem(BaseModel):
    """Complete routing input: token space, pools and objective."""

    n_tokens: int = Field(alias="nTokens", ge=1)
    pools: list[PoolSpec]
    objective: BasketLiquidationSpec

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _consistent_dimensions(self) -> RoutingProblem:
        if len(self.objective.delta_in) != self.n_tokens:
            raise ValueError(
                f"Basket has {len(self.objective.delta_in)} entries, expected {self.n_tokens}"
            )
        for index, pool in enumerate(self.pools):
            if max(pool.token_ids) >= self.n_tokens:
                raise ValueError(f"Pool {index} references a token id outside 0..{self.n_tokens - 1}")
        return self

    def build_router(
        self,
        numeric: type[T] = SignedDecimal,  # type: ignore[assignment]
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> Router[T]:
        """Instantiate pools, objective and router in the given numeric backend."""
        return Router(
            objective=self.objective.to_objective(numeric),
            cfmms=[pool.to_cfmm(numeric) for pool in self.pools],
            n_tokens=self.n_tokens,
            numeric=numeric,
            config=config,
        )
