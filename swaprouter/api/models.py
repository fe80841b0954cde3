"""Pydantic models for the swap router HTTP API."""

from pydantic import BaseModel, Field

from swaprouter.models.types import Address, HexString, Uint256
from swaprouter.routing.encoding import encode_route_to_path
from swaprouter.routing.types import Quote, Route


class RouteRequest(BaseModel):
    """Token pair to route between."""

    from_token: Address = Field(alias="fromToken")
    to_token: Address = Field(alias="toToken")

    model_config = {"populate_by_name": True}


class QuoteRequest(RouteRequest):
    """Exact-input swap to price."""

    amount_in: Uint256 = Field(alias="amountIn", description="Input amount in raw units")


class PlanRequest(QuoteRequest):
    """Exact-input swap to plan router commands for."""

    caller: Address = Field(description="Account funding the swap and receiving the output")
    force_execute: bool = Field(default=False, alias="forceExecute")


class HopModel(BaseModel):
    """One hop of a route."""

    from_token: Address = Field(alias="from")
    to_token: Address = Field(alias="to")
    pool: Address
    kind: str
    stable: bool
    fee: int

    model_config = {"populate_by_name": True}


class RouteModel(BaseModel):
    """A route and its encoded path."""

    hops: list[HopModel]
    path: HexString

    @classmethod
    def from_route(cls, route: Route) -> "RouteModel":
        return cls(
            hops=[
                HopModel(
                    from_token=s.from_token,
                    to_token=s.to_token,
                    pool=s.pool_address,
                    kind=s.pool.label,
                    stable=s.stable,
                    fee=s.fee,
                )
                for s in route
            ],
            path=encode_route_to_path(route),
        )


class RoutesResponse(BaseModel):
    """Candidate routes for a token pair."""

    routes: list[RouteModel]


class QuoteResponse(BaseModel):
    """Best quote across candidate routes."""

    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    route: RouteModel

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            amount_in=str(quote.amount_in),
            amount_out=str(quote.amount_out),
            route=RouteModel.from_route(quote.route),
        )


class PlanResponse(BaseModel):
    """Router call arguments for a planned swap."""

    quote: QuoteResponse
    amount_out_minimum: Uint256 = Field(alias="amountOutMinimum")
    commands: HexString
    inputs: list[HexString]
    description: str

    model_config = {"populate_by_name": True}


__all__ = [
    "HopModel",
    "PlanRequest",
    "PlanResponse",
    "QuoteRequest",
    "QuoteResponse",
    "RouteModel",
    "RouteRequest",
    "RoutesResponse",
]
