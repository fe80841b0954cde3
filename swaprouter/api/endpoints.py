"""API endpoints for the swap router."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException

from swaprouter.api.models import (
    PlanRequest,
    PlanResponse,
    QuoteRequest,
    QuoteResponse,
    RouteModel,
    RouteRequest,
    RoutesResponse,
)
from swaprouter.config import RoutingConfig
from swaprouter.errors import (
    EmptyRouteError,
    ExchangeRateError,
    NoRouteError,
    SwapRouterError,
    UnknownTokenError,
)
from swaprouter.execution.swap_manager import SwapManager
from swaprouter.pools.repository import PoolRepository, Web3PoolSource
from swaprouter.routing.quoter import Web3RouteQuoter

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_default_swap_manager() -> SwapManager:
    """Build a planning-only SwapManager from SWAPROUTER_* settings.

    Raises:
        RuntimeError: If SWAPROUTER_RPC_URL or SWAPROUTER_QUOTER_ADDRESS is unset
    """
    config = RoutingConfig.from_env()
    if config.rpc_url is None or config.quoter_address is None:
        raise RuntimeError("SWAPROUTER_RPC_URL and SWAPROUTER_QUOTER_ADDRESS must be set")

    repository = PoolRepository(
        Web3PoolSource(config.rpc_url, config.pool_index_address),
        page_size=config.pool_page_size,
        max_pools=config.max_pools,
    )
    quoter = Web3RouteQuoter(config.rpc_url, config.quoter_address)
    return SwapManager(repository, quoter, config=config)


def get_swap_manager() -> SwapManager:
    """Dependency provider for the swap manager.

    Override this in tests to inject a manager with mock collaborators:
        app.dependency_overrides[get_swap_manager] = lambda: manager
    """
    try:
        return get_default_swap_manager()
    except RuntimeError as e:
        logger.error("swap_manager_unavailable", error=str(e))
        raise HTTPException(status_code=503, detail=str(e)) from e


def _to_http_error(error: SwapRouterError | ValueError) -> HTTPException:
    if isinstance(error, NoRouteError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, UnknownTokenError | EmptyRouteError | ExchangeRateError | ValueError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


@router.post("/routes")
async def routes(
    request: RouteRequest,
    manager: SwapManager = Depends(get_swap_manager),
) -> RoutesResponse:
    """Enumerate allow-listed candidate routes for a token pair.

    An empty list means no route exists; it is not an error.
    """
    found = await manager.discover_routes(request.from_token, request.to_token)
    logger.info(
        "routes_requested",
        from_token=request.from_token,
        to_token=request.to_token,
        count=len(found),
    )
    return RoutesResponse(routes=[RouteModel.from_route(r) for r in found])


@router.post("/quote")
async def quote(
    request: QuoteRequest,
    manager: SwapManager = Depends(get_swap_manager),
) -> QuoteResponse:
    """Return the best quote for an exact-input swap.

    Error Handling:
        - Unknown token or bad amount: 400
        - No route or no usable quote: 404
    """
    try:
        best = await manager.best_quote(
            request.from_token, request.to_token, int(request.amount_in)
        )
    except (SwapRouterError, ValueError) as e:
        raise _to_http_error(e) from e
    return QuoteResponse.from_quote(best)


@router.post("/plan")
async def plan(
    request: PlanRequest,
    manager: SwapManager = Depends(get_swap_manager),
) -> PlanResponse:
    """Quote a swap and return the router commands that execute it."""
    try:
        swap_plan = await manager.plan_swap(
            request.from_token,
            request.to_token,
            int(request.amount_in),
            caller=request.caller,
            force_execute=request.force_execute,
        )
    except (SwapRouterError, ValueError) as e:
        raise _to_http_error(e) from e

    return PlanResponse(
        quote=QuoteResponse.from_quote(swap_plan.quote),
        amount_out_minimum=str(swap_plan.amount_out_minimum),
        commands=swap_plan.commands.commands,
        inputs=swap_plan.commands.inputs,
        description=swap_plan.route_description,
    )
