"""
FX deal API endpoints.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fxdeals.api.decimal_route import DecimalJSONRoute
from fxdeals.controllers.fx_deal_controller import FxDealController
from fxdeals.core.logging import get_logger
from fxdeals.db.session import get_db
from fxdeals.deps.di_container import get_container
from fxdeals.schemas.common import ApiResponse
from fxdeals.schemas.fx_deal import FxDealRequest, FxDealResponse

logger = get_logger(__name__)

router = APIRouter(route_class=DecimalJSONRoute)


def get_fx_deal_controller(db: AsyncSession = Depends(get_db)) -> FxDealController:
    """Request-scoped controller bound to the request's database session."""
    return FxDealController(db, get_container().validation_service())


@router.post(
    "",
    response_model=ApiResponse[FxDealResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_fx_deal(
    request: FxDealRequest,
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[FxDealResponse]:
    """Create a new FX deal."""
    logger.info(f"Received request to create FX deal with unique ID: {request.deal_unique_id}")
    response = await controller.create_fx_deal(request)
    logger.info(f"FX deal created successfully with ID: {response.data.id}")
    return response


@router.get("", response_model=ApiResponse[List[FxDealResponse]])
async def get_all_fx_deals(
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[List[FxDealResponse]]:
    """List all FX deals, newest deal timestamp first."""
    return await controller.get_all_fx_deals()


# Fixed paths are registered before /{deal_unique_id} so they are not captured by it


@router.get("/health", response_model=ApiResponse[str])
async def fx_deals_health() -> ApiResponse[str]:
    """Liveness probe for the FX deal surface."""
    return FxDealController.health_check()


@router.get("/currencies", response_model=ApiResponse[List[str]])
async def get_supported_currencies() -> ApiResponse[List[str]]:
    """List the supported ISO 4217 currency codes."""
    return FxDealController.list_supported_currencies()


@router.get("/count", response_model=ApiResponse[int])
async def get_total_fx_deals_count(
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[int]:
    """Total number of stored FX deals."""
    return await controller.get_total_fx_deals_count()


@router.get("/recent", response_model=ApiResponse[List[FxDealResponse]])
async def get_recent_fx_deals(
    limit: int = Query(10, description="Number of deals to return (1-1000)"),
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[List[FxDealResponse]]:
    """Most recently created FX deals."""
    return await controller.get_recent_fx_deals(limit)


@router.get("/date-range", response_model=ApiResponse[List[FxDealResponse]])
async def get_fx_deals_by_date_range(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[List[FxDealResponse]]:
    """FX deals struck within an inclusive ISO-8601 date-time range."""
    return await controller.get_fx_deals_by_date_range(start_date, end_date)


@router.get(
    "/currency-pair/{from_currency}/{to_currency}",
    response_model=ApiResponse[List[FxDealResponse]],
)
async def get_fx_deals_by_currency_pair(
    from_currency: str,
    to_currency: str,
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[List[FxDealResponse]]:
    """FX deals for a currency pair."""
    return await controller.get_fx_deals_by_currency_pair(from_currency, to_currency)


@router.get(
    "/currency-pair/{from_currency}/{to_currency}/count",
    response_model=ApiResponse[int],
)
async def count_fx_deals_by_currency_pair(
    from_currency: str,
    to_currency: str,
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[int]:
    """Number of FX deals for a currency pair."""
    return await controller.count_fx_deals_by_currency_pair(from_currency, to_currency)


@router.get("/from-currency/{currency_code}", response_model=ApiResponse[List[FxDealResponse]])
async def get_fx_deals_by_from_currency(
    currency_code: str,
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[List[FxDealResponse]]:
    """FX deals selling the given currency."""
    return await controller.get_fx_deals_by_from_currency(currency_code)


@router.get("/to-currency/{currency_code}", response_model=ApiResponse[List[FxDealResponse]])
async def get_fx_deals_by_to_currency(
    currency_code: str,
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[List[FxDealResponse]]:
    """FX deals buying the given currency."""
    return await controller.get_fx_deals_by_to_currency(currency_code)


@router.get("/{deal_unique_id}", response_model=ApiResponse[FxDealResponse])
async def get_fx_deal_by_unique_id(
    deal_unique_id: str,
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[FxDealResponse]:
    """Get an FX deal by its unique ID."""
    return await controller.get_fx_deal_by_unique_id(deal_unique_id)


@router.get("/{deal_unique_id}/exists", response_model=ApiResponse[bool])
async def exists_by_deal_unique_id(
    deal_unique_id: str,
    controller: FxDealController = Depends(get_fx_deal_controller),
) -> ApiResponse[bool]:
    """Check whether an FX deal with this unique ID exists."""
    return await controller.exists_by_deal_unique_id(deal_unique_id)
