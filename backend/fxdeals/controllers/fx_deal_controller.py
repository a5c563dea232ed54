"""
FX deal controller.
Wraps service results into the ApiResponse envelope with per-endpoint metadata.
"""

from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession

from fxdeals.schemas.common import ApiResponse
from fxdeals.schemas.fx_deal import FxDealRequest, FxDealResponse
from fxdeals.services.fx_deal_service import FxDealService
from fxdeals.services.validation_service import ValidationService, utc_now
from fxdeals.utils.currency_validator import get_supported_currencies


class FxDealController:
    """Controller for FX deal operations."""

    def __init__(
        self,
        session: AsyncSession,
        validation_service: Optional[ValidationService] = None,
    ):
        self.fx_deal_service = FxDealService(session, validation_service)

    async def create_fx_deal(self, request: FxDealRequest) -> ApiResponse[FxDealResponse]:
        deal = await self.fx_deal_service.create_fx_deal(request)
        return ApiResponse[FxDealResponse](
            success=True,
            message="FX deal created successfully",
            data=deal,
        )

    async def get_all_fx_deals(self) -> ApiResponse[List[FxDealResponse]]:
        deals = await self.fx_deal_service.get_all_fx_deals()
        return ApiResponse[List[FxDealResponse]](
            success=True,
            message="FX deals retrieved successfully",
            data=deals,
            metadata={"totalCount": len(deals)},
        )

    async def get_fx_deal_by_unique_id(self, deal_unique_id: str) -> ApiResponse[FxDealResponse]:
        deal = await self.fx_deal_service.get_fx_deal_by_unique_id(deal_unique_id)
        return ApiResponse[FxDealResponse](
            success=True,
            message="FX deal retrieved successfully",
            data=deal,
        )

    async def get_fx_deals_by_currency_pair(
        self,
        from_currency: str,
        to_currency: str,
    ) -> ApiResponse[List[FxDealResponse]]:
        deals = await self.fx_deal_service.get_fx_deals_by_currency_pair(from_currency, to_currency)
        return ApiResponse[List[FxDealResponse]](
            success=True,
            message="FX deals retrieved successfully",
            data=deals,
            metadata={
                "currencyPair": self._pair_label(from_currency, to_currency),
                "totalCount": len(deals),
            },
        )

    async def count_fx_deals_by_currency_pair(
        self,
        from_currency: str,
        to_currency: str,
    ) -> ApiResponse[int]:
        count = await self.fx_deal_service.count_fx_deals_by_currency_pair(from_currency, to_currency)
        return ApiResponse[int](
            success=True,
            message="FX deals count retrieved successfully",
            data=count,
            metadata={"currencyPair": self._pair_label(from_currency, to_currency)},
        )

    async def get_fx_deals_by_from_currency(self, from_currency: str) -> ApiResponse[List[FxDealResponse]]:
        deals = await self.fx_deal_service.get_fx_deals_by_from_currency(from_currency)
        return ApiResponse[List[FxDealResponse]](
            success=True,
            message="FX deals retrieved successfully",
            data=deals,
            metadata={"currency": from_currency.strip().upper(), "totalCount": len(deals)},
        )

    async def get_fx_deals_by_to_currency(self, to_currency: str) -> ApiResponse[List[FxDealResponse]]:
        deals = await self.fx_deal_service.get_fx_deals_by_to_currency(to_currency)
        return ApiResponse[List[FxDealResponse]](
            success=True,
            message="FX deals retrieved successfully",
            data=deals,
            metadata={"currency": to_currency.strip().upper(), "totalCount": len(deals)},
        )

    async def get_fx_deals_by_date_range(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> ApiResponse[List[FxDealResponse]]:
        deals = await self.fx_deal_service.get_fx_deals_by_date_range(start_date, end_date)
        return ApiResponse[List[FxDealResponse]](
            success=True,
            message="FX deals retrieved successfully",
            data=deals,
            metadata={
                "startDate": start_date,
                "endDate": end_date,
                "totalCount": len(deals),
            },
        )

    async def get_recent_fx_deals(self, limit: int) -> ApiResponse[List[FxDealResponse]]:
        deals = await self.fx_deal_service.get_recent_fx_deals(limit)
        return ApiResponse[List[FxDealResponse]](
            success=True,
            message="Recent FX deals retrieved successfully",
            data=deals,
            metadata={"limit": limit, "totalCount": len(deals)},
        )

    async def get_total_fx_deals_count(self) -> ApiResponse[int]:
        count = await self.fx_deal_service.get_total_fx_deals_count()
        return ApiResponse[int](
            success=True,
            message="Total FX deals count retrieved successfully",
            data=count,
        )

    async def exists_by_deal_unique_id(self, deal_unique_id: str) -> ApiResponse[bool]:
        exists = await self.fx_deal_service.exists_by_deal_unique_id(deal_unique_id)
        return ApiResponse[bool](
            success=True,
            message="FX deal existence check completed",
            data=exists,
            metadata={"dealUniqueId": deal_unique_id},
        )

    @staticmethod
    def list_supported_currencies() -> ApiResponse[List[str]]:
        currencies = sorted(get_supported_currencies())
        return ApiResponse[List[str]](
            success=True,
            message="Supported currencies retrieved successfully",
            data=currencies,
            metadata={"totalCount": len(currencies)},
        )

    @staticmethod
    def health_check() -> ApiResponse[str]:
        return ApiResponse[str](
            success=True,
            message="FX Deals service is healthy",
            data="OK",
            metadata={"timestamp": utc_now()},
        )

    @staticmethod
    def _pair_label(from_currency: str, to_currency: str) -> str:
        return f"{from_currency.strip().upper()}/{to_currency.strip().upper()}"
