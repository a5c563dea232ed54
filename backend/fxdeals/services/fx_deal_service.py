"""
FX deal service with business logic.
"""

from typing import List, Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from fxdeals.core.exceptions import (
    AppException,
    DuplicateDataException,
    NotFoundException,
    ValidationException,
)
from fxdeals.core.logging import get_logger
from fxdeals.db.repositories.fx_deal_repository import FxDealRepository
from fxdeals.schemas.fx_deal import FxDealRequest, FxDealResponse
from fxdeals.services.validation_service import ValidationService, to_utc_naive
from fxdeals.utils.currency_validator import is_valid_currency, normalize_currency

logger = get_logger(__name__)

MIN_RECENT_LIMIT = 1
MAX_RECENT_LIMIT = 1000


class FxDealService:
    """Service for FX deal operations."""

    def __init__(
        self,
        session: AsyncSession,
        validation_service: Optional[ValidationService] = None,
    ):
        self.session = session
        self.fx_deal_repo = FxDealRepository(session)
        self.validation_service = validation_service or ValidationService()

    async def create_fx_deal(self, request: FxDealRequest) -> FxDealResponse:
        """
        Validate and store a new deal.

        The existence check only gives an early, friendly error; the unique
        constraint on deal_unique_id decides when two requests race.

        Raises:
            ValidationException: If any field rule is violated
            DuplicateDataException: If the deal unique ID is already stored
            AppException: If storage fails for any other reason
        """
        logger.info(f"Creating FX deal with unique ID: {request.deal_unique_id}")

        self.validation_service.validate_fx_deal_request(request)

        if await self.fx_deal_repo.exists_by_deal_unique_id(request.deal_unique_id):
            logger.warning(f"Duplicate deal unique ID: {request.deal_unique_id}")
            raise self._duplicate(request.deal_unique_id)

        from_currency = normalize_currency(request.from_currency)
        to_currency = normalize_currency(request.to_currency)

        if not self.validation_service.is_reasonable_amount(
            request.deal_amount, from_currency, to_currency
        ):
            logger.warning(
                f"FX deal {request.deal_unique_id} has an unusual amount",
                extra={"deal_amount": str(request.deal_amount)},
            )

        try:
            fx_deal = await self.fx_deal_repo.create(
                deal_unique_id=request.deal_unique_id,
                from_currency=from_currency,
                to_currency=to_currency,
                deal_timestamp=to_utc_naive(request.deal_timestamp),
                deal_amount=request.deal_amount,
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Data integrity violation while saving FX deal: {e.orig}")
            raise self._duplicate(request.deal_unique_id) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Unexpected error while saving FX deal: {e}", exc_info=True)
            raise AppException("Failed to save FX deal") from e

        await self.session.refresh(fx_deal)
        logger.info(f"FX deal created successfully with ID: {fx_deal.id}")
        return FxDealResponse.from_entity(fx_deal)

    async def get_all_fx_deals(self) -> List[FxDealResponse]:
        """All deals, newest deal timestamp first."""
        logger.debug("Retrieving all FX deals")
        deals = await self.fx_deal_repo.list_all()
        return [FxDealResponse.from_entity(deal) for deal in deals]

    async def get_fx_deal_by_unique_id(self, deal_unique_id: str) -> FxDealResponse:
        """Get a deal by its business identifier."""
        logger.debug(f"Retrieving FX deal with unique ID: {deal_unique_id}")
        self._require_deal_unique_id(deal_unique_id)

        deal = await self.fx_deal_repo.get_by_deal_unique_id(deal_unique_id)
        if not deal:
            logger.info(f"FX deal not found with unique ID: {deal_unique_id}")
            raise NotFoundException(f"Deal with unique ID '{deal_unique_id}' not found")
        return FxDealResponse.from_entity(deal)

    async def get_fx_deals_by_currency_pair(
        self,
        from_currency: str,
        to_currency: str,
    ) -> List[FxDealResponse]:
        """Deals for a currency pair; codes are matched case-insensitively."""
        logger.debug(f"Retrieving FX deals for currency pair: {from_currency} -> {to_currency}")
        self._require_currencies(from_currency, to_currency)

        deals = await self.fx_deal_repo.list_by_currency_pair(
            normalize_currency(from_currency),
            normalize_currency(to_currency),
        )
        return [FxDealResponse.from_entity(deal) for deal in deals]

    async def get_fx_deals_by_from_currency(self, from_currency: str) -> List[FxDealResponse]:
        self._require_currencies(from_currency)
        deals = await self.fx_deal_repo.list_by_from_currency(normalize_currency(from_currency))
        return [FxDealResponse.from_entity(deal) for deal in deals]

    async def get_fx_deals_by_to_currency(self, to_currency: str) -> List[FxDealResponse]:
        self._require_currencies(to_currency)
        deals = await self.fx_deal_repo.list_by_to_currency(normalize_currency(to_currency))
        return [FxDealResponse.from_entity(deal) for deal in deals]

    async def get_fx_deals_by_date_range(
        self,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
    ) -> List[FxDealResponse]:
        """Deals struck between start_date and end_date inclusive, newest first."""
        logger.debug(f"Retrieving FX deals between {start_date} and {end_date}")

        if start_date is None or end_date is None:
            raise ValidationException("Start date and end date are required")

        start_date = to_utc_naive(start_date)
        end_date = to_utc_naive(end_date)
        if start_date > end_date:
            raise ValidationException("Start date cannot be after end date")

        deals = await self.fx_deal_repo.list_by_timestamp_range(start_date, end_date)
        return [FxDealResponse.from_entity(deal) for deal in deals]

    async def get_recent_fx_deals(self, limit: int) -> List[FxDealResponse]:
        """Most recently created deals."""
        logger.debug(f"Retrieving {limit} recent FX deals")

        if limit < MIN_RECENT_LIMIT or limit > MAX_RECENT_LIMIT:
            raise ValidationException(
                f"Limit must be between {MIN_RECENT_LIMIT} and {MAX_RECENT_LIMIT}"
            )

        deals = await self.fx_deal_repo.list_recent(limit)
        return [FxDealResponse.from_entity(deal) for deal in deals]

    async def get_total_fx_deals_count(self) -> int:
        logger.debug("Counting total FX deals")
        return await self.fx_deal_repo.count()

    async def count_fx_deals_by_currency_pair(self, from_currency: str, to_currency: str) -> int:
        self._require_currencies(from_currency, to_currency)
        return await self.fx_deal_repo.count_by_currency_pair(
            normalize_currency(from_currency),
            normalize_currency(to_currency),
        )

    async def exists_by_deal_unique_id(self, deal_unique_id: str) -> bool:
        self._require_deal_unique_id(deal_unique_id)
        return await self.fx_deal_repo.exists_by_deal_unique_id(deal_unique_id)

    @staticmethod
    def _duplicate(deal_unique_id: str) -> DuplicateDataException:
        return DuplicateDataException(f"Deal with unique ID '{deal_unique_id}' already exists")

    @staticmethod
    def _require_deal_unique_id(deal_unique_id: Optional[str]) -> None:
        if deal_unique_id is None or not deal_unique_id.strip():
            raise ValidationException("Deal unique ID is required")

    @staticmethod
    def _require_currencies(*currency_codes: Optional[str]) -> None:
        if not all(is_valid_currency(code) for code in currency_codes):
            raise ValidationException("Invalid currency code provided")
