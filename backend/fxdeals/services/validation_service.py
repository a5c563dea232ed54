"""
Validation service for inbound FX deal requests.
Collects every rule violation before failing, so the caller sees all of them at once.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from fxdeals.core.exceptions import ValidationException
from fxdeals.core.logging import get_logger
from fxdeals.schemas.fx_deal import FxDealRequest
from fxdeals.utils.currency_validator import is_valid_currency

logger = get_logger(__name__)

DEAL_UNIQUE_ID_MAX_LENGTH = 255
DEAL_UNIQUE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
MAX_DEAL_AMOUNT = Decimal("999999999999999.9999")
MAX_DEAL_AMOUNT_SCALE = 4
REASONABLE_AMOUNT_MIN = Decimal("0.01")
REASONABLE_AMOUNT_MAX = Decimal("100000000")


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def one_year_before(moment: datetime) -> datetime:
    """Same calendar instant one year earlier; Feb 29 falls back to Feb 28."""
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:
        return moment.replace(year=moment.year - 1, day=28)


def decimal_places(amount: Decimal) -> int:
    """Number of fractional digits as written, trailing zeros included."""
    exponent = amount.as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


class ValidationService:
    """Business validation for FX deal submissions."""

    def validate_fx_deal_request(
        self,
        request: FxDealRequest,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Validate a deal request.

        Args:
            request: The inbound request
            now: Reference time for the timestamp bounds (defaults to current UTC)

        Raises:
            ValidationException: With every violated rule, message-joined in field
                order and mapped per wire field in ``details``
        """
        logger.debug(f"Validating FX deal request: {request.deal_unique_id}")

        errors: List[Tuple[str, str]] = []
        self._validate_deal_unique_id(request.deal_unique_id, errors)
        self._validate_currencies(request.from_currency, request.to_currency, errors)
        self._validate_timestamp(request.deal_timestamp, now or utc_now(), errors)
        self._validate_amount(request.deal_amount, errors)

        if errors:
            error_message = "Validation failed: " + ", ".join(message for _, message in errors)
            logger.warning(
                error_message,
                extra={"deal_unique_id": request.deal_unique_id},
            )
            raise ValidationException(error_message, details=self._by_field(errors))

        logger.debug("FX deal request validation successful")

    def is_reasonable_amount(
        self,
        amount: Decimal,
        from_currency: str,
        to_currency: str,
    ) -> bool:
        """Advisory sanity band for a deal amount; never used to reject a deal."""
        return REASONABLE_AMOUNT_MIN <= amount <= REASONABLE_AMOUNT_MAX

    @staticmethod
    def _by_field(errors: List[Tuple[str, str]]) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        for field, message in errors:
            if field in fields:
                fields[field] = f"{fields[field]}; {message}"
            else:
                fields[field] = message
        return fields

    def _validate_deal_unique_id(
        self,
        deal_unique_id: Optional[str],
        errors: List[Tuple[str, str]],
    ) -> None:
        if deal_unique_id is None or not deal_unique_id.strip():
            errors.append(("dealUniqueId", "Deal unique ID is required"))
            return

        if len(deal_unique_id) > DEAL_UNIQUE_ID_MAX_LENGTH:
            errors.append(("dealUniqueId", "Deal unique ID cannot exceed 255 characters"))

        if not DEAL_UNIQUE_ID_PATTERN.fullmatch(deal_unique_id):
            errors.append((
                "dealUniqueId",
                "Deal unique ID can only contain alphanumeric characters, hyphens, and underscores",
            ))

    def _validate_currencies(
        self,
        from_currency: Optional[str],
        to_currency: Optional[str],
        errors: List[Tuple[str, str]],
    ) -> None:
        if from_currency is None or not from_currency.strip():
            errors.append(("fromCurrency", "From currency is required"))
        elif not is_valid_currency(from_currency):
            errors.append(("fromCurrency", "From currency must be a valid ISO 4217 currency code"))

        if to_currency is None or not to_currency.strip():
            errors.append(("toCurrency", "To currency is required"))
        elif not is_valid_currency(to_currency):
            errors.append(("toCurrency", "To currency must be a valid ISO 4217 currency code"))

        if (
            from_currency
            and to_currency
            and from_currency.strip()
            and from_currency.strip().upper() == to_currency.strip().upper()
        ):
            errors.append(("toCurrency", "From currency and to currency must be different"))

    def _validate_timestamp(
        self,
        deal_timestamp: Optional[datetime],
        now: datetime,
        errors: List[Tuple[str, str]],
    ) -> None:
        if deal_timestamp is None:
            errors.append(("dealTimestamp", "Deal timestamp is required"))
            return

        deal_timestamp = to_utc_naive(deal_timestamp)
        now = to_utc_naive(now)

        if deal_timestamp > now:
            errors.append(("dealTimestamp", "Deal timestamp cannot be in the future"))

        if deal_timestamp < one_year_before(now):
            errors.append(("dealTimestamp", "Deal timestamp cannot be older than one year"))

    def _validate_amount(
        self,
        deal_amount: Optional[Decimal],
        errors: List[Tuple[str, str]],
    ) -> None:
        if deal_amount is None:
            errors.append(("dealAmount", "Deal amount is required"))
            return

        if not deal_amount.is_finite():
            errors.append(("dealAmount", "Deal amount must be a finite number"))
            return

        if deal_amount <= 0:
            errors.append(("dealAmount", "Deal amount must be greater than zero"))

        if deal_amount > MAX_DEAL_AMOUNT:
            errors.append(("dealAmount", "Deal amount exceeds maximum allowed value"))

        if decimal_places(deal_amount) > MAX_DEAL_AMOUNT_SCALE:
            errors.append(("dealAmount", "Deal amount cannot have more than 4 decimal places"))
