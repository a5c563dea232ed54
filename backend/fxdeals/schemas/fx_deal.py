"""
FX deal Pydantic schemas for request/response shaping.
Wire names are camelCase; attributes are snake_case.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime
from decimal import Decimal

from fxdeals.models.fx_deal import FxDeal


class FxDealRequest(BaseModel):
    """
    Inbound deal submission.

    Every field is optional at the schema level so that missing fields reach
    the ValidationService and are reported together with the other violations.
    """
    deal_unique_id: Optional[str] = Field(None, description="Caller-supplied business identifier")
    from_currency: Optional[str] = Field(None, description="ISO 4217 source currency code")
    to_currency: Optional[str] = Field(None, description="ISO 4217 target currency code")
    deal_timestamp: Optional[datetime] = Field(None, description="When the deal was struck (ISO-8601)")
    deal_amount: Optional[Decimal] = Field(None, description="Deal amount, at most 4 decimal places")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class FxDealResponse(BaseModel):
    """Stored deal as returned to callers."""
    id: int
    deal_unique_id: str
    from_currency: str
    to_currency: str
    deal_timestamp: datetime
    deal_amount: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_entity(cls, entity: FxDeal) -> "FxDealResponse":
        """Build the response shape from a stored FxDeal row."""
        return cls(
            id=entity.id,
            deal_unique_id=entity.deal_unique_id,
            from_currency=entity.from_currency,
            to_currency=entity.to_currency,
            deal_timestamp=entity.deal_timestamp,
            deal_amount=entity.deal_amount,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
