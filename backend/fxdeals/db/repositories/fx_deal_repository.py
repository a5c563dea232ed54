"""
FX deal repository for database operations.
"""

from typing import Optional, List
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_

from fxdeals.db.repositories.base_repository import BaseRepository
from fxdeals.models.fx_deal import FxDeal


class FxDealRepository(BaseRepository[FxDeal]):
    """Repository for FX deal operations. No business rules live here."""

    def __init__(self, session: AsyncSession):
        super().__init__(FxDeal, session)

    async def exists_by_deal_unique_id(self, deal_unique_id: str) -> bool:
        """Check whether a deal with this unique ID is stored."""
        result = await self.session.execute(
            select(FxDeal.id).where(FxDeal.deal_unique_id == deal_unique_id).limit(1)
        )
        return result.first() is not None

    async def get_by_deal_unique_id(self, deal_unique_id: str) -> Optional[FxDeal]:
        """Get a deal by its business identifier."""
        result = await self.session.execute(
            select(FxDeal).where(FxDeal.deal_unique_id == deal_unique_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[FxDeal]:
        """All deals, newest deal timestamp first."""
        result = await self.session.execute(
            select(FxDeal).order_by(FxDeal.deal_timestamp.desc(), FxDeal.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_currency_pair(self, from_currency: str, to_currency: str) -> List[FxDeal]:
        """Deals for an exact (from, to) pair, newest deal timestamp first."""
        result = await self.session.execute(
            select(FxDeal)
            .where(
                and_(
                    FxDeal.from_currency == from_currency,
                    FxDeal.to_currency == to_currency,
                )
            )
            .order_by(FxDeal.deal_timestamp.desc(), FxDeal.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_from_currency(self, from_currency: str) -> List[FxDeal]:
        result = await self.session.execute(
            select(FxDeal)
            .where(FxDeal.from_currency == from_currency)
            .order_by(FxDeal.deal_timestamp.desc(), FxDeal.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_to_currency(self, to_currency: str) -> List[FxDeal]:
        result = await self.session.execute(
            select(FxDeal)
            .where(FxDeal.to_currency == to_currency)
            .order_by(FxDeal.deal_timestamp.desc(), FxDeal.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_timestamp_range(self, start: datetime, end: datetime) -> List[FxDeal]:
        """
        Deals struck within [start, end], newest first.
        The caller is responsible for rejecting start > end.
        """
        result = await self.session.execute(
            select(FxDeal)
            .where(FxDeal.deal_timestamp.between(start, end))
            .order_by(FxDeal.deal_timestamp.desc(), FxDeal.id.desc())
        )
        return list(result.scalars().all())

    async def list_recent(self, limit: int) -> List[FxDeal]:
        """Most recently created deals."""
        result = await self.session.execute(
            select(FxDeal)
            .order_by(FxDeal.created_at.desc(), FxDeal.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_currency_pair(self, from_currency: str, to_currency: str) -> int:
        """Count deals for an exact (from, to) pair."""
        result = await self.session.execute(
            select(func.count(FxDeal.id)).where(
                and_(
                    FxDeal.from_currency == from_currency,
                    FxDeal.to_currency == to_currency,
                )
            )
        )
        return result.scalar_one()
