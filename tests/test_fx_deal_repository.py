"""
FX deal repository tests against an in-memory SQLite database.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from fxdeals.db.repositories.fx_deal_repository import FxDealRepository


async def _seed(repo: FxDealRepository):
    rows = [
        ("A-1", "USD", "EUR", datetime(2026, 1, 10, 9, 0), "10"),
        ("A-2", "USD", "EUR", datetime(2026, 3, 5, 9, 0), "20"),
        ("A-3", "GBP", "JPY", datetime(2026, 2, 1, 9, 0), "30"),
        ("A-4", "EUR", "USD", datetime(2026, 4, 1, 9, 0), "40"),
    ]
    for deal_unique_id, from_currency, to_currency, deal_timestamp, amount in rows:
        await repo.create(
            deal_unique_id=deal_unique_id,
            from_currency=from_currency,
            to_currency=to_currency,
            deal_timestamp=deal_timestamp,
            deal_amount=Decimal(amount),
        )
    await repo.session.commit()


@pytest.mark.asyncio
async def test_create_assigns_id_and_audit_timestamps(test_db_session):
    repo = FxDealRepository(test_db_session)
    deal = await repo.create(
        deal_unique_id="R-1",
        from_currency="USD",
        to_currency="EUR",
        deal_timestamp=datetime(2026, 5, 1, 10, 0),
        deal_amount=Decimal("12.3456"),
    )

    assert deal.id is not None
    assert deal.created_at is not None
    assert deal.updated_at is not None
    assert deal.deal_amount == Decimal("12.3456")

    fetched = await repo.get(deal.id)
    assert fetched.deal_unique_id == "R-1"


@pytest.mark.asyncio
async def test_duplicate_unique_id_violates_constraint(test_db_session):
    repo = FxDealRepository(test_db_session)
    fields = dict(
        deal_unique_id="R-1",
        from_currency="USD",
        to_currency="EUR",
        deal_timestamp=datetime(2026, 5, 1, 10, 0),
        deal_amount=Decimal("1"),
    )
    await repo.create(**fields)

    with pytest.raises(IntegrityError):
        await repo.create(**fields)


@pytest.mark.asyncio
async def test_lookups_by_unique_id(test_db_session):
    repo = FxDealRepository(test_db_session)
    await _seed(repo)

    assert await repo.exists_by_deal_unique_id("A-2")
    assert not await repo.exists_by_deal_unique_id("missing")
    assert (await repo.get_by_deal_unique_id("A-3")).from_currency == "GBP"
    assert await repo.get_by_deal_unique_id("missing") is None
    assert await repo.get(9999) is None


@pytest.mark.asyncio
async def test_list_all_orders_by_deal_timestamp_desc(test_db_session):
    repo = FxDealRepository(test_db_session)
    await _seed(repo)

    deals = await repo.list_all()
    assert [d.deal_unique_id for d in deals] == ["A-4", "A-2", "A-3", "A-1"]


@pytest.mark.asyncio
async def test_currency_filters(test_db_session):
    repo = FxDealRepository(test_db_session)
    await _seed(repo)

    pair = await repo.list_by_currency_pair("USD", "EUR")
    assert [d.deal_unique_id for d in pair] == ["A-2", "A-1"]
    assert await repo.count_by_currency_pair("USD", "EUR") == 2
    assert await repo.count_by_currency_pair("EUR", "GBP") == 0

    assert [d.deal_unique_id for d in await repo.list_by_from_currency("USD")] == ["A-2", "A-1"]
    assert [d.deal_unique_id for d in await repo.list_by_to_currency("USD")] == ["A-4"]


@pytest.mark.asyncio
async def test_timestamp_range_is_inclusive(test_db_session):
    repo = FxDealRepository(test_db_session)
    await _seed(repo)

    deals = await repo.list_by_timestamp_range(
        datetime(2026, 2, 1, 9, 0),
        datetime(2026, 3, 5, 9, 0),
    )
    assert [d.deal_unique_id for d in deals] == ["A-2", "A-3"]


@pytest.mark.asyncio
async def test_recent_and_count(test_db_session):
    repo = FxDealRepository(test_db_session)
    await _seed(repo)

    recent = await repo.list_recent(2)
    assert [d.deal_unique_id for d in recent] == ["A-4", "A-3"]
    assert await repo.count() == 4
