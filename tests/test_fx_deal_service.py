"""
FX deal service tests: validation, duplicate detection, normalization and read guards.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from fxdeals.core.exceptions import (
    AppException,
    DuplicateDataException,
    NotFoundException,
    ValidationException,
)
from fxdeals.services.fx_deal_service import FxDealService
from fxdeals.services.validation_service import utc_now


@pytest.mark.asyncio
async def test_create_normalizes_currencies_and_round_trips(test_db_session, make_request):
    service = FxDealService(test_db_session)
    created = await service.create_fx_deal(make_request(from_currency="usd", to_currency=" eur "))

    assert created.id is not None
    assert created.from_currency == "USD"
    assert created.to_currency == "EUR"

    fetched = await service.get_fx_deal_by_unique_id("D-1")
    assert fetched.id == created.id
    assert fetched.from_currency == "USD"
    assert fetched.to_currency == "EUR"
    assert fetched.deal_amount == Decimal("100.5")
    assert fetched.deal_timestamp == created.deal_timestamp
    assert fetched.created_at is not None
    assert fetched.updated_at is not None


@pytest.mark.asyncio
async def test_create_rejects_invalid_request_before_touching_storage(test_db_session, make_request):
    service = FxDealService(test_db_session)

    with pytest.raises(ValidationException) as exc_info:
        await service.create_fx_deal(make_request(from_currency="USD", to_currency="usd"))

    assert "must be different" in exc_info.value.message
    assert await service.get_total_fx_deals_count() == 0


@pytest.mark.asyncio
async def test_second_create_with_same_id_is_duplicate(test_db_session, make_request):
    service = FxDealService(test_db_session)
    await service.create_fx_deal(make_request())

    with pytest.raises(DuplicateDataException) as exc_info:
        await service.create_fx_deal(make_request(from_currency="GBP", deal_amount=Decimal("1")))

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Deal with unique ID 'D-1' already exists"
    assert await service.get_total_fx_deals_count() == 1


@pytest.mark.asyncio
async def test_storage_constraint_is_reported_as_duplicate(test_db_session, make_request, monkeypatch):
    """A racing insert that slips past the existence check still yields a duplicate error."""
    service = FxDealService(test_db_session)
    await service.create_fx_deal(make_request())

    async def never_exists(deal_unique_id):
        return False

    monkeypatch.setattr(service.fx_deal_repo, "exists_by_deal_unique_id", never_exists)

    with pytest.raises(DuplicateDataException):
        await service.create_fx_deal(make_request())

    assert await service.get_total_fx_deals_count() == 1


@pytest.mark.asyncio
async def test_smallest_amount_is_accepted(test_db_session, make_request):
    service = FxDealService(test_db_session)
    created = await service.create_fx_deal(make_request(deal_amount=Decimal("0.0001")))
    assert created.deal_amount == Decimal("0.0001")


@pytest.mark.asyncio
async def test_zero_amount_is_rejected(test_db_session, make_request):
    service = FxDealService(test_db_session)
    with pytest.raises(ValidationException):
        await service.create_fx_deal(make_request(deal_amount=Decimal("0")))


@pytest.mark.asyncio
async def test_get_missing_deal_raises_not_found(test_db_session):
    service = FxDealService(test_db_session)
    with pytest.raises(NotFoundException) as exc_info:
        await service.get_fx_deal_by_unique_id("nope")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_blank_unique_id_guards(test_db_session):
    service = FxDealService(test_db_session)
    with pytest.raises(ValidationException):
        await service.get_fx_deal_by_unique_id(" ")
    with pytest.raises(ValidationException):
        await service.exists_by_deal_unique_id("")


@pytest.mark.asyncio
async def test_currency_queries(test_db_session, make_request):
    service = FxDealService(test_db_session)
    await service.create_fx_deal(make_request(deal_unique_id="P-1"))
    await service.create_fx_deal(make_request(deal_unique_id="P-2", from_currency="GBP"))

    pair = await service.get_fx_deals_by_currency_pair("usd", "eur")
    assert [d.deal_unique_id for d in pair] == ["P-1"]
    assert await service.count_fx_deals_by_currency_pair("GBP", "EUR") == 1
    assert len(await service.get_fx_deals_by_to_currency("eur")) == 2
    assert [d.deal_unique_id for d in await service.get_fx_deals_by_from_currency("GBP")] == ["P-2"]

    with pytest.raises(ValidationException) as exc_info:
        await service.get_fx_deals_by_currency_pair("USD", "XYZ")
    assert exc_info.value.message == "Invalid currency code provided"


@pytest.mark.asyncio
async def test_date_range_guards_and_filtering(test_db_session, make_request):
    service = FxDealService(test_db_session)
    now = utc_now()
    await service.create_fx_deal(make_request(deal_unique_id="T-1", deal_timestamp=now - timedelta(days=10)))
    await service.create_fx_deal(make_request(deal_unique_id="T-2", deal_timestamp=now - timedelta(days=2)))

    deals = await service.get_fx_deals_by_date_range(now - timedelta(days=5), now)
    assert [d.deal_unique_id for d in deals] == ["T-2"]

    with pytest.raises(ValidationException) as exc_info:
        await service.get_fx_deals_by_date_range(now, now - timedelta(days=1))
    assert exc_info.value.message == "Start date cannot be after end date"

    with pytest.raises(ValidationException):
        await service.get_fx_deals_by_date_range(None, now)


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, 1001, -1])
async def test_recent_limit_out_of_bounds(test_db_session, limit):
    service = FxDealService(test_db_session)
    with pytest.raises(ValidationException) as exc_info:
        await service.get_recent_fx_deals(limit)
    assert exc_info.value.message == "Limit must be between 1 and 1000"


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [1, 1000])
async def test_recent_limit_bounds_accepted(test_db_session, make_request, limit):
    service = FxDealService(test_db_session)
    await service.create_fx_deal(make_request())
    deals = await service.get_recent_fx_deals(limit)
    assert len(deals) == 1


@pytest.mark.asyncio
async def test_exists_by_unique_id(test_db_session, make_request):
    service = FxDealService(test_db_session)
    assert not await service.exists_by_deal_unique_id("D-1")
    await service.create_fx_deal(make_request())
    assert await service.exists_by_deal_unique_id("D-1")


@pytest.mark.asyncio
async def test_other_storage_errors_are_fatal(test_db_session, make_request, monkeypatch):
    service = FxDealService(test_db_session)

    async def broken_create(**kwargs):
        raise OperationalError("INSERT INTO fx_deals", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service.fx_deal_repo, "create", broken_create)

    with pytest.raises(AppException) as exc_info:
        await service.create_fx_deal(make_request())

    assert not isinstance(exc_info.value, DuplicateDataException)
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Failed to save FX deal"
