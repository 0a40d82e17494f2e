"""
Tests for the service registry operations against an in-memory store.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from crud import service_crud
from crud.exceptions import InvalidInput, NotFound, StoreUnavailable
from schemas.rating import RatingUpdate
from schemas.service import ServiceCreate, ServiceUpdate
from tests.factories import service_payload


async def _create(**overrides) -> str:
    created = await service_crud.create_service(ServiceCreate(**service_payload(**overrides)))
    return created.serviceId


async def test_create_sets_rating_and_created_at(db):
    service_id = await _create()

    stored = await db.services.find_one({"_id": ObjectId(service_id)})
    assert stored["rating"] == 0
    assert stored["createdAt"] is not None
    assert stored["price"] == 80.0

    service = await service_crud.get_service(service_id)
    assert service.rating == 0
    assert service.createdAt is not None


async def test_create_accepts_currency_price_and_email_alias(db):
    payload = service_payload(price="$1,200.50")
    payload["email"] = payload.pop("provider_email")

    created = await service_crud.create_service(ServiceCreate(**payload))

    stored = await db.services.find_one({"_id": ObjectId(created.serviceId)})
    assert stored["price"] == 1200.5
    assert stored["provider_email"] == "pros@example.com"
    assert "email" not in stored


async def test_create_rejects_missing_fields_without_writing(db):
    with pytest.raises(InvalidInput) as exc_info:
        await service_crud.create_service(ServiceCreate(**service_payload(image="", provider_contact=None)))

    assert set(exc_info.value.error["missing"]) == {"image", "provider_contact"}
    assert await db.services.count_documents({}) == 0


async def test_optional_fields_not_required(db):
    service_id = await _create(category=None)

    service = await service_crud.get_service(service_id)
    assert service.category is None
    assert service.duration is None


async def test_get_service_distinguishes_malformed_and_missing(db):
    with pytest.raises(InvalidInput):
        await service_crud.get_service("not-an-object-id")

    with pytest.raises(NotFound):
        await service_crud.get_service(str(ObjectId()))


async def test_get_service_reads_legacy_documents(db):
    result = await db.services.insert_one({"service_name": "Old listing", "price": "$15"})

    service = await service_crud.get_service(str(result.inserted_id))
    assert service.price == 15.0
    assert service.rating is None
    assert service.provider_email is None


@pytest.mark.parametrize("count", [0, 1, 9])
async def test_top_services_limited_and_sorted(db, count):
    for i in range(count):
        await db.services.insert_one({"service_name": f"svc-{i}", "rating": (i * 7) % 5})

    top = await service_crud.get_top_services()

    assert len(top) == min(count, 6)
    ratings = [s.rating for s in top]
    assert ratings == sorted(ratings, reverse=True)


async def test_provider_services_exact_match(db):
    await _create(provider_email="pros@example.com")
    await _create(provider_email="Pros@example.com")
    await _create(provider_email="other@example.com")

    services = await service_crud.get_provider_services("pros@example.com")

    assert len(services) == 1
    assert services[0].provider_email == "pros@example.com"


async def test_partial_update_keeps_other_fields(db):
    service_id = await _create()

    result = await service_crud.update_service(service_id, ServiceUpdate(price="$95", description="Now with boilers"))

    assert result.matchedCount == 1
    service = await service_crud.get_service(service_id)
    assert service.price == 95.0
    assert service.description == "Now with boilers"
    assert service.service_name == "Plumbing Repair"
    assert service.image == "https://images.example.com/plumbing.jpg"


async def test_update_cannot_touch_rating_or_created_at(db):
    service_id = await _create()
    before = await db.services.find_one({"_id": ObjectId(service_id)})

    await service_crud.update_service(service_id, ServiceUpdate(rating=5, createdAt="yesterday", badge="featured"))

    after = await db.services.find_one({"_id": ObjectId(service_id)})
    assert after["rating"] == 0
    assert after["createdAt"] == before["createdAt"]
    assert after["badge"] == "featured"


async def test_update_missing_service_is_noop(db):
    result = await service_crud.update_service(str(ObjectId()), ServiceUpdate(price=10))

    assert result.matchedCount == 0
    assert result.modifiedCount == 0


async def test_update_with_nothing_to_set(db):
    service_id = await _create()

    with pytest.raises(InvalidInput):
        await service_crud.update_service(service_id, ServiceUpdate())


async def test_delete_service(db):
    service_id = await _create()

    assert (await service_crud.delete_service(service_id)).deletedCount == 1
    assert (await service_crud.delete_service(service_id)).deletedCount == 0


async def test_set_rating_directly(db):
    service_id = await _create()

    result = await service_crud.set_service_rating(service_id, RatingUpdate(rating=4.5))

    assert result.modifiedCount == 1
    assert (await service_crud.get_service(service_id)).rating == 4.5


async def test_set_rating_requires_value(db):
    service_id = await _create()

    with pytest.raises(InvalidInput):
        await service_crud.set_service_rating(service_id, RatingUpdate())


async def test_store_failure_is_reported_as_unavailable(monkeypatch):
    fake_db = MagicMock()
    fake_db.services.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    monkeypatch.setattr(service_crud, "Database", lambda: fake_db)

    with pytest.raises(StoreUnavailable) as exc_info:
        await service_crud.get_service(str(ObjectId()))

    assert exc_info.value.message == "Error fetching service"
    assert "no servers" in exc_info.value.error


async def test_listing_tolerates_foreign_field_types(db):
    await _create()
    await db.services.insert_one({"service_name": "legacy", "rating": "five stars", "provider_email": 42})

    services = await service_crud.get_all_services()
    top = await service_crud.get_top_services()

    legacy = next(s for s in services if s.service_name == "legacy")
    assert legacy.rating == "five stars"
    assert legacy.provider_email == "42"
    assert len(top) == 2


async def test_update_accepts_email_alias(db):
    service_id = await _create()

    await service_crud.update_service(service_id, ServiceUpdate(email="new@example.com"))

    stored = await db.services.find_one({"_id": ObjectId(service_id)})
    assert stored["provider_email"] == "new@example.com"
    assert "email" not in stored
