"""
Tests for booking ratings and service rating aggregation.
"""

import pytest
from bson import ObjectId

from crud import rating_crud
from crud.exceptions import InvalidInput
from schemas.rating import RatingUpdate


async def _service(db, rating=0) -> str:
    result = await db.services.insert_one({"service_name": "Window Cleaning", "rating": rating})
    return str(result.inserted_id)


async def _bookings(db, service_id, *ratings):
    for rating in ratings:
        booking = {"serviceId": service_id, "userEmail": "someone@example.com"}
        if rating is not None:
            booking["rating"] = rating
        await db.bookings.insert_one(booking)


async def _stored_rating(db, service_id):
    service = await db.services.find_one({"_id": ObjectId(service_id)})
    return service["rating"]


def test_average_ignores_unrated_bookings():
    rating, rated = rating_crud.average_rating([{"rating": 4}, {"rating": 2}, {}])
    assert rating == 3
    assert rated == 2


def test_average_of_unrated_bookings_is_zero():
    assert rating_crud.average_rating([{}, {"rating": None}]) == (0, 0)


def test_average_skips_non_numeric_ratings():
    rating, rated = rating_crud.average_rating([{"rating": 5}, {"rating": "great"}, {"rating": True}, {"rating": -2}])
    assert rating == 5
    assert rated == 1


async def test_recompute_writes_mean_of_rated_bookings(db):
    service_id = await _service(db)
    await _bookings(db, service_id, 4, 2, None)
    # Another service's booking must not count
    await _bookings(db, str(ObjectId()), 1)

    result = await rating_crud.recompute_service_rating(service_id)

    assert result.rating == 3
    assert result.ratedBookings == 2
    assert result.totalBookings == 3
    assert await _stored_rating(db, service_id) == 3


async def test_recompute_with_only_unrated_bookings_gives_zero(db):
    service_id = await _service(db, rating=4.5)
    await _bookings(db, service_id, None, None)

    result = await rating_crud.recompute_service_rating(service_id)

    assert result.rating == 0
    assert result.ratedBookings == 0
    assert await _stored_rating(db, service_id) == 0


async def test_recompute_without_bookings_leaves_service_alone(db):
    service_id = await _service(db, rating=3.5)

    with pytest.raises(InvalidInput):
        await rating_crud.recompute_service_rating(service_id)

    assert await _stored_rating(db, service_id) == 3.5


async def test_recompute_rejects_malformed_id(db):
    with pytest.raises(InvalidInput):
        await rating_crud.recompute_service_rating("12345")


async def test_rate_booking(db):
    result = await db.bookings.insert_one({"serviceId": "abc", "userEmail": "a@example.com"})
    booking_id = str(result.inserted_id)

    update = await rating_crud.rate_booking(booking_id, RatingUpdate(rating=4))
    assert update.matchedCount == 1

    # Re-rating overwrites
    await rating_crud.rate_booking(booking_id, RatingUpdate(rating=2))
    booking = await db.bookings.find_one({"_id": result.inserted_id})
    assert booking["rating"] == 2


async def test_rate_booking_without_rating_is_rejected(db):
    result = await db.bookings.insert_one({"serviceId": "abc", "userEmail": "a@example.com", "rating": 5})

    with pytest.raises(InvalidInput):
        await rating_crud.rate_booking(str(result.inserted_id), RatingUpdate())

    booking = await db.bookings.find_one({"_id": result.inserted_id})
    assert booking["rating"] == 5


async def test_rate_missing_booking_is_noop(db):
    update = await rating_crud.rate_booking(str(ObjectId()), RatingUpdate(rating=3))

    assert update.matchedCount == 0
    assert update.modifiedCount == 0
