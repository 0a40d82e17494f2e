from typing import Iterable, List, Tuple
from schemas.rating import RatingUpdate, RatingRecompute
from schemas.result import UpdateResult
from config.database import Database
from crud.exceptions import InvalidInput, StoreUnavailable, STORE_ERRORS
from crud.helpers import to_object_id
import logging
import math

logger = logging.getLogger(__name__)

def _is_rating(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value >= 0
    )

def average_rating(bookings: Iterable[dict]) -> Tuple[float, int]:
    """Mean of the bookings that carry a numeric rating, plus how many did.

    Unrated bookings are ignored. When none are rated the divisor falls
    back to 1, so the result is 0 rather than a division error.
    """
    ratings: List[float] = [b["rating"] for b in bookings if _is_rating(b.get("rating"))]
    total_rating = sum(ratings)
    return total_rating / (len(ratings) or 1), len(ratings)

async def rate_booking(booking_id: str, rating_data: RatingUpdate) -> UpdateResult:
    """Set the rating on a single booking. A rating value is mandatory."""
    object_id = to_object_id(booking_id, "booking")
    if rating_data.rating is None:
        raise InvalidInput("Rating is required", booking_id)

    try:
        db = Database()
        result = await db.bookings.update_one(
            {"_id": object_id},
            {"$set": {"rating": rating_data.rating}}
        )
    except STORE_ERRORS as e:
        logger.error(f"Error rating booking {booking_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error rating booking", str(e)) from e

    if not result.matched_count:
        logger.info(f"No booking was rated with ID: {booking_id}")
    return UpdateResult(matchedCount=result.matched_count, modifiedCount=result.modified_count)

async def recompute_service_rating(service_id: str) -> RatingRecompute:
    """Average the ratings of a service's bookings and store it on the service.

    The read of bookings and the write to the service are separate calls;
    bookings rated in between are picked up on the next recompute.
    """
    object_id = to_object_id(service_id, "service")
    try:
        db = Database()
        bookings = await db.bookings.find({"serviceId": service_id}).to_list(length=None)
    except STORE_ERRORS as e:
        logger.error(f"Error fetching bookings for service {service_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error fetching bookings", str(e)) from e

    if not bookings:
        raise InvalidInput("No bookings found for this service", service_id)

    rating, rated = average_rating(bookings)
    logger.info(f"Service {service_id}: {rated}/{len(bookings)} bookings rated, average {rating}")

    try:
        result = await db.services.update_one(
            {"_id": object_id},
            {"$set": {"rating": rating}}
        )
    except STORE_ERRORS as e:
        logger.error(f"Error updating rating for service {service_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error updating service rating", str(e)) from e

    if not result.matched_count:
        logger.warning(f"Recomputed rating for missing service {service_id}")

    return RatingRecompute(
        serviceId=service_id,
        rating=rating,
        ratedBookings=rated,
        totalBookings=len(bookings)
    )
