from typing import List, Optional
from schemas.booking import Booking, BookingCreate, BookingCreated
from schemas.result import DeleteResult
from config.database import Database
from crud.exceptions import StoreUnavailable, STORE_ERRORS
from crud.helpers import clean_object_ids, to_object_id
import logging

logger = logging.getLogger(__name__)

async def create_booking(booking: BookingCreate) -> BookingCreated:
    """Store the booking with whatever fields the client sent."""
    booking_dict = {**booking.model_dump(exclude_unset=True), **(booking.model_extra or {})}
    booking_dict.pop("_id", None)

    try:
        db = Database()
        result = await db.bookings.insert_one(booking_dict)
    except STORE_ERRORS as e:
        logger.error(f"Error saving booking for {booking.userEmail}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error saving booking", str(e)) from e

    logger.info(f"Saved booking {result.inserted_id} for service {booking.serviceId}")
    return BookingCreated(insertedId=str(result.inserted_id))

async def get_bookings(user_email: Optional[str] = None) -> List[Booking]:
    """All bookings, or only those whose userEmail matches exactly."""
    query = {"userEmail": user_email} if user_email else {}
    try:
        db = Database()
        bookings = await db.bookings.find(query).to_list(length=None)
    except STORE_ERRORS as e:
        logger.error(f"Error fetching bookings: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error fetching bookings", str(e)) from e
    return [Booking(**clean_object_ids(booking)) for booking in bookings]

async def delete_booking(booking_id: str) -> DeleteResult:
    object_id = to_object_id(booking_id, "booking")
    try:
        db = Database()
        result = await db.bookings.delete_one({"_id": object_id})
    except STORE_ERRORS as e:
        logger.error(f"Error deleting booking {booking_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error deleting booking", str(e)) from e
    return DeleteResult(deletedCount=result.deleted_count)
