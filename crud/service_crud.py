from typing import List
from schemas.service import (
    Service, ServiceCreate, ServiceUpdate, ServiceCreated,
    PROTECTED_SERVICE_FIELDS, TOP_RATED_LIMIT
)
from schemas.rating import RatingUpdate
from schemas.result import UpdateResult, DeleteResult
from config.database import Database
from crud.exceptions import InvalidInput, NotFound, StoreUnavailable, STORE_ERRORS
from crud.helpers import clean_object_ids, to_object_id
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

async def get_all_services() -> List[Service]:
    """Get all services"""
    try:
        db = Database()
        services = await db.services.find().to_list(length=None)
    except STORE_ERRORS as e:
        logger.error(f"Error fetching services: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error fetching services", str(e)) from e
    return [Service(**clean_object_ids(service)) for service in services]

async def get_top_services() -> List[Service]:
    """Highest rated services first. Equal ratings come back in store order."""
    try:
        db = Database()
        services = await db.services.find().sort("rating", -1).limit(TOP_RATED_LIMIT).to_list(length=None)
    except STORE_ERRORS as e:
        logger.error(f"Error fetching top services: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error fetching top services", str(e)) from e
    return [Service(**clean_object_ids(service)) for service in services]

async def get_service(service_id: str) -> Service:
    """Get a service by ID"""
    object_id = to_object_id(service_id, "service")
    try:
        db = Database()
        service = await db.services.find_one({"_id": object_id})
    except STORE_ERRORS as e:
        logger.error(f"Error fetching service {service_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error fetching service", str(e)) from e

    if not service:
        logger.warning(f"No service found with ID: {service_id}")
        raise NotFound("Service not found", service_id)
    return Service(**clean_object_ids(service))

async def create_service(service: ServiceCreate) -> ServiceCreated:
    """Create a new service"""
    missing = service.missing_fields()
    if missing:
        raise InvalidInput("All fields are required!", {"missing": missing})

    service_dict = service.model_dump(exclude_none=True)
    service_dict["rating"] = 0
    service_dict["createdAt"] = datetime.now(timezone.utc)

    try:
        db = Database()
        result = await db.services.insert_one(service_dict)
    except STORE_ERRORS as e:
        logger.error(f"Error creating service {service.service_name}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Failed to add service", str(e)) from e

    logger.info(f"Created service {result.inserted_id} for {service.provider_email}")
    return ServiceCreated(message="Service added successfully!", serviceId=str(result.inserted_id))

async def get_provider_services(provider_email: str) -> List[Service]:
    """Services whose provider_email matches exactly (case-sensitive)."""
    try:
        db = Database()
        services = await db.services.find({"provider_email": provider_email}).to_list(length=None)
    except STORE_ERRORS as e:
        logger.error(f"Error fetching services for {provider_email}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error fetching your services", str(e)) from e
    return [Service(**clean_object_ids(service)) for service in services]

async def update_service(service_id: str, service_data: ServiceUpdate) -> UpdateResult:
    """Set only the fields that were sent. Updating a missing service is a no-op."""
    object_id = to_object_id(service_id, "service")
    changes = {**service_data.model_dump(exclude_unset=True), **(service_data.model_extra or {})}
    for field in PROTECTED_SERVICE_FIELDS:
        changes.pop(field, None)
    if not changes:
        raise InvalidInput("No fields to update", service_id)

    try:
        db = Database()
        result = await db.services.update_one(
            {"_id": object_id},
            {"$set": changes}
        )
    except STORE_ERRORS as e:
        logger.error(f"Error updating service {service_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error updating service", str(e)) from e

    if not result.matched_count:
        logger.info(f"No service was updated with ID: {service_id}")
    return UpdateResult(matchedCount=result.matched_count, modifiedCount=result.modified_count)

async def delete_service(service_id: str) -> DeleteResult:
    object_id = to_object_id(service_id, "service")
    try:
        db = Database()
        result = await db.services.delete_one({"_id": object_id})
    except STORE_ERRORS as e:
        logger.error(f"Error deleting service {service_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error deleting service", str(e)) from e
    return DeleteResult(deletedCount=result.deleted_count)

async def set_service_rating(service_id: str, rating_data: RatingUpdate) -> UpdateResult:
    """Overwrite the rating directly, bypassing booking aggregation."""
    object_id = to_object_id(service_id, "service")
    if rating_data.rating is None:
        raise InvalidInput("Rating is required", service_id)

    try:
        db = Database()
        result = await db.services.update_one(
            {"_id": object_id},
            {"$set": {"rating": rating_data.rating}}
        )
    except STORE_ERRORS as e:
        logger.error(f"Error updating rating for service {service_id}: {str(e)}", exc_info=True)
        raise StoreUnavailable("Error updating service rating", str(e)) from e
    return UpdateResult(matchedCount=result.matched_count, modifiedCount=result.modified_count)
