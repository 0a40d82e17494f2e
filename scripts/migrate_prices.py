from config.database import Database
from schemas.service import parse_price
import asyncio
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

async def migrate_prices() -> int:
    """Rewrite display-string prices such as "$25" as plain numbers."""
    migrated = 0
    await Database.connect_db()
    try:
        db = Database()
        services = await db.services.find().to_list(length=None)

        for service in services:
            if not isinstance(service.get("price"), str):
                continue
            name = service.get('service_name', 'Unknown')
            try:
                price = parse_price(service["price"])
            except ValueError as e:
                logger.warning(f"Skipping service {name}: {str(e)}")
                continue
            if price is None:
                logger.warning(f"Skipping service {name}: empty price")
                continue

            await db.services.update_one(
                {"_id": service["_id"]},
                {"$set": {"price": price}}
            )
            migrated += 1
            logger.info(f"Migrated price for service {name}: {service['price']!r} -> {price}")
    finally:
        await Database.close_db()

    return migrated

if __name__ == "__main__":
    try:
        count = asyncio.run(migrate_prices())
        logger.info(f"Migrated {count} service prices")
    except KeyboardInterrupt:
        logger.info("Migration interrupted by user")
