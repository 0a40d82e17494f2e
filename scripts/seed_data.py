from motor.motor_asyncio import AsyncIOMotorClient
import asyncio
from datetime import datetime, timezone
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

SAMPLE_SERVICE = {
    "service_name": "Home Deep Cleaning",
    "category": "Cleaning",
    "price": 49.0,
    "description": "Full apartment deep clean including kitchen and bathrooms.",
    "image": "https://images.example.com/cleaning.jpg",
    "provider_name": "Sparkle Co",
    "provider_email": "hello@sparkle.example.com",
    "provider_contact": "+1234567890",
    "duration": "3 hours",
}

async def insert_test_data():
    client = AsyncIOMotorClient(os.getenv('MONGODB_URI') or os.getenv('MONGODB_URL'))
    db = client[os.getenv('DATABASE_NAME', 'servicesDB')]

    try:
        existing = await db.services.find_one({"service_name": SAMPLE_SERVICE["service_name"]})
        if existing:
            print("Sample service already exists!")
            return

        service = {**SAMPLE_SERVICE, "rating": 0, "createdAt": datetime.now(timezone.utc)}
        result = await db.services.insert_one(service)
        service_id = str(result.inserted_id)
        print(f"Sample service created: {service_id}")

        await db.bookings.insert_many([
            {"serviceId": service_id, "userEmail": "alice@example.com", "date": "2024-06-01", "rating": 5},
            {"serviceId": service_id, "userEmail": "bob@example.com", "date": "2024-06-03", "rating": 4},
            {"serviceId": service_id, "userEmail": "carol@example.com", "date": "2024-06-05"},
        ])

        count = await db.bookings.count_documents({"serviceId": service_id})
        print(f"Bookings for sample service: {count}")
    finally:
        client.close()

if __name__ == "__main__":
    asyncio.run(insert_test_data())
