from unittest.mock import AsyncMock

from config.database import Database
from scripts import migrate_prices


async def test_migrate_string_prices(db, monkeypatch):
    monkeypatch.setattr(Database, "connect_db", AsyncMock())
    monkeypatch.setattr(Database, "close_db", AsyncMock())
    await db.services.insert_many([
        {"service_name": "a", "price": "$25"},
        {"service_name": "b", "price": 30.0},
        {"service_name": "c", "price": "call us"},
    ])

    migrated = await migrate_prices.migrate_prices()

    assert migrated == 1
    prices = {s["service_name"]: s["price"] for s in await db.services.find().to_list(length=None)}
    assert prices == {"a": 25.0, "b": 30.0, "c": "call us"}
