from datetime import datetime, timedelta

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from auction_api.database.mongo import get_auctions_collection
from auction_api.main import app

SAMPLE_AUCTIONS = [
    ("Gaming Laptop", "High-performance gaming laptop with RTX graphics", 1000, 1500),
    ("Mountain Bike", "Professional mountain bike for trail riding", 500, 800),
    ("Vintage Guitar", "Classic acoustic guitar from the 1970s", 300, 600),
    ("Gaming Console", "Latest generation gaming console with controller", 400, 550),
    ("Office Desk", "Modern standing desk for home office", 200, 350),
]


def make_auction(title, description, start_price, reserve_price, created_at=None):
    created_at = created_at or datetime(2024, 1, 1)
    return {
        "title": title,
        "description": description,
        "start_price": start_price,
        "reserve_price": reserve_price,
        "created_at": created_at,
        "updated_at": created_at,
    }


@pytest.fixture
def collection():
    return AsyncMongoMockClient()["auction_test"]["auctions"]


@pytest.fixture
async def seeded(collection):
    """Les 5 enchères de référence, indexées par titre (avec _id)."""
    base = datetime(2024, 1, 1, 12, 0)
    docs = [
        make_auction(*row, created_at=base + timedelta(minutes=i))
        for i, row in enumerate(SAMPLE_AUCTIONS)
    ]
    result = await collection.insert_many(docs)
    for doc, oid in zip(docs, result.inserted_ids):
        doc["_id"] = oid
    return {doc["title"]: doc for doc in docs}


@pytest.fixture
async def client(collection):
    app.dependency_overrides[get_auctions_collection] = lambda: collection
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
