import logging
import re
from datetime import datetime
from typing import Any, Dict, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from auction_api.core.config import settings
from auction_api.core.errors import InvalidIdentifier, MissingQueryParameter, NotFound
from auction_api.models.auction_models import AuctionFilters

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", -1)]


def resolve_limit(filters: AuctionFilters) -> int:
    return filters.limit or settings.DEFAULT_LIMIT


def build_price_filter(filters: AuctionFilters) -> Dict[str, Any]:
    """Construit le prédicat Mongo sur start_price ({} si aucune borne)."""
    bounds: Dict[str, float] = {}
    if filters.min_price is not None:
        bounds["$gte"] = filters.min_price
    if filters.max_price is not None:
        bounds["$lte"] = filters.max_price
    return {"start_price": bounds} if bounds else {}


def build_text_filter(q: str) -> Dict[str, Any]:
    """Sous-chaîne insensible à la casse sur title OU description."""
    pattern = re.escape(q)
    return {
        "$or": [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    }


def parse_auction_id(auction_id: str) -> ObjectId:
    if not ObjectId.is_valid(auction_id):
        raise InvalidIdentifier(auction_id)
    return ObjectId(auction_id)


def serialize_auction(doc: dict) -> dict:
    """Rend un document Mongo JSON-serialisable (ObjectId, datetimes)."""
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
        out["id"] = out["_id"]
    for key in ("created_at", "updated_at"):
        if isinstance(out.get(key), datetime):
            out[key] = out[key].isoformat()
    return out


async def _find_newest(collection: AsyncIOMotorCollection, query: Dict[str, Any], limit: int) -> List[dict]:
    logger.debug("find %s limit=%d", query, limit)
    cursor = collection.find(query).sort(NEWEST_FIRST).limit(limit)
    items = []
    async for doc in cursor:
        items.append(serialize_auction(doc))
    return items


async def list_auctions(collection: AsyncIOMotorCollection, filters: AuctionFilters) -> List[dict]:
    return await _find_newest(collection, build_price_filter(filters), resolve_limit(filters))


async def search_auctions(
    collection: AsyncIOMotorCollection,
    q: str | None,
    filters: AuctionFilters,
) -> List[dict]:
    q = (q or "").strip()
    if not q:
        raise MissingQueryParameter("q")
    query = {**build_price_filter(filters), **build_text_filter(q)}
    return await _find_newest(collection, query, resolve_limit(filters))


async def find_auction_document(collection: AsyncIOMotorCollection, auction_id: str) -> dict:
    """Document brut (ObjectId conservé) ; lève InvalidIdentifier / NotFound."""
    oid = parse_auction_id(auction_id)
    doc = await collection.find_one({"_id": oid})
    if doc is None:
        raise NotFound(auction_id)
    return doc


async def get_auction_by_id(collection: AsyncIOMotorCollection, auction_id: str) -> dict:
    return serialize_auction(await find_auction_document(collection, auction_id))
