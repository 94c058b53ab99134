from typing import Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorCollection

from auction_api.database.mongo import get_auctions_collection
from auction_api.models.auction_models import AuctionFilters
from auction_api.services.auction_service import (
    get_auction_by_id,
    list_auctions,
    search_auctions,
)
from auction_api.services.similarity_service import find_similar_auctions

router = APIRouter(prefix="/auctions", tags=["Auctions"])


def price_filters(
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    limit: Optional[str] = Query(None),
) -> AuctionFilters:
    return AuctionFilters.from_query(min_price, max_price, limit)


def limit_filter(limit: Optional[str] = Query(None)) -> AuctionFilters:
    return AuctionFilters.from_query(limit=limit)


@router.get("")
async def get_auctions(
    filters: AuctionFilters = Depends(price_filters),
    collection: AsyncIOMotorCollection = Depends(get_auctions_collection),
):
    """Toutes les enchères, les plus récentes d'abord."""
    auctions = await list_auctions(collection, filters)
    return {"success": True, "count": len(auctions), "data": auctions}


# Déclarée avant /{auction_id}
@router.get("/search")
async def search(
    q: Optional[str] = Query(None),
    filters: AuctionFilters = Depends(price_filters),
    collection: AsyncIOMotorCollection = Depends(get_auctions_collection),
):
    auctions = await search_auctions(collection, q, filters)
    return {"success": True, "query": q, "count": len(auctions), "data": auctions}


@router.get("/{auction_id}")
async def get_auction(
    auction_id: str,
    collection: AsyncIOMotorCollection = Depends(get_auctions_collection),
):
    auction = await get_auction_by_id(collection, auction_id)
    return {"success": True, "data": auction}


@router.get("/{auction_id}/similar")
async def get_similar(
    auction_id: str,
    filters: AuctionFilters = Depends(limit_filter),
    collection: AsyncIOMotorCollection = Depends(get_auctions_collection),
):
    """Enchères partageant au moins un mot-clé avec l'enchère donnée."""
    original, similar = await find_similar_auctions(collection, auction_id, filters)
    return {
        "success": True,
        "originalItem": original["title"],
        "count": len(similar),
        "data": similar,
    }
