import pytest
from bson import ObjectId

from auction_api.core.errors import InvalidIdentifier, MissingQueryParameter, NotFound
from auction_api.models.auction_models import AuctionFilters
from auction_api.services.auction_service import (
    build_price_filter,
    build_text_filter,
    get_auction_by_id,
    list_auctions,
    search_auctions,
    serialize_auction,
)


def _titles(items):
    return sorted(a["title"] for a in items)


def _assert_newest_first(items):
    dates = [a["created_at"] for a in items]
    assert dates == sorted(dates, reverse=True)


def test_price_filter_without_bounds_is_empty():
    assert build_price_filter(AuctionFilters()) == {}


def test_price_filter_with_both_bounds():
    filters = AuctionFilters(min_price=300, max_price=500)
    assert build_price_filter(filters) == {"start_price": {"$gte": 300, "$lte": 500}}


def test_price_filter_with_only_max():
    assert build_price_filter(AuctionFilters(max_price=400)) == {"start_price": {"$lte": 400}}


def test_text_filter_escapes_regex_characters():
    query = build_text_filter("c++ (new)")
    assert query["$or"][0]["title"] == {"$regex": r"c\+\+\ \(new\)", "$options": "i"}


def test_serialize_auction_exposes_string_ids():
    oid = ObjectId()
    out = serialize_auction({"_id": oid, "title": "Desk"})
    assert out["_id"] == str(oid)
    assert out["id"] == str(oid)


async def test_list_empty_collection(collection):
    assert await list_auctions(collection, AuctionFilters()) == []


async def test_list_returns_all_newest_first(collection, seeded):
    items = await list_auctions(collection, AuctionFilters())
    assert len(items) == 5
    _assert_newest_first(items)
    assert items[0]["title"] == "Office Desk"


async def test_list_applies_limit(collection, seeded):
    items = await list_auctions(collection, AuctionFilters(limit=2))
    assert len(items) == 2


@pytest.mark.parametrize(
    "lo, hi, expected",
    [
        (500, None, ["Gaming Laptop", "Mountain Bike"]),
        (None, 400, ["Gaming Console", "Office Desk", "Vintage Guitar"]),
        (300, 500, ["Gaming Console", "Mountain Bike", "Vintage Guitar"]),
        (600, 100, []),
    ],
)
async def test_list_price_bounds(collection, seeded, lo, hi, expected):
    items = await list_auctions(collection, AuctionFilters(min_price=lo, max_price=hi))
    assert _titles(items) == expected
    for a in items:
        assert lo is None or a["start_price"] >= lo
        assert hi is None or a["start_price"] <= hi


async def test_search_matches_title(collection, seeded):
    items = await search_auctions(collection, "gaming", AuctionFilters())
    assert _titles(items) == ["Gaming Console", "Gaming Laptop"]
    _assert_newest_first(items)


async def test_search_matches_description(collection, seeded):
    items = await search_auctions(collection, "trail", AuctionFilters())
    assert _titles(items) == ["Mountain Bike"]


async def test_search_is_case_insensitive(collection, seeded):
    upper = await search_auctions(collection, "GAMING", AuctionFilters())
    lower = await search_auctions(collection, "gaming", AuctionFilters())
    assert _titles(upper) == _titles(lower)


async def test_search_combines_with_price(collection, seeded):
    items = await search_auctions(collection, "gaming", AuctionFilters(min_price=500))
    assert _titles(items) == ["Gaming Laptop"]


async def test_search_respects_limit(collection, seeded):
    items = await search_auctions(collection, "a", AuctionFilters(limit=2))
    assert len(items) <= 2


async def test_search_no_match(collection, seeded):
    assert await search_auctions(collection, "nonexistent", AuctionFilters()) == []


@pytest.mark.parametrize("q", [None, "", "   "])
async def test_search_requires_query(collection, seeded, q):
    with pytest.raises(MissingQueryParameter):
        await search_auctions(collection, q, AuctionFilters())


async def test_get_by_id(collection, seeded):
    target = seeded["Vintage Guitar"]
    found = await get_auction_by_id(collection, str(target["_id"]))
    assert found["title"] == "Vintage Guitar"
    assert found["id"] == str(target["_id"])


async def test_get_by_id_not_found(collection, seeded):
    with pytest.raises(NotFound):
        await get_auction_by_id(collection, str(ObjectId()))


async def test_get_by_id_malformed(collection):
    with pytest.raises(InvalidIdentifier):
        await get_auction_by_id(collection, "invalid-id")
