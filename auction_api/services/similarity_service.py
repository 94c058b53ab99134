"""
Enchères similaires : recouvrement naïf de mots-clés.

Les mots du titre et de la description de l'enchère de référence sont
comparés à ceux des autres enchères ; un seul mot commun suffit. Aucun
classement par nombre de mots communs (piste d'évolution : scorer par
``len(overlap)``).
"""
import logging
import re
from typing import Iterable, List, Set, Tuple

from motor.motor_asyncio import AsyncIOMotorCollection

from auction_api.core.config import settings
from auction_api.models.auction_models import AuctionFilters
from auction_api.services.auction_service import (
    find_auction_document,
    resolve_limit,
    serialize_auction,
)

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[^\W_]+")


def tokenize(*texts: str | None, min_length: int | None = None) -> Set[str]:
    """Mots en minuscules, découpés sur tout caractère non alphanumérique."""
    if min_length is None:
        min_length = settings.MIN_KEYWORD_LENGTH
    tokens: Set[str] = set()
    for text in texts:
        if not text:
            continue
        tokens.update(w for w in _WORD_RE.findall(text.lower()) if len(w) >= min_length)
    return tokens


def auction_keywords(doc: dict) -> Set[str]:
    return tokenize(doc.get("title"), doc.get("description"))


def build_keyword_prefilter(keywords: Iterable[str]) -> dict:
    # Pré-filtre côté Mongo ; l'intersection exacte est vérifiée ensuite
    pattern = "|".join(re.escape(k) for k in sorted(keywords))
    return {
        "$or": [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    }


async def find_similar_auctions(
    collection: AsyncIOMotorCollection,
    auction_id: str,
    filters: AuctionFilters,
) -> Tuple[dict, List[dict]]:
    """Retourne (enchère de référence, enchères similaires)."""
    reference = await find_auction_document(collection, auction_id)
    keywords = auction_keywords(reference)
    limit = resolve_limit(filters)
    if not keywords:
        logger.debug("Auction %s has no keywords, nothing to compare", auction_id)
        return serialize_auction(reference), []

    query = {"_id": {"$ne": reference["_id"]}, **build_keyword_prefilter(keywords)}
    similar = []
    cursor = collection.find(query)
    try:
        async for doc in cursor:
            if keywords & auction_keywords(doc):
                similar.append(serialize_auction(doc))
                if len(similar) >= limit:
                    break
    finally:
        await cursor.close()
    logger.debug("Auction %s: %d similar auction(s)", auction_id, len(similar))
    return serialize_auction(reference), similar
