"""
Seeder CLI : charge le jeu d'enchères d'exemple dans MongoDB.

    auction-seed               # insère si la collection est vide
    auction-seed --force       # vide la collection puis insère
    auction-seed --delete      # vide la collection
    auction-seed --list        # affiche les enchères stockées
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError

from auction_api.core.config import settings
from auction_api.database.mongo import MongoDB
from auction_api.models.auction_models import AuctionCreate

logger = logging.getLogger(__name__)

SAMPLE_DATA_PATH = Path(__file__).resolve().parent / "data" / "sample_auctions.json"


class SeedError(Exception):
    pass


def load_sample_auctions(path: Path = SAMPLE_DATA_PATH) -> List[AuctionCreate]:
    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise SeedError(f"Expected a JSON array of auctions in {path}")
    auctions = []
    for i, record in enumerate(records):
        try:
            auctions.append(AuctionCreate.model_validate(record))
        except ValidationError as e:
            raise SeedError(f"Invalid auction #{i} in {path}: {e}") from e
    return auctions


async def seed_auctions(
    collection: AsyncIOMotorCollection,
    auctions: List[AuctionCreate],
    force: bool = False,
) -> int:
    existing = await collection.count_documents({})
    if existing and not force:
        raise SeedError(
            f"Collection already holds {existing} auction(s); use --force to replace them"
        )
    if force:
        await delete_all_auctions(collection)
    if not auctions:
        return 0
    result = await collection.insert_many([a.model_dump() for a in auctions])
    logger.info("🌱 Inserted %d auction(s)", len(result.inserted_ids))
    return len(result.inserted_ids)


async def delete_all_auctions(collection: AsyncIOMotorCollection) -> int:
    result = await collection.delete_many({})
    logger.info("🗑️ Deleted %d auction(s)", result.deleted_count)
    return result.deleted_count


async def list_all_auctions(collection: AsyncIOMotorCollection) -> List[dict]:
    cursor = collection.find({}).sort("created_at", -1)
    return [doc async for doc in cursor]


def format_auction_table(auctions: List[dict]) -> str:
    if not auctions:
        return "(No auctions found)"
    lines = [f"{'ID':<24} | {'Title':<30} | {'Start':>10} | {'Reserve':>10}", "-" * 82]
    for a in auctions:
        lines.append(
            f"{str(a['_id']):<24} | {a['title'][:30]:<30} | "
            f"{a['start_price']:>10.2f} | {a['reserve_price']:>10.2f}"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Seed the auction collection with sample data")
    action = ap.add_mutually_exclusive_group()
    action.add_argument("--force", action="store_true", help="delete existing auctions before seeding")
    action.add_argument("--delete", action="store_true", help="delete all auctions and exit")
    action.add_argument("--list", action="store_true", help="list stored auctions and exit")
    ap.add_argument("--file", type=Path, default=SAMPLE_DATA_PATH, help="JSON file of auctions to load")
    return ap


async def run(args: argparse.Namespace, mongodb: MongoDB) -> int:
    await mongodb.connect()
    try:
        collection = mongodb.auctions
        if args.delete:
            await delete_all_auctions(collection)
        elif args.list:
            print(format_auction_table(await list_all_auctions(collection)))
        else:
            auctions = load_sample_auctions(args.file)
            count = await seed_auctions(collection, auctions, force=args.force)
            print(f"✅ Seeded {count} auction(s) into '{mongodb.database_name}'")
    finally:
        await mongodb.close()
    return 0


def main(argv: List[str] | None = None) -> int:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)
    mongodb = MongoDB(settings.MONGO_URL, settings.DATABASE_NAME)
    try:
        return asyncio.run(run(args, mongodb))
    except SeedError as e:
        logger.error("❌ %s", e)
        return 1
    except Exception:
        logger.error("❌ Seeding failed", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
