from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
import logging

logger = logging.getLogger(__name__)

AUCTIONS_COLLECTION = "auctions"


class MongoDB:
    """Handle MongoDB : ouvert au démarrage, fermé à l'arrêt, injecté dans les routes."""

    def __init__(self, url: str, database_name: str):
        self.url = url
        self.database_name = database_name
        self.client: AsyncIOMotorClient | None = None
        self.db = None

    # 🔌 Connexion
    async def connect(self):
        try:
            self.client = AsyncIOMotorClient(self.url)
            self.db = self.client[self.database_name]

            # Ping pour vérifier connexion
            await self.client.admin.command("ping")

            logger.info("✅ Connected to MongoDB (%s)", self.database_name)

        except Exception as e:
            logger.error("❌ MongoDB connection failed", exc_info=True)
            self.client = None
            self.db = None
            raise e

    # 🔌 Fermeture propre
    async def close(self):
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("🔌 MongoDB connection closed")

    @property
    def auctions(self) -> AsyncIOMotorCollection:
        if self.db is None:
            raise RuntimeError("MongoDB is not connected")
        return self.db[AUCTIONS_COLLECTION]


# 📦 Dépendance FastAPI
def get_auctions_collection(request: Request) -> AsyncIOMotorCollection:
    return request.app.state.mongodb.auctions
