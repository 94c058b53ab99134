import os
from dotenv import load_dotenv

load_dotenv()  # charge .env


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Settings:
    MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    DATABASE_NAME: str = os.getenv("DATABASE_NAME", "auction_db")
    ENV: str = os.getenv("ENV", "development")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: list[str] = _split_origins(os.getenv("CORS_ORIGINS", "*"))

    # Cap applied when a request carries no limit
    DEFAULT_LIMIT: int = int(os.getenv("DEFAULT_LIMIT", "100"))
    # Largest limit a request may ask for
    MAX_LIMIT: int = int(os.getenv("MAX_LIMIT", "1000"))
    # Words shorter than this are ignored by the similar-items lookup
    MIN_KEYWORD_LENGTH: int = int(os.getenv("MIN_KEYWORD_LENGTH", "3"))

settings = Settings()
