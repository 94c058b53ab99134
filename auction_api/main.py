import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auction_api.core.config import settings
from auction_api.core.errors import AuctionAPIError
from auction_api.database.mongo import MongoDB
from auction_api.routers.auctions_router import router as auctions_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

app = FastAPI(title="Auction API", version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup():
    app.state.mongodb = MongoDB(settings.MONGO_URL, settings.DATABASE_NAME)
    await app.state.mongodb.connect()

@app.on_event("shutdown")
async def shutdown():
    mongodb = getattr(app.state, "mongodb", None)
    if mongodb:
        await mongodb.close()


# --------------------------------------------------
# ❌ Enveloppes d'erreur
# --------------------------------------------------
@app.exception_handler(AuctionAPIError)
async def auction_error_handler(request: Request, exc: AuctionAPIError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": "Server error"})


app.include_router(auctions_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "message": "Auction API",
        "version": API_VERSION,
        "endpoints": {
            "GET /api/auctions": "Get all auctions (query: minPrice, maxPrice, limit)",
            "GET /api/auctions/search": "Search auctions (query: q, minPrice, maxPrice, limit)",
            "GET /api/auctions/:id": "Get auction by ID",
            "GET /api/auctions/:id/similar": "Get similar auctions (query: limit)",
        },
    }


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


def run():
    uvicorn.run("auction_api.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
