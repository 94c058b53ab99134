from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from auction_api.core.config import settings
from auction_api.core.errors import InvalidFilterParameter


class AuctionCreate(BaseModel):
    """Enregistrement validé avant insertion (utilisé par le seeder)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    start_price: float = Field(..., ge=0)
    reserve_price: float = Field(..., ge=0)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class AuctionFilters(BaseModel):
    """Filtres prix / limite, parsés depuis les query params bruts."""
    model_config = ConfigDict(populate_by_name=True)

    min_price: Optional[float] = Field(None, alias="minPrice", allow_inf_nan=False)
    max_price: Optional[float] = Field(None, alias="maxPrice", allow_inf_nan=False)
    limit: Optional[int] = Field(None, ge=1, le=settings.MAX_LIMIT)

    @field_validator("min_price", "max_price", "limit", mode="before")
    @classmethod
    def _blank_as_missing(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @classmethod
    def from_query(
        cls,
        min_price: str | None = None,
        max_price: str | None = None,
        limit: str | None = None,
    ) -> "AuctionFilters":
        raw = {"minPrice": min_price, "maxPrice": max_price, "limit": limit}
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            name = str(e.errors()[0]["loc"][0])
            raise InvalidFilterParameter(name, raw.get(name)) from e
