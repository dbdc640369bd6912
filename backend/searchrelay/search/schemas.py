from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MAX_RESULTS = 3


class SortOrder(str, Enum):
    DEFAULT = "default"
    ORDERS = "orders"
    NEWEST = "newest"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"


class SearchRequest(BaseModel):
    """One inbound product search. Frozen so the cache key cannot drift."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1, description="Raw user query, never the optimized one")
    page: int = Field(default=1, ge=1)
    sort: SortOrder = SortOrder.DEFAULT


class ResultItem(BaseModel):
    """
    Projected upstream product. Values are passed through as upstream sent them;
    only fields present upstream are set, so dump with exclude_unset=True.
    """

    title: Any = None
    price: Any = None
    image: Any = None
    url: Any = None

    def to_json(self) -> dict:
        return self.model_dump(exclude_unset=True)
