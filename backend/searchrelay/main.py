"""
AliExpress search relay API: GET /search?q=&page=&sort=
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from searchrelay.config import Settings, get_settings
from searchrelay.search import CacheStore, JsonFileCacheStore, SearchRelayError, SearchRequest, SortOrder, run_search

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logging.basicConfig(level=get_settings().log_level.upper(), format=LOG_FORMAT, force=True)
logger = logging.getLogger(__name__)

app = FastAPI(title="AliExpress Search Relay", version="0.1.0")


def get_cache_store(settings: Settings = Depends(get_settings)) -> CacheStore:
    return JsonFileCacheStore(settings.cache_file)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def parse_page(raw: Optional[str]) -> int:
    """Absent or blank page means 1. Anything else must be a positive integer."""
    if raw is None or not raw.strip():
        return 1
    page = int(raw.strip())
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    return page


@app.get("/", response_class=PlainTextResponse)
def root():
    return "API is running!"


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/search")
def search(
    q: Optional[str] = None,
    page: Optional[str] = None,
    sort: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    cache_store: CacheStore = Depends(get_cache_store),
):
    """
    Search AliExpress for q and return up to 3 products (title, price, image, url).

    400 for a missing q or an invalid page/sort, 500 with {"error": ...} when the search fails.
    """
    if not q or not q.strip():
        return _error(400, 'Search query parameter "q" is required')

    try:
        request = SearchRequest(
            query=q,
            page=parse_page(page),
            sort=sort.strip() if sort and sort.strip() else SortOrder.DEFAULT,
        )
    except ValidationError as e:
        errors = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        return _error(400, f"Invalid search parameters: {errors}")
    except ValueError as e:
        return _error(400, f"Invalid page parameter: {e}")

    try:
        return run_search(request, cache_store=cache_store, settings=settings)
    except SearchRelayError as e:
        logger.error("Search failed for %r: %s", q, e)
        return _error(500, str(e))
    except Exception as e:
        logger.exception("Unexpected error searching for %r", q)
        return _error(500, str(e) or type(e).__name__)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
