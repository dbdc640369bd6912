"""
Search pipeline: cache lookup -> query optimization -> credential-rotating search -> cache write.

Single entry point: run_search(request, cache_store=...).
"""

import logging
from collections.abc import Callable, Sequence

from searchrelay.config import Settings, get_settings
from searchrelay.search.cache import CacheStore, cache_key
from searchrelay.search.clients import execute_search
from searchrelay.search.credentials import normalize_credentials
from searchrelay.search.errors import MissingCredentialError
from searchrelay.search.query_optimizer import optimize_query
from searchrelay.search.schemas import SearchRequest

logger = logging.getLogger(__name__)


def run_search(
    request: SearchRequest,
    *,
    cache_store: CacheStore,
    settings: Settings | None = None,
    credentials: str | Sequence[str] | None = None,
    optimizer: Callable[..., str] = optimize_query,
    executor: Callable[..., list] = execute_search,
) -> list[dict]:
    """
    Run one product search and return the projected results as JSON-ready dicts.

    Args:
        request: Validated search request; its raw query is the cache key.
        cache_store: Where result lists are persisted between requests.
        settings: Defaults to the environment settings.
        credentials: Overrides RAPIDAPI_KEY (single key, comma list or sequence).
        optimizer, executor: Injected for tests.

    Raises:
        MissingCredentialError: no search key configured.
        AllCredentialsExhausted: every key failed.
    """
    settings = settings or get_settings()
    keys = normalize_credentials(credentials if credentials is not None else settings.rapidapi_key)
    if not keys:
        raise MissingCredentialError("RapidAPI key is required. Set RAPIDAPI_KEY in .env file")

    key = cache_key(request)
    cache = cache_store.load()
    if key in cache:
        logger.info("cache hit key=%r", key)
        return cache[key]

    logger.info("cache miss key=%r, searching with %d key(s)", key, len(keys))
    search_query = optimizer(request.query, settings=settings)
    items = executor(search_query, request.page, request.sort, keys, settings=settings)
    results = [item.to_json() for item in items]

    cache[key] = results
    cache_store.save(cache)
    return results
