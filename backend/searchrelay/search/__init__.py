"""Product search: cache, query optimization, credential rotation, AliExpress client."""

from .cache import CacheStore, InMemoryCacheStore, JsonFileCacheStore, cache_key
from .clients import execute_search
from .credentials import mask_credential, normalize_credentials
from .errors import AllCredentialsExhausted, MissingCredentialError, SearchRelayError
from .fallback import Exhausted, RecoverableFailure, Success, first_success
from .pipeline import run_search
from .query_optimizer import optimize_query
from .schemas import MAX_RESULTS, ResultItem, SearchRequest, SortOrder

__all__ = [
    "run_search",
    "optimize_query",
    "execute_search",
    "normalize_credentials",
    "mask_credential",
    "first_success",
    "Success",
    "RecoverableFailure",
    "Exhausted",
    "cache_key",
    "CacheStore",
    "JsonFileCacheStore",
    "InMemoryCacheStore",
    "SearchRequest",
    "SortOrder",
    "ResultItem",
    "MAX_RESULTS",
    "SearchRelayError",
    "MissingCredentialError",
    "AllCredentialsExhausted",
]
