"""
AliExpress DataHub (RapidAPI) search client with credential rotation.
Reuses a single requests.Session for connection pooling.
"""

import logging
from typing import Any, Optional

import requests

from searchrelay.config import Settings, get_settings
from searchrelay.search.credentials import mask_credential
from searchrelay.search.errors import AllCredentialsExhausted
from searchrelay.search.fallback import AttemptResult, Exhausted, RecoverableFailure, Success, first_success
from searchrelay.search.schemas import MAX_RESULTS, ResultItem, SortOrder

logger = logging.getLogger(__name__)

_session: Optional[requests.Session] = None

_MISSING = object()


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


def _deep_get(d: Any, *keys: str) -> Any:
    """Walk nested dicts; returns _MISSING as soon as a key is absent."""
    for key in keys:
        if not isinstance(d, dict) or key not in d:
            return _MISSING
        d = d[key]
    return d


def normalize_scheme(url: Any) -> Any:
    """Protocol-relative URLs ("//host/path") get an https: prefix; anything else is returned as-is."""
    if isinstance(url, str) and url.startswith("//"):
        return f"https:{url}"
    return url


def project_results(data: dict) -> list[ResultItem]:
    """Map the first MAX_RESULTS upstream entries to ResultItem, leaving absent fields unset."""
    result_list = _deep_get(data, "result", "resultList")
    if not isinstance(result_list, list):
        return []

    items: list[ResultItem] = []
    for entry in result_list[:MAX_RESULTS]:
        fields = {
            "title": _deep_get(entry, "item", "title"),
            "price": _deep_get(entry, "item", "sku", "def", "promotionPrice"),
            "image": normalize_scheme(_deep_get(entry, "item", "image")),
            "url": normalize_scheme(_deep_get(entry, "item", "itemUrl")),
        }
        items.append(ResultItem(**{k: v for k, v in fields.items() if v is not _MISSING}))
    return items


def _search_with_key(
    session: requests.Session,
    settings: Settings,
    params: dict[str, str],
    api_key: str,
) -> AttemptResult:
    masked = mask_credential(api_key)
    headers = {
        "x-rapidapi-host": settings.rapidapi_host,
        "x-rapidapi-key": api_key,
    }
    try:
        response = session.get(
            settings.search_url,
            params=params,
            headers=headers,
            timeout=settings.search_timeout_seconds,
        )
    except requests.exceptions.RequestException as e:
        logger.warning("AliExpress request failed with key %s: %s", masked, e)
        return RecoverableFailure(f"Request error: {e}")

    if response.status_code == 403:
        logger.warning("AliExpress key %s rejected (403), trying next key", masked)
        return RecoverableFailure("HTTP error! status: 403")

    if not response.ok:
        body = response.text
        logger.error("AliExpress HTTP %s with key %s, body: %s", response.status_code, masked, body)
        return RecoverableFailure(f"HTTP error! status: {response.status_code}, body: {body}")

    try:
        data = response.json()
    except ValueError as e:
        logger.error("AliExpress returned invalid JSON with key %s: %s", masked, e)
        return RecoverableFailure(f"Invalid JSON response: {e}")

    if not isinstance(data, dict):
        return RecoverableFailure("Unexpected response body: expected a JSON object")

    # Upstream reports some logical errors with HTTP 200
    if data.get("error"):
        logger.warning("AliExpress API error with key %s: %s", masked, data["error"])
        return RecoverableFailure(f"API Error: {data['error']}")

    return Success(project_results(data))


def execute_search(
    query: str,
    page: int,
    sort: SortOrder | str,
    credentials: list[str],
    settings: Settings | None = None,
    session: requests.Session | None = None,
) -> list[ResultItem]:
    """
    Search with each credential in order until one succeeds.

    Raises AllCredentialsExhausted with the attempt count and the last
    failure when no credential produces a result.
    """
    settings = settings or get_settings()
    session = session or _get_session()
    params = {
        "q": query,
        "page": str(page),
        "sort": sort.value if isinstance(sort, SortOrder) else str(sort),
    }

    outcome = first_success(
        credentials,
        lambda key: _search_with_key(session, settings, params, key),
    )
    if isinstance(outcome, Exhausted):
        logger.error("All %d AliExpress key(s) failed for %r: %s", outcome.attempts, query, outcome.last_reason)
        raise AllCredentialsExhausted(outcome.attempts, outcome.last_reason)

    logger.info("AliExpress search %r page=%s sort=%s returned %d item(s)", query, page, params["sort"], len(outcome.value))
    return outcome.value
