"""
Run one search through the full pipeline: cache -> optimize -> AliExpress.

Run from backend with:
  python scripts/run_search.py "wireless earbuds"
  python scripts/run_search.py "cheap phone case for iphone 15" --page 2 --sort price_low
  python scripts/run_search.py "usb c hub" --no-cache

Requires RAPIDAPI_KEY in env (or .env). OPENAI_API_KEY is optional; without it
the query is searched as typed.
"""

import argparse
import json
import os
import sys
from textwrap import shorten

# Add backend root so "searchrelay" is importable from scripts/ or from backend/
_backend_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_root not in sys.path:
    sys.path.insert(0, _backend_root)

from searchrelay.config import get_settings
from searchrelay.search import (
    InMemoryCacheStore,
    JsonFileCacheStore,
    SearchRelayError,
    SearchRequest,
    SortOrder,
    normalize_credentials,
    optimize_query,
    run_search,
)


def _section(title: str) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)


def main() -> None:
    parser = argparse.ArgumentParser(description="Search AliExpress through the relay pipeline")
    parser.add_argument("query")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--sort", choices=[s.value for s in SortOrder], default=SortOrder.DEFAULT.value)
    parser.add_argument("--no-cache", action="store_true", help="Use a throwaway in-memory cache")
    args = parser.parse_args()

    settings = get_settings()
    keys = normalize_credentials(settings.rapidapi_key)
    if not keys:
        print("Missing RAPIDAPI_KEY (set it or use .env)")
        sys.exit(1)

    _section("Configuration")
    print(f"  RapidAPI keys:     {len(keys)}")
    print(f"  Query optimizer:   {'on (' + settings.model_query_optimizer + ')' if settings.openai_api_key else 'off'}")
    print(f"  Cache:             {'in-memory' if args.no_cache else settings.cache_file}")

    request = SearchRequest(query=args.query, page=args.page, sort=args.sort)
    store = InMemoryCacheStore() if args.no_cache else JsonFileCacheStore(settings.cache_file)

    def show_optimization(query: str, settings=None) -> str:
        # Only reached on a cache miss
        optimized = optimize_query(query, settings=settings)
        _section("Query optimization")
        print(f"  original:  {query}")
        print(f"  optimized: {optimized}")
        return optimized

    try:
        results = run_search(request, cache_store=store, settings=settings, optimizer=show_optimization)
    except SearchRelayError as e:
        print(f"  FAILED: {e}")
        sys.exit(2)

    _section("Results")
    if not results:
        print("  (no results)")
    for idx, item in enumerate(results, start=1):
        print(f"  {idx}. {shorten(str(item.get('title', '')), width=72, placeholder='…')}")
        print(f"     price: {item.get('price')}  url: {item.get('url')}")
    print()
    print(json.dumps(results, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
