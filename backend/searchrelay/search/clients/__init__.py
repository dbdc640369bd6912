"""Product search API clients."""

from .aliexpress import execute_search, normalize_scheme, project_results

__all__ = ["execute_search", "normalize_scheme", "project_results"]
