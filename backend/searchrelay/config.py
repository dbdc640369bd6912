"""Application configuration."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings from env."""

    # Empty key disables query optimization
    openai_api_key: str = ""
    openai_base_url: str | None = None
    model_query_optimizer: str = "gpt-4o-mini"
    optimizer_timeout_seconds: float = 10.0

    # One RapidAPI key or a comma-separated list, tried in order
    rapidapi_key: str = ""
    rapidapi_host: str = "aliexpress-datahub.p.rapidapi.com"
    search_url: str = "https://aliexpress-datahub.p.rapidapi.com/item_search_2"
    search_timeout_seconds: float = 15.0

    cache_file: str = "search_cache.json"

    log_level: str = "INFO"
    port: int = 3000

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
