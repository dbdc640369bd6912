"""Pytest fixtures for the search relay tests."""

from unittest.mock import MagicMock

import pytest

from searchrelay.config import Settings
from searchrelay.search import InMemoryCacheStore


def _make_response(status_code: int = 200, json_body=None, text: str = ""):
    """Stand-in for requests.Response with just the attributes the client reads."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.text = text
    if isinstance(json_body, Exception):
        resp.json.side_effect = json_body
    else:
        resp.json.return_value = json_body
    return resp


def _make_item(title="Item", price=9.99, image="//ae01.alicdn.com/kf/a.jpg", url="//www.aliexpress.com/item/1.html"):
    return {
        "item": {
            "title": title,
            "sku": {"def": {"promotionPrice": price}},
            "image": image,
            "itemUrl": url,
        }
    }


@pytest.fixture
def settings():
    """Settings with two search keys and query optimization off; ignores any local .env."""
    return Settings(
        _env_file=None,
        openai_api_key="",
        rapidapi_key="key-one-1111, key-two-2222",
        cache_file="unused.json",
    )


@pytest.fixture
def settings_with_llm(settings):
    return settings.model_copy(update={"openai_api_key": "test-key"})


@pytest.fixture
def upstream_payload():
    """Upstream body with five results; only the first three may be returned."""
    return {
        "result": {
            "status": {"code": 200},
            "resultList": [
                _make_item(title=f"Product {i}", price=float(i), url=f"//www.aliexpress.com/item/{i}.html")
                for i in range(1, 6)
            ],
        }
    }


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def make_item():
    return _make_item


@pytest.fixture
def fake_session():
    return MagicMock()


@pytest.fixture
def memory_store():
    return InMemoryCacheStore()
