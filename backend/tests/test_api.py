"""Tests for the HTTP layer: parameter handling and status codes."""

import pytest
from fastapi.testclient import TestClient

from searchrelay.config import get_settings
from searchrelay.main import app, get_cache_store, parse_page


@pytest.fixture
def client(settings, memory_store, fake_session, monkeypatch):
    monkeypatch.setattr("searchrelay.search.clients.aliexpress._get_session", lambda: fake_session)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_cache_store] = lambda: memory_store
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestParsePage:
    @pytest.mark.parametrize("raw", [None, "", "  "])
    def test_absent_is_one(self, raw):
        assert parse_page(raw) == 1

    def test_integer(self):
        assert parse_page(" 3 ") == 3

    @pytest.mark.parametrize("raw", ["abc", "0", "-2", "1.5"])
    def test_invalid_raises(self, raw):
        with pytest.raises(ValueError):
            parse_page(raw)


class TestRoutes:
    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.text == "API is running!"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestSearchEndpoint:
    @pytest.mark.parametrize("url", ["/search", "/search?q=", "/search?q=%20%20"])
    def test_missing_query_rejected_without_network(self, client, fake_session, memory_store, url):
        resp = client.get(url)

        assert resp.status_code == 400
        assert "q" in resp.json()["error"]
        fake_session.get.assert_not_called()
        assert memory_store.save_count == 0

    def test_defaults_page_one_and_sort_default(self, client, fake_session, make_response, upstream_payload):
        fake_session.get.return_value = make_response(200, upstream_payload)

        resp = client.get("/search", params={"q": "usb hub"})

        assert resp.status_code == 200
        assert len(resp.json()) == 3
        params = fake_session.get.call_args.kwargs["params"]
        assert params == {"q": "usb hub", "page": "1", "sort": "default"}

    def test_results_shape(self, client, fake_session, make_response, upstream_payload):
        fake_session.get.return_value = make_response(200, upstream_payload)

        body = client.get("/search", params={"q": "usb hub", "page": "2", "sort": "newest"}).json()

        assert body[0] == {
            "title": "Product 1",
            "price": 1.0,
            "image": "https://ae01.alicdn.com/kf/a.jpg",
            "url": "https://www.aliexpress.com/item/1.html",
        }

    def test_second_request_served_from_cache(self, client, fake_session, make_response, upstream_payload):
        fake_session.get.return_value = make_response(200, upstream_payload)

        first = client.get("/search", params={"q": "usb hub"})
        second = client.get("/search", params={"q": "usb hub"})

        assert first.content == second.content
        assert fake_session.get.call_count == 1

    @pytest.mark.parametrize("page", ["abc", "0", "-1"])
    def test_invalid_page_rejected(self, client, fake_session, page):
        resp = client.get("/search", params={"q": "usb hub", "page": page})

        assert resp.status_code == 400
        fake_session.get.assert_not_called()

    def test_invalid_sort_rejected(self, client, fake_session):
        resp = client.get("/search", params={"q": "usb hub", "sort": "cheapest"})

        assert resp.status_code == 400
        assert "sort" in resp.json()["error"]
        fake_session.get.assert_not_called()

    def test_odd_upstream_types_still_returned(self, client, fake_session, make_response):
        fake_session.get.return_value = make_response(
            200, {"result": {"resultList": [{"item": {"title": 12345, "sku": {"def": {"promotionPrice": {"value": 3.5}}}}}]}}
        )

        resp = client.get("/search", params={"q": "usb hub"})

        assert resp.status_code == 200
        assert resp.json() == [{"title": 12345, "price": {"value": 3.5}}]

    def test_unexpected_error_is_json_500(self, settings, memory_store, monkeypatch):
        def broken_search(*args, **kwargs):
            raise RuntimeError("projection blew up")

        monkeypatch.setattr("searchrelay.main.run_search", broken_search)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_cache_store] = lambda: memory_store
        try:
            resp = TestClient(app, raise_server_exceptions=False).get("/search", params={"q": "usb hub"})
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == {"error": "projection blew up"}

    def test_all_keys_failing_is_500(self, client, fake_session, make_response):
        fake_session.get.side_effect = [make_response(403), make_response(403)]

        resp = client.get("/search", params={"q": "usb hub"})

        assert resp.status_code == 500
        assert "2" in resp.json()["error"]
        assert "403" in resp.json()["error"]

    def test_missing_search_key_is_500(self, client, settings, fake_session):
        app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"rapidapi_key": ""})

        resp = client.get("/search", params={"q": "usb hub"})

        assert resp.status_code == 500
        assert "RAPIDAPI_KEY" in resp.json()["error"]
        fake_session.get.assert_not_called()
