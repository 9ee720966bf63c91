"""
API Endpoint Tests

Order list read/write endpoints, export, dashboard and theme.
"""

import logging

import pytest
from fastapi.testclient import TestClient

import api.main as api_main
from core.theme import ThemePreference


@pytest.fixture
def client(tmp_path, monkeypatch):
    api_main.get_engine.cache_clear()
    store = ThemePreference(tmp_path / "theme.json")
    monkeypatch.setattr(api_main, "get_theme_store", lambda: store)
    yield TestClient(api_main.app)
    api_main.get_engine.cache_clear()


# ==========================================================
# Order list
# ==========================================================
class TestOrdersRead:
    def test_get_orders(self, client):
        resp = client.get("/orders")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["rows"]) == 10
        assert data["pager"]["total_pages"] == 2

    def test_page_two(self, client):
        data = client.post("/orders/page", json={"page": 2}).json()
        assert [r["key"] for r in data["rows"]] == ["11", "12", "13"]


class TestOrdersWrite:
    def test_search(self, client):
        data = client.post("/orders/search", json={"term": "drew"}).json()
        assert data["total_matching"] == 2
        assert data["view"]["current_page"] == 1

    def test_status_filter(self, client):
        data = client.post("/orders/status", json={"status": "Complete"}).json()
        assert data["total_matching"] == 2
        assert data["pager"]["total_pages"] == 1

    def test_invalid_status_rejected(self, client):
        resp = client.post("/orders/status", json={"status": "Shipped"})
        assert resp.status_code == 422
        assert resp.json()["type"] == "InvalidEnumValue"
        assert client.get("/orders").json()["view"]["status_filter"] == "All"

    def test_sort_toggle(self, client):
        first = client.post("/orders/sort", json={"key": "user"}).json()
        second = client.post("/orders/sort", json={"key": "user"}).json()
        assert first["view"]["sort_direction"] == "ascending"
        assert second["view"]["sort_direction"] == "descending"

    def test_invalid_sort_key(self, client):
        resp = client.post("/orders/sort", json={"key": "avatar"})
        assert resp.status_code == 422
        assert resp.json()["type"] == "InvalidFieldKey"

    def test_page_size(self, client):
        data = client.post("/orders/page-size", json={"page_size": 20}).json()
        assert len(data["rows"]) == 13
        resp = client.post("/orders/page-size", json={"page_size": 15})
        assert resp.status_code == 422
        assert resp.json()["type"] == "InvalidPageSize"

    def test_toggle_record(self, client):
        data = client.post("/orders/1/toggle").json()
        assert data["selected_keys"] == ["1", "4"]

    def test_toggle_unknown_record(self, client):
        resp = client.post("/orders/999/toggle")
        assert resp.status_code == 404
        assert resp.json()["type"] == "RecordNotFound"

    def test_select_all(self, client):
        data = client.post("/orders/select-all", json={}).json()
        assert len(data["selected_keys"]) == 13
        assert data["select_all"] is True
        data = client.post("/orders/select-all", json={"scope": "all"}).json()
        assert data["selected_keys"] == []

    def test_select_all_bad_scope(self, client):
        assert client.post("/orders/select-all", json={"scope": "page"}).status_code == 422

    def test_view_and_reset(self, client):
        data = client.post(
            "/orders/view",
            json={"search_term": "lane", "status_filter": "Rejected", "sort_key": "date", "page_size": 20},
        ).json()
        assert data["total_matching"] == 5
        assert data["view"]["page_size"] == 20
        data = client.post("/orders/reset").json()
        assert data["total_matching"] == 13
        assert data["view"]["sort_key"] is None

    @pytest.mark.parametrize(
        "body, error_type",
        [
            ({"status_filter": "Shipped", "page_size": 20}, "InvalidEnumValue"),
            ({"sort_key": "avatar"}, "InvalidFieldKey"),
            ({"page_size": 7}, "InvalidPageSize"),
        ],
    )
    def test_invalid_view_rejected(self, client, body, error_type):
        client.post("/orders/status", json={"status": "Pending"})
        before = client.get("/orders").json()["view"]
        resp = client.post("/orders/view", json=body)
        assert resp.status_code == 422
        assert resp.json()["type"] == error_type
        assert client.get("/orders").json()["view"] == before


class TestExport:
    def test_csv(self, client):
        client.post("/orders/status", json={"status": "Pending"})
        resp = client.get("/orders/export")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        lines = resp.text.strip().splitlines()
        assert lines[0].startswith("order_id,user")
        assert len(lines) == 3


# ==========================================================
# Dashboard / theme
# ==========================================================
class TestDashboardAndTheme:
    def test_dashboard(self, client):
        data = client.get("/dashboard").json()
        assert data["theme"] == "light"
        assert len(data["stat_cards"]) == 4

    def test_theme_roundtrip(self, client, tmp_path):
        assert client.get("/theme").json() == {"theme": "light"}
        assert client.put("/theme", json={"theme": "dark"}).json() == {"theme": "dark"}
        assert ThemePreference(tmp_path / "theme.json").theme == "dark"
        assert client.post("/theme/toggle").json() == {"theme": "light"}

    def test_theme_invalid(self, client):
        assert client.put("/theme", json={"theme": "blue"}).status_code == 422

    def test_theme_write_failure(self, client, monkeypatch, caplog):
        store = api_main.get_theme_store()

        def fail_save(theme):
            raise OSError("read-only file system")

        monkeypatch.setattr(store, "_save", fail_save)
        with caplog.at_level(logging.ERROR, logger="api.main"):
            put = client.put("/theme", json={"theme": "dark"})
            toggle = client.post("/theme/toggle")
        assert put.status_code == 500
        assert put.json() == {"error": "read-only file system", "type": "OSError"}
        assert toggle.status_code == 500
        assert "theme_put failed" in caplog.text
        assert client.get("/theme").json() == {"theme": "light"}

    def test_dark_theme_colors_rows(self, client):
        client.put("/theme", json={"theme": "dark"})
        data = client.post("/orders/status", json={"status": "Rejected"}).json()
        assert data["rows"][0]["status_color"]["dot"] == "#FFFFFF66"
