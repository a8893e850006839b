"""Tests for the dashboard web host, driven in-process over ASGI."""

import asyncio
from unittest.mock import MagicMock

import httpx
import pytest

from widget.config.schema import WidgetConfig
from widget.dashboard import VERSION_HEADER, create_app
from widget.ingest.weatherapi_client import WeatherApiClient
from widget.models.common import MSG_CITY_REQUIRED

SETTLE = 0.2


@pytest.fixture
def provider_client(forecast_raw: dict, search_raw: list) -> MagicMock:
    client = MagicMock(spec=WeatherApiClient)
    client.get_forecast.return_value = forecast_raw
    client.search.return_value = search_raw
    return client


def _run(config: WidgetConfig, client: MagicMock, scenario) -> None:
    async def go():
        app = create_app(config, client)
        async with app.router.lifespan_context(app):
            session = app.state.session
            await session.settle()
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://widget.test") as http:
                await scenario(http, session)

    asyncio.run(go())


class TestPage:
    def test_index_renders_loaded_widget(self, widget_config, provider_client):
        async def scenario(http, session):
            resp = await http.get("/")
            assert resp.status_code == 200
            assert "text/html" in resp.headers["content-type"]
            assert "current-weather" in resp.text
            assert "Hôm nay" in resp.text

        _run(widget_config, provider_client, scenario)
        provider_client.get_forecast.assert_called_once_with("London")

    def test_fragment_versioning(self, widget_config, provider_client):
        async def scenario(http, session):
            resp = await http.get("/widget")
            assert resp.status_code == 200
            version = int(resp.headers[VERSION_HEADER])
            assert "<html" not in resp.text

            unchanged = await http.get("/widget", params={"since": version})
            assert unchanged.status_code == 204

            await http.post("/api/metric", json={"metric": "UV Index"})
            changed = await http.get("/widget", params={"since": version})
            assert changed.status_code == 200
            assert int(changed.headers[VERSION_HEADER]) > version
            assert "Chỉ số UV" in changed.text

        _run(widget_config, provider_client, scenario)


class TestEvents:
    def test_typing_then_pick_suggestion(self, widget_config, provider_client):
        async def scenario(http, session):
            for text in ["H", "Ha", "Lon"]:
                resp = await http.post("/api/input", json={"text": text})
                assert resp.status_code == 200
            assert resp.json()["input_text"] == "Lon"
            assert resp.json()["suggestions"] == []

            await asyncio.sleep(SETTLE)
            await session.settle()
            state = (await http.get("/api/state")).json()
            assert len(state["suggestions"]) == 5

            resp = await http.post("/api/suggestions/1")
            assert resp.status_code == 200
            body = resp.json()
            assert body["committed_city"] == "London"
            assert body["input_text"] == "London"
            assert body["suggestions"] == []

        _run(widget_config, provider_client, scenario)
        provider_client.search.assert_called_once_with("Lon")

    def test_enter_commits_trimmed_city(self, widget_config, provider_client):
        async def scenario(http, session):
            await http.post("/api/input", json={"text": "  Hanoi "})
            resp = await http.post("/api/keydown", json={"key": "Enter"})
            body = resp.json()
            assert body["committed"] is True
            assert body["state"]["committed_city"] == "Hanoi"
            await session.settle()

        _run(widget_config, provider_client, scenario)
        provider_client.get_forecast.assert_called_with("Hanoi")

    def test_enter_on_blank_input(self, widget_config, provider_client):
        async def scenario(http, session):
            await http.post("/api/input", json={"text": "   "})
            resp = await http.post("/api/keydown", json={"key": "Enter"})
            body = resp.json()
            assert body["committed"] is False
            assert body["state"]["committed_city"] == "London"
            assert body["state"]["error_message"] == MSG_CITY_REQUIRED

        _run(widget_config, provider_client, scenario)

    def test_unknown_suggestion_index(self, widget_config, provider_client):
        async def scenario(http, session):
            assert (await http.post("/api/suggestions/0")).status_code == 404
            assert (await http.post("/api/suggestions/-1")).status_code == 404

        _run(widget_config, provider_client, scenario)

    def test_unknown_metric_rejected(self, widget_config, provider_client):
        async def scenario(http, session):
            resp = await http.post("/api/metric", json={"metric": "Pressure"})
            assert resp.status_code == 422
            state = (await http.get("/api/state")).json()
            assert state["selected_metric"] == "Temperature"

        _run(widget_config, provider_client, scenario)

    def test_metric_switch_does_not_fetch(self, widget_config, provider_client):
        async def scenario(http, session):
            resp = await http.post("/api/metric", json={"metric": "Humidity"})
            assert resp.json()["selected_metric"] == "Humidity"
            await session.settle()

        _run(widget_config, provider_client, scenario)
        assert provider_client.get_forecast.call_count == 1

    def test_enter_carries_text_not_yet_seen(self, widget_config, provider_client):
        async def scenario(http, session):
            await http.post("/api/input", json={"text": "Hano"})
            resp = await http.post("/api/keydown", json={"key": "Enter", "text": "Hanoi "})
            body = resp.json()
            assert body["committed"] is True
            assert body["state"]["input_text"] == "Hanoi "
            assert body["state"]["committed_city"] == "Hanoi"

            await http.post("/api/input", json={"text": "Da Nang"})
            resp = await http.post("/api/keydown", json={"key": "Enter", "text": "Hue"})
            assert resp.json()["state"]["committed_city"] == "Hue"
            await session.settle()

        _run(widget_config, provider_client, scenario)
        provider_client.get_forecast.assert_called_with("Hue")
        called = [c.args[0] for c in provider_client.get_forecast.call_args_list]
        assert called == ["London", "Hanoi", "Hue"]

    def test_late_duplicate_input_does_not_rearm_lookup(self, widget_config, provider_client):
        async def scenario(http, session):
            await http.post("/api/keydown", json={"key": "Enter", "text": "Hanoi"})
            assert not session.suggester.pending
            resp = await http.post("/api/input", json={"text": "Hanoi"})
            assert resp.json()["committed_city"] == "Hanoi"
            assert not session.suggester.pending
            await asyncio.sleep(SETTLE)
            await session.settle()

        _run(widget_config, provider_client, scenario)
        provider_client.search.assert_not_called()
