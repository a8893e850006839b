"""Weather widget web host: serves the rendered widget and takes user events."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from widget.config.defaults import DEFAULT_CONFIG
from widget.config.loader import load_config
from widget.config.schema import WidgetConfig
from widget.ingest.weatherapi_client import WeatherApiClient
from widget.models.common import Metric
from widget.render.renderer import render_page, render_widget
from widget.session import WidgetSession

CONFIG_PATH_ENV = "WIDGET_CONFIG"
VERSION_HEADER = "X-Widget-Version"


class InputEvent(BaseModel):
    text: str


class KeyEvent(BaseModel):
    key: str
    text: str | None = None


class MetricEvent(BaseModel):
    metric: Metric


def _session(request: Request) -> WidgetSession:
    return request.app.state.session


def _sync_input(session: WidgetSession, text: str) -> None:
    # Events can arrive after a newer one already carried the same text.
    if text != session.snapshot().input_text:
        session.input_changed(text)


def _state_json(session: WidgetSession) -> dict:
    s = session.snapshot()
    return {
        "version": s.version,
        "input_text": s.input_text,
        "committed_city": s.committed_city,
        "has_weather": s.weather is not None,
        "suggestions": [
            {"name": x.name, "region": x.region, "country": x.country}
            for x in s.suggestions
        ],
        "error_message": s.error_message,
        "selected_metric": s.selected_metric.value,
    }


def create_app(
    config: WidgetConfig | None = None, client: WeatherApiClient | None = None
) -> FastAPI:
    """Build the app. The widget session is created when the app starts."""
    if config is None:
        config = load_config(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session = WidgetSession(config, client)
        app.state.session = session
        session.mount()
        try:
            yield
        finally:
            await session.close()

    app = FastAPI(title="Weather Widget", version="0.1.0", lifespan=lifespan)
    app.state.config = config

    # ── Page ────────────────────────────────────────────────────

    @app.get("/", response_class=HTMLResponse)
    async def serve_page(request: Request):
        session = _session(request)
        return HTMLResponse(render_page(session.snapshot(), config.ui))

    @app.get("/widget")
    async def serve_fragment(request: Request, since: int = Query(default=-1)):
        """Widget fragment, or 204 if nothing changed since ``since``."""
        state = _session(request).snapshot()
        if state.version <= since:
            return Response(status_code=204, headers={VERSION_HEADER: str(state.version)})
        return HTMLResponse(
            render_widget(state, config.ui),
            headers={VERSION_HEADER: str(state.version)},
        )

    @app.get("/api/state")
    async def get_state(request: Request):
        return _state_json(_session(request))

    # ── User events ─────────────────────────────────────────────

    @app.post("/api/input")
    async def input_changed(event: InputEvent, request: Request):
        session = _session(request)
        _sync_input(session, event.text)
        return _state_json(session)

    @app.post("/api/keydown")
    async def key_down(event: KeyEvent, request: Request):
        session = _session(request)
        if event.text is not None:
            _sync_input(session, event.text)
        committed = session.key_down(event.key)
        return {"committed": committed, "state": _state_json(session)}

    @app.post("/api/suggestions/{index}")
    async def select_suggestion(index: int, request: Request):
        session = _session(request)
        try:
            session.suggestion_clicked(index)
        except IndexError:
            raise HTTPException(404, "Suggestion not found")
        return _state_json(session)

    @app.post("/api/metric")
    async def select_metric(event: MetricEvent, request: Request):
        session = _session(request)
        session.metric_selected(event.metric)
        return _state_json(session)

    return app


if __name__ == "__main__":
    import uvicorn

    cfg = load_config(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG))
    uvicorn.run(create_app(cfg), host=cfg.server.host, port=cfg.server.port)
