"""Weather Dashboard: FastAPI backend owning one dashboard session."""

import datetime
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel

from weatherdash.app.controller import (
    DashboardController,
    DateNotInForecast,
    build_controller,
)
from weatherdash.config.schema import DashboardConfig
from weatherdash.models.common import Metric
from weatherdash.reporting.formatters import view_to_dict

DASHBOARD_HTML = Path(__file__).parent / "static" / "dashboard.html"


class PlaceUpdate(BaseModel):
    place: str = ""


class DateUpdate(BaseModel):
    date: datetime.date


class MetricUpdate(BaseModel):
    metric: Metric


def create_app(
    config: DashboardConfig, controller: DashboardController | None = None
) -> FastAPI:
    controller = controller or build_controller(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = controller.submit_place(controller.default_place)
        if task is not None:
            await task
        yield
        controller.debouncer.cancel()

    app = FastAPI(title="Weather Dashboard", version="0.1.0", lifespan=lifespan)
    app.state.controller = controller
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Data endpoints ──────────────────────────────────────────

    @app.get("/api/view")
    def get_view():
        """Current dashboard view: panel, day tabs, chart series."""
        return view_to_dict(controller.view())

    @app.get("/api/health")
    def get_health():
        return {
            "provider": config.provider.base_url,
            "api_key_configured": bool(config.provider.api_key),
            "state": controller.state.value,
            "place": controller.place,
            "has_forecast": controller.forecast is not None,
        }

    # ── Control endpoints ───────────────────────────────────────

    @app.post("/api/place", status_code=202)
    async def change_place(update: PlaceUpdate):
        """Debounced place change, as typed into the city box."""
        controller.change_place(update.place)
        return {"status": "pending", "debounce_ms": config.ui.debounce_ms}

    @app.post("/api/place/submit")
    async def submit_place(update: PlaceUpdate):
        """Immediate fetch, as on the Enter key."""
        task = controller.submit_place(update.place)
        if task is not None:
            await task
        return view_to_dict(controller.view())

    @app.post("/api/date")
    def select_date(update: DateUpdate):
        try:
            controller.select_date(update.date)
        except DateNotInForecast:
            raise HTTPException(404, f"No forecast for {update.date.isoformat()}")
        return view_to_dict(controller.view())

    @app.post("/api/metric")
    def select_metric(update: MetricUpdate):
        controller.select_metric(update.metric)
        return view_to_dict(controller.view())

    # ── Serve dashboard ─────────────────────────────────────────

    @app.get("/")
    def serve_dashboard():
        if DASHBOARD_HTML.exists():
            return FileResponse(DASHBOARD_HTML, media_type="text/html")
        return HTMLResponse("<h1>Dashboard not found</h1>", status_code=404)

    return app
