"""FastAPI application exposing weather lookups, records and exports."""

from __future__ import annotations

import logging
from typing import Any, Final, Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from weatherrec.export import Exporter
from weatherrec.records import JsonRecordStore, RecordError, RecordService
from weatherrec.settings import UserSettings
from weatherrec.utils.time import TimeUtils
from weatherrec.weather import WeatherAPI, WeatherAPIError

logger: Final = logging.getLogger(__name__)

API_TITLE: Final = "Weather Records API"
API_VERSION: Final = "0.1.0"


def create_app(
    settings: UserSettings | None = None,
    service: RecordService | None = None,
    exporter: Exporter | None = None,
    weather_api: WeatherAPI | None = None,
) -> FastAPI:
    """Build the application.

    Collaborators not supplied are created from ``settings``; the record
    service and exporter share one store handle.

    Args:
        settings: Application settings (default: discovered config or defaults)
        service: Record service to use
        exporter: Exporter to use
        weather_api: Weather lookup client to use

    Returns:
        Configured FastAPI application
    """
    settings = settings or UserSettings.discover()
    if service is None:
        store = exporter.store if exporter else JsonRecordStore(settings.database_path)
        service = RecordService(store)
    exporter = exporter or Exporter(service.store)
    weather_api = weather_api or WeatherAPI(settings)

    app = FastAPI(title=API_TITLE, version=API_VERSION)
    app.state.settings = settings

    # ── error mapping ───────────────────────────────────────────────────────
    @app.exception_handler(RecordError)
    async def record_error_handler(request: Request, exc: RecordError) -> JSONResponse:
        if not exc.is_client_error:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.code, content={"error": exc.message})

    @app.exception_handler(WeatherAPIError)
    async def weather_error_handler(request: Request, exc: WeatherAPIError) -> JSONResponse:
        if not exc.is_client_error:
            logger.error("%s %s failed upstream: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.http_status, content={"error": exc.message})

    # ── health ──────────────────────────────────────────────────────────────
    @app.get("/api/health")
    def health() -> dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "OK",
            "timestamp": TimeUtils.to_iso_timestamp(TimeUtils.now_utc()),
            "apiMode": settings.api_mode,
        }

    # ── weather lookups ─────────────────────────────────────────────────────
    @app.get("/api/weather/current")
    def current_weather(
        location: Optional[str] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        units: Optional[str] = None,
    ) -> dict[str, Any]:
        return weather_api.current(location, lat, lon, units)

    @app.get("/api/weather/forecast")
    def forecast(
        location: Optional[str] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        units: Optional[str] = None,
    ) -> dict[str, Any]:
        return weather_api.forecast(location, lat, lon, units)

    @app.get("/api/geocode")
    def geocode(location: Optional[str] = None) -> list[dict[str, Any]]:
        return weather_api.geocode(location)

    @app.get("/api/reverse-geocode")
    def reverse_geocode(
        lat: Optional[float] = None, lon: Optional[float] = None
    ) -> list[dict[str, Any]]:
        return weather_api.reverse_geocode(lat, lon)

    @app.get("/api/location/map")
    def location_map(
        location: Optional[str] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
    ) -> dict[str, Any]:
        return weather_api.map_data(location, lat, lon)

    # ── records ─────────────────────────────────────────────────────────────
    # Bodies are taken as raw JSON so validation happens in the service and
    # failures surface as 400 rather than FastAPI's 422.
    @app.post("/api/weather/records", status_code=201)
    def create_record(payload: Any = Body(None)) -> dict[str, Any]:
        return service.create({} if payload is None else payload).to_dict()

    @app.get("/api/weather/records")
    def list_records() -> list[dict[str, Any]]:
        return [r.to_dict() for r in service.list()]

    @app.get("/api/weather/records/{record_id}")
    def get_record(record_id: str) -> dict[str, Any]:
        return service.get(record_id).to_dict()

    @app.put("/api/weather/records/{record_id}")
    def update_record(record_id: str, payload: Any = Body(None)) -> dict[str, Any]:
        return service.update(record_id, {} if payload is None else payload).to_dict()

    @app.delete("/api/weather/records/{record_id}")
    def delete_record(record_id: str) -> dict[str, str]:
        service.delete(record_id)
        return {"message": "Record deleted successfully"}

    # ── exports ─────────────────────────────────────────────────────────────
    @app.get("/api/export/{export_format}")
    def export_records(export_format: str) -> Response:
        result = exporter.export(export_format)
        return Response(
            content=result.content,
            media_type=result.media_type,
            headers={"Content-Disposition": f"attachment; filename={result.filename}"},
        )

    if settings.static_dir is not None:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    logger.info(
        "Record store at %s, API mode: %s", settings.database_path, settings.api_mode
    )
    return app
