"""HTTP layer - FastAPI routes over the record service, exporter and weather client."""

from weatherrec.web.app import create_app

__all__ = ["create_app"]
