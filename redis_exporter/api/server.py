"""FastAPI server exposing the metric snapshot to Prometheus."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from redis_exporter.exporter import Exporter


def create_api_app(exporter: Exporter) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Redis Exporter",
        description="Prometheus exporter for Redis INFO statistics",
        version="0.1.0",
    )

    @app.get("/metrics")
    async def metrics() -> Response:
        # A failed cycle renders as an empty body, not an HTTP error.
        snapshot = await exporter.collect()
        return Response(
            content=generate_latest(snapshot),
            media_type=CONTENT_TYPE_LATEST,
        )

    @app.get("/health")
    async def health() -> dict[str, Any]:
        info = exporter.session.info
        last = exporter.last_snapshot
        return {
            "status": "ok",
            "target": info.name,
            "addr": info.address,
            "session": info.status.value,
            "connects": info.connects,
            "failures": info.failures,
            "last_error": info.error or None,
            "last_report": info.last_report.isoformat() if info.last_report else None,
            "last_scrape": last.timestamp.isoformat() if last else None,
            "last_scrape_success": last.success if last else None,
        }

    return app
