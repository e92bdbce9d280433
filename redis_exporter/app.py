"""Application orchestrator — wires together all components."""

from __future__ import annotations

import logging
from pathlib import Path

from redis_exporter.config.settings import Settings, load_config
from redis_exporter.exporter import Exporter
from redis_exporter.metrics.registry import MetricRegistry
from redis_exporter.session.manager import SessionManager

logger = logging.getLogger(__name__)


class Application:
    """Top-level application orchestrator."""

    def __init__(self, config_path: str | Path | None = None,
                 overrides: dict[str, object] | None = None,
                 settings: Settings | None = None) -> None:
        self.settings = settings or load_config(config_path, overrides)
        self.target = self.settings.target()
        self.session = SessionManager(self.target, timeout=self.settings.timeout)
        self.registry = MetricRegistry(self.target)
        self.exporter = Exporter(self.session, self.registry)
        self._api_server = None

    def create_app(self):
        from redis_exporter.api.server import create_api_app
        return create_api_app(self.exporter)

    async def start(self) -> None:
        """Serve /metrics until interrupted."""
        self._setup_logging()
        import uvicorn

        host, port = self.settings.listen
        config = uvicorn.Config(
            self.create_app(),
            host=host,
            port=port,
            log_level="warning",
        )
        self._api_server = uvicorn.Server(config)
        logger.info("Exporting redis %s (%s) on %s:%d",
                    self.target.address, self.target.name, host, port)
        try:
            await self._api_server.serve()
        finally:
            await self.shutdown()

    async def shutdown(self) -> None:
        """Graceful shutdown."""
        logger.info("Shutting down...")
        await self.session.close()
        if self._api_server:
            self._api_server.should_exit = True
        logger.info("Shutdown complete.")

    def _setup_logging(self) -> None:
        logging.basicConfig(
            level=self.settings.logging.level,
            format=self.settings.logging.format,
        )
        # Connection errors are already reported with target context.
        logging.getLogger("redis").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
