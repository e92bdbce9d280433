"""Session manager — owns the single connection to the target."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from redis_exporter.errors import ConnectFailure, RequestFailure
from redis_exporter.session.base import ReportConnection
from redis_exporter.session.models import (
    ReportResult,
    SessionInfo,
    SessionStatus,
    Target,
)
from redis_exporter.session.redis_driver import RedisConnection

logger = logging.getLogger(__name__)

# Connect, read and write bound per request. A stuck request holds the
# collection lock until it fires, so this is the exporter's liveness bound.
DEFAULT_TIMEOUT = 5.0

ConnectionFactory = Callable[[str, int, float], ReportConnection]


class SessionManager:
    """Lazily dials the target, reuses the link, and drops it after any failure."""

    def __init__(
        self,
        target: Target,
        timeout: float = DEFAULT_TIMEOUT,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        self._target = target
        self._timeout = timeout
        self._factory = connection_factory or RedisConnection
        self._conn: ReportConnection | None = None
        self._info = SessionInfo(address=target.address, name=target.name)

    @property
    def target(self) -> Target:
        return self._target

    @property
    def info(self) -> SessionInfo:
        return self._info

    @property
    def is_connected(self) -> bool:
        return self._conn is not None and self._conn.is_connected

    async def acquire(self) -> ReportConnection:
        """Return the live connection, dialing a new one if there is none.

        Raises ConnectFailure if the dial fails; the session stays empty and
        the next call dials again.
        """
        if self._conn is not None:
            return self._conn

        self._info.status = SessionStatus.CONNECTING
        conn = self._factory(self._target.host, self._target.port, self._timeout)
        try:
            await conn.connect()
        except Exception as exc:
            logger.error("Failed to connect to redis %s: %s", self._target.address, exc)
            self._info.status = SessionStatus.ERROR
            self._info.failures += 1
            self._info.error = str(exc)
            raise ConnectFailure(self._target.address, str(exc)) from exc

        self._conn = conn
        self._info.status = SessionStatus.CONNECTED
        self._info.connects += 1
        logger.info("Connected to redis %s via %s", self._target.address, conn.driver_name)

        # A rejected password is not fatal here: it shows up as a failed
        # INFO request on the same connection.
        if self._target.password:
            try:
                await conn.authenticate(self._target.password)
            except Exception as exc:
                logger.warning("AUTH on redis %s failed: %s", self._target.address, exc)

        return conn

    async def request_report(self, conn: ReportConnection) -> ReportResult:
        """Run ``INFO all`` on *conn*. Failures come back as ``success=False``."""
        try:
            output = await conn.request_report()
        except Exception as exc:
            failure = RequestFailure(self._target.address, str(exc))
            logger.error("Redis %s do INFO err: %s", self._target.address, exc)
            self._info.status = SessionStatus.ERROR
            self._info.failures += 1
            self._info.error = str(failure)
            return ReportResult(output="", success=False, error=str(failure))

        self._info.last_report = datetime.now()
        self._info.error = ""
        return ReportResult(output=output)

    async def invalidate(self) -> None:
        """Close and forget the current connection; the next acquire redials."""
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            await conn.disconnect()
        except Exception as exc:
            logger.debug("Error closing redis %s connection: %s", self._target.address, exc)
        if self._info.status == SessionStatus.CONNECTED:
            self._info.status = SessionStatus.DISCONNECTED

    async def close(self) -> None:
        await self.invalidate()
        self._info.status = SessionStatus.DISCONNECTED
