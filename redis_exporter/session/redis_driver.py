"""redis-py backed connection for the ``INFO all`` request."""

from __future__ import annotations

import logging

from redis.asyncio.connection import Connection
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff

from redis_exporter.session.base import ReportConnection

logger = logging.getLogger(__name__)

INFO_COMMAND = ("INFO", "all")


class RedisConnection(ReportConnection):
    """Single raw RESP connection.

    A bare ``Connection`` is used instead of a ``Redis`` client so the
    reply to INFO stays unparsed text and no pool or retry policy sits
    between a failure and the caller. The socket timeout bounds both
    reads and writes.
    """

    def __init__(self, host: str, port: int, timeout: float):
        super().__init__(host, port, timeout)
        self._conn: Connection | None = None

    async def connect(self) -> None:
        conn = Connection(
            host=self.host,
            port=self.port,
            socket_connect_timeout=self.timeout,
            socket_timeout=self.timeout,
            retry=Retry(NoBackoff(), 0),
            # RESP2: nothing is sent while connecting, so AUTH stays ours.
            protocol=2,
            lib_name=None,
            lib_version=None,
        )
        await conn.connect()
        self._conn = conn
        self._connected = True
        logger.debug("Connected to %s:%d", self.host, self.port)

    async def disconnect(self) -> None:
        if self._conn is not None:
            conn, self._conn = self._conn, None
            self._connected = False
            await conn.disconnect()
            logger.debug("Disconnected from %s:%d", self.host, self.port)

    async def authenticate(self, password: str) -> None:
        await self._execute("AUTH", password)

    async def request_report(self) -> str:
        reply = await self._execute(*INFO_COMMAND)
        if isinstance(reply, bytes):
            return reply.decode("utf-8", errors="replace")
        if isinstance(reply, str):
            return reply
        raise TypeError(f"Unexpected INFO reply type: {type(reply).__name__}")

    async def _execute(self, *args: str) -> object:
        if self._conn is None:
            raise ConnectionError("Not connected")
        await self._conn.send_command(*args)
        return await self._conn.read_response()
