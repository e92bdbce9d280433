"""Shared test fixtures."""

from __future__ import annotations

import pytest

from redis_exporter.exporter import Exporter
from redis_exporter.metrics.registry import MetricRegistry
from redis_exporter.session.base import ReportConnection
from redis_exporter.session.manager import SessionManager
from redis_exporter.session.models import Target

CRLF = "\r\n"


def _report(*lines: str) -> str:
    return CRLF.join(lines) + CRLF


MASTER_REPORT = _report(
    "# Server",
    "redis_version:7.2.4",
    "redis_mode:standalone",
    "",
    "# Clients",
    "connected_clients:12",
    "blocked_clients:1",
    "",
    "# Memory",
    "used_memory:100",
    "used_memory_rss:150",
    "used_memory_peak:180",
    "used_memory_lua:31744",
    "maxmemory:200",
    "",
    "# Stats",
    "total_connections_received:1000",
    "total_commands_processed:5000",
    "total_net_input_bytes:12345",
    "total_net_output_bytes:67890",
    "rejected_connections:0",
    "sync_full:1",
    "sync_partial_ok:2",
    "sync_partial_err:0",
    "expired_keys:7",
    "evicted_keys:3",
    "keyspace_hits:900",
    "keyspace_misses:100",
    "pubsub_channels:4",
    "pubsub_patterns:0",
    "",
    "# Replication",
    "role:master",
    "connected_slaves:1",
    "",
    "# CPU",
    "used_cpu_sys:1.5",
    "used_cpu_user:2.5",
    "",
    "# Commandstats",
    "cmdstat_get:calls=42,usec=10,usec_per_call=0.24",
    "cmdstat_set:calls=7,usec=5,usec_per_call=0.71",
    "",
    "# Keyspace",
    "db0:keys=5,expires=2,avg_ttl=0",
    "db3:keys=11,expires=0,avg_ttl=0",
)


class FakeConnection(ReportConnection):
    """In-memory stand-in for a Redis link, driven by a FakeServer."""

    def __init__(self, server: FakeServer, host: str, port: int, timeout: float):
        super().__init__(host, port, timeout)
        self.server = server
        self.closed = False

    async def connect(self) -> None:
        if self.server.fail_connect:
            raise ConnectionError("Connection refused")
        self._connected = True

    async def disconnect(self) -> None:
        self.closed = True
        self._connected = False

    async def authenticate(self, password: str) -> None:
        self.server.auth_attempts.append(password)
        if password != self.server.password:
            raise PermissionError("WRONGPASS invalid username-password pair")

    async def request_report(self) -> str:
        self.server.requests += 1
        if self.server.fail_request:
            raise ConnectionError("Connection reset by peer")
        return self.server.report


class FakeServer:
    """Holds the canned report and failure switches for FakeConnection."""

    def __init__(self, report: str = MASTER_REPORT, password: str | None = None) -> None:
        self.report = report
        self.password = password
        self.fail_connect = False
        self.fail_request = False
        self.requests = 0
        self.auth_attempts: list[str] = []
        self.connections: list[FakeConnection] = []

    def factory(self, host: str, port: int, timeout: float) -> FakeConnection:
        conn = FakeConnection(self, host, port, timeout)
        self.connections.append(conn)
        return conn


@pytest.fixture
def make_report():
    """Join INFO lines the way the server does, CRLF terminated."""
    return _report


@pytest.fixture
def master_report() -> str:
    return MASTER_REPORT


@pytest.fixture
def target() -> Target:
    return Target(address="10.0.0.5:6379", name="cache01")


@pytest.fixture
def fake_server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def registry(target: Target) -> MetricRegistry:
    return MetricRegistry(target)


@pytest.fixture
def session(target: Target, fake_server: FakeServer) -> SessionManager:
    return SessionManager(target, timeout=1.0, connection_factory=fake_server.factory)


@pytest.fixture
def exporter(session: SessionManager, registry: MetricRegistry) -> Exporter:
    return Exporter(session, registry)
