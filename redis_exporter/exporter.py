"""Collection orchestrator — one serialized INFO-to-gauges cycle per scrape."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator

from prometheus_client.metrics_core import Metric

from redis_exporter.errors import ConnectFailure
from redis_exporter.metrics.definitions import CPU_FIELDS, MAXMEMORY, USED_MEMORY
from redis_exporter.metrics.registry import MetricRegistry
from redis_exporter.report.parser import (
    CommandField,
    DatabaseField,
    FieldRecord,
    Role,
    ScalarField,
    detect_role,
    parse,
)
from redis_exporter.session.manager import SessionManager

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Result of one cycle, renderable by ``prometheus_client.generate_latest``."""
    families: list[Metric] = field(default_factory=list)
    success: bool = True
    error: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    def collect(self) -> Iterator[Metric]:
        return iter(self.families)


@dataclass
class _Totals:
    used_memory: float = 0.0
    maxmemory: float = 0.0
    cpu: float = 0.0


class Exporter:
    """Runs collection cycles for one target.

    At most one cycle runs at a time; overlapping callers wait for the
    running cycle to finish and then run their own. A failed cycle returns
    an empty, unsuccessful snapshot and never raises.
    """

    def __init__(self, session: SessionManager, registry: MetricRegistry) -> None:
        self._session = session
        self._registry = registry
        self._lock = asyncio.Lock()
        self._last: Snapshot | None = None

    @property
    def session(self) -> SessionManager:
        return self._session

    @property
    def registry(self) -> MetricRegistry:
        return self._registry

    @property
    def last_snapshot(self) -> Snapshot | None:
        return self._last

    async def collect(self) -> Snapshot:
        async with self._lock:
            snapshot = await self._cycle()
            self._last = snapshot
            return snapshot

    async def _cycle(self) -> Snapshot:
        self._registry.reset()

        try:
            conn = await self._session.acquire()
        except ConnectFailure as exc:
            return Snapshot(success=False, error=str(exc))

        result = await self._session.request_report(conn)
        if not result.success:
            await self._session.invalidate()
            return Snapshot(success=False, error=result.error)

        records = parse(result.output)
        self.apply(records)
        logger.debug("Collected %d fields from %s", len(records),
                     self._session.target.address)
        return Snapshot(families=self._registry.snapshot())

    def apply(self, records: list[FieldRecord]) -> None:
        """Route parsed records into the registry and derive composite gauges."""
        totals = _Totals()
        for record in records:
            if isinstance(record, ScalarField):
                if not self._registry.apply_scalar(record.key, record.value):
                    continue
                if record.key == USED_MEMORY:
                    totals.used_memory = record.value
                elif record.key == MAXMEMORY:
                    totals.maxmemory = record.value
                elif record.key in CPU_FIELDS:
                    totals.cpu += record.value
            elif isinstance(record, CommandField):
                self._registry.apply_command(record.command, record.count)
            elif isinstance(record, DatabaseField):
                self._registry.apply_database(record.db, record.keys, record.expires)

        # Replicas never report memory pressure through the master gauges.
        if detect_role(records) != Role.MASTER:
            totals.used_memory = 0.0
            totals.maxmemory = 0.0
        self._registry.set_derived(totals.used_memory, totals.maxmemory, totals.cpu)
