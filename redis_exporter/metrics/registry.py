"""Metric registry — current gauge values for one target."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Gauge
from prometheus_client.metrics_core import Metric

from redis_exporter.metrics.definitions import (
    CLUSTER_GAUGES,
    COMMAND_FAMILY,
    DB_EXPIRES_FAMILY,
    DB_KEYS_FAMILY,
    GLOBAL_GAUGES,
    MASTER_MAXMEMORY,
    MASTER_USED_MEMORY,
    NAMESPACE,
    USED_CPU,
    MetricDefinition,
)
from redis_exporter.session.models import Target


class MetricRegistry:
    """Static gauges plus per-command and per-database gauge families.

    Every series carries the target address as ``addr``; global gauges also
    carry the target name as ``cluster``. Static gauges keep their last value
    when a field goes missing, dynamic families are emptied by ``reset()``.
    """

    def __init__(self, target: Target) -> None:
        self._target = target
        self._registry = CollectorRegistry()

        self._global: dict[str, Gauge] = {}
        for definition in GLOBAL_GAUGES:
            gauge = Gauge(
                definition.name, definition.help,
                labelnames=("cluster", "addr"),
                namespace=NAMESPACE,
                registry=self._registry,
            )
            self._global[definition.name] = gauge.labels(
                cluster=target.name, addr=target.address,
            )

        self._cluster: dict[str, Gauge] = {}
        for definition in CLUSTER_GAUGES:
            gauge = Gauge(
                definition.name, definition.help,
                labelnames=("addr",),
                namespace=NAMESPACE,
                subsystem=target.name,
                registry=self._registry,
            )
            self._cluster[definition.name] = gauge.labels(addr=target.address)

        self._cmdstat = self._family(COMMAND_FAMILY)
        self._dbkeys = self._family(DB_KEYS_FAMILY)
        self._dbexpires = self._family(DB_EXPIRES_FAMILY)

    def _family(self, definition: MetricDefinition) -> Gauge:
        return Gauge(
            definition.name, definition.help,
            labelnames=("addr",) + definition.labels,
            namespace=NAMESPACE,
            subsystem=self._target.name,
            registry=self._registry,
        )

    @property
    def target(self) -> Target:
        return self._target

    def reset(self) -> None:
        """Drop every per-command and per-database series."""
        self._cmdstat.clear()
        self._dbkeys.clear()
        self._dbexpires.clear()

    def apply_scalar(self, key: str, value: float) -> bool:
        """Set the global and/or cluster gauge named *key*.

        Returns False when neither table knows the key.
        """
        matched = False
        gauge = self._global.get(key)
        if gauge is not None:
            gauge.set(value)
            matched = True
        gauge = self._cluster.get(key)
        if gauge is not None:
            gauge.set(value)
            matched = True
        return matched

    def apply_command(self, command: str, count: float) -> None:
        self._cmdstat.labels(addr=self._target.address, cmd=command).set(count)

    def apply_database(self, db: str, keys: float | None = None,
                       expires: float | None = None) -> None:
        if keys is not None:
            self._dbkeys.labels(addr=self._target.address, db=db).set(keys)
        if expires is not None:
            self._dbexpires.labels(addr=self._target.address, db=db).set(expires)

    def set_derived(self, used_memory: float, maxmemory: float, cpu: float) -> None:
        self._cluster[MASTER_USED_MEMORY].set(used_memory)
        self._cluster[MASTER_MAXMEMORY].set(maxmemory)
        self._global[USED_CPU].set(cpu)
        self._cluster[USED_CPU].set(cpu)

    def snapshot(self) -> list[Metric]:
        """Materialized copy of every family and its live series."""
        return list(self._registry.collect())

    # ── Read helpers ────────────────────────────────────────────────────

    def full_name(self, name: str, scoped: bool = True) -> str:
        """``redis_<target>_<name>`` or, unscoped, ``redis_<name>``."""
        if scoped:
            return f"{NAMESPACE}_{self._target.name}_{name}"
        return f"{NAMESPACE}_{name}"

    def value(self, name: str, labels: dict[str, str] | None = None,
              scoped: bool = True) -> float | None:
        """Current value of one series, or None if it is not exposed.

        ``addr`` (and ``cluster`` for unscoped gauges) is filled in.
        """
        full = dict(labels or {})
        full.setdefault("addr", self._target.address)
        if not scoped:
            full.setdefault("cluster", self._target.name)
        return self._registry.get_sample_value(self.full_name(name, scoped), full)

    def series(self, name: str) -> dict[tuple[str, ...], float]:
        """All live series of a scoped family keyed by their variable labels."""
        full_name = self.full_name(name)
        result: dict[tuple[str, ...], float] = {}
        for family in self._registry.collect():
            if family.name != full_name:
                continue
            for sample in family.samples:
                key = tuple(v for k, v in sorted(sample.labels.items()) if k != "addr")
                result[key] = sample.value
        return result
