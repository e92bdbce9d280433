"""Static metric definitions. Names must stay stable for existing dashboards."""

from __future__ import annotations

from dataclasses import dataclass

NAMESPACE = "redis"


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    help: str
    labels: tuple[str, ...] = ()


# Unscoped: redis_<name>{cluster, addr}
GLOBAL_GAUGES: tuple[MetricDefinition, ...] = (
    MetricDefinition("used_memory", "Current alloc memory"),
    MetricDefinition("used_cpu", "Used cpu"),
    MetricDefinition("total_commands_processed", "Total commands processed"),
    MetricDefinition("total_net_input_bytes", "Total net input bytes"),
    MetricDefinition("total_net_output_bytes", "Total net output bytes"),
)

# Scoped under the target name: redis_<target>_<name>{addr}
CLUSTER_GAUGES: tuple[MetricDefinition, ...] = (
    MetricDefinition("used_memory", "Current alloc memory"),
    MetricDefinition("master_used_memory", "Current alloc memory"),
    MetricDefinition("used_memory_rss", "Used memory rss"),
    MetricDefinition("used_memory_peak", "Used memory peak"),
    MetricDefinition("used_memory_lua", "Used memory lua"),
    MetricDefinition("maxmemory", "Max memory"),
    MetricDefinition("master_maxmemory", "Max memory"),
    MetricDefinition("used_cpu_sys", "Used cpu sys"),
    MetricDefinition("used_cpu_user", "Used cpu user"),
    MetricDefinition("used_cpu", "Used cpu"),
    MetricDefinition("total_connections_received", "Total connections received"),
    MetricDefinition("connected_clients", "Current client connections"),
    MetricDefinition("blocked_clients", "Blocked clients"),
    MetricDefinition("rejected_connections", "Rejected connections"),
    MetricDefinition("total_commands_processed", "Total commands processed"),
    MetricDefinition("total_net_input_bytes", "Total net input bytes"),
    MetricDefinition("total_net_output_bytes", "Total net output bytes"),
    MetricDefinition("sync_full", "Sync full"),
    MetricDefinition("sync_partial_ok", "sync_partial_ok"),
    MetricDefinition("sync_partial_err", "sync_partial_err"),
    MetricDefinition("expired_keys", "expired_keys"),
    MetricDefinition("evicted_keys", "evicted_keys"),
    MetricDefinition("keyspace_hits", "keyspace_hits"),
    MetricDefinition("keyspace_misses", "keyspace_misses"),
    MetricDefinition("pubsub_channels", "pubsub_channels"),
    MetricDefinition("pubsub_patterns", "pubsub_patterns"),
)

# Rebuilt every cycle: redis_<target>_<name>{addr, ...labels}
COMMAND_FAMILY = MetricDefinition("cmdstat", "Commands stat", ("cmd",))
DB_KEYS_FAMILY = MetricDefinition("dbkeys", "Database key count", ("db",))
DB_EXPIRES_FAMILY = MetricDefinition("dbexpires", "Database expire key count", ("db",))

DYNAMIC_FAMILIES: tuple[MetricDefinition, ...] = (
    COMMAND_FAMILY,
    DB_KEYS_FAMILY,
    DB_EXPIRES_FAMILY,
)

# Composite gauges written after the scan rather than from a single field.
MASTER_USED_MEMORY = "master_used_memory"
MASTER_MAXMEMORY = "master_maxmemory"
USED_CPU = "used_cpu"

# Raw fields the composites are derived from.
USED_MEMORY = "used_memory"
MAXMEMORY = "maxmemory"
CPU_FIELDS = ("used_cpu_sys", "used_cpu_user")
