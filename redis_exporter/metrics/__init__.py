"""Metric definitions and the per-target gauge registry."""

from __future__ import annotations

from redis_exporter.metrics.definitions import (
    CLUSTER_GAUGES,
    DYNAMIC_FAMILIES,
    GLOBAL_GAUGES,
    MetricDefinition,
)
from redis_exporter.metrics.registry import MetricRegistry

__all__ = [
    "CLUSTER_GAUGES",
    "DYNAMIC_FAMILIES",
    "GLOBAL_GAUGES",
    "MetricDefinition",
    "MetricRegistry",
]
