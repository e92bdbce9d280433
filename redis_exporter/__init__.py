"""Prometheus exporter for Redis INFO statistics."""
