"""Exception taxonomy for a collection cycle."""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for errors raised inside a collection cycle."""


class ConnectFailure(ExporterError):
    """Dialing the target (or its connect timeout) failed."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"connect to {address} failed: {reason}")
        self.address = address
        self.reason = reason


class RequestFailure(ExporterError):
    """The status-report request failed with an I/O or protocol error."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"INFO on {address} failed: {reason}")
        self.address = address
        self.reason = reason


class FieldParseFailure(ExporterError):
    """A single report field could not be parsed. Always absorbed by the parser."""
