"""Session data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

DEFAULT_PORT = 6379


class SessionStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"
    CONNECTING = "connecting"


@dataclass(frozen=True)
class Target:
    """One Redis instance: where it lives, how to log in, what to call it."""
    address: str
    name: str
    password: str | None = None

    @property
    def host(self) -> str:
        return split_address(self.address)[0]

    @property
    def port(self) -> int:
        return split_address(self.address)[1]

    def __repr__(self) -> str:
        # Never leak the password into logs.
        return f"Target(address={self.address!r}, name={self.name!r})"


@dataclass
class ReportResult:
    output: str
    success: bool = True
    error: str | None = None


@dataclass
class SessionInfo:
    address: str
    name: str
    status: SessionStatus = SessionStatus.DISCONNECTED
    connects: int = 0
    failures: int = 0
    last_report: datetime | None = None
    error: str = ""


def parse_target(uri: str, name: str) -> Target:
    """Build a Target from ``[password@]host[:port]``.

    The password is everything before the last ``@`` so that passwords
    containing ``@`` still work.
    """
    password: str | None = None
    address = uri
    idx = uri.rfind("@")
    if idx >= 0:
        password = uri[:idx] or None
        address = uri[idx + 1:]
    if not address:
        raise ValueError(f"Missing Redis address in {uri!r}")
    # Raises on a bad port.
    split_address(address)
    return Target(address=address, name=name, password=password)


def split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts, defaulting the port to 6379."""
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, DEFAULT_PORT
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        return host or "127.0.0.1", int(port)
    except ValueError:
        raise ValueError(f"Invalid port in address {address!r}") from None
