"""Abstract connection interface for the status-report link."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ReportConnection(ABC):
    """One live link to a data-store server that can produce a status report."""

    def __init__(self, host: str, port: int, timeout: float):
        self.host = host
        self.port = port
        self.timeout = timeout
        self._connected = False

    @abstractmethod
    async def connect(self) -> None:
        """Dial the server. Raises on failure or timeout."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the link."""

    @abstractmethod
    async def authenticate(self, password: str) -> None:
        """Send AUTH. Raises if the server rejects it."""

    @abstractmethod
    async def request_report(self) -> str:
        """Request ``INFO all`` and return the decoded reply text."""

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def driver_name(self) -> str:
        return self.__class__.__name__
