"""Connection lifecycle for the single Redis target."""

from redis_exporter.session.manager import DEFAULT_TIMEOUT, SessionManager
from redis_exporter.session.models import ReportResult, SessionInfo, SessionStatus, Target, parse_target

__all__ = [
    "DEFAULT_TIMEOUT",
    "ReportResult",
    "SessionInfo",
    "SessionManager",
    "SessionStatus",
    "Target",
    "parse_target",
]
