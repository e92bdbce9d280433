"""YAML config loader with environment variable expansion."""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from redis_exporter.session.manager import DEFAULT_TIMEOUT
from redis_exporter.session.models import Target, parse_target

_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _expand_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""
    pattern = re.compile(r"\$\{([^}]+)\}")
    def replacer(match: re.Match) -> str:
        var = match.group(1)
        return os.environ.get(var, match.group(0))
    return pattern.sub(replacer, value)


def _walk_and_expand(obj: object) -> object:
    """Recursively expand environment variables in strings."""
    if isinstance(obj, str):
        return _expand_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _walk_and_expand(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_walk_and_expand(item) for item in obj]
    return obj


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{value}'")
        return level


class Settings(BaseModel):
    bind: str = ":9379"               # metrics listen address
    redis: str = "127.0.0.1:6379"     # [password@]host:port
    name: str = "none"                # metric subsystem and cluster label
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _NAME_RE.match(value):
            raise ValueError(
                f"Service name '{value}' is not a valid metric name segment"
            )
        return value

    @field_validator("redis")
    @classmethod
    def _check_redis(cls, value: str) -> str:
        parse_target(value, "none")
        return value

    @field_validator("bind")
    @classmethod
    def _check_bind(cls, value: str) -> str:
        parse_bind(value)
        return value

    def target(self) -> Target:
        return parse_target(self.redis, self.name)

    @property
    def listen(self) -> tuple[str, int]:
        return parse_bind(self.bind)


def parse_bind(bind: str) -> tuple[str, int]:
    """Split a listen address; an empty host means all interfaces."""
    host, sep, port = bind.rpartition(":")
    if not sep:
        raise ValueError(f"Listen address '{bind}' must be [host]:port")
    try:
        return host or "0.0.0.0", int(port)
    except ValueError:
        raise ValueError(f"Invalid port in listen address '{bind}'") from None


def load_config(path: str | Path | None = None,
                overrides: dict[str, object] | None = None) -> Settings:
    """Load configuration from a YAML file, falling back to defaults.

    Non-None *overrides* (command-line flags) replace file values.
    """
    if path is None:
        candidates = [
            Path("config.yaml"),
            Path("config.yml"),
            Path.home() / ".redis_exporter" / "config.yaml",
        ]
        for candidate in candidates:
            if candidate.exists():
                path = candidate
                break

    raw: dict = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        raw = _walk_and_expand(raw)

    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value

    return Settings.model_validate(raw)
