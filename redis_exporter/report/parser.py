"""INFO report parser — raw ``key:value`` text to typed field records.

The report is split on CRLF. A line contributes at most one record; lines
without a colon, or with the colon in the first column (section headers,
blank lines), are skipped. Any field whose numbers do not parse is
dropped on its own so one corrupt line never costs the rest of the report.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from redis_exporter.errors import FieldParseFailure

LINE_SEPARATOR = "\r\n"
COMMAND_PREFIX = "cmdstat_"
DATABASE_PREFIX = "db"
ROLE_KEY = "role"


class Role(str, Enum):
    MASTER = "master"
    SLAVE = "slave"
    UNKNOWN = "none"

    @classmethod
    def from_value(cls, value: str) -> Role:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ScalarField:
    key: str
    value: float


@dataclass(frozen=True)
class CommandField:
    command: str
    count: float


@dataclass(frozen=True)
class DatabaseField:
    db: str
    keys: float | None = None
    expires: float | None = None


@dataclass(frozen=True)
class RoleField:
    role: Role


FieldRecord = Union[ScalarField, CommandField, DatabaseField, RoleField]


def parse(raw: str) -> list[FieldRecord]:
    records: list[FieldRecord] = []
    for line in raw.split(LINE_SEPARATOR):
        idx = line.find(":")
        if idx <= 0:
            continue
        key, value = line[:idx], line[idx + 1:]
        try:
            record = _parse_field(key, value)
        except FieldParseFailure:
            continue
        if record is not None:
            records.append(record)
    return records


def detect_role(records: list[FieldRecord]) -> Role:
    """Role from the dedicated ``role`` field; the last one wins."""
    role = Role.UNKNOWN
    for record in records:
        if isinstance(record, RoleField):
            role = record.role
    return role


def parse_float(text: str) -> float:
    """Strict float parse: no padding, no digit separators."""
    if not text or text != text.strip() or "_" in text:
        raise FieldParseFailure(f"not a number: {text!r}")
    try:
        return float(text)
    except ValueError:
        raise FieldParseFailure(f"not a number: {text!r}") from None


def _parse_field(key: str, value: str) -> FieldRecord | None:
    if key.startswith(COMMAND_PREFIX):
        return _parse_command(key[len(COMMAND_PREFIX):], value)
    if key.startswith(DATABASE_PREFIX):
        db = key[len(DATABASE_PREFIX):]
        if not db:
            return None
        return _parse_database(db, value)
    if key == ROLE_KEY:
        return RoleField(role=Role.from_value(value))
    return ScalarField(key=key, value=parse_float(value))


def _parse_command(command: str, value: str) -> CommandField:
    # calls=42,usec=10,usec_per_call=0.24 -- only the first segment counts.
    eq = value.find("=")
    comma = value.find(",")
    if not 0 < eq < comma:
        raise FieldParseFailure(f"malformed cmdstat value: {value!r}")
    return CommandField(command=command, count=parse_float(value[eq + 1:comma]))


def _parse_database(db: str, value: str) -> DatabaseField:
    # keys=5,expires=2,avg_ttl=0
    keys: float | None = None
    expires: float | None = None
    for segment in value.split(","):
        name, sep, number = segment.partition("=")
        if not sep or name not in ("keys", "expires"):
            continue
        try:
            parsed = parse_float(number)
        except FieldParseFailure:
            continue
        if name == "keys":
            keys = parsed
        else:
            expires = parsed
    return DatabaseField(db=db, keys=keys, expires=expires)
