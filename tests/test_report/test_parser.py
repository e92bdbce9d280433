"""Tests for the INFO report parser."""

from __future__ import annotations

import pytest

from redis_exporter.errors import FieldParseFailure
from redis_exporter.report.parser import (
    CommandField,
    DatabaseField,
    Role,
    RoleField,
    ScalarField,
    detect_role,
    parse,
    parse_float,
)


def test_parse_scalar_fields(make_report):
    records = parse(make_report("used_memory:100", "used_cpu_sys:1.5"))
    assert records == [
        ScalarField(key="used_memory", value=100.0),
        ScalarField(key="used_cpu_sys", value=1.5),
    ]


def test_parse_skips_headers_and_blank_lines(make_report):
    records = parse(make_report("# Memory", "", ":orphan", "used_memory:1"))
    assert records == [ScalarField(key="used_memory", value=1.0)]


def test_parse_drops_non_numeric_scalars(make_report):
    records = parse(make_report("redis_version:7.2.4", "os:Linux", "uptime_in_seconds:60"))
    assert records == [ScalarField(key="uptime_in_seconds", value=60.0)]


def test_parse_value_keeps_later_colons(make_report):
    records = parse(make_report("executable:/usr/bin:redis", "used_memory:5"))
    assert records == [ScalarField(key="used_memory", value=5.0)]


def test_parse_empty_report():
    assert parse("") == []
    assert parse("\r\n\r\n") == []


def test_parse_only_splits_on_crlf():
    # A bare LF does not end a line, so the value is not a number.
    assert parse("used_memory:1\nmaxmemory:2") == []


def test_parse_truncated_report():
    records = parse("used_memory:100\r\nmaxmem")
    assert records == [ScalarField(key="used_memory", value=100.0)]


# ── Command stats ────────────────────────────────────────────────────

def test_parse_command_field(make_report):
    records = parse(make_report("cmdstat_get:calls=42,usec=10"))
    assert records == [CommandField(command="get", count=42.0)]


def test_parse_command_missing_equals_dropped(make_report):
    assert parse(make_report("cmdstat_get:calls42")) == []


def test_parse_command_without_comma_dropped(make_report):
    assert parse(make_report("cmdstat_get:calls=42")) == []


def test_parse_command_equals_after_comma_dropped(make_report):
    assert parse(make_report("cmdstat_get:calls,usec=10")) == []


def test_parse_command_non_numeric_count_dropped(make_report):
    assert parse(make_report("cmdstat_get:calls=many,usec=10")) == []


def test_parse_command_with_subcommand_name(make_report):
    records = parse(make_report("cmdstat_client|list:calls=3,usec=1"))
    assert records == [CommandField(command="client|list", count=3.0)]


# ── Keyspace ─────────────────────────────────────────────────────────

def test_parse_database_field(make_report):
    records = parse(make_report("db0:keys=5,expires=2,avg_ttl=0"))
    assert records == [DatabaseField(db="0", keys=5.0, expires=2.0)]


def test_parse_database_partial_fields(make_report):
    records = parse(make_report("db1:keys=x,expires=9", "db2:avg_ttl=0"))
    assert records == [
        DatabaseField(db="1", keys=None, expires=9.0),
        DatabaseField(db="2", keys=None, expires=None),
    ]


def test_parse_bare_db_key_skipped(make_report):
    assert parse(make_report("db:keys=1,expires=1")) == []


# ── Role ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    ("master", Role.MASTER),
    ("slave", Role.SLAVE),
    ("sentinel", Role.UNKNOWN),
    ("", Role.UNKNOWN),
])
def test_parse_role_field(value, expected, make_report):
    assert parse(make_report(f"role:{value}")) == [RoleField(role=expected)]


def test_detect_role_defaults_to_unknown(make_report):
    assert detect_role(parse(make_report("used_memory:1"))) == Role.UNKNOWN


def test_detect_role_ignores_substring_elsewhere(make_report):
    # Only the dedicated field counts, not text that merely contains it.
    records = parse(make_report("master_link:role:master", "role:slave"))
    assert detect_role(records) == Role.SLAVE


def test_parse_full_report(master_report):
    records = parse(master_report)
    assert detect_role(records) == Role.MASTER
    commands = [r for r in records if isinstance(r, CommandField)]
    dbs = [r for r in records if isinstance(r, DatabaseField)]
    assert {c.command for c in commands} == {"get", "set"}
    assert {d.db for d in dbs} == {"0", "3"}


def test_one_bad_line_does_not_break_the_rest(make_report):
    records = parse(make_report("used_memory:1", "maxmemory:oops", "connected_clients:3"))
    assert [r.key for r in records] == ["used_memory", "connected_clients"]


# ── Numbers ──────────────────────────────────────────────────────────

@pytest.mark.parametrize("text, expected", [
    ("42", 42.0),
    ("-1.5", -1.5),
    ("1e3", 1000.0),
])
def test_parse_float_accepts(text, expected):
    assert parse_float(text) == expected


@pytest.mark.parametrize("text", ["", " 1", "1 ", "1_000", "abc", "1.2.3"])
def test_parse_float_rejects(text):
    with pytest.raises(FieldParseFailure):
        parse_float(text)
