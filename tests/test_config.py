from __future__ import annotations

import pytest

from pairing_bot.config import Settings, _parse_days, _parse_ids
from pairing_bot.texts import build_texts


def test_parse_days_keeps_calendar_order() -> None:
    assert _parse_days("Friday, monday,,wednesday") == ("monday", "wednesday", "friday")
    assert _parse_days("") == ()


def test_parse_days_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        _parse_days("monday,caturday")


def test_parse_ids() -> None:
    assert _parse_ids(" 1, 2 ,,3") == {1, 2, 3}


def test_pg_dsn() -> None:
    s = Settings(pg_user="u", pg_password="p", pg_host="h", pg_port=1, pg_database="d", pg_sslmode="require")
    assert s.pg_dsn == "postgresql://u:p@h:1/d?sslmode=require"


def test_texts_follow_settings() -> None:
    s = Settings(
        default_schedule=("monday", "tuesday", "wednesday", "thursday"),
        maintainer="@ops",
        match_hour=6,
        match_minute=30,
        tz="UTC",
    )
    t = build_texts(s)
    assert "<b>Wednesdays</b>, and <b>Thursdays</b>" in t.subscribed
    assert "Fridays" not in t.subscribed
    assert t.read_error.endswith("@ops")
    assert t.write_error.endswith("@ops")
    assert "06:30 UTC" in t.help
