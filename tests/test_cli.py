"""
Tests for the command-line interface paths that need no database.
"""

import argparse

import pytest

from thpt_ranking.cli import (
    cmd_combinations,
    cmd_estimate,
    cmd_normalize,
    cmd_years,
    parse_entry,
)


class TestParseEntry:
    def test_full_entry(self):
        assert parse_entry("2024:A00:7,5") == {"year": 2024, "combination": "A00", "score": 7.5}

    def test_partial_score_stays_text(self):
        assert parse_entry("2023:D01:8")["score"] == "8"

    def test_missing_parts(self):
        assert parse_entry("2024") == {"year": 2024, "combination": None, "score": None}


class TestCommands:
    def test_normalize_replays_keystrokes(self, capsys):
        assert cmd_normalize(argparse.Namespace(raw=["7", "7,", "7,5"])) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3
        assert "7.5" in lines[-1]

    def test_estimate_rejects_invalid_entries(self, capsys):
        args = argparse.Namespace(entry=["2024:A00:11"], json=False)
        assert cmd_estimate(args) == 1
        err = capsys.readouterr().err
        assert "Validation Error" in err
        assert "Score must be at most 10" in err

    def test_estimate_with_nothing_complete(self, capsys):
        args = argparse.Namespace(entry=["2024:A00:"], json=False)
        assert cmd_estimate(args) == 1
        assert "at least one valid entry" in capsys.readouterr().err


@pytest.fixture
def no_database(monkeypatch):
    from thpt_ranking import pg_async
    from thpt_ranking.core.config import get_settings

    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(get_settings(), "database_url", None)
    monkeypatch.setattr(pg_async, "_async_db", None)


class TestDatabaseUnavailable:
    def test_estimate_returns_error_code(self, no_database, caplog):
        args = argparse.Namespace(entry=["2024:A00:8.5"], json=False)
        with caplog.at_level("ERROR"):
            assert cmd_estimate(args) == 1
        assert "DATABASE_URL" in caplog.text

    @pytest.mark.parametrize("command", [cmd_years, cmd_combinations])
    def test_catalog_commands_return_error_code(self, no_database, command):
        assert command(argparse.Namespace()) == 1
