# tests/test_commands.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from timekeep.cli import main as cli_main
from timekeep.cli.bootstrap import create_initial_state
from timekeep.cli.commands import registry
from timekeep.config import Settings, get_settings
from timekeep.core.clock import FixedClock
from timekeep.core.state import AppState
from timekeep.errors import ValidationError

from .conftest import T0


def _run(state: AppState, *argv: str) -> str:
    args = cli_main.build_parser().parse_args(list(argv))
    return registry.handle(state, args)


def test_registry_knows_all_commands() -> None:
    assert registry.names() == ["start", "end", "add", "view"]


def test_start_end_view_flow(state: AppState, clock: FixedClock) -> None:
    out = _run(state, "start", "acme", "-d", "planning")
    assert out.startswith("Started task: project: acme, started at: 10:00 13-Mar-2024")
    assert "description: planning" in out

    assert _run(state, "view").startswith("Current task: project: acme")

    clock.advance(minutes=90)
    out = _run(state, "end")
    assert out.startswith("Ended task: project: acme")
    assert "duration 1 hours 30 minutes" in out

    assert _run(state, "end") == "No current task to end"

    out = _run(state, "view", "--day")
    assert out.splitlines()[0] == "Tasks (day):"
    assert out.splitlines()[-1] == "Total: 1 hours 30 minutes across 1 task(s)"


def test_start_ends_previous_unless_overwrite(state: AppState) -> None:
    _run(state, "start", "first", "-s", "09:00")
    out = _run(state, "start", "second", "-s", "09:30")
    assert out.splitlines()[0].startswith("Ended task: project: first")

    _run(state, "start", "third", "-s", "09:45", "--overwrite")
    tasks = state.lifecycle.view_all()
    assert [t.project_name for t in tasks] == ["first"]
    assert tasks[0].end_time == T0
    assert state.lifecycle.view_current().project_name == "third"


def test_end_with_discard(state: AppState) -> None:
    _run(state, "start", "acme", "-s", "08:00")
    out = _run(state, "end", "08:30", "--discard")
    assert out.startswith("Discarded task: project: acme")
    assert state.lifecycle.view_all() == []


def test_add_and_view_range(state: AppState) -> None:
    out = _run(state, "add", "acme", "2024-03-01 09:00", "2024-03-01 10:15", "-d", "backfill")
    assert out.startswith("Added to database: project: acme")

    out = _run(state, "view", "--from", "2024-03-01 00:00", "--to", "2024-03-02 00:00")
    assert "1. project: acme" in out
    assert out.endswith("Total: 1 hours 15 minutes across 1 task(s)")

    assert _run(state, "view", "--week").endswith("no tasks")
    assert "acme" in _run(state, "view", "--month")


def test_view_needs_both_range_ends(state: AppState) -> None:
    with pytest.raises(ValidationError):
        _run(state, "view", "--from", "09:00")


def test_view_shortcuts_are_mutually_exclusive() -> None:
    with pytest.raises(SystemExit):
        cli_main.build_parser().parse_args(["view", "--day", "--week"])


def test_main_reports_errors_and_exit_codes(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TIMEKEEP_DATA_DIR", str(tmp_path / "home"))
    monkeypatch.setenv("TIMEKEEP_LOG_TO_FILE", "false")
    monkeypatch.delenv("TIMEKEEP_CURRENT_TASK_PATH", raising=False)
    monkeypatch.delenv("TIMEKEEP_DATABASE_PATH", raising=False)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **_: None)
    get_settings.cache_clear()
    try:
        assert cli_main.main(["end"]) == 0
        assert capsys.readouterr().out.strip() == "No current task to end"

        assert cli_main.main(["view"]) == 1
        assert "no task is currently running" in capsys.readouterr().err

        assert cli_main.main(["add", "acme", "10:00", "09:00"]) == 1
        assert "before start time" in capsys.readouterr().err

        assert cli_main.main(["start", "acme"]) == 0
        assert (tmp_path / "home" / "current_task.json").exists()
    finally:
        get_settings.cache_clear()


def test_fixed_start_time_is_reported(state: AppState) -> None:
    out = _run(state, "start", "acme", "-s", "2024-03-13 09:00")
    assert "started at: 09:00 13-Mar-2024" in out
    assert state.lifecycle.view_current().start_time == T0.replace(hour=9)


def test_bootstrap_logs_stored_task_count(
    state: AppState, settings: Settings, clock: FixedClock, caplog: pytest.LogCaptureFixture
) -> None:
    _run(state, "add", "acme", "08:00", "09:00")

    with caplog.at_level(logging.DEBUG, logger="timekeep.cli.bootstrap"):
        fresh = create_initial_state(settings=settings, clock=clock)

    assert "total=1" in caplog.text
    assert fresh.settings is settings
