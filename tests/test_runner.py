"""Tests for src.pipeline.runner ensuring orchestration flows through dependencies.

Run with:
    pytest tests/test_runner.py --maxfail=1 -v --cov=src.pipeline.runner --cov-report=term-missing
"""

import asyncio
import csv
import datetime as dt
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.metrics.window import parse_time_window
from src.pipeline import runner
from src.pipeline.config import ReportSettings
from src.report.writer import ReportWriteError
from src.retrieval.http_client import GraphQLError
from src.retrieval.models import RepositorySnapshot

NOW = dt.datetime(2024, 3, 10, tzinfo=dt.timezone.utc)


def _fake_fetch(repo):
    if repo == "o/broken":
        raise GraphQLError("Could not resolve to a Repository", status=200)
    return RepositorySnapshot(name=repo, stars=len(repo))


def test_fetch_all_keeps_going_after_a_failure(capsys):
    outcomes = asyncio.run(runner.fetch_all(["o/a", "o/broken", "o/bb"], _fake_fetch))
    assert [outcome.repo for outcome in outcomes] == ["o/a", "o/broken", "o/bb"]
    assert outcomes[0].snapshot.stars == 3
    assert isinstance(outcomes[1].error, GraphQLError) and outcomes[1].snapshot is None
    assert outcomes[2].snapshot is not None
    assert "[error] o/broken" in capsys.readouterr().out


def test_build_rows_excludes_failed_repositories():
    outcomes = [
        runner.FetchOutcome("o/a", snapshot=RepositorySnapshot(name="o/a", stars=2)),
        runner.FetchOutcome("o/broken", error=RuntimeError("boom")),
    ]
    rows = runner.build_rows(outcomes, parse_time_window("2024-01-01", "2024-02-01"), NOW)
    assert [row["repo"] for row in rows] == ["o/a", "TOTAL"]
    assert rows[-1]["stars"] == 2


def test_run_report_writes_csv(tmp_path, capsys):
    settings = ReportSettings(
        window=parse_time_window("2024-01-01", "2024-02-01"),
        repos=("o/a", "o/broken"),
        reports_dir=tmp_path,
    )
    path = runner.run_report(settings, now=NOW, fetch=_fake_fetch)

    assert path == tmp_path / "2024-03-10_2024-01-01_to_2024-02-01.csv"
    with path.open(newline="", encoding="utf-8") as handle:
        names = [line[0] for line in csv.reader(handle)][1:]
    assert names == ["o/a", "TOTAL"]
    assert "1 of 2 repos failed" in capsys.readouterr().out


def test_main_exits_on_bad_window_without_fetching(capsys):
    with patch("src.pipeline.runner.run_report") as mock_run:
        with pytest.raises(SystemExit) as excinfo:
            runner.main(["2024-02-01", "2024-01-01", "o/a"])
    assert excinfo.value.code == 1
    assert not mock_run.called
    assert "Invalid inputs" in capsys.readouterr().out


def test_main_exits_on_bad_repo_name():
    with patch("src.pipeline.runner.run_report") as mock_run:
        with pytest.raises(SystemExit) as excinfo:
            runner.main(["2024-01-01", "2024-02-01", "not-a-repo"])
    assert excinfo.value.code == 1
    assert not mock_run.called


def test_main_exits_when_report_cannot_be_written():
    with patch("src.pipeline.runner.run_report", side_effect=ReportWriteError("disk full")):
        with pytest.raises(SystemExit) as excinfo:
            runner.main(["2024-01-01", "2024-02-01", "o/a"])
    assert excinfo.value.code == 2


def test_main_uses_custom_repos(tmp_path, capsys):
    mock_run = MagicMock(return_value=Path(tmp_path / "report.csv"))
    with patch("src.pipeline.runner.run_report", mock_run):
        runner.main(["2024-01-01", "2024-02-01", "x/y", "--reports-dir", str(tmp_path)])
    settings = mock_run.call_args.args[0]
    assert settings.repos == ("x/y",)
    assert settings.reports_dir == tmp_path
    assert "Report written to" in capsys.readouterr().out
