"""Tests for app.cli.generate_plan."""
import json
from pathlib import Path

import pytest

from app.cli.generate_plan import main

BASE_ARGS = ["--test-date", "2026-05-25", "--today", "2026-01-05", "--current", "1080", "--target", "1350"]


def test_json_output(capsys) -> None:
    main(BASE_ARGS + ["--format", "json"])
    data = json.loads(capsys.readouterr().out)
    assert data["plan_type"] == "extended"
    assert data["total_weeks"] == 19
    assert data["tutoring"]["sessions_per_week"] == 2


def test_table_output(capsys) -> None:
    main(BASE_ARGS + ["--tutoring", "3"])
    out = capsys.readouterr().out
    assert "Plan Summary" in out
    assert "Extended Plan" in out
    assert "Peak Performance" in out


def test_markdown_output_and_file(capsys, tmp_path: Path) -> None:
    out_path = tmp_path / "plan.md"
    main(BASE_ARGS + ["--format", "markdown", "--output", str(out_path)])
    assert capsys.readouterr().out.startswith("# SAT Study Plan")
    assert out_path.read_text().startswith("# SAT Study Plan")


def test_invalid_request_exits_with_error(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--test-date", "2026-05-25", "--today", "2026-01-05", "--current", "1300", "--target", "1200"])
    assert exc_info.value.code == 1
    assert "Target score should be higher than your current score" in capsys.readouterr().err


def test_bad_date_is_rejected_by_the_parser() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--test-date", "05/25/2026", "--current", "1000", "--target", "1200"])
    assert exc_info.value.code == 2
