"""Tests for the darwin CLI.

Tests cover:
1. assess: full report JSON for the fixture configuration
2. simulate: preset and slider-score driven profiles
3. validate-config: exit code 0 on pass, 2 on fail
4. Input errors: invalid JSON, invalid config, invalid answers, unknown preset
"""

from __future__ import annotations

import json
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import pytest

from darwin.cli import main
from darwin.settings import DARWIN_DEFAULT_STAGE_ENV
from tests.fixtures.builders import SAMPLE_CONFIG_PATH

CONFIG = str(SAMPLE_CONFIG_PATH)


@contextmanager
def _temp_file(content: Any) -> Iterator[str]:
    """Write JSON (or raw text for str content) to a temp file; remove it afterwards."""
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".json", delete=False, encoding="utf-8"
    ) as f:
        if isinstance(content, str):
            f.write(content)
        else:
            json.dump(content, f)
        temp_path = f.name
    try:
        yield temp_path
    finally:
        Path(temp_path).unlink(missing_ok=True)


def _run(argv: list[str], capsys: pytest.CaptureFixture[str]) -> tuple[int, dict[str, Any]]:
    exit_code = main(argv)
    return exit_code, json.loads(capsys.readouterr().out)


ANSWERS = [
    {"question_id": "MN1", "value": 2},
    {"question_id": "FS1", "value": 2},
    {"question_id": "FS2", "value": 1},
    {"question_id": "EE1", "value": 5},
    {"question_id": "GR1", "is_na": True},
]


class TestCliAssess:
    """assess prints the full report."""

    def test_assess_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file(ANSWERS) as answers, _temp_file({"runway_months": 3}) as context:
            argv = ["assess", "--config", CONFIG, "--answers", answers, "--context", context]
            exit_code, output = _run([*argv, "--stage", "seed"], capsys)

        assert exit_code == 0
        assert output["stage"] == "seed"
        assert [rf["code"] for rf in output["result"]["red_flags"]] == [
            "RF_RUNWAY",
            "RF_FS_LOW",
            "RF_NO_BURN",
        ]
        assert output["council_risk"] == 76
        assert len(output["top_actions"]) <= 5
        assert output["agenda"][-1]["topic"] == "Red flag: Short runway"
        assert output["completeness"] == {
            "answered": 4,
            "confidence": "low",
            "pct": 33,
            "total": 12,
        }

    def test_assess_without_answers(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(["assess", "--config", CONFIG], capsys)
        assert exit_code == 0
        assert output["result"]["overall_score"] == 0.0
        assert output["gaps"] == []

    def test_assess_is_deterministic(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file(ANSWERS) as answers:
            main(["assess", "--config", CONFIG, "--answers", answers])
            first = capsys.readouterr().out
            main(["assess", "--config", CONFIG, "--answers", answers])
            second = capsys.readouterr().out
        assert first == second

    def test_default_stage_from_environment(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(DARWIN_DEFAULT_STAGE_ENV, "series_a")
        exit_code, output = _run(["assess", "--config", CONFIG], capsys)
        assert exit_code == 0
        assert output["stage"] == "series_a"


class TestCliSimulate:
    def test_simulate_preset(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(
            ["simulate", "--config", CONFIG, "--preset", "struggling"], capsys
        )
        assert exit_code == 0
        assert [rf["code"] for rf in output["result"]["red_flags"]] == ["RF_RUNWAY", "RF_FS_LOW"]

    def test_simulate_scores_override_preset(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file({"FS": 5}) as scores:
            exit_code, output = _run(
                ["simulate", "--config", CONFIG, "--preset", "struggling", "--scores", scores],
                capsys,
            )
        assert exit_code == 0
        assert [rf["code"] for rf in output["result"]["red_flags"]] == ["RF_RUNWAY"]

    def test_unknown_preset(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(["simulate", "--config", CONFIG, "--preset", "nope"], capsys)
        assert exit_code == 2
        assert output["errors"][0]["code"] == "UNKNOWN_PRESET"

    def test_invalid_scores(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file({"FS": "high"}) as scores:
            exit_code, output = _run(
                ["simulate", "--config", CONFIG, "--scores", scores], capsys
            )
        assert exit_code == 2
        assert output["errors"][0]["code"] == "INVALID_SCORES"


class TestCliValidateConfig:
    def test_valid_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(["validate-config", "--input", CONFIG], capsys)
        assert exit_code == 0
        assert output == {"errors": [], "pass": True, "warnings": []}

    def test_invalid_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file({"dimensions": []}) as path:
            exit_code, output = _run(["validate-config", "--input", path], capsys)
        assert exit_code == 2
        assert output["pass"] is False
        assert {e["code"] for e in output["errors"]} == {"required"}


class TestCliInputErrors:
    """Unreadable or invalid inputs exit with code 2 and an error JSON."""

    def test_invalid_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file("{ this is not valid json }") as path:
            exit_code, output = _run(["assess", "--config", path], capsys)
        assert exit_code == 2
        assert output["pass"] is False
        assert output["errors"][0]["code"] == "INVALID_JSON"

    def test_empty_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file("") as path:
            exit_code, output = _run(["validate-config", "--input", path], capsys)
        assert exit_code == 2
        assert output["errors"][0]["code"] == "INVALID_JSON"

    def test_missing_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code, output = _run(["assess", "--config", "/nonexistent/config.json"], capsys)
        assert exit_code == 2
        assert output["errors"][0]["code"] == "INVALID_JSON"

    def test_invalid_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file({"dimensions": [{"label": "No id"}]}) as path:
            exit_code, output = _run(["assess", "--config", path], capsys)
        assert exit_code == 2
        assert output["errors"][0]["code"] == "INVALID_CONFIG"
        assert len(output["errors"]) > 1

    def test_invalid_answers(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file([{"question_id": "MN1", "value": 9}]) as answers:
            exit_code, output = _run(
                ["assess", "--config", CONFIG, "--answers", answers], capsys
            )
        assert exit_code == 2
        assert output["errors"][0]["code"] == "INVALID_ANSWERS"

    def test_invalid_context(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _temp_file(["runway_months", 3]) as context:
            exit_code, output = _run(
                ["assess", "--config", CONFIG, "--context", context], capsys
            )
        assert exit_code == 2
        assert output["errors"][0]["code"] == "INVALID_CONTEXT"

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "darwin" in capsys.readouterr().out
