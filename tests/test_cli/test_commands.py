"""Tests for CLI commands."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ot_tracker.cli.commands import app

runner = CliRunner()


@pytest.fixture
def responses_file(tmp_path, complete_responses):
    path = tmp_path / "responses.json"
    path.write_text(json.dumps(complete_responses))
    return path


@pytest.fixture
def rom_file(tmp_path, rom_pre):
    path = tmp_path / "rom.json"
    path.write_text(json.dumps(rom_pre.model_dump(mode="json", by_alias=True)))
    return path


@pytest.fixture
def history_file(tmp_path, program_history, rom_pre, rom_post):
    path = tmp_path / "history.json"
    path.write_text(
        json.dumps(
            {
                "programAssessments": [a.model_dump(mode="json", by_alias=True) for a in program_history],
                "romAssessments": [a.model_dump(mode="json", by_alias=True) for a in (rom_pre, rom_post)],
            }
        )
    )
    return path


class TestVersionCommand:
    def test_version_command(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "OT Tracker" in result.stdout
        assert "0.1.0" in result.stdout


class TestCatalogCommand:
    def test_program(self):
        result = runner.invoke(app, ["catalog"])

        assert result.exit_code == 0
        assert "Program Evaluation" in result.stdout
        assert "Rating Scale" in result.stdout

    def test_rom(self):
        result = runner.invoke(app, ["catalog", "rom"])

        assert result.exit_code == 0
        assert "Range of Motion" in result.stdout
        assert "Elbow/Forearm" in result.stdout

    def test_unknown(self):
        result = runner.invoke(app, ["catalog", "grip"])

        assert result.exit_code == 1
        assert "Unknown catalog" in result.stdout


class TestScoreProgramCommand:
    def test_table_output(self, responses_file):
        result = runner.invoke(app, ["score-program", str(responses_file)])

        assert result.exit_code == 0
        assert "Domain Averages" in result.stdout
        assert "4.00" in result.stdout
        assert "68 / 85" in result.stdout

    def test_json_output(self, responses_file):
        result = runner.invoke(app, ["score-program", str(responses_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_score"] == 68
        assert data["domain_averages"]["gross_motor"] == "4.00"

    def test_record_with_responses_key(self, tmp_path):
        path = tmp_path / "record.json"
        path.write_text(json.dumps({"patientId": "p1", "responses": {"q1": 2, "q2": 3}}))

        result = runner.invoke(app, ["score-program", str(path), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["domain_averages"]["play"] == "2.50"

    def test_require_complete_fails(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"q1": 2}))

        result = runner.invoke(app, ["score-program", str(path), "--require-complete"])

        assert result.exit_code == 1
        assert "Please answer all questions" in result.stdout

    def test_require_complete_passes(self, responses_file):
        result = runner.invoke(app, ["score-program", str(responses_file), "--require-complete"])
        assert result.exit_code == 0

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["score-program", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        result = runner.invoke(app, ["score-program", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout


class TestScoreROMCommand:
    def test_record_regions(self, rom_file):
        result = runner.invoke(app, ["score-rom", str(rom_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["overall_percentage"] == 58
        assert [r["region"] for r in data["regions"]] == ["shoulder", "elbow"]

    def test_region_option_overrides(self, rom_file):
        result = runner.invoke(app, ["score-rom", str(rom_file), "--region", "elbow", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["overall_percentage"] == 50
        assert data["overall_status"] == "moderate"

    def test_bare_measurements_use_all_regions(self, tmp_path):
        path = tmp_path / "bare.json"
        path.write_text(json.dumps({"knee_flexion_left": 135, "ankle_dorsiflexion_right": 10}))

        result = runner.invoke(app, ["score-rom", str(path), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data["regions"]) == 7
        assert data["overall_percentage"] == 75

    def test_table_output(self, rom_file):
        result = runner.invoke(app, ["score-rom", str(rom_file)])

        assert result.exit_code == 0
        assert "ROM by Region" in result.stdout
        assert "58%" in result.stdout

    def test_unknown_region(self, rom_file):
        result = runner.invoke(app, ["score-rom", str(rom_file), "--region", "neck"])
        assert result.exit_code == 1

    def test_require_complete(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"selectedRegions": ["hip"], "measurements": {}}))

        result = runner.invoke(app, ["score-rom", str(path), "--require-complete"])

        assert result.exit_code == 1
        assert "Please enter at least one ROM measurement" in result.stdout


class TestProgressCommand:
    def test_json_output(self, history_file):
        result = runner.invoke(app, ["progress", str(history_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["program"]["assessment_count"] == 2
        assert data["program"]["overall_average"] == 3.5
        assert data["rom"]["improvement"]["improvement"] == 37

    def test_table_output(self, history_file):
        result = runner.invoke(app, ["progress", str(history_file)])

        assert result.exit_code == 0
        assert "Program Evaluation Progress" in result.stdout
        assert "Range of Motion Progress" in result.stdout
        assert "58% -> 95%" in result.stdout

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"programAssessments": [{"type": "pre"}]}))

        result = runner.invoke(app, ["progress", str(path)])

        assert result.exit_code == 1
        assert "Invalid assessment record" in result.stdout


class TestServeCommand:
    def test_serve_runs_uvicorn(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--port", "9000"])

        assert result.exit_code == 0
        args, kwargs = mock_run.call_args
        assert args[0] == "ot_tracker.api.app:create_app"
        assert kwargs["port"] == 9000
        assert kwargs["factory"] is True
