"""
Tests for the command-line interface.
"""

import json
import pytest
from click.testing import CliRunner

from combatlog.cli import cli


@pytest.fixture
def runner(monkeypatch, tmp_path):
    # Keep stray config files in the working directory out of the tests
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return CliRunner()


class TestReadCommand:
    """Test the read command."""

    def test_json_output(self, runner, write_log, sample_log_lines):
        path = write_log(sample_log_lines)

        result = runner.invoke(cli, ["read", str(path), "--format", "json"])

        assert result.exit_code == 0, result.output
        rows = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        assert len(rows) == len(sample_log_lines)
        assert rows[1] == {
            "line_number": 2,
            "timestamp": "9/15/2025 21:30:21.463-4",
            "event_name": "ZONE_CHANGE",
            "parameters": ["2649", "Hallowfall", "23"],
        }

    def test_offset_and_limit(self, runner, write_log, sample_log_lines):
        path = write_log(sample_log_lines)

        result = runner.invoke(cli, ["read", str(path), "--format", "json", "--offset", "1", "--limit", "2"])

        assert result.exit_code == 0, result.output
        rows = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        assert [r["event_name"] for r in rows] == ["ZONE_CHANGE", "ENCOUNTER_START"]
        assert [r["line_number"] for r in rows] == [1, 2]

    def test_table_output(self, runner, write_log):
        path = write_log(["t  A,1", "t  B,2"])

        result = runner.invoke(cli, ["read", str(path)])

        assert result.exit_code == 0, result.output
        assert "Read Statistics" in result.output
        assert "Lines Emitted" in result.output

    def test_table_output_with_limit_reports_timing(self, runner, write_log, sample_log_lines):
        path = write_log(sample_log_lines)

        result = runner.invoke(cli, ["read", str(path), "--limit", "1"])

        assert result.exit_code == 0, result.output
        assert "Read Time" in result.output
        assert "Lines/Second" in result.output

    def test_strict_failure_exits_nonzero(self, runner, write_log):
        path = write_log(["t  A,1", "broken"])

        result = runner.invoke(cli, ["read", str(path), "--strict"])

        assert result.exit_code == 1
        assert "Reading failed" in result.output

    def test_config_file(self, runner, write_log, tmp_path):
        path = write_log(["t  A;1;2"])
        config_file = tmp_path / "reader.yaml"
        config_file.write_text("part_separator: ';'\n")

        result = runner.invoke(cli, ["--config", str(config_file), "read", str(path), "--format", "json"])

        assert result.exit_code == 0, result.output
        (row,) = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        assert row["parameters"] == ["1", "2"]

    def test_missing_config_file(self, runner, write_log, tmp_path):
        path = write_log(["t  A,1"])
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "read", str(path)])
        assert result.exit_code == 2


class TestSplitCommand:
    """Test the split command."""

    def test_split(self, runner):
        result = runner.invoke(cli, ["split", '"a","b,c","d\\"e"'])

        assert result.exit_code == 0, result.output
        lines = [line.split(None, 1)[1] for line in result.output.splitlines()]
        assert lines == ["a", "b,c", 'd"e']

    def test_bad_separator(self, runner):
        result = runner.invoke(cli, ["split", "a,b", "--separator", "::"])
        assert result.exit_code == 2


class TestStatsCommand:
    """Test the stats command."""

    def test_counts_event_names(self, runner, write_log):
        path = write_log(["t  A,1", "t  B,1", "t  A,2"])

        result = runner.invoke(cli, ["stats", str(path)])

        assert result.exit_code == 0, result.output
        assert "66.7%" in result.output
        assert "33.3%" in result.output
