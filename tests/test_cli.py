"""Tests for the CLI interface.

Tests command parsing, output formatting, and basic functionality
using Click's CliRunner.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from about_time.__main__ import cli


MINUTE = 60000


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def library_file(tmp_path):
    """Write a small template library and return its path."""
    data = {
        "version": "0.0.1",
        "templates": [
            {"templateType": "atomic", "id": "atomic1", "intent": "Boil water",
             "estimatedDuration": 10 * MINUTE},
            {"templateType": "lane", "id": "lane1", "intent": "Morning routine",
             "estimatedDuration": 20 * MINUTE,
             "segments": [{"templateId": "atomic1", "offset": 0}]},
            {"templateType": "lane", "id": "outer", "intent": "Weekend brunch",
             "estimatedDuration": 60 * MINUTE,
             "segments": [{"templateId": "lane1", "offset": 5 * MINUTE},
                          {"templateId": "nowhere", "offset": 0}]},
        ],
    }
    path = tmp_path / "templates.json"
    path.write_text(json.dumps(data))
    return str(path)


def invoke(runner, library_file, *args):
    return runner.invoke(cli, ["--library", library_file, *args])


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "template composition and timeline layout" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_verbose_flag(self, runner):
        result = runner.invoke(cli, ["--verbose", "--help"])
        assert result.exit_code == 0


class TestTemplateCommands:
    """Test template library commands."""

    def test_list(self, runner, library_file):
        result = invoke(runner, library_file, "templates", "list")
        assert result.exit_code == 0
        assert "atomic1" in result.output
        assert "Weekend brunch" in result.output

    def test_list_filtered(self, runner, library_file):
        result = invoke(runner, library_file, "templates", "list", "--type", "atomic")
        assert result.exit_code == 0
        assert "atomic1" in result.output
        assert "lane1" not in result.output

    def test_list_empty_library(self, runner, tmp_path):
        result = invoke(runner, str(tmp_path / "missing.json"), "templates", "list")
        assert result.exit_code == 0
        assert "No templates found." in result.output


class TestLaneCommands:
    """Test lane layout commands."""

    def test_search(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "search", "ROUTINE")
        assert result.exit_code == 0
        assert "lane1" in result.output
        assert "outer" not in result.output

    def test_search_all(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "search")
        assert result.exit_code == 0
        assert "lane1" in result.output
        assert "outer" in result.output

    def test_search_no_results(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "search", "dinner")
        assert "No matching lanes." in result.output

    def test_show(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "show", "lane1")
        assert result.exit_code == 0
        assert "Nested depth: 1" in result.output
        assert "10min - 20min" in result.output

    def test_show_unknown_lane(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "show", "nope")
        assert result.exit_code == 1
        assert "Lane not found" in result.output

    def test_show_atomic_rejected(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "show", "atomic1")
        assert result.exit_code == 1
        assert "Not a lane template" in result.output

    def test_tree(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "tree", "outer")
        assert result.exit_code == 0
        assert "nowhere (missing)" in result.output
        assert "atomic1" in result.output

    def test_tree_collapsed(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "tree", "outer", "--max-depth", "1")
        assert result.exit_code == 0
        assert "+1 hidden levels" in result.output

    def test_items(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "items", "outer")
        assert result.exit_code == 0
        assert "Boil water" in result.output
        assert "wait 5min" in result.output

    def test_timeline(self, runner, library_file, tmp_path):
        output = tmp_path / "lane1.html"
        result = invoke(runner, library_file, "lane", "timeline", "lane1", "-o", str(output))
        assert result.exit_code == 0
        assert output.exists()

    def test_check_cycle_detected(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "check-cycle", "lane1", "outer")
        assert result.exit_code == 1
        assert "Circular" in result.output

    def test_check_cycle_ok(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "check-cycle", "outer", "atomic1")
        assert result.exit_code == 0
        assert "OK" in result.output


class TestArrangeCommands:
    """Test commands that edit a lane and save the library."""

    def saved_lane(self, library_file, lane_id):
        data = json.loads(Path(library_file).read_text())
        return next(t for t in data["templates"] if t["id"] == lane_id)

    def test_arrange_pack(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "arrange", "outer")
        assert result.exit_code == 0
        assert "Saved lane" in result.output
        offsets = [s["offset"] for s in self.saved_lane(library_file, "outer")["segments"]]
        assert offsets == [0, 0]

    def test_arrange_interval(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "arrange", "outer",
                        "--mode", "interval", "--gap", str(MINUTE))
        assert result.exit_code == 0
        segments = self.saved_lane(library_file, "outer")["segments"]
        assert [(s["templateId"], s["offset"]) for s in segments] == [("nowhere", 0), ("lane1", MINUTE)]

    def test_insert_gap(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "insert-gap", "lane1", "0", str(MINUTE))
        assert result.exit_code == 0
        assert self.saved_lane(library_file, "lane1")["segments"][0]["offset"] == MINUTE

    def test_insert_gap_bad_index(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "insert-gap", "lane1", "4", str(MINUTE))
        assert result.exit_code == 1
        assert "out of range" in result.output

    def test_fit(self, runner, library_file):
        result = invoke(runner, library_file, "lane", "fit", "outer")
        assert result.exit_code == 0
        assert self.saved_lane(library_file, "outer")["estimatedDuration"] == 25 * MINUTE

    def test_other_templates_untouched(self, runner, library_file):
        invoke(runner, library_file, "lane", "fit", "outer")
        assert self.saved_lane(library_file, "lane1")["estimatedDuration"] == 20 * MINUTE
