"""
Unit tests for the command-line interface.
"""

import json

import pytest

from src.changes_engine.cli import main


class TestCli:
    """Tests for the changes-engine command."""

    def test_summary_output(self, temp_changelog_file, capsys):
        main([str(temp_changelog_file)])

        out = capsys.readouterr().out
        assert "Unreleased" in out
        assert "Not Released" in out
        assert "1.0.0" in out

    def test_spec_output(self, temp_changelog_file, capsys):
        main([str(temp_changelog_file), "--spec"])

        out = capsys.readouterr().out
        assert "Unreleased Not Released\n" in out
        assert "1.0.0 2024-01-01\n" in out
        assert "https://example.com" not in out

    def test_json_output(self, temp_changelog_file, capsys):
        main([str(temp_changelog_file), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert [release["version"] for release in data["releases"]] == ["1.0.0", "Unreleased"]

    def test_unrecognized_file_exits_with_error(self, temp_traditional_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(temp_traditional_file)])

        assert exc_info.value.code == 1
        assert "not a Keep a Changelog document" in capsys.readouterr().err

    def test_missing_file_exits_with_error(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.md")])

        assert exc_info.value.code == 1
        assert "[ERROR]" in capsys.readouterr().err

    def test_spec_and_json_are_exclusive(self, temp_changelog_file):
        with pytest.raises(SystemExit) as exc_info:
            main([str(temp_changelog_file), "--spec", "--json"])

        assert exc_info.value.code == 2
