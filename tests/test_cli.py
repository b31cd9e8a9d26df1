"""Tests for the command line entry point."""

import json

from linelint.cli import discover_files, main
from linelint.config import LintConfig


class TestDiscoverFiles:
    """Test included / excluded globbing."""

    def test_excluded_patterns(self, tmp_path):
        (tmp_path / "Sources").mkdir()
        (tmp_path / "Pods").mkdir()
        (tmp_path / "Sources" / "App.swift").write_text("", encoding="utf-8")
        (tmp_path / "Pods" / "Lib.swift").write_text("", encoding="utf-8")
        (tmp_path / "README.md").write_text("", encoding="utf-8")

        config = LintConfig(included=["**/*.swift"], excluded=["Pods/**"])
        assert discover_files(config, tmp_path) == [str(tmp_path / "Sources" / "App.swift")]


class TestMain:
    """Test end-to-end runs."""

    def test_warning_exit_zero(self, tmp_path, capsys):
        path = tmp_path / "A.swift"
        path.write_text("x" * 130 + "\n", encoding="utf-8")

        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert f"{path}:1: warning: Line should be 120 characters or less: currently 130 characters" in out

    def test_error_exit_one_with_config(self, tmp_path, capsys):
        path = tmp_path / "A.swift"
        path.write_text("x" * 60 + "\n", encoding="utf-8")
        config = tmp_path / "linelint.yml"
        config.write_text("rules:\n  line_length: [40, 50]\n", encoding="utf-8")

        assert main(["--config", str(config), "--json-output", str(path)]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["errors"] == 1

    def test_invalid_config_exit_two(self, tmp_path, capsys):
        config = tmp_path / "linelint.yml"
        config.write_text("rules:\n  line_length: [0]\n", encoding="utf-8")

        assert main(["--config", str(config), str(tmp_path / "A.swift")]) == 2
        assert "invalid rule configuration" in capsys.readouterr().err

    def test_plain_output(self, tmp_path, capsys):
        path = tmp_path / "A.swift"
        path.write_text("x" * 130 + "\n", encoding="utf-8")

        assert main(["--plain-output", str(path)]) == 0
        out = capsys.readouterr().out
        assert out.startswith(f"[WARNING] {path}:1 - Line should be 120 characters or less")
        assert out.rstrip().endswith("(line_length)")

    def test_single_threshold_config_reports_nothing_below_it(self, tmp_path, capsys):
        path = tmp_path / "A.swift"
        path.write_text("x" * 250 + "\n", encoding="utf-8")
        config = tmp_path / "linelint.yml"
        config.write_text("rules:\n  line_length: [300]\n", encoding="utf-8")

        assert main(["--config", str(config), str(path)]) == 0
        assert capsys.readouterr().out == ""
