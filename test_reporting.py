"""Tests for FieldDiff report sinks, CLI, configuration and batch runner."""

import csv
import io
import json

import pytest
from rich.console import Console

from fielddiff import (
    EngineConfig,
    ConfigError,
    ReportExportError,
    BatchRunner,
    classify,
    flatten,
)
from fielddiff.cli import main
from fielddiff.export import export_report_to_csv, write_report_csv
from fielddiff.models import LogLevel
from fielddiff.reporter import ComparisonReporter


def _write_json(path, data):
    path.write_text(json.dumps(data))
    return path


def _scenario_c_report():
    first = flatten({"name": "John", "age": 30})
    second = flatten({"email": "john@example.com", "name": "John"})
    return classify(first, second, "/data/first.json", "/data/second.json")


class TestCsvExport:
    """Test the CSV report layout."""

    def test_header_and_rows(self):
        """Test the seven-column layout."""
        stream = io.StringIO()
        write_report_csv(_scenario_c_report(), stream)
        rows = list(csv.reader(io.StringIO(stream.getvalue())))

        assert rows[0] == [
            "Field Name",
            "File 1 (first.json)",
            "File 2 (second.json)",
            "Value in File 1",
            "Value in File 2",
            "Status",
            "Difference",
        ]
        assert rows[1] == ["age", "Yes", "No", "30", "", "⚠ Only in File 1", "Missing in File 2"]
        assert rows[2] == ["email", "No", "Yes", "", '"john@example.com"', "⚠ Only in File 2", "Missing in File 1"]
        assert rows[3] == ["name", "Yes", "Yes", '"John"', '"John"', "✓ Common", "Same value"]

    def test_values_with_commas_are_quoted(self):
        """Test rendered JSON with commas survives a CSV round trip."""
        report = classify(flatten({"a": [1, 2]}), flatten({"a": [1, 3]}))
        stream = io.StringIO()
        write_report_csv(report, stream)
        rows = list(csv.reader(io.StringIO(stream.getvalue())))
        assert rows[1][3] == "[1,2]"
        assert rows[1][4] == "[1,3]"

    def test_export_to_file(self, tmp_path):
        """Test exporting to a file."""
        destination = tmp_path / "report.csv"
        export_report_to_csv(_scenario_c_report(), destination)

        with open(destination, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        assert len(rows) == 4

    def test_export_error(self, tmp_path):
        """Test write failures raise ReportExportError."""
        destination = tmp_path / "no-such-dir" / "report.csv"
        with pytest.raises(ReportExportError) as exc_info:
            export_report_to_csv(_scenario_c_report(), destination)
        assert exc_info.value.destination == str(destination)


class TestTerminalReporter:
    """Test the rich terminal report."""

    def setup_method(self):
        self.output = io.StringIO()
        self.reporter = ComparisonReporter(Console(file=self.output, width=250, color_system=None))

    def test_full_report(self):
        """Test the file paths, detailed table and summary are printed."""
        self.reporter.print_report(_scenario_c_report(), "/data/first.json", "/data/second.json")
        text = self.output.getvalue()

        assert "FILE PATHS:" in text
        assert "File 1: /data/first.json" in text
        assert "DETAILED FIELD COMPARISON TABLE" in text
        assert "Missing in File 2" in text
        assert "SUMMARY" in text
        assert "Unique fields" in text

    def test_values_are_truncated(self):
        """Test long values are cut to 14 characters plus an ellipsis."""
        report = classify({"a": '"abcdefghijklmnopqrstuvwxyz"'}, {})
        self.reporter.print_detailed_table(report)
        text = self.output.getvalue()

        assert '"abcdefghijklm...' in text
        assert "abcdefghijklmnopqrstuvwxyz" not in text

    def test_json_values_are_not_markup(self):
        """Test rendered arrays are printed literally."""
        report = classify(flatten({"flags": [True, False]}), {})
        self.reporter.print_detailed_table(report)
        assert "[true,false]" in self.output.getvalue()

    def test_absent_value_shown_as_dash(self):
        """Test absent values print as '-'."""
        report = classify({"a": "1"}, {})
        self.reporter.print_detailed_table(report)
        assert " - " in self.output.getvalue()


class TestEngineConfig:
    """Test configuration loading."""

    def test_defaults(self):
        """Test default values."""
        config = EngineConfig.from_dict(None)
        assert config.concurrent is False
        assert config.max_depth is None
        assert config.log_level == LogLevel.INFO

    def test_from_dict(self):
        """Test a full mapping."""
        config = EngineConfig.from_dict({
            "concurrent": True,
            "max_depth": 10,
            "log_level": "debug",
            "collect_warnings": False,
        })
        assert config.concurrent is True
        assert config.max_depth == 10
        assert config.log_level == LogLevel.DEBUG
        assert config.collect_warnings is False

    def test_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigError) as exc_info:
            EngineConfig.from_dict({"exclude": ["a"]})
        assert exc_info.value.details["keys"] == ["exclude"]

    def test_max_depth_may_be_null(self):
        """Test an explicit null keeps the traversal unbounded."""
        assert EngineConfig.from_dict({"max_depth": None}).max_depth is None

    def test_invalid_values(self):
        """Test type validation."""
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({"max_depth": 0})
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({"concurrent": "yes"})
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({"log_level": "LOUD"})

    def test_from_yaml_file(self, tmp_path):
        """Test loading a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text("concurrent: true\nmax_depth: 5\n")
        config = EngineConfig.from_file(path)
        assert config.concurrent is True
        assert config.max_depth == 5

    def test_from_json_file(self, tmp_path):
        """Test JSON config files are accepted too."""
        path = tmp_path / "config.json"
        path.write_text('{"log_level": "WARNING"}')
        assert EngineConfig.from_file(path).log_level == LogLevel.WARNING

    def test_missing_file(self, tmp_path):
        """Test a missing config file."""
        with pytest.raises(ConfigError):
            EngineConfig.from_file(tmp_path / "nope.yaml")


class TestCli:
    """Test the command line entry point."""

    def setup_method(self):
        self.same = {"name": "John", "age": 30}
        self.reordered = {"age": 30, "name": "John"}
        self.changed = {"age": 25, "name": "John"}

    def test_equal_files_exit_zero(self, tmp_path):
        """Test exit code 0 for structurally equal files."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        file2 = _write_json(tmp_path / "b.json", self.reordered)
        assert main([str(file1), str(file2)]) == 0

    def test_different_files_exit_one(self, tmp_path, capsys):
        """Test exit code 1 and a printed report for different files."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        file2 = _write_json(tmp_path / "b.json", self.changed)
        assert main([str(file1), str(file2)]) == 1
        assert "DETAILED FIELD COMPARISON TABLE" in capsys.readouterr().out

    def test_csv_export(self, tmp_path):
        """Test the -export-to-csv option."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        file2 = _write_json(tmp_path / "b.json", self.changed)
        output = tmp_path / "out.csv"

        assert main([str(file1), str(file2), "-export-to-csv", str(output)]) == 1

        with open(output, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        assert rows[0][1] == "File 1 (a.json)"
        assert rows[1][:5] == ["age", "Yes", "Yes", "30", "25"]

    def test_csv_path_must_end_with_csv(self, tmp_path):
        """Test a non-.csv destination is rejected."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        output = tmp_path / "out.txt"
        assert main([str(file1), str(file1), "-export-to-csv", str(output)]) == 1
        assert not output.exists()

    def test_missing_csv_path(self, tmp_path):
        """Test -export-to-csv without a path."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        assert main([str(file1), str(file1), "-export-to-csv"]) == 1

    def test_wrong_argument_count(self, tmp_path):
        """Test a single file argument is a usage error."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        assert main([str(file1)]) == 1

    def test_unreadable_file(self, tmp_path):
        """Test read errors exit with 1."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        assert main([str(file1), str(tmp_path / "missing.json")]) == 1

    def test_malformed_file(self, tmp_path):
        """Test parse errors exit with 1."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        file2 = tmp_path / "b.json"
        file2.write_text("{not json")
        assert main([str(file1), str(file2)]) == 1

    def test_parallel_flag(self, tmp_path):
        """Test the concurrent pipeline from the CLI."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        file2 = _write_json(tmp_path / "b.json", self.reordered)
        assert main([str(file1), str(file2), "--parallel"]) == 0

    def test_deeply_nested_equal_files_exit_zero(self, tmp_path):
        """Test identical files nested 150 levels deep exit with 0."""
        doc = 1
        for _ in range(150):
            doc = {"a": doc}
        file1 = _write_json(tmp_path / "a.json", doc)
        file2 = _write_json(tmp_path / "b.json", doc)
        assert main([str(file1), str(file2)]) == 0

    def test_export_option_spellings_and_position(self, tmp_path):
        """Test the long option spelling, before and after the file paths."""
        file1 = _write_json(tmp_path / "a.json", self.same)
        file2 = _write_json(tmp_path / "b.json", self.reordered)
        first = tmp_path / "first.csv"
        second = tmp_path / "second.csv"

        assert main(["--export-to-csv", str(first), str(file1), str(file2)]) == 0
        assert main([str(file1), str(file2), "--export-to-csv", str(second)]) == 0
        assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")

    def test_depth_capped_match_cannot_export(self, tmp_path):
        """Test CSV mode fails when a match has no report to export."""
        doc = 1
        for _ in range(10):
            doc = {"a": doc}
        file1 = _write_json(tmp_path / "a.json", doc)
        config = tmp_path / "engine.yaml"
        config.write_text("max_depth: 3\n")
        output = tmp_path / "out.csv"

        assert main(["--config", str(config), str(file1), str(file1)]) == 0
        assert main([
            "--config", str(config), str(file1), str(file1), "-export-to-csv", str(output)
        ]) == 1
        assert not output.exists()


class TestBatchRunner:
    """Test manifest-driven batch comparison."""

    def _manifest(self, tmp_path, pairs, config=None):
        _write_json(tmp_path / "a.json", {"x": 1, "y": [1, 2]})
        _write_json(tmp_path / "b.json", {"y": [1, 2], "x": 1})
        _write_json(tmp_path / "c.json", {"y": [2, 1], "x": 1})
        lines = []
        if config:
            lines.append("config:")
            lines.extend(f"  {key}: {value}" for key, value in config.items())
        lines.append("pairs:")
        for pair in pairs:
            lines.append(f"  - name: {pair['name']}")
            lines.append(f"    first: {pair['first']}")
            lines.append(f"    second: {pair['second']}")
            if "expected_match" in pair:
                lines.append(f"    expected_match: {str(pair['expected_match']).lower()}")
        path = tmp_path / "pairs.yaml"
        path.write_text("\n".join(lines) + "\n")
        return path

    def test_run(self, tmp_path):
        """Test pass/fail counting with expected verdicts."""
        manifest = self._manifest(tmp_path, [
            {"name": "reordered", "first": "a.json", "second": "b.json"},
            {"name": "swapped", "first": "a.json", "second": "c.json", "expected_match": False},
            {"name": "unexpected", "first": "a.json", "second": "c.json"},
        ])
        report = BatchRunner(manifest).run(print_report=False)

        assert report.total == 3
        assert report.passed == 2
        assert report.failed == 1
        assert [p.passed for p in report.pairs] == [True, True, False]
        assert report.pairs[2].report.different_values > 0

    def test_errors_are_recorded(self, tmp_path):
        """Test a missing file fails only its own pair."""
        manifest = self._manifest(tmp_path, [
            {"name": "broken", "first": "a.json", "second": "missing.json"},
            {"name": "ok", "first": "a.json", "second": "b.json"},
        ])
        report = BatchRunner(manifest).run(print_report=False)

        assert report.errors == 1
        assert report.passed == 1
        assert "missing.json" in report.pairs[0].error
        assert report.to_dict()["summary"]["pass_rate"] == "50.0%"

    def test_manifest_config(self, tmp_path):
        """Test the config block of a manifest."""
        manifest = self._manifest(
            tmp_path,
            [{"name": "p", "first": "a.json", "second": "b.json"}],
            config={"concurrent": "true", "max_depth": 10}
        )
        runner = BatchRunner(manifest)
        assert runner.engine_config.concurrent is True
        assert runner.engine_config.max_depth == 10
        assert runner.run(print_report=False).passed == 1

    def test_invalid_manifest(self, tmp_path):
        """Test a manifest without pairs."""
        path = tmp_path / "bad.yaml"
        path.write_text("name: nothing\n")
        with pytest.raises(ConfigError):
            BatchRunner(path).run(print_report=False)

    def test_cli_manifest(self, tmp_path, capsys):
        """Test --manifest exit codes and summary output."""
        manifest = self._manifest(tmp_path, [
            {"name": "reordered", "first": "a.json", "second": "b.json"},
        ])
        assert main(["--manifest", str(manifest)]) == 0
        assert "PASS: reordered" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
