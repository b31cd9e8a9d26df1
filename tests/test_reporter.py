"""Unit tests for violation formatting and reporting."""

import io
import json

from linelint.reporter import Correction, Reporter, Severity, Violation


def make_violation(line=1, severity=Severity.WARNING, file_path="A.swift", context="x"):
    return Violation(
        file_path=file_path,
        line=line,
        severity=severity,
        message="Line should be 120 characters or less: currently 130 characters",
        rule_id="line_length",
        context=context,
        sub_type="too_long",
    )


class TestViolation:
    """Test violation serialization."""

    def test_xcode_format_without_column(self):
        v = make_violation(line=7)
        assert v.to_xcode_format() == (
            "A.swift:7: warning: Line should be 120 characters or less: "
            "currently 130 characters [line_length]"
        )

    def test_xcode_format_with_column(self):
        v = make_violation()
        v.column = 121
        assert v.to_xcode_format().startswith("A.swift:1:121: warning:")

    def test_violation_id_stable_and_content_based(self):
        a = make_violation(line=3, context="let a = 1")
        b = make_violation(line=9, context="let a = 1")
        c = make_violation(line=3, context="let b = 2")
        assert a.violation_id == b.violation_id
        assert a.violation_id != c.violation_id
        assert len(a.violation_id) == 16

    def test_to_dict_skips_empty_fields(self):
        d = make_violation().to_dict()
        assert d["severity"] == "warning"
        assert d["sub_type"] == "too_long"
        assert "column" not in d
        assert "rule_name" not in d


class TestReporter:
    """Test aggregation and exit codes."""

    def test_report_returns_one_on_error(self):
        reporter = Reporter()
        reporter.add_violations([make_violation(), make_violation(line=2, severity=Severity.ERROR)])
        assert reporter.report(stream=io.StringIO()) == 1

    def test_report_returns_zero_for_warnings(self):
        reporter = Reporter()
        reporter.add_violations([make_violation()])
        out = io.StringIO()
        assert reporter.report(stream=out) == 0
        assert "[line_length]" in out.getvalue()

    def test_plain_output(self):
        reporter = Reporter(xcode_output=False)
        reporter.add_violations([make_violation(severity=Severity.ERROR)])
        out = io.StringIO()
        reporter.report(stream=out)
        assert out.getvalue().startswith("[ERROR] A.swift:1 - ")

    def test_corrections_printed_first(self):
        reporter = Reporter()
        reporter.add_corrections([Correction("line_length", "A.swift", 4, "Line Length")])
        reporter.add_violations([make_violation()])
        out = io.StringIO()
        reporter.report(stream=out)
        assert out.getvalue().splitlines()[0] == "A.swift:4 Corrected Line Length"

    def test_deduplicate_and_sort(self):
        reporter = Reporter()
        reporter.add_violations([
            make_violation(line=5, file_path="B.swift"),
            make_violation(line=2),
            make_violation(line=2),
        ])
        reporter.deduplicate()
        reporter.sort()
        assert [(v.file_path, v.line) for v in reporter.violations] == [("A.swift", 2), ("B.swift", 5)]

    def test_summary_and_json(self):
        reporter = Reporter()
        reporter.add_violations([make_violation(), make_violation(line=2, severity=Severity.ERROR)])
        reporter.add_corrections([Correction("line_length", "A.swift", 1)])
        summary = reporter.get_summary()
        assert summary == {
            "total": 2,
            "errors": 1,
            "warnings": 1,
            "corrections": 1,
            "files_affected": 1,
        }
        data = json.loads(reporter.to_json())
        assert data["corrections"] == [{"file_path": "A.swift", "line": 1, "rule_id": "line_length"}]
        assert len(data["violations"]) == 2
