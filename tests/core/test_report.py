"""Tests for text and JSON report rendering."""

import json
from pathlib import Path

import pytest

from luavalidator.core.diagnostics import (
    KIND_BEST_PRACTICE,
    KIND_DEPRECATED,
    KIND_ROBLOX_API,
    KIND_SYNTAX,
    KIND_WARNING,
    SEVERITY_ERROR,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    Diagnostic,
)
from luavalidator.core.report import (
    filter_diagnostics,
    format_diagnostic,
    format_json_report,
    format_report,
    get_type_label,
)
from luavalidator.core.validator import FileValidationResult, validate_lua_code


@pytest.fixture
def mixed_diagnostics():
    return [
        Diagnostic(1, 1, "bad syntax", KIND_SYNTAX, SEVERITY_ERROR, "LUA_SYNTAX"),
        Diagnostic(2, 3, "old api", KIND_DEPRECATED, SEVERITY_WARNING, "DEPRECATED_API"),
        Diagnostic(4, 1, "style", KIND_BEST_PRACTICE, SEVERITY_INFO, "BEST_PRACTICE"),
    ]


class TestLabelsAndFilters:
    """Test labels and severity filters."""

    @pytest.mark.parametrize("kind, label", [
        (KIND_SYNTAX, "Syntax"),
        (KIND_ROBLOX_API, "Roblox API"),
        (KIND_DEPRECATED, "Deprecated"),
        (KIND_BEST_PRACTICE, "Best Practice"),
        (KIND_WARNING, "Unknown"),
    ])
    def test_type_labels(self, kind, label):
        assert get_type_label(kind) == label

    def test_filter_all(self, mixed_diagnostics):
        assert filter_diagnostics(mixed_diagnostics) == mixed_diagnostics

    def test_filter_errors(self, mixed_diagnostics):
        assert [d.message for d in filter_diagnostics(mixed_diagnostics, "errors")] == ["bad syntax"]

    def test_filter_warnings_includes_info(self, mixed_diagnostics):
        assert [d.message for d in filter_diagnostics(mixed_diagnostics, "warnings")] == ["old api", "style"]

    def test_invalid_filter(self, mixed_diagnostics):
        with pytest.raises(ValueError, match="Invalid filter"):
            filter_diagnostics(mixed_diagnostics, "infos")


class TestFormatting:
    """Test text rendering."""

    def test_format_diagnostic(self, mixed_diagnostics):
        assert format_diagnostic(mixed_diagnostics[1], "main.lua") == (
            "main.lua:2:3: warning [Deprecated/DEPRECATED_API] old api"
        )

    def test_format_diagnostic_without_code_or_file(self):
        diagnostic = Diagnostic(1, 1, "Validation failed", KIND_SYNTAX, SEVERITY_ERROR)
        assert format_diagnostic(diagnostic) == "1:1: error [Syntax] Validation failed"

    def test_format_report(self):
        reports = [
            FileValidationResult(Path("a.lua"), True, validate_lua_code("local x = 1\nwait(1)")),
            FileValidationResult(Path("b.lua"), False, errors=["File not found: b.lua"]),
        ]
        text = format_report(reports).splitlines()

        assert text[0] == "a.lua:2:1: warning [Deprecated/DEPRECATED_API] Use task.wait() instead of wait()"
        assert text[1] == "b.lua: File not found: b.lua"
        assert text[-1] == "2 file(s) checked: 0 error(s), 1 warning(s)"

    def test_format_report_filter_keeps_totals(self):
        reports = [FileValidationResult(Path("a.lua"), True, validate_lua_code("wait(1)"))]
        text = format_report(reports, "errors").splitlines()

        assert text == ["1 file(s) checked: 0 error(s), 1 warning(s)"]

    def test_json_report(self):
        reports = [FileValidationResult(Path("a.lua"), True, validate_lua_code("wait(1)"))]
        data = json.loads(format_json_report(reports))

        assert data[0]["file"] == "a.lua"
        assert data[0]["isValid"] is True
        assert data[0]["issues"][0]["code"] == "DEPRECATED_API"
        assert data[0]["issues"][0]["type"] == "deprecated"
