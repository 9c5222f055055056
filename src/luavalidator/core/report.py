"""Text and JSON rendering of validation results.

The editor's problems panel lets users filter issues to errors or warnings
and labels each issue with its rule category. The helpers here do the same
for terminal output and are what the command-line entry point prints.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Sequence

from luavalidator.core.diagnostics import (
    KIND_BEST_PRACTICE,
    KIND_DEPRECATED,
    KIND_ROBLOX_API,
    KIND_SYNTAX,
    SEVERITY_ERROR,
    Diagnostic,
)
from luavalidator.core.validator import FileValidationResult

FILTER_ALL = "all"
FILTER_ERRORS = "errors"
FILTER_WARNINGS = "warnings"

VALID_FILTERS: tuple[str, ...] = (FILTER_ALL, FILTER_ERRORS, FILTER_WARNINGS)

TYPE_LABELS = {
    KIND_SYNTAX: "Syntax",
    KIND_ROBLOX_API: "Roblox API",
    KIND_DEPRECATED: "Deprecated",
    KIND_BEST_PRACTICE: "Best Practice",
}


def get_type_label(kind: str) -> str:
    """Return the display label for a diagnostic kind ("Unknown" if unlabeled)."""
    return TYPE_LABELS.get(kind, "Unknown")


def filter_diagnostics(diagnostics: Iterable[Diagnostic], filter_name: str = FILTER_ALL) -> list[Diagnostic]:
    """Keep errors, warnings (warning and info severities) or everything.

    Raises:
        ValueError: If filter_name is not one of VALID_FILTERS.
    """
    if filter_name not in VALID_FILTERS:
        raise ValueError(f"Invalid filter: {filter_name}. Must be one of {VALID_FILTERS}")

    if filter_name == FILTER_ERRORS:
        return [d for d in diagnostics if d.severity == SEVERITY_ERROR]
    if filter_name == FILTER_WARNINGS:
        return [d for d in diagnostics if d.severity != SEVERITY_ERROR]
    return list(diagnostics)


def format_diagnostic(diagnostic: Diagnostic, file_label: str = "") -> str:
    """Render one diagnostic as ``file:line:column: severity [Label/CODE] message``."""
    location = f"{diagnostic.line}:{diagnostic.column}"
    if file_label:
        location = f"{file_label}:{location}"
    tag = get_type_label(diagnostic.kind)
    if diagnostic.code:
        tag = f"{tag}/{diagnostic.code}"
    return f"{location}: {diagnostic.severity} [{tag}] {diagnostic.message}"


def format_report(reports: Sequence[FileValidationResult], filter_name: str = FILTER_ALL) -> str:
    """Render file results as text, one issue per line, then a summary line."""
    lines: list[str] = []
    total_errors = 0
    total_warnings = 0

    for report in reports:
        label = str(report.file_path)
        if not report.success or report.result is None:
            lines.extend(f"{label}: {message}" for message in report.errors)
            continue

        total_errors += report.result.error_count
        total_warnings += report.result.warning_count
        for diagnostic in filter_diagnostics(report.result.sorted_issues(), filter_name):
            lines.append(format_diagnostic(diagnostic, label))

    lines.append(
        f"{len(reports)} file(s) checked: {total_errors} error(s), {total_warnings} warning(s)"
    )
    return "\n".join(lines)


def report_to_dict(report: FileValidationResult, filter_name: str = FILTER_ALL) -> dict[str, Any]:
    data: dict[str, Any] = {
        "file": str(report.file_path),
        "success": report.success,
        "errors": list(report.errors),
    }
    if report.result is not None:
        data["isValid"] = report.result.is_valid
        data["issues"] = [
            d.to_dict() for d in filter_diagnostics(report.result.sorted_issues(), filter_name)
        ]
    return data


def format_json_report(reports: Sequence[FileValidationResult], filter_name: str = FILTER_ALL) -> str:
    return json.dumps([report_to_dict(r, filter_name) for r in reports], indent=2)
