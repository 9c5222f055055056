"""Diagnostic records produced by the Lua validator.

This module defines the two value types every validation pass returns: the
``Diagnostic`` describing one issue at a source location, and the
``ValidationResult`` that partitions diagnostics into errors and warnings.
It also holds the string constants for diagnostic kinds, severities and rule
codes so the rest of the package never spells them inline.

Example:
    >>> result = validate_lua_code("wait(5)")
    >>> for issue in result.sorted_issues():
    ...     print(f"{issue.line}:{issue.column} [{issue.code}] {issue.message}")
    1:1 [DEPRECATED_API] Use task.wait() instead of wait()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

# Diagnostic kinds: the semantic category of the rule that fired
KIND_SYNTAX = "syntax"
KIND_WARNING = "warning"
KIND_ROBLOX_API = "roblox-api"
KIND_DEPRECATED = "deprecated"
KIND_BEST_PRACTICE = "best-practice"

VALID_KINDS: frozenset[str] = frozenset({
    KIND_SYNTAX,
    KIND_WARNING,
    KIND_ROBLOX_API,
    KIND_DEPRECATED,
    KIND_BEST_PRACTICE,
})

# Severities: display and blocking priority, independent of kind
SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"

VALID_SEVERITIES: frozenset[str] = frozenset({
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    SEVERITY_INFO,
})

# Rule codes
CODE_LUA_SYNTAX = "LUA_SYNTAX"
CODE_DEPRECATED_API = "DEPRECATED_API"
CODE_UNKNOWN_SERVICE = "UNKNOWN_SERVICE"
CODE_LOCALPLAYER_SERVER = "LOCALPLAYER_SERVER"
CODE_BEST_PRACTICE = "BEST_PRACTICE"


@dataclass(frozen=True)
class Diagnostic:
    """One issue reported by the validator.

    Attributes:
        line: 1-based source line.
        column: 1-based character position within the line.
        message: Human-readable description of the issue.
        kind: Rule category ("syntax", "warning", "roblox-api",
            "deprecated", "best-practice").
        severity: "error", "warning" or "info".
        code: Optional machine-readable rule identifier such as
            "DEPRECATED_API".

    Example:
        >>> Diagnostic(1, 1, "Use task.wait() instead of wait()",
        ...            kind="deprecated", severity="warning",
        ...            code="DEPRECATED_API")
    """

    line: int
    column: int
    message: str
    kind: str
    severity: str
    code: str | None = None

    def __post_init__(self) -> None:
        if self.line < 1 or self.column < 1:
            raise ValueError(
                f"Diagnostic position must be 1-based, got line={self.line}, column={self.column}"
            )
        if self.kind not in VALID_KINDS:
            raise ValueError(f"Invalid diagnostic kind: {self.kind}. Expected one of {sorted(VALID_KINDS)}")
        if self.severity not in VALID_SEVERITIES:
            raise ValueError(
                f"Invalid diagnostic severity: {self.severity}. Expected one of {sorted(VALID_SEVERITIES)}"
            )

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict using the editor's field names."""
        return {
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "type": self.kind,
            "severity": self.severity,
            "code": self.code,
        }


@dataclass
class ValidationResult:
    """Output of one validation pass.

    Errors hold the diagnostics with severity "error"; warnings hold the
    "warning" and "info" ones. Both lists keep discovery order. Only errors
    make a result invalid.

    Attributes:
        errors: Diagnostics with severity "error".
        warnings: Diagnostics with severity "warning" or "info".
    """

    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def from_diagnostics(cls, diagnostics: Iterable[Diagnostic]) -> ValidationResult:
        """Partition diagnostics by severity, keeping their order."""
        result = cls()
        for diagnostic in diagnostics:
            if diagnostic.is_error:
                result.errors.append(diagnostic)
            else:
                result.warnings.append(diagnostic)
        return result

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def all_issues(self) -> list[Diagnostic]:
        """Return errors followed by warnings."""
        return [*self.errors, *self.warnings]

    def errors_for_line(self, line_number: int) -> list[Diagnostic]:
        """Return every diagnostic reported on ``line_number``.

        Errors come before warnings; each group keeps its discovery order.
        """
        return [issue for issue in self.all_issues() if issue.line == line_number]

    def sorted_issues(self) -> list[Diagnostic]:
        """Return every diagnostic ordered by (line, column).

        The sort is stable, so issues at the same position keep the order
        in which they were discovered.
        """
        return sorted(self.all_issues(), key=lambda issue: (issue.line, issue.column))

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }
