"""Validation entry points for Roblox Lua source.

``validate_lua_code`` runs the syntax check and every lexical rule family
over one source string and returns a ``ValidationResult``. It is a pure
function of its input: nothing is cached or shared between calls, so it can
be called from several threads at once.

Rule families run in a fixed order and the result keeps that order:
    1. Syntax check (luaparser)
    2. Deprecated APIs
    3. Best practices
    4. Service names in ``game:GetService(...)``
    5. LocalPlayer access

The function never raises. A failure that is not an ordinary syntax error is
logged and reported as a single synthetic error diagnostic.

Example:
    >>> result = validate_lua_code('local Players = game:GetService("Plyers")')
    >>> result.is_valid
    True
    >>> [w.code for w in result.warnings]
    ['UNKNOWN_SERVICE']

    Validating files with a custom configuration:

    >>> validator = LuaValidator(config=ValidatorConfig(rules={"best_practice": False}))
    >>> report = validator.validate_file(Path("src/main.lua"))
    >>> if report.success:
    ...     print(report.result.error_count)
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from luavalidator.core.config import (
    RULE_BEST_PRACTICE,
    RULE_DEPRECATED_API,
    RULE_LOCAL_PLAYER,
    RULE_SYNTAX,
    RULE_UNKNOWN_SERVICE,
    ValidatorConfig,
)
from luavalidator.core.diagnostics import (
    KIND_SYNTAX,
    SEVERITY_ERROR,
    Diagnostic,
    ValidationResult,
)
from luavalidator.processors.parser_adapter import check_syntax
from luavalidator.processors.rules import DEFAULT_REGISTRY, RuleRegistry
from luavalidator.processors.scanner import (
    scan_best_practices,
    scan_deprecated_apis,
    scan_local_player,
    scan_service_names,
)
from luavalidator.utils.logger import get_logger
from luavalidator.utils.path_utils import is_readable

logger = get_logger("luavalidator.core.validator")

INTERNAL_FAILURE_MESSAGE = "Validation failed"

# Lexical scans in reporting order, keyed by the config category that gates them
_LEXICAL_SCANS = (
    (RULE_DEPRECATED_API, scan_deprecated_apis),
    (RULE_BEST_PRACTICE, scan_best_practices),
    (RULE_UNKNOWN_SERVICE, scan_service_names),
    (RULE_LOCAL_PLAYER, scan_local_player),
)


def _internal_failure_result() -> ValidationResult:
    return ValidationResult(errors=[
        Diagnostic(
            line=1,
            column=1,
            message=INTERNAL_FAILURE_MESSAGE,
            kind=KIND_SYNTAX,
            severity=SEVERITY_ERROR,
        )
    ])


def validate_lua_code(
    source: str,
    config: ValidatorConfig | None = None,
    registry: RuleRegistry | None = None,
) -> ValidationResult:
    """Validate Lua source and return its diagnostics.

    Args:
        source: Lua source code. Empty or whitespace-only input yields an
            empty, valid result without running any rule.
        config: Optional rule switches. Defaults to every category enabled.
        registry: Optional rule tables. Defaults to the built-in registry.

    Returns:
        ValidationResult with errors and warnings in discovery order.
    """
    config = config if config is not None else ValidatorConfig()
    registry = registry if registry is not None else DEFAULT_REGISTRY

    try:
        if not source or not source.strip():
            return ValidationResult()

        diagnostics: list[Diagnostic] = []

        if config.is_enabled(RULE_SYNTAX):
            syntax_error = check_syntax(source)
            if syntax_error is not None:
                diagnostics.append(syntax_error)

        for category, scan in _LEXICAL_SCANS:
            if config.is_enabled(category):
                diagnostics.extend(scan(source, registry))

        result = ValidationResult.from_diagnostics(diagnostics)
        logger.debug(
            f"Validated {len(source)} characters: "
            f"{result.error_count} error(s), {result.warning_count} warning(s)"
        )
        return result

    except Exception as e:
        logger.error(f"Unexpected error during validation: {e}", exc_info=True)
        return _internal_failure_result()


def get_errors_for_line(source: str, line_number: int) -> list[Diagnostic]:
    """Validate ``source`` and return the diagnostics on one line."""
    return validate_lua_code(source).errors_for_line(line_number)


def get_all_validation_issues(source: str) -> list[Diagnostic]:
    """Validate ``source`` and return every diagnostic sorted by position."""
    return validate_lua_code(source).sorted_issues()


@dataclass
class FileValidationResult:
    """Result of validating a Lua source file.

    Attributes:
        file_path: Path to the Lua source file.
        success: Whether the file could be read and validated. A file with
            syntax errors still counts as a success here; check
            ``result.is_valid`` for that.
        result: Validation result, or None if the file could not be read.
        errors: Messages for problems reading the file.
    """

    file_path: Path
    success: bool
    result: ValidationResult | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.success and self.result is not None and self.result.is_valid


class LuaValidator:
    """Validator bound to one configuration and rule registry.

    Attributes:
        config: Rule switches and file size limit.
        registry: Rule tables used for every call.

    Example:
        >>> validator = LuaValidator()
        >>> validator.validate("spawn(f)").warning_count
        1
    """

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        registry: RuleRegistry | None = None,
    ) -> None:
        self.config = config if config is not None else ValidatorConfig()
        self.config.validate()
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.logger = get_logger("luavalidator.core.validator")

    def validate(self, source: str) -> ValidationResult:
        return validate_lua_code(source, self.config, self.registry)

    def validate_file(self, file_path: Path | str) -> FileValidationResult:
        """Read a Lua file and validate its contents.

        File problems (missing, unreadable, too large, not UTF-8) are
        reported in the returned object rather than raised.
        """
        path = Path(file_path)

        if not path.is_file():
            return self._file_failure(path, f"File not found: {path}")

        if not is_readable(path):
            return self._file_failure(path, f"File is not readable: {path}")

        try:
            file_size = path.stat().st_size
            if file_size > self.config.max_file_size_bytes:
                return self._file_failure(
                    path,
                    f"File too large: {path} ({file_size / 1024 / 1024:.2f} MB). "
                    f"Maximum allowed size is {self.config.max_file_size_mb} MB",
                )
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            return self._file_failure(path, f"Failed to read file {path}: {e}")
        except ValueError as e:
            return self._file_failure(path, f"Encoding error reading file {path}: {e}")

        result = self.validate(source)
        self.logger.info(
            f"Validated {path}: {result.error_count} error(s), {result.warning_count} warning(s)"
        )
        return FileValidationResult(file_path=path, success=True, result=result)

    def validate_files(
        self,
        file_paths: Iterable[Path | str],
        max_workers: int | None = None,
    ) -> list[FileValidationResult]:
        """Validate several files concurrently.

        Each file is validated independently; results come back in the same
        order as ``file_paths``.
        """
        paths = [Path(p) for p in file_paths]
        if not paths:
            return []

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.validate_file, paths))

    def _file_failure(self, path: Path, message: str) -> FileValidationResult:
        self.logger.error(message)
        return FileValidationResult(file_path=path, success=False, errors=[message])
