"""Static validation of Roblox Lua source.

The package reports syntax errors, deprecated API usage, suspicious service
lookups and best-practice issues for a single Lua source string.

Exports are resolved lazily so that importing a submodule (for example the
rule tables) does not pull in the parser.

Example:
    >>> from luavalidator import validate_lua_code
    >>> result = validate_lua_code("wait(5)")
    >>> result.is_valid, [w.code for w in result.warnings]
    (True, ['DEPRECATED_API'])
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "validate_lua_code": ("luavalidator.core.validator", "validate_lua_code"),
    "get_errors_for_line": ("luavalidator.core.validator", "get_errors_for_line"),
    "get_all_validation_issues": ("luavalidator.core.validator", "get_all_validation_issues"),
    "LuaValidator": ("luavalidator.core.validator", "LuaValidator"),
    "FileValidationResult": ("luavalidator.core.validator", "FileValidationResult"),
    "Diagnostic": ("luavalidator.core.diagnostics", "Diagnostic"),
    "ValidationResult": ("luavalidator.core.diagnostics", "ValidationResult"),
    "ValidatorConfig": ("luavalidator.core.config", "ValidatorConfig"),
    "ProfileManager": ("luavalidator.core.profile_manager", "ProfileManager"),
    "RuleRegistry": ("luavalidator.processors.rules", "RuleRegistry"),
    "DEFAULT_REGISTRY": ("luavalidator.processors.rules", "DEFAULT_REGISTRY"),
}

__all__ = ["__version__", *_EXPORT_MAP.keys()]


def __getattr__(name: str) -> Any:
    """Resolve package exports lazily."""
    target = _EXPORT_MAP.get(name)
    if target is None:
        raise AttributeError(f"module 'luavalidator' has no attribute {name!r}")

    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
