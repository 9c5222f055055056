"""Lexical rule scanning over raw Lua source.

Each scan function runs one family of rules from a ``RuleRegistry`` over the
complete source text and returns one diagnostic per match, positioned with
``offset_to_position``. The scans work on text, not on the AST, so a match
inside a comment or string literal is reported like any other.

Example:
    >>> diagnostics = scan_deprecated_apis("local a = 1\\nwait(2)")
    >>> [(d.line, d.column, d.code) for d in diagnostics]
    [(2, 1, 'DEPRECATED_API')]
"""

from __future__ import annotations

from luavalidator.core.diagnostics import (
    CODE_BEST_PRACTICE,
    CODE_DEPRECATED_API,
    CODE_LOCALPLAYER_SERVER,
    CODE_UNKNOWN_SERVICE,
    KIND_BEST_PRACTICE,
    KIND_DEPRECATED,
    KIND_ROBLOX_API,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    Diagnostic,
)
from luavalidator.processors.positions import offset_to_position
from luavalidator.processors.rules import (
    DEFAULT_REGISTRY,
    LOCAL_PLAYER_MESSAGE,
    RuleRegistry,
)


def _diagnostic_at(
    source: str,
    offset: int,
    message: str,
    kind: str,
    severity: str,
    code: str,
) -> Diagnostic:
    line, column = offset_to_position(source, offset)
    return Diagnostic(line=line, column=column, message=message, kind=kind, severity=severity, code=code)


def scan_deprecated_apis(source: str, registry: RuleRegistry = DEFAULT_REGISTRY) -> list[Diagnostic]:
    """Report every use of a deprecated API, rule by rule."""
    diagnostics: list[Diagnostic] = []
    for rule in registry.deprecated_apis:
        for match in rule.pattern.finditer(source):
            diagnostics.append(_diagnostic_at(
                source, match.start(), rule.message,
                KIND_DEPRECATED, SEVERITY_WARNING, CODE_DEPRECATED_API,
            ))
    return diagnostics


def scan_best_practices(source: str, registry: RuleRegistry = DEFAULT_REGISTRY) -> list[Diagnostic]:
    """Report every best-practice match as an info diagnostic."""
    diagnostics: list[Diagnostic] = []
    for rule in registry.best_practices:
        for match in rule.pattern.finditer(source):
            diagnostics.append(_diagnostic_at(
                source, match.start(), rule.message,
                KIND_BEST_PRACTICE, SEVERITY_INFO, CODE_BEST_PRACTICE,
            ))
    return diagnostics


def find_similar_services(name: str, known_services: tuple[str, ...]) -> list[str]:
    """Return known services that contain ``name`` or are contained in it.

    The comparison is case-insensitive. A non-empty result means the lookup
    is treated as a near miss rather than an unknown service.

    Example:
        >>> find_similar_services("Player", ("Players", "Teams"))
        ['Players']
    """
    lowered = name.lower()
    return [
        service for service in known_services
        if lowered in service.lower() or service.lower() in lowered
    ]


def scan_service_names(source: str, registry: RuleRegistry = DEFAULT_REGISTRY) -> list[Diagnostic]:
    """Flag ``game:GetService("...")`` lookups of unknown services.

    The receiver is the registry's root namespace (``game`` by default).

    Exact names pass. Names with a fuzzy substring match against a known
    service also pass, so some misspellings go unreported in exchange for
    fewer false positives.
    """
    known_services = registry.known_services
    diagnostics: list[Diagnostic] = []
    for match in registry.get_service_pattern.finditer(source):
        service_name = match.group(1)
        if service_name in known_services:
            continue
        if find_similar_services(service_name, known_services):
            continue
        diagnostics.append(_diagnostic_at(
            source, match.start(),
            f'Unknown service "{service_name}". Check if the service name is correct.',
            KIND_ROBLOX_API, SEVERITY_WARNING, CODE_UNKNOWN_SERVICE,
        ))
    return diagnostics


def scan_local_player(source: str, registry: RuleRegistry = DEFAULT_REGISTRY) -> list[Diagnostic]:
    """Warn on every LocalPlayer access.

    The script type (Script vs LocalScript) is unknown here, so every
    occurrence is reported.
    """
    return [
        _diagnostic_at(
            source, match.start(), LOCAL_PLAYER_MESSAGE,
            KIND_ROBLOX_API, SEVERITY_WARNING, CODE_LOCALPLAYER_SERVER,
        )
        for match in registry.local_player_pattern.finditer(source)
    ]
