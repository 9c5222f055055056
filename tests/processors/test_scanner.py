"""Tests for the lexical rule scans."""

import dataclasses
import re

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
)
from luavalidator.processors.rules import DEFAULT_REGISTRY, DeprecatedApiRule, RuleRegistry, ServiceInfo
from luavalidator.processors.scanner import (
    find_similar_services,
    scan_best_practices,
    scan_deprecated_apis,
    scan_local_player,
    scan_service_names,
)


class TestScanDeprecatedApis:
    """Test deprecated API diagnostics."""

    def test_single_wait(self):
        diagnostics = scan_deprecated_apis("wait(5)")

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert (diagnostic.line, diagnostic.column) == (1, 1)
        assert diagnostic.kind == KIND_DEPRECATED
        assert diagnostic.severity == SEVERITY_WARNING
        assert diagnostic.code == CODE_DEPRECATED_API
        assert diagnostic.message == "Use task.wait() instead of wait()"

    def test_every_occurrence_is_reported(self):
        source = "wait(1)\nprint(1)\nwait(2)"
        diagnostics = scan_deprecated_apis(source)
        assert [(d.line, d.column) for d in diagnostics] == [(1, 1), (3, 1)]

    def test_rule_order_then_match_order(self):
        source = "spawn(f)\nwait(1)\nwait(2)"
        diagnostics = scan_deprecated_apis(source)
        assert [d.line for d in diagnostics] == [2, 3, 1]

    def test_event_members(self):
        source = (
            "local button = script.Parent\n"
            "button.MouseButton1Down:Connect(onClick)\n"
            "mouse.KeyDown:Connect(onKey)\n"
        )
        diagnostics = scan_deprecated_apis(source)
        assert [(d.line, d.column, d.message) for d in diagnostics] == [
            (2, 7, "Use Activated event instead for better touch support"),
            (3, 6, "Use UserInputService.InputBegan instead"),
        ]

    def test_task_library_is_not_flagged(self):
        assert scan_deprecated_apis("task.wait(1)\ntask.spawn(f)\ntask.delay(1, f)") == []

    def test_custom_registry_rule(self):
        rule = DeprecatedApiRule(re.compile(r"\bVersion\s*\("), "Use game.PlaceVersion instead", "Version")
        registry = dataclasses.replace(DEFAULT_REGISTRY, deprecated_apis=(rule,))

        diagnostics = scan_deprecated_apis("wait(1)\nprint(Version())", registry)
        assert [(d.line, d.column, d.message) for d in diagnostics] == [
            (2, 7, "Use game.PlaceVersion instead"),
        ]


class TestScanBestPractices:
    """Test best practice diagnostics."""

    def test_infinite_loop(self):
        source = "local n = 0\nwhile true do\n    n = n + 1\nend"
        diagnostics = scan_best_practices(source)

        assert len(diagnostics) == 1
        assert (diagnostics[0].line, diagnostics[0].column) == (2, 1)
        assert diagnostics[0].kind == KIND_BEST_PRACTICE
        assert diagnostics[0].severity == SEVERITY_INFO
        assert diagnostics[0].code == CODE_BEST_PRACTICE

    def test_touched_connection(self):
        diagnostics = scan_best_practices("part.Touched:Connect(function(hit) end)")
        assert len(diagnostics) == 1
        assert diagnostics[0].column == 5

    def test_workspace_reference(self):
        diagnostics = scan_best_practices("local ws = game.Workspace")
        assert [(d.line, d.column) for d in diagnostics] == [(1, 12)]

    def test_short_workspace_is_fine(self):
        assert scan_best_practices("local ws = workspace") == []

    def test_mouse_access(self):
        diagnostics = scan_best_practices("local m = game.Players.LocalPlayer.Mouse")
        assert len(diagnostics) == 1
        assert "UserInputService" in diagnostics[0].message


class TestScanServiceNames:
    """Test GetService name checks."""

    def test_misspelled_service(self):
        diagnostics = scan_service_names('game:GetService("Plyers")')

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.code == CODE_UNKNOWN_SERVICE
        assert diagnostic.kind == KIND_ROBLOX_API
        assert diagnostic.severity == SEVERITY_WARNING
        assert diagnostic.message == 'Unknown service "Plyers". Check if the service name is correct.'

    def test_known_service(self):
        assert scan_service_names('local P = game:GetService("Players")') == []

    def test_fuzzy_substring_match_is_suppressed(self):
        assert scan_service_names('game:GetService("Player")') == []

    def test_fuzzy_match_is_case_insensitive(self):
        assert scan_service_names('game:GetService("runservice")') == []

    def test_name_containing_service_is_suppressed(self):
        assert scan_service_names('game:GetService("ChatService")') == []

    def test_single_quotes(self):
        diagnostics = scan_service_names("game:GetService('Foo')")
        assert len(diagnostics) == 1

    def test_position_on_later_line(self):
        source = 'local a = 1\nlocal b = game:GetService("Xyz")'
        diagnostics = scan_service_names(source)
        assert [(d.line, d.column) for d in diagnostics] == [(2, 11)]

    def test_custom_root_namespace(self):
        registry = RuleRegistry(
            services={"DataModel": ServiceInfo(properties=("Players", "Lighting"))},
            root_namespace="DataModel",
        )
        source = 'DataModel:GetService("Foo")\ngame:GetService("Foo")\nDataModel:GetService("Lighting")'

        diagnostics = scan_service_names(source, registry)
        assert [(d.line, d.column) for d in diagnostics] == [(1, 1)]

    def test_find_similar_services(self):
        assert find_similar_services("tween", ("TweenService", "Players")) == ["TweenService"]
        assert find_similar_services("Plyers", ("TweenService", "Players")) == []


class TestScanLocalPlayer:
    """Test LocalPlayer warnings."""

    def test_property_chain(self):
        diagnostics = scan_local_player("local p = game.Players.LocalPlayer")

        assert len(diagnostics) == 1
        assert diagnostics[0].code == CODE_LOCALPLAYER_SERVER
        assert diagnostics[0].kind == KIND_ROBLOX_API
        assert diagnostics[0].severity == SEVERITY_WARNING
        assert (diagnostics[0].line, diagnostics[0].column) == (1, 11)

    def test_service_lookup_chain(self):
        source = 'local a = 1\nlocal p = game:GetService("Players").LocalPlayer'
        diagnostics = scan_local_player(source)
        assert [(d.line, d.column) for d in diagnostics] == [(2, 11)]

    def test_every_occurrence_warns(self):
        source = "local a = game.Players.LocalPlayer\nlocal b = game.Players.LocalPlayer.Character"
        assert len(scan_local_player(source)) == 2

    def test_players_variable_is_not_matched(self):
        assert scan_local_player("local p = Players.LocalPlayer") == []

    def test_custom_root_namespace(self):
        registry = RuleRegistry(root_namespace="DataModel")
        source = "local a = game.Players.LocalPlayer\nlocal b = DataModel.Players.LocalPlayer"

        diagnostics = scan_local_player(source, registry)
        assert [(d.line, d.column) for d in diagnostics] == [(2, 11)]
