"""Static rule tables for the Lua validator.

The scanner never hard-codes what it looks for: every lexical check is
driven by one of the tables below. Rules are frozen dataclasses held in
tuples so the tables are read-only for the life of the process. New rules
are added by appending entries; the scanning code does not change.

Tables:
    - DEPRECATED_APIS: legacy globals and events with their replacements
    - BEST_PRACTICES: patterns that usually indicate a performance or
      input-handling problem
    - ROBLOX_SERVICES: known services under ``game`` and the members each
      service exposes

A ``RuleRegistry`` bundles the three tables. ``DEFAULT_REGISTRY`` is the
process-wide instance; callers needing different rules build their own
registry and pass it to ``validate_lua_code``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class DeprecatedApiRule:
    """A legacy API and the advice shown when it is used.

    Attributes:
        pattern: Compiled regex matching a use of the legacy API.
        message: Replacement advice shown to the user.
        api: Name of the legacy API, used as the rule identifier.
    """

    pattern: re.Pattern[str]
    message: str
    api: str


@dataclass(frozen=True)
class BestPracticeRule:
    """An advisory pattern with its message."""

    pattern: re.Pattern[str]
    message: str


@dataclass(frozen=True)
class ServiceInfo:
    """Known members of a Roblox service."""

    methods: tuple[str, ...] = ()
    properties: tuple[str, ...] = ()
    events: tuple[str, ...] = ()


# Global call only: task.wait( and obj:wait( are not the legacy global
_BARE_CALL = r"(?<![.:\w])"

DEPRECATED_APIS: tuple[DeprecatedApiRule, ...] = (
    DeprecatedApiRule(re.compile(_BARE_CALL + r"wait\s*\("), "Use task.wait() instead of wait()", "wait"),
    DeprecatedApiRule(re.compile(_BARE_CALL + r"spawn\s*\("), "Use task.spawn() instead of spawn()", "spawn"),
    DeprecatedApiRule(re.compile(_BARE_CALL + r"delay\s*\("), "Use task.delay() instead of delay()", "delay"),
    DeprecatedApiRule(
        re.compile(r"\.MouseButton1Down\b"),
        "Use Activated event instead for better touch support",
        "MouseButton1Down",
    ),
    DeprecatedApiRule(
        re.compile(r"\.MouseButton1Up\b"),
        "Use Activated event instead for better touch support",
        "MouseButton1Up",
    ),
    DeprecatedApiRule(re.compile(r"\.KeyDown\b"), "Use UserInputService.InputBegan instead", "KeyDown"),
    DeprecatedApiRule(re.compile(r"\.KeyUp\b"), "Use UserInputService.InputEnded instead", "KeyUp"),
    DeprecatedApiRule(
        re.compile(_BARE_CALL + r"LoadLibrary\s*\("),
        "LoadLibrary is deprecated, use ModuleScripts instead",
        "LoadLibrary",
    ),
)

BEST_PRACTICES: tuple[BestPracticeRule, ...] = (
    BestPracticeRule(
        re.compile(r"game\.Players\.LocalPlayer\.Mouse"),
        "Consider using UserInputService instead of Mouse for better input handling",
    ),
    BestPracticeRule(
        re.compile(r"while\s+true\s+do"),
        "Infinite loops can cause lag. Consider using RunService events instead",
    ),
    BestPracticeRule(
        re.compile(r"\.Touched:Connect\("),
        "Touched events can fire frequently. Consider using debouncing or Region3",
    ),
    BestPracticeRule(
        re.compile(r"game\.Workspace"),
        "Use workspace instead of game.Workspace for better performance",
    ),
)

# Root namespace whose child-service list drives the GetService check
ROOT_NAMESPACE = "game"

ROBLOX_SERVICES: Mapping[str, ServiceInfo] = MappingProxyType({
    "game": ServiceInfo(
        methods=("GetService", "FindService", "GetChildren", "FindFirstChild", "WaitForChild"),
        properties=(
            "Players", "Workspace", "ReplicatedStorage", "ServerStorage", "StarterGui",
            "StarterPack", "StarterPlayer", "Lighting", "SoundService", "TweenService",
            "RunService", "UserInputService", "ContextActionService", "GuiService",
            "MarketplaceService", "DataStoreService", "MessagingService", "TeleportService",
            "HttpService", "TextService", "Chat", "Teams", "PathfindingService",
            "CollectionService",
        ),
    ),
    "Players": ServiceInfo(
        methods=("GetPlayers", "FindFirstChild", "GetChildren"),
        properties=("LocalPlayer", "PlayerAdded", "PlayerRemoving"),
        events=("PlayerAdded", "PlayerRemoving", "CharacterAdded", "CharacterRemoving"),
    ),
    "Workspace": ServiceInfo(
        methods=(
            "Raycast", "GetPartBoundsInBox", "GetPartBoundsInRegion3", "FindFirstChild",
            "GetChildren", "WaitForChild",
        ),
        properties=("CurrentCamera", "Gravity", "FallenPartsDestroyHeight"),
        events=("ChildAdded", "ChildRemoved"),
    ),
    "UserInputService": ServiceInfo(
        methods=("IsKeyDown", "IsMouseButtonPressed", "GetMouseLocation", "GetGamepadState"),
        properties=("TouchEnabled", "KeyboardEnabled", "MouseEnabled", "GamepadEnabled", "VREnabled"),
        events=("InputBegan", "InputChanged", "InputEnded", "KeyDown", "KeyUp"),
    ),
    "RunService": ServiceInfo(
        methods=("IsClient", "IsServer", "IsStudio"),
        events=("Heartbeat", "RenderStepped", "PreRender", "PostSimulation", "PreSimulation"),
    ),
    "TweenService": ServiceInfo(
        methods=("Create", "GetValue"),
    ),
    "ReplicatedStorage": ServiceInfo(
        methods=("FindFirstChild", "GetChildren", "WaitForChild"),
        events=("ChildAdded", "ChildRemoved"),
    ),
    "ServerStorage": ServiceInfo(
        methods=("FindFirstChild", "GetChildren", "WaitForChild"),
        events=("ChildAdded", "ChildRemoved"),
    ),
    "StarterGui": ServiceInfo(
        methods=("SetCore", "GetCore", "SetCoreGuiEnabled", "GetCoreGuiEnabled"),
    ),
})


@lru_cache(maxsize=None)
def compile_get_service_pattern(root_namespace: str) -> re.Pattern[str]:
    """Match ``<root>:GetService("Name")`` with either quote style, capturing Name."""
    return re.compile(re.escape(root_namespace) + r""":GetService\(["']([^"']+)["']\)""")


@lru_cache(maxsize=None)
def compile_local_player_pattern(root_namespace: str) -> re.Pattern[str]:
    root = re.escape(root_namespace)
    return re.compile(rf'({root}\.Players\.LocalPlayer|{root}:GetService\("Players"\)\.LocalPlayer)')


GET_SERVICE_PATTERN = compile_get_service_pattern(ROOT_NAMESPACE)

LOCAL_PLAYER_PATTERN = compile_local_player_pattern(ROOT_NAMESPACE)

LOCAL_PLAYER_MESSAGE = "LocalPlayer is only available in LocalScripts and ModuleScripts run by LocalScripts"


@dataclass(frozen=True)
class RuleRegistry:
    """The full set of tables a validation pass runs with.

    Attributes:
        deprecated_apis: Deprecated API rules, in reporting order.
        best_practices: Best-practice rules, in reporting order.
        services: Service registry keyed by service name.
        root_namespace: Service whose properties list the known services; also the
            receiver the GetService and LocalPlayer patterns look for.
    """

    deprecated_apis: tuple[DeprecatedApiRule, ...] = DEPRECATED_APIS
    best_practices: tuple[BestPracticeRule, ...] = BEST_PRACTICES
    services: Mapping[str, ServiceInfo] = field(default_factory=lambda: ROBLOX_SERVICES)
    root_namespace: str = ROOT_NAMESPACE

    @property
    def known_services(self) -> tuple[str, ...]:
        root = self.services.get(self.root_namespace)
        return root.properties if root is not None else ()

    @property
    def get_service_pattern(self) -> re.Pattern[str]:
        return compile_get_service_pattern(self.root_namespace)

    @property
    def local_player_pattern(self) -> re.Pattern[str]:
        return compile_local_player_pattern(self.root_namespace)

    def service_members(self, service_name: str) -> frozenset[str]:
        """Return every known method, property and event of a service."""
        info = self.services.get(service_name)
        if info is None:
            return frozenset()
        return frozenset((*info.methods, *info.properties, *info.events))


DEFAULT_REGISTRY = RuleRegistry()
