"""Action variants that can be bound to a ring slot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Union


class KeyModifier(str, Enum):
    COMMAND = "command"
    SHIFT = "shift"
    OPTION = "option"
    CONTROL = "control"
    CAPS_LOCK = "caps_lock"
    FUNCTION = "function"


class SpecialKey(str, Enum):
    ENTER = "enter"
    TAB = "tab"
    SPACE = "space"
    ESCAPE = "escape"
    DELETE = "delete"
    BACKSPACE = "backspace"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    LEFT_ARROW = "left_arrow"
    RIGHT_ARROW = "right_arrow"
    UP_ARROW = "up_arrow"
    DOWN_ARROW = "down_arrow"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"


class SystemAction(str, Enum):
    LOCK_SCREEN = "lock_screen"
    SCREENSHOT = "screenshot"
    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    MUTE = "mute"
    BRIGHTNESS_UP = "brightness_up"
    BRIGHTNESS_DOWN = "brightness_down"
    MISSION_CONTROL = "mission_control"
    SHOW_DESKTOP = "show_desktop"
    LAUNCHPAD = "launchpad"
    NOTIFICATION_CENTER = "notification_center"
    SLEEP = "sleep"
    RESTART = "restart"
    SHUTDOWN = "shutdown"


_SPECIAL_VALUES = {item.value for item in SpecialKey}


@dataclass(frozen=True)
class KeyboardShortcut:
    """A key (single character or SpecialKey value) plus held modifiers."""

    key: str
    modifiers: tuple[KeyModifier, ...] = ()

    @property
    def special_key(self) -> SpecialKey | None:
        if self.key in _SPECIAL_VALUES:
            return SpecialKey(self.key)
        return None


@dataclass(frozen=True)
class LaunchApplication:
    bundle_id: str


@dataclass(frozen=True)
class OpenURL:
    url: str


@dataclass(frozen=True)
class RunSystemAction:
    action: SystemAction


@dataclass(frozen=True)
class ShellScript:
    script: str


@dataclass(frozen=True)
class AppleScript:
    script: str


@dataclass(frozen=True)
class RunShortcut:
    name: str


@dataclass(frozen=True)
class InsertText:
    text: str


@dataclass(frozen=True)
class OpenPath:
    path: str


@dataclass(frozen=True)
class Workflow:
    actions: tuple["Action", ...] = ()


@dataclass(frozen=True)
class ToolCall:
    server_id: str
    tool_name: str
    parameters: dict[str, str] = field(default_factory=dict, hash=False)
    display_name: str = ""


@dataclass(frozen=True)
class ToolWorkflow:
    server_id: str
    workflow_id: str
    parameters: dict[str, str] = field(default_factory=dict, hash=False)
    display_name: str = ""


Action = Union[
    KeyboardShortcut,
    LaunchApplication,
    OpenURL,
    RunSystemAction,
    ShellScript,
    AppleScript,
    RunShortcut,
    InsertText,
    OpenPath,
    Workflow,
    ToolCall,
    ToolWorkflow,
]


def _title(raw: str) -> str:
    return " ".join(part.capitalize() for part in raw.split("_"))


def describe_action(action: Action) -> str:
    """Short human-readable label for an action."""
    if isinstance(action, KeyboardShortcut):
        special = action.special_key
        key_label = _title(special.value) if special else action.key.upper()
        mods = "+".join(_title(mod.value) for mod in action.modifiers)
        return f"{mods}+{key_label}" if mods else key_label
    if isinstance(action, LaunchApplication):
        name = action.bundle_id.split(".")[-1] or action.bundle_id
        return f"Open {name.capitalize()}"
    if isinstance(action, OpenURL):
        return f"Open {action.url}"
    if isinstance(action, RunSystemAction):
        return _title(action.action.value)
    if isinstance(action, ShellScript):
        return "Run Shell Script"
    if isinstance(action, AppleScript):
        return "Run AppleScript"
    if isinstance(action, RunShortcut):
        return f"Run Shortcuts: {action.name}"
    if isinstance(action, InsertText):
        preview = action.text[:20]
        return f"Insert: {preview}{'...' if len(action.text) > 20 else ''}"
    if isinstance(action, OpenPath):
        return f"Open {PurePath(action.path).name}"
    if isinstance(action, Workflow):
        return f"Workflow ({len(action.actions)} actions)"
    if isinstance(action, ToolCall):
        return f"MCP: {action.display_name or action.tool_name}"
    if isinstance(action, ToolWorkflow):
        return f"MCP Workflow: {action.display_name or action.workflow_id}"
    raise TypeError(f"Not an action: {action!r}")


def action_name(action: Action) -> str:
    """Stable snake_case name for the action variant, used in results and logs."""
    return _ACTION_NAMES.get(type(action), type(action).__name__)


_ACTION_NAMES: dict[type, str] = {
    KeyboardShortcut: "key_combo",
    LaunchApplication: "open_app",
    OpenURL: "open_url",
    RunSystemAction: "system_action",
    ShellScript: "shell_script",
    AppleScript: "apple_script",
    RunShortcut: "run_shortcut",
    InsertText: "type_text",
    OpenPath: "open_path",
    Workflow: "workflow",
    ToolCall: "tool_call",
    ToolWorkflow: "tool_workflow",
}
