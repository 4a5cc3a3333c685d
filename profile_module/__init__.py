"""Profiles, slots, and the action variants they hold."""

from profile_module.actions import (
    Action,
    AppleScript,
    InsertText,
    KeyboardShortcut,
    KeyModifier,
    LaunchApplication,
    OpenPath,
    OpenURL,
    RunShortcut,
    RunSystemAction,
    ShellScript,
    SpecialKey,
    SystemAction,
    ToolCall,
    ToolWorkflow,
    Workflow,
    action_name,
    describe_action,
)
from profile_module.models import AppCategory, Profile, ProfileSource, Slot, SlotColor
from profile_module.store import InMemoryProfileStore, ProfileStore

__all__ = [
    "Action",
    "AppCategory",
    "AppleScript",
    "InMemoryProfileStore",
    "InsertText",
    "KeyboardShortcut",
    "KeyModifier",
    "LaunchApplication",
    "OpenPath",
    "OpenURL",
    "Profile",
    "ProfileSource",
    "ProfileStore",
    "RunShortcut",
    "RunSystemAction",
    "ShellScript",
    "Slot",
    "SlotColor",
    "SpecialKey",
    "SystemAction",
    "ToolCall",
    "ToolWorkflow",
    "Workflow",
    "action_name",
    "describe_action",
]
