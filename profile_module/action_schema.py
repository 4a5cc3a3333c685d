"""Action schema: validate intent dicts and convert them to Action values."""

from __future__ import annotations

from datetime import datetime
from typing import Any

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
)
from profile_module.models import AppCategory, Profile, ProfileSource, Slot, SlotColor


ALLOWED_INTENTS = {
    "key_combo",
    "open_app",
    "open_url",
    "system_action",
    "shell_script",
    "apple_script",
    "run_shortcut",
    "type_text",
    "open_path",
    "workflow",
    "tool_call",
    "tool_workflow",
}

KEY_ALIASES = {
    "cmd": "command",
    "command": "command",
    "ctrl": "control",
    "control": "control",
    "opt": "option",
    "option": "option",
    "alt": "option",
    "shift": "shift",
    "caps": "caps_lock",
    "capslock": "caps_lock",
    "caps_lock": "caps_lock",
    "fn": "function",
    "function": "function",
    "return": "enter",
    "enter": "enter",
    "esc": "escape",
    "escape": "escape",
    "pageup": "page_up",
    "pagedown": "page_down",
    "left": "left_arrow",
    "right": "right_arrow",
    "up": "up_arrow",
    "down": "down_arrow",
}

_MODIFIERS = {item.value for item in KeyModifier}
_SPECIALS = {item.value for item in SpecialKey}


def _required_text(step: dict, field: str, intent: str, *, strip: bool = True) -> str:
    value = str(step.get(field) or "")
    if not value.strip():
        raise ValueError(f"{intent} requires '{field}'")
    return value.strip() if strip else value


def _parse_keys(step: dict) -> KeyboardShortcut:
    keys = step.get("keys") or []
    if isinstance(keys, str):
        keys = [item.strip() for item in keys.split("+") if item.strip()]
    if not isinstance(keys, list) or not keys:
        raise ValueError("key_combo requires non-empty 'keys'")
    modifiers: list[KeyModifier] = []
    key: str | None = None
    for raw in keys:
        text = str(raw).strip()
        if not text:
            continue
        lowered = text.lower()
        alias = KEY_ALIASES.get(lowered, lowered)
        if alias in _MODIFIERS:
            modifier = KeyModifier(alias)
            if modifier not in modifiers:
                modifiers.append(modifier)
            continue
        if key is not None:
            raise ValueError(f"key_combo accepts one non-modifier key (got '{key}' and '{text}')")
        if alias in _SPECIALS:
            key = alias
        elif len(text) == 1:
            key = lowered
        else:
            raise ValueError(f"Unknown key '{text}'")
    if key is None:
        raise ValueError("key_combo requires a non-modifier key")
    return KeyboardShortcut(key=key, modifiers=tuple(modifiers))


def _parse_parameters(step: dict, intent: str) -> dict[str, str]:
    params = step.get("parameters") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{intent} requires 'parameters' object")
    return {str(key): str(value) for key, value in params.items()}


def action_from_dict(step: Any) -> Action:
    """Validate an intent dict and return the matching Action."""
    if not isinstance(step, dict):
        raise ValueError("action must be an object")
    intent = str(step.get("intent", "")).strip()
    if intent not in ALLOWED_INTENTS:
        raise ValueError(f"Unsupported intent '{intent}'")

    if intent == "key_combo":
        return _parse_keys(step)

    if intent == "open_app":
        return LaunchApplication(bundle_id=_required_text(step, "bundle_id", intent))

    if intent == "open_url":
        return OpenURL(url=_required_text(step, "url", intent))

    if intent == "system_action":
        raw = str(step.get("action", "")).strip().lower()
        try:
            return RunSystemAction(action=SystemAction(raw))
        except ValueError:
            raise ValueError(f"Unknown system action '{raw}'")

    if intent == "shell_script":
        return ShellScript(script=_required_text(step, "script", intent, strip=False))

    if intent == "apple_script":
        return AppleScript(script=_required_text(step, "script", intent, strip=False))

    if intent == "run_shortcut":
        return RunShortcut(name=_required_text(step, "name", intent))

    if intent == "type_text":
        text = str(step.get("text", ""))
        if text == "":
            raise ValueError("type_text requires 'text'")
        return InsertText(text=text)

    if intent == "open_path":
        return OpenPath(path=_required_text(step, "path", intent))

    if intent == "workflow":
        steps = step.get("steps")
        if not isinstance(steps, list):
            raise ValueError("workflow requires 'steps' list")
        return Workflow(actions=tuple(action_from_dict(child) for child in steps))

    if intent == "tool_call":
        return ToolCall(
            server_id=_required_text(step, "server_id", intent),
            tool_name=_required_text(step, "tool_name", intent),
            parameters=_parse_parameters(step, intent),
            display_name=str(step.get("display_name", "")).strip(),
        )

    if intent == "tool_workflow":
        return ToolWorkflow(
            server_id=_required_text(step, "server_id", intent),
            workflow_id=_required_text(step, "workflow_id", intent),
            parameters=_parse_parameters(step, intent),
            display_name=str(step.get("display_name", "")).strip(),
        )

    raise ValueError(f"Unsupported intent '{intent}'")


def action_to_dict(action: Action) -> dict[str, Any]:
    """Inverse of action_from_dict."""
    intent = action_name(action)
    payload: dict[str, Any] = {"intent": intent}
    if isinstance(action, KeyboardShortcut):
        payload["keys"] = [mod.value for mod in action.modifiers] + [action.key]
    elif isinstance(action, LaunchApplication):
        payload["bundle_id"] = action.bundle_id
    elif isinstance(action, OpenURL):
        payload["url"] = action.url
    elif isinstance(action, RunSystemAction):
        payload["action"] = action.action.value
    elif isinstance(action, (ShellScript, AppleScript)):
        payload["script"] = action.script
    elif isinstance(action, RunShortcut):
        payload["name"] = action.name
    elif isinstance(action, InsertText):
        payload["text"] = action.text
    elif isinstance(action, OpenPath):
        payload["path"] = action.path
    elif isinstance(action, Workflow):
        payload["steps"] = [action_to_dict(child) for child in action.actions]
    elif isinstance(action, ToolCall):
        payload.update(
            server_id=action.server_id,
            tool_name=action.tool_name,
            parameters=dict(action.parameters),
            display_name=action.display_name,
        )
    elif isinstance(action, ToolWorkflow):
        payload.update(
            server_id=action.server_id,
            workflow_id=action.workflow_id,
            parameters=dict(action.parameters),
            display_name=action.display_name,
        )
    return payload


def slot_from_dict(data: dict) -> Slot:
    try:
        position = int(data.get("position"))
    except (TypeError, ValueError):
        raise ValueError("slot requires integer 'position'")
    label = str(data.get("label", "")).strip()
    if not label:
        raise ValueError("slot requires 'label'")
    action_data = data.get("action")
    color = str(data.get("color", SlotColor.BLUE.value)).strip().lower()
    try:
        slot_color = SlotColor(color)
    except ValueError:
        raise ValueError(f"Unknown slot color '{color}'")
    return Slot(
        position=position,
        label=label,
        icon=str(data.get("icon", "")),
        action=action_from_dict(action_data) if action_data is not None else None,
        enabled=bool(data.get("enabled", True)),
        color=slot_color,
    )


def slot_to_dict(slot: Slot) -> dict[str, Any]:
    return {
        "position": slot.position,
        "label": slot.label,
        "icon": slot.icon,
        "action": action_to_dict(slot.action) if slot.action is not None else None,
        "enabled": slot.enabled,
        "color": slot.color.value,
    }


def profile_from_dict(data: dict) -> Profile:
    """Build a profile from an imported configuration record."""
    if not isinstance(data, dict):
        raise ValueError("profile must be an object")
    name = str(data.get("name", "")).strip()
    if not name:
        raise ValueError("profile requires 'name'")
    bundle_id = str(data.get("bundle_id") or "").strip() or None
    try:
        category = AppCategory(str(data.get("category", AppCategory.OTHER.value)).strip().lower())
        source = ProfileSource(str(data.get("source", ProfileSource.USER.value)).strip().lower())
    except ValueError as exc:
        raise ValueError(f"Invalid profile field: {exc}")
    profile = Profile(
        name=name,
        bundle_id=bundle_id,
        category=category,
        slot_count=int(data.get("slot_count", 8)),
        is_default=bool(data.get("is_default", False)),
        mcp_servers=[str(item) for item in data.get("mcp_servers") or []],
        source=source,
    )
    if data.get("id"):
        profile.id = str(data["id"])
    for raw_slot in data.get("slots") or []:
        profile.add_slot(slot_from_dict(raw_slot))
    for stamp in ("created_at", "updated_at"):
        if data.get(stamp):
            setattr(profile, stamp, datetime.fromisoformat(str(data[stamp])))
    return profile


def profile_to_dict(profile: Profile) -> dict[str, Any]:
    return {
        "id": profile.id,
        "name": profile.name,
        "bundle_id": profile.bundle_id,
        "category": profile.category.value,
        "slot_count": profile.slot_count,
        "is_default": profile.is_default,
        "mcp_servers": list(profile.mcp_servers),
        "source": profile.source.value,
        "slots": [slot_to_dict(slot) for slot in sorted(profile.slots, key=lambda s: s.position)],
        "created_at": profile.created_at.isoformat(),
        "updated_at": profile.updated_at.isoformat(),
    }
