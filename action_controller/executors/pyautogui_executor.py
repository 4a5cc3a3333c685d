"""Fallback executor using PyAutoGUI and OS helpers."""

from __future__ import annotations

import os
import subprocess
import time
import webbrowser

from action_controller.executors.base import (
    ActionResult,
    BaseExecutor,
    ErrorCode,
    failed_result,
    ok_result,
)
from profile_module.actions import KeyboardShortcut, KeyModifier, SpecialKey, SystemAction
from utils.log_utils import tprint
from utils.settings_store import deep_log, get_float, get_settings, is_deep_logging
from utils.system_utils import has_command, is_windows
from utils.threading_utils import run_async

# Outside macOS the Command key plays the role of Control.
PYAUTOGUI_MODIFIERS: dict[KeyModifier, str] = {
    KeyModifier.COMMAND: "ctrl",
    KeyModifier.SHIFT: "shift",
    KeyModifier.OPTION: "alt",
    KeyModifier.CONTROL: "ctrl",
    KeyModifier.CAPS_LOCK: "capslock",
    KeyModifier.FUNCTION: "fn",
}

PYAUTOGUI_SPECIAL_KEYS: dict[SpecialKey, str] = {
    SpecialKey.ENTER: "enter",
    SpecialKey.TAB: "tab",
    SpecialKey.SPACE: "space",
    SpecialKey.ESCAPE: "esc",
    SpecialKey.DELETE: "delete",
    SpecialKey.BACKSPACE: "backspace",
    SpecialKey.HOME: "home",
    SpecialKey.END: "end",
    SpecialKey.PAGE_UP: "pageup",
    SpecialKey.PAGE_DOWN: "pagedown",
    SpecialKey.LEFT_ARROW: "left",
    SpecialKey.RIGHT_ARROW: "right",
    SpecialKey.UP_ARROW: "up",
    SpecialKey.DOWN_ARROW: "down",
    **{key: key.value for key in SpecialKey if key.value.startswith("f")},
}

SYSTEM_ACTION_KEYS: dict[SystemAction, str] = {
    SystemAction.VOLUME_UP: "volumeup",
    SystemAction.VOLUME_DOWN: "volumedown",
    SystemAction.MUTE: "volumemute",
    SystemAction.SCREENSHOT: "printscreen",
}


def hotkey_names(shortcut: KeyboardShortcut) -> list[str]:
    """Translate a shortcut into the key names pyautogui.hotkey expects."""
    names: list[str] = []
    for modifier in shortcut.modifiers:
        name = PYAUTOGUI_MODIFIERS[modifier]
        if name not in names:
            names.append(name)
    special = shortcut.special_key
    names.append(PYAUTOGUI_SPECIAL_KEYS[special] if special else shortcut.key)
    return names


class PyAutoGUIExecutor(BaseExecutor):
    name = "pyautogui"

    def press_keys(self, shortcut: KeyboardShortcut) -> ActionResult:
        start = time.monotonic()
        keys = hotkey_names(shortcut)
        if is_deep_logging():
            deep_log(f"[DEEP][EXECUTOR] hotkey keys={keys}")
        elif get_settings().get("log_command_debug"):
            tprint(f"[EXECUTOR] hotkey keys={keys}")
        automation = self._automation()
        if not automation:
            return failed_result(
                "key_combo", ErrorCode.UNSUPPORTED_OPERATION, "pyautogui not available", start
            )
        interval = get_float("hotkey_interval_secs", 0.05)
        automation.hotkey(*keys, interval=interval)
        return ok_result("key_combo", start, {"keys": keys})

    def launch_app(self, bundle_id: str) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][EXECUTOR] launch_app id={bundle_id}")
        if is_windows():
            argv = ["cmd", "/c", "start", "", bundle_id]
        elif has_command("gtk-launch"):
            argv = ["gtk-launch", bundle_id]
        else:
            return failed_result(
                "open_app", ErrorCode.UNSUPPORTED_OPERATION, "no application launcher found", start
            )
        try:
            completed = subprocess.run(argv, capture_output=True, text=True, check=False)
        except OSError as exc:
            return failed_result("open_app", ErrorCode.EXECUTION_FAILED, str(exc), start)
        if completed.returncode != 0:
            reason = completed.stderr.strip() or f"application {bundle_id} not found"
            return failed_result("open_app", ErrorCode.TARGET_NOT_FOUND, reason, start)
        return ok_result("open_app", start)

    def open_url(self, url: str) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][EXECUTOR] open_url url={url}")
        if has_command("xdg-open"):
            self._spawn(["xdg-open", url])
        elif not webbrowser.open(url):
            return failed_result("open_url", ErrorCode.EXECUTION_FAILED, "no browser available", start)
        return ok_result("open_url", start)

    def open_path(self, path: str) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][EXECUTOR] open_path path={path}")
        if is_windows():
            os.startfile(path)  # type: ignore[attr-defined]
            return ok_result("open_path", start)
        if not has_command("xdg-open"):
            return failed_result(
                "open_path", ErrorCode.UNSUPPORTED_OPERATION, "xdg-open not available", start
            )
        self._spawn(["xdg-open", path])
        return ok_result("open_path", start)

    def insert_text(self, text: str, *, mode: str = "type") -> ActionResult:
        start = time.monotonic()
        if is_deep_logging():
            deep_log(f"[DEEP][EXECUTOR] insert_text mode={mode} text={text!r}")
        elif get_settings().get("log_command_debug"):
            tprint(f"[EXECUTOR] insert_text mode={mode} chars={len(text)}")
        automation = self._automation()
        if not automation:
            return failed_result(
                "type_text", ErrorCode.UNSUPPORTED_OPERATION, "pyautogui not available", start
            )
        if mode == "paste":
            clipboard = self._clipboard()
            if clipboard is None:
                return failed_result(
                    "type_text", ErrorCode.UNSUPPORTED_OPERATION, "pyperclip not available", start
                )
            clipboard.copy(text)
            automation.hotkey("ctrl", "v", interval=get_float("hotkey_interval_secs", 0.05))
            return ok_result("type_text", start, {"mode": "paste"})
        automation.write(text, interval=0.02)
        return ok_result("type_text", start, {"mode": "type"})

    def system_action(self, action: SystemAction) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][EXECUTOR] system_action action={action.value}")
        if action == SystemAction.LOCK_SCREEN and has_command("loginctl"):
            completed = subprocess.run(["loginctl", "lock-session"], capture_output=True, text=True, check=False)
            if completed.returncode != 0:
                return failed_result(
                    "system_action", ErrorCode.EXECUTION_FAILED, completed.stderr.strip(), start
                )
            return ok_result("system_action", start, {"system_action": action.value})
        key = SYSTEM_ACTION_KEYS.get(action)
        if key is None:
            return self._unsupported("system_action", action.value)
        automation = self._automation()
        if not automation:
            return failed_result(
                "system_action", ErrorCode.UNSUPPORTED_OPERATION, "pyautogui not available", start
            )
        automation.press(key)
        return ok_result("system_action", start, {"system_action": action.value})

    def _spawn(self, argv: list[str]) -> None:
        proc = subprocess.Popen(
            argv,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        run_async(proc.wait, name=f"Reap-{argv[0]}")

    def _automation(self):
        try:
            import pyautogui
        except Exception:
            return None
        return pyautogui

    def _clipboard(self):
        try:
            import pyperclip
        except Exception:
            return None
        return pyperclip
