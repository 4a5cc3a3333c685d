"""macOS-native executor using open and AppleScript."""

from __future__ import annotations

import subprocess
import time

from action_controller.executors.base import (
    ActionResult,
    BaseExecutor,
    ErrorCode,
    failed_result,
    ok_result,
)
from action_controller.script_sandbox import Interpreter, ScriptSandbox
from profile_module.actions import KeyboardShortcut, KeyModifier, SpecialKey, SystemAction
from utils.log_utils import tprint
from utils.settings_store import deep_log, get_settings, is_deep_logging

COMMAND_TIMEOUT_SECS = 10.0

# Virtual key codes for keys that AppleScript cannot send with `keystroke`.
SPECIAL_KEY_CODES: dict[SpecialKey, int] = {
    SpecialKey.ENTER: 36,
    SpecialKey.TAB: 48,
    SpecialKey.SPACE: 49,
    SpecialKey.ESCAPE: 53,
    SpecialKey.DELETE: 117,
    SpecialKey.BACKSPACE: 51,
    SpecialKey.HOME: 115,
    SpecialKey.END: 119,
    SpecialKey.PAGE_UP: 116,
    SpecialKey.PAGE_DOWN: 121,
    SpecialKey.LEFT_ARROW: 123,
    SpecialKey.RIGHT_ARROW: 124,
    SpecialKey.UP_ARROW: 126,
    SpecialKey.DOWN_ARROW: 125,
    SpecialKey.F1: 122,
    SpecialKey.F2: 120,
    SpecialKey.F3: 99,
    SpecialKey.F4: 118,
    SpecialKey.F5: 96,
    SpecialKey.F6: 97,
    SpecialKey.F7: 98,
    SpecialKey.F8: 100,
    SpecialKey.F9: 101,
    SpecialKey.F10: 109,
    SpecialKey.F11: 103,
    SpecialKey.F12: 111,
}

MODIFIER_CLAUSES: dict[KeyModifier, str] = {
    KeyModifier.COMMAND: "command down",
    KeyModifier.SHIFT: "shift down",
    KeyModifier.OPTION: "option down",
    KeyModifier.CONTROL: "control down",
}

_VOLUME_STEP = 6

SYSTEM_ACTION_SCRIPTS: dict[SystemAction, str] = {
    SystemAction.LOCK_SCREEN: (
        'tell application "System Events" to keystroke "q" using {command down, control down}'
    ),
    SystemAction.SCREENSHOT: (
        'tell application "System Events" to key code 20 using {command down, shift down}'
    ),
    SystemAction.VOLUME_UP: (
        f"set volume output volume ((output volume of (get volume settings)) + {_VOLUME_STEP})"
    ),
    SystemAction.VOLUME_DOWN: (
        f"set volume output volume ((output volume of (get volume settings)) - {_VOLUME_STEP})"
    ),
    SystemAction.MUTE: "set volume output muted (not (output muted of (get volume settings)))",
    SystemAction.BRIGHTNESS_UP: 'tell application "System Events" to key code 144',
    SystemAction.BRIGHTNESS_DOWN: 'tell application "System Events" to key code 145',
    SystemAction.MISSION_CONTROL: 'tell application "System Events" to key code 126 using {control down}',
    SystemAction.SHOW_DESKTOP: 'tell application "System Events" to key code 103',
    SystemAction.LAUNCHPAD: 'do shell script "open -a Launchpad"',
    SystemAction.SLEEP: 'tell application "System Events" to sleep',
}

# Power actions go through the sandbox so they share its timeout and logging.
SANDBOXED_SYSTEM_ACTIONS: dict[SystemAction, str] = {
    SystemAction.RESTART: 'tell application "System Events" to restart',
    SystemAction.SHUTDOWN: 'tell application "System Events" to shut down',
}


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def keystroke_script(shortcut: KeyboardShortcut) -> str:
    """Build the System Events AppleScript that presses a shortcut."""
    clauses = [MODIFIER_CLAUSES[mod] for mod in shortcut.modifiers if mod in MODIFIER_CLAUSES]
    using = f" using {{{', '.join(clauses)}}}" if clauses else ""
    special = shortcut.special_key
    if special is not None:
        return f'tell application "System Events" to key code {SPECIAL_KEY_CODES[special]}{using}'
    return f'tell application "System Events" to keystroke "{_escape(shortcut.key)}"{using}'


class MacOSExecutor(BaseExecutor):
    name = "macos"

    def __init__(self, *, sandbox: ScriptSandbox | None = None) -> None:
        self._sandbox = sandbox or ScriptSandbox()

    def press_keys(self, shortcut: KeyboardShortcut) -> ActionResult:
        start = time.monotonic()
        script = keystroke_script(shortcut)
        ignored = [mod.value for mod in shortcut.modifiers if mod not in MODIFIER_CLAUSES]
        if is_deep_logging():
            deep_log(f"[DEEP][MAC_EXEC] press_keys script={script!r} ignored={ignored}")
        elif get_settings().get("log_command_debug"):
            tprint(f"[MAC_EXEC] press_keys key={shortcut.key} modifiers={[m.value for m in shortcut.modifiers]}")
        result = self._osascript("key_combo", script, start)
        if ignored and result.is_success:
            # System Events has no clause for these; the keystroke was sent without them.
            result.details = {**(result.details or {}), "ignored_modifiers": ignored}
        return result

    def launch_app(self, bundle_id: str) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][MAC_EXEC] launch_app bundle_id={bundle_id}")
        return self._run(
            "open_app",
            ["open", "-b", bundle_id],
            start,
            failure_code=ErrorCode.TARGET_NOT_FOUND,
        )

    def open_url(self, url: str) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][MAC_EXEC] open_url url={url}")
        return self._run("open_url", ["open", url], start)

    def open_path(self, path: str) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][MAC_EXEC] open_path path={path}")
        return self._run("open_path", ["open", path], start)

    def insert_text(self, text: str, *, mode: str = "type") -> ActionResult:
        start = time.monotonic()
        if is_deep_logging():
            deep_log(f"[DEEP][MAC_EXEC] insert_text mode={mode} text={text!r}")
        elif get_settings().get("log_command_debug"):
            tprint(f"[MAC_EXEC] insert_text mode={mode} chars={len(text)}")
        if mode == "paste":
            clipboard = self._clipboard()
            if clipboard is None:
                return failed_result(
                    "type_text", ErrorCode.UNSUPPORTED_OPERATION, "pyperclip not available", start
                )
            clipboard.copy(text)
            script = keystroke_script(KeyboardShortcut("v", (KeyModifier.COMMAND,)))
            return self._osascript("type_text", script, start)
        script = f'tell application "System Events" to keystroke "{_escape(text)}"'
        return self._osascript("type_text", script, start)

    def system_action(self, action: SystemAction) -> ActionResult:
        start = time.monotonic()
        deep_log(f"[DEEP][MAC_EXEC] system_action action={action.value}")
        if action in SANDBOXED_SYSTEM_ACTIONS:
            result = self._sandbox.run(
                SANDBOXED_SYSTEM_ACTIONS[action], interpreter=Interpreter.APPLESCRIPT
            )
            if result.timed_out:
                return failed_result("system_action", ErrorCode.TIMED_OUT, result.stderr, start)
            if not result.is_success:
                return failed_result(
                    "system_action", ErrorCode.EXECUTION_FAILED, result.stderr.strip(), start
                )
            return ok_result("system_action", start, {"system_action": action.value})
        script = SYSTEM_ACTION_SCRIPTS.get(action)
        if script is None:
            return failed_result(
                "system_action",
                ErrorCode.UNSUPPORTED_OPERATION,
                f"{action.value} has no macOS mechanism",
                start,
            )
        result = self._osascript("system_action", script, start)
        if result.is_success:
            result.details = {"system_action": action.value}
        return result

    def _osascript(self, action: str, script: str, start: float) -> ActionResult:
        return self._run(action, ["osascript", "-e", script], start)

    def _run(
        self,
        action: str,
        argv: list[str],
        start: float,
        *,
        failure_code: ErrorCode = ErrorCode.EXECUTION_FAILED,
    ) -> ActionResult:
        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=COMMAND_TIMEOUT_SECS,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return failed_result(
                action, ErrorCode.TIMED_OUT, f"{argv[0]} timed out after {COMMAND_TIMEOUT_SECS:g}s", start
            )
        except OSError as exc:
            return failed_result(action, ErrorCode.EXECUTION_FAILED, str(exc), start)
        if completed.returncode != 0:
            reason = completed.stderr.strip() or f"{argv[0]} exited with {completed.returncode}"
            return failed_result(action, failure_code, reason, start)
        return ok_result(action, start)

    def _clipboard(self):
        try:
            import pyperclip
        except Exception:
            return None
        return pyperclip
