"""Route OS primitives to the native executor with a pyautogui fallback."""

from __future__ import annotations

from typing import Any

from action_controller.executors.base import FALLBACK_CODES, ActionResult, BaseExecutor
from action_controller.executors.macos_executor import MacOSExecutor
from action_controller.executors.pyautogui_executor import PyAutoGUIExecutor
from action_controller.script_sandbox import ScriptSandbox
from profile_module.actions import KeyboardShortcut, SystemAction
from utils.system_utils import current_os


class OSRouter(BaseExecutor):
    name = "router"

    def __init__(
        self,
        *,
        sandbox: ScriptSandbox | None = None,
        primary: BaseExecutor | None = None,
        fallback: BaseExecutor | None = None,
        os_name: str | None = None,
    ) -> None:
        self._os_name = os_name or current_os()
        if primary is None and self._os_name == "darwin":
            primary = MacOSExecutor(sandbox=sandbox)
        self._primary = primary
        self._fallback = fallback if fallback is not None else PyAutoGUIExecutor()

    def press_keys(self, shortcut: KeyboardShortcut) -> ActionResult:
        return self._route("press_keys", shortcut)

    def launch_app(self, bundle_id: str) -> ActionResult:
        return self._route("launch_app", bundle_id)

    def open_url(self, url: str) -> ActionResult:
        return self._route("open_url", url)

    def open_path(self, path: str) -> ActionResult:
        return self._route("open_path", path)

    def insert_text(self, text: str, *, mode: str = "type") -> ActionResult:
        return self._route("insert_text", text, mode=mode)

    def system_action(self, action: SystemAction) -> ActionResult:
        return self._route("system_action", action)

    def _route(self, method: str, *args: Any, **kwargs: Any) -> ActionResult:
        if self._primary is None:
            return getattr(self._fallback, method)(*args, **kwargs)
        result = getattr(self._primary, method)(*args, **kwargs)
        if result.error is None or result.error.code not in FALLBACK_CODES:
            return result
        fallback_result = getattr(self._fallback, method)(*args, **kwargs)
        if fallback_result.details is None:
            fallback_result.details = {}
        fallback_result.details["fallback_from"] = self._primary.name
        return fallback_result
