"""Execute ring actions and report typed results.

Every action variant has exactly one handler. Handlers return an
ActionResult; failures are carried as ExecutionError values inside the
result and never escape `execute`.
"""

from __future__ import annotations

import os
import shlex
import time
from collections.abc import Callable, Iterable
from urllib.parse import urlparse

from action_controller.executors.base import (
    ActionResult,
    BaseExecutor,
    ErrorCode,
    ExecutionError,
    failed_result,
    ok_result,
)
from action_controller.executors.router import OSRouter
from action_controller.logger import ActionLogger
from action_controller.script_sandbox import Interpreter, ScriptSandbox
from profile_module.actions import (
    Action,
    AppleScript,
    InsertText,
    KeyboardShortcut,
    LaunchApplication,
    OpenPath,
    OpenURL,
    RunShortcut,
    RunSystemAction,
    ShellScript,
    ToolCall,
    ToolWorkflow,
    Workflow,
    action_name,
    describe_action,
)
from utils.settings_store import deep_log, get_settings, get_str
from utils.system_utils import is_macos

_WEB_SCHEMES = {"http", "https"}


class ActionDispatcher:
    def __init__(
        self,
        *,
        executor: BaseExecutor | None = None,
        sandbox: ScriptSandbox | None = None,
        logger: ActionLogger | None = None,
    ) -> None:
        self.sandbox = sandbox or ScriptSandbox()
        self.executor = executor or OSRouter(sandbox=self.sandbox)
        self.logger = logger or ActionLogger()
        self._handlers: dict[type, Callable[..., ActionResult]] = {
            KeyboardShortcut: self._press_keys,
            LaunchApplication: self._launch_app,
            OpenURL: self._open_url,
            RunSystemAction: self._system_action,
            ShellScript: self._shell_script,
            AppleScript: self._apple_script,
            RunShortcut: self._run_shortcut,
            InsertText: self._insert_text,
            OpenPath: self._open_path,
            Workflow: self._workflow,
            ToolCall: self._not_implemented,
            ToolWorkflow: self._not_implemented,
        }

    def execute(self, action: Action) -> ActionResult:
        start = time.monotonic()
        handler = self._handlers.get(type(action))
        if handler is None:
            return failed_result("unknown", ErrorCode.INVALID_INPUT, f"Not an action: {action!r}", start)

        name = action_name(action)
        if get_settings().get("log_command_debug"):
            self.logger.info(f"Executing {name}: {describe_action(action)}")
        try:
            result = handler(action, start)
        except ExecutionError as exc:
            result = ActionResult(action=name, status="failed", error=exc)
        except Exception as exc:
            result = failed_result(name, ErrorCode.EXECUTION_FAILED, f"{type(exc).__name__}: {exc}", start)

        result.action = name
        if result.elapsed_ms is None:
            result.elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.error is not None:
            self.logger.error(f"{name} failed: {result.error}")
        else:
            deep_log(f"[DEEP][ACTIONS] {name} ok elapsed_ms={result.elapsed_ms}")
        return result

    def execute_workflow(self, actions: Iterable[Action]) -> ActionResult:
        """Run actions strictly in order, stopping at the first failure.

        No rollback: side effects of steps that already ran stay in place.
        """
        start = time.monotonic()
        completed = 0
        for index, step in enumerate(actions):
            result = self.execute(step)
            if not result.is_success:
                details = dict(result.details or {})
                details.update(failed_step=index, failed_action=result.action, completed=completed)
                return ActionResult(
                    action="workflow",
                    status="failed",
                    error=result.error,
                    details=details,
                    elapsed_ms=int((time.monotonic() - start) * 1000),
                )
            completed += 1
        return ok_result("workflow", start, {"completed": completed})

    def _press_keys(self, action: KeyboardShortcut, start: float) -> ActionResult:
        return self.executor.press_keys(action)

    def _launch_app(self, action: LaunchApplication, start: float) -> ActionResult:
        bundle_id = action.bundle_id.strip()
        if not bundle_id:
            return failed_result("open_app", ErrorCode.INVALID_INPUT, "missing bundle id", start)
        return self.executor.launch_app(bundle_id)

    def _open_url(self, action: OpenURL, start: float) -> ActionResult:
        url = action.url.strip()
        parsed = urlparse(url)
        if not parsed.scheme:
            return failed_result("open_url", ErrorCode.INVALID_INPUT, f"URL has no scheme: {url!r}", start)
        if parsed.scheme.lower() in _WEB_SCHEMES and not parsed.netloc:
            return failed_result("open_url", ErrorCode.INVALID_INPUT, f"URL has no host: {url!r}", start)
        return self.executor.open_url(url)

    def _system_action(self, action: RunSystemAction, start: float) -> ActionResult:
        return self.executor.system_action(action.action)

    def _shell_script(self, action: ShellScript, start: float) -> ActionResult:
        return self._run_script("shell_script", action.script, Interpreter.SHELL, start)

    def _apple_script(self, action: AppleScript, start: float) -> ActionResult:
        return self._run_script("apple_script", action.script, Interpreter.APPLESCRIPT, start)

    def _run_shortcut(self, action: RunShortcut, start: float) -> ActionResult:
        name = action.name.strip()
        if not name:
            return failed_result("run_shortcut", ErrorCode.INVALID_INPUT, "missing shortcut name", start)
        if not is_macos():
            return failed_result(
                "run_shortcut",
                ErrorCode.UNSUPPORTED_OPERATION,
                "Shortcuts is only available on macOS",
                start,
            )
        return self._run_script("run_shortcut", f"shortcuts run {shlex.quote(name)}", Interpreter.SHELL, start)

    def _insert_text(self, action: InsertText, start: float) -> ActionResult:
        mode = get_str("insert_text_mode", "type").lower()
        if mode not in {"type", "paste"}:
            return failed_result(
                "type_text", ErrorCode.INVALID_INPUT, f"Unknown insert_text_mode '{mode}'", start
            )
        if not action.text:
            return ok_result("type_text", start, {"mode": mode, "chars": 0})
        return self.executor.insert_text(action.text, mode=mode)

    def _open_path(self, action: OpenPath, start: float) -> ActionResult:
        raw = action.path.strip()
        if not raw:
            return failed_result("open_path", ErrorCode.INVALID_INPUT, "missing path", start)
        path = os.path.expanduser(raw)
        if not os.path.exists(path):
            return failed_result("open_path", ErrorCode.TARGET_NOT_FOUND, f"No such path: {path}", start)
        return self.executor.open_path(path)

    def _workflow(self, action: Workflow, start: float) -> ActionResult:
        return self.execute_workflow(action.actions)

    def _not_implemented(self, action: ToolCall | ToolWorkflow, start: float) -> ActionResult:
        return failed_result(
            action_name(action),
            ErrorCode.NOT_IMPLEMENTED,
            f"{describe_action(action)} is not implemented",
            start,
        )

    def _run_script(self, name: str, script: str, interpreter: Interpreter, start: float) -> ActionResult:
        validation = self.sandbox.validate(script)
        if not validation.is_valid:
            return failed_result(name, ErrorCode.VALIDATION_FAILED, validation.reason, start)
        result = self.sandbox.run(script, interpreter=interpreter)
        details = result.to_dict()
        if result.timed_out:
            return failed_result(name, ErrorCode.TIMED_OUT, result.stderr, start, details)
        if not result.is_success:
            reason = result.stderr.strip() or f"exit code {result.exit_code}"
            return failed_result(name, ErrorCode.EXECUTION_FAILED, reason, start, details)
        return ok_result(name, start, details)
