"""Tests for ActionDispatcher (per-variant handlers, typed errors, workflows)."""

from unittest.mock import Mock, patch

import pytest

from action_controller.dispatcher import ActionDispatcher
from action_controller.executors.base import ActionResult, BaseExecutor, ErrorCode, ExecutionError
from action_controller.script_sandbox import Interpreter, ScriptResult, ScriptSandbox, ScriptValidation
from profile_module.actions import (
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
    SystemAction,
    ToolCall,
    ToolWorkflow,
    Workflow,
)


def _ok(name: str) -> ActionResult:
    return ActionResult(action=name, status="ok")


@pytest.fixture
def executor():
    mock = Mock(spec=BaseExecutor)
    mock.press_keys.return_value = _ok("key_combo")
    mock.launch_app.return_value = _ok("open_app")
    mock.open_url.return_value = _ok("open_url")
    mock.open_path.return_value = _ok("open_path")
    mock.insert_text.return_value = _ok("type_text")
    mock.system_action.return_value = _ok("system_action")
    return mock


@pytest.fixture
def dispatcher(executor):
    return ActionDispatcher(executor=executor, sandbox=ScriptSandbox(timeout_secs=5))


class TestActionDispatcher:
    """Test suite for single-action dispatch."""

    def test_keyboard_shortcut(self, dispatcher, executor):
        """Shortcuts go to press_keys."""
        shortcut = KeyboardShortcut("c", (KeyModifier.COMMAND,))
        result = dispatcher.execute(shortcut)
        assert result.is_success
        assert result.action == "key_combo"
        executor.press_keys.assert_called_once_with(shortcut)
        assert result.elapsed_ms is not None

    def test_launch_application(self, dispatcher, executor):
        """Launches pass the bundle id through."""
        assert dispatcher.execute(LaunchApplication("com.apple.Safari")).is_success
        executor.launch_app.assert_called_once_with("com.apple.Safari")

    def test_launch_unknown_app_reports_target_not_found(self, dispatcher, executor):
        """Executor failures surface unchanged."""
        executor.launch_app.return_value = ActionResult(
            action="open_app",
            status="failed",
            error=ExecutionError(ErrorCode.TARGET_NOT_FOUND, "missing"),
        )
        result = dispatcher.execute(LaunchApplication("com.nope"))
        assert result.error.code == ErrorCode.TARGET_NOT_FOUND

    @pytest.mark.parametrize("url", ["example.com", "https://", "http:///path", ""])
    def test_invalid_urls(self, dispatcher, executor, url):
        """URLs without scheme, or web URLs without host, are invalid input."""
        result = dispatcher.execute(OpenURL(url))
        assert result.error.code == ErrorCode.INVALID_INPUT
        executor.open_url.assert_not_called()

    @pytest.mark.parametrize("url", ["https://example.com", "mailto:me@example.com", "file:///tmp"])
    def test_valid_urls(self, dispatcher, executor, url):
        """Well-formed URLs reach the executor."""
        assert dispatcher.execute(OpenURL(url)).is_success
        executor.open_url.assert_called_once_with(url)

    def test_system_action(self, dispatcher, executor):
        """System actions go to the executor."""
        dispatcher.execute(RunSystemAction(SystemAction.MUTE))
        executor.system_action.assert_called_once_with(SystemAction.MUTE)

    def test_insert_text_uses_setting(self, dispatcher, executor, settings_file):
        """insert_text_mode chooses typing or pasting."""
        settings_file({"insert_text_mode": "paste"})
        dispatcher.execute(InsertText("hello"))
        executor.insert_text.assert_called_once_with("hello", mode="paste")

    def test_insert_text_unknown_mode(self, dispatcher, executor, settings_file):
        """Unknown modes are invalid input."""
        settings_file({"insert_text_mode": "telepathy"})
        result = dispatcher.execute(InsertText("hello"))
        assert result.error.code == ErrorCode.INVALID_INPUT

    def test_open_path_missing(self, dispatcher, executor, tmp_path):
        """Missing paths are target_not_found."""
        result = dispatcher.execute(OpenPath(str(tmp_path / "nope.txt")))
        assert result.error.code == ErrorCode.TARGET_NOT_FOUND
        executor.open_path.assert_not_called()

    def test_open_path_empty(self, dispatcher):
        """Empty paths are invalid input."""
        assert dispatcher.execute(OpenPath("  ")).error.code == ErrorCode.INVALID_INPUT

    def test_open_path_existing(self, dispatcher, executor, tmp_path):
        """Existing paths are opened."""
        target = tmp_path / "notes.txt"
        target.write_text("x")
        assert dispatcher.execute(OpenPath(str(target))).is_success
        executor.open_path.assert_called_once_with(str(target))

    def test_shell_script_success(self, dispatcher):
        """Scripts run through the sandbox and report output."""
        result = dispatcher.execute(ShellScript("echo hi"))
        assert result.is_success
        assert result.details["stdout"].strip() == "hi"

    def test_shell_script_validation_failed(self, dispatcher):
        """Dangerous scripts fail validation."""
        result = dispatcher.execute(ShellScript("rm -rf /"))
        assert result.error.code == ErrorCode.VALIDATION_FAILED

    def test_shell_script_non_zero(self, dispatcher):
        """Non-zero exit is execution_failed."""
        result = dispatcher.execute(ShellScript("echo bad >&2; exit 2"))
        assert result.error.code == ErrorCode.EXECUTION_FAILED
        assert result.error.reason == "bad"

    def test_shell_script_timeout(self, executor):
        """Timeouts are reported as timed_out."""
        dispatcher = ActionDispatcher(executor=executor, sandbox=ScriptSandbox(timeout_secs=0.2))
        result = dispatcher.execute(ShellScript("sleep 5"))
        assert result.error.code == ErrorCode.TIMED_OUT
        assert result.details["timed_out"] is True

    def test_apple_script_uses_osascript(self, executor):
        """AppleScript goes through the sandbox with the AppleScript interpreter."""
        sandbox = Mock(spec=ScriptSandbox)
        sandbox.validate.return_value = ScriptValidation(True)
        sandbox.run.return_value = ScriptResult(stdout="done")
        dispatcher = ActionDispatcher(executor=executor, sandbox=sandbox)

        result = dispatcher.execute(AppleScript('display dialog "hi"'))
        assert result.is_success
        sandbox.run.assert_called_once_with('display dialog "hi"', interpreter=Interpreter.APPLESCRIPT)

    def test_run_shortcut_off_macos(self, dispatcher):
        """Shortcuts are macOS only."""
        with patch("action_controller.dispatcher.is_macos", return_value=False):
            result = dispatcher.execute(RunShortcut("Morning"))
        assert result.error.code == ErrorCode.UNSUPPORTED_OPERATION

    def test_run_shortcut_on_macos(self, executor):
        """On macOS the shortcuts CLI is invoked with a quoted name."""
        sandbox = Mock(spec=ScriptSandbox)
        sandbox.validate.return_value = ScriptValidation(True)
        sandbox.run.return_value = ScriptResult()
        dispatcher = ActionDispatcher(executor=executor, sandbox=sandbox)
        with patch("action_controller.dispatcher.is_macos", return_value=True):
            assert dispatcher.execute(RunShortcut("Morning Routine")).is_success
        sandbox.run.assert_called_once_with("shortcuts run 'Morning Routine'", interpreter=Interpreter.SHELL)

    def test_tool_calls_not_implemented(self, dispatcher):
        """Tool calls and tool workflows are not implemented."""
        assert dispatcher.execute(ToolCall("srv", "tool")).error.code == ErrorCode.NOT_IMPLEMENTED
        assert dispatcher.execute(ToolWorkflow("srv", "wf")).error.code == ErrorCode.NOT_IMPLEMENTED

    def test_unexpected_exception_becomes_execution_failed(self, dispatcher, executor):
        """Handler exceptions never escape execute."""
        executor.press_keys.side_effect = OSError("display gone")
        result = dispatcher.execute(KeyboardShortcut("a"))
        assert result.error.code == ErrorCode.EXECUTION_FAILED
        assert "display gone" in result.error.reason

    def test_non_action_is_invalid_input(self, dispatcher):
        """Unknown objects are rejected as invalid input."""
        assert dispatcher.execute("not an action").error.code == ErrorCode.INVALID_INPUT


class TestWorkflows:
    """Test suite for workflow sequencing."""

    def test_abort_on_first_failure(self, dispatcher, executor):
        """[A, B(fails), C] never runs C and returns B's error."""
        failure = ExecutionError(ErrorCode.TARGET_NOT_FOUND, "no app")
        executor.launch_app.return_value = ActionResult(action="open_app", status="failed", error=failure)
        workflow = Workflow((
            KeyboardShortcut("a"),
            LaunchApplication("com.nope"),
            InsertText("never"),
        ))

        result = dispatcher.execute(workflow)

        assert result.error == failure
        assert result.details["failed_step"] == 1
        assert result.details["completed"] == 1
        executor.press_keys.assert_called_once()
        executor.insert_text.assert_not_called()

    def test_empty_workflow_succeeds(self, dispatcher):
        """An empty workflow is a success."""
        result = dispatcher.execute_workflow([])
        assert result.is_success
        assert result.details == {"completed": 0}

    def test_nested_failure_propagates(self, dispatcher, executor):
        """A failing inner workflow fails the outer one."""
        inner = Workflow((ToolCall("srv", "tool"),))
        outer = Workflow((KeyboardShortcut("a"), inner, KeyboardShortcut("b")))
        result = dispatcher.execute(outer)
        assert result.error.code == ErrorCode.NOT_IMPLEMENTED
        assert executor.press_keys.call_count == 1

    def test_all_steps_run_in_order(self, dispatcher, executor):
        """A successful workflow runs every step."""
        calls = []
        executor.press_keys.side_effect = lambda s: calls.append(s.key) or _ok("key_combo")
        dispatcher.execute_workflow([KeyboardShortcut("a"), KeyboardShortcut("b")])
        assert calls == ["a", "b"]
