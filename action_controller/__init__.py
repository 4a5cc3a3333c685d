"""Action execution: dispatcher, script sandbox, OS executors."""

from action_controller.controller import RingController
from action_controller.dispatcher import ActionDispatcher
from action_controller.executors.base import ActionResult, ErrorCode, ExecutionError
from action_controller.script_sandbox import (
    Interpreter,
    ScriptExecution,
    ScriptResult,
    ScriptSandbox,
    ScriptValidation,
)

__all__ = [
    "ActionDispatcher",
    "ActionResult",
    "ErrorCode",
    "ExecutionError",
    "Interpreter",
    "RingController",
    "ScriptExecution",
    "ScriptResult",
    "ScriptSandbox",
    "ScriptValidation",
]
