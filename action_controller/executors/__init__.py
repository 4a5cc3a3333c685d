from action_controller.executors.base import (
    ActionResult,
    BaseExecutor,
    ErrorCode,
    ExecutionError,
)
from action_controller.executors.router import OSRouter

__all__ = ["ActionResult", "BaseExecutor", "ErrorCode", "ExecutionError", "OSRouter"]
