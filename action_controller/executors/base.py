"""Executor interfaces, typed errors and result payloads."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from profile_module.actions import KeyboardShortcut, SystemAction


class ErrorCode(str, Enum):
    NOT_IMPLEMENTED = "not_implemented"
    TARGET_NOT_FOUND = "target_not_found"
    INVALID_INPUT = "invalid_input"
    EXECUTION_FAILED = "execution_failed"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    VALIDATION_FAILED = "validation_failed"
    TIMED_OUT = "timed_out"


# Codes that mean "this executor cannot do it", as opposed to "it was tried and failed".
FALLBACK_CODES = frozenset({ErrorCode.NOT_IMPLEMENTED, ErrorCode.UNSUPPORTED_OPERATION})


class ExecutionError(RuntimeError):
    def __init__(self, code: ErrorCode, reason: str = "") -> None:
        self.code = code
        self.reason = reason
        super().__init__(f"{code.value}: {reason}" if reason else code.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExecutionError):
            return NotImplemented
        return self.code == other.code and self.reason == other.reason

    def __hash__(self) -> int:
        return hash((self.code, self.reason))

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "reason": self.reason}


@dataclass
class ActionResult:
    action: str
    status: str
    error: ExecutionError | None = None
    details: dict[str, Any] | None = None
    elapsed_ms: int | None = None

    @property
    def is_success(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"action": self.action, "status": self.status}
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        if self.details is not None:
            payload["details"] = self.details
        if self.elapsed_ms is not None:
            payload["elapsed_ms"] = self.elapsed_ms
        return payload


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def ok_result(action: str, start: float, details: dict[str, Any] | None = None) -> ActionResult:
    return ActionResult(action=action, status="ok", details=details, elapsed_ms=_elapsed_ms(start))


def failed_result(
    action: str,
    code: ErrorCode,
    reason: str,
    start: float,
    details: dict[str, Any] | None = None,
) -> ActionResult:
    return ActionResult(
        action=action,
        status="failed",
        error=ExecutionError(code, reason),
        details=details,
        elapsed_ms=_elapsed_ms(start),
    )


class BaseExecutor:
    """OS-level primitives used by the dispatcher.

    Every method returns an ActionResult. The defaults report
    unsupported_operation so a router can fall through to another executor.
    """

    name = "base"

    def press_keys(self, shortcut: KeyboardShortcut) -> ActionResult:
        return self._unsupported("key_combo", "press_keys")

    def launch_app(self, bundle_id: str) -> ActionResult:
        return self._unsupported("open_app", "launch_app")

    def open_url(self, url: str) -> ActionResult:
        return self._unsupported("open_url", "open_url")

    def open_path(self, path: str) -> ActionResult:
        return self._unsupported("open_path", "open_path")

    def insert_text(self, text: str, *, mode: str = "type") -> ActionResult:
        return self._unsupported("type_text", "insert_text")

    def system_action(self, action: SystemAction) -> ActionResult:
        return self._unsupported("system_action", action.value)

    def _unsupported(self, action: str, operation: str) -> ActionResult:
        return failed_result(
            action,
            ErrorCode.UNSUPPORTED_OPERATION,
            f"{operation} not supported by {self.name} executor",
            time.monotonic(),
        )
