"""Validated, timeout-bounded execution of shell scripts and AppleScript.

Validation is a deny-list of obviously destructive commands. It is a first
line of defense, not an isolation boundary: anything not on the list runs
with the caller's privileges.

Each run owns its process, pipes and timers. The child is started in its
own session so a timeout can take down the whole process group, including
grandchildren that would otherwise keep the pipes open.
"""

from __future__ import annotations

import os
import signal
import subprocess
import threading
import time
from concurrent.futures import Future
from contextlib import suppress
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Mapping

from utils.log_utils import tprint
from utils.settings_store import deep_log, get_float
from utils.system_utils import default_shell
from utils.threading_utils import run_async, start_timer

DEFAULT_TIMEOUT_SECS = 30.0
TIMEOUT_EXIT_CODE = -2
FAILURE_EXIT_CODE = -1
KILL_GRACE_SECS = 0.5

DANGEROUS_PATTERNS: tuple[str, ...] = (
    "rm -rf /",
    "rm -rf ~",
    "rm -rf /usr",
    "rm -rf /bin",
    "rm -rf /sbin",
    "rm -rf /etc",
    "rm -rf /var",
    "rm -rf /system",
    "dd if=/dev/zero",
    "dd if=/dev/random",
    "dd if=/dev/urandom",
    ":(){ :|:& };:",
    "mv / ~/.",
    "mv /home",
    "mkfs",
    "format c:",
    "del /q /s",
)


class Interpreter(str, Enum):
    SHELL = "shell"
    APPLESCRIPT = "applescript"


@dataclass
class ScriptValidation:
    is_valid: bool
    reason: str = ""


@dataclass
class ScriptResult:
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    timed_out: bool = False
    duration: float = 0.0

    @property
    def is_success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["is_success"] = self.is_success
        return payload


def validate_script(script: str) -> ScriptValidation:
    trimmed = (script or "").strip()
    if not trimmed:
        return ScriptValidation(False, "Script is empty")
    lowered = trimmed.lower()
    for pattern in DANGEROUS_PATTERNS:
        if pattern in lowered:
            return ScriptValidation(False, f"Script contains dangerous command: {pattern}")
    if "chmod" in lowered and "777" in lowered:
        return ScriptValidation(False, "Setting 777 permissions is not allowed")
    return ScriptValidation(True)


class ScriptExecution:
    """Handle for one running script.

    A reader thread (process exit) and a watchdog timer (timeout) race to
    resolve the same future; whichever gets there first decides the result.
    Exit of the interpreter itself wins the race, even when a background
    child still holds its output pipes open.
    """

    def __init__(self, proc: subprocess.Popen | None, *, timeout_secs: float, started: float) -> None:
        self._proc = proc
        self.timeout_secs = timeout_secs
        self._started = started
        self._outcome: Future[ScriptResult] = Future()
        self._resolve_lock = threading.Lock()
        self._watchdog: threading.Timer | None = None
        self._reader: threading.Thread | None = None
        if proc is not None:
            self._watchdog = start_timer(timeout_secs, self._on_timeout, name="ScriptWatchdog")
            self._reader = run_async(self._read_until_exit, name="ScriptReader")

    @classmethod
    def finished(cls, result: ScriptResult) -> "ScriptExecution":
        execution = cls(None, timeout_secs=0.0, started=time.monotonic())
        execution._resolve(result)
        return execution

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc is not None else None

    def wait(self) -> ScriptResult:
        result = self._outcome.result()
        if self._watchdog is not None:
            self._watchdog.cancel()
        if self._proc is not None and result.timed_out:
            self._reap()
        if self._reader is not None:
            self._reader.join(timeout=KILL_GRACE_SECS * 2)
        return result

    def cancel(self) -> None:
        """Terminate the script. Safe to call after it has already exited."""
        self._signal_group(signal.SIGTERM)
        start_timer(KILL_GRACE_SECS, lambda: self._signal_group(_KILL_SIGNAL), name="ScriptKill")

    def _elapsed(self) -> float:
        return time.monotonic() - self._started

    def _resolve(self, result: ScriptResult) -> bool:
        with self._resolve_lock:
            if self._outcome.done():
                return False
            self._outcome.set_result(result)
            return True

    def _read_until_exit(self) -> None:
        assert self._proc is not None
        proc = self._proc
        stdout: list[str] = []
        stderr: list[str] = []
        drains = [
            run_async(lambda: _drain(proc.stdout, stdout), name="ScriptStdout"),
            run_async(lambda: _drain(proc.stderr, stderr), name="ScriptStderr"),
        ]
        try:
            exit_code = proc.wait()
        except OSError as exc:
            self._resolve(
                ScriptResult(stderr=str(exc), exit_code=FAILURE_EXIT_CODE, duration=self._elapsed())
            )
            return
        if self._watchdog is not None:
            self._watchdog.cancel()
        self._finish_drains(drains)
        self._resolve(
            ScriptResult(
                stdout="".join(stdout),
                stderr="".join(stderr),
                exit_code=exit_code,
                duration=self._elapsed(),
            )
        )

    def _finish_drains(self, drains: list[threading.Thread]) -> None:
        """Wait briefly for EOF; leftover background children holding the pipes are killed."""
        deadline = time.monotonic() + KILL_GRACE_SECS
        for drain in drains:
            drain.join(timeout=max(0.0, deadline - time.monotonic()))
        if any(drain.is_alive() for drain in drains):
            deep_log(f"[DEEP][SANDBOX] pid={self.pid} exited with children holding its pipes")
            self._kill_leftovers()
            for drain in drains:
                drain.join(timeout=KILL_GRACE_SECS)

    def _on_timeout(self) -> None:
        timed_out = ScriptResult(
            stderr=f"Script execution timed out after {self.timeout_secs:g}s",
            exit_code=TIMEOUT_EXIT_CODE,
            timed_out=True,
            duration=self._elapsed(),
        )
        if self._resolve(timed_out):
            tprint(f"[SANDBOX][WARN] pid={self.pid} timed out after {self.timeout_secs:g}s")
            self._signal_group(signal.SIGTERM)

    def _reap(self) -> None:
        assert self._proc is not None
        try:
            self._proc.wait(timeout=KILL_GRACE_SECS)
        except subprocess.TimeoutExpired:
            self._signal_group(_KILL_SIGNAL)
            with suppress(subprocess.TimeoutExpired):
                self._proc.wait(timeout=KILL_GRACE_SECS)

    def _kill_leftovers(self) -> None:
        if self._proc is None or os.name != "posix":
            return
        with suppress(ProcessLookupError, PermissionError):
            os.killpg(self._proc.pid, _KILL_SIGNAL)

    def _signal_group(self, sig: int) -> None:
        proc = self._proc
        if proc is None or proc.returncode is not None:
            return
        if os.name == "posix":
            with suppress(ProcessLookupError, PermissionError):
                os.killpg(proc.pid, sig)
            return
        with suppress(OSError):
            if sig == signal.SIGTERM:
                proc.terminate()
            else:
                proc.kill()


_KILL_SIGNAL = getattr(signal, "SIGKILL", signal.SIGTERM)


def _drain(stream, sink: list[str]) -> None:
    if stream is None:
        return
    with stream:
        for chunk in iter(stream.readline, ""):
            sink.append(chunk)


class ScriptSandbox:
    """Run scripts through /bin/sh or osascript with a hard timeout."""

    def __init__(
        self,
        *,
        timeout_secs: float | None = None,
        working_dir: str | None = None,
        env: Mapping[str, str] | None = None,
        shell: str | None = None,
    ) -> None:
        self.timeout_secs = timeout_secs
        self.working_dir = working_dir
        self.env = dict(env or {})
        self.shell = shell or default_shell()

    def validate(self, script: str) -> ScriptValidation:
        return validate_script(script)

    def start(
        self,
        script: str,
        *,
        timeout: float | None = None,
        working_dir: str | None = None,
        env: Mapping[str, str] | None = None,
        interpreter: Interpreter = Interpreter.SHELL,
    ) -> ScriptExecution:
        started = time.monotonic()
        validation = self.validate(script)
        if not validation.is_valid:
            tprint(f"[SANDBOX][WARN] Rejected script: {validation.reason}")
            return ScriptExecution.finished(
                ScriptResult(stderr=validation.reason, exit_code=FAILURE_EXIT_CODE)
            )

        timeout_secs = self._timeout(timeout)
        argv = self._argv(script.strip(), interpreter)
        merged_env = dict(os.environ)
        merged_env.update(self.env)
        merged_env.update(env or {})
        cwd = working_dir or self.working_dir
        deep_log(
            f"[DEEP][SANDBOX] spawn interpreter={interpreter.value} cwd={cwd} timeout={timeout_secs:g}s"
        )
        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=cwd,
                env=merged_env,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=os.name == "posix",
            )
        except OSError as exc:
            return ScriptExecution.finished(
                ScriptResult(
                    stderr=f"Failed to execute script: {exc}",
                    exit_code=FAILURE_EXIT_CODE,
                    duration=time.monotonic() - started,
                )
            )
        return ScriptExecution(proc, timeout_secs=timeout_secs, started=started)

    def run(
        self,
        script: str,
        *,
        timeout: float | None = None,
        working_dir: str | None = None,
        env: Mapping[str, str] | None = None,
        interpreter: Interpreter = Interpreter.SHELL,
    ) -> ScriptResult:
        execution = self.start(
            script,
            timeout=timeout,
            working_dir=working_dir,
            env=env,
            interpreter=interpreter,
        )
        return execution.wait()

    def run_batch(self, scripts: list[str], *, timeout: float | None = None) -> list[ScriptResult]:
        """Run scripts in order, stopping after the first unsuccessful one."""
        results: list[ScriptResult] = []
        for script in scripts:
            result = self.run(script, timeout=timeout)
            results.append(result)
            if not result.is_success:
                break
        return results

    def _timeout(self, timeout: float | None) -> float:
        if timeout is None:
            timeout = self.timeout_secs
        if timeout is None:
            timeout = get_float("script_timeout_secs", DEFAULT_TIMEOUT_SECS)
        if timeout <= 0:
            raise ValueError(f"timeout must be positive (got {timeout})")
        return float(timeout)

    def _argv(self, script: str, interpreter: Interpreter) -> list[str]:
        if interpreter == Interpreter.APPLESCRIPT:
            return ["osascript", "-e", script]
        return [self.shell, "-c", script]
