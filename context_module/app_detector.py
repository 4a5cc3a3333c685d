"""Detect the frontmost application and poll for focus changes."""

from __future__ import annotations

import subprocess
import threading
from collections.abc import Callable

from utils.log_utils import tprint
from utils.settings_store import deep_log, get_float
from utils.system_utils import is_macos

_FRONTMOST_SCRIPT = (
    'tell application "System Events" to get bundle identifier of '
    "first application process whose frontmost is true"
)


def focused_app_bundle_id() -> str | None:
    """Return the frontmost app's bundle identifier, or None if unavailable."""
    if not is_macos():
        return None
    return _run_osascript(_FRONTMOST_SCRIPT)


def _run_osascript(script: str) -> str | None:
    try:
        proc = subprocess.run(
            ["osascript", "-e", script],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            timeout=2,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if proc.returncode != 0:
        return None
    output = proc.stdout.decode("utf-8", errors="ignore").strip()
    if not output or output == "missing value":
        return ""
    return output


class FocusWatcher:
    """Poll the focus source and forward raw changes to a handler.

    Only changes in the raw identifier are forwarded; debouncing is the
    receiver's job.
    """

    def __init__(
        self,
        on_focus: Callable[[str | None], object],
        *,
        probe: Callable[[], str | None] = focused_app_bundle_id,
        interval_secs: float | None = None,
    ) -> None:
        self._on_focus = on_focus
        self._probe = probe
        self.interval_secs = (
            interval_secs
            if interval_secs is not None
            else get_float("focus_poll_interval_secs", 0.25)
        )
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_seen: str | None = None
        self._has_reading = False

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            tprint("[FOCUS] Watcher already running")
            return
        self._stop.clear()

        def _runner() -> None:
            try:
                self._run_loop()
            except Exception as exc:  # pragma: no cover
                tprint(f"[FOCUS][ERROR] Watcher error: {exc}")

        self._thread = threading.Thread(target=_runner, name="FocusWatcher", daemon=True)
        self._thread.start()
        tprint(f"[FOCUS] Watching frontmost app every {self.interval_secs:.2f}s")

    def poll_once(self) -> bool:
        """Probe once; return True when a change was forwarded."""
        current = self._probe()
        if self._has_reading and current == self._last_seen:
            return False
        self._has_reading = True
        self._last_seen = current
        deep_log(f"[DEEP][FOCUS] raw focus id={current!r}")
        self._on_focus(current)
        return True

    def _run_loop(self) -> None:
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self.interval_secs)

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=2)
            self._thread = None

    def is_running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())
