"""Debounce raw focus events into stable focus changes."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from utils.log_utils import log_error
from utils.settings_store import deep_log, get_float
from utils.threading_utils import start_timer

DEFAULT_DEBOUNCE_MS = 500.0


class CancellableTimer(Protocol):
    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], CancellableTimer]


def _thread_timer(delay_secs: float, callback: Callable[[], None]) -> threading.Timer:
    return start_timer(delay_secs, callback, name="FocusDebounce")


@dataclass
class _DebounceState:
    """Idle when pending_id is None, otherwise Pending(pending_id, timer)."""

    stable_id: str | None = None
    pending_id: str | None = None
    timer: CancellableTimer | None = None
    epoch: int = 0


class FocusDebouncer:
    """Last-write-wins debouncer over application identifiers.

    Every event restarts the window. Only a timer whose epoch is still the
    current one may commit, so a superseded timer never emits even when it
    has already woken up and is waiting for the lock.
    """

    def __init__(
        self,
        on_stable: Callable[[str], Any],
        *,
        window_secs: float | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        if window_secs is None:
            window_secs = get_float("debounce_ms", DEFAULT_DEBOUNCE_MS) / 1000.0
        self.window_secs = max(0.0, float(window_secs))
        self._on_stable = on_stable
        self._timer_factory = timer_factory or _thread_timer
        self._lock = threading.Lock()
        self._emit_lock = threading.Lock()
        self._state = _DebounceState()

    @property
    def stable_id(self) -> str | None:
        with self._lock:
            return self._state.stable_id

    @property
    def pending_id(self) -> str | None:
        with self._lock:
            return self._state.pending_id

    def is_pending(self) -> bool:
        with self._lock:
            return self._state.pending_id is not None

    def submit(self, bundle_id: str) -> bool:
        """Feed one raw focus event; return True if a debounce window started."""
        with self._lock:
            state = self._state
            if state.pending_id is None and bundle_id == state.stable_id:
                deep_log(f"[DEEP][DEBOUNCE] ignore re-focus id={bundle_id}")
                return False
            superseded = state.pending_id
            self._cancel_locked()
            state.epoch += 1
            epoch = state.epoch
            state.pending_id = bundle_id
            state.timer = self._timer_factory(self.window_secs, lambda: self._fire(epoch))
        if superseded is not None:
            deep_log(f"[DEEP][DEBOUNCE] superseded id={superseded} by id={bundle_id}")
        return True

    def cancel(self) -> None:
        """Drop any pending change without emitting it."""
        with self._lock:
            self._cancel_locked()

    def reset(self, stable_id: str | None) -> None:
        """Cancel pending work and force the stable identifier."""
        with self._lock:
            self._cancel_locked()
            self._state.stable_id = stable_id

    def _cancel_locked(self) -> None:
        state = self._state
        if state.timer is not None:
            state.timer.cancel()
        state.timer = None
        state.pending_id = None
        # Invalidate a timer that already fired but has not taken the lock yet.
        state.epoch += 1

    def _fire(self, epoch: int) -> None:
        with self._emit_lock:
            with self._lock:
                state = self._state
                if epoch != state.epoch or state.pending_id is None:
                    return
                candidate = state.pending_id
                state.pending_id = None
                state.timer = None
                state.stable_id = candidate
            deep_log(f"[DEEP][DEBOUNCE] stable id={candidate}")
            try:
                self._on_stable(candidate)
            except Exception as exc:
                log_error("DEBOUNCE", f"Stable-focus handler failed for {candidate}", exc)
