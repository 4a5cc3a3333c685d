"""Helpers for running modules concurrently."""

import threading
from collections.abc import Callable


def run_async(target: Callable, *, name: str | None = None, daemon: bool = True) -> threading.Thread:
    thread = threading.Thread(target=target, name=name, daemon=daemon)
    thread.start()
    return thread


def start_timer(delay_secs: float, callback: Callable[[], None], *, name: str | None = None) -> threading.Timer:
    """Start a daemon timer that calls back once after delay_secs."""
    timer = threading.Timer(max(0.0, delay_secs), callback)
    timer.daemon = True
    if name:
        timer.name = name
    timer.start()
    return timer
