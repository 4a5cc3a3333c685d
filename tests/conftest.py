"""Shared fixtures."""

import json

import pytest

from utils import settings_store


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Point the settings store at a temporary JSON file."""
    path = tmp_path / "app_settings.json"

    def _write(values: dict) -> None:
        path.write_text(json.dumps(values))
        settings_store.refresh_settings()

    monkeypatch.setenv("RING_SETTINGS_PATH", str(path))
    _write({})
    yield _write
    monkeypatch.delenv("RING_SETTINGS_PATH", raising=False)
    settings_store.refresh_settings()


class FakeTimer:
    def __init__(self, delay: float, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class FakeTimerFactory:
    """Collects timers instead of scheduling them; tests fire them by hand."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


@pytest.fixture
def timers():
    return FakeTimerFactory()
