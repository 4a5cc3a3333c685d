"""Core controller: focus changes pick the profile, slot selections run actions."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from action_controller.dispatcher import ActionDispatcher
from action_controller.executors.base import ActionResult, ErrorCode, failed_result
from action_controller.logger import ActionLogger
from context_module.app_detector import FocusWatcher
from context_module.engine import ContextEngine, MonitoringToken, ProfileChangeCallback
from profile_module.actions import Action, describe_action
from profile_module.models import Profile
from profile_module.store import InMemoryProfileStore, ProfileStore


class RingController:
    def __init__(
        self,
        store: ProfileStore | None = None,
        *,
        engine: ContextEngine | None = None,
        dispatcher: ActionDispatcher | None = None,
        logger: ActionLogger | None = None,
        watcher_factory: Callable[[Callable[[str | None], object]], FocusWatcher] = FocusWatcher,
    ) -> None:
        self.store = store if store is not None else InMemoryProfileStore.with_builtins()
        self.engine = engine or ContextEngine(self.store)
        self.dispatcher = dispatcher or ActionDispatcher()
        self.logger = logger or ActionLogger("RING")
        self._watcher_factory = watcher_factory
        self._watcher: FocusWatcher | None = None

    def start(self, *, watch_focus: bool = True) -> None:
        self.logger.info("Ring controller ready")
        if watch_focus and self._watcher is None:
            self._watcher = self._watcher_factory(self.handle_focus_change)
            self._watcher.start()

    def stop(self) -> None:
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None
        self.engine.stop()

    def is_watching(self) -> bool:
        return bool(self._watcher and self._watcher.is_running())

    def handle_focus_change(self, bundle_id: str | None) -> Profile | None:
        return self.engine.handle_focus_change(bundle_id)

    def current_profile(self) -> Profile | None:
        return self.engine.current_profile

    def subscribe(self, callback: ProfileChangeCallback) -> MonitoringToken:
        return self.engine.subscribe(callback)

    def unsubscribe(self, token: MonitoringToken) -> None:
        self.engine.unsubscribe(token)

    def select_slot(self, position: int) -> ActionResult:
        """Run the action bound to a slot of the current profile."""
        start = time.monotonic()
        profile = self.current_profile()
        if profile is None:
            return failed_result("select_slot", ErrorCode.TARGET_NOT_FOUND, "No active profile", start)
        slot = profile.slot_at(position)
        if slot is None or slot.action is None:
            return failed_result(
                "select_slot",
                ErrorCode.TARGET_NOT_FOUND,
                f"Profile '{profile.name}' has no action at position {position}",
                start,
            )
        if not slot.enabled:
            return failed_result(
                "select_slot",
                ErrorCode.UNSUPPORTED_OPERATION,
                f"Slot '{slot.label}' is disabled",
                start,
            )
        self.logger.info(f"{profile.name} slot {position}: {slot.label} ({describe_action(slot.action)})")
        result = self.dispatcher.execute(slot.action)
        if result.details is None:
            result.details = {}
        result.details.update(profile=profile.name, position=position, label=slot.label)
        return result

    def execute_action(self, action: Action) -> ActionResult:
        return self.dispatcher.execute(action)

    def status(self) -> dict[str, Any]:
        profile = self.current_profile()
        return {
            "bundle_id": self.engine.current_bundle_id,
            "profile": profile.name if profile else None,
            "watching_focus": self.is_watching(),
            "subscribers": self.engine.subscriber_count(),
            "profiles": len(self.store) if hasattr(self.store, "__len__") else None,
        }
