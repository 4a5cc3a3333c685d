"""App-aware profile switching: focus events in, profile changes out."""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from context_module.focus_debouncer import FocusDebouncer, TimerFactory
from context_module.profile_resolver import ProfileResolver
from profile_module.models import AppCategory, Profile
from profile_module.store import ProfileStore
from utils.log_utils import log_error, tprint
from utils.settings_store import deep_log

ProfileChangeCallback = Callable[[Profile], object]
MonitoringToken = uuid.UUID


@dataclass
class _EngineState:
    current_bundle_id: str | None = None
    current_profile: Profile | None = None
    observers: dict[MonitoringToken, ProfileChangeCallback] = field(default_factory=dict)


class ContextEngine:
    """Resolve the focused app to a profile and notify subscribers on change.

    Raw focus events go through a FocusDebouncer; only stabilized changes are
    resolved. A missing or empty identifier skips the debounce window and
    resolves the default profile right away.
    """

    def __init__(
        self,
        store: ProfileStore,
        *,
        resolver: ProfileResolver | None = None,
        debounce_secs: float | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.store = store
        self.resolver = resolver or ProfileResolver()
        self._lock = threading.Lock()
        # Serializes commit + fan-out so notifications follow commit order.
        self._transition_lock = threading.RLock()
        self._state = _EngineState()
        self._debouncer = FocusDebouncer(
            self._on_stable_focus,
            window_secs=debounce_secs,
            timer_factory=timer_factory,
        )

    @property
    def debounce_secs(self) -> float:
        return self._debouncer.window_secs

    @property
    def current_bundle_id(self) -> str | None:
        with self._lock:
            return self._state.current_bundle_id

    @property
    def current_profile(self) -> Profile | None:
        with self._lock:
            return self._state.current_profile

    def category_for(self, bundle_id: str) -> AppCategory:
        return self.resolver.classifier.classify(bundle_id)

    def profile_for(self, bundle_id: str | None) -> Profile | None:
        """Resolve without committing or notifying."""
        return self.resolver.resolve(bundle_id, self.store)

    def handle_focus_change(self, bundle_id: str | None) -> Profile | None:
        """Feed one raw focus event.

        Returns the default profile for the no-app case; otherwise returns
        None and the profile arrives later through subscribers.
        """
        if bundle_id:
            self._debouncer.submit(bundle_id)
            return None

        with self._transition_lock:
            self._debouncer.reset("")
            profile = self.resolver.resolve("", self.store)
            with self._lock:
                previous = self._state.current_profile
                changed = (
                    self._state.current_bundle_id != ""
                    or previous is None
                    or profile is None
                    or previous.id != profile.id
                )
                self._state.current_bundle_id = ""
                self._state.current_profile = profile
            if profile is not None and changed:
                self._notify(profile)
        return profile

    def subscribe(self, callback: ProfileChangeCallback) -> MonitoringToken:
        token = uuid.uuid4()
        with self._lock:
            self._state.observers[token] = callback
        return token

    def unsubscribe(self, token: MonitoringToken) -> None:
        with self._lock:
            self._state.observers.pop(token, None)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._state.observers)

    def stop(self) -> None:
        """Cancel any pending debounce so no further change is emitted."""
        self._debouncer.cancel()

    def _on_stable_focus(self, bundle_id: str) -> None:
        with self._transition_lock:
            if self._debouncer.stable_id != bundle_id:
                # A no-app event reset the context after this change stabilized.
                return
            with self._lock:
                if bundle_id == self._state.current_bundle_id:
                    return
            profile = self.resolver.resolve(bundle_id, self.store)
            with self._lock:
                self._state.current_bundle_id = bundle_id
                self._state.current_profile = profile
            if profile is None:
                deep_log(f"[DEEP][ENGINE] no profile resolved for id={bundle_id}")
                return
            tprint(f"[ENGINE] {bundle_id} -> {profile.name}")
            self._notify(profile)

    def _notify(self, profile: Profile) -> None:
        with self._lock:
            callbacks = list(self._state.observers.values())
        for callback in callbacks:
            try:
                callback(profile)
            except Exception as exc:
                log_error("ENGINE", f"Profile observer failed for {profile.name}", exc)
