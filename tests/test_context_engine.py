"""Tests for ContextEngine (debounced switching, subscribers, no-app path)."""

from unittest.mock import Mock

from context_module.engine import ContextEngine
from profile_module.models import AppCategory, Profile
from profile_module.store import InMemoryProfileStore


def _engine(timers, *profiles):
    store = InMemoryProfileStore(profiles)
    return ContextEngine(store, debounce_secs=0.5, timer_factory=timers)


class TestContextEngine:
    """Test suite for ContextEngine."""

    def test_stable_focus_resolves_and_notifies(self, timers):
        """After the window the profile is committed and pushed."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode", category=AppCategory.IDE)
        engine = _engine(timers, code, Profile.create_default())
        observer = Mock()
        engine.subscribe(observer)

        assert engine.handle_focus_change("com.microsoft.VSCode") is None
        observer.assert_not_called()
        timers.last.fire()

        observer.assert_called_once_with(code)
        assert engine.current_profile is code
        assert engine.current_bundle_id == "com.microsoft.VSCode"

    def test_burst_notifies_once(self, timers):
        """Only the final app of a burst is resolved."""
        safari = Profile(name="Safari", bundle_id="com.apple.Safari")
        engine = _engine(timers, safari, Profile.create_default())
        observer = Mock()
        engine.subscribe(observer)

        engine.handle_focus_change("com.apple.finder")
        engine.handle_focus_change("com.apple.Terminal")
        engine.handle_focus_change("com.apple.Safari")
        timers.last.fire()

        observer.assert_called_once_with(safari)

    def test_empty_id_is_immediate(self, timers):
        """A missing app resolves the default with no debounce."""
        default = Profile.create_default()
        engine = _engine(timers, default)
        observer = Mock()
        engine.subscribe(observer)

        assert engine.handle_focus_change(None) is default
        assert timers.timers == []
        observer.assert_called_once_with(default)
        assert engine.current_bundle_id == ""

    def test_empty_id_cancels_pending_change(self, timers):
        """A no-app event discards an in-flight switch."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        default = Profile.create_default()
        engine = _engine(timers, code, default)

        engine.handle_focus_change("com.microsoft.VSCode")
        pending = timers.last
        engine.handle_focus_change("")
        pending.fire()

        assert engine.current_profile is default

    def test_repeat_delivery_is_idempotent(self, timers):
        """Re-delivering the current app does not notify again."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        engine = _engine(timers, code)
        observer = Mock()
        engine.subscribe(observer)

        engine.handle_focus_change("com.microsoft.VSCode")
        timers.last.fire()
        engine.handle_focus_change("com.microsoft.VSCode")

        assert len(timers.timers) == 1
        assert observer.call_count == 1

    def test_two_subscribers_and_unsubscribe(self, timers):
        """Both observers see a change; an unsubscribed one stops receiving."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        safari = Profile(name="Safari", bundle_id="com.apple.Safari")
        engine = _engine(timers, code, safari)
        first, second = Mock(), Mock()
        token = engine.subscribe(first)
        engine.subscribe(second)
        assert engine.subscriber_count() == 2

        engine.handle_focus_change("com.microsoft.VSCode")
        timers.last.fire()
        engine.unsubscribe(token)
        engine.handle_focus_change("com.apple.Safari")
        timers.last.fire()

        assert first.call_count == 1
        assert [c.args[0] for c in second.call_args_list] == [code, safari]

    def test_unsubscribe_unknown_token_is_noop(self, timers):
        """Unknown tokens are ignored."""
        import uuid

        engine = _engine(timers)
        engine.unsubscribe(uuid.uuid4())
        assert engine.subscriber_count() == 0

    def test_observer_error_does_not_block_others(self, timers):
        """A raising observer is logged and the next one still runs."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        engine = _engine(timers, code)
        engine.subscribe(Mock(side_effect=RuntimeError("boom")))
        healthy = Mock()
        engine.subscribe(healthy)

        engine.handle_focus_change("com.microsoft.VSCode")
        timers.last.fire()
        healthy.assert_called_once_with(code)

    def test_miss_commits_without_notifying(self, timers):
        """No matching profile: current becomes None and nobody is told."""
        engine = _engine(timers)
        observer = Mock()
        engine.subscribe(observer)

        engine.handle_focus_change("com.unknown.app")
        timers.last.fire()

        observer.assert_not_called()
        assert engine.current_profile is None
        assert engine.current_bundle_id == "com.unknown.app"

    def test_return_after_no_app_switches_back(self, timers):
        """Leaving to no-app and coming back re-resolves the app."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        default = Profile.create_default()
        engine = _engine(timers, code, default)

        engine.handle_focus_change("com.microsoft.VSCode")
        timers.last.fire()
        engine.handle_focus_change(None)
        engine.handle_focus_change("com.microsoft.VSCode")
        timers.last.fire()

        assert engine.current_profile is code

    def test_category_for(self, timers):
        """category_for delegates to the classifier."""
        engine = _engine(timers)
        assert engine.category_for("com.google.Chrome") == AppCategory.BROWSER

    def test_stop_cancels_pending(self, timers):
        """stop() prevents a pending change from landing."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        engine = _engine(timers, code)
        engine.handle_focus_change("com.microsoft.VSCode")
        pending = timers.last
        engine.stop()
        pending.fire()
        assert engine.current_profile is None

    def test_profile_for_does_not_commit(self, timers):
        """profile_for resolves without touching current state."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        engine = _engine(timers, code)
        assert engine.profile_for("com.microsoft.VSCode") is code
        assert engine.current_profile is None

    def test_alt_tab_back_within_window_does_not_notify(self, timers):
        """A -> B -> A before the window closes leaves A active with no new notification."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        safari = Profile(name="Safari", bundle_id="com.apple.Safari")
        engine = _engine(timers, code, safari)
        observer = Mock()
        engine.subscribe(observer)

        engine.handle_focus_change("com.microsoft.VSCode")
        timers.last.fire()
        engine.handle_focus_change("com.apple.Safari")
        engine.handle_focus_change("com.microsoft.VSCode")
        timers.last.fire()

        observer.assert_called_once_with(code)
        assert engine.current_profile is code
