"""Tests for the exact -> category -> default lookup chain."""

from context_module.profile_resolver import ProfileResolver, resolve
from profile_module.models import AppCategory, Profile
from profile_module.store import InMemoryProfileStore


def _store(*profiles: Profile) -> InMemoryProfileStore:
    return InMemoryProfileStore(profiles)


class TestProfileResolver:
    """Test suite for ProfileResolver."""

    def test_exact_match_wins(self):
        """An app profile wins over category and default profiles."""
        app = Profile(name="Code", bundle_id="com.microsoft.VSCode", category=AppCategory.IDE)
        ide = Profile(name="IDE", category=AppCategory.IDE)
        store = _store(app, ide, Profile.create_default())
        assert resolve("com.microsoft.VSCode", store) is app

    def test_category_match(self):
        """Unknown app in a known category gets the category profile."""
        ide = Profile(name="IDE", category=AppCategory.IDE)
        store = _store(ide, Profile.create_default())
        assert resolve("com.jetbrains.pycharm", store) is ide

    def test_category_profile_owned_by_app_is_skipped(self):
        """A profile bound to another app is never used as a category profile."""
        app = Profile(name="Code", bundle_id="com.microsoft.VSCode", category=AppCategory.IDE)
        default = Profile.create_default()
        store = _store(app, default)
        assert resolve("com.jetbrains.pycharm", store) is default

    def test_falls_back_to_default(self):
        """No exact or category profile: default."""
        default = Profile.create_default()
        store = _store(default)
        assert resolve("com.unknown.app", store) is default

    def test_empty_id_uses_default(self):
        """Empty identifiers resolve straight to the default."""
        default = Profile.create_default()
        store = _store(Profile(name="Other", category=AppCategory.OTHER), default)
        assert resolve("", store) is default
        assert resolve(None, store) is default

    def test_miss_returns_none(self):
        """Empty store and no default: None."""
        assert ProfileResolver().resolve("com.unknown.app", _store()) is None

    def test_default_is_not_a_category_profile(self):
        """The default profile is only reached through the last step."""
        default = Profile.create_default()
        other = Profile(name="Misc", category=AppCategory.OTHER)
        store = _store(default, other)
        assert resolve("com.unknown.app", store) is other
