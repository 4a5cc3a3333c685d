"""Tests for profile records, the in-memory store and the presets."""

import pytest

from profile_module import builtin_profiles
from profile_module.actions import (
    InsertText,
    KeyboardShortcut,
    KeyModifier,
    OpenPath,
    SpecialKey,
    ToolCall,
    Workflow,
    action_name,
    describe_action,
)
from profile_module.models import AppCategory, Profile, Slot
from profile_module.store import InMemoryProfileStore


class TestProfile:
    """Test suite for Profile and Slot."""

    def test_invalid_slot_count_rejected(self):
        """Only 4, 6 and 8 slots are allowed."""
        with pytest.raises(ValueError, match="slot_count"):
            Profile(name="Bad", slot_count=5)

    def test_add_slot_replaces_same_position(self):
        """Positions stay unique."""
        profile = Profile(name="P", slot_count=4)
        profile.add_slot(Slot(0, "First"))
        profile.add_slot(Slot(0, "Second"))
        assert len(profile.slots) == 1
        assert profile.slot_at(0).label == "Second"
        assert profile.is_valid

    def test_add_slot_outside_ring_rejected(self):
        """A slot past slot_count is refused."""
        profile = Profile(name="P", slot_count=4)
        with pytest.raises(ValueError, match="outside 0..3"):
            profile.add_slot(Slot(4, "Too far"))

    def test_remove_and_update_slot(self):
        """remove_slot drops a position; update_slot ignores unknown ones."""
        profile = Profile(name="P", slot_count=4)
        profile.add_slot(Slot(1, "One"))
        profile.update_slot(1, Slot(1, "Uno"))
        profile.update_slot(3, Slot(3, "Ignored"))
        assert [s.label for s in profile.slots] == ["Uno"]
        profile.remove_slot(1)
        assert profile.slot_at(1) is None

    def test_constructor_rejects_slots_over_capacity(self):
        """A four slot ring cannot be built with eight slots."""
        with pytest.raises(ValueError, match="exceed capacity 4"):
            Profile(name="x", slot_count=4, slots=[Slot(i, f"S{i}") for i in range(8)])

    def test_constructor_rejects_duplicate_positions(self):
        """Two slots at one position are refused up front."""
        with pytest.raises(ValueError, match="duplicate"):
            Profile(name="x", slot_count=4, slots=[Slot(1, "a"), Slot(1, "b")])

    def test_constructor_rejects_position_outside_ring(self):
        """Position 5 does not exist on a four slot ring."""
        with pytest.raises(ValueError, match="outside 0..3"):
            Profile(name="x", slot_count=4, slots=[Slot(5, "far")])

    def test_update_slot_rejects_mismatched_position(self):
        """update_slot cannot move a slot onto another position."""
        profile = Profile(name="P", slot_count=4, slots=[Slot(0, "Zero"), Slot(1, "One")])
        with pytest.raises(ValueError, match="does not match"):
            profile.update_slot(0, Slot(1, "dup"))
        assert sorted(s.position for s in profile.slots) == [0, 1]
        assert profile.slot_at(0).label == "Zero"
        assert profile.is_valid

    def test_default_profile(self):
        """create_default builds an eight slot default ring."""
        profile = Profile.create_default()
        assert profile.is_default
        assert profile.bundle_id is None
        assert len(profile.slots) == 8
        assert profile.slot_at(0).action == KeyboardShortcut("c", (KeyModifier.COMMAND,))

    def test_slot_validity(self):
        """Slot positions are 0..7."""
        assert Slot(7, "Last").is_valid
        assert not Slot(8, "Past").is_valid
        assert not Slot(0, "Empty").has_action


class TestInMemoryProfileStore:
    """Test suite for the in-memory store."""

    def test_lookup_by_identifier(self):
        """by_identifier matches bundle ids exactly."""
        code = Profile(name="Code", bundle_id="com.microsoft.VSCode")
        store = InMemoryProfileStore([code])
        assert store.by_identifier("com.microsoft.VSCode") is code
        assert store.by_identifier("com.microsoft.vscode") is None
        assert store.by_identifier("") is None

    def test_lookup_by_category_skips_app_profiles(self):
        """Category lookups only consider profiles without a bundle id."""
        app = Profile(name="Code", bundle_id="com.microsoft.VSCode", category=AppCategory.IDE)
        ide = Profile(name="IDE", category=AppCategory.IDE)
        store = InMemoryProfileStore([app, ide])
        assert store.by_category(AppCategory.IDE) is ide
        assert store.by_category(AppCategory.MEDIA) is None

    def test_single_default(self):
        """A second default profile is refused."""
        store = InMemoryProfileStore([Profile.create_default()])
        with pytest.raises(ValueError, match="Default profile already set"):
            store.add(Profile.create_default())

    def test_remove_and_len(self):
        """remove returns the profile and shrinks the store."""
        profile = Profile(name="P")
        store = InMemoryProfileStore([profile])
        assert len(store) == 1
        assert store.remove(profile.id) is profile
        assert len(store) == 0
        assert store.remove(profile.id) is None

    def test_with_builtins(self):
        """The builtin store resolves presets and has a default."""
        store = InMemoryProfileStore.with_builtins()
        assert store.by_identifier("com.apple.Safari").name == "Safari"
        assert store.default().name == "System"


class TestBuiltinProfiles:
    """Test suite for preset data."""

    def test_all_presets_are_valid(self):
        """Every preset is a valid builtin profile."""
        profiles = builtin_profiles.all_profiles()
        assert len(profiles) == 10
        for profile in profiles:
            assert profile.is_valid, profile.name
            assert all(slot.action is not None for slot in profile.slots)

    def test_exactly_one_default(self):
        """Only the System preset is the default."""
        defaults = [p for p in builtin_profiles.all_profiles() if p.is_default]
        assert [p.name for p in defaults] == ["System"]

    def test_presets_are_fresh_copies(self):
        """Each call returns new objects."""
        assert builtin_profiles.vs_code() is not builtin_profiles.vs_code()
        assert builtin_profiles.vs_code().id != builtin_profiles.vs_code().id


class TestActions:
    """Test suite for action helpers."""

    def test_describe_keyboard_shortcut(self):
        """Shortcuts render modifiers then key."""
        action = KeyboardShortcut("p", (KeyModifier.COMMAND, KeyModifier.SHIFT))
        assert describe_action(action) == "Command+Shift+P"
        assert describe_action(KeyboardShortcut(SpecialKey.ENTER.value)) == "Enter"

    def test_describe_other_variants(self):
        """Descriptions for text, paths, workflows and tool calls."""
        assert describe_action(InsertText("hello world, this is long")) == "Insert: hello world, this is..."
        assert describe_action(OpenPath("/tmp/notes.txt")) == "Open notes.txt"
        assert describe_action(Workflow((InsertText("a"), InsertText("b")))) == "Workflow (2 actions)"
        assert describe_action(ToolCall("srv", "search", display_name="Search")) == "MCP: Search"

    def test_special_key_property(self):
        """special_key is set only for named keys."""
        assert KeyboardShortcut("f5").special_key == SpecialKey.F5
        assert KeyboardShortcut("a").special_key is None

    def test_action_names(self):
        """Variant names are stable snake_case strings."""
        assert action_name(InsertText("x")) == "type_text"
        assert action_name(Workflow()) == "workflow"
