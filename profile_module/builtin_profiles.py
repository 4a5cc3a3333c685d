"""Preset profiles for common macOS applications."""

from __future__ import annotations

from profile_module.actions import KeyboardShortcut, KeyModifier, SpecialKey
from profile_module.models import AppCategory, Profile, ProfileSource, Slot

CMD = KeyModifier.COMMAND
SHIFT = KeyModifier.SHIFT
OPT = KeyModifier.OPTION
CTRL = KeyModifier.CONTROL


def _keys(key: str | SpecialKey, *modifiers: KeyModifier) -> KeyboardShortcut:
    value = key.value if isinstance(key, SpecialKey) else key
    return KeyboardShortcut(value, tuple(modifiers))


def _preset(
    name: str,
    bundle_id: str | None,
    category: AppCategory,
    entries: list[tuple[str, str, KeyboardShortcut]],
    *,
    is_default: bool = False,
) -> Profile:
    slots = [
        Slot(position=index, label=label, icon=icon, action=action)
        for index, (label, icon, action) in enumerate(entries)
    ]
    return Profile(
        name=name,
        bundle_id=bundle_id,
        category=category,
        slots=slots,
        slot_count=8,
        is_default=is_default,
        source=ProfileSource.BUILTIN,
    )


def vs_code() -> Profile:
    return _preset("VS Code", "com.microsoft.VSCode", AppCategory.IDE, [
        ("Command Palette", "text.magnifyingglass", _keys("p", CMD, SHIFT)),
        ("Find in Files", "magnifyingglass", _keys("f", CMD, SHIFT)),
        ("New File", "doc.badge.plus", _keys("n", CMD)),
        ("Close Editor", "xmark.circle", _keys("w", CMD)),
        ("Toggle Terminal", "chevron.left.forwardslash.chevron.right", _keys("`", CMD)),
        ("Format", "text.alignleft", _keys("s", CMD, SHIFT)),
        ("Go to Line", "number", _keys("g", CMD)),
        ("Quick Open", "folder", _keys("p", CMD)),
    ])


def xcode() -> Profile:
    return _preset("Xcode", "com.apple.dt.Xcode", AppCategory.IDE, [
        ("Build", "hammer", _keys("b", CMD)),
        ("Run", "play.fill", _keys("r", CMD)),
        ("Stop", "stop.fill", _keys(".", CMD)),
        ("Clean", "sparkles", _keys("k", CMD, SHIFT)),
        ("Test", "checkmark.circle.fill", _keys("u", CMD)),
        ("Find", "magnifyingglass", _keys("f", CMD)),
        ("Open Quickly", "folder.badge.gearshape", _keys("o", CMD, SHIFT)),
        ("Assistant", "info.circle", _keys("a", CMD, SHIFT, OPT)),
    ])


def safari() -> Profile:
    return _preset("Safari", "com.apple.Safari", AppCategory.BROWSER, [
        ("Address Bar", "location.fill", _keys("l", CMD)),
        ("New Tab", "plus.rectangle.fill", _keys("t", CMD)),
        ("Close Tab", "xmark.rectangle.fill", _keys("w", CMD)),
        ("Find", "magnifyingglass", _keys("f", CMD)),
        ("Back", "chevron.left", _keys("[", CMD)),
        ("Forward", "chevron.right", _keys("]", CMD)),
        ("Refresh", "arrow.clockwise", _keys("r", CMD)),
        ("Private", "safari", _keys("n", CMD, SHIFT)),
    ])


def finder() -> Profile:
    return _preset("Finder", "com.apple.finder", AppCategory.OTHER, [
        ("New Window", "plus.square.fill", _keys("n", CMD)),
        ("New Folder", "folder.badge.plus", _keys("n", CMD, SHIFT)),
        ("Get Info", "info.circle", _keys("i", CMD)),
        ("Quick Look", "eye.fill", _keys(SpecialKey.SPACE)),
        ("Trash", "trash.fill", _keys(SpecialKey.DELETE, CMD)),
        ("Duplicate", "doc.on.doc", _keys("d", CMD)),
        ("Search", "magnifyingglass", _keys("f", CMD)),
        ("Go to Folder", "folder", _keys("g", CMD, SHIFT)),
    ])


def terminal() -> Profile:
    return _preset("Terminal", "com.apple.Terminal", AppCategory.TERMINAL, [
        ("New Tab", "plus.rectangle.fill", _keys("t", CMD)),
        ("New Window", "plus.square.fill", _keys("n", CMD)),
        ("Close Tab", "xmark.rectangle.fill", _keys("w", CMD)),
        ("Clear", "clear", _keys("k", CMD)),
        ("Select All", "square.and.pencil", _keys("a", CMD)),
        ("Copy", "doc.on.doc", _keys("c", CMD)),
        ("Paste", "doc.on.clipboard", _keys("v", CMD)),
        ("Previous Tab", "chevron.left", _keys("[", CMD, SHIFT)),
    ])


def notes() -> Profile:
    return _preset("Notes", "com.apple.Notes", AppCategory.PRODUCTIVITY, [
        ("New Note", "note.text.badge.plus", _keys("n", CMD)),
        ("Folder 1", "folder.fill", _keys("1", CMD)),
        ("Folder 2", "folder.fill", _keys("2", CMD)),
        ("Folder 3", "folder.fill", _keys("3", CMD)),
        ("Search", "magnifyingglass", _keys("f", CMD)),
        ("Share", "square.and.arrow.up", _keys("s", CMD, SHIFT)),
        ("Bold", "bold", _keys("b", CMD)),
        ("Italic", "italic", _keys("i", CMD)),
    ])


def messages() -> Profile:
    return _preset("Messages", "com.apple.MobileSMS", AppCategory.COMMUNICATION, [
        ("New Message", "square.and.pencil", _keys("n", CMD)),
        ("Send", "arrow.up.circle.fill", _keys(SpecialKey.ENTER)),
        ("Attach", "paperclip", _keys("f", CMD)),
        ("Emoji", "face.smiling", _keys("e", CMD, SHIFT)),
        ("Search", "magnifyingglass", _keys("f", CMD, OPT)),
        ("Delete Chat", "trash", _keys(SpecialKey.DELETE, CMD)),
        ("Details", "info.circle", _keys("i", CMD)),
        ("Next", "chevron.right", _keys("]", CMD, SHIFT)),
    ])


def spotify() -> Profile:
    return _preset("Spotify", "com.spotify.client", AppCategory.MEDIA, [
        ("Play/Pause", "playpause", _keys(SpecialKey.SPACE)),
        ("Next", "forward.fill", _keys(SpecialKey.RIGHT_ARROW, CMD)),
        ("Previous", "backward.fill", _keys(SpecialKey.LEFT_ARROW, CMD)),
        ("Volume Up", "speaker.wave.2.fill", _keys(SpecialKey.UP_ARROW, CMD)),
        ("Volume Down", "speaker.wave.1.fill", _keys(SpecialKey.DOWN_ARROW, CMD)),
        ("Mute", "speaker.slash.fill", _keys("m", CMD, SHIFT)),
        ("Shuffle", "shuffle", _keys("s", CMD)),
        ("Repeat", "repeat", _keys("r", CMD)),
    ])


def slack() -> Profile:
    return _preset("Slack", "com.tinyspeck.slackmacgap", AppCategory.COMMUNICATION, [
        ("Quick Switcher", "text.magnifyingglass", _keys("k", CMD)),
        ("Search", "magnifyingglass", _keys("f", CMD)),
        ("New Message", "square.and.pencil", _keys("n", CMD, SHIFT)),
        ("Direct Messages", "at", _keys("k", CMD, SHIFT)),
        ("Status", "circle.fill", _keys("y", CMD)),
        ("Share Screen", "rectangle.on.rectangle", _keys("s", CMD, SHIFT)),
        ("Channel Browser", "number", _keys("b", CMD, SHIFT)),
        ("Huddle", "waveform", _keys("h", CMD, SHIFT)),
    ])


def system_default() -> Profile:
    return _preset("System", None, AppCategory.OTHER, [
        ("Screenshot", "camera.fill", _keys("4", CMD, SHIFT)),
        ("Screenshot Selection", "camera.aperture", _keys("5", CMD, SHIFT)),
        ("Lock Screen", "lock.fill", _keys("q", CMD, CTRL)),
        ("Mission Control", "rectangle.split.3x3", _keys(SpecialKey.SPACE, CMD)),
        ("Launchpad", "app.dashed", _keys(SpecialKey.SPACE, CMD, OPT)),
        ("Show Desktop", "rectangle.on.rectangle.slash", _keys("f", CMD, OPT)),
        ("Spotlight", "spotlight", _keys(SpecialKey.SPACE, CMD)),
        ("Emoji Picker", "face.smiling", _keys(SpecialKey.SPACE, CMD, CTRL)),
    ], is_default=True)


def all_profiles() -> list[Profile]:
    """Fresh copies of every preset, default last."""
    return [
        vs_code(),
        xcode(),
        safari(),
        finder(),
        terminal(),
        notes(),
        messages(),
        spotify(),
        slack(),
        system_default(),
    ]
