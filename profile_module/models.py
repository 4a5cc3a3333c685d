"""Profile and slot records for app-aware action rings."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from profile_module.actions import Action, KeyboardShortcut, KeyModifier


class AppCategory(str, Enum):
    IDE = "ide"
    BROWSER = "browser"
    DESIGN = "design"
    PRODUCTIVITY = "productivity"
    COMMUNICATION = "communication"
    MEDIA = "media"
    DEVELOPMENT = "development"
    TERMINAL = "terminal"
    OTHER = "other"


class ProfileSource(str, Enum):
    BUILTIN = "builtin"
    USER = "user"
    AI = "ai"
    COMMUNITY = "community"
    MCP = "mcp"


class SlotColor(str, Enum):
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    GRAY = "gray"


VALID_SLOT_COUNTS = (4, 6, 8)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Slot:
    position: int
    label: str
    icon: str = ""
    action: Action | None = None
    enabled: bool = True
    color: SlotColor = SlotColor.BLUE

    MAX_POSITION = 7

    @property
    def is_valid(self) -> bool:
        return 0 <= self.position <= self.MAX_POSITION

    @property
    def has_action(self) -> bool:
        return self.action is not None

    def __str__(self) -> str:
        return f"Slot {self.position}: {self.label}"


@dataclass
class Profile:
    """Ring configuration bound to an app identifier or an app category.

    A profile without ``bundle_id`` is a category profile (or the default).
    Slot positions are unique: adding a slot replaces any slot already at
    that position, so the slot list never grows past ``slot_count``.
    """

    name: str
    bundle_id: str | None = None
    category: AppCategory = AppCategory.OTHER
    slots: list[Slot] = field(default_factory=list)
    slot_count: int = 8
    is_default: bool = False
    mcp_servers: list[str] = field(default_factory=list)
    source: ProfileSource = ProfileSource.USER
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if self.slot_count not in VALID_SLOT_COUNTS:
            raise ValueError(
                f"slot_count must be one of {VALID_SLOT_COUNTS} (got {self.slot_count})"
            )
        problem = self._slot_problem()
        if problem:
            raise ValueError(f"Invalid slots for '{self.name}': {problem}")

    @property
    def is_valid(self) -> bool:
        return self.slot_count in VALID_SLOT_COUNTS and not self._slot_problem()

    def _slot_problem(self) -> str:
        if len(self.slots) > self.slot_count:
            return f"{len(self.slots)} slots exceed capacity {self.slot_count}"
        positions = [slot.position for slot in self.slots]
        if len(positions) != len(set(positions)):
            return "duplicate slot positions"
        for pos in positions:
            if not 0 <= pos < self.slot_count:
                return f"position {pos} outside 0..{self.slot_count - 1}"
        return ""

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def add_slot(self, slot: Slot) -> None:
        if not 0 <= slot.position < self.slot_count:
            raise ValueError(
                f"Slot position {slot.position} outside 0..{self.slot_count - 1} for '{self.name}'"
            )
        self.slots = [existing for existing in self.slots if existing.position != slot.position]
        self.slots.append(slot)
        self.touch()

    def remove_slot(self, position: int) -> None:
        self.slots = [slot for slot in self.slots if slot.position != position]
        self.touch()

    def update_slot(self, position: int, slot: Slot) -> None:
        if slot.position != position:
            raise ValueError(
                f"Slot position {slot.position} does not match target position {position}"
            )
        for index, existing in enumerate(self.slots):
            if existing.position == position:
                self.slots[index] = slot
                self.touch()
                return

    def slot_at(self, position: int) -> Slot | None:
        for slot in self.slots:
            if slot.position == position:
                return slot
        return None

    @classmethod
    def create_default(cls) -> "Profile":
        """Generic editing ring used when nothing else matches."""
        cmd = (KeyModifier.COMMAND,)
        slots = [
            Slot(0, "Copy", "doc.on.doc", KeyboardShortcut("c", cmd)),
            Slot(1, "Paste", "doc.on.clipboard", KeyboardShortcut("v", cmd)),
            Slot(2, "Cut", "scissors", KeyboardShortcut("x", cmd)),
            Slot(3, "Undo", "arrow.uturn.backward", KeyboardShortcut("z", cmd)),
            Slot(4, "Redo", "arrow.uturn.forward", KeyboardShortcut("z", (KeyModifier.COMMAND, KeyModifier.SHIFT))),
            Slot(5, "Save", "square.and.arrow.down", KeyboardShortcut("s", cmd)),
            Slot(6, "Select All", "square.and.pencil", KeyboardShortcut("a", cmd)),
            Slot(7, "Close", "xmark", KeyboardShortcut("w", cmd)),
        ]
        return cls(
            name="Default",
            category=AppCategory.OTHER,
            slots=slots,
            slot_count=8,
            is_default=True,
            source=ProfileSource.BUILTIN,
        )

    def __str__(self) -> str:
        if self.bundle_id:
            return f"Profile: {self.name} ({self.bundle_id})"
        return f"Profile: {self.name}"
