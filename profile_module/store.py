"""Profile lookup interface and an in-memory implementation."""

from __future__ import annotations

import threading
from typing import Iterable, Protocol

from profile_module.models import AppCategory, Profile


class ProfileStore(Protocol):
    """Lookups consumed by the profile resolver."""

    def by_identifier(self, bundle_id: str) -> Profile | None:
        ...

    def by_category(self, category: AppCategory) -> Profile | None:
        ...

    def default(self) -> Profile | None:
        ...


class InMemoryProfileStore:
    """Thread-safe profile collection with at most one default profile."""

    def __init__(self, profiles: Iterable[Profile] | None = None) -> None:
        self._lock = threading.Lock()
        self._profiles: dict[str, Profile] = {}
        for profile in profiles or []:
            self.add(profile)

    @classmethod
    def with_builtins(cls) -> "InMemoryProfileStore":
        from profile_module.builtin_profiles import all_profiles

        return cls(all_profiles())

    def add(self, profile: Profile) -> None:
        with self._lock:
            if profile.is_default:
                current = self._default_locked()
                if current is not None and current.id != profile.id:
                    raise ValueError(
                        f"Default profile already set ('{current.name}'); cannot add '{profile.name}'"
                    )
            self._profiles[profile.id] = profile

    def remove(self, profile_id: str) -> Profile | None:
        with self._lock:
            return self._profiles.pop(profile_id, None)

    def all(self) -> list[Profile]:
        with self._lock:
            return list(self._profiles.values())

    def clear(self) -> None:
        with self._lock:
            self._profiles.clear()

    def by_identifier(self, bundle_id: str) -> Profile | None:
        if not bundle_id:
            return None
        with self._lock:
            for profile in self._profiles.values():
                if profile.bundle_id == bundle_id:
                    return profile
        return None

    def by_category(self, category: AppCategory) -> Profile | None:
        with self._lock:
            for profile in self._profiles.values():
                if profile.category == category and profile.bundle_id is None and not profile.is_default:
                    return profile
        return None

    def default(self) -> Profile | None:
        with self._lock:
            return self._default_locked()

    def _default_locked(self) -> Profile | None:
        for profile in self._profiles.values():
            if profile.is_default:
                return profile
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._profiles)
