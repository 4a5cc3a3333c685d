"""Profile lookup chain: exact identifier, then category, then default."""

from __future__ import annotations

from context_module.category_classifier import CategoryClassifier
from profile_module.models import Profile
from profile_module.store import ProfileStore
from utils.settings_store import deep_log


class ProfileResolver:
    def __init__(self, classifier: CategoryClassifier | None = None) -> None:
        self.classifier = classifier or CategoryClassifier()

    def resolve(self, bundle_id: str | None, store: ProfileStore) -> Profile | None:
        """Return the profile for bundle_id, or None when the store has nothing.

        A category profile is only eligible when it is not owned by another
        app (``bundle_id is None``).
        """
        if not bundle_id:
            return store.default()

        profile = store.by_identifier(bundle_id)
        if profile is not None:
            deep_log(f"[DEEP][RESOLVER] exact match id={bundle_id} profile={profile.name}")
            return profile

        category = self.classifier.classify(bundle_id)
        profile = store.by_category(category)
        if profile is not None and profile.bundle_id is None:
            deep_log(
                f"[DEEP][RESOLVER] category match id={bundle_id} category={category.value} "
                f"profile={profile.name}"
            )
            return profile

        profile = store.default()
        if profile is None:
            deep_log(f"[DEEP][RESOLVER] no profile for id={bundle_id}")
        return profile


def resolve(bundle_id: str | None, store: ProfileStore) -> Profile | None:
    return ProfileResolver().resolve(bundle_id, store)
