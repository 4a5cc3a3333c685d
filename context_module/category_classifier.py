"""Classify application identifiers into coarse app categories."""

from __future__ import annotations

from collections.abc import Mapping

from context_module.category_table import CATEGORY_MAPPINGS
from profile_module.models import AppCategory

# Checked in order against the lowercased identifier.
HEURISTIC_TOKENS: tuple[tuple[tuple[str, ...], AppCategory], ...] = (
    (("ide", "code"), AppCategory.IDE),
    (("browser",), AppCategory.BROWSER),
    (("design",), AppCategory.DESIGN),
    (("terminal",), AppCategory.TERMINAL),
)


class CategoryClassifier:
    """Exact match, then prefix match, then substring heuristics, then other."""

    def __init__(self, mappings: Mapping[str, AppCategory] | None = None) -> None:
        self._mappings = dict(CATEGORY_MAPPINGS if mappings is None else mappings)

    def classify(self, bundle_id: str | None) -> AppCategory:
        if not bundle_id:
            return AppCategory.OTHER

        category = self._mappings.get(bundle_id)
        if category is not None:
            return category

        # When several keys prefix the id, the first in table order wins.
        for mapped_id, mapped_category in self._mappings.items():
            if bundle_id.startswith(mapped_id):
                return mapped_category

        lowered = bundle_id.lower()
        for tokens, heuristic_category in HEURISTIC_TOKENS:
            if any(token in lowered for token in tokens):
                return heuristic_category

        return AppCategory.OTHER


_default_classifier = CategoryClassifier()


def classify(bundle_id: str | None) -> AppCategory:
    """Classify with the built-in table."""
    return _default_classifier.classify(bundle_id)
