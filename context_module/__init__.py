"""Focus tracking and profile resolution."""

from context_module.category_classifier import CategoryClassifier, classify
from context_module.engine import ContextEngine, MonitoringToken
from context_module.focus_debouncer import FocusDebouncer
from context_module.profile_resolver import ProfileResolver, resolve

__all__ = [
    "CategoryClassifier",
    "ContextEngine",
    "FocusDebouncer",
    "MonitoringToken",
    "ProfileResolver",
    "classify",
    "resolve",
]
