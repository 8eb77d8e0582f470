"""Name classification and canonicalization for trace records."""

from .event_classifier import EventClassifier, EVENT_TYPES
from .name_canonicalizer import NameCanonicalizer

__all__ = ["EventClassifier", "EVENT_TYPES", "NameCanonicalizer"]
