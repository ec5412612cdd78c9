"""Question classification and per-archetype extraction."""

from .classifier import classify_question
from .extractors import EXTRACTORS

__all__ = ["classify_question", "EXTRACTORS"]
