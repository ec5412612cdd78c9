"""
Document Query Adapter - the only surface the parser sees of a document.

The classifier and extractors never touch a concrete HTML library; they
receive a ``SurveyDocument`` and walk ``DocumentNode`` objects. Tests
build documents from literal HTML, the live binding builds them from a
browser snapshot.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class DocumentNode(ABC):
    """Read-only view of one element."""

    @property
    @abstractmethod
    def tag(self) -> str:
        """Lower-case tag name."""

    @abstractmethod
    def classes(self) -> List[str]:
        pass

    @abstractmethod
    def attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        pass

    @abstractmethod
    def text(self) -> str:
        """textContent equivalent (untrimmed)."""

    @abstractmethod
    def inner_html(self) -> str:
        pass

    @abstractmethod
    def value(self) -> str:
        """Current value of a form control ('' for other elements)."""

    @abstractmethod
    def is_selected(self) -> bool:
        """True for an <option> that is the chosen one."""

    @abstractmethod
    def select(self, selector: str) -> List["DocumentNode"]:
        """All descendants matching a CSS selector, in document order."""

    def select_one(self, selector: str) -> Optional["DocumentNode"]:
        found = self.select(selector)
        return found[0] if found else None

    def has(self, selector: str) -> bool:
        return self.select_one(selector) is not None

    def has_class_token(self, substring: str) -> bool:
        return any(substring in c for c in self.classes())

    @abstractmethod
    def same_node(self, other: "DocumentNode") -> bool:
        pass


class SurveyDocument(ABC):
    """A whole document; the survey lives inside one region of it."""

    @abstractmethod
    def region(self, region_id: str) -> Optional[DocumentNode]:
        """The element with the given id, or None when it is absent."""
