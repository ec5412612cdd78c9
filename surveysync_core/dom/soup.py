"""BeautifulSoup-backed implementation of the document query adapter."""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .base import DocumentNode, SurveyDocument


class SoupNode(DocumentNode):
    def __init__(self, element: Tag):
        self._el = element

    @property
    def element(self) -> Tag:
        return self._el

    @property
    def tag(self) -> str:
        return (self._el.name or "").lower()

    def classes(self) -> List[str]:
        value = self._el.get("class") or []
        if isinstance(value, str):
            return value.split()
        return [str(c) for c in value]

    def attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = self._el.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def text(self) -> str:
        return self._el.get_text()

    def inner_html(self) -> str:
        return self._el.decode_contents()

    def value(self) -> str:
        tag = self.tag
        if tag == "textarea":
            return self._el.get_text()
        if tag == "select":
            options = self.select("option")
            chosen = next((o for o in options if o.is_selected()), None)
            if chosen is None and options:
                chosen = options[0]
            return chosen.value() if chosen is not None else ""
        if tag == "option":
            value = self.attr("value")
            return value if value is not None else self._el.get_text().strip()
        return self.attr("value", "") or ""

    def is_selected(self) -> bool:
        return self.tag == "option" and self._el.has_attr("selected")

    def select(self, selector: str) -> List[DocumentNode]:
        return [SoupNode(el) for el in self._el.select(selector)]

    def same_node(self, other: DocumentNode) -> bool:
        return isinstance(other, SoupNode) and other._el is self._el

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag} class={' '.join(self.classes())!r}>)"


class SoupDocument(SurveyDocument):
    """Static document parsed with BeautifulSoup's html.parser."""

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    @classmethod
    def from_html(cls, html: str) -> "SoupDocument":
        return cls(BeautifulSoup(html or "", "html.parser"))

    @classmethod
    def empty(cls) -> "SoupDocument":
        return cls.from_html("")

    def region(self, region_id: str) -> Optional[DocumentNode]:
        element = self._soup.find(id=region_id)
        if not isinstance(element, Tag):
            return None
        return SoupNode(element)
