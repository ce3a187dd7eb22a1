from __future__ import annotations

import copy

import requests
from bs4 import BeautifulSoup, Tag


def _attr_text(val: object) -> str:
    # Multi-valued attributes (class, rel, ...) come back as lists.
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


class MetaDocument:
    """Read-only view over a parsed page, limited to ``<meta>`` lookups.

    The engine only ever calls :meth:`find_all` and :meth:`read_attribute`.
    Use :meth:`clone` to hand the engine an isolated snapshot when the
    caller keeps mutating its own tree.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_html(cls, html: str | bytes) -> MetaDocument:
        return cls(BeautifulSoup(html, "html.parser"))

    @classmethod
    def from_response(cls, response: requests.Response) -> MetaDocument:
        content_type = response.headers.get("Content-Type", "")
        if "charset" in content_type.lower():
            encoding = requests.utils.get_encoding_from_headers(response.headers)
            return cls(BeautifulSoup(response.content, "html.parser", from_encoding=encoding))
        # requests assumes ISO-8859-1 for text/* without a charset; let bs4 sniff instead.
        return cls.from_html(response.content)

    def clone(self) -> MetaDocument:
        return MetaDocument(copy.copy(self._soup))

    def html(self) -> str:
        return str(self._soup)

    def find_all(self, attribute: str, value: str) -> list[Tag]:
        """Return every ``<meta>`` whose *attribute* equals *value*, in document order."""
        return [
            el
            for el in self._soup.find_all("meta")
            if isinstance(el, Tag)
            and el.has_attr(attribute)
            and _attr_text(el.get(attribute)) == value
        ]

    @staticmethod
    def read_attribute(element: Tag, name: str) -> str | None:
        if not element.has_attr(name):
            return None
        return _attr_text(element.get(name))
