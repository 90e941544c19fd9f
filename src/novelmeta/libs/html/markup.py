"""
A narrow structural query layer over lxml.

Site parsers only ever select nodes, walk children and read text or
attributes, so they depend on :class:`Node` rather than on lxml directly.
Queries are XPath expressions evaluated relative to the node.
"""

from __future__ import annotations

import re

from lxml import etree, html

_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)
_SPACE_RE = re.compile(r"\s+")


def xclass(name: str) -> str:
    """Build an XPath predicate matching elements carrying CSS class ``name``.

    Example:
        ``f".//div{xclass('c_row')}"`` selects every ``div.c_row`` below a node.
    """
    return f"[contains(concat(' ', normalize-space(@class), ' '), ' {name} ')]"


class Node:
    """Read-only view of one element in a parsed HTML document."""

    __slots__ = ("_el",)

    def __init__(self, element: html.HtmlElement) -> None:
        self._el = element

    @classmethod
    def parse(cls, markup: str) -> Node:
        """Parse a full HTML document.

        Empty or unparseable input yields an empty ``<html>`` document
        instead of raising.
        """
        markup = _XML_DECL_RE.sub("", markup, count=1)
        if not markup.strip():
            return cls(html.document_fromstring("<html></html>"))
        try:
            return cls(html.document_fromstring(markup))
        except (etree.ParserError, ValueError):
            return cls(html.document_fromstring("<html></html>"))

    @property
    def tag(self) -> str:
        return str(self._el.tag).lower()

    def select_all(self, query: str) -> list[Node]:
        """Return the elements matched by an XPath query, in document order."""
        return [
            Node(el)
            for el in self._el.xpath(query)
            if isinstance(el, html.HtmlElement)
        ]

    def select_first(self, query: str) -> Node | None:
        found = self.select_all(query)
        return found[0] if found else None

    def children(self, tag: str | None = None) -> list[Node]:
        return [
            Node(el)
            for el in self._el.iterchildren(tag=tag)
            if isinstance(el, html.HtmlElement)
        ]

    def has_class(self, name: str) -> bool:
        return name in (self._el.get("class") or "").split()

    def attr(self, name: str) -> str:
        return (self._el.get(name) or "").strip()

    def text(self) -> str:
        """Full text content with whitespace runs collapsed to one space."""
        return _SPACE_RE.sub(" ", self._el.text_content()).strip()

    def texts(self) -> list[str]:
        """Non-empty text fragments below this node, each stripped."""
        return [s for t in self._el.itertext() if (s := t.strip())]

    def __repr__(self) -> str:
        return f"<Node {self.tag} class={self.attr('class')!r}>"
