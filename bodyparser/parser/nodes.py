"""Narrow node interface over parsed HTML, backed by ``lxml.html``."""
from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from html import escape
from typing import Any, Iterator, List, Optional

from lxml import etree
from lxml import html as lxml_html

TEXT_TAG = "#text"
COMMENT_TAG = "#comment"


class DocumentNode(ABC):
    """Capabilities the tree walker needs from a parsed document node."""

    tag: str
    is_element: bool = False

    @property
    @abstractmethod
    def parent(self) -> Optional["DocumentNode"]:
        ...

    @abstractmethod
    def children(self) -> List["DocumentNode"]:
        ...

    @abstractmethod
    def whole_text(self) -> Optional[str]:
        """Return the decoded text below this node, or ``None`` if it carries none."""

    @property
    @abstractmethod
    def outer_html(self) -> str:
        ...

    @property
    def inner_html(self) -> str:
        return ""

    @property
    def element_id(self) -> str:
        return ""

    def has_class(self, name: str) -> bool:
        return False

    def has_line_breaks(self) -> bool:
        return False

    def replace_line_breaks(self) -> Any:
        return None

    def restore(self, snapshot: Any) -> None:
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.tag}>"


class ElementNode(DocumentNode):
    """An element of an ``lxml.html`` tree."""

    is_element = True

    def __init__(self, element: lxml_html.HtmlElement) -> None:
        self._element = element
        self.tag = element.tag.lower() if isinstance(element.tag, str) else str(element.tag)

    @property
    def element(self) -> lxml_html.HtmlElement:
        return self._element

    @property
    def parent(self) -> Optional["ElementNode"]:
        parent = self._element.getparent()
        return ElementNode(parent) if parent is not None else None

    def children(self) -> List[DocumentNode]:
        nodes: List[DocumentNode] = []
        if self._element.text:
            nodes.append(TextNode(self._element.text, self))
        for child in self._element:
            if isinstance(child.tag, str):
                nodes.append(ElementNode(child))
            else:
                nodes.append(CommentNode(child, self))
            if child.tail:
                nodes.append(TextNode(child.tail, self))
        return nodes

    def whole_text(self) -> str:
        return "".join(_iter_text(self._element))

    @property
    def outer_html(self) -> str:
        return etree.tostring(self._element, method="html", encoding="unicode", with_tail=False)

    @property
    def inner_html(self) -> str:
        parts = [escape(self._element.text or "", quote=False)]
        for child in self._element:
            parts.append(etree.tostring(child, method="html", encoding="unicode", with_tail=True))
        return "".join(parts)

    @property
    def element_id(self) -> str:
        return self._element.get("id") or ""

    def has_class(self, name: str) -> bool:
        return name in (self._element.get("class") or "").split()

    def has_line_breaks(self) -> bool:
        return self._element.find(".//br") is not None

    def replace_line_breaks(self) -> lxml_html.HtmlElement:
        """Swap every descendant ``<br>`` for a newline and return a snapshot for :meth:`restore`."""

        snapshot = copy.deepcopy(self._element)
        for br in list(self._element.iterdescendants("br")):
            _replace_with_text(br, "\n")
        return snapshot

    def restore(self, snapshot: lxml_html.HtmlElement) -> None:
        for child in list(self._element):
            self._element.remove(child)
        self._element.text = snapshot.text
        for child in list(snapshot):
            self._element.append(child)


class TextNode(DocumentNode):
    """A run of character data: an element's leading text or a child's tail."""

    tag = TEXT_TAG

    def __init__(self, text: str, parent: Optional[ElementNode] = None) -> None:
        self._text = text
        self._parent = parent

    @property
    def parent(self) -> Optional[ElementNode]:
        return self._parent

    def children(self) -> List[DocumentNode]:
        return []

    def whole_text(self) -> str:
        return self._text

    @property
    def outer_html(self) -> str:
        return escape(self._text, quote=False)


class CommentNode(DocumentNode):
    """Comments and processing instructions; they contribute no text."""

    tag = COMMENT_TAG

    def __init__(self, node: Any, parent: Optional[ElementNode] = None) -> None:
        self._node = node
        self._parent = parent

    @property
    def parent(self) -> Optional[ElementNode]:
        return self._parent

    def children(self) -> List[DocumentNode]:
        return []

    def whole_text(self) -> None:
        return None

    @property
    def outer_html(self) -> str:
        return etree.tostring(self._node, method="html", encoding="unicode", with_tail=False)


def parse_document(markup: str) -> ElementNode:
    """Parse ``markup`` and return its ``<body>`` (or the root if there is none)."""

    if not markup or not markup.strip():
        raise ValueError("Cannot parse an empty document")
    root = lxml_html.document_fromstring(markup)
    body = root.find("body")
    return ElementNode(body if body is not None else root)


def _iter_text(element: Any) -> Iterator[str]:
    if isinstance(element.tag, str) and element.text:
        yield element.text
    for child in element:
        yield from _iter_text(child)
        if child.tail:
            yield child.tail


def _replace_with_text(element: Any, text: str) -> None:
    parent = element.getparent()
    text = text + (element.tail or "")
    previous = element.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or "") + text
    else:
        parent.text = (parent.text or "") + text
    parent.remove(element)


__all__ = [
    "COMMENT_TAG",
    "CommentNode",
    "DocumentNode",
    "ElementNode",
    "TEXT_TAG",
    "TextNode",
    "parse_document",
]
