"""Semantic content elements produced by the body parser."""
from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from bodyparser.parser.promoter import LINE_BREAK

# Stands in for a line break inside element text; parsed document text never holds NUL.
BREAK_MARKER = "\x00"

_TIMESTAMP_RE = re.compile(r"\s*\d{1,2}:\d{2}[\s|-]+.*", re.DOTALL)

LIST_TAGS = frozenset({"ul", "ol", "li"})
BLOCK_TAGS = frozenset(
    {
        "p",
        "blockquote",
        "pre",
        "ul",
        "ol",
        "li",
        "table",
        "figure",
        "iframe",
        "aside",
    }
)


class ElementType(str, Enum):
    TITLE = "title"
    QUOTE = "quote"
    PRE = "pre"
    LIST = "list"
    TABLE = "table"
    FIGURE = "figure"
    IFRAME = "iframe"
    TIMESTAMP = "timestamp"
    TEXT = "text"


class ElementDisplay(str, Enum):
    INLINE = "inline"
    INLINE_BLOCK = "inline-block"
    BLOCK = "block"


_DISPLAY_RANK = {
    ElementDisplay.INLINE: 0,
    ElementDisplay.INLINE_BLOCK: 1,
    ElementDisplay.BLOCK: 2,
}

_TAG_TYPES = {
    "blockquote": ElementType.QUOTE,
    "pre": ElementType.PRE,
    "table": ElementType.TABLE,
    "figure": ElementType.FIGURE,
    "iframe": ElementType.IFRAME,
}


def is_heading(tag: str) -> bool:
    return tag.startswith("h")


def is_block_tag(tag: str) -> bool:
    return tag in BLOCK_TAGS or is_heading(tag)


def classify(tag: str, text: str) -> ElementType:
    """Map a source tag and its text onto an :class:`ElementType`.

    The tag decides first; only untyped tags fall back to looking for a
    leading ``hh:mm`` timestamp in the text.
    """

    if is_heading(tag):
        return ElementType.TITLE
    if tag in _TAG_TYPES:
        return _TAG_TYPES[tag]
    if tag in LIST_TAGS:
        return ElementType.LIST
    if _TIMESTAMP_RE.match(text):
        return ElementType.TIMESTAMP
    return ElementType.TEXT


class BodyElement:
    """A run of text with its semantic type and display mode."""

    def __init__(self, tag: str, text: str, strong: bool = False) -> None:
        self.tag = tag
        self.strong = strong
        self.list_type: Optional[str] = None
        self.display = ElementDisplay.BLOCK if is_block_tag(tag) else ElementDisplay.INLINE
        self.has_break = text.startswith(BREAK_MARKER)
        if self.has_break:
            text = text[len(BREAK_MARKER):].strip()
        self.type = classify(tag, text)
        self._text = text

    @property
    def text(self) -> str:
        """The element text with each line break shown as ``<br>``."""

        return self._text.replace(BREAK_MARKER, LINE_BREAK)

    @property
    def marked_text(self) -> str:
        return self._text

    def lines(self) -> List[str]:
        """Split the text at its line breaks."""

        return self._text.split(BREAK_MARKER)

    @property
    def is_block(self) -> bool:
        return self.display in (ElementDisplay.BLOCK, ElementDisplay.INLINE_BLOCK)

    def promote(self, display: ElementDisplay) -> None:
        """Raise the display mode to ``display``; lower modes are ignored."""

        if _DISPLAY_RANK[display] > _DISPLAY_RANK[self.display]:
            self.display = display

    def promote_to_title(self) -> None:
        if self.type == ElementType.TEXT:
            self.type = ElementType.TITLE

    def append(self, text: str) -> None:
        """Append ``text``, separating words with a single space.

        A space is only added before a letter or digit, and not straight
        after a newline unless ``text`` opens with a break marker, in which
        case the marker is kept ahead of the space.
        """

        if not text:
            return

        has_break = text.startswith(BREAK_MARKER)
        if has_break:
            text = text[len(BREAK_MARKER):]

        if self._text and text[:1].isalnum() and (not self._text.endswith("\n") or has_break):
            if has_break:
                self.append_break()
            self._text += " "
        self._text += text

    def append_break(self) -> None:
        self._text += BREAK_MARKER

    def __repr__(self) -> str:
        return (
            f"BodyElement(tag={self.tag!r}, type={self.type.name}, text={self.text!r}, "
            f"strong={self.strong}, display={self.display.name})"
        )


__all__ = [
    "BLOCK_TAGS",
    "BREAK_MARKER",
    "BodyElement",
    "ElementDisplay",
    "ElementType",
    "LIST_TAGS",
    "classify",
    "is_block_tag",
    "is_heading",
]
