"""Split leaf text into segments and merge them into the running element list."""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, List

from bodyparser.parser.elements import BREAK_MARKER, BodyElement, ElementDisplay, ElementType
from bodyparser.parser.nodes import DocumentNode
from bodyparser.parser.normalize import normalize
from bodyparser.parser.promoter import LINE_BREAK

if TYPE_CHECKING:
    from bodyparser.parser.walker import ParserContext

logger = logging.getLogger(__name__)

LIST_PARENT_TAGS = frozenset({"ul", "ol"})

_CONTINUATION_LINE_RE = re.compile(r"\n(.+)")
_PARAGRAPH_WRAPPER_RE = re.compile(r"<p(?:.*?)>(.+)</p>")
_STRONG_OPENERS = ("<strong>", "<b>")


def mark_line_breaks(text: str) -> str:
    """Prefix each non-empty line after the first with a break marker."""

    return _CONTINUATION_LINE_RE.sub("\n" + BREAK_MARKER + r"\1", text)


def is_strong(node: DocumentNode) -> bool:
    markup = node.outer_html
    if "<p" in markup:
        markup = _PARAGRAPH_WRAPPER_RE.sub(r"\1", markup)
    markup = markup.replace(LINE_BREAK, "").strip()
    return markup.startswith(_STRONG_OPENERS)


def _is_title_candidate(previous: BodyElement, element: BodyElement) -> bool:
    return (
        previous.type == ElementType.TEXT
        and previous.strong
        and not previous.text.endswith(".")
        and previous.is_block
        and element.is_block
    )


def _continues_previous(segments: List[str], index: int, element: BodyElement) -> bool:
    if not element.has_break:
        return False
    if index == 0:
        return True
    before = segments[index - 1]
    return bool(before) and before != BREAK_MARKER and element.type != ElementType.TIMESTAMP


def add_leaf(context: "ParserContext", node: DocumentNode, text: str) -> None:
    """Merge the text of one leaf node into ``context``.

    Each line of ``text`` either extends the previous element (inline text or
    a forced line break) or starts a new element. Empty trailing lines close
    the previous element off as a block.
    """

    tag = node.tag
    if tag == "p":
        text = mark_line_breaks(text)

    previous = context.previous
    inline = bool(context.elements) and not text.startswith("\n")
    if previous is not None and previous.display == ElementDisplay.BLOCK:
        inline = False

    segments = text.split("\n")
    strong = sum(1 for segment in segments if segment) == 1 and is_strong(node)

    for index, segment in enumerate(segments):
        segment = normalize(segment)
        segments[index] = segment
        previous = context.previous

        if not segment:
            if index == len(segments) - 1 and previous is not None:
                previous.promote(ElementDisplay.BLOCK)
            continue

        element = BodyElement(tag, segment, strong)
        if index > 0 or not inline or element.has_break:
            element.promote(ElementDisplay.INLINE_BLOCK)

        if element.type == ElementType.LIST:
            parent = node.parent
            if parent is not None and parent.tag in LIST_PARENT_TAGS:
                element.list_type = parent.tag

        if context.debug:
            logger.debug(
                "Merging segment",
                extra={
                    "event": "merge.segment",
                    "tag": tag,
                    "index": index,
                    "text": element.text,
                    "type": element.type.name,
                    "strong": strong,
                    "display": element.display.name,
                    "has_break": element.has_break,
                },
            )

        if previous is not None and not element.is_block:
            previous.append(element.marked_text)
        elif previous is not None and _continues_previous(segments, index, element):
            previous.append("\n")
            previous.append_break()
            previous.append(element.marked_text)
        else:
            if previous is not None and _is_title_candidate(previous, element):
                previous.promote_to_title()
            context.append(element)


__all__ = ["LIST_PARENT_TAGS", "add_leaf", "is_strong", "mark_line_breaks"]
