"""Recursive descent over a document tree feeding leaves into the merger."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from bodyparser.parser.elements import BodyElement, is_heading
from bodyparser.parser.merge import add_leaf
from bodyparser.parser.nodes import TEXT_TAG, DocumentNode
from bodyparser.parser.rules import FieldExclude, apply_excludes

logger = logging.getLogger(__name__)

ROOT_TAG = "body"
LEAF_TAGS = frozenset({"p", "blockquote", "pre", "li", "table", "figure", "iframe"})


@dataclass
class ParserContext:
    """Mutable state for a single document: the running element list."""

    elements: List[BodyElement] = field(default_factory=list)
    previous: Optional[BodyElement] = None
    debug: bool = False

    def append(self, element: BodyElement) -> None:
        self.elements.append(element)
        self.previous = element

    def reset(self) -> None:
        self.elements = []
        self.previous = None


def is_leaf(node: DocumentNode) -> bool:
    children = node.children()
    if not children:
        return True
    if node.tag != ROOT_TAG and len(children) == 1 and children[0].tag == TEXT_TAG:
        return True
    return node.tag in LEAF_TAGS or is_heading(node.tag)


def walk(node: DocumentNode, context: ParserContext, excludes: Sequence[FieldExclude] = ()) -> None:
    """Visit ``node`` and its descendants, merging every leaf into ``context``."""

    snapshot = node.replace_line_breaks() if node.has_line_breaks() else None

    if apply_excludes(excludes, node):
        if snapshot is not None:
            node.restore(snapshot)
        if context.debug:
            logger.debug("Excluded node", extra={"event": "walker.excluded", "tag": node.tag})
        return

    if is_leaf(node):
        text = node.whole_text()
        if text is not None:
            add_leaf(context, node, text.strip())
        if snapshot is not None:
            node.restore(snapshot)
        return

    if snapshot is not None:
        node.restore(snapshot)
    walk_children(node, context, excludes)


def walk_children(node: DocumentNode, context: ParserContext, excludes: Sequence[FieldExclude] = ()) -> None:
    for child in node.children():
        walk(child, context, excludes)


__all__ = ["LEAF_TAGS", "ParserContext", "is_leaf", "walk", "walk_children"]
