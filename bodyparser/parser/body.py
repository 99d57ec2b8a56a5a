"""Parse article markup into body elements and format them back out."""
from __future__ import annotations

import logging
import time
from typing import Any, Iterable, List, Optional

from bodyparser.parser.elements import BodyElement
from bodyparser.parser.formatters import format_body, format_summary
from bodyparser.parser.nodes import DocumentNode, parse_document
from bodyparser.parser.promoter import text_to_html
from bodyparser.parser.rules import FieldExclude, FieldFilter
from bodyparser.parser.walker import ParserContext, walk, walk_children
from bodyparser.telemetry import metrics

logger = logging.getLogger(__name__)

MARKUP_HINT = "<p"


class BodyParser:
    """Turn an article body into an ordered list of :class:`BodyElement`.

    Markup, selected subtrees and plain text can all be fed in; each call adds
    to the same element list until :meth:`reset` is called.
    """

    def __init__(
        self,
        excludes: Optional[Iterable[FieldExclude]] = None,
        filters: Optional[Iterable[FieldFilter]] = None,
        debug: bool = False,
    ) -> None:
        self.excludes: List[FieldExclude] = list(excludes or [])
        self.filters: List[FieldFilter] = list(filters or [])
        self.debug = debug
        self.converted = False
        self._context = ParserContext(debug=debug)

    @classmethod
    def from_text(
        cls,
        text: str,
        filters: Optional[Iterable[FieldFilter]] = None,
        debug: bool = False,
        excludes: Optional[Iterable[FieldExclude]] = None,
    ) -> "BodyParser":
        """Build a parser over ``text``, treating it as markup only if it contains ``<p``."""

        parser = cls(excludes=excludes, filters=filters, debug=debug)
        if MARKUP_HINT in text:
            parser.parse_html(text)
        else:
            parser.parse_text(text)
        return parser

    @property
    def elements(self) -> List[BodyElement]:
        return self._context.elements

    @property
    def num_elements(self) -> int:
        return len(self._context.elements)

    def reset(self) -> None:
        self._context.reset()
        self.converted = False

    def parse_html(self, markup: str) -> None:
        """Parse ``markup`` from its ``<body>`` and append the resulting elements."""

        self._context.previous = None
        if not markup or not markup.strip():
            logger.warning("Ignoring empty markup", extra={"event": "parser.empty_markup"})
            metrics.record_parse(source="html", element_count=0, duration_seconds=0.0, status="empty")
            return

        started = time.perf_counter()
        before = self.num_elements
        walk(parse_document(markup), self._context, self.excludes)
        duration = time.perf_counter() - started

        metrics.record_parse(
            source="html",
            element_count=self.num_elements - before,
            duration_seconds=duration,
            status="success",
        )
        self._log_elements("parse_html")

    def parse_node(self, node: DocumentNode) -> None:
        """Append the elements found below a caller-selected ``node``."""

        started = time.perf_counter()
        before = self.num_elements
        walk_children(node, self._context, self.excludes)
        metrics.record_parse(
            source="node",
            element_count=self.num_elements - before,
            duration_seconds=time.perf_counter() - started,
            status="success",
        )

    def parse_text(self, text: str) -> None:
        self.parse_html(text_to_html(text))
        self.converted = True

    def format_body(self) -> str:
        body = format_body(self.elements, self.filters)
        metrics.record_format(kind="body", length=len(body))
        return body

    def format_summary(self, min_length: int, max_length: int) -> str:
        summary = format_summary(self.elements, self.filters, min_length, max_length)
        metrics.record_format(kind="summary", length=len(summary))
        if self.debug:
            logger.info(
                "Formatted summary",
                extra={"event": "parser.summary", "length": len(summary), "min_length": min_length, "max_length": max_length},
            )
        return summary

    def format_summary_for(self, config: Any) -> str:
        """Format a summary using the ``min_length``/``max_length`` of ``config``."""

        return self.format_summary(config.min_length, config.max_length)

    def _log_elements(self, stage: str) -> None:
        if not self.debug:
            return
        logger.info("%s: elements=%d", stage, self.num_elements, extra={"event": "parser.elements"})
        for element in self.elements:
            logger.info(
                "%s: element",
                stage,
                extra={
                    "event": "parser.element",
                    "tag": element.tag,
                    "type": element.type.name,
                    "text": element.text,
                    "strong": element.strong,
                    "display": element.display.name,
                },
            )

    def __repr__(self) -> str:
        return f"BodyParser(elements={self.num_elements}, converted={self.converted})"


__all__ = ["BodyParser", "MARKUP_HINT"]
