"""Render parsed elements as article HTML or as a plain-text summary."""
from __future__ import annotations

import logging
import re
from html import escape
from typing import Iterable, List, Optional, Sequence

from bodyparser.parser.elements import BodyElement, ElementType
from bodyparser.parser.links import extract_url, replace_urls
from bodyparser.parser.promoter import LINE_BREAK
from bodyparser.parser.rules import FieldFilter, FilterResult, FilterScope, apply_filters

logger = logging.getLogger(__name__)

DEFAULT_LIST_TYPE = "ul"
DEFAULT_MIN_LENGTH = 100
DEFAULT_MAX_LENGTH = 400

SUMMARY_SKIPPED_TYPES = frozenset(
    {
        ElementType.QUOTE,
        ElementType.PRE,
        ElementType.LIST,
        ElementType.TABLE,
        ElementType.FIGURE,
        ElementType.IFRAME,
        ElementType.TIMESTAMP,
    }
)
# Hashtags, tildes, underscores and equals signs open decorative lines.
_DECORATIVE_PREFIXES = ("#", "~", "_", "=")
_DECORATIVE_BAR = "\u25ac"

_BREAKS_RE = re.compile(r"\n|<br>")
_BRACKETED_RE = re.compile(r"\[.+?\]")
_UNDERSCORE_RULE_RE = re.compile(r"_{2,}")
_SENTENCE_END_RE = re.compile(r"(?<=\.) ")


def render_text(lines: Sequence[str]) -> str:
    """Escape each of ``lines`` for HTML, join them with ``<br>`` and link bare URLs."""

    escaped = LINE_BREAK.join(escape(line, quote=False) for line in lines)
    return replace_urls(escaped)


def format_body(elements: Iterable[BodyElement], filters: Sequence[FieldFilter] = ()) -> str:
    """Rebuild article HTML from ``elements``.

    Consecutive list items share one ``<ul>``/``<ol>`` wrapper, which is
    closed as soon as a different list type or a non-list element follows.
    """

    lines: List[str] = []
    open_list: Optional[str] = None

    for element in elements:
        result = apply_filters(filters, element.text, FilterScope.BODY)
        if result is FilterResult.SKIP:
            continue
        if result is FilterResult.STOP:
            break

        text = render_text(element.lines())
        if not text:
            continue

        if element.type == ElementType.LIST:
            list_type = element.list_type or DEFAULT_LIST_TYPE
            if open_list != list_type:
                if open_list is not None:
                    lines.append(f"</{open_list}></p>")
                lines.append(f"<p><{list_type}>")
                open_list = list_type
            lines.append(f"<{element.tag}>{text}")
            continue

        if open_list is not None:
            lines.append(f"</{open_list}></p>")
            open_list = None

        if element.strong:
            lines.append(f"<strong>{text}</strong>")
        elif element.type == ElementType.TITLE:
            lines.append(f"<{element.tag}>{text}</{element.tag}>")
        else:
            lines.append(f"<p>{text}</p>")

    if open_list is not None:
        lines.append(f"</{open_list}></p>")

    return "\n".join(lines)


def clean_summary_text(text: str) -> str:
    """Drop line breaks, bracketed asides and underscore rules from ``text``."""

    text = _BREAKS_RE.sub("", text)
    text = _BRACKETED_RE.sub("", text)
    return _UNDERSCORE_RULE_RE.sub("", text)


def non_url_text(text: str) -> Optional[str]:
    """Keep only the sentences of ``text`` that carry no URL, or ``None`` if none survive."""

    kept: List[str] = []
    for fragment in text.split(". "):
        fragment = fragment.strip()
        if not fragment or extract_url(fragment) is not None:
            continue
        kept.append(fragment if fragment.endswith(".") else fragment + ".")
    return " ".join(kept) if kept else None


def _is_decorative(text: str) -> bool:
    return text.startswith(_DECORATIVE_PREFIXES) or _DECORATIVE_BAR in text


def _joined(summary: str, text: str) -> str:
    return f"{summary} {text}" if summary else text


def _append_sentences(summary: str, text: str, min_length: int, max_length: int) -> str:
    for sentence in _SENTENCE_END_RE.split(text):
        sentence = sentence.strip()
        if not sentence:
            continue
        candidate = _joined(summary, sentence)
        if len(candidate) > max_length:
            break
        summary = candidate
        if len(summary) > min_length:
            break
    return summary


def format_summary(
    elements: Iterable[BodyElement],
    filters: Sequence[FieldFilter] = (),
    min_length: int = DEFAULT_MIN_LENGTH,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> str:
    """Build a plain-text summary from the leading body text of ``elements``.

    Text is gathered element by element until it is longer than
    ``min_length``. It never grows past ``max_length``: an element that does
    not fit is offered one sentence at a time before the summary is closed.
    Titles ahead of the first paragraph are skipped, while a title further
    down ends the summary.
    """

    summary = ""
    header: Optional[bool] = None

    for element in elements:
        if element.type == ElementType.TITLE:
            if header is None:
                header = True
        elif element.type == ElementType.TEXT:
            header = False

        if (header and element.type == ElementType.TITLE) or element.type in SUMMARY_SKIPPED_TYPES:
            continue

        text = clean_summary_text(element.text)

        result = apply_filters(filters, text, FilterScope.SUMMARY)
        if result is FilterResult.SKIP:
            continue
        if result is FilterResult.STOP:
            break

        if extract_url(text) is not None:
            stripped = non_url_text(text)
            if stripped is None:
                continue
            text = stripped

        if element.type == ElementType.TITLE:
            break

        text = text.strip()
        if not text or _is_decorative(text):
            continue

        candidate = _joined(summary, text)
        if len(candidate) > max_length:
            summary = _append_sentences(summary, text, min_length, max_length)
            logger.debug(
                "Summary reached its maximum length",
                extra={"event": "summary.truncated", "length": len(summary), "max_length": max_length},
            )
            break

        summary = candidate
        if len(summary) > min_length:
            break

    if summary.endswith(":"):
        summary = summary[:-1] + "."
    return summary


__all__ = [
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_MIN_LENGTH",
    "SUMMARY_SKIPPED_TYPES",
    "clean_summary_text",
    "format_body",
    "format_summary",
    "non_url_text",
    "render_text",
]
