"""Promote plain text into paragraph and list markup."""
from __future__ import annotations

import re
from typing import List, Tuple

LIST_ITEM = "<li>"
ORDERED_LIST_ITEM = "<oli>"
LINE_BREAK = "<br>"

_PARAGRAPH_OPEN = "<p>"
_PARAGRAPH_CLOSE = "</p>"

_SEPARATOR_LINE_RE = re.compile(r"\n[-*]+\n")
_BULLET = "(?:-|\\*|\u2022|\u25cf|\u25b6|\u25aa\ufe0f)+"
# A marker starts a line: the first of a run of newlines, or the start of the
# text when followed by a space.
_BULLET_RE = re.compile(f"\\A *{_BULLET} +|(?<!\n)\n+ *{_BULLET} *")
_NUMBERED_RE = re.compile(r"(?:\A|(?<!\n)\n+) *\d{1,2}\. *")
_BLANK_LINE_RE = re.compile(r"\n\s*\n")
_EMPTY_ITEM_RE = re.compile(r"<li>[ \t]*(?=\n|</p>)")


def text_to_html(text: str) -> str:
    """Convert raw text into ``<p>`` paragraphs with ``<ul>``/``<ol>`` lists.

    Bullet lines (``-``, ``*``, ``•`` and friends) become unordered list items,
    ``1.`` style lines become ordered list items and blank lines separate
    paragraphs. Rows made only of dashes or stars are treated as blank lines.
    """

    if not text:
        return text

    markup = _SEPARATOR_LINE_RE.sub("\n\n", text)
    markup = _BULLET_RE.sub(LIST_ITEM + " ", markup)
    markup = _NUMBERED_RE.sub(ORDERED_LIST_ITEM + " ", markup)
    markup = f"{_PARAGRAPH_OPEN}{markup}{_PARAGRAPH_CLOSE}"
    markup = _BLANK_LINE_RE.sub(f"{_PARAGRAPH_CLOSE}\n{_PARAGRAPH_OPEN}", markup)
    markup = _EMPTY_ITEM_RE.sub("", markup)

    if LIST_ITEM in markup:
        return wrap_lists(markup, "ul")
    if ORDERED_LIST_ITEM in markup:
        return wrap_lists(markup.replace(ORDERED_LIST_ITEM, LIST_ITEM), "ol")
    return markup


def wrap_lists(markup: str, list_tag: str) -> str:
    """Wrap each run of ``<li>`` items in ``markup`` with a ``list_tag`` element.

    Every paragraph holding an item is split into the text before the items,
    the items themselves and any break-marked lines trailing them. Paragraphs
    are scanned once, front to back.
    """

    pieces: List[str] = []
    position = 0
    while True:
        start = markup.find(_PARAGRAPH_OPEN, position)
        if start == -1:
            break
        first_item = markup.find(LIST_ITEM, start)
        if first_item == -1:
            break
        end = markup.find(_PARAGRAPH_CLOSE, first_item)
        if end == -1:
            break

        head = markup[position:start]
        if pieces:
            head = "\n" + head.lstrip()
        prefix = markup[start + len(_PARAGRAPH_OPEN):first_item].strip()
        items, trailing = _split_trailing_lines(markup[first_item:end])

        pieces.append(
            f"{head}{_PARAGRAPH_OPEN}{prefix}\n<{list_tag}>\n{items}\n</{list_tag}>{_PARAGRAPH_CLOSE}"
        )
        if trailing:
            pieces.append(f"\n{_PARAGRAPH_OPEN}{trailing}{_PARAGRAPH_CLOSE}")
        position = end + len(_PARAGRAPH_CLOSE)

    if not pieces:
        return markup

    rest = markup[position:].strip()
    if rest:
        if not rest.startswith(_PARAGRAPH_OPEN):
            rest = f"{_PARAGRAPH_OPEN}{rest}{_PARAGRAPH_CLOSE}"
        pieces.append("\n" + rest)
    return "".join(pieces)


def _split_trailing_lines(run: str) -> Tuple[str, str]:
    position = run.find("\n" + LINE_BREAK)
    if position == -1:
        return run.strip(), ""
    return run[:position].strip(), run[position:].strip()


__all__ = ["LIST_ITEM", "ORDERED_LIST_ITEM", "LINE_BREAK", "text_to_html", "wrap_lists"]
