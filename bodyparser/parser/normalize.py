"""Whitespace and punctuation clean-up applied to every text segment."""
from __future__ import annotations

import re
from functools import reduce
from typing import Callable, Tuple

_NBSP_RE = re.compile("\u00a0")
_THIN_SPACE_RE = re.compile("[\u2005\u2009\u202f]")
# Each whitespace run is entered only from its lookbehind, so it is scanned once.
_SPACE_BEFORE_PUNCTUATION_RE = re.compile(r"(?<=\w)[ ]+(?=[.?!])")
_INTERIOR_WHITESPACE_RE = re.compile(r"(?<=\S)\s+(?=\S)")


def fold_nbsp(text: str) -> str:
    return _NBSP_RE.sub(" ", text)


def fold_thin_spaces(text: str) -> str:
    return _THIN_SPACE_RE.sub(" ", text)


def collapse_space_before_punctuation(text: str) -> str:
    """Join a word and the sentence punctuation that follows it: ``end .`` -> ``end.``."""

    return _SPACE_BEFORE_PUNCTUATION_RE.sub("", text)


def collapse_interior_whitespace(text: str) -> str:
    return _INTERIOR_WHITESPACE_RE.sub(" ", text)


def trim(text: str) -> str:
    return text.strip()


NORMALIZERS: Tuple[Callable[[str], str], ...] = (
    fold_nbsp,
    fold_thin_spaces,
    collapse_space_before_punctuation,
    collapse_interior_whitespace,
    trim,
)


def normalize(text: str) -> str:
    """Run ``text`` through each of ``NORMALIZERS`` in order."""

    return reduce(lambda value, step: step(value), NORMALIZERS, text)


__all__ = [
    "NORMALIZERS",
    "collapse_interior_whitespace",
    "collapse_space_before_punctuation",
    "fold_nbsp",
    "fold_thin_spaces",
    "normalize",
    "trim",
]
