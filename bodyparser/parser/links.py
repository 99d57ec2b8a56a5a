"""Bare URL detection and conversion into anchors."""
from __future__ import annotations

from typing import Dict, Optional

from bleach.callbacks import nofollow, target_blank
from bleach.linkifier import Linker, build_url_re

URL_PATTERN = build_url_re()


def extract_url(text: str) -> Optional[str]:
    if not text:
        return None
    match = URL_PATTERN.search(text)
    return match.group(0).lstrip("(") if match else None


def label_without_query(attrs: Dict, new: bool = False) -> Dict:
    """Show new links without their query string."""

    if new:
        attrs["_text"] = attrs["_text"].split("?", 1)[0]
    return attrs


_LINKER = Linker(
    callbacks=[target_blank, nofollow, label_without_query],
    url_re=URL_PATTERN,
    parse_email=False,
)


def replace_urls(markup: str) -> str:
    """Turn every bare URL in ``markup`` into a ``nofollow`` anchor; the label drops the query."""

    if not markup:
        return markup
    return _LINKER.linkify(markup)


__all__ = ["URL_PATTERN", "extract_url", "label_without_query", "replace_urls"]
