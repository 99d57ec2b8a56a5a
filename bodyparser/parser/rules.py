"""Exclude rules that prune the tree and filters that drop finished elements."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Pattern

from bodyparser.parser.nodes import DocumentNode


class FilterScope(str, Enum):
    ALL = "all"
    BODY = "body"
    SUMMARY = "summary"


class FilterResult(str, Enum):
    PASS = "pass"
    SKIP = "skip"
    STOP = "stop"


@dataclass(frozen=True)
class FieldExclude:
    """Drop any element matching ``tag``, ``tag.class`` or ``tag#id``."""

    tag: str = ""
    css_class: str = ""
    element_id: str = ""

    @classmethod
    def parse(cls, expr: str) -> "FieldExclude":
        expr = expr.strip()
        if not expr:
            raise ValueError("Exclude expression must not be empty")
        if "." in expr:
            tag, _, css_class = expr.partition(".")
            return cls(tag=tag.strip().lower(), css_class=css_class.strip())
        if "#" in expr:
            tag, _, element_id = expr.partition("#")
            return cls(tag=tag.strip().lower(), element_id=element_id.strip())
        return cls(tag=expr.lower())

    def matches(self, node: DocumentNode) -> bool:
        if not node.is_element:
            return False
        if self.tag and node.tag != self.tag:
            return False
        if self.css_class and not node.has_class(self.css_class):
            return False
        if self.element_id and node.element_id != self.element_id:
            return False
        return True


def apply_excludes(rules: Iterable[FieldExclude], node: DocumentNode) -> bool:
    return any(rule.matches(node) for rule in rules)


@dataclass
class FieldFilter:
    """Skip (or stop at) elements whose whole text matches ``expr``.

    ``predicate`` replaces the regular expression when given. Filters scoped
    to :attr:`FilterScope.ALL` run for both the body and the summary.
    """

    expr: str = ""
    scope: FilterScope = FilterScope.ALL
    stop: bool = False
    predicate: Optional[Callable[[str], bool]] = None
    _pattern: Optional[Pattern[str]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.scope = FilterScope(self.scope)
        if self.predicate is None:
            if not self.expr:
                raise ValueError("A filter needs either an expression or a predicate")
            self._pattern = re.compile(self.expr, re.DOTALL)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FieldFilter":
        scope = str(data.get("scope", FilterScope.ALL.value)).strip().lower()
        return cls(
            expr=str(data.get("expr", "")),
            scope=FilterScope(scope),
            stop=bool(data.get("stop", False)),
        )

    def applies(self, scope: FilterScope) -> bool:
        return self.scope == FilterScope.ALL or self.scope == scope

    def matches(self, text: str) -> bool:
        if self._pattern is not None:
            return self._pattern.fullmatch(text) is not None
        return bool(self.predicate(text))

    def apply(self, text: str) -> FilterResult:
        if not self.matches(text):
            return FilterResult.PASS
        return FilterResult.STOP if self.stop else FilterResult.SKIP


def apply_filters(filters: Iterable[FieldFilter], text: str, scope: FilterScope) -> FilterResult:
    for item in filters:
        if not item.applies(scope):
            continue
        result = item.apply(text)
        if result is not FilterResult.PASS:
            return result
    return FilterResult.PASS


__all__ = [
    "FieldExclude",
    "FieldFilter",
    "FilterResult",
    "FilterScope",
    "apply_excludes",
    "apply_filters",
]
