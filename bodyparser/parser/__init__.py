"""Article body segmentation, classification and reformatting."""

from .body import BodyParser
from .elements import BodyElement, ElementDisplay, ElementType
from .formatters import format_body, format_summary
from .promoter import text_to_html
from .rules import FieldExclude, FieldFilter, FilterResult, FilterScope

__all__ = [
    "BodyElement",
    "BodyParser",
    "ElementDisplay",
    "ElementType",
    "FieldExclude",
    "FieldFilter",
    "FilterResult",
    "FilterScope",
    "format_body",
    "format_summary",
    "text_to_html",
]
