"""Unique, human-readable CSS selectors for elements of an HTML tree."""

from __future__ import annotations

from .config import FinderOptions, resolve_options
from .errors import (
    BudgetExhaustedError,
    FinderCancelled,
    FinderError,
    FinderTimeoutError,
    InvalidTargetError,
    SelectorMatchError,
    SelectorNotFoundError,
)
from .core import find_selector, finder
from .lxml_tree import LxmlTree, parse_document
from .selector_rules import attr, class_name, id_name, is_word_like, tag_name
from .tree import TreeAdapter, css_escape

__version__ = "0.1.0"

__all__ = [
    "BudgetExhaustedError",
    "FinderCancelled",
    "FinderError",
    "FinderOptions",
    "FinderTimeoutError",
    "InvalidTargetError",
    "LxmlTree",
    "SelectorMatchError",
    "SelectorNotFoundError",
    "TreeAdapter",
    "attr",
    "class_name",
    "css_escape",
    "find_selector",
    "finder",
    "id_name",
    "is_word_like",
    "parse_document",
    "resolve_options",
    "tag_name",
]
