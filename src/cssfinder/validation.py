from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

logger = logging.getLogger("cssfinder.capture")


@dataclass(frozen=True, slots=True)
class SelectorValidation:
    unique: bool
    match_count: int
    same_element: bool
    message: str


def count_selector_matches(page: Page, selector: str) -> int:
    text = str(selector or "").strip()
    if not text:
        return 0
    try:
        return len(page.query_selector_all(text))
    except Exception as exc:
        logger.debug("Selector %r could not be evaluated: %s", text, exc)
        return 0


def validate_selector(page: Page, selector: str, element: ElementHandle) -> SelectorValidation:
    match_count = count_selector_matches(page, selector)
    if match_count == 0:
        return SelectorValidation(False, 0, False, "Selector matches nothing on the live page.")
    if match_count > 1:
        return SelectorValidation(False, match_count, False, "Selector is not unique on the live page.")

    match = page.query_selector(selector)
    same = bool(match is not None and element.evaluate("(el, other) => el === other", match))
    if not same:
        return SelectorValidation(True, 1, False, "Selector matches a different element on the live page.")
    return SelectorValidation(True, 1, True, "Selector is unique and matches the element.")
