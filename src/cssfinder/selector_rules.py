from __future__ import annotations

import re

ACCEPTED_ATTR_NAMES = frozenset({"role", "name", "aria-label", "rel", "href"})
DATA_ATTR_PREFIX = "data-"
ID_REFERENCE_PREFIX = "#"
MAX_ATTRIBUTE_VALUE_LENGTH = 100
MIN_WORD_SEGMENT_LENGTH = 2

_WORDLIKE_BASE = re.compile(r"^[a-z\-]{3,}$", re.IGNORECASE)
_WORD_SPLIT = re.compile(r"-|[A-Z]")
_CONSONANT_RUN = re.compile(r"[^aeiou]{4,}", re.IGNORECASE)


def is_word_like(value: str) -> bool:
    """Heuristic filter for human-meaningful tokens.

    Generated names such as ``css-175oi2r`` or ``jsx-xkcd`` are rejected.
    The value must be at least three letters or hyphens; every segment
    (split on ``-`` and on uppercase letters, which are consumed by the
    split) must be longer than two characters and must not hold four or more
    consecutive non-vowels.
    """
    if not _WORDLIKE_BASE.match(value):
        return False
    for word in _WORD_SPLIT.split(value):
        if len(word) <= MIN_WORD_SEGMENT_LENGTH:
            return False
        if _CONSONANT_RUN.search(word):
            return False
    return True


def id_name(name: str) -> bool:
    return is_word_like(name)


def class_name(name: str) -> bool:
    return is_word_like(name)


def tag_name(_name: str) -> bool:
    return True


def attr(name: str, value: str) -> bool:
    name_ok = name in ACCEPTED_ATTR_NAMES or (name.startswith(DATA_ATTR_PREFIX) and is_word_like(name))

    value_ok = is_word_like(value) and len(value) < MAX_ATTRIBUTE_VALUE_LENGTH
    # Values that reference another element, e.g. aria-describedby="#hint".
    if not value_ok and value.startswith(ID_REFERENCE_PREFIX):
        value_ok = is_word_like(value[len(ID_REFERENCE_PREFIX):])

    return name_ok and value_ok


def reject_all(*_args: str) -> bool:
    return False
