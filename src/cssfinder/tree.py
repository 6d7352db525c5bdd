from __future__ import annotations

import string
from typing import Any, Protocol, Sequence


class TreeAdapter(Protocol):
    """Read-only view over a host document used by the finder.

    Nodes and scopes are opaque to the engine; only the adapter inspects
    them.
    """

    def is_element(self, node: Any) -> bool: ...

    def same_node(self, left: Any, right: Any) -> bool: ...

    def parent(self, node: Any) -> Any | None: ...

    def children(self, node: Any) -> Sequence[Any]: ...

    def tag_name(self, node: Any) -> str: ...

    def get_id(self, node: Any) -> str | None: ...

    def class_names(self, node: Any) -> Sequence[str]: ...

    def attributes(self, node: Any) -> Sequence[tuple[str, str]]: ...

    def index_of(self, node: Any, tag: str | None = None) -> int | None: ...

    def escape(self, value: str) -> str: ...

    def resolve_scope(self, root: Any | None, node: Any) -> Any: ...

    def query_all(self, selector: str, scope: Any) -> Sequence[Any]: ...


def css_escape(value: str) -> str:
    """Serialize ``value`` as a CSS identifier (CSSOM ``CSS.escape``).

    A hex digit right after a backslash is written as a code point escape,
    otherwise cssselect reads the escaped backslash and the digit as one
    hex escape.
    """
    escaped: list[str] = []
    first = value[:1]
    for index, char in enumerate(value):
        code = ord(char)
        after_backslash = index > 0 and value[index - 1] == "\\"
        if code == 0:
            escaped.append("\ufffd")
        elif (
            0x01 <= code <= 0x1F
            or code == 0x7F
            or (index == 0 and "0" <= char <= "9")
            or (index == 1 and "0" <= char <= "9" and first == "-")
            or (after_backslash and char in string.hexdigits)
        ):
            escaped.append(f"\\{code:x} ")
        elif index == 0 and char == "-" and len(value) == 1:
            escaped.append("\\-")
        elif code >= 0x80 or char in "-_" or (char.isascii() and char.isalnum()):
            escaped.append(char)
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)
