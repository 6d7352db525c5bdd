from __future__ import annotations

from functools import lru_cache
from typing import Any

from lxml import etree, html
from lxml.cssselect import CSSSelector

from .tree import css_escape


@lru_cache(maxsize=4096)
def _compile(selector: str) -> CSSSelector:
    return CSSSelector(selector, translator="html")


def parse_document(markup: str | bytes) -> etree._ElementTree:
    return html.document_fromstring(markup).getroottree()


def is_document(value: Any) -> bool:
    return isinstance(value, etree._ElementTree)


class LxmlTree:
    """TreeAdapter for ``lxml.html`` documents, queried through cssselect.

    A document is represented by its ``ElementTree``; elements are the
    parser's ``HtmlElement`` objects. Comments and processing instructions
    are not elements.
    """

    def is_element(self, node: Any) -> bool:
        return etree.iselement(node) and isinstance(node.tag, str)

    def same_node(self, left: Any, right: Any) -> bool:
        return left is right

    def parent(self, node: Any) -> Any | None:
        return node.getparent()

    def children(self, node: Any) -> list[Any]:
        return [child for child in node if isinstance(child.tag, str)]

    def tag_name(self, node: Any) -> str:
        return str(node.tag).lower()

    def get_id(self, node: Any) -> str | None:
        return node.get("id")

    def class_names(self, node: Any) -> list[str]:
        seen: set[str] = set()
        names: list[str] = []
        for item in (node.get("class") or "").split():
            if item in seen:
                continue
            seen.add(item)
            names.append(item)
        return names

    def attributes(self, node: Any) -> list[tuple[str, str]]:
        return [(str(name), str(value)) for name, value in node.items()]

    def index_of(self, node: Any, tag: str | None = None) -> int | None:
        parent = node.getparent()
        if parent is None:
            # The document element is the only element child of its document.
            return 1 if node is node.getroottree().getroot() else None
        index = 0
        for child in self.children(parent):
            if tag is None or self.tag_name(child) == tag:
                index += 1
            if child is node:
                return index
        return None

    def escape(self, value: str) -> str:
        return css_escape(value)

    def resolve_scope(self, root: Any | None, node: Any) -> Any:
        if root is None:
            return node.getroottree()
        if is_document(root):
            return root
        if self._is_document_body(root):
            return root.getroottree()
        return root

    def query_all(self, selector: str, scope: Any) -> list[Any]:
        compiled = _compile(selector)
        if is_document(scope):
            return list(compiled(scope.getroot()))
        # Like Element.querySelectorAll: the scope itself is never a match.
        return [match for match in compiled(scope) if match is not scope]

    def _is_document_body(self, node: Any) -> bool:
        if not self.is_element(node) or self.tag_name(node) != "body":
            return False
        parent = node.getparent()
        return parent is not None and parent is node.getroottree().getroot()
