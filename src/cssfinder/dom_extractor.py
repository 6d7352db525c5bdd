from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from lxml import etree, html

from .config import FinderOptions
from .core import find_selector
from .lxml_tree import LxmlTree

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle

logger = logging.getLogger("cssfinder.capture")

_SNAPSHOT_SCRIPT = """
(target) => {
  const serialize = (el) => ({
    tag: (el.tagName || '').toLowerCase(),
    attributes: Array.from(el.attributes || []).map((attr) => [attr.name, attr.value]),
    children: Array.from(el.children || []).map(serialize),
  });

  const targetPath = [];
  let current = target;
  while (current && current !== document.documentElement) {
    const parent = current.parentElement;
    if (!parent) {
      return null;
    }
    targetPath.unshift(Array.prototype.indexOf.call(parent.children, current));
    current = parent;
  }
  if (!current) {
    return null;
  }

  return {
    root: serialize(document.documentElement),
    target_path: targetPath,
    title: document.title || '',
    url: location.href || '',
  };
}
"""


@dataclass(slots=True)
class PageSnapshot:
    document: etree._ElementTree
    target: Any
    title: str
    url: str
    node_count: int
    skipped_attributes: int = 0


def build_snapshot(payload: Mapping[str, Any]) -> PageSnapshot:
    root_payload = payload.get("root")
    if not isinstance(root_payload, Mapping):
        raise ValueError("Snapshot payload has no root element.")

    stats = {"nodes": 0, "skipped": 0}
    root = _build_element(None, root_payload, stats)
    if root is None:
        raise ValueError(f"Unsupported document element tag: {root_payload.get('tag')!r}")

    target = root
    for index in payload.get("target_path", []):
        children = [child for child in target if isinstance(child.tag, str)]
        position = int(index)
        if position < 0 or position >= len(children):
            raise ValueError("Snapshot target path does not resolve to an element.")
        target = children[position]

    if stats["skipped"]:
        logger.debug("Skipped %d attributes lxml cannot represent.", stats["skipped"])
    logger.debug("Snapshot holds %d elements.", stats["nodes"])
    return PageSnapshot(
        document=root.getroottree(),
        target=target,
        title=str(payload.get("title", "") or ""),
        url=str(payload.get("url", "") or ""),
        node_count=stats["nodes"],
        skipped_attributes=stats["skipped"],
    )


def _build_element(parent: Any | None, payload: Mapping[str, Any], stats: dict[str, int]) -> Any | None:
    tag = str(payload.get("tag", "") or "").strip().lower()
    try:
        element = html.Element(tag) if parent is None else etree.SubElement(parent, tag)
    except ValueError:
        # Keep sibling indexes aligned with the live page.
        logger.debug("Replacing unsupported tag %r with a placeholder.", tag)
        if parent is None:
            return None
        element = etree.SubElement(parent, "x-unsupported")
    stats["nodes"] += 1

    for item in payload.get("attributes", []):
        name, value = str(item[0]), str(item[1])
        try:
            element.set(name, value)
        except ValueError:
            stats["skipped"] += 1

    for child in payload.get("children", []):
        if isinstance(child, Mapping):
            _build_element(element, child, stats)
    return element


def snapshot_element(element: ElementHandle) -> PageSnapshot:
    payload = element.evaluate(_SNAPSHOT_SCRIPT)
    if not payload:
        raise ValueError("Element is not attached to the page document.")
    return build_snapshot(payload)


def find_selector_for_handle(element: ElementHandle, options: FinderOptions | None = None) -> str:
    snapshot = snapshot_element(element)
    return find_selector(snapshot.target, options, tree=LxmlTree())
