import pytest

from cssfinder.dom_extractor import build_snapshot, find_selector_for_handle, snapshot_element
from cssfinder.core import find_selector
from cssfinder.lxml_tree import LxmlTree, is_document


def _node(tag: str, attributes=None, children=None) -> dict:
    return {"tag": tag, "attributes": attributes or [], "children": children or []}


PAYLOAD = {
    "root": _node(
        "html",
        [["lang", "en"]],
        [
            _node("head", children=[_node("title")]),
            _node(
                "body",
                children=[
                    _node(
                        "ul",
                        [["class", "menu"]],
                        [_node("li"), _node("li", [["class", "active"]])],
                    )
                ],
            ),
        ],
    ),
    "target_path": [1, 0, 1],
    "title": "Demo",
    "url": "https://example.test/",
}


class _FakeHandle:
    def __init__(self, payload) -> None:
        self.payload = payload
        self.scripts: list[str] = []

    def evaluate(self, script: str):
        self.scripts.append(script)
        return self.payload


def test_build_snapshot_rebuilds_tree_and_target() -> None:
    snapshot = build_snapshot(PAYLOAD)
    tree = LxmlTree()

    assert is_document(snapshot.document)
    assert snapshot.document.getroot().get("lang") == "en"
    assert tree.tag_name(snapshot.target) == "li"
    assert tree.class_names(snapshot.target) == ["active"]
    assert snapshot.node_count == 7
    assert snapshot.title == "Demo"
    assert snapshot.url == "https://example.test/"


def test_snapshot_target_gets_a_selector() -> None:
    snapshot = build_snapshot(PAYLOAD)
    assert find_selector(snapshot.target, tree=LxmlTree()) == ".active"


def test_unrepresentable_attributes_are_skipped() -> None:
    payload = {
        "root": _node("html", children=[_node("body", children=[_node("p", [["title", "bell\x07"], ["class", "note"]])])]),
        "target_path": [0, 0],
    }

    snapshot = build_snapshot(payload)

    assert snapshot.skipped_attributes == 1
    assert snapshot.target.get("class") == "note"
    assert snapshot.target.get("title") is None


def test_unsupported_tags_keep_sibling_positions() -> None:
    payload = {
        "root": _node("html", children=[_node("body", children=[_node("my tag"), _node("p"), _node("p")])]),
        "target_path": [0, 2],
    }

    snapshot = build_snapshot(payload)
    tree = LxmlTree()

    assert [tree.tag_name(child) for child in tree.children(tree.parent(snapshot.target))] == ["x-unsupported", "p", "p"]
    assert tree.index_of(snapshot.target) == 3


def test_invalid_payloads_are_rejected() -> None:
    with pytest.raises(ValueError):
        build_snapshot({})
    with pytest.raises(ValueError):
        build_snapshot({"root": _node("html"), "target_path": [3]})
    with pytest.raises(ValueError):
        build_snapshot({"root": _node("")})


def test_detached_handle_cannot_be_snapshotted() -> None:
    with pytest.raises(ValueError):
        snapshot_element(_FakeHandle(None))


def test_find_selector_for_handle_uses_page_snapshot() -> None:
    handle = _FakeHandle(PAYLOAD)

    assert find_selector_for_handle(handle) == ".active"
    assert len(handle.scripts) == 1
