from pathlib import Path
from types import SimpleNamespace

import playwright.sync_api
import pytest
from typer.testing import CliRunner

from cssfinder.cli import app

runner = CliRunner()

MARKUP = """
<html><body>
  <section id="alpha"><div><p>one</p></div></section>
  <section id="beta"><div><p>two</p></div></section>
</body></html>
"""


def _write(tmp_path: Path) -> Path:
    path = tmp_path / "page.html"
    path.write_text(MARKUP, encoding="utf-8")
    return path


def test_file_command_prints_selectors(tmp_path: Path) -> None:
    result = runner.invoke(app, ["file", str(_write(tmp_path)), "--query", "p"])

    assert result.exit_code == 0, result.output
    assert "#alpha p" in result.output
    assert "#beta p" in result.output


def test_file_command_with_root_scope(tmp_path: Path) -> None:
    result = runner.invoke(app, ["file", str(_write(tmp_path)), "-q", "p", "--root", "#beta"])

    assert result.exit_code == 0, result.output
    assert "#beta p" not in result.output


def test_file_command_rejects_ambiguous_root(tmp_path: Path) -> None:
    result = runner.invoke(app, ["file", str(_write(tmp_path)), "--root", "section"])

    assert result.exit_code == 2


def test_file_command_requires_existing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["file", str(tmp_path / "missing.html")])

    assert result.exit_code != 0


class _FakeHandle:
    def __init__(self, payload) -> None:
        self.payload = payload

    def evaluate(self, script: str, other=None):
        if other is None:
            return self.payload
        return other is self


class _FakePage:
    def __init__(self, matches: dict) -> None:
        self.matches = matches

    def goto(self, url: str) -> None:
        self.url = url

    def query_selector_all(self, selector: str) -> list:
        return list(self.matches.get(selector, []))

    def query_selector(self, selector: str):
        found = self.matches.get(selector, [])
        return found[0] if found else None


class _FakeBrowser:
    def __init__(self, page: _FakePage) -> None:
        self.page = page
        self.closed = False

    def new_page(self) -> _FakePage:
        return self.page

    def close(self) -> None:
        self.closed = True


class _FakePlaywright:
    def __init__(self, browser: _FakeBrowser) -> None:
        self.chromium = SimpleNamespace(launch=lambda headless: browser)

    def __enter__(self) -> "_FakePlaywright":
        return self

    def __exit__(self, *exc_info) -> bool:
        return False


def _menu_payload() -> dict:
    def node(tag: str, attributes=None, children=None) -> dict:
        return {"tag": tag, "attributes": attributes or [], "children": children or []}

    return {
        "root": node(
            "html",
            children=[
                node("head"),
                node("body", children=[node("ul", children=[node("li"), node("li", [["class", "active"]])])]),
            ],
        ),
        "target_path": [1, 0, 1],
    }


def test_url_command_reports_detached_elements_and_continues(monkeypatch: pytest.MonkeyPatch) -> None:
    detached = _FakeHandle(None)
    active = _FakeHandle(_menu_payload())
    page = _FakePage({"li": [detached, active], ".active": [active]})
    browser = _FakeBrowser(page)
    monkeypatch.setattr(playwright.sync_api, "sync_playwright", lambda: _FakePlaywright(browser))

    result = runner.invoke(app, ["url", "https://example.test/", "--query", "li"])

    assert result.exit_code == 1, result.output
    assert ".active" in result.output
    assert browser.closed
    assert page.url == "https://example.test/"


def test_url_command_explains_missing_browser(monkeypatch: pytest.MonkeyPatch) -> None:
    def _launch_fails() -> _FakePlaywright:
        raise RuntimeError(
            "BrowserType.launch: Executable doesn't exist at /root/.cache/ms-playwright/chromium-1091/chrome-linux/chrome"
        )

    monkeypatch.setattr(playwright.sync_api, "sync_playwright", _launch_fails)

    result = runner.invoke(app, ["url", "https://example.test/", "--query", "a"])

    assert result.exit_code == 2
    assert "playwright install chromium" in result.output


def test_url_command_propagates_other_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def _offline() -> _FakePlaywright:
        raise RuntimeError("net::ERR_NAME_NOT_RESOLVED at https://example.test/")

    monkeypatch.setattr(playwright.sync_api, "sync_playwright", _offline)

    result = runner.invoke(app, ["url", "https://example.test/", "--query", "a"])

    assert result.exit_code == 1
    assert isinstance(result.exception, RuntimeError)
