"""Command line interface for cssfinder."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_OPTIMIZED_MIN_LENGTH, DEFAULT_SEED_MIN_LENGTH, DEFAULT_TIMEOUT_MS, FinderOptions
from .errors import FinderError
from .core import find_selector
from .lxml_tree import LxmlTree, parse_document

console = Console()
app = typer.Typer(help="cssfinder - unique CSS selectors for HTML elements")

# Fragments of the error Playwright raises when the browser build was never downloaded.
_BROWSER_MISSING_MARKERS = ("executable doesn't exist", "playwright install")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")


def _is_browser_missing(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(marker in message for marker in _BROWSER_MISSING_MARKERS)


def _build_options(
    root: Any | None,
    timeout_ms: float,
    seed_min_length: int,
    optimized_min_length: int,
    max_checks: Optional[int],
) -> FinderOptions:
    return FinderOptions(
        root=root,
        timeout_ms=timeout_ms,
        seed_min_length=seed_min_length,
        optimized_min_length=optimized_min_length,
        max_number_of_path_checks=math.inf if max_checks is None else max_checks,
        # Nothing else shares the event loop in the CLI.
        scheduling_strategy=None,
    )


def _describe(tree: LxmlTree, element: Any) -> str:
    pieces = [tree.tag_name(element)]
    element_id = tree.get_id(element)
    if element_id:
        pieces.append(f"#{element_id}")
    pieces.extend(f".{name}" for name in tree.class_names(element)[:2])
    return "".join(pieces)


def _results_table(title: str, with_live_check: bool = False) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Element")
    table.add_column("Selector", style="cyan", overflow="fold")
    if with_live_check:
        table.add_column("Live check")
    table.add_column("Error", style="red")
    return table


@app.command("file")
def file_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="HTML file to inspect."),
    query: str = typer.Option("*", "--query", "-q", help="CSS selector choosing the elements to describe."),
    root: Optional[str] = typer.Option(None, "--root", help="CSS selector of the element used as search scope."),
    timeout_ms: float = typer.Option(DEFAULT_TIMEOUT_MS, "--timeout-ms", help="Search timeout per element."),
    seed_min_length: int = typer.Option(DEFAULT_SEED_MIN_LENGTH, help="Ancestor levels before the first candidates."),
    optimized_min_length: int = typer.Option(DEFAULT_OPTIMIZED_MIN_LENGTH, help="Minimum path length to optimize."),
    max_checks: Optional[int] = typer.Option(None, "--max-checks", help="Maximum number of candidate checks."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print a unique selector for every matching element of an HTML file."""
    _setup_logging(verbose)
    tree = LxmlTree()
    document = parse_document(path.read_bytes())

    scope: Any = document
    if root:
        roots = tree.query_all(root, document)
        if len(roots) != 1:
            raise typer.BadParameter(f"--root must match exactly one element, got {len(roots)}.")
        scope = roots[0]

    options = _build_options(None if root is None else scope, timeout_ms, seed_min_length, optimized_min_length, max_checks)
    table = _results_table(str(path))
    failures = 0
    for number, element in enumerate(tree.query_all(query, scope), start=1):
        try:
            css = find_selector(element, options, tree=tree)
            error = ""
        except FinderError as exc:
            failures += 1
            css, error = "", str(exc)
        table.add_row(str(number), _describe(tree, element), Text(css), Text(error))

    console.print(table)
    if failures:
        raise typer.Exit(code=1)


@app.command("url")
def url_command(
    url: str = typer.Argument(..., help="Page to open."),
    query: str = typer.Option(..., "--query", "-q", help="CSS selector choosing the elements to describe."),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window."),
    timeout_ms: float = typer.Option(DEFAULT_TIMEOUT_MS, "--timeout-ms", help="Search timeout per element."),
    seed_min_length: int = typer.Option(DEFAULT_SEED_MIN_LENGTH, help="Ancestor levels before the first candidates."),
    optimized_min_length: int = typer.Option(DEFAULT_OPTIMIZED_MIN_LENGTH, help="Minimum path length to optimize."),
    max_checks: Optional[int] = typer.Option(None, "--max-checks", help="Maximum number of candidate checks."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Open a page in Chromium and print verified selectors for matching elements."""
    from playwright.sync_api import sync_playwright

    from .dom_extractor import snapshot_element
    from .validation import validate_selector

    _setup_logging(verbose)
    options = _build_options(None, timeout_ms, seed_min_length, optimized_min_length, max_checks)
    tree = LxmlTree()
    table = _results_table(url, with_live_check=True)
    failures = 0

    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=not headed)
            try:
                page = browser.new_page()
                page.goto(url)
                for number, handle in enumerate(page.query_selector_all(query), start=1):
                    snapshot = None
                    try:
                        snapshot = snapshot_element(handle)
                        css = find_selector(snapshot.target, options, tree=tree)
                    except (FinderError, ValueError) as exc:
                        failures += 1
                        label = _describe(tree, snapshot.target) if snapshot is not None else "-"
                        table.add_row(str(number), label, "", "", Text(str(exc)))
                        continue
                    validation = validate_selector(page, css, handle)
                    if not validation.same_element:
                        failures += 1
                    table.add_row(str(number), _describe(tree, snapshot.target), Text(css), validation.message, "")
            finally:
                browser.close()
    except Exception as exc:
        if _is_browser_missing(exc):
            console.print("[red]Chromium is not installed. Run `playwright install chromium`.[/red]")
            raise typer.Exit(code=2) from exc
        raise

    console.print(table)
    if failures:
        raise typer.Exit(code=1)