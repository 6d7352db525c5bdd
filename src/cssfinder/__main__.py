from __future__ import annotations

from .cli import app


def main() -> None:
    app(prog_name="cssfinder")


if __name__ == "__main__":
    main()
