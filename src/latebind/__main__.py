"""Latebind module entrypoint for `python -m latebind`."""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m latebind`."""
    app(prog_name="latebind")


if __name__ == "__main__":  # pragma: no cover - module execution guard
    main()
