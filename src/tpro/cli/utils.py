"""Shared CLI utilities."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from tpro.utils.console import console


def read_input(source: str) -> str:
    """Read text from a file path, or from stdin when source is "-"."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        console.print(f"[red]File not found:[/red] {source}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8-sig")
