"""Shared rich console for status, warnings and diagnostics."""

from rich.console import Console

console = Console()
