"""Terminal diagnostics for the YAML test processor.

Warnings and errors go to stderr through a shared Rich console so that
stdout stays reserved for the JSON report.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# Shared console instance (stderr, stdout carries the report)
console = Console(stderr=True)

# Suppresses info and warning output; errors are always printed
quiet: bool = False

ICONS = {
    "cross": "✗",
    "warning": "⚠",
    "info": "ℹ",
    "file": "📄",
    "suite": "📦",
}


def print_info(message: str) -> None:
    """Print an informational line."""
    if quiet:
        return
    console.print(f"[dim]{ICONS['info']} {escape(message)}[/dim]")


def print_warning(message: str) -> None:
    """Print a non-fatal warning."""
    if quiet:
        return
    console.print(f"[yellow]{ICONS['warning']} {escape(message)}[/yellow]")


def print_error(message: str) -> None:
    """Print an error line."""
    console.print(f"[bold red]{ICONS['cross']} {escape(message)}[/bold red]")
