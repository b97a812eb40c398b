"""Shared rich console."""

from rich.console import Console

console = Console(highlight=False)
