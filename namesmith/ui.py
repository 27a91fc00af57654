#!/usr/bin/env python3
"""
Terminal UI
===========
Rich-based rendering for the command-line interface.

Provides:
- Name tables with syllable breakdown
- Variation listings
- Preset overview
- Filter check verdicts

Usage:
    from namesmith.ui import get_ui

    ui = get_ui()
    ui.print_names(names, title="default preset")
    ui.print_presets(list_presets())
"""

import sys
from typing import Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .generators.name import Name

SYLLABLE_SEPARATOR = "·"


def _label(name: Name, capitalize: bool) -> str:
    return name.display() if capitalize else name.render()


class NamesUI:
    """
    Rich renderer for generated names.

    Example:
        ui = NamesUI()
        ui.print_names([Name(["ta", "ri"])], capitalize=True)
    """

    def __init__(self, console: Console = None):
        self.console = console or Console()
        self.err_console = Console(stderr=True)

    def print_names(self, names: Sequence[Name], title: str = None, capitalize: bool = False):
        table = Table(title=title, box=box.SIMPLE)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Name", style="bold")
        table.add_column("Syllables")

        for i, name in enumerate(names, 1):
            table.add_row(str(i), _label(name, capitalize), SYLLABLE_SEPARATOR.join(name.syllables))

        self.console.print(table)

    def print_variations(self, source: Name, variations: Sequence[Name], capitalize: bool = False):
        self.console.print(Text("Variations of ", style="dim") + Text(_label(source, capitalize), style="bold"))
        table = Table(box=box.SIMPLE)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Variation", style="bold")
        table.add_column("Changed")

        for i, variation in enumerate(variations, 1):
            changed = Text("yes", style="green") if variation != source else Text("no", style="dim")
            table.add_row(str(i), _label(variation, capitalize), changed)

        self.console.print(table)

    def print_presets(self, presets: Dict[str, str]):
        table = Table(title="Presets", box=box.SIMPLE)
        table.add_column("Preset", style="bold cyan")
        table.add_column("Description")
        for name, description in presets.items():
            table.add_row(name, description or "-")
        self.console.print(table)

    def print_check(self, name: str, matched: Optional[str]):
        if matched is None:
            self.console.print(Text("VALID", style="bold green") + Text(f"  {name}"))
        else:
            self.console.print(Text("REJECTED", style="bold red") + Text(f"  {name}  (matched {matched!r})"))

    def print_text(self, text: str):
        self.console.print(text, markup=False, highlight=False)

    def error(self, message: str):
        self.err_console.print(f"[bold red]Error:[/bold red] {message}", highlight=False)


# === Plain output for pipes and non-TTY ===

class PlainUI:
    """One item per line, no decoration. Used when stdout is not a terminal."""

    def print_names(self, names: Sequence[Name], title: str = None, capitalize: bool = False):
        for name in names:
            print(_label(name, capitalize))

    def print_variations(self, source: Name, variations: Sequence[Name], capitalize: bool = False):
        for variation in variations:
            print(_label(variation, capitalize))

    def print_presets(self, presets: Dict[str, str]):
        for name, description in presets.items():
            print(f"{name:<12} {description}")

    def print_check(self, name: str, matched: Optional[str]):
        if matched is None:
            print(f"VALID {name}")
        else:
            print(f"REJECTED {name} (matched {matched!r})")

    def print_text(self, text: str):
        print(text, end="" if text.endswith("\n") else "\n")

    def error(self, message: str):
        print(f"Error: {message}", file=sys.stderr)


def get_ui(plain: bool = None):
    """Get the appropriate UI for the current environment."""
    if plain is None:
        plain = not sys.stdout.isatty()
    return PlainUI() if plain else NamesUI()


__all__ = [
    'NamesUI',
    'PlainUI',
    'get_ui',
    'SYLLABLE_SEPARATOR',
]
