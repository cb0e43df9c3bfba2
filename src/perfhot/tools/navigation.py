"""Presentation and navigation adapters for terminal use."""

from __future__ import annotations

import shlex
import subprocess
from typing import Callable, Optional, Sequence

import typer

from perfhot.analysis.entry import Entry


class TerminalSink:
    """Print a numbered table, then report the pre-selected choice (0 cancels)."""

    def __init__(self, pick: Optional[int] = None, limit: Optional[int] = None):
        self.pick = pick
        self.limit = limit

    def select(
        self,
        entries: Sequence[Entry],
        *,
        prompt: str,
        format_item: Callable[[Entry], str],
        on_choice: Callable[[Optional[Entry]], None],
    ) -> None:
        shown = list(entries[: self.limit] if self.limit else entries)
        typer.echo(prompt.rstrip())
        if not shown:
            typer.echo("  (no entries)")
        width = len(str(len(shown)))
        for idx, entry in enumerate(shown, start=1):
            typer.echo(f"  {idx:>{width}}. {format_item(entry)}")
        choice = None
        if self.pick and 1 <= self.pick <= len(shown):
            choice = shown[self.pick - 1]
        on_choice(choice)


class EchoNavigator:
    def open(self, file: str, line: Optional[int] = None) -> None:
        typer.echo(f"{file}:{line}" if line is not None else file)


class EditorNavigator:
    """Open the location in an editor that accepts ``+LINE FILE``."""

    def __init__(self, command: str):
        self.command = command

    def open(self, file: str, line: Optional[int] = None) -> None:
        args = shlex.split(self.command)
        if line is not None:
            args.append(f"+{line}")
        args.append(file)
        subprocess.run(args, check=False)
