"""Render table entries as display lines."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from perfhot.core.display import DisplayPolicy

from .entry import Entry


def shorten_path(file: str, cwd: Optional[str | Path] = None) -> str:
    """Relative to ``cwd`` when inside it, else with the home directory as ``~``."""
    if not os.path.isabs(file):
        return file
    base = Path(cwd) if cwd is not None else Path.cwd()
    path = Path(file)
    try:
        return str(path.relative_to(base))
    except ValueError:
        pass
    home = Path.home()
    try:
        return str(Path("~") / path.relative_to(home))
    except ValueError:
        return file


def format_location(entry: Entry, cwd: Optional[str | Path] = None) -> Optional[str]:
    if not entry.file:
        return None
    path = shorten_path(entry.file, cwd)
    if entry.line is not None:
        path = f"{path}:{entry.line}"
    return path


def format_entry(
    entry: Entry,
    total_count: int,
    policy: DisplayPolicy,
    cwd: Optional[str | Path] = None,
) -> str:
    """``{count} {symbol} at {location}``, or whichever parts are known."""
    prefix = policy.format(entry.count, total_count)
    display = prefix or ""
    location = format_location(entry, cwd)

    if location:
        if entry.symbol:
            display = f"{display} {entry.symbol} at {location}"
        else:
            display = f"{display} {location}"
    elif entry.symbol:
        display = f"{display} {entry.symbol}"
    else:
        display = f"{display} ??"
    # Hidden counts leave no prefix; keep any padding the policy asked for.
    return display if prefix is not None else display[1:]
