"""Result records shared by every hottest-table query.

An entry is one of three shapes:

* ``LineEntry`` - a sampled file/line with no known symbol,
* ``SymbolEntry`` - a symbol with no known file/line,
* ``SymbolLocationEntry`` - a symbol together with the file and the lowest
  line belonging to it.

All three expose ``symbol``, ``file``, ``line`` and ``count`` so formatting
and navigation can treat them uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .callgraph import CallGraph

# Pseudo-file under which samples known only by symbol name are stored.
SYMBOL_FILE = "symbol"


@dataclass(frozen=True)
class LineEntry:
    file: str
    line: int
    count: int
    symbol: Optional[str] = field(default=None, init=False)


@dataclass(frozen=True)
class SymbolEntry:
    symbol: str
    count: int
    file: Optional[str] = field(default=None, init=False)
    line: Optional[int] = field(default=None, init=False)


@dataclass(frozen=True)
class SymbolLocationEntry:
    symbol: str
    file: str
    line: int
    count: int


Entry = Union[LineEntry, SymbolEntry, SymbolLocationEntry]


def entry_from_line(file: str, line: int | str, count: int) -> Entry:
    """Build an entry for a sampled location.

    When ``file`` is the ``"symbol"`` pseudo-file, ``line`` holds a bare
    symbol name instead of a line number.
    """
    if file == SYMBOL_FILE:
        return SymbolEntry(symbol=str(line), count=count)
    return LineEntry(file=file, line=int(line), count=count)


def entry_from_symbol(graph: "CallGraph", file: str, symbol: str) -> SymbolLocationEntry:
    info = graph.symbols[file][symbol]
    return SymbolLocationEntry(symbol=symbol, file=file, line=info.min_line, count=info.count)


def sort_key(entry: Entry) -> tuple:
    """Count descending, then file, line and symbol for reproducible ties."""
    return (-entry.count, entry.file or "", entry.line or 0, entry.symbol or "")


def entry_to_dict(entry: Entry) -> dict:
    return {
        "symbol": entry.symbol,
        "file": entry.file,
        "line": entry.line,
        "count": entry.count,
    }
