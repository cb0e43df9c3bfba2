"""Call graph access and hottest-table builders."""

from .callgraph import CallGraph, NodeInfo, SymbolInfo, Trace, build_callgraph
from .entry import (
    SYMBOL_FILE,
    Entry,
    LineEntry,
    SymbolEntry,
    SymbolLocationEntry,
    entry_from_line,
    entry_from_symbol,
)
from .formatter import format_entry, shorten_path
from .hottest import hottest_callers_table, hottest_lines_table, hottest_symbols_table
from .loader import LoadedGraphs, load_callgraphs, parse_callgraphs

__all__ = [
    "CallGraph",
    "NodeInfo",
    "SymbolInfo",
    "Trace",
    "build_callgraph",
    "SYMBOL_FILE",
    "Entry",
    "LineEntry",
    "SymbolEntry",
    "SymbolLocationEntry",
    "entry_from_line",
    "entry_from_symbol",
    "format_entry",
    "shorten_path",
    "hottest_lines_table",
    "hottest_symbols_table",
    "hottest_callers_table",
    "LoadedGraphs",
    "load_callgraphs",
    "parse_callgraphs",
]
