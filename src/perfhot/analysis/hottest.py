"""Hottest lines / symbols / callers tables."""

from __future__ import annotations

import logging
from typing import List

from perfhot.core.display import DisplayPolicy

from .callgraph import CallGraph
from .entry import SYMBOL_FILE, Entry, entry_from_line, entry_from_symbol, sort_key

logger = logging.getLogger(__name__)


def hottest_lines_table(graph: CallGraph, policy: DisplayPolicy) -> List[Entry]:
    """Every sampled line that clears the display threshold, hottest first.

    Symbol-only samples from the pseudo-file show up as symbol entries.
    """
    entries = [
        entry_from_line(file, line, count)
        for file, line, count in graph.iter_lines()
        if policy.should_display(count, graph.total_count)
    ]
    entries.sort(key=sort_key)
    logger.debug("Hottest lines: event=%s entries=%d", graph.event, len(entries))
    return entries


def hottest_symbols_table(graph: CallGraph, policy: DisplayPolicy) -> tuple[List[Entry], int]:
    """Located symbols plus symbol-only samples, hottest first."""
    entries: list[Entry] = [
        entry_from_symbol(graph, file, name)
        for file, name, info in graph.iter_symbols()
        if policy.should_display(info.count, graph.total_count)
    ]
    for name, info in graph.node_info.get(SYMBOL_FILE, {}).items():
        if policy.should_display(info.count, graph.total_count):
            entries.append(entry_from_line(SYMBOL_FILE, name, info.count))
    entries.sort(key=sort_key)
    logger.debug("Hottest symbols: event=%s entries=%d", graph.event, len(entries))
    return entries, graph.total_count


def hottest_callers_table(
    graph: CallGraph,
    file: str,
    line_begin: int,
    line_end: int,
    policy: DisplayPolicy,
) -> tuple[List[Entry], int]:
    """Callers of the inclusive line range, ranked against the range's own total."""
    lines = []
    region_total = 0
    if file == SYMBOL_FILE:
        return [], 0
    for line in graph.node_info.get(file, {}):
        if line_begin <= line <= line_end:
            lines.append((file, line))
            region_total += graph.line_count(file, line)

    if not lines:
        logger.debug("No sampled lines in %s:%d-%d", file, line_begin, line_end)
        return [], 0

    in_counts = graph.merge_caller_counts(lines)
    entries = [
        entry_from_line(in_file, in_line, count)
        for in_file, by_line in in_counts.items()
        for in_line, count in by_line.items()
        if policy.should_display(count, region_total)
    ]
    entries.sort(key=sort_key)
    logger.debug(
        "Hottest callers: event=%s region=%s:%d-%d lines=%d total=%d entries=%d",
        graph.event,
        file,
        line_begin,
        line_end,
        len(lines),
        region_total,
        len(entries),
    )
    return entries, region_total
