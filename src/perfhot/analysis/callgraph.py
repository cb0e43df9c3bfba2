"""Per-event call graph consumed by the hottest-table queries."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .entry import SYMBOL_FILE

logger = logging.getLogger(__name__)

# (file, line) for located frames, ("symbol", name) for symbol-only frames.
Location = Tuple[str, object]


@dataclass(frozen=True)
class NodeInfo:
    count: int


@dataclass(frozen=True)
class SymbolInfo:
    count: int
    min_line: int
    max_line: Optional[int] = None


@dataclass(frozen=True)
class Trace:
    """One sampled call path, innermost frame first."""

    count: int
    frames: Tuple[Location, ...]


@dataclass(frozen=True)
class CallGraph:
    event: str
    node_info: Mapping[str, Mapping[object, NodeInfo]]
    symbols: Mapping[str, Mapping[str, SymbolInfo]]
    total_count: int
    traces: Tuple[Trace, ...] = field(default_factory=tuple)

    def iter_lines(self) -> Iterable[tuple[str, object, int]]:
        for file, lines in self.node_info.items():
            for line, info in lines.items():
                yield file, line, info.count

    def iter_symbols(self) -> Iterable[tuple[str, str, SymbolInfo]]:
        for file, syms in self.symbols.items():
            for name, info in syms.items():
                yield file, name, info

    def line_count(self, file: str, line: int) -> int:
        info = self.node_info.get(file, {}).get(line)
        return info.count if info else 0

    def enclosing_symbol(self, file: str, line: int) -> Optional[tuple[str, int, int]]:
        """Narrowest symbol in ``file`` whose line range contains ``line``."""
        best: Optional[tuple[str, int, int]] = None
        for name, info in self.symbols.get(file, {}).items():
            max_line = info.max_line if info.max_line is not None else info.min_line
            if info.min_line <= line <= max_line:
                if best is None or (max_line - info.min_line) < (best[2] - best[1]):
                    best = (name, info.min_line, max_line)
        return best

    def merge_caller_counts(self, locations: Iterable[Location]) -> Dict[str, Dict[object, int]]:
        """Merge the incoming caller counts of a set of locations.

        Every frame above the innermost selected frame of a trace (and not
        itself one of ``locations``) is a caller, so outer callers such as
        ``main`` are credited too.  Each trace contributes its count at most
        once per caller location, however many selected frames it passes
        through.
        """
        selected = {_normalize(loc) for loc in locations}
        merged: dict[str, dict[object, int]] = {}
        if not selected:
            return merged
        for trace in self.traces:
            frames = [_normalize(frame) for frame in trace.frames]
            first = next((idx for idx, frame in enumerate(frames) if frame in selected), None)
            if first is None:
                continue
            callers = {frame for frame in frames[first + 1 :] if frame not in selected}
            for file, line in callers:
                by_line = merged.setdefault(file, {})
                by_line[line] = by_line.get(line, 0) + trace.count
        logger.debug(
            "Merged caller counts: event=%s selected=%d callers=%d",
            self.event,
            len(selected),
            sum(len(v) for v in merged.values()),
        )
        return merged


def _normalize(location: Location) -> Location:
    file, line = location
    if file == SYMBOL_FILE:
        return file, str(line)
    return file, int(line)


def sum_node_counts(node_info: Mapping[str, Mapping[object, NodeInfo]]) -> int:
    return sum(info.count for lines in node_info.values() for info in lines.values())


def build_callgraph(
    event: str,
    node_info: Mapping[str, Mapping[object, int]],
    symbols: Optional[Mapping[str, Mapping[str, SymbolInfo]]] = None,
    traces: Optional[List[Trace]] = None,
    total_count: Optional[int] = None,
) -> CallGraph:
    """Assemble a graph from plain count mappings."""
    nodes = {
        file: {line: NodeInfo(count=int(count)) for line, count in lines.items()}
        for file, lines in node_info.items()
    }
    if total_count is None:
        total_count = sum_node_counts(nodes)
    return CallGraph(
        event=event,
        node_info=nodes,
        symbols={file: dict(syms) for file, syms in (symbols or {}).items()},
        total_count=total_count,
        traces=tuple(traces or ()),
    )
