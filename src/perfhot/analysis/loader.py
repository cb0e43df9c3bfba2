"""Read precomputed call graphs from JSON or YAML documents.

Expected shape::

    selected_event: cycles
    events:
      cycles:
        total_count: 105
        node_info:
          /src/a.c: {10: 100, 11: 5}
          symbol: {memcpy: 3}
        symbols:
          /src/a.c:
            foo: {count: 50, min_line: 3, max_line: 12}
        traces:
          - {count: 30, frames: [[/src/a.c, 10], [/src/b.c, 20]]}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from perfhot.core.errors import GraphFormatError

from .callgraph import CallGraph, NodeInfo, SymbolInfo, Trace, sum_node_counts
from .entry import SYMBOL_FILE

logger = logging.getLogger(__name__)


@dataclass
class LoadedGraphs:
    graphs: Dict[str, CallGraph]
    selected_event: Optional[str] = None
    source_path: Optional[str] = None


def load_callgraphs(path: str | Path) -> LoadedGraphs:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise GraphFormatError(f"Cannot read call graph {p}: {exc}") from exc
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise GraphFormatError(f"Malformed call graph {p}: {exc}") from exc
    loaded = parse_callgraphs(data)
    loaded.source_path = str(p)
    logger.info("Loaded call graphs: path=%s events=%s", p, sorted(loaded.graphs))
    return loaded


def parse_callgraphs(data: Any) -> LoadedGraphs:
    if not isinstance(data, dict) or not isinstance(data.get("events"), dict):
        raise GraphFormatError("Call graph document needs an 'events' mapping")
    graphs = {
        str(event): _parse_event(str(event), payload)
        for event, payload in data["events"].items()
    }
    selected = data.get("selected_event")
    if selected is not None and str(selected) not in graphs:
        raise GraphFormatError(f"selected_event {selected!r} is not a loaded event")
    return LoadedGraphs(graphs=graphs, selected_event=str(selected) if selected else None)


def _parse_event(event: str, payload: Any) -> CallGraph:
    if not isinstance(payload, dict):
        raise GraphFormatError(f"Event {event!r} must be a mapping")
    node_info = _parse_node_info(event, payload.get("node_info") or {})
    symbols = _parse_symbols(event, payload.get("symbols") or {})
    traces = tuple(_parse_trace(event, raw) for raw in payload.get("traces") or [])

    computed = sum_node_counts(node_info)
    total = payload.get("total_count")
    if total is None:
        total = computed
    else:
        total = _as_int(total, f"{event}.total_count")
        if total != computed:
            logger.warning(
                "total_count mismatch: event=%s declared=%d node_sum=%d", event, total, computed
            )
    return CallGraph(
        event=event,
        node_info=node_info,
        symbols=symbols,
        total_count=total,
        traces=traces,
    )


def _parse_node_info(event: str, raw: Any) -> dict[str, dict[object, NodeInfo]]:
    if not isinstance(raw, dict):
        raise GraphFormatError(f"{event}.node_info must be a mapping")
    nodes: dict[str, dict[object, NodeInfo]] = {}
    for file, lines in raw.items():
        if not isinstance(lines, dict):
            raise GraphFormatError(f"{event}.node_info[{file!r}] must be a mapping")
        file = str(file)
        parsed: dict[object, NodeInfo] = {}
        for key, value in lines.items():
            if isinstance(value, dict):
                value = value.get("count", 0)
            count = _as_int(value, f"{event}.node_info[{file!r}][{key!r}]")
            line = str(key) if file == SYMBOL_FILE else _as_int(key, f"{event} line {key!r}")
            parsed[line] = NodeInfo(count=count)
        nodes[file] = parsed
    return nodes


def _parse_symbols(event: str, raw: Any) -> dict[str, dict[str, SymbolInfo]]:
    if not isinstance(raw, dict):
        raise GraphFormatError(f"{event}.symbols must be a mapping")
    symbols: dict[str, dict[str, SymbolInfo]] = {}
    for file, syms in raw.items():
        if not isinstance(syms, dict):
            raise GraphFormatError(f"{event}.symbols[{file!r}] must be a mapping")
        parsed: dict[str, SymbolInfo] = {}
        for name, info in syms.items():
            if not isinstance(info, dict) or "min_line" not in info:
                raise GraphFormatError(f"{event}.symbols[{file!r}][{name!r}] needs count and min_line")
            max_line = info.get("max_line")
            parsed[str(name)] = SymbolInfo(
                count=_as_int(info.get("count", 0), f"{event} symbol {name!r} count"),
                min_line=_as_int(info["min_line"], f"{event} symbol {name!r} min_line"),
                max_line=_as_int(max_line, f"{event} symbol {name!r} max_line") if max_line is not None else None,
            )
        symbols[str(file)] = parsed
    return symbols


def _parse_trace(event: str, raw: Any) -> Trace:
    if not isinstance(raw, dict) or not isinstance(raw.get("frames"), list):
        raise GraphFormatError(f"{event} trace needs count and frames")
    frames = []
    for frame in raw["frames"]:
        if not isinstance(frame, (list, tuple)) or len(frame) != 2:
            raise GraphFormatError(f"{event} trace frame {frame!r} must be [file, line]")
        file, line = str(frame[0]), frame[1]
        frames.append((file, str(line) if file == SYMBOL_FILE else _as_int(line, f"{event} frame line")))
    return Trace(count=_as_int(raw.get("count", 1), f"{event} trace count"), frames=tuple(frames))


def _as_int(value: Any, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise GraphFormatError(f"{what}: expected an integer, got {value!r}") from exc
