import json
from pathlib import Path

import pytest

from perfhot.analysis.callgraph import SymbolInfo, Trace, build_callgraph
from perfhot.core.config import CountFormat
from perfhot.core.display import DisplayPolicy
from perfhot.core.session import ProfileSession


@pytest.fixture
def policy():
    """Percent format hiding anything under 5% of the denominator."""
    return DisplayPolicy(formats=(CountFormat(percent=True, format="%.0f%%", minimum=5),))


@pytest.fixture
def cycles_graph():
    return build_callgraph(
        "cycles",
        {
            "a.c": {10: 100, 11: 5},
        },
        symbols={"a.c": {"foo": SymbolInfo(count=50, min_line=3, max_line=12)}},
        traces=[
            Trace(count=30, frames=(("a.c", 10), ("b.c", 20))),
            Trace(count=70, frames=(("a.c", 10),)),
            Trace(count=5, frames=(("a.c", 11), ("a.c", 10), ("b.c", 20))),
        ],
    )


@pytest.fixture
def mixed_graph():
    return build_callgraph(
        "cache-misses",
        {
            "x.c": {1: 40, 2: 40, 7: 1},
            "w.c": {5: 40},
            "symbol": {"memcpy": 20, "tiny": 1},
        },
        symbols={
            "x.c": {"bar": SymbolInfo(count=81, min_line=1, max_line=7)},
            "w.c": {"baz": SymbolInfo(count=40, min_line=4, max_line=9)},
        },
    )


@pytest.fixture
def session(cycles_graph, mixed_graph):
    return ProfileSession(
        graphs={"cycles": cycles_graph, "cache-misses": mixed_graph},
        selected_event="cycles",
    )


@pytest.fixture
def source_tree(tmp_path):
    """Two real source files plus a graph document whose keys are their real paths."""
    root = tmp_path.resolve()
    a = root / "a.c"
    b = root / "b.c"
    a.write_text("\n".join(f"line {i}" for i in range(1, 40)), encoding="utf-8")
    b.write_text("\n".join(f"line {i}" for i in range(1, 40)), encoding="utf-8")
    doc = {
        "selected_event": "cycles",
        "events": {
            "cycles": {
                "total_count": 105,
                "node_info": {str(a): {"10": 100, "11": 5}},
                "symbols": {str(a): {"foo": {"count": 105, "min_line": 8, "max_line": 14}}},
                "traces": [
                    {"count": 30, "frames": [[str(a), 10], [str(b), 20]]},
                    {"count": 75, "frames": [[str(a), 11]]},
                ],
            },
            "instructions": {
                "node_info": {str(b): {"3": 9}},
            },
        },
    }
    graph = root / "perf.json"
    graph.write_text(json.dumps(doc), encoding="utf-8")
    return {"root": root, "a": str(a), "b": str(b), "graph": graph}
