from perfhot.analysis.callgraph import SymbolInfo, Trace, build_callgraph


def test_total_count_defaults_to_node_sum(cycles_graph):
    assert cycles_graph.total_count == 105


def test_missing_counts_are_zero(cycles_graph):
    assert cycles_graph.line_count("a.c", 10) == 100
    assert cycles_graph.line_count("a.c", 99) == 0
    assert cycles_graph.line_count("nope.c", 1) == 0


def test_merge_caller_counts_single_caller(cycles_graph):
    merged = cycles_graph.merge_caller_counts([("a.c", 10)])
    assert merged == {"b.c": {20: 35}}


def test_merge_caller_counts_dedups_within_a_trace(cycles_graph):
    # The third trace passes through both selected lines; b.c:20 gets its count once.
    merged = cycles_graph.merge_caller_counts([("a.c", 10), ("a.c", 11)])
    assert merged == {"b.c": {20: 35}}


def test_merge_caller_counts_recursive_path_counted_once():
    graph = build_callgraph(
        "cycles",
        {"a.c": {10: 4, 11: 0}},
        traces=[Trace(count=4, frames=(("a.c", 10), ("b.c", 20), ("a.c", 11), ("b.c", 20)))],
    )
    assert graph.merge_caller_counts([("a.c", 10), ("a.c", 11)]) == {"b.c": {20: 4}}


def test_merge_caller_counts_symbol_only_caller():
    graph = build_callgraph(
        "cycles",
        {"a.c": {10: 6}},
        traces=[Trace(count=6, frames=(("a.c", 10), ("symbol", "main")))],
    )
    assert graph.merge_caller_counts([("a.c", "10")]) == {"symbol": {"main": 6}}


def test_merge_caller_counts_empty_selection(cycles_graph):
    assert cycles_graph.merge_caller_counts([]) == {}


def test_enclosing_symbol_prefers_narrowest():
    graph = build_callgraph(
        "cycles",
        {},
        symbols={
            "a.c": {
                "outer": SymbolInfo(count=1, min_line=1, max_line=50),
                "inner": SymbolInfo(count=1, min_line=10, max_line=20),
            }
        },
    )
    assert graph.enclosing_symbol("a.c", 15) == ("inner", 10, 20)
    assert graph.enclosing_symbol("a.c", 30) == ("outer", 1, 50)
    assert graph.enclosing_symbol("a.c", 51) is None
    assert graph.enclosing_symbol("b.c", 15) is None


def test_enclosing_symbol_without_max_line():
    graph = build_callgraph(
        "cycles", {}, symbols={"a.c": {"f": SymbolInfo(count=1, min_line=7)}}
    )
    assert graph.enclosing_symbol("a.c", 7) == ("f", 7, 7)
    assert graph.enclosing_symbol("a.c", 8) is None


def test_merge_caller_counts_credits_outer_callers():
    graph = build_callgraph(
        "cycles",
        {"hot.c": {10: 50}},
        traces=[Trace(count=50, frames=(("hot.c", 10), ("mid.c", 5), ("main.c", 1)))],
    )
    assert graph.merge_caller_counts([("hot.c", 10)]) == {"mid.c": {5: 50}, "main.c": {1: 50}}


def test_merge_caller_counts_ignores_frames_below_the_region():
    graph = build_callgraph(
        "cycles",
        {"leaf.c": {2: 8}, "hot.c": {10: 0}},
        traces=[Trace(count=8, frames=(("leaf.c", 2), ("hot.c", 10), ("main.c", 1)))],
    )
    assert graph.merge_caller_counts([("hot.c", 10)]) == {"main.c": {1: 8}}
