import pytest

from perfhot.analysis.entry import LineEntry, SymbolEntry
from perfhot.core.errors import (
    FileUnresolvableError,
    InvalidEventError,
    RegionUnresolvedError,
    UnloadedError,
)
from perfhot.core.session import ProfileSession
from perfhot.orchestration import HotspotFinder


class RecordingSink:
    def __init__(self, choose=None):
        self.calls = []
        self.choose = choose

    def select(self, entries, *, prompt, format_item, on_choice):
        self.calls.append((list(entries), prompt, [format_item(e) for e in entries]))
        on_choice(self.choose(entries) if self.choose else None)


class RecordingNavigator:
    def __init__(self, error=None):
        self.opened = []
        self.error = error

    def open(self, file, line=None):
        if self.error:
            raise self.error
        self.opened.append((file, line))


class FakeSource:
    def __init__(self, file="a.c", function=None, selection=None):
        self.file = file
        self.function = function
        self.sel = selection

    def current_file(self):
        return self.file

    def enclosing_function(self):
        return self.function

    def selection(self):
        return self.sel


def test_tables_use_selected_event_by_default(session, policy):
    finder = HotspotFinder(session, policy)
    assert finder.hottest_lines() == [LineEntry(file="a.c", line=10, count=100)]
    entries, total = finder.hottest_symbols("cache-misses")
    assert total == 142
    assert SymbolEntry(symbol="memcpy", count=20) in entries


def test_preconditions(session, policy):
    with pytest.raises(UnloadedError):
        HotspotFinder(ProfileSession(), policy).hottest_lines("cycles")
    with pytest.raises(InvalidEventError):
        HotspotFinder(session, policy).hottest_symbols("branch-misses")


def test_callers_of_region(session, policy):
    finder = HotspotFinder(session, policy)
    assert finder.hottest_callers_of_region("cycles", "a.c", 10, 11) == (
        [LineEntry(file="b.c", line=20, count=35)],
        105,
    )
    assert finder.hottest_callers_of_region("cycles", "a.c", 200, 300) == ([], 0)


def test_find_hottest_lines_hands_formatted_entries_to_sink(session, policy):
    sink = RecordingSink()
    HotspotFinder(session, policy, sink=sink).find_hottest_lines()
    entries, prompt, rendered = sink.calls[0]
    assert prompt == "Hottest lines: "
    assert entries == [LineEntry(file="a.c", line=10, count=100)]
    assert rendered == ["95% a.c:10"]


def test_find_hottest_symbols_prompt(session, policy):
    sink = RecordingSink()
    HotspotFinder(session, policy, sink=sink).find_hottest_symbols("cache-misses")
    _, prompt, rendered = sink.calls[0]
    assert prompt == "Hottest symbols: "
    assert rendered[0] == "57% bar at x.c:1"


def test_callers_of_enclosing_function(session, policy):
    sink = RecordingSink()
    source = FakeSource(function=("a.c", 10, 11))
    finder = HotspotFinder(session, policy, sink=sink, source=source)
    finder.find_hottest_callers_function()
    entries, prompt, rendered = sink.calls[0]
    assert prompt == "Hottest callers: "
    assert entries == [LineEntry(file="b.c", line=20, count=35)]
    assert rendered == ["33% b.c:20"]


def test_callers_of_selection(session, policy):
    source = FakeSource(selection=(10, 1, 10, 4))
    finder = HotspotFinder(session, policy, source=source)
    entries, region_total = finder.hottest_callers_of_selection()
    assert region_total == 100
    assert entries == [LineEntry(file="b.c", line=20, count=35)]


@pytest.mark.parametrize(
    "source, error",
    [
        (FakeSource(file=None, function=("a.c", 1, 2)), FileUnresolvableError),
        (FakeSource(function=None), RegionUnresolvedError),
        (None, RegionUnresolvedError),
    ],
)
def test_enclosing_function_unresolved(session, policy, source, error):
    sink = RecordingSink()
    finder = HotspotFinder(session, policy, sink=sink, source=source)
    with pytest.raises(error):
        finder.find_hottest_callers_function()
    assert sink.calls == []


@pytest.mark.parametrize("selection", [None, (None, None, None, None)])
def test_selection_unresolved(session, policy, selection):
    finder = HotspotFinder(session, policy, source=FakeSource(selection=selection))
    with pytest.raises(RegionUnresolvedError):
        finder.hottest_callers_of_selection()


def test_go_to_entry_opens_readable_file(session, policy, tmp_path):
    target = tmp_path / "a.c"
    target.write_text("int main;\n", encoding="utf-8")
    navigator = RecordingNavigator()
    finder = HotspotFinder(session, policy, navigator=navigator)
    finder.go_to_entry(LineEntry(file=str(target), line=10, count=1))
    finder.go_to_entry(SymbolEntry(symbol="memcpy", count=1))
    finder.go_to_entry(None)
    finder.go_to_entry(LineEntry(file=str(tmp_path / "gone.c"), line=1, count=1))
    assert navigator.opened == [(str(target), 10)]


def test_go_to_entry_ignores_navigation_errors(session, policy, tmp_path):
    target = tmp_path / "a.c"
    target.write_text("", encoding="utf-8")
    finder = HotspotFinder(session, policy, navigator=RecordingNavigator(error=OSError("boom")))
    finder.go_to_entry(LineEntry(file=str(target), line=1, count=1))


def test_chosen_entry_triggers_jump(session, policy, tmp_path):
    target = tmp_path / "a.c"
    target.write_text("", encoding="utf-8")
    navigator = RecordingNavigator()
    sink = RecordingSink(choose=lambda entries: LineEntry(file=str(target), line=3, count=1))
    HotspotFinder(session, policy, sink=sink, navigator=navigator).find_hottest_lines()
    assert navigator.opened == [(str(target), 3)]


def test_find_without_sink(session, policy):
    with pytest.raises(RuntimeError):
        HotspotFinder(session, policy).find_hottest_lines()
