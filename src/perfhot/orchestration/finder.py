"""Run hottest-table queries and hand the results to a presentation sink."""

from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Protocol, Sequence

from perfhot.analysis.entry import Entry
from perfhot.analysis.formatter import format_entry
from perfhot.analysis.hottest import (
    hottest_callers_table,
    hottest_lines_table,
    hottest_symbols_table,
)
from perfhot.core.display import DisplayPolicy
from perfhot.core.errors import FileUnresolvableError, RegionUnresolvedError
from perfhot.core.session import ProfileSession

logger = logging.getLogger(__name__)

Region = tuple[str, int, int]


class PresentationSink(Protocol):
    def select(
        self,
        entries: Sequence[Entry],
        *,
        prompt: str,
        format_item: Callable[[Entry], str],
        on_choice: Callable[[Optional[Entry]], None],
    ) -> None: ...


class Navigator(Protocol):
    def open(self, file: str, line: Optional[int] = None) -> None: ...


class SourceContext(Protocol):
    def current_file(self) -> Optional[str]: ...

    def enclosing_function(self) -> Optional[Region]: ...

    def selection(self) -> Optional[tuple[int, int, int, int]]: ...


class HotspotFinder:
    def __init__(
        self,
        session: ProfileSession,
        policy: DisplayPolicy,
        sink: Optional[PresentationSink] = None,
        navigator: Optional[Navigator] = None,
        source: Optional[SourceContext] = None,
    ):
        self.session = session
        self.policy = policy
        self.sink = sink
        self.navigator = navigator
        self.source = source

    # Tables

    def hottest_lines(self, event: Optional[str] = None) -> List[Entry]:
        return hottest_lines_table(self.session.resolve(event), self.policy)

    def hottest_symbols(self, event: Optional[str] = None) -> tuple[List[Entry], int]:
        return hottest_symbols_table(self.session.resolve(event), self.policy)

    def hottest_callers_of_region(
        self, event: Optional[str], file: str, line_begin: int, line_end: int
    ) -> tuple[List[Entry], int]:
        graph = self.session.resolve(event)
        return hottest_callers_table(graph, file, line_begin, line_end, self.policy)

    def hottest_callers_of_enclosing_function(
        self, event: Optional[str] = None
    ) -> tuple[List[Entry], int]:
        graph = self.session.resolve(event)
        self._current_file()
        region = self._source().enclosing_function()
        if not region:
            raise RegionUnresolvedError("Could not find surrounding function!")
        file, line_begin, line_end = region
        return hottest_callers_table(graph, file, line_begin, line_end, self.policy)

    def hottest_callers_of_selection(self, event: Optional[str] = None) -> tuple[List[Entry], int]:
        graph = self.session.resolve(event)
        file = self._current_file()
        selection = self._source().selection()
        if not selection or selection[0] is None or selection[2] is None:
            raise RegionUnresolvedError("Could not get visual selection!")
        line_begin, _, line_end, _ = selection
        return hottest_callers_table(graph, file, line_begin, line_end, self.policy)

    # Presentation

    def find_hottest_lines(self, event: Optional[str] = None) -> None:
        # Line tables are ranked against the event total.
        graph = self.session.resolve(event)
        self._find_hottest("Hottest lines: ", hottest_lines_table(graph, self.policy), graph.total_count)

    def find_hottest_symbols(self, event: Optional[str] = None) -> None:
        self._find_hottest("Hottest symbols: ", *self.hottest_symbols(event))

    def find_hottest_callers_function(self, event: Optional[str] = None) -> None:
        self._find_hottest("Hottest callers: ", *self.hottest_callers_of_enclosing_function(event))

    def find_hottest_callers_selection(self, event: Optional[str] = None) -> None:
        self._find_hottest("Hottest callers: ", *self.hottest_callers_of_selection(event))

    def format_item(self, entry: Entry, total_count: int) -> str:
        return format_entry(entry, total_count, self.policy)

    def go_to_entry(self, entry: Optional[Entry]) -> None:
        """Open the entry's location; a cancelled choice or unreadable file does nothing."""
        if entry is None or not entry.file or self.navigator is None:
            return
        if not os.access(entry.file, os.R_OK):
            logger.debug("Skipping unreadable file: %s", entry.file)
            return
        try:
            self.navigator.open(entry.file, entry.line)
        except OSError as exc:
            logger.debug("Navigation failed: file=%s error=%s", entry.file, exc)

    def _find_hottest(self, prompt: str, entries: List[Entry], total_count: int) -> None:
        if self.sink is None:
            raise RuntimeError("HotspotFinder has no presentation sink")
        logger.info("%s%d entries (total=%d)", prompt, len(entries), total_count)
        self.sink.select(
            entries,
            prompt=prompt,
            format_item=lambda entry: self.format_item(entry, total_count),
            on_choice=self.go_to_entry,
        )

    def _source(self) -> SourceContext:
        if self.source is None:
            raise RegionUnresolvedError("No source context available")
        return self.source

    def _current_file(self) -> str:
        file = self._source().current_file()
        if not file:
            raise FileUnresolvableError()
        return file
