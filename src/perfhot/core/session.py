"""Loaded call graphs and the currently selected event."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from perfhot.analysis.callgraph import CallGraph
from perfhot.analysis.loader import load_callgraphs

from .errors import InvalidEventError, UnloadedError

logger = logging.getLogger(__name__)


@dataclass
class ProfileSession:
    """Owns one immutable call graph per event for the life of a profile load.

    Reloading swaps every graph at once; queries only ever read.
    """

    graphs: Dict[str, CallGraph] = field(default_factory=dict)
    selected_event: Optional[str] = None

    @classmethod
    def from_file(cls, path: str | Path, selected_event: Optional[str] = None) -> "ProfileSession":
        session = cls()
        session.load_file(path, selected_event=selected_event)
        return session

    def load(self, graphs: Dict[str, CallGraph], selected_event: Optional[str] = None) -> None:
        if selected_event is not None and selected_event not in graphs:
            raise InvalidEventError(selected_event)
        self.graphs = dict(graphs)
        if selected_event is None:
            if self.selected_event in self.graphs:
                selected_event = self.selected_event
            else:
                selected_event = next(iter(sorted(self.graphs)), None)
        self.selected_event = selected_event
        logger.info(
            "Profile loaded: events=%s selected=%s", sorted(self.graphs), self.selected_event
        )

    def load_file(self, path: str | Path, selected_event: Optional[str] = None) -> None:
        loaded = load_callgraphs(path)
        self.load(loaded.graphs, selected_event or loaded.selected_event)

    def clear(self) -> None:
        self.graphs = {}
        self.selected_event = None
        logger.info("Profile cleared")

    def is_loaded(self) -> bool:
        return bool(self.graphs)

    def events(self) -> List[str]:
        return sorted(self.graphs)

    def graph_for(self, event: Optional[str]) -> Optional[CallGraph]:
        if event is None:
            return None
        return self.graphs.get(event)

    def select_event(self, event: str) -> None:
        if event not in self.graphs:
            raise InvalidEventError(event)
        self.selected_event = event

    def resolve(self, event: Optional[str] = None) -> CallGraph:
        """Graph for ``event`` (default: the selected event), or raise."""
        if not self.is_loaded():
            raise UnloadedError()
        event = event or self.selected_event
        graph = self.graph_for(event)
        if graph is None:
            raise InvalidEventError(event)
        return graph
