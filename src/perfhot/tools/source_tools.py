"""Source-position resolution without an editor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from perfhot.analysis.callgraph import CallGraph

logger = logging.getLogger(__name__)


def canonical_file(path: Optional[str]) -> Optional[str]:
    """Full real path of an existing file, else ``None``."""
    if not path:
        return None
    real = os.path.realpath(os.path.expanduser(path))
    return real if os.path.exists(real) else None


@dataclass
class CursorContext:
    """A file position standing in for an editor cursor or selection.

    The enclosing function is looked up from the symbol line ranges of
    ``graph``.
    """

    file: Optional[str]
    line: Optional[int] = None
    line_end: Optional[int] = None
    graph: Optional[CallGraph] = None

    def current_file(self) -> Optional[str]:
        return canonical_file(self.file)

    def enclosing_function(self) -> Optional[tuple[str, int, int]]:
        file = self.current_file()
        if file is None or self.line is None or self.graph is None:
            return None
        found = self.graph.enclosing_symbol(file, self.line)
        if found is None:
            return None
        name, begin, end = found
        logger.info("Enclosing function: %s at %s:%d-%d", name, file, begin, end)
        return file, begin, end

    def selection(self) -> Optional[tuple[int, int, int, int]]:
        if self.line is None:
            return None
        line_end = self.line_end if self.line_end is not None else self.line
        if line_end < self.line:
            return line_end, 0, self.line, 0
        return self.line, 0, line_end, 0
