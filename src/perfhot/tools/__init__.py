"""Shell adapters: terminal presentation, navigation, source positions."""

from .navigation import EchoNavigator, EditorNavigator, TerminalSink
from .source_tools import CursorContext, canonical_file

__all__ = [
    "TerminalSink",
    "EchoNavigator",
    "EditorNavigator",
    "CursorContext",
    "canonical_file",
]
