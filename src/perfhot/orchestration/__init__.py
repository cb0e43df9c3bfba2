"""Query orchestration."""

from .finder import HotspotFinder, Navigator, PresentationSink, SourceContext

__all__ = ["HotspotFinder", "PresentationSink", "Navigator", "SourceContext"]
