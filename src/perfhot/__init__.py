"""Query engine for ranking hot spots in a sampled-profiling call graph."""

__version__ = "0.1.0"
