"""Custom exception hierarchy."""


class PerfHotError(Exception):
    """Base error."""


class ConfigError(PerfHotError):
    """Invalid configuration."""


class GraphFormatError(PerfHotError):
    """Call graph document could not be read."""


class UnloadedError(PerfHotError):
    """No call graph is loaded."""

    def __init__(self, message: str = "Callgraph is not loaded!"):
        super().__init__(message)


class InvalidEventError(PerfHotError):
    """Requested event is not part of the loaded call graphs."""

    def __init__(self, event: str | None):
        self.event = event
        super().__init__(f"Invalid event: {event!r}")


class RegionUnresolvedError(PerfHotError):
    """Cursor or selection could not be mapped to a line range."""


class FileUnresolvableError(PerfHotError):
    """Current buffer has no canonical on-disk path."""

    def __init__(self, message: str = "Could not find current file!"):
        super().__init__(message)
