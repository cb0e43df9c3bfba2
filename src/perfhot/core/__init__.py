"""Core utilities."""

from .config import AppConfig, CountFormat, DisplayConfig, ShellConfig
from .display import DisplayPolicy
from .errors import (
    ConfigError,
    FileUnresolvableError,
    GraphFormatError,
    InvalidEventError,
    PerfHotError,
    RegionUnresolvedError,
    UnloadedError,
)
from .session import ProfileSession

__all__ = [
    "AppConfig",
    "CountFormat",
    "DisplayConfig",
    "ShellConfig",
    "DisplayPolicy",
    "PerfHotError",
    "ConfigError",
    "GraphFormatError",
    "UnloadedError",
    "InvalidEventError",
    "RegionUnresolvedError",
    "FileUnresolvableError",
    "ProfileSession",
]
