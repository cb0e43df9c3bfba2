"""Count formatting and display thresholds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .config import CountFormat, DisplayConfig
from .errors import ConfigError


@dataclass(frozen=True)
class DisplayPolicy:
    """Decides whether a count is shown and how it is rendered.

    ``format`` returns ``None`` for counts that should be hidden, otherwise
    the formatted count prefix used in every result line.
    """

    formats: tuple[CountFormat, ...] = field(
        default_factory=lambda: tuple(DisplayConfig().formats)
    )
    selected: int = 0

    @classmethod
    def from_config(cls, config: DisplayConfig) -> "DisplayPolicy":
        return cls(formats=tuple(config.formats), selected=config.selected_format)

    @property
    def current(self) -> CountFormat:
        return self.formats[self.selected]

    def format(self, count: float, total: float) -> Optional[str]:
        fmt = self.current
        if fmt.percent:
            if total <= 0:
                return None
            value = 100 * count / total
        else:
            value = count
        if value < fmt.minimum:
            return None
        return fmt.format % value

    def should_display(self, count: float, total: float) -> bool:
        return self.format(count, total) is not None

    def cycle_format(self) -> "DisplayPolicy":
        return DisplayPolicy(formats=self.formats, selected=(self.selected + 1) % len(self.formats))

    def select_format(self, index: int) -> "DisplayPolicy":
        if not 0 <= index < len(self.formats):
            raise ConfigError(f"format index {index} out of range")
        return DisplayPolicy(formats=self.formats, selected=index)
