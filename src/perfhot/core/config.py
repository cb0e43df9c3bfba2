"""Configuration loading and normalization.

A sample config ships under ``configs/``.  This module turns that YAML
file into typed objects the query layer and the shells can rely on.
Environment variables in YAML values are expanded so graph locations can
be supplied per machine.
"""

from __future__ import annotations

import os
import re
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)


def _expand_env(text: str) -> str:
    """Expand ${VARS} inside YAML text."""
    return os.path.expandvars(text)


class CountFormat(BaseModel):
    percent: bool = True
    format: str = "%.2f%%"
    minimum: float = 0.5


def _default_formats() -> list[CountFormat]:
    return [
        CountFormat(percent=True, format="%.2f%%", minimum=0.5),
        CountFormat(percent=False, format="%d", minimum=1),
    ]


class DisplayConfig(BaseModel):
    formats: list[CountFormat] = Field(default_factory=_default_formats)
    selected_format: int = 0

    @field_validator("formats")
    @classmethod
    def _non_empty(cls, value: list[CountFormat]) -> list[CountFormat]:
        if not value:
            raise ValueError("at least one count format is required")
        return value

    @model_validator(mode="after")
    def _selected_in_range(self) -> "DisplayConfig":
        if not 0 <= self.selected_format < len(self.formats):
            raise ValueError(
                f"selected_format {self.selected_format} out of range for {len(self.formats)} formats"
            )
        return self


class ShellConfig(BaseModel):
    editor: Optional[str] = Field(default_factory=lambda: os.getenv("EDITOR"))
    limit: Optional[int] = None


class AppConfig(BaseModel):
    graph_path: Optional[Path] = None
    selected_event: Optional[str] = None
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AppConfig":
        raw = load_yaml(path)
        normalized = normalize_raw_config(raw, Path(path).resolve().parent)
        try:
            return cls(**normalized)
        except ValidationError as exc:
            raise ConfigError(f"Invalid config {path}: {exc}") from exc


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load YAML and expand environment variables."""
    p = Path(path)
    try:
        text = _expand_env(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config {p}: {exc}") from exc
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {p} must be a mapping")
    logger.debug("Loaded YAML: path=%s keys=%s", p, list(data.keys()))
    return data


_UNSET_VAR = re.compile(r"^\$\{?\w+\}?$")


def _drop_unset(value: Any) -> Any:
    """Treat values left as a bare ``${VAR}`` (unset variable) as missing."""
    if isinstance(value, dict):
        return {k: _drop_unset(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_drop_unset(v) for v in value]
    if isinstance(value, str) and _UNSET_VAR.match(value):
        return None
    return value


def normalize_raw_config(raw: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    """Map the YAML shape onto AppConfig fields.

    ``graph`` is accepted as a shorthand for ``graph_path`` and relative
    graph paths are resolved against the directory holding the config.
    """
    normalized = {k: v for k, v in _drop_unset(dict(raw)).items() if v is not None}
    graph_path = normalized.pop("graph", None) or normalized.get("graph_path")
    if graph_path:
        graph = Path(graph_path)
        if not graph.is_absolute():
            graph = (base_dir / graph).resolve()
        normalized["graph_path"] = graph
    display = normalized.get("display") or {}
    if "format" in display and "selected_format" not in display:
        display = dict(display)
        display["selected_format"] = display.pop("format")
        normalized["display"] = display
    logger.debug("Normalized config keys=%s", list(normalized.keys()))
    return normalized
