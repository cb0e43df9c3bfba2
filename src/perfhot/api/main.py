"""FastAPI application."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Annotated, List, NoReturn, Optional

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from perfhot.analysis.entry import Entry, entry_to_dict
from perfhot.core.config import AppConfig
from perfhot.core.display import DisplayPolicy
from perfhot.core.errors import InvalidEventError, PerfHotError, UnloadedError
from perfhot.core.session import ProfileSession
from perfhot.orchestration import HotspotFinder

CONFIG_PATH = os.getenv("PERFHOT_API_CONFIG", "configs/perfhot.yaml")

app = FastAPI(title="PERFHOT API", version="0.1.0")
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_finder() -> HotspotFinder:
    cfg = AppConfig.from_yaml(CONFIG_PATH)
    session = ProfileSession()
    if cfg.graph_path is not None:
        session.load_file(cfg.graph_path, selected_event=cfg.selected_event)
    else:
        logger.warning("API: no graph_path configured in %s", CONFIG_PATH)
    return HotspotFinder(session, DisplayPolicy.from_config(cfg.display))


FinderDep = Annotated[HotspotFinder, Depends(get_finder)]


def _table(finder: HotspotFinder, entries: List[Entry], total_count: int, event: str) -> dict:
    return {
        "event": event,
        "total_count": total_count,
        "entries": [
            {**entry_to_dict(entry), "display": finder.format_item(entry, total_count)}
            for entry in entries
        ],
    }


def _raise_http(exc: PerfHotError) -> NoReturn:
    if isinstance(exc, UnloadedError):
        raise HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, InvalidEventError):
        raise HTTPException(status_code=404, detail=str(exc))
    raise HTTPException(status_code=400, detail=str(exc))


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/events")
def list_events(finder: FinderDep) -> dict:
    session = finder.session
    return {
        "selected_event": session.selected_event,
        "events": [
            {"event": event, "total_count": session.graphs[event].total_count}
            for event in session.events()
        ],
    }


@app.get("/events/{event}/lines")
def hottest_lines(event: str, finder: FinderDep) -> dict:
    try:
        entries = finder.hottest_lines(event)
        total_count = finder.session.resolve(event).total_count
    except PerfHotError as exc:
        _raise_http(exc)
    return _table(finder, entries, total_count, event)


@app.get("/events/{event}/symbols")
def hottest_symbols(event: str, finder: FinderDep) -> dict:
    try:
        entries, total_count = finder.hottest_symbols(event)
    except PerfHotError as exc:
        _raise_http(exc)
    return _table(finder, entries, total_count, event)


@app.get("/events/{event}/callers")
def hottest_callers(
    event: str,
    file: str,
    line_begin: int,
    finder: FinderDep,
    line_end: Optional[int] = None,
) -> dict:
    """Callers of an inclusive line range; ``total_count`` is the range's own total."""
    if line_end is None:
        line_end = line_begin
    if line_end < line_begin:
        raise HTTPException(status_code=400, detail="line_end must not precede line_begin")
    try:
        entries, region_total = finder.hottest_callers_of_region(event, file, line_begin, line_end)
    except PerfHotError as exc:
        _raise_http(exc)
    logger.info("API: callers event=%s %s:%d-%d entries=%d", event, file, line_begin, line_end, len(entries))
    return _table(finder, entries, region_total, event)
