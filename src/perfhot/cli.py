"""CLI entrypoint using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from perfhot.core.config import AppConfig
from perfhot.core.display import DisplayPolicy
from perfhot.core.errors import PerfHotError
from perfhot.core.session import ProfileSession
from perfhot.orchestration import HotspotFinder
from perfhot.tools import CursorContext, EchoNavigator, EditorNavigator, TerminalSink

app = typer.Typer(help="Hottest lines, symbols and callers of a sampled profile")

GRAPH_OPTION = typer.Option(None, "--graph", "-g", help="Call graph file (.json/.yaml)")
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config YAML")
EVENT_OPTION = typer.Option(None, "--event", "-e", help="Event to query (default: selected)")
FORMAT_OPTION = typer.Option(None, "--format-index", help="Count format index from the config")
NEXT_FORMAT_OPTION = typer.Option(False, "--next-format", help="Cycle to the count format after the selected one")
LIMIT_OPTION = typer.Option(None, "--limit", "-n", help="Show at most N entries")
PICK_OPTION = typer.Option(None, "--pick", help="Jump to entry N after listing (0 cancels)")
OPEN_OPTION = typer.Option(False, "--open", help="Open the picked entry in $EDITOR")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log at INFO level")


def _load_config(path: Optional[str]) -> AppConfig:
    if path:
        return AppConfig.from_yaml(path)
    return AppConfig()


def _setup(
    config_path: Optional[str],
    graph: Optional[str],
    format_index: Optional[int],
    verbose: bool,
    next_format: bool = False,
) -> tuple[AppConfig, ProfileSession, DisplayPolicy]:
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    cfg = _load_config(config_path)
    graph_path = Path(graph) if graph else cfg.graph_path
    if graph_path is None:
        typer.echo("No call graph given (use --graph or graph_path in the config)", err=True)
        raise typer.Exit(code=1)
    session = ProfileSession.from_file(graph_path, selected_event=cfg.selected_event)
    policy = DisplayPolicy.from_config(cfg.display)
    if format_index is not None:
        policy = policy.select_format(format_index)
    if next_format:
        policy = policy.cycle_format()
    return cfg, session, policy


def _finder(
    cfg: AppConfig,
    session: ProfileSession,
    policy: DisplayPolicy,
    *,
    pick: Optional[int],
    limit: Optional[int],
    open_editor: bool,
    source: Optional[CursorContext] = None,
) -> HotspotFinder:
    if open_editor and cfg.shell.editor:
        navigator = EditorNavigator(cfg.shell.editor)
    else:
        navigator = EchoNavigator()
    sink = TerminalSink(pick=pick, limit=limit or cfg.shell.limit)
    return HotspotFinder(session, policy, sink=sink, navigator=navigator, source=source)


def _run(action) -> None:
    try:
        action()
    except PerfHotError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)


@app.command()
def events(
    graph: Optional[str] = GRAPH_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    # Demo: perfhot events --graph perf.json
    def action() -> None:
        _, session, _ = _setup(config, graph, None, verbose)
        for event in session.events():
            marker = "*" if event == session.selected_event else " "
            typer.echo(f"{marker} {event} total={session.graphs[event].total_count}")

    _run(action)


@app.command()
def lines(
    graph: Optional[str] = GRAPH_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    event: Optional[str] = EVENT_OPTION,
    format_index: Optional[int] = FORMAT_OPTION,
    next_format: bool = NEXT_FORMAT_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    pick: Optional[int] = PICK_OPTION,
    open_editor: bool = OPEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    # Demo: perfhot lines --graph perf.json --event cycles -n 20
    def action() -> None:
        cfg, session, policy = _setup(config, graph, format_index, verbose, next_format)
        finder = _finder(cfg, session, policy, pick=pick, limit=limit, open_editor=open_editor)
        finder.find_hottest_lines(event)

    _run(action)


@app.command()
def symbols(
    graph: Optional[str] = GRAPH_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    event: Optional[str] = EVENT_OPTION,
    format_index: Optional[int] = FORMAT_OPTION,
    next_format: bool = NEXT_FORMAT_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    pick: Optional[int] = PICK_OPTION,
    open_editor: bool = OPEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    # Demo: perfhot symbols --graph perf.json --pick 1
    def action() -> None:
        cfg, session, policy = _setup(config, graph, format_index, verbose, next_format)
        finder = _finder(cfg, session, policy, pick=pick, limit=limit, open_editor=open_editor)
        finder.find_hottest_symbols(event)

    _run(action)


@app.command()
def callers(
    file: str = typer.Option(..., "--file", "-f", help="Source file of the selection"),
    begin: int = typer.Option(..., "--begin", help="First selected line (1-indexed)"),
    end: Optional[int] = typer.Option(None, "--end", help="Last selected line (inclusive)"),
    graph: Optional[str] = GRAPH_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    event: Optional[str] = EVENT_OPTION,
    format_index: Optional[int] = FORMAT_OPTION,
    next_format: bool = NEXT_FORMAT_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    pick: Optional[int] = PICK_OPTION,
    open_editor: bool = OPEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    # Demo: perfhot callers --graph perf.json --file src/a.c --begin 10 --end 24
    def action() -> None:
        cfg, session, policy = _setup(config, graph, format_index, verbose, next_format)
        source = CursorContext(file=file, line=begin, line_end=end)
        finder = _finder(
            cfg, session, policy, pick=pick, limit=limit, open_editor=open_editor, source=source
        )
        finder.find_hottest_callers_selection(event)

    _run(action)


@app.command("callers-function")
def callers_function(
    file: str = typer.Option(..., "--file", "-f", help="Source file containing the cursor"),
    line: int = typer.Option(..., "--line", "-l", help="Cursor line (1-indexed)"),
    graph: Optional[str] = GRAPH_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    event: Optional[str] = EVENT_OPTION,
    format_index: Optional[int] = FORMAT_OPTION,
    next_format: bool = NEXT_FORMAT_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    pick: Optional[int] = PICK_OPTION,
    open_editor: bool = OPEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    # Demo: perfhot callers-function --graph perf.json --file src/a.c --line 14
    def action() -> None:
        cfg, session, policy = _setup(config, graph, format_index, verbose, next_format)
        source = CursorContext(file=file, line=line, graph=session.resolve(event))
        finder = _finder(
            cfg, session, policy, pick=pick, limit=limit, open_editor=open_editor, source=source
        )
        finder.find_hottest_callers_function(event)

    _run(action)


if __name__ == "__main__":
    app()
