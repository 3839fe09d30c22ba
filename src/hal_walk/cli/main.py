"""CLI entry point for hal-walk.

Invoked as::

    hal-walk [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m hal_walk.cli.main

Every command loads the session file named by ``--session``, performs one
action, saves the file, and exits.  Failures are written to stderr as a
single JSON object and exit with status 1.

Commands
--------
- start     — Begin a session by fetching the root resource
- follow    — Follow a link relation from the current position
- position  — Show the current position
- goto      — Jump to a previous position
- describe  — Fetch and display relation documentation
- render    — Generate a Mermaid diagram of the session graph
- export    — Export a path spec from the session graph
- version   — Show version information
"""
from __future__ import annotations

import functools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from hal_walk import __version__
from hal_walk.client.http import ClientConfig, HalClient
from hal_walk.errors import HalWalkError
from hal_walk.navigation.navigator import Navigator
from hal_walk.session.manager import SessionManager
from hal_walk.session.serializer import SessionFormatError
from hal_walk.storage.filesystem import FilesystemBackend

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_client(timeout: float | None) -> HalClient:
    """Return the HTTP client used by network-bound commands."""
    return HalClient(ClientConfig(timeout=timeout))


def _session_store(session_path: str) -> tuple[SessionManager, str]:
    """Return a manager whose backend stores ``session_path``, and its key."""
    path = Path(session_path)
    manager = SessionManager(backend=FilesystemBackend(storage_dir=path.parent))
    return manager, path.name


def _parse_json(raw: str | None, option: str) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint=option) from exc


def _parse_json_object(raw: str | None, option: str) -> dict[str, Any] | None:
    value = _parse_json(raw, option)
    if value is not None and not isinstance(value, dict):
        raise click.BadParameter("must be a JSON object", param_hint=option)
    return value


def _print_document(body: Any) -> None:
    if isinstance(body, (dict, list)):
        console.print_json(data=body)
    else:
        console.print(str(body), markup=False, highlight=False, soft_wrap=True)


def _write_or_print(text: str, output: str | None, what: str) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        err_console.print(f"{what} written to {output}", markup=False)
    else:
        console.print(text, markup=False, highlight=False, soft_wrap=True)


def _reports_errors(func: Callable[..., None]) -> Callable[..., None]:
    """Turn hal-walk errors into a JSON error object on stderr and exit 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            func(*args, **kwargs)
        except HalWalkError as exc:
            err_console.print_json(data=exc.to_dict())
            sys.exit(1)
        except SessionFormatError as exc:
            err_console.print_json(data={"error": str(exc)})
            sys.exit(1)

    return wrapper


session_option = click.option(
    "-s",
    "--session",
    "session_path",
    required=True,
    envvar="HAL_WALK_SESSION",
    type=click.Path(dir_okay=False),
    help="Session file path.",
)
timeout_option = click.option(
    "--timeout",
    default=30.0,
    show_default=True,
    envvar="HAL_WALK_TIMEOUT",
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds to wait for each HTTP response.",
)

# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="hal-walk")
@click.option("-v", "--verbose", is_flag=True, help="Log each request and session change.")
def cli(verbose: bool) -> None:
    """Explore HAL APIs by following links, and record the walk."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
    )


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    console.print(f"[bold]hal-walk[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# start
# ---------------------------------------------------------------------------


@cli.command(name="start")
@session_option
@timeout_option
@click.argument("url")
@_reports_errors
def start_command(session_path: str, timeout: float, url: str) -> None:
    """Begin a session by fetching the root resource at URL."""
    manager, key = _session_store(session_path)
    with _make_client(timeout) as client:
        navigator = Navigator.start(url, client)
    manager.save_session(key, navigator.session)
    _print_document(navigator.position().response)


# ---------------------------------------------------------------------------
# follow
# ---------------------------------------------------------------------------


@cli.command(name="follow")
@session_option
@timeout_option
@click.argument("relation")
@click.option("--body", default=None, help="JSON request body.")
@click.option("--body-schema", default=None, help="JSON Schema for the request body.")
@click.option(
    "--uri-template-values", default=None, help="JSON object of URI template variables."
)
@click.option("--headers", default=None, help="JSON object of custom request headers.")
@click.option("--header-schema", default=None, help="JSON Schema for the request headers.")
@click.option("-m", "--method", default=None, help="HTTP method override.")
@click.option("-n", "--note", default=None, help="Why this step is being taken.")
@_reports_errors
def follow_command(
    session_path: str,
    timeout: float,
    relation: str,
    body: str | None,
    body_schema: str | None,
    uri_template_values: str | None,
    headers: str | None,
    header_schema: str | None,
    method: str | None,
    note: str | None,
) -> None:
    """Follow RELATION from the current position."""
    options = {
        "body": _parse_json(body, "--body"),
        "body_schema": _parse_json_object(body_schema, "--body-schema"),
        "uri_template_values": _parse_json_object(uri_template_values, "--uri-template-values"),
        "headers": _parse_json_object(headers, "--headers"),
        "header_schema": _parse_json_object(header_schema, "--header-schema"),
    }
    manager, key = _session_store(session_path)
    session = manager.load_session(key)
    with _make_client(timeout) as client:
        result = Navigator(session, client).follow(relation, method=method, note=note, **options)
    manager.save_session(key, session)
    _print_document(result.position.response)


# ---------------------------------------------------------------------------
# position / goto
# ---------------------------------------------------------------------------


@cli.command(name="position")
@session_option
@click.option("--relations", "show_relations", is_flag=True, help="List relations as a table.")
@_reports_errors
def position_command(session_path: str, show_relations: bool) -> None:
    """Show the current position."""
    manager, key = _session_store(session_path)
    session = manager.load_session(key)
    position = session.get_current_position()

    if not show_relations:
        _print_document(position.response)
        return

    from hal_walk.navigation.curie import list_relations

    table = Table(title=f"{position.id} {position.method} {position.url}", show_lines=False)
    table.add_column("Relation", style="cyan")
    table.add_column("Href")
    table.add_column("Title")
    table.add_column("Flags", style="yellow")
    for entry in list_relations(position.response):
        flags = [name for name in ("templated", "deprecated") if entry.get(name)]
        table.add_row(entry["relation"], entry["href"], entry.get("title", ""), ", ".join(flags))
    console.print(table)


@cli.command(name="goto")
@session_option
@click.argument("position_id")
@_reports_errors
def goto_command(session_path: str, position_id: str) -> None:
    """Jump to POSITION_ID (local state change, no request)."""
    manager, key = _session_store(session_path)
    session = manager.load_session(key)
    position = session.move_to(position_id)
    manager.save_session(key, session)
    _print_document(position.response)


# ---------------------------------------------------------------------------
# describe
# ---------------------------------------------------------------------------


@cli.command(name="describe")
@session_option
@timeout_option
@click.argument("relation")
@_reports_errors
def describe_command(session_path: str, timeout: float, relation: str) -> None:
    """Fetch and display the documentation of RELATION."""
    manager, key = _session_store(session_path)
    session = manager.load_session(key)
    with _make_client(timeout) as client:
        result = Navigator(session, client).describe(relation)
    _print_document(result.body)


# ---------------------------------------------------------------------------
# render / export
# ---------------------------------------------------------------------------


@cli.command(name="render")
@session_option
@click.option("-o", "--output", default=None, help="Output file (defaults to stdout).")
@_reports_errors
def render_command(session_path: str, output: str | None) -> None:
    """Generate a Mermaid diagram from the session graph."""
    from hal_walk.export.mermaid import render_mermaid

    manager, key = _session_store(session_path)
    _write_or_print(render_mermaid(manager.load_session(key)), output, "Mermaid diagram")


@cli.command(name="export")
@session_option
@click.option("-o", "--output", default=None, help="Output file (defaults to stdout).")
@click.option("--from", "from_id", default=None, help="Start position (defaults to first).")
@click.option("--to", "to_id", default=None, help="End position (defaults to current).")
@click.option(
    "--format",
    "fmt",
    default="json",
    show_default=True,
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    help="Path spec encoding.",
)
@_reports_errors
def export_command(
    session_path: str,
    output: str | None,
    from_id: str | None,
    to_id: str | None,
    fmt: str,
) -> None:
    """Export a replayable path spec from the session graph."""
    from hal_walk.export.path_spec import PathExporter

    manager, key = _session_store(session_path)
    spec = PathExporter().export_between(manager.load_session(key), from_id, to_id)
    text = spec.to_yaml() if fmt.lower() == "yaml" else spec.to_json()
    _write_or_print(text, output, "Path spec")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    cli()
