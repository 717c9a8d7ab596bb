"""
Notekeeper CLI.

Primary entry point. Use --service to select what to run.

Usage:
    notekeeper --help
    notekeeper --service tui
    notekeeper --service list --search milk
    notekeeper --service config
    notekeeper --service list --api-base http://localhost:8000/api --debug
"""

import asyncio

import click
import structlog

from notekeeper.client.store import NotesStoreClient
from notekeeper.core.config import (
    get_app_config,
    get_session_config,
    get_store_base_url,
    validate_project_root,
)
from notekeeper.core.logging import get_logger, setup_logging
from notekeeper.session.filter import preview
from notekeeper.session.session import NoteSession
from notekeeper.session.state import SessionOptions


def _build_session(api_base: str | None, frontend_id: str) -> NoteSession:
    """Create a session wired to the configured (or overridden) Notes Store."""
    store = NotesStoreClient(base_url=api_base, frontend_id=frontend_id)
    session_config = get_session_config()
    options = SessionOptions(
        close_on_mutation_failure=session_config.close_on_mutation_failure,
        serialize_mutations=session_config.serialize_mutations,
    )
    return NoteSession(store, options)


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["tui", "list", "config"]),
    default="tui",
    help="Service or command to run.",
)
@click.option(
    "--search",
    default="",
    help="Search term applied to the listing (list only).",
)
@click.option(
    "--api-base",
    default=None,
    help="Notes Store base URL, e.g. http://localhost:8000/api. Overrides config.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
def main(service: str, search: str, api_base: str | None, verbose: bool, debug: bool) -> None:
    """
    Notekeeper CLI.

    \b
    Examples:
        notekeeper --service tui
        notekeeper --service list --search milk
        notekeeper --service config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    # Console output would draw over the TUI; file logging still follows logging.yaml.
    setup_logging(level=log_level, enable_console=service != "tui")

    structlog.contextvars.bind_contextvars(source=service if service == "tui" else "cli")

    logger = get_logger(__name__)
    logger.debug("CLI invoked", service=service, log_level=log_level)

    if service == "tui":
        run_tui(logger, api_base)
    elif service == "list":
        list_notes(logger, api_base, search)
    elif service == "config":
        show_config(logger)


def run_tui(logger, api_base: str | None) -> None:
    """Start the terminal interface."""
    from notekeeper.tui.app import NotekeeperApp

    session = _build_session(api_base, frontend_id="tui")
    logger.info("Starting TUI", base_url=session.store.base_url)
    NotekeeperApp(session).run()


def list_notes(logger, api_base: str | None, search: str) -> None:
    """Fetch the collection once and print the filtered view."""
    session = _build_session(api_base, frontend_id="cli")

    async def _load() -> None:
        try:
            session.set_search(search)
            await session.start()
        finally:
            await session.store.close()

    asyncio.run(_load())

    state = session.state
    if state.error:
        click.echo(click.style(state.error, fg="red"), err=True)
        logger.info("Listing failed", error=state.error)
        raise SystemExit(1)

    view = session.view
    if view.message:
        click.echo(view.message)
        return

    for note in view.notes:
        click.echo(click.style(f"[{note.id}] {note.title}", bold=True))
        if note.content:
            click.echo(f"    {preview(note.content)}")


def show_config(logger) -> None:
    """Print the effective configuration."""
    app = get_app_config().application
    base_url, timeout = get_store_base_url()

    click.echo(click.style(f"{app.name} {app.version} ({app.environment})", bold=True))
    click.echo(f"  Store URL:                 {base_url}")
    click.echo(f"  Timeout:                   {timeout if timeout is not None else 'none'}")
    click.echo(f"  Close on mutation failure: {app.session.close_on_mutation_failure}")
    click.echo(f"  Serialize mutations:       {app.session.serialize_mutations}")
    logger.debug("Configuration shown")


if __name__ == "__main__":
    main()
