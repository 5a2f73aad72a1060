"""CLI entry point for linkclipper."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import Config, load_config
from .coordinator import IntakeCoordinator
from .exceptions import ConfigError
from .state import load_index, save_index


def _notice(message: str) -> None:
    click.echo(f"  {message}", err=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option(
    "--vault-path",
    type=click.Path(file_okay=False),
    default=None,
    help="Path to Obsidian vault (default: OBSIDIAN_VAULT_PATH env var or cwd)",
)
@click.option(
    "--model",
    type=str,
    default=None,
    help="OpenRouter model used for classification",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx, vault_path, model, verbose):
    """Clip links from daily notes into the vault.

    New links found in a daily note are fetched, classified as product or
    article, saved as clip notes and recorded in the wishlist or reading
    list ledger.
    """
    _setup_logging(verbose)
    try:
        config = load_config(vault_path=vault_path, model=model, verbose=verbose)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    if verbose:
        click.echo(f"Vault path: {config.vault_path}")
        click.echo(f"Model: {config.model}")
    ctx.obj = config


def _resolve_note(config: Config, note: Optional[str]) -> Path:
    if note is None:
        return config.daily_note_path()
    path = Path(note)
    if not path.is_absolute() and not path.exists():
        path = config.vault_path / path
    return path


@main.command()
@click.argument("note", required=False)
@click.pass_obj
def process(config, note):
    """Process NOTE now (default: today's daily note)."""
    path = _resolve_note(config, note)
    if not path.is_file():
        click.echo(f"Could not find note: {path}", err=True)
        sys.exit(2)

    async def run():
        coordinator = IntakeCoordinator(config, notify=_notice)
        try:
            return await coordinator.process_document(path)
        finally:
            await coordinator.close()

    result = asyncio.run(run())
    click.echo(f"Finished processing {result.document}")
    if result.clipped:
        click.echo(f"  Clipped {len(result.clipped)} link(s)")
    if result.had_errors:
        click.echo(f"  ({len(result.failed)} link(s) failed and will be retried)")
        sys.exit(1)
    sys.exit(0)


async def _watch(coordinator: IntakeCoordinator, interval: float) -> None:
    config = coordinator.config
    startup = config.daily_note_path()
    if startup.is_file():
        await coordinator.process_document(startup)

    last_seen: Optional[tuple[Path, float]] = None
    while True:
        path = config.daily_note_path()
        try:
            seen = (path, path.stat().st_mtime)
        except FileNotFoundError:
            seen = None
        if seen is not None and last_seen is not None and seen != last_seen:
            coordinator.notify_changed(path)
        last_seen = seen
        await asyncio.sleep(interval)


@main.command()
@click.option(
    "--interval",
    type=float,
    default=1.0,
    show_default=True,
    help="Seconds between checks of today's daily note",
)
@click.pass_obj
def watch(config, interval):
    """Watch today's daily note and clip new links as they appear."""
    click.echo(f"Watching {config.daily_note_path()} (Ctrl-C to stop)")

    async def run():
        coordinator = IntakeCoordinator(config, notify=_notice)
        try:
            await _watch(coordinator, interval)
        finally:
            await coordinator.close()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        click.echo("\nStopped.")


@main.command()
@click.option(
    "--document",
    type=str,
    default=None,
    help="Only forget links processed for this note (vault-relative path)",
)
@click.pass_obj
def reset(config, document):
    """Forget which links have already been processed."""
    index = load_index(config.index_path)
    index.reset(document)
    save_index(index, config.index_path)
    if document:
        click.echo(f"Reset processed links for {document}")
    else:
        click.echo("Reset all processed links")
