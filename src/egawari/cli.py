"""CLI entry point for egawari. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from egawari.config import ConfigError, load_config, save_config
from egawari.console import col, err, log, success, warn
from egawari.detect import AutoSetup
from egawari.editor import ConfigEditor
from egawari.surface import AnsiSurface

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool, log_file: str | None) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )


def _open_surface() -> AnsiSurface:
    if not sys.stdin.isatty():
        raise click.UsageError("the configuration editor needs an interactive terminal")
    return AnsiSurface()


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write log messages to this file instead of stderr.",
)
@click.pass_context
def main(ctx, verbose, log_file):
    """Makes your touchpad work like a graphics tablet."""
    _setup_logging(verbose, log_file)
    if ctx.invoked_subcommand is None:
        err("No command provided.")
        log("See: <egawari help>")
        sys.exit(1)


@main.command("help")
def help_command():
    """Show the usage screen."""
    col("---===egawari===---")
    log("Makes your touchpad work like a graphics tablet.")
    click.echo()
    col("---====Usage====---")
    log("egawari [options] <command> [arguments]")
    click.echo()
    col("---===Options===---")
    log("-v, --verbose => Logs debug messages.")
    log("--log-file <path> => Writes log messages to a file.")
    click.echo()
    col("---===Commands==---")
    log("help => Shows this text.")
    log("config => Edits or shows the egawari configuration interactively.")
    click.echo()
    col("---=============---")


@main.command()
def config():
    """Edit or show the egawari configuration interactively."""
    conf = load_config(on_error=warn)

    try:
        with _open_surface() as surface:
            ConfigEditor(surface, conf, on_trigger=AutoSetup(conf)).run()
    except EOFError:
        err("Input was closed, the configuration was not saved.")
        sys.exit(1)

    try:
        save_config(conf)
    except ConfigError as e:
        err(str(e))
        sys.exit(1)
    success("Successfully saved the configuration.")
