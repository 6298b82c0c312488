"""Command-line interface for bootfit using Click command groups."""

from __future__ import annotations

from typing import NoReturn
import logging

import click

from bootfit import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("verbose", "--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """bootfit: bootstrap confidence intervals for model terms."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


# Register subcommands
from bootfit.commands.intervals import intervals  # noqa: E402

cli.add_command(intervals)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
