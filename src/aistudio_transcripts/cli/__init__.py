"""CLI commands for aistudio-transcripts."""

import logging

import click
from click_default_group import DefaultGroup

from .export import export_cmd
from .html import html_cmd
from .copy import copy_cmd
from .utils import resolve_input


@click.group(cls=DefaultGroup, default="export", default_if_no_args=False)
@click.version_option(None, "-v", "--version", package_name="aistudio-transcripts")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """Convert Google AI Studio chat exports to Markdown or interactive HTML.

    Export a chat to a Markdown file next to it, render it as an HTML page
    with collapsible thinking blocks, or copy a single message.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level, format="[%(levelname)-8s] %(message)s")


# Register commands
cli.add_command(export_cmd, "export")
cli.add_command(html_cmd, "html")
cli.add_command(copy_cmd, "copy")


def main():
    cli()


__all__ = [
    "cli",
    "main",
    "export_cmd",
    "html_cmd",
    "copy_cmd",
    "resolve_input",
]
