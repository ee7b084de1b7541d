"""Markdown export command."""

from pathlib import Path

import click

from ..host import echo_notice, export_file, is_url
from .utils import resolve_input


@click.command("export")
@click.argument("chat_file", required=False)
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    help="Output Markdown file. Defaults to the chat file's name with a .md extension.",
)
@click.option("--title", help="Document heading. Defaults to the chat file's base name.")
@click.option(
    "--expand-thoughts",
    is_flag=True,
    help="Render thinking blocks expanded instead of folded.",
)
def export_cmd(chat_file, output, title, expand_thoughts):
    """Export an AI Studio chat file or URL to Markdown."""
    if chat_file is None:
        export_file(None, notify=echo_notice)
        return

    path, name = resolve_input(chat_file)
    if output is None and is_url(chat_file):
        # Downloaded files are written to the current directory.
        output = Path(".") / f"{name}.md"
    export_file(
        path,
        notify=echo_notice,
        output=output,
        title=title or name,
        expand_thoughts=expand_thoughts,
    )
