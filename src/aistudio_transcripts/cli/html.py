"""Interactive HTML view command."""

import asyncio
import tempfile
import webbrowser
from pathlib import Path

import click

from ..export import generate_html_page
from ..host import echo_notice, read_chat_file, write_text_file
from ..view import ChatView
from .utils import resolve_input


@click.command("html")
@click.argument("chat_file")
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    help="Output HTML file. If not specified, writes to temp dir and opens in browser.",
)
@click.option(
    "--open",
    "open_browser",
    is_flag=True,
    help="Open the generated page in your default browser (default if no -o specified).",
)
def html_cmd(chat_file, output, open_browser):
    """Render an AI Studio chat file or URL as an interactive HTML page."""
    path, name = resolve_input(chat_file)
    if not path.exists():
        echo_notice(f"No chat file found at {path}")
        return

    try:
        raw_text = read_chat_file(path)
    except (OSError, UnicodeDecodeError) as e:
        echo_notice(f"Failed to read {path}: {e}")
        return

    view = ChatView(path)
    view.load(raw_text)
    container = asyncio.run(view.render())
    page = generate_html_page(container, name)

    auto_open = output is None
    if output is None:
        output = Path(tempfile.gettempdir()) / f"aistudio-chat-{name}.html"
    output = Path(output)
    try:
        write_text_file(output, page)
    except OSError as e:
        echo_notice(f"Failed to write {output}: {e}")
        return

    click.echo(f"Output: {output.resolve()}")
    if open_browser or auto_open:
        webbrowser.open(output.resolve().as_uri())
