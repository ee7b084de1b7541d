"""Helpers shared by the CLI commands."""

from pathlib import Path

import click

from ..host import fetch_url_to_tempfile, is_url


def resolve_input(chat_file):
    """Resolve a CLI argument to a local path and a display name.

    URLs are downloaded to a temporary file first. Returns a
    (path, name) tuple.
    """
    if is_url(chat_file):
        click.echo(f"Fetching {chat_file}...")
        url_name = Path(chat_file.split("?")[0]).stem or "chat"
        return fetch_url_to_tempfile(chat_file), url_name
    path = Path(chat_file)
    return path, path.stem
