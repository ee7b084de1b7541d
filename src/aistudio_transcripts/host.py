"""Host services: file I/O, notices, clipboard access and URL fetching."""

import logging
import subprocess
import sys
import tempfile
from pathlib import Path

import click
import httpx

from .export import export_to_markdown
from .parsers import ChatParseError, parse_chat_text

logger = logging.getLogger(__name__)

CLIPBOARD_TIMEOUT = 5


class ClipboardError(RuntimeError):
    """Raised when a clipboard backend cannot copy text."""


def echo_notice(message):
    """Show a user-facing notice on stderr."""
    click.echo(message, err=True)


def default_clipboard_commands():
    """Return (primary, fallback) copy commands for the current platform."""
    if sys.platform == "darwin":
        return ["pbcopy"], None
    if sys.platform.startswith("win"):
        return ["clip"], None
    return ["wl-copy"], ["xclip", "-selection", "clipboard"]


class SystemClipboard:
    """Clipboard backed by the platform's copy commands.

    The fallback command is only tried after the primary one fails.
    """

    def __init__(self, primary=None, fallback=None):
        if primary is None and fallback is None:
            primary, fallback = default_clipboard_commands()
        self.primary = primary
        self.fallback = fallback

    def _run(self, command, text):
        if not command:
            raise ClipboardError("No clipboard command available")
        try:
            subprocess.run(
                command,
                input=text,
                text=True,
                check=True,
                capture_output=True,
                timeout=CLIPBOARD_TIMEOUT,
            )
        except (
            subprocess.CalledProcessError,
            subprocess.TimeoutExpired,
            FileNotFoundError,
            OSError,
        ) as e:
            raise ClipboardError(f"{command[0]}: {e}") from e

    def write_text(self, text):
        self._run(self.primary, text)

    def fallback_write_text(self, text):
        self._run(self.fallback, text)


def copy_text(text, clipboard, notify=echo_notice):
    """Copy text to the clipboard, falling back to the secondary path.

    Returns True once either path succeeds. If both fail a failure notice is
    shown and False is returned.
    """
    try:
        clipboard.write_text(text)
    except ClipboardError as e:
        logger.warning("Clipboard copy failed, trying fallback: %s", e)
        try:
            clipboard.fallback_write_text(text)
        except ClipboardError as fallback_error:
            notify(f"Copy failed: {fallback_error}")
            return False
    notify("Copied to clipboard")
    return True


def read_chat_file(path):
    return Path(path).read_text(encoding="utf-8")


def write_text_file(path, text):
    Path(path).write_text(text, encoding="utf-8")


def markdown_output_path(path):
    """Sibling path with the same base name and a .md extension."""
    return Path(path).with_suffix(".md")


def export_file(
    path, notify=echo_notice, output=None, title=None, expand_thoughts=False
):
    """Export a chat file to Markdown.

    Every failure is reported through notify and None is returned without
    writing anything. On success the output path is returned.

    Args:
        path: The chat export file, or None when no file is active.
        notify: Callable used for user-facing notices.
        output: Destination path; defaults to the sibling .md file.
        title: Heading for the document; defaults to the file's base name.
        expand_thoughts: Render thinking callouts expanded.
    """
    if path is None:
        notify("No active chat file to export.")
        return None
    path = Path(path)
    if not path.exists():
        notify(f"No chat file found at {path}")
        return None

    try:
        raw_text = read_chat_file(path)
    except (OSError, UnicodeDecodeError) as e:
        notify(f"Failed to read {path}: {e}")
        return None

    try:
        document = parse_chat_text(raw_text)
    except ChatParseError as e:
        logger.error("Failed to parse chat JSON in %s: %s", path, e.message)
        notify(f"Cannot export {path.name}: invalid JSON ({e.message})")
        return None

    markdown_text = export_to_markdown(
        document, title or path.stem, expand_thoughts=expand_thoughts
    )
    output = Path(output) if output else markdown_output_path(path)
    try:
        write_text_file(output, markdown_text)
    except OSError as e:
        notify(f"Failed to write {output}: {e}")
        return None

    logger.info("Wrote %d characters to %s", len(markdown_text), output)
    notify(f"Exported to {output}")
    return output


def is_url(path):
    """Check if a path is a URL (starts with http:// or https://)."""
    return path.startswith("http://") or path.startswith("https://")


def fetch_url_to_tempfile(url):
    """Fetch a URL and save to a temporary file.

    Returns the Path to the temporary file.
    Raises click.ClickException on network errors.
    """
    try:
        response = httpx.get(url, timeout=60.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.RequestError as e:
        raise click.ClickException(f"Failed to fetch URL: {e}")
    except httpx.HTTPStatusError as e:
        raise click.ClickException(
            f"Failed to fetch URL: {e.response.status_code} {e.response.reason_phrase}"
        )

    url_path = url.split("?")[0]
    suffix = Path(url_path).suffix or ".gas"
    url_name = Path(url_path).stem or "chat"

    temp_file = Path(tempfile.gettempdir()) / f"aistudio-url-{url_name}{suffix}"
    temp_file.write_text(response.text, encoding="utf-8")
    return temp_file
