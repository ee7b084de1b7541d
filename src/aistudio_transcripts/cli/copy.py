"""Copy a single message to the clipboard."""

import click

from ..host import SystemClipboard, copy_text, echo_notice, read_chat_file
from ..parsers import ChatParseError, iter_segments, parse_chat_text
from .utils import resolve_input


@click.command("copy")
@click.argument("chat_file")
@click.option(
    "-n",
    "--segment",
    "segment_index",
    type=int,
    default=0,
    show_default=True,
    help="Index of the message segment to copy, in conversation order.",
)
@click.option(
    "--system",
    "copy_system",
    is_flag=True,
    help="Copy the system instruction instead of a message.",
)
def copy_cmd(chat_file, segment_index, copy_system):
    """Copy the raw text of one message from a chat file to the clipboard."""
    path, _ = resolve_input(chat_file)
    try:
        document = parse_chat_text(read_chat_file(path))
    except (OSError, UnicodeDecodeError) as e:
        echo_notice(f"Failed to read {path}: {e}")
        return
    except ChatParseError as e:
        echo_notice(f"Invalid JSON in {path.name}: {e.message}")
        return

    if copy_system:
        text = document.system_instruction
        if not text:
            echo_notice("This chat has no system instruction.")
            return
    else:
        segments = list(iter_segments(document))
        if not 0 <= segment_index < len(segments):
            echo_notice(
                f"Segment {segment_index} out of range (chat has {len(segments)})."
            )
            return
        text = segments[segment_index].text
        if not text:
            echo_notice(f"Segment {segment_index} has no text to copy.")
            return

    copy_text(text, SystemClipboard(), notify=echo_notice)
