"""View lifecycle for a single AI Studio chat file."""

import json
import logging
from pathlib import Path

from .export import Element, MarkdownRenderer, render_document
from .host import SystemClipboard, copy_text, echo_notice
from .parsers import ChatParseError, parse_chat_text

logger = logging.getLogger(__name__)

VIEW_TYPE = "gas-view"
DEFAULT_DISPLAY_TEXT = "AI Studio Chat"


class ChatView:
    """Holds one parsed chat document and renders it into a container.

    The embedding application calls load() when a file is opened,
    serialize() when it is saved, render() to (re)draw, and dispose() when
    the view is closed.
    """

    view_type = VIEW_TYPE

    def __init__(
        self, path=None, rich_text_renderer=None, clipboard=None, notify=echo_notice
    ):
        self.path = Path(path) if path else None
        self.rich_text_renderer = rich_text_renderer or MarkdownRenderer()
        self.clipboard = clipboard or SystemClipboard()
        self.notify = notify
        self.document = None
        self.container = Element("div")

    @property
    def display_text(self):
        return self.path.stem if self.path else DEFAULT_DISPLAY_TEXT

    @property
    def source_path(self):
        return str(self.path) if self.path else ""

    def load(self, text):
        """Parse text into the current document; invalid JSON clears it."""
        try:
            self.document = parse_chat_text(text)
        except ChatParseError as e:
            logger.error("Failed to parse chat JSON: %s", e.message)
            self.document = None

    def serialize(self):
        """Return the loaded document as pretty-printed JSON."""
        data = self.document.raw if self.document is not None else None
        return json.dumps(data, indent=2, ensure_ascii=False)

    async def render(self, container=None):
        """Clear the container and render the current document into it."""
        if container is not None:
            self.container = container
        self.container.empty()
        await render_document(
            self.document, self.container, self.rich_text_renderer, self.source_path
        )
        return self.container

    def copy(self, element):
        """Copy the raw text bound to a copy button."""
        text = element.copy_text
        if text is None:
            return False
        return copy_text(text, self.clipboard, self.notify)

    def dispose(self):
        """Detach the container and drop the document."""
        self.container.detach()
        self.document = None
