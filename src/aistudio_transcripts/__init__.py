"""Convert Google AI Studio chat exports to Markdown and interactive HTML."""

# Parsing imports (from modular package)
from .parsers import (
    ChatDocument,
    ChatParseError,
    Part,
    RunSettings,
    SafetySetting,
    Segment,
    Turn,
    iter_segments,
    normalize_turn,
    parse_chat_data,
    parse_chat_file,
    parse_chat_text,
)

# Export format imports (from modular package)
from .export import (
    CSS,
    JS,
    Element,
    MarkdownRenderer,
    build_view,
    export_to_markdown,
    format_callout,
    generate_html_page,
    render_document,
)

# Host services
from .host import (
    ClipboardError,
    SystemClipboard,
    copy_text,
    export_file,
)

from .view import ChatView

# CLI imports (from modular package)
from .cli import cli, main
