"""Export formats for AI Studio chat transcripts.

This package provides the static Markdown exporter and the interactive
HTML view renderer.
"""

from .markdown import (
    NOT_AVAILABLE,
    build_metadata_table,
    export_to_markdown,
    format_callout,
    format_setting,
    quote_lines,
    render_segment_markdown,
)

from .html import (
    CSS,
    JS,
    INVALID_DATA_TEXT,
    THOUGHT_SUMMARY_TEXT,
    Element,
    MarkdownRenderer,
    add_copy_button,
    build_view,
    generate_html_page,
    get_template,
    render_document,
    render_markdown_text,
    render_segment,
)

__all__ = [
    # Markdown export
    "NOT_AVAILABLE",
    "build_metadata_table",
    "export_to_markdown",
    "format_callout",
    "format_setting",
    "quote_lines",
    "render_segment_markdown",
    # Interactive view
    "CSS",
    "JS",
    "INVALID_DATA_TEXT",
    "THOUGHT_SUMMARY_TEXT",
    "Element",
    "MarkdownRenderer",
    "add_copy_button",
    "build_view",
    "generate_html_page",
    "get_template",
    "render_document",
    "render_markdown_text",
    "render_segment",
]
