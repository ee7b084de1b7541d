"""Markdown export for AI Studio chat transcripts.

Produces a static Markdown document that uses nested quote-block callouts
for run metadata and thinking segments.
"""

from ..parsers import is_user_role, normalize_turn

NOT_AVAILABLE = "N/A"
METADATA_CALLOUT_TITLE = "Run Settings"
THOUGHT_CALLOUT_TITLE = "🧠 Thinking Process"
USER_HEADING = "### 👤 User"
MODEL_HEADING = "### 🤖 Model"
SYSTEM_HEADING = "## System Instruction"
SEPARATOR = "---"


def quote_lines(text):
    """Prefix every line of text, including blank ones, with '> '."""
    return "\n".join(f"> {line}" for line in text.split("\n"))


def format_callout(callout_type, title, body, folded=True):
    """Format a foldable callout block.

    The header line is ``> [!type]- title`` when folded and
    ``> [!type]+ title`` when expanded. The block always ends with a
    blank line so callouts can be concatenated directly.
    """
    fold_marker = "-" if folded else "+"
    header = f"> [!{callout_type}]{fold_marker} {title}"
    quoted = quote_lines(body.rstrip("\n"))
    return f"{header}\n{quoted}\n\n"


def format_setting(value):
    """Format a run setting value for the metadata table."""
    if value is None or value == "":
        return NOT_AVAILABLE
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_table_cell(text):
    """Keep a value inside a single Markdown table cell."""
    return text.replace("\r\n", "\n").replace("|", "\\|").replace("\n", "<br>")


def format_safety_settings(safety_settings):
    return "<br>".join(
        escape_table_cell(f"{setting.category_suffix}: {setting.threshold}")
        for setting in safety_settings
    )


def build_metadata_table(run_settings):
    """Build the Markdown table of run settings."""
    model = temperature = top_p = top_k = None
    safety_settings = None
    if run_settings is not None:
        model = run_settings.model
        temperature = run_settings.temperature
        top_p = run_settings.top_p
        top_k = run_settings.top_k
        safety_settings = run_settings.safety_settings

    rows = [
        ("Model", format_setting(model)),
        ("Temperature", format_setting(temperature)),
        ("Top P", format_setting(top_p)),
        ("Top K", format_setting(top_k)),
    ]
    rows = [(name, escape_table_cell(value)) for name, value in rows]
    if safety_settings is not None:
        rows.append(("Safety", format_safety_settings(safety_settings)))

    lines = ["| Setting | Value |", "| --- | --- |"]
    lines.extend(f"| {name} | {value} |" for name, value in rows)
    return "\n".join(lines)


def render_segment_markdown(segment, expand_thoughts=False):
    """Render a single normalized segment as Markdown."""
    if is_user_role(segment.role):
        return f"{USER_HEADING}\n\n{segment.text}\n\n"
    if segment.is_thought:
        return format_callout(
            "abstract", THOUGHT_CALLOUT_TITLE, segment.text, folded=not expand_thoughts
        )
    return f"{MODEL_HEADING}\n\n{segment.text}\n\n"


def export_to_markdown(document, title, expand_thoughts=False):
    """Export a parsed chat document to a Markdown string.

    Args:
        document: The parsed ChatDocument.
        title: Text for the top-level heading.
        expand_thoughts: Render thinking callouts expanded instead of folded.

    Returns:
        The complete Markdown document as a string.
    """
    output = [f"# {title}\n\n"]
    output.append(
        format_callout(
            "info", METADATA_CALLOUT_TITLE, build_metadata_table(document.run_settings)
        )
    )
    output.append(f"{SEPARATOR}\n\n")

    if document.system_instruction:
        output.append(f"{SYSTEM_HEADING}\n\n")
        output.append(f"{quote_lines(document.system_instruction)}\n\n")
        output.append(f"{SEPARATOR}\n\n")

    for turn in document.chunks:
        for segment in normalize_turn(turn):
            output.append(render_segment_markdown(segment, expand_thoughts))

    return "".join(output)
