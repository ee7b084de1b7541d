"""Interactive HTML view for AI Studio chat transcripts.

This module builds the interactive view of a chat as a tree of Element
nodes (role labels, collapsible thinking blocks, copy buttons) and
serializes that tree to a standalone HTML page.
"""

import logging

import markdown
from jinja2 import Environment, PackageLoader

from ..parsers import get_role_label, is_user_role, normalize_turn
from .markdown import format_setting

logger = logging.getLogger(__name__)

# Set up Jinja2 environment
_jinja_env = Environment(
    loader=PackageLoader("aistudio_transcripts", "templates"),
    autoescape=True,
)

INVALID_DATA_TEXT = "Invalid or empty JSON data."
THOUGHT_SUMMARY_TEXT = "Thinking process..."
SYSTEM_INSTRUCTION_LABEL = "System instruction:"
COPY_BUTTON_TEXT = "Copy"
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


def get_template(name):
    """Get a Jinja2 template by name."""
    return _jinja_env.get_template(name)


class Element:
    """A node in the rendered view tree.

    Mirrors the small subset of DOM operations the renderer needs. Rendered
    rich text is stored as raw HTML in ``html`` and emitted unescaped.
    """

    def __init__(self, tag="div", cls=None, text=None, attrs=None, html=None):
        self.tag = tag
        self.classes = cls.split() if cls else []
        self.text = text
        self.attrs = dict(attrs or {})
        self.html = html
        self.children = []
        self.parent = None
        self.detached = False

    def __repr__(self):
        return f"<Element {self.tag} class={self.class_name!r}>"

    @property
    def class_name(self):
        return " ".join(self.classes)

    @property
    def is_connected(self):
        """False once this node or any of its ancestors has been detached."""
        node = self
        while node is not None:
            if node.detached:
                return False
            node = node.parent
        return True

    @property
    def copy_text(self):
        return self.attrs.get("data-copy")

    def add_class(self, cls):
        for name in cls.split():
            if name not in self.classes:
                self.classes.append(name)

    def create_el(self, tag, cls=None, text=None, attrs=None, html=None):
        child = Element(tag, cls=cls, text=text, attrs=attrs, html=html)
        child.parent = self
        self.children.append(child)
        return child

    def create_div(self, cls=None, text=None):
        return self.create_el("div", cls=cls, text=text)

    def empty(self):
        for child in self.children:
            child.parent = None
        self.children = []

    def detach(self):
        self.detached = True
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def iter(self):
        yield self
        for child in self.children:
            yield from child.iter()

    def find_all(self, cls):
        """Return every descendant (including self) carrying a class."""
        return [node for node in self.iter() if cls in node.classes]

    def outline(self):
        """Return a (tag, classes, text, children) tuple describing the subtree."""
        return (
            self.tag,
            tuple(self.classes),
            self.text,
            tuple(child.outline() for child in self.children),
        )


def render_markdown_text(text):
    """Render markdown text to HTML."""
    if not text:
        return ""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


class MarkdownRenderer:
    """Rich-text renderer that turns Markdown into HTML nodes."""

    async def render(self, markdown_text, container, source_path=""):
        """Render markdown_text and attach the result to container.

        Nothing is attached if the container was detached while rendering.
        """
        content_html = render_markdown_text(markdown_text)
        if not container.is_connected:
            logger.debug("Container detached, dropping rendered text")
            return
        attrs = {"data-source-path": source_path} if source_path else None
        container.create_el(
            "div", cls="markdown-rendered", attrs=attrs, html=content_html
        )


def add_copy_button(parent, raw_text):
    """Attach a copy button bound to the raw, unrendered text."""
    return parent.create_el(
        "button",
        cls="gas-copy-btn",
        text=COPY_BUTTON_TEXT,
        attrs={"data-copy": raw_text, "aria-label": "Copy to clipboard"},
    )


def render_header(document, container):
    run_settings = document.run_settings
    if run_settings is None:
        return
    header = container.create_div("gas-header")
    header.create_el(
        "span", cls="gas-meta", text=f"Model: {format_setting(run_settings.model)}"
    )
    header.create_el(
        "span",
        cls="gas-meta",
        text=f"Temp: {format_setting(run_settings.temperature)}",
    )


async def render_system_instruction(
    document, container, rich_text_renderer, source_path
):
    text = document.system_instruction
    if not text:
        return
    system_el = container.create_div("gas-system-instruction")
    system_el.create_el("strong", text=SYSTEM_INSTRUCTION_LABEL)
    content_el = system_el.create_div("gas-text-content")
    await rich_text_renderer.render(text, content_el, source_path)
    add_copy_button(system_el, text)


async def render_segment(segment, row, rich_text_renderer, source_path):
    """Render one normalized segment as a message bubble in row."""
    bubble = row.create_div("gas-msg-bubble")
    bubble.create_div("gas-role-label", text=get_role_label(segment.role))
    if segment.is_thought:
        thought_el = bubble.create_el("details", cls="gas-thought-block")
        thought_el.create_el("summary", text=THOUGHT_SUMMARY_TEXT)
        target = thought_el.create_div("gas-thought-content")
    else:
        target = bubble.create_div("gas-text-content")
    await rich_text_renderer.render(segment.text, target, source_path)
    if segment.text:
        add_copy_button(bubble, segment.text)
    return bubble


async def render_document(document, container, rich_text_renderer, source_path=""):
    """Populate container with the interactive view of document.

    A None document renders a single placeholder. Segments are rendered one
    at a time in document order; rendering stops quietly if the container
    is detached part way through.
    """
    container.add_class("gas-container")
    if document is None:
        container.create_div(text=INVALID_DATA_TEXT)
        return

    render_header(document, container)
    await render_system_instruction(
        document, container, rich_text_renderer, source_path
    )

    chat_el = container.create_div("gas-chat-stream")
    for turn in document.chunks:
        if not container.is_connected:
            logger.debug("Container detached, abandoning render")
            return
        role_class = "user" if is_user_role(turn.role) else "model"
        row = chat_el.create_div(f"gas-msg-row {role_class}")
        for segment in normalize_turn(turn):
            await render_segment(segment, row, rich_text_renderer, source_path)


async def build_view(document, rich_text_renderer=None, source_path=""):
    """Render document into a fresh container and return it."""
    container = Element("div")
    if rich_text_renderer is None:
        rich_text_renderer = MarkdownRenderer()
    await render_document(document, container, rich_text_renderer, source_path)
    return container


def generate_html_page(container, title):
    """Serialize a rendered view tree to a standalone HTML page."""
    page_template = get_template("page.html")
    return page_template.render(css=CSS, js=JS, title=title, root=container)


# CSS constant
CSS = """
:root { --bg-color: #f5f5f5; --card-bg: #ffffff; --user-bg: #e3f2fd; --user-border: #1976d2; --model-bg: #ffffff; --model-border: #9e9e9e; --thinking-bg: #fff8e1; --thinking-border: #ffc107; --thinking-text: #666; --text-color: #212121; --text-muted: #757575; --code-bg: #263238; --code-text: #aed581; }
* { box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: var(--bg-color); color: var(--text-color); margin: 0; padding: 16px; line-height: 1.6; }
.container { max-width: 800px; margin: 0 auto; }
h1 { font-size: 1.5rem; margin-bottom: 24px; padding-bottom: 8px; border-bottom: 2px solid var(--user-border); }
.gas-header { display: flex; gap: 16px; flex-wrap: wrap; margin-bottom: 16px; font-size: 0.9rem; color: var(--text-muted); }
.gas-meta { background: var(--card-bg); border-radius: 6px; padding: 4px 10px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
.gas-system-instruction { position: relative; background: var(--card-bg); border-left: 4px solid var(--thinking-border); border-radius: 12px; padding: 16px; margin-bottom: 16px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
.gas-chat-stream { display: flex; flex-direction: column; gap: 16px; }
.gas-msg-row { display: flex; flex-direction: column; gap: 8px; }
.gas-msg-row.user { align-items: flex-end; }
.gas-msg-row.model { align-items: flex-start; }
.gas-msg-bubble { position: relative; max-width: 90%; border-radius: 12px; padding: 12px 16px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
.user .gas-msg-bubble { background: var(--user-bg); border-left: 4px solid var(--user-border); }
.model .gas-msg-bubble { background: var(--model-bg); border-left: 4px solid var(--model-border); }
.gas-role-label { font-size: 0.8rem; font-weight: 600; text-transform: uppercase; letter-spacing: 0.5px; color: var(--text-muted); margin-bottom: 8px; }
.user .gas-role-label { color: var(--user-border); }
.gas-thought-block { background: var(--thinking-bg); border: 1px solid var(--thinking-border); border-radius: 8px; padding: 8px 12px; font-size: 0.9rem; color: var(--thinking-text); }
.gas-thought-block summary { cursor: pointer; font-size: 0.75rem; font-weight: 600; text-transform: uppercase; color: #f57c00; }
.gas-thought-content { margin-top: 8px; }
.gas-text-content p, .gas-thought-content p { margin: 0 0 12px 0; }
.gas-text-content p:last-child, .gas-thought-content p:last-child { margin-bottom: 0; }
.gas-text-content pre, .gas-thought-content pre { background: var(--code-bg); color: var(--code-text); padding: 12px; border-radius: 6px; overflow-x: auto; font-size: 0.85rem; white-space: pre-wrap; word-wrap: break-word; }
.gas-text-content code { background: rgba(0,0,0,0.08); padding: 2px 6px; border-radius: 4px; font-size: 0.9em; }
.gas-text-content pre code { background: transparent; padding: 0; }
.gas-text-content table { border-collapse: collapse; margin: 12px 0; width: 100%; }
.gas-text-content th, .gas-text-content td { border: 1px solid #ddd; padding: 8px 12px; text-align: left; }
.gas-copy-btn { display: block; margin-top: 8px; margin-left: auto; padding: 2px 8px; background: transparent; border: 1px solid var(--text-muted); border-radius: 4px; color: var(--text-muted); font-size: 0.75rem; cursor: pointer; }
.gas-copy-btn:hover { background: rgba(0,0,0,0.05); }
#gas-notice { position: fixed; bottom: 16px; right: 16px; background: var(--code-bg); color: white; padding: 8px 14px; border-radius: 6px; font-size: 0.85rem; opacity: 0; transition: opacity 0.2s ease; pointer-events: none; }
#gas-notice.visible { opacity: 1; }
@media (max-width: 600px) { body { padding: 8px; } .gas-msg-bubble { max-width: 100%; } }
"""

# JavaScript constant: copy buttons with a selection-based fallback
JS = """
function showNotice(message) {
    const notice = document.getElementById('gas-notice');
    notice.textContent = message;
    notice.classList.add('visible');
    setTimeout(function() { notice.classList.remove('visible'); }, 1500);
}
function fallbackCopy(text) {
    const field = document.createElement('textarea');
    field.value = text;
    field.setAttribute('readonly', '');
    field.style.position = 'fixed';
    field.style.opacity = '0';
    document.body.appendChild(field);
    field.focus();
    field.select();
    let ok = false;
    try { ok = document.execCommand('copy'); } catch (e) { ok = false; }
    document.body.removeChild(field);
    return ok;
}
function copyText(text) {
    const done = function(ok) { showNotice(ok ? 'Copied to clipboard' : 'Copy failed'); };
    if (navigator.clipboard && navigator.clipboard.writeText) {
        navigator.clipboard.writeText(text).then(function() { done(true); }).catch(function() { done(fallbackCopy(text)); });
    } else {
        done(fallbackCopy(text));
    }
}
document.querySelectorAll('.gas-copy-btn').forEach(function(btn) {
    btn.addEventListener('click', function() { copyText(btn.getAttribute('data-copy')); });
});
"""
