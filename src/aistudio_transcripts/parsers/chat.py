"""Chat export parsing utilities.

Handles parsing of Google AI Studio chat exports and normalizing their turns
into a flat sequence of text segments.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

USER_ROLE = "user"
MODEL_ROLE = "model"


class ChatParseError(ValueError):
    """Raised when a chat export is not valid JSON."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class SafetySetting:
    category: str
    threshold: str

    @property
    def category_suffix(self):
        """The category name without its HARM_CATEGORY_ prefix."""
        return self.category.rsplit("HARM_CATEGORY_", 1)[-1]


@dataclass(frozen=True)
class RunSettings:
    """Model configuration the chat was run with.

    Every field is optional; absent values are None.
    """

    model: str | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    safety_settings: tuple[SafetySetting, ...] | None = None


@dataclass(frozen=True)
class Part:
    text: str
    thought: bool = False


@dataclass(frozen=True)
class Turn:
    """A single user or model turn.

    Content is either the flat form (text + is_thought) or the parts form.
    """

    role: str
    text: str | None = None
    is_thought: bool = False
    parts: tuple[Part, ...] = ()


@dataclass(frozen=True)
class Segment:
    role: str
    text: str
    is_thought: bool = False


@dataclass(frozen=True)
class ChatDocument:
    run_settings: RunSettings | None = None
    system_instruction: str | None = None
    chunks: tuple[Turn, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


def _as_dict(value):
    return value if isinstance(value, dict) else {}


def _as_list(value):
    return value if isinstance(value, list) else []


def _parse_run_settings(data):
    if not isinstance(data, dict):
        return None
    safety = data.get("safetySettings")
    safety_settings = None
    if isinstance(safety, list):
        safety_settings = tuple(
            SafetySetting(
                category=str(entry.get("category", "")),
                threshold=str(entry.get("threshold", "")),
            )
            for entry in safety
            if isinstance(entry, dict)
        )
    return RunSettings(
        model=data.get("model"),
        temperature=data.get("temperature"),
        top_p=data.get("topP"),
        top_k=data.get("topK"),
        safety_settings=safety_settings,
    )


def _parse_turn(chunk):
    parts = tuple(
        Part(text=part.get("text") or "", thought=bool(part.get("thought", False)))
        for part in _as_list(chunk.get("parts"))
        if isinstance(part, dict)
    )
    return Turn(
        role=str(chunk.get("role", "")),
        text=chunk.get("text"),
        is_thought=bool(chunk.get("isThought", False)),
        parts=parts,
    )


def parse_chat_data(data):
    """Build a ChatDocument from already-decoded JSON data.

    Missing optional sections are treated as absent; a missing
    chunkedPrompt yields an empty conversation.
    """
    if not isinstance(data, dict):
        raise ChatParseError(
            f"Expected a JSON object at the top level, got {type(data).__name__}"
        )
    system_instruction = _as_dict(data.get("systemInstruction")).get("text")
    chunks = _as_list(_as_dict(data.get("chunkedPrompt")).get("chunks"))
    return ChatDocument(
        run_settings=_parse_run_settings(data.get("runSettings")),
        system_instruction=system_instruction or None,
        chunks=tuple(_parse_turn(chunk) for chunk in chunks if isinstance(chunk, dict)),
        raw=data,
    )


def parse_chat_text(raw_text):
    """Parse the full text of a chat export.

    Raises ChatParseError carrying the JSON syntax error message when the
    text is not valid JSON.
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise ChatParseError(str(e)) from e
    document = parse_chat_data(data)
    logger.debug("Parsed chat export with %d turns", len(document.chunks))
    return document


def parse_chat_file(filepath):
    """Read and parse a chat export file."""
    filepath = Path(filepath)
    return parse_chat_text(filepath.read_text(encoding="utf-8"))


def normalize_turn(turn):
    """Resolve a turn into its ordered text segments.

    A non-empty flat ``text`` wins over ``parts``; a turn with neither
    yields no segments.
    """
    if turn.text:
        return [Segment(role=turn.role, text=turn.text, is_thought=turn.is_thought)]
    return [
        Segment(role=turn.role, text=part.text, is_thought=part.thought)
        for part in turn.parts
    ]


def iter_segments(document):
    """Yield every segment of the document in conversational order."""
    for turn in document.chunks:
        yield from normalize_turn(turn)


def is_user_role(role):
    """Return True for user turns; every other role is shown as the model."""
    return role == USER_ROLE


def get_role_label(role):
    return "User" if is_user_role(role) else "Model"
