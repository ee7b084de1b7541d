"""Chat export parsing utilities.

This package provides the data model for Google AI Studio chat exports,
the parser that builds it from JSON, and the turn normalizer.
"""

from .chat import (
    ChatDocument,
    ChatParseError,
    MODEL_ROLE,
    Part,
    RunSettings,
    SafetySetting,
    Segment,
    Turn,
    USER_ROLE,
    get_role_label,
    is_user_role,
    iter_segments,
    normalize_turn,
    parse_chat_data,
    parse_chat_file,
    parse_chat_text,
)

__all__ = [
    # Data model
    "ChatDocument",
    "Part",
    "RunSettings",
    "SafetySetting",
    "Segment",
    "Turn",
    "USER_ROLE",
    "MODEL_ROLE",
    # Parsing
    "ChatParseError",
    "parse_chat_data",
    "parse_chat_file",
    "parse_chat_text",
    # Normalization
    "get_role_label",
    "is_user_role",
    "iter_segments",
    "normalize_turn",
]
