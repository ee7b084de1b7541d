"""Tests for chat export parsing and turn normalization."""

import json

import pytest

from aistudio_transcripts.parsers import (
    ChatParseError,
    Part,
    Segment,
    Turn,
    get_role_label,
    iter_segments,
    normalize_turn,
    parse_chat_file,
    parse_chat_text,
)


class TestParseChatText:
    def test_full_document(self, sample_chat_data):
        """All sections are parsed into the document."""
        document = parse_chat_text(json.dumps(sample_chat_data))
        settings = document.run_settings
        assert settings.model == "models/gemini-2.5-pro"
        assert settings.temperature == 1
        assert settings.top_p == 0.95
        assert settings.top_k == 64
        assert [s.category_suffix for s in settings.safety_settings] == [
            "HARASSMENT",
            "HATE_SPEECH",
        ]
        assert document.system_instruction == "You are terse.\nAnswer in English."
        assert len(document.chunks) == 5
        assert document.chunks[4].parts == (
            Part(text="4 * 3 = 12", thought=True),
            Part(text="12", thought=False),
        )

    def test_empty_object(self):
        """Missing optional sections are absent, not errors."""
        document = parse_chat_text("{}")
        assert document.run_settings is None
        assert document.system_instruction is None
        assert document.chunks == ()

    def test_missing_chunked_prompt_is_empty(self):
        document = parse_chat_text('{"runSettings": {"model": "gemini-pro"}}')
        assert document.chunks == ()
        assert document.run_settings.temperature is None
        assert document.run_settings.safety_settings is None

    def test_empty_system_instruction_is_absent(self):
        document = parse_chat_text('{"systemInstruction": {"text": ""}}')
        assert document.system_instruction is None

    def test_malformed_json_raises(self):
        """Syntax errors carry the underlying JSON error message."""
        with pytest.raises(ChatParseError) as exc_info:
            parse_chat_text('{"chunkedPrompt": ')
        assert "Expecting value" in exc_info.value.message

    def test_non_object_root_raises(self):
        with pytest.raises(ChatParseError):
            parse_chat_text("[1, 2, 3]")

    def test_unknown_role_preserved(self):
        document = parse_chat_text(
            '{"chunkedPrompt": {"chunks": [{"role": "tool", "text": "x"}]}}'
        )
        assert document.chunks[0].role == "tool"

    def test_raw_data_kept(self, sample_chat_data):
        document = parse_chat_text(json.dumps(sample_chat_data))
        assert document.raw == sample_chat_data

    def test_parse_chat_file(self, sample_chat_file):
        document = parse_chat_file(sample_chat_file)
        assert len(document.chunks) == 5


class TestNormalizeTurn:
    def test_flat_form(self):
        turn = Turn(role="user", text="Hi")
        assert normalize_turn(turn) == [Segment(role="user", text="Hi")]

    def test_flat_form_thought(self):
        turn = Turn(role="model", text="Hmm", is_thought=True)
        assert normalize_turn(turn) == [
            Segment(role="model", text="Hmm", is_thought=True)
        ]

    def test_parts_form_preserves_order(self):
        turn = Turn(
            role="model",
            parts=(Part(text="a", thought=True), Part(text="b"), Part(text="c")),
        )
        segments = normalize_turn(turn)
        assert [s.text for s in segments] == ["a", "b", "c"]
        assert [s.is_thought for s in segments] == [True, False, False]

    def test_flat_text_wins_over_parts(self):
        """Non-empty text silences parts entirely."""
        turn = Turn(role="model", text="flat", parts=(Part(text="ignored"),))
        changed = Turn(
            role="model",
            text="flat",
            parts=(Part(text="other", thought=True), Part(text="more")),
        )
        assert normalize_turn(turn) == [Segment(role="model", text="flat")]
        assert normalize_turn(changed) == normalize_turn(turn)

    def test_empty_text_falls_through_to_parts(self):
        turn = Turn(role="model", text="", parts=(Part(text="from parts"),))
        assert normalize_turn(turn) == [Segment(role="model", text="from parts")]

    def test_empty_turn_yields_nothing(self):
        assert normalize_turn(Turn(role="model")) == []


class TestIterSegments:
    def test_segment_count_and_order(self, sample_chat_data):
        """One segment per flat turn, one per part, in turn then part order."""
        document = parse_chat_text(json.dumps(sample_chat_data))
        segments = list(iter_segments(document))
        assert [s.text for s in segments] == [
            "What is 2 + 2?",
            "Adding the numbers.",
            "**4**",
            "And times 3?",
            "4 * 3 = 12",
            "12",
        ]

    def test_empty_turns_skipped(self):
        document = parse_chat_text(
            json.dumps(
                {
                    "chunkedPrompt": {
                        "chunks": [
                            {"role": "user"},
                            {"role": "model", "parts": []},
                            {"role": "model", "text": "only"},
                        ]
                    }
                }
            )
        )
        assert [s.text for s in iter_segments(document)] == ["only"]


class TestGetRoleLabel:
    def test_user(self):
        assert get_role_label("user") == "User"

    def test_model(self):
        assert get_role_label("model") == "Model"

    def test_unknown_role_shown_as_model(self):
        assert get_role_label("function") == "Model"
