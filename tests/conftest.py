"""Pytest configuration and fixtures for aistudio-transcripts tests."""

import json
import webbrowser

import pytest

from aistudio_transcripts.host import ClipboardError


@pytest.fixture(autouse=True)
def mock_webbrowser_open(monkeypatch):
    """Automatically mock webbrowser.open to prevent browsers opening during tests."""
    opened_urls = []

    def mock_open(url):
        opened_urls.append(url)
        return True

    # Patch the stdlib webbrowser.open directly
    monkeypatch.setattr(webbrowser, "open", mock_open)
    return opened_urls


class FakeClipboard:
    """Clipboard that records copies and can be told to fail."""

    def __init__(self, primary_fails=False, fallback_fails=False):
        self.primary_fails = primary_fails
        self.fallback_fails = fallback_fails
        self.primary_copies = []
        self.fallback_copies = []

    def write_text(self, text):
        if self.primary_fails:
            raise ClipboardError("primary unavailable")
        self.primary_copies.append(text)

    def fallback_write_text(self, text):
        if self.fallback_fails:
            raise ClipboardError("fallback unavailable")
        self.fallback_copies.append(text)


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def notices():
    """A list that collects notices; call notices.append as the notifier."""
    return []


@pytest.fixture
def sample_chat_data():
    """A chat export with settings, a system instruction and both turn forms."""
    return {
        "runSettings": {
            "model": "models/gemini-2.5-pro",
            "temperature": 1,
            "topP": 0.95,
            "topK": 64,
            "safetySettings": [
                {
                    "category": "HARM_CATEGORY_HARASSMENT",
                    "threshold": "OFF",
                },
                {
                    "category": "HARM_CATEGORY_HATE_SPEECH",
                    "threshold": "BLOCK_NONE",
                },
            ],
        },
        "systemInstruction": {"text": "You are terse.\nAnswer in English."},
        "chunkedPrompt": {
            "chunks": [
                {"role": "user", "text": "What is 2 + 2?"},
                {
                    "role": "model",
                    "text": "Adding the numbers.",
                    "isThought": True,
                },
                {"role": "model", "text": "**4**"},
                {"role": "user", "text": "And times 3?"},
                {
                    "role": "model",
                    "parts": [
                        {"text": "4 * 3 = 12", "thought": True},
                        {"text": "12"},
                    ],
                },
            ]
        },
    }


@pytest.fixture
def sample_chat_file(tmp_path, sample_chat_data):
    path = tmp_path / "arithmetic.gas"
    path.write_text(json.dumps(sample_chat_data), encoding="utf-8")
    return path


@pytest.fixture
def invalid_chat_file(tmp_path):
    path = tmp_path / "broken.gas"
    path.write_text('{"chunkedPrompt": {"chunks": [', encoding="utf-8")
    return path


@pytest.fixture
def make_clipboard():
    return FakeClipboard


@pytest.fixture
def non_utf8_chat_file(tmp_path):
    path = tmp_path / "latin1.gas"
    path.write_bytes(b'{"systemInstruction": {"text": "caf\xe9"}}')
    return path
