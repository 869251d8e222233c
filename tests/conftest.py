# -*- coding: utf-8 -*-
"""Shared fixtures: fake Gemini client/service, test configuration."""

from types import SimpleNamespace

import pytest

from gemini_examples.config.settings import GeminiConfig, RunnerConfig, settings
from gemini_examples.services.media import DataUri

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def gemini_config():
    return GeminiConfig(
        api_key="test-key",
        text_model="text-model",
        tts_model="tts-model",
        image_model="flash-image-model",
        imagen_model="imagen-model",
        video_model="veo-3",
        image_to_video_model="veo-2",
        temperature=0.8,
        max_output_tokens=1024,
        default_voice="Algenib",
        secondary_voice="Achernar",
    )


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    """Never actually sleep in retry or polling loops."""
    monkeypatch.setattr("time.sleep", lambda seconds: None)


# ---------------------------------------------------------------------------
# Fake google-genai client (for GeminiService tests)
# ---------------------------------------------------------------------------


def text_response(text):
    return SimpleNamespace(text=text, candidates=[], prompt_feedback=None)


def parts_response(*parts):
    content = SimpleNamespace(parts=list(parts))
    return SimpleNamespace(text=None, candidates=[SimpleNamespace(content=content)])


def inline_part(data, mime_type):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text):
    return SimpleNamespace(inline_data=None, text=text)


class FakeModels:
    def __init__(self):
        self.calls = []
        self.responses = []  # items are returned in order; exceptions are raised

    def _next(self):
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def generate_content(self, **kwargs):
        self.calls.append(("generate_content", kwargs))
        return self._next()

    def generate_images(self, **kwargs):
        self.calls.append(("generate_images", kwargs))
        return self._next()

    def generate_videos(self, **kwargs):
        self.calls.append(("generate_videos", kwargs))
        return self._next()


class FakeOperations:
    def __init__(self):
        self.states = []

    def get(self, operation):
        return self.states.pop(0)


class FakeFiles:
    def __init__(self):
        self.downloaded = []

    def download(self, file):
        self.downloaded.append(file)
        return b"downloaded-video"


@pytest.fixture
def fake_client():
    return SimpleNamespace(models=FakeModels(), operations=FakeOperations(), files=FakeFiles())


# ---------------------------------------------------------------------------
# Fake GeminiService (for flow tests)
# ---------------------------------------------------------------------------


class FakeService:
    """Stands in for GeminiService; records calls and returns canned data."""

    def __init__(self, config):
        self.config = config
        self.calls = []
        self.text = "Hola, mundo"
        self.json = {"title": "The Dragon", "story": "Once upon a time there was a dragon."}
        self.pcm = b"\x00\x01" * 240
        self.images = [DataUri("image/png", PNG_BYTES)]
        self.operations = []
        self.error = None

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        if self.error is not None:
            raise self.error

    def generate_text(self, prompt, **kwargs):
        self._record("generate_text", prompt, **kwargs)
        return self.text

    def generate_json(self, prompt, **kwargs):
        self._record("generate_json", prompt, **kwargs)
        return self.json

    def generate_speech(self, text, voice=None):
        self._record("generate_speech", text, voice=voice)
        return self.pcm

    def generate_multi_speaker_speech(self, text, voices):
        self._record("generate_multi_speaker_speech", text, voices=voices)
        return self.pcm

    def generate_flash_image(self, prompt):
        self._record("generate_flash_image", prompt)
        return self.images, "Here is your image"

    def generate_imagen_images(self, prompt, count=1, aspect_ratio="1:1"):
        self._record("generate_imagen_images", prompt, count=count, aspect_ratio=aspect_ratio)
        return self.images * count

    def start_video(self, **kwargs):
        self._record("start_video", **kwargs)
        return self.operations.pop(0)

    def refresh_operation(self, operation):
        self._record("refresh_operation", operation)
        return self.operations.pop(0)

    def download_file(self, file):
        self._record("download_file", file)
        return b"file-api-video"


@pytest.fixture
def fake_service(gemini_config):
    return FakeService(gemini_config)


@pytest.fixture
def runner_config(tmp_path, monkeypatch):
    guide = tmp_path / "docs" / "gemini.md"
    guide.parent.mkdir(parents=True)
    guide.write_text("# guide\n", encoding="utf-8")
    cfg = RunnerConfig(cli_command="gemini", guide_path=guide, folder_prefix="genkit-learn")
    monkeypatch.setattr(settings, "_runner", cfg)
    return cfg
