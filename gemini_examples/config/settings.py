# -*- coding: utf-8 -*-
"""
Central Configuration Module
=============================
Loads environment variables and provides typed settings for the
Gemini example flows and the example runner.

All secrets and configuration values are read from the .env file
in the working directory (or the source checkout). Sensible defaults are
provided where possible. The Gemini guide ships inside the package.
The example runner only needs the `runner` group, so it works without
a Gemini API key.
"""

import os
import sys
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# ---------------------------------------------------------------------------
# Resolve project root (three levels up from gemini_examples/config/settings.py)
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_PATH = PROJECT_ROOT / ".env"

# Load .env files — override=False keeps existing environment values.
# Working directory first, then the source checkout.
load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)
load_dotenv(dotenv_path=ENV_PATH, override=False)


def _require_env(*keys: str) -> str:
    """Return the first env var that is set, or exit with a clear error."""
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    print(
        f"[CONFIG ERROR] Required environment variable '{keys[0]}' is not set. "
        f"Check your .env file at: {ENV_PATH}",
        file=sys.stderr,
    )
    sys.exit(1)


# ---------------------------------------------------------------------------
# Data classes — grouped, typed, immutable-ish configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeminiConfig:
    """Google Gemini API configuration."""

    api_key: str
    text_model: str
    tts_model: str
    image_model: str
    imagen_model: str
    video_model: str
    image_to_video_model: str
    temperature: float
    max_output_tokens: int
    default_voice: str
    secondary_voice: str


@dataclass(frozen=True)
class PollingConfig:
    """Long-running operation polling (video generation)."""

    interval_seconds: float
    timeout_seconds: float  # <= 0 means wait forever


@dataclass(frozen=True)
class RunnerConfig:
    """Example runner (Gemini CLI scaffolding) configuration."""

    cli_command: str
    guide_path: Path
    folder_prefix: str


@dataclass(frozen=True)
class PathsConfig:
    """All filesystem paths used by the flows."""

    project_root: Path
    output_media: Path
    output_videos: Path
    logs: Path


@dataclass(frozen=True)
class Scenario:
    """One entry of the example runner menu."""

    number: int
    slug: str  # folder-safe id, e.g. "story-generation"
    prompt: str  # passed verbatim to the Gemini CLI
    description: str  # menu label
    flow_name: str  # Python flow demonstrating the same scenario
    tier_note: Optional[str] = None
    tier_level: str = "info"  # "info" | "warning"


# ---------------------------------------------------------------------------
# Build configuration instances from environment
# ---------------------------------------------------------------------------


def _build_gemini() -> GeminiConfig:
    return GeminiConfig(
        api_key=_require_env("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        text_model=os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash"),
        tts_model=os.getenv("GEMINI_TTS_MODEL", "gemini-2.5-flash-preview-tts"),
        image_model=os.getenv(
            "GEMINI_IMAGE_MODEL", "gemini-2.0-flash-preview-image-generation"
        ),
        imagen_model=os.getenv(
            "GEMINI_IMAGEN_MODEL", "imagen-4.0-generate-preview-06-06"
        ),
        video_model=os.getenv("GEMINI_VIDEO_MODEL", "veo-3.0-generate-preview"),
        image_to_video_model=os.getenv(
            "GEMINI_IMAGE_TO_VIDEO_MODEL", "veo-2.0-generate-001"
        ),
        temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.8")),
        max_output_tokens=int(os.getenv("GEMINI_MAX_TOKENS", "8192")),
        default_voice=os.getenv("GEMINI_TTS_VOICE", "Algenib"),
        secondary_voice=os.getenv("GEMINI_TTS_SECONDARY_VOICE", "Achernar"),
    )


def _build_polling() -> PollingConfig:
    return PollingConfig(
        interval_seconds=float(os.getenv("OPERATION_POLL_INTERVAL", "5")),
        timeout_seconds=float(os.getenv("OPERATION_POLL_TIMEOUT", "600")),
    )


def default_guide_path() -> Path:
    """The Gemini guide shipped inside the package."""
    return Path(str(resources.files("gemini_examples") / "docs" / "gemini.md"))


def _build_runner() -> RunnerConfig:
    guide = os.getenv("EXAMPLES_GUIDE_PATH")
    return RunnerConfig(
        cli_command=os.getenv("EXAMPLES_CLI_COMMAND", "gemini"),
        guide_path=Path(guide) if guide else default_guide_path(),
        folder_prefix=os.getenv("EXAMPLES_FOLDER_PREFIX", "genkit-learn"),
    )


def _build_paths() -> PathsConfig:
    # Outputs go under the working directory
    root = Path.cwd()
    output = Path(os.getenv("EXAMPLES_OUTPUT_DIR") or root / "output")
    paths = PathsConfig(
        project_root=root,
        output_media=output / "media",
        output_videos=output / "videos",
        logs=root / "logs",
    )
    # Ensure all output directories exist
    for p in [paths.output_media, paths.output_videos, paths.logs]:
        p.mkdir(parents=True, exist_ok=True)
    return paths


# ---------------------------------------------------------------------------
# Scenario registry — add new examples here to extend the runner menu
# ---------------------------------------------------------------------------
SCENARIOS: list[Scenario] = [
    Scenario(
        number=1,
        slug="story-generation",
        prompt=(
            "I need a story writing app using Genkit. Users should be able to "
            "enter any topic and get back a creative story about it. Give them "
            "options for story length (short, medium, or long). Use Gemini AI "
            "to generate the stories."
        ),
        description="✅ Basic Inference (Text Generation) - Story writing app",
        flow_name="story_generator",
    ),
    Scenario(
        number=2,
        slug="tts-single-speaker",
        prompt=(
            "Build me a project that uses Genkit on the backend to take input "
            "from the user, translate it to Spanish from English and create an "
            "audio file using text-to-speech to read back the spanish text by "
            "generating the audio file. Use Gemini models for both tasks."
        ),
        description="🔊 Text-to-Speech Generation: Single Speaker",
        flow_name="translate_to_spanish_speech",
    ),
    Scenario(
        number=3,
        slug="tts-multi-speaker",
        prompt=(
            "Build a Genkit app that creates podcast-style audio conversations. "
            "I want to write dialogue between two people and have the app "
            "generate audio where each person sounds different. For example: "
            '"Host: Welcome!" and "Guest: Thanks!" should have distinct voices. '
            "Use Gemini's text-to-speech."
        ),
        description="🔊 Text-to-Speech Generation: Multi-Speaker",
        flow_name="podcast_dialogue",
    ),
    Scenario(
        number=4,
        slug="image-gen-flash",
        prompt=(
            "I need an AI image generator using Genkit with Gemini Flash. Users "
            "should be able to type what they want to see (like \"a cat wearing "
            'a superhero cape") and get back a generated image quickly. Use the '
            "Gemini Flash model for fast image generation."
        ),
        description="🖼️ Image Generation with Gemini Flash (Free)",
        flow_name="flash_image_generator",
    ),
    Scenario(
        number=5,
        slug="image-gen-imagen",
        prompt=(
            "Build an image generator with Genkit using Google's Imagen 4 "
            "preview model. I want high-quality, professional images with style "
            'controls (like "photorealistic" or "watercolor"). Users should be '
            "able to generate multiple variations of their prompt."
        ),
        description="🎨 High-Quality Image Generation with Imagen (Paid)",
        flow_name="imagen_generator",
        tier_note="Note: May require paid tier for Imagen access",
        tier_level="info",
    ),
    Scenario(
        number=6,
        slug="video-generation",
        prompt=(
            "Build a video creation app with Genkit where users describe scenes "
            "in text and get AI-generated videos. Support both text-to-video and "
            "image-to-video generation. Include options for aspect ratio and "
            "negative prompts. Use Google's Veo 3 preview model for text-to-video "
            "and Veo 2 for image-to-video."
        ),
        description="🎬 Video Generation (Veo 3 & Veo 2) - No Free Tier",
        flow_name="text_to_video",
        tier_note="Warning: Requires billing account (no free tier)",
        tier_level="warning",
    ),
]


def get_scenario(number: int) -> Scenario:
    """Look up a scenario by its menu number. Raises ValueError if not found."""
    for sc in SCENARIOS:
        if sc.number == number:
            return sc
    valid = [sc.number for sc in SCENARIOS]
    raise ValueError(f"Unknown scenario {number!r}. Valid scenarios: {valid}")


def get_scenario_by_slug(slug: str) -> Scenario:
    """Look up a scenario by its slug. Raises ValueError if not found."""
    for sc in SCENARIOS:
        if sc.slug == slug:
            return sc
    valid = [sc.slug for sc in SCENARIOS]
    raise ValueError(f"Unknown scenario '{slug}'. Valid scenarios: {valid}")


# ---------------------------------------------------------------------------
# Lazy-loaded singleton settings — import and use directly
# ---------------------------------------------------------------------------


class _Settings:
    """Lazy-loading settings container. Configs are built on first access."""

    def __init__(self):
        self._gemini = None
        self._polling = None
        self._runner = None
        self._paths = None

    @property
    def gemini(self) -> GeminiConfig:
        if self._gemini is None:
            self._gemini = _build_gemini()
        return self._gemini

    @property
    def polling(self) -> PollingConfig:
        if self._polling is None:
            self._polling = _build_polling()
        return self._polling

    @property
    def runner(self) -> RunnerConfig:
        if self._runner is None:
            self._runner = _build_runner()
        return self._runner

    @property
    def paths(self) -> PathsConfig:
        if self._paths is None:
            self._paths = _build_paths()
        return self._paths

    def reset(self) -> None:
        """Drop cached groups so the next access re-reads the environment."""
        self.__init__()


# Global settings instance — usage: `from gemini_examples.config.settings import settings`
settings = _Settings()
