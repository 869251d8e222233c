# -*- coding: utf-8 -*-
"""
Gemini API Service
====================
Wrapper for Google's Gemini API, handling:
  - Text and JSON generation (story, translation)
  - Text-to-speech, single and multi-speaker (raw PCM out)
  - Image generation with Gemini Flash and Imagen
  - Starting and refreshing Veo video operations
  - Retry logic with exponential backoff for text calls

Uses the google-genai SDK.
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from google import genai
from google.genai import types

from gemini_examples.config.settings import GeminiConfig, settings
from gemini_examples.services.media import DataUri

logger = logging.getLogger("examples.gemini")


class GeminiService:
    """
    Google Gemini API client for the example flows.

    Usage:
        service = GeminiService()
        text = service.generate_text("Your prompt here", system_prompt="...")
        pcm = service.generate_speech("Hola mundo")
    """

    # Retry configuration
    MAX_RETRIES = 3
    BASE_DELAY = 2  # seconds

    def __init__(
        self,
        config: Optional[GeminiConfig] = None,
        client: Optional[Any] = None,
    ):
        """Initialize the Gemini client with the API key from settings."""
        self.config = config or settings.gemini
        self.client = client or genai.Client(api_key=self.config.api_key)
        logger.info("GeminiService initialized with text model: %s", self.config.text_model)

    # ================================================================
    # Text generation
    # ================================================================

    def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate text using the configured text model.

        Args:
            prompt: The user/generation prompt.
            system_prompt: Optional system instruction.
            temperature: Override default temperature for this call.
            max_tokens: Override default max tokens for this call.

        Returns:
            The generated text, stripped.

        Raises:
            RuntimeError: If all retries are exhausted.
        """
        cfg = self.config
        gen_config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=cfg.temperature if temperature is None else temperature,
            max_output_tokens=max_tokens or cfg.max_output_tokens,
        )

        last_error = None
        for attempt in range(1, self.MAX_RETRIES + 1):
            try:
                logger.debug(
                    "Gemini generate attempt %d/%d (prompt_len=%d)",
                    attempt,
                    self.MAX_RETRIES,
                    len(prompt),
                )
                response = self.client.models.generate_content(
                    model=cfg.text_model,
                    contents=prompt,
                    config=gen_config,
                )

                text = (response.text or "").strip()
                if not text:
                    raise RuntimeError(
                        "Gemini returned an empty response — content may have been blocked. "
                        f"Prompt feedback: {getattr(response, 'prompt_feedback', None)}"
                    )

                logger.info("Gemini generated %d chars on attempt %d.", len(text), attempt)
                return text

            except Exception as exc:
                last_error = exc
                if attempt == self.MAX_RETRIES:
                    break
                delay = self.BASE_DELAY * (2 ** (attempt - 1))
                logger.warning(
                    "Gemini attempt %d failed: %s — retrying in %ds...",
                    attempt,
                    str(exc)[:200],
                    delay,
                )
                time.sleep(delay)

        raise RuntimeError(
            f"Gemini generation failed after {self.MAX_RETRIES} attempts. "
            f"Last error: {last_error}"
        )

    def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> dict:
        """
        Generate text and parse it as JSON.
        Handles cases where the model wraps JSON in markdown code fences.

        Raises:
            ValueError: If the response cannot be parsed as JSON.
        """
        raw_text = self.generate_text(
            prompt=prompt,
            system_prompt=system_prompt,
            temperature=temperature or 0.3,  # Lower temp for structured output
        )

        cleaned = strip_code_fences(raw_text)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse Gemini JSON response. Raw text:\n%s", raw_text[:500])
            raise ValueError(
                f"Gemini returned invalid JSON: {exc}. "
                f"Response preview: {raw_text[:200]}"
            ) from exc

    # ================================================================
    # Speech
    # ================================================================

    def generate_speech(self, text: str, voice: Optional[str] = None) -> bytes:
        """
        Synthesize speech with a single prebuilt voice.

        Returns:
            Raw PCM bytes (24 kHz, mono, 16-bit).
        """
        voice_name = voice or self.config.default_voice
        speech_config = types.SpeechConfig(
            voice_config=_voice_config(voice_name),
        )
        logger.info("TTS (voice=%s, %d chars)", voice_name, len(text))
        return self._synthesize(text, speech_config)

    def generate_multi_speaker_speech(self, text: str, voices: Dict[str, str]) -> bytes:
        """
        Synthesize a dialogue where each named speaker has its own voice.

        Args:
            text: Dialogue text with `Speaker: line` entries.
            voices: Mapping of speaker name to prebuilt voice name.

        Returns:
            Raw PCM bytes (24 kHz, mono, 16-bit).
        """
        speech_config = types.SpeechConfig(
            multi_speaker_voice_config=types.MultiSpeakerVoiceConfig(
                speaker_voice_configs=[
                    types.SpeakerVoiceConfig(
                        speaker=speaker,
                        voice_config=_voice_config(voice_name),
                    )
                    for speaker, voice_name in voices.items()
                ]
            )
        )
        logger.info("Multi-speaker TTS (%s, %d chars)", voices, len(text))
        return self._synthesize(text, speech_config)

    def _synthesize(self, text: str, speech_config: "types.SpeechConfig") -> bytes:
        response = self.client.models.generate_content(
            model=self.config.tts_model,
            contents=text,
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=speech_config,
            ),
        )
        for part in _iter_parts(response):
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return inline.data
        raise RuntimeError("Gemini TTS response contained no audio data")

    # ================================================================
    # Images
    # ================================================================

    def generate_flash_image(self, prompt: str) -> Tuple[List[DataUri], str]:
        """
        Generate images with the Gemini Flash image model.

        Returns:
            (images, caption) — inline images as DataUri plus any text the
            model produced alongside them.
        """
        response = self.client.models.generate_content(
            model=self.config.image_model,
            contents=prompt,
            config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
        )

        images: List[DataUri] = []
        caption_parts: List[str] = []
        for part in _iter_parts(response):
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                images.append(DataUri(mime_type=inline.mime_type or "image/png", data=inline.data))
            elif getattr(part, "text", None):
                caption_parts.append(part.text.strip())

        logger.info("Flash image generation returned %d image(s)", len(images))
        return images, "\n".join(caption_parts)

    def generate_imagen_images(
        self,
        prompt: str,
        count: int = 1,
        aspect_ratio: str = "1:1",
    ) -> List[DataUri]:
        """Generate `count` image variations with Imagen."""
        response = self.client.models.generate_images(
            model=self.config.imagen_model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=count,
                aspect_ratio=aspect_ratio,
            ),
        )

        images = [
            DataUri(mime_type=gen.image.mime_type or "image/png", data=gen.image.image_bytes)
            for gen in (response.generated_images or [])
            if gen.image is not None and gen.image.image_bytes
        ]
        logger.info("Imagen returned %d/%d image(s)", len(images), count)
        return images

    # ================================================================
    # Video (long-running operations)
    # ================================================================

    def start_video(
        self,
        prompt: str,
        aspect_ratio: str = "16:9",
        negative_prompt: Optional[str] = None,
        image: Optional[DataUri] = None,
        model: Optional[str] = None,
    ):
        """
        Start a Veo generation job.

        Text-to-video uses the configured video model; passing `image`
        switches to image-to-video with the image-to-video model unless
        `model` is given.

        Returns:
            The vendor operation handle (poll it until `done`).
        """
        if model is None:
            model = self.config.image_to_video_model if image else self.config.video_model

        kwargs: Dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "config": types.GenerateVideosConfig(
                aspect_ratio=aspect_ratio,
                negative_prompt=negative_prompt,
                number_of_videos=1,
            ),
        }
        if image is not None:
            kwargs["image"] = types.Image(image_bytes=image.data, mime_type=image.mime_type)

        operation = self.client.models.generate_videos(**kwargs)
        logger.info("Started video operation %s on %s", getattr(operation, "name", "?"), model)
        return operation

    def refresh_operation(self, operation):
        """Fetch the latest state of a long-running operation."""
        return self.client.operations.get(operation)

    def download_file(self, file) -> bytes:
        """Download a vendor-hosted file (e.g. a generated video) as bytes."""
        return self.client.files.download(file=file)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _voice_config(voice_name: str) -> "types.VoiceConfig":
    return types.VoiceConfig(
        prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice_name),
    )


def _iter_parts(response):
    """Yield content parts of the first candidate, tolerating empty responses."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        yield part


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json / ``` markdown fence, if present."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()
