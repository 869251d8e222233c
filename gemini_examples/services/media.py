# -*- coding: utf-8 -*-
"""
Media Helpers
=============
Small helpers for the media shapes the Gemini API hands back:
  - Data URIs (`data:<mime>;base64,<payload>`) for inline audio/images
  - Raw PCM from the TTS models, wrapped into WAV containers
"""

import base64
import binascii
import io
import logging
import mimetypes
import re
import wave
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger("examples.media")

DEFAULT_MIME = "application/octet-stream"

# Gemini TTS returns 24 kHz, mono, 16-bit little-endian PCM
TTS_SAMPLE_RATE = 24000
TTS_CHANNELS = 1
TTS_SAMPLE_WIDTH = 2

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[^;,]*)(?P<params>(;[^;,]+)*?);base64,(?P<data>.*)$", re.S)


@dataclass(frozen=True)
class DataUri:
    """Binary payload plus its MIME type, convertible to/from a data URI."""

    mime_type: str
    data: bytes

    def to_string(self) -> str:
        b64 = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{b64}"

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def parse(cls, text: str) -> "DataUri":
        """
        Parse a base64 data URI.

        Raises:
            ValueError: If the string is not a base64 data URI or the
                payload is not valid base64.
        """
        match = _DATA_URI_RE.match(text.strip()) if text else None
        if not match:
            preview = (text or "")[:40]
            raise ValueError(f"Not a base64 data URI: {preview!r}")

        try:
            data = base64.b64decode(match.group("data"), validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Invalid base64 payload in data URI: {exc}") from exc

        return cls(mime_type=match.group("mime") or DEFAULT_MIME, data=data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "DataUri":
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(f"File not found: {p}")
        return cls(mime_type=sniff_mime(p), data=p.read_bytes())

    def write_to(self, path: Union[str, Path]) -> Path:
        """Write the payload to disk, creating parent directories."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(self.data)
        logger.debug("Wrote %d bytes (%s) to %s", len(self.data), self.mime_type, out)
        return out

    @property
    def extension(self) -> str:
        return mimetypes.guess_extension(self.mime_type) or ".bin"


def sniff_mime(path: Union[str, Path]) -> str:
    mime, _ = mimetypes.guess_type(str(path))
    return mime or DEFAULT_MIME


def pcm_to_wav(
    pcm_data: bytes,
    channels: int = TTS_CHANNELS,
    sample_rate: int = TTS_SAMPLE_RATE,
    sample_width: int = TTS_SAMPLE_WIDTH,
) -> bytes:
    """
    Wrap raw PCM samples in a WAV container.

    Args:
        pcm_data: Raw interleaved PCM frames.
        channels: Number of audio channels.
        sample_rate: Frames per second.
        sample_width: Bytes per sample (2 = 16-bit).

    Returns:
        The complete WAV file as bytes.

    Raises:
        ValueError: If the PCM length is not a whole number of frames.
    """
    frame_size = channels * sample_width
    if len(pcm_data) % frame_size:
        raise ValueError(
            f"PCM length {len(pcm_data)} is not a multiple of the frame size {frame_size}"
        )

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm_data)
    return buffer.getvalue()


def wav_duration(wav_data: bytes) -> float:
    """Duration of an in-memory WAV file in seconds."""
    with wave.open(io.BytesIO(wav_data), "rb") as wf:
        return wf.getnframes() / wf.getframerate()


def pcm_to_wav_data_uri(pcm_data: bytes, **wav_params) -> DataUri:
    """Convert TTS PCM output straight into an `audio/wav` data URI."""
    wav = pcm_to_wav(pcm_data, **wav_params)
    logger.info("Encoded %.2fs of audio as WAV (%d bytes)", wav_duration(wav), len(wav))
    return DataUri(mime_type="audio/wav", data=wav)
