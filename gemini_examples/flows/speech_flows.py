# -*- coding: utf-8 -*-
"""
Speech Flows
============
Text-to-speech examples:
  - translate_to_spanish_speech: English text → Spanish text → one voice
  - podcast_dialogue: `Speaker: line` script → one voice per speaker

Gemini TTS returns raw PCM; both flows wrap it as WAV and hand it back
as an `audio/wav` data URI.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from gemini_examples.config.prompts.flow_prompts import (
    PODCAST_PREAMBLE,
    SPEECH_STYLE_PREFIX,
    TRANSLATE_PROMPT,
    TRANSLATE_SYSTEM_PROMPT,
)
from gemini_examples.flows.base_flow import BaseFlow, register_flow
from gemini_examples.services.media import pcm_to_wav_data_uri

logger = logging.getLogger("examples.flows.speech")

# Gemini multi-speaker TTS supports at most two voices per request
MAX_SPEAKERS = 2

_TURN_RE = re.compile(r"^\s*(?P<speaker>[^:\n]{1,40}?)\s*:\s*(?P<line>.*)$")


# ---------------------------------------------------------------------------
# Single speaker: translate + speak
# ---------------------------------------------------------------------------


class TranslateSpeechInput(BaseModel):
    text: str = Field(min_length=1)
    voice: Optional[str] = None


class TranslateSpeechOutput(BaseModel):
    english: str
    spanish: str
    media: str  # data:audio/wav;base64,...


@register_flow
class TranslateSpeechFlow(BaseFlow):
    """Translate English to Spanish and read the result aloud."""

    name = "translate_to_spanish_speech"
    description = "Translate English text to Spanish and synthesize it as speech"
    input_model = TranslateSpeechInput
    output_model = TranslateSpeechOutput

    def execute(self, data: TranslateSpeechInput, service) -> TranslateSpeechOutput:
        english = data.text.strip()
        if not english:
            raise self.fail("text must not be blank")

        spanish = service.generate_text(
            TRANSLATE_PROMPT.format(text=english),
            system_prompt=TRANSLATE_SYSTEM_PROMPT,
            temperature=0.2,
        )
        logger.info("Translated %d → %d chars", len(english), len(spanish))

        pcm = service.generate_speech(SPEECH_STYLE_PREFIX + spanish, voice=data.voice)
        media = pcm_to_wav_data_uri(pcm)

        return TranslateSpeechOutput(english=english, spanish=spanish, media=media.to_string())


# ---------------------------------------------------------------------------
# Multi speaker: podcast dialogue
# ---------------------------------------------------------------------------


@dataclass
class DialogueTurn:
    speaker: str
    line: str


def parse_dialogue(script: str) -> List[DialogueTurn]:
    """
    Parse a `Speaker: line` dialogue.

    Lines without a speaker prefix continue the previous turn; blank
    lines are ignored. Once two speakers are known, an unknown prefix that
    contains whitespace ("here's the thing: ...") is prose, not a speaker.

    Raises:
        ValueError: If the first non-blank line has no speaker.
    """
    turns: List[DialogueTurn] = []
    known: List[str] = []
    for raw in script.splitlines():
        if not raw.strip():
            continue
        match = _TURN_RE.match(raw)
        speaker = match.group("speaker").strip() if match else ""
        if len(known) >= MAX_SPEAKERS and speaker not in known and any(ch.isspace() for ch in speaker):
            speaker = ""
        if speaker:
            if speaker not in known:
                known.append(speaker)
            turns.append(DialogueTurn(speaker, match.group("line").strip()))
        elif turns:
            turns[-1].line = f"{turns[-1].line} {raw.strip()}".strip()
        else:
            raise ValueError(f"Dialogue must start with 'Speaker: line', got: {raw.strip()[:40]!r}")
    return [t for t in turns if t.line]


def speakers_in_order(turns: List[DialogueTurn]) -> List[str]:
    seen: List[str] = []
    for turn in turns:
        if turn.speaker not in seen:
            seen.append(turn.speaker)
    return seen


class PodcastInput(BaseModel):
    script: str = Field(min_length=1)
    voices: Dict[str, str] = Field(default_factory=dict)


class PodcastOutput(BaseModel):
    speakers: List[str]
    media: str  # data:audio/wav;base64,...


@register_flow
class PodcastFlow(BaseFlow):
    """Podcast-style conversation with a distinct voice per speaker."""

    name = "podcast_dialogue"
    description = "Synthesize a two-person dialogue with distinct voices"
    input_model = PodcastInput
    output_model = PodcastOutput

    def execute(self, data: PodcastInput, service) -> PodcastOutput:
        try:
            turns = parse_dialogue(data.script)
        except ValueError as exc:
            raise self.fail(str(exc)) from exc
        if not turns:
            raise self.fail("script contains no dialogue")

        speakers = speakers_in_order(turns)
        if len(speakers) > MAX_SPEAKERS:
            raise self.fail(
                f"at most {MAX_SPEAKERS} speakers are supported, got {len(speakers)}: {speakers}"
            )
        unknown = sorted(set(data.voices) - set(speakers))
        if unknown:
            raise self.fail(f"voices given for speakers not in the script: {unknown}")

        cfg = service.config
        defaults = [cfg.default_voice, cfg.secondary_voice]
        voices = {
            speaker: data.voices.get(speaker, defaults[i])
            for i, speaker in enumerate(speakers)
        }

        dialogue = "\n".join(f"{t.speaker}: {t.line}" for t in turns)
        if len(speakers) == 1:
            pcm = service.generate_speech(dialogue, voice=voices[speakers[0]])
        else:
            text = PODCAST_PREAMBLE.format(speakers=" and ".join(speakers)) + "\n" + dialogue
            pcm = service.generate_multi_speaker_speech(text, voices)

        logger.info("Podcast: %d turns, voices=%s", len(turns), voices)
        media = pcm_to_wav_data_uri(pcm)
        return PodcastOutput(speakers=speakers, media=media.to_string())
