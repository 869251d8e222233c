# -*- coding: utf-8 -*-
"""
Flow Prompts
============
Prompt templates used by the example flows. Kept out of the flow
modules so they can be tuned without touching code.
"""

# ---------------------------------------------------------------------------
# Story generation
# ---------------------------------------------------------------------------

STORY_SYSTEM_PROMPT = """You are a creative fiction writer.
You write vivid, self-contained stories for a general audience.

## Output format (JSON):
```json
{
    "title": "A short evocative title",
    "story": "The full story text, paragraphs separated by blank lines"
}
```
Respond with JSON only."""

STORY_PROMPT = """Write a {length} story about: {topic}

Target length: about {word_count} words."""

STORY_WORD_TARGETS = {
    "short": 150,
    "medium": 400,
    "long": 800,
}

# ---------------------------------------------------------------------------
# Translation + speech
# ---------------------------------------------------------------------------

TRANSLATE_SYSTEM_PROMPT = """You are a professional English to Spanish translator.
Translate the user's text into natural, neutral Spanish.
Return only the translated text, with no quotes, notes or explanations."""

TRANSLATE_PROMPT = "Translate to Spanish:\n\n{text}"

# Prefix for single-speaker speech; the TTS model reads it as a style cue
SPEECH_STYLE_PREFIX = "Say clearly and naturally: "

# ---------------------------------------------------------------------------
# Podcast dialogue
# ---------------------------------------------------------------------------

PODCAST_PREAMBLE = "TTS the following conversation between {speakers}:"

# ---------------------------------------------------------------------------
# Image generation
# ---------------------------------------------------------------------------

IMAGEN_STYLE_SUFFIX = ", in {style} style"
