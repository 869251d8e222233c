# -*- coding: utf-8 -*-
"""
Story Flow
==========
Basic inference example: turns a topic into a short, medium or long
story using the Gemini text model.
"""

import logging
from typing import Literal

from pydantic import BaseModel, Field

from gemini_examples.config.prompts.flow_prompts import (
    STORY_PROMPT,
    STORY_SYSTEM_PROMPT,
    STORY_WORD_TARGETS,
)
from gemini_examples.flows.base_flow import BaseFlow, register_flow

logger = logging.getLogger("examples.flows.story")


class StoryInput(BaseModel):
    topic: str = Field(min_length=1)
    length: Literal["short", "medium", "long"] = "medium"


class StoryOutput(BaseModel):
    title: str
    story: str
    word_count: int


@register_flow
class StoryFlow(BaseFlow):
    """Creative story writer."""

    name = "story_generator"
    description = "Generate a creative story about any topic"
    input_model = StoryInput
    output_model = StoryOutput

    def execute(self, data: StoryInput, service) -> StoryOutput:
        topic = data.topic.strip()
        if not topic:
            raise self.fail("topic must not be blank")

        word_count = STORY_WORD_TARGETS[data.length]
        prompt = STORY_PROMPT.format(length=data.length, topic=topic, word_count=word_count)

        result = service.generate_json(prompt, system_prompt=STORY_SYSTEM_PROMPT, temperature=0.9)

        story = str(result.get("story", "")).strip()
        if not story:
            raise RuntimeError("model returned no story text")
        title = str(result.get("title", "")).strip() or topic.title()

        logger.info("Story '%s' (%s): %d words", title, data.length, len(story.split()))
        return StoryOutput(title=title, story=story, word_count=len(story.split()))
