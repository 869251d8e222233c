# -*- coding: utf-8 -*-
"""
Image Flows
===========
  - flash_image_generator: fast generation with the Gemini Flash image model
  - imagen_generator: higher-quality Imagen output with style control
    and multiple variations
"""

import logging
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from gemini_examples.config.prompts.flow_prompts import IMAGEN_STYLE_SUFFIX
from gemini_examples.flows.base_flow import BaseFlow, register_flow

logger = logging.getLogger("examples.flows.image")

AspectRatio = Literal["1:1", "3:4", "4:3", "9:16", "16:9"]


class FlashImageInput(BaseModel):
    prompt: str = Field(min_length=1)


class ImagenInput(BaseModel):
    prompt: str = Field(min_length=1)
    style: Optional[str] = None  # e.g. "photorealistic", "watercolor"
    count: int = Field(default=1, ge=1, le=4)
    aspect_ratio: AspectRatio = "1:1"


class ImageOutput(BaseModel):
    images: List[str]  # data:image/...;base64,...
    caption: str = ""


@register_flow
class FlashImageFlow(BaseFlow):
    name = "flash_image_generator"
    description = "Generate an image quickly with Gemini Flash"
    input_model = FlashImageInput
    output_model = ImageOutput

    def execute(self, data: FlashImageInput, service) -> ImageOutput:
        images, caption = service.generate_flash_image(data.prompt.strip())
        if not images:
            raise RuntimeError("no image was generated")
        return ImageOutput(images=[img.to_string() for img in images], caption=caption)


@register_flow
class ImagenFlow(BaseFlow):
    name = "imagen_generator"
    description = "Generate styled image variations with Imagen"
    input_model = ImagenInput
    output_model = ImageOutput

    def execute(self, data: ImagenInput, service) -> ImageOutput:
        prompt = data.prompt.strip()
        style = (data.style or "").strip()
        if style:
            prompt += IMAGEN_STYLE_SUFFIX.format(style=style)

        images = service.generate_imagen_images(prompt, count=data.count, aspect_ratio=data.aspect_ratio)
        if not images:
            raise RuntimeError("no image was generated")
        if len(images) < data.count:
            logger.warning("Imagen returned %d of %d requested images", len(images), data.count)

        return ImageOutput(images=[img.to_string() for img in images])
