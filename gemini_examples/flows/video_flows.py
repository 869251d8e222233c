# -*- coding: utf-8 -*-
"""
Video Flows
===========
Veo video generation examples:
  - text_to_video: Veo 3, prompt only
  - image_to_video: Veo 2, prompt plus a starting image (data URI)

Video generation is a long-running vendor operation: the flow starts
it, polls at a fixed interval until it is done, then saves the first
generated video to the output directory.
"""

import logging
import uuid
from abc import abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from gemini_examples.config.settings import settings
from gemini_examples.flows.base_flow import BaseFlow, register_flow
from gemini_examples.services.media import DataUri
from gemini_examples.services.operation_poller import wait_for_operation
from gemini_examples.services.video_downloader import VideoDownloader

logger = logging.getLogger("examples.flows.video")


class TextToVideoInput(BaseModel):
    prompt: str = Field(min_length=1)
    aspect_ratio: Literal["16:9", "9:16"] = "16:9"
    negative_prompt: Optional[str] = None


class ImageToVideoInput(TextToVideoInput):
    image: str  # data:image/...;base64,...

    @field_validator("image")
    @classmethod
    def _must_be_image_data_uri(cls, value: str) -> str:
        uri = DataUri.parse(value)
        if not uri.mime_type.startswith("image/"):
            raise ValueError(f"expected an image data URI, got {uri.mime_type}")
        return value


class VideoOutput(BaseModel):
    file_path: str
    mime_type: str = "video/mp4"
    operation_name: Optional[str] = None


class _VideoFlow(BaseFlow):
    """Shared start → poll → download sequence."""

    input_model = TextToVideoInput
    output_model = VideoOutput

    def __init__(
        self,
        service=None,
        output_dir: Optional[Path] = None,
        poll_interval: Optional[float] = None,
        poll_timeout: Optional[float] = None,
    ):
        super().__init__(service=service)
        self._output_dir = output_dir
        self._poll_interval = poll_interval
        self._poll_timeout = poll_timeout

    @abstractmethod
    def _start(self, data, service):
        """Start the vendor operation and return it."""

    def execute(self, data, service) -> VideoOutput:
        operation = self._start(data, service)
        operation = wait_for_operation(
            operation,
            service.refresh_operation,
            interval=self._poll_interval,
            timeout=self._poll_timeout,
        )

        response = getattr(operation, "response", None)
        videos = getattr(response, "generated_videos", None) or []
        if not videos or getattr(videos[0], "video", None) is None:
            raise RuntimeError("operation finished without a generated video")
        video = videos[0].video

        output_dir = self._output_dir or settings.paths.output_videos
        downloader = VideoDownloader(
            api_key=service.config.api_key,
            output_dir=output_dir,
            fetch_file=service.download_file,
        )
        name = f"{self.name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"
        path = downloader.save(video, name)

        return VideoOutput(
            file_path=str(path),
            mime_type=getattr(video, "mime_type", None) or "video/mp4",
            operation_name=getattr(operation, "name", None),
        )


@register_flow
class TextToVideoFlow(_VideoFlow):
    name = "text_to_video"
    description = "Generate a video from a text description (Veo 3)"
    input_model = TextToVideoInput

    def _start(self, data: TextToVideoInput, service):
        return service.start_video(
            prompt=data.prompt.strip(),
            aspect_ratio=data.aspect_ratio,
            negative_prompt=data.negative_prompt,
        )


@register_flow
class ImageToVideoFlow(_VideoFlow):
    name = "image_to_video"
    description = "Animate a starting image into a video (Veo 2)"
    input_model = ImageToVideoInput

    def _start(self, data: ImageToVideoInput, service):
        return service.start_video(
            prompt=data.prompt.strip(),
            aspect_ratio=data.aspect_ratio,
            negative_prompt=data.negative_prompt,
            image=DataUri.parse(data.image),
        )
