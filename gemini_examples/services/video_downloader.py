# -*- coding: utf-8 -*-
"""
Video Downloader Service
========================
Saves a finished Veo video to disk. Videos come back either as inline
bytes, as a download URI (needs the API key), or as a file handle the
client's file API can fetch.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import requests

logger = logging.getLogger("examples.downloader")


class VideoDownloader:
    """Writes generated videos into an output directory."""

    CHUNK_SIZE = 4096
    TIMEOUT = 300  # seconds

    def __init__(
        self,
        api_key: str,
        output_dir: Path,
        fetch_file: Optional[Callable[[Any], bytes]] = None,
    ):
        self._api_key = api_key
        self._output_dir = Path(output_dir)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._fetch_file = fetch_file

    def save(self, generated_video: Any, name: str) -> Path:
        """
        Save one generated video.

        Args:
            generated_video: Vendor video object (`video_bytes`, `uri`,
                `mime_type` attributes, any may be missing).
            name: Output filename without extension.

        Returns:
            Path of the written .mp4 file.

        Raises:
            RuntimeError: If the video has no downloadable content.
            requests.HTTPError: If the download URI answers non-2xx.
        """
        output_path = self._output_dir / f"{name}.mp4"

        video_bytes = getattr(generated_video, "video_bytes", None)
        uri = getattr(generated_video, "uri", None)

        if video_bytes:
            output_path.write_bytes(video_bytes)
            logger.info("Saved inline video (%d bytes): %s", len(video_bytes), output_path.name)
        elif uri:
            self._download_uri(uri, output_path)
        elif self._fetch_file is not None:
            data = self._fetch_file(generated_video)
            if not data:
                raise RuntimeError("Video file download returned no data")
            output_path.write_bytes(data)
            logger.info("Saved video via file API (%d bytes): %s", len(data), output_path.name)
        else:
            raise RuntimeError("Generated video has neither inline bytes nor a download URI")

        return output_path

    def _download_uri(self, uri: str, output_path: Path) -> None:
        resp = requests.get(
            uri,
            params={"key": self._api_key},
            stream=True,
            timeout=self.TIMEOUT,
        )
        resp.raise_for_status()

        written = 0
        try:
            with output_path.open("wb") as fh:
                for chunk in resp.iter_content(chunk_size=self.CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
                        written += len(chunk)
        except Exception:
            # No partial videos on disk
            output_path.unlink(missing_ok=True)
            raise
        logger.info("Downloaded video (%d bytes): %s", written, output_path.name)
