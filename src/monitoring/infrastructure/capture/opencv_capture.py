"""
OpenCV-based single-frame capture.
"""
import asyncio
import threading
from typing import Union

import cv2

from .base import CaptureConfig
from ....common.exceptions import CaptureUnavailable
from ....common.logging import setup_logger


class OpenCVFrameCapture:
    """
    Grabs one JPEG-encoded frame per call from a camera index or stream URL.

    The device is opened lazily and reopened after a failed read, so an
    unavailable camera surfaces as CaptureUnavailable on every cycle until it
    comes back.
    """

    def __init__(self, source: Union[int, str], config: CaptureConfig):
        self.source = int(source) if str(source).isdigit() else source
        self.config = config
        self.cap = None
        self.logger = setup_logger(__name__)
        self._lock = threading.Lock()

    def _open(self):
        try:
            cap = cv2.VideoCapture(self.source)
        except cv2.error as e:
            raise CaptureUnavailable(f"OpenCV error opening source {self.source}: {e}") from e

        if not cap.isOpened():
            cap.release()
            raise CaptureUnavailable(
                f"Could not open video source: {self.source}. "
                f"Check that the camera is connected and access is permitted."
            )

        if self.config.buffer_size:
            cap.set(cv2.CAP_PROP_BUFFERSIZE, self.config.buffer_size)
        self.logger.info(f"Opened video source: {self.source}")
        return cap

    def _read_frame(self) -> bytes:
        with self._lock:
            if self.cap is None:
                self.cap = self._open()

            ret, img = self.cap.read()
            if not ret or img is None:
                self.cap.release()
                self.cap = None
                raise CaptureUnavailable(f"Failed to read frame from source: {self.source}")

            try:
                if self.config.target_width and self.config.target_height:
                    img = cv2.resize(img, (self.config.target_width, self.config.target_height))

                ok, encoded = cv2.imencode(
                    ".jpg", img, [int(cv2.IMWRITE_JPEG_QUALITY), self.config.jpeg_quality]
                )
            except cv2.error as e:
                raise CaptureUnavailable(f"OpenCV error encoding frame: {e}") from e

            if not ok:
                raise CaptureUnavailable("JPEG encoding failed")
            return encoded.tobytes()

    async def capture_frame(self) -> bytes:
        return await asyncio.to_thread(self._read_frame)

    def release(self):
        with self._lock:
            if self.cap:
                self.cap.release()
                self.cap = None
