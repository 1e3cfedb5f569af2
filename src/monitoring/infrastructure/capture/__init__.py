"""
Capture module initialization and factory.
"""
from typing import Optional
from .base import CaptureConfig
from .opencv_capture import OpenCVFrameCapture
from ...domain.protocols import FrameCapture


def create_capture(
    source: str,
    target_width: Optional[int] = None,
    target_height: Optional[int] = None,
    jpeg_quality: int = 80,
    buffer_size: int = 1
) -> FrameCapture:
    """
    Factory function to create the frame capture for a device index or stream URL.
    """
    config = CaptureConfig(
        buffer_size=buffer_size,
        target_width=target_width,
        target_height=target_height,
        jpeg_quality=jpeg_quality
    )
    return OpenCVFrameCapture(source, config)
