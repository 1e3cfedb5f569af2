"""
Configuration for frame capture.
"""
from typing import Optional
from pydantic import BaseModel, model_validator, Field

class CaptureConfig(BaseModel):
    """Validated configuration for frame capture"""
    buffer_size: int = Field(1, ge=1, le=120, description="OpenCV buffer size")
    target_width: Optional[int] = Field(None, gt=0, description="Target width in pixels")
    target_height: Optional[int] = Field(None, gt=0, description="Target height in pixels")
    jpeg_quality: int = Field(80, ge=1, le=100, description="JPEG quality of submitted frames")

    @model_validator(mode='after')
    def validate_resolution(self) -> 'CaptureConfig':
        if (self.target_width is None) != (self.target_height is None):
            raise ValueError('target_width and target_height must be set together to resize frames')
        return self
