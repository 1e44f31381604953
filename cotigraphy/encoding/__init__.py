"""Encoding module: animated WebP assembly and output validation."""

from cotigraphy.encoding.errors import (
    AnimationEncoderError,
    AnimationWriteError,
    EmptyAnimationError,
    EncoderClosedError,
    OutputPathError,
)
from cotigraphy.encoding.webp import (
    WEBP_EXTENSION,
    WebPAnimationEncoder,
    validate_output_path,
)

__all__ = [
    "AnimationEncoderError",
    "AnimationWriteError",
    "EmptyAnimationError",
    "EncoderClosedError",
    "OutputPathError",
    "WEBP_EXTENSION",
    "WebPAnimationEncoder",
    "validate_output_path",
]
