"""Errors raised while assembling or writing an animation."""


class AnimationEncoderError(Exception):
    """Base class for encoder failures the caller is expected to handle."""


class OutputPathError(AnimationEncoderError, ValueError):
    """Raised when the output path has the wrong extension or an empty name."""


class EmptyAnimationError(AnimationEncoderError):
    """Raised when saving is requested before any frame was added."""


class EncoderClosedError(AnimationEncoderError):
    """Raised when a closed encoder is used again."""


class AnimationWriteError(AnimationEncoderError, OSError):
    """Raised when encoding succeeded but the bytes could not be written."""
