"""Animated WebP encoder that accumulates canvas snapshots as frames.

Frames are copied on arrival, so the caller can keep drawing into the same
buffer. Nothing touches the filesystem until save_to_file(), and that call
validates the path and the frame count before any encoding work.
"""

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from cotigraphy.config.settings import MAX_IMAGE_DIMENSION, EncoderConfig
from cotigraphy.encoding.errors import (
    AnimationWriteError,
    EmptyAnimationError,
    EncoderClosedError,
    OutputPathError,
)

log = logging.getLogger(__name__)

WEBP_EXTENSION = ".webp"


def validate_output_path(path: str | Path) -> Path:
    """Check that ``path`` names a ``.webp`` file with a non-empty stem.

    Pure string check; the filesystem is not consulted.

    Raises:
        OutputPathError: On a wrong extension or an empty file name.
    """
    path = Path(path)
    name = path.name
    # pathlib treats ".webp" as a stem with no suffix
    if name.lower() == WEBP_EXTENSION or (
        name.lower().endswith(WEBP_EXTENSION)
        and not name[: -len(WEBP_EXTENSION)].strip()
    ):
        raise OutputPathError(f"output file name is empty: {str(path)!r}")
    if path.suffix.lower() != WEBP_EXTENSION:
        raise OutputPathError(
            f"output file must have a {WEBP_EXTENSION} extension, got {str(path)!r}"
        )
    return path


class WebPAnimationEncoder:
    """Accumulates RGBA frames and writes them as one animated WebP.

    Args:
        width: Frame width in pixels, 1..16383.
        height: Frame height in pixels, 1..16383.
        frame_delay_ms: Display time of each frame.
        quality: Lossy quality 0-100 (compression effort when lossless).
        lossless: Encode frames losslessly.
        loop: Number of loops, 0 for infinite.
    """

    def __init__(
        self,
        width: int,
        height: int,
        frame_delay_ms: int = 80,
        quality: float = 90.0,
        lossless: bool = False,
        loop: int = 0,
    ) -> None:
        for name, value in (("width", width), ("height", height)):
            if not 1 <= value <= MAX_IMAGE_DIMENSION:
                raise ValueError(
                    f"{name} must be in 1..{MAX_IMAGE_DIMENSION}, got {value}"
                )
        if frame_delay_ms <= 0:
            raise ValueError(f"frame_delay_ms must be > 0, got {frame_delay_ms}")
        self.width = width
        self.height = height
        self.frame_delay_ms = frame_delay_ms
        self.quality = quality
        self.lossless = lossless
        self.loop = loop
        self._frames: list[Image.Image] = []
        self._closed = False

    @classmethod
    def from_config(
        cls, width: int, height: int, config: EncoderConfig
    ) -> "WebPAnimationEncoder":
        return cls(
            width,
            height,
            frame_delay_ms=config.frame_delay_ms,
            quality=config.quality,
            lossless=config.lossless,
            loop=config.loop,
        )

    def __enter__(self) -> "WebPAnimationEncoder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def closed(self) -> bool:
        return self._closed

    def timestamps(self) -> list[int]:
        """Start time in ms of each accepted frame."""
        return [i * self.frame_delay_ms for i in range(len(self._frames))]

    def add_frame(self, rgba: np.ndarray | bytes) -> int:
        """Append a frame and return its timestamp in milliseconds.

        Args:
            rgba: (height, width, 4) uint8 array or raw RGBA bytes of the
                same size.

        Raises:
            ValueError: If the array shape or buffer size does not match
                the encoder.
            EncoderClosedError: If the encoder was already closed.
        """
        self._ensure_open()
        expected = self.width * self.height * 4
        if isinstance(rgba, np.ndarray):
            if rgba.dtype != np.uint8:
                raise ValueError(f"frame dtype must be uint8, got {rgba.dtype}")
            if rgba.shape != (self.height, self.width, 4):
                raise ValueError(
                    f"frame shape {rgba.shape} does not match "
                    f"({self.height}, {self.width}, 4)"
                )
            data = np.ascontiguousarray(rgba).tobytes()
        else:
            data = bytes(rgba)
        if len(data) != expected:
            raise ValueError(
                f"frame has {len(data)} bytes, expected {expected} "
                f"({self.width}x{self.height} RGBA)"
            )

        timestamp = len(self._frames) * self.frame_delay_ms
        self._frames.append(Image.frombytes("RGBA", (self.width, self.height), data))
        return timestamp

    def encode(self) -> bytes:
        """Assemble all accepted frames into an animated WebP bitstream.

        Raises:
            EmptyAnimationError: If no frame has been added.
        """
        self._ensure_open()
        if not self._frames:
            raise EmptyAnimationError("cannot encode an animation with zero frames")

        out = io.BytesIO()
        first, *rest = self._frames
        first.save(
            out,
            format="WEBP",
            save_all=True,
            append_images=rest,
            duration=self.frame_delay_ms,
            loop=self.loop,
            quality=self.quality,
            lossless=self.lossless,
        )
        return out.getvalue()

    def save_to_file(self, path: str | Path) -> int:
        """Encode the animation and write it to ``path``.

        Returns:
            Number of bytes written.

        Raises:
            OutputPathError: Bad extension or empty name (nothing is touched).
            EmptyAnimationError: No frames (nothing is touched).
            AnimationWriteError: The file could not be opened or written.
        """
        path = validate_output_path(path)
        self._ensure_open()
        if not self._frames:
            raise EmptyAnimationError(
                f"refusing to write {path}: no frames were added"
            )

        data = self.encode()
        try:
            _write_all(path, data)
        except OSError as e:
            raise AnimationWriteError(f"failed to write {path}: {e}") from e

        log.info(
            "Animation written to %s (%d frames, %d bytes, %dx%d)",
            path,
            len(self._frames),
            len(data),
            self.width,
            self.height,
        )
        return len(data)

    def close(self) -> None:
        """Release accumulated frames; the encoder cannot be reused."""
        for frame in self._frames:
            frame.close()
        self._frames.clear()
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise EncoderClosedError("encoder is closed")


def _write_all(path: Path, data: bytes) -> None:
    """Write ``data`` through an unbuffered handle, looping over short writes.

    A write that fails after the file was opened removes the partial file.
    """
    view = memoryview(data)
    f = open(path, "wb", buffering=0)
    try:
        with f:
            while view:
                written = f.write(view)
                if not written:
                    raise OSError(f"write to {path} made no progress")
                view = view[written:]
    except OSError:
        path.unlink(missing_ok=True)
        raise
