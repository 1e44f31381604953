"""Animation configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field

from cotigraphy.config.colors import is_color

# WebP canvas limit (libwebp WEBP_MAX_DIMENSION).
MAX_IMAGE_DIMENSION = 16383
MAX_DAYS_PER_WEEK = 7
WALKER_LENGTH = 4  # segments, head included


@dataclass(frozen=True, slots=True)
class CanvasConfig:
    """Cell geometry and background of the rendered image."""

    cell_size: int = 10  # pixels per cell side
    cell_margin: int = 3  # pixels between neighbouring cells
    background: str = "#0d1117"


@dataclass(frozen=True, slots=True)
class WalkerConfig:
    """Walker body appearance and the trail colour it leaves behind."""

    color: str = "#ffa500"
    segment_scales: tuple[float, ...] = (1.0, 1.0, 1.0, 1.0)  # head first
    visited_color: str = "#ffffff"


@dataclass(frozen=True, slots=True)
class EncoderConfig:
    """Animated WebP output parameters."""

    frame_delay_ms: int = 80
    quality: float = 90.0
    lossless: bool = False
    loop: int = 0  # 0 = loop forever


@dataclass(frozen=True, slots=True)
class SourceConfig:
    """Where the contribution calendar comes from and how it is coloured."""

    login: str = ""
    api_url: str = "https://api.github.com/graphql"
    token_env: str = "GITHUB_TOKEN"
    timeout_s: float = 30.0
    use_source_colors: bool = False
    # empty cell first, then four activity quartiles (GitHub dark theme)
    palette: tuple[str, ...] = (
        "#161b22",
        "#0e4429",
        "#006d32",
        "#26a641",
        "#39d353",
    )


@dataclass(frozen=True, slots=True)
class AnimationConfig:
    """Top-level configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    walker: WalkerConfig = field(default_factory=WalkerConfig)
    encoder: EncoderConfig = field(default_factory=EncoderConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    description: str = ""

    def __post_init__(self) -> None:
        """Cross-parameter validation."""
        if self.canvas.cell_size <= 0:
            raise ValueError(
                f"cell_size must be > 0, got {self.canvas.cell_size}"
            )
        if self.canvas.cell_margin <= 0:
            raise ValueError(
                f"cell_margin must be > 0, got {self.canvas.cell_margin}"
            )
        if len(self.walker.segment_scales) != WALKER_LENGTH:
            raise ValueError(
                f"segment_scales has {len(self.walker.segment_scales)} entries, "
                f"expected one per segment ({WALKER_LENGTH})"
            )
        for scale in self.walker.segment_scales:
            if not 0.0 < scale <= 1.0:
                raise ValueError(
                    f"segment scale must be in (0, 1], got {scale}"
                )
        if self.encoder.frame_delay_ms <= 0:
            raise ValueError(
                f"frame_delay_ms must be > 0, got {self.encoder.frame_delay_ms}"
            )
        if not 0.0 <= self.encoder.quality <= 100.0:
            raise ValueError(
                f"quality must be in [0, 100], got {self.encoder.quality}"
            )
        if self.encoder.loop < 0:
            raise ValueError(f"loop must be >= 0, got {self.encoder.loop}")
        if len(self.source.palette) < 2:
            raise ValueError(
                f"palette needs an empty colour and at least one activity "
                f"colour, got {len(self.source.palette)} entries"
            )
        colors = (
            self.canvas.background,
            self.walker.color,
            self.walker.visited_color,
            *self.source.palette,
        )
        for value in colors:
            if not is_color(value):
                raise ValueError(f"not a valid colour: {value!r}")
