"""Animation configuration system with frozen, hashable, serializable dataclasses."""

from cotigraphy.config.settings import (
    AnimationConfig,
    CanvasConfig,
    WalkerConfig,
    EncoderConfig,
    SourceConfig,
)
from cotigraphy.config.colors import RGB, is_color, parse_color
from cotigraphy.config.defaults import DEFAULT_CONFIG
from cotigraphy.config.hashing import config_hash, render_config_hash, full_config_hash
from cotigraphy.config.serialization import config_to_json, config_from_json, load_config

__all__ = [
    "AnimationConfig",
    "CanvasConfig",
    "WalkerConfig",
    "EncoderConfig",
    "SourceConfig",
    "RGB",
    "parse_color",
    "is_color",
    "DEFAULT_CONFIG",
    "config_hash",
    "render_config_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
    "load_config",
]
