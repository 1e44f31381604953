"""JSON serialization and deserialization for animation configs."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dacite import from_dict, Config as DaciteConfig

from cotigraphy.config.settings import AnimationConfig

_DACITE_CONFIG = DaciteConfig(
    cast=[tuple],
    check_types=True,
    strict=True,
)


def config_to_json(config: AnimationConfig) -> str:
    """Serialize an AnimationConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> AnimationConfig:
    """Deserialize a JSON string to an AnimationConfig.

    Uses dacite with strict=True to reject unknown keys (catches typos in
    hand-written config files) and cast=[tuple] to convert JSON arrays back
    to tuples for the palette and segment scales.
    """
    return config_from_dict(json.loads(json_str))


def config_from_dict(d: dict[str, Any]) -> AnimationConfig:
    """Reconstruct an AnimationConfig from a plain dictionary.

    Missing sections and fields fall back to their defaults.
    """
    return from_dict(data_class=AnimationConfig, data=d, config=_DACITE_CONFIG)


def load_config(path: str | Path) -> AnimationConfig:
    """Read an AnimationConfig from a JSON file."""
    return config_from_json(Path(path).read_text())
