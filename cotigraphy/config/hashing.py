"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from cotigraphy.config.settings import AnimationConfig


def _remove_nested(d: dict[str, Any], field_path: str) -> None:
    """Remove a dotted-path key from a nested dict.

    Example: _remove_nested(d, "source.login") removes d["source"]["login"].
    Single-level paths like "description" remove d["description"].
    """
    parts = field_path.split(".")
    current = d
    for part in parts[:-1]:
        if part not in current or not isinstance(current[part], dict):
            return
        current = current[part]
    current.pop(parts[-1], None)


def hash_payload(payload: Any) -> str:
    """First 16 hex characters of the SHA-256 of ``payload`` as canonical JSON."""
    serialized = json.dumps(
        payload,
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
        indent=None,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config object.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional list of dotted field paths to exclude.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config)
    if exclude_fields:
        for field_path in exclude_fields:
            _remove_nested(d, field_path)
    return hash_payload(d)


def render_config_hash(config: AnimationConfig) -> str:
    """Hash of everything that affects the rendered pixels.

    Excludes the data source and the free-form description, so two runs
    over the same calendar with the same look share a hash.
    """
    return config_hash(config, exclude_fields=["source", "description"])


def full_config_hash(config: AnimationConfig) -> str:
    """Hash for full run identity, including the source section."""
    return config_hash(config)
