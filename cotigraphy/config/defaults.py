"""Default configuration: single source of truth for animation parameters."""

from cotigraphy.config.settings import AnimationConfig

# Instantiated with all-default values: 10px cells, 3px margin, 4-segment
# orange walker, white trail, 80ms frame delay, WebP quality 90.
DEFAULT_CONFIG = AnimationConfig()
