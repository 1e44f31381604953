"""Colour parsing shared by the config layer, the grid builder and the renderer.

Colours travel through configs and JSON as strings (``"#ffa500"``, ``"orange"``)
and are resolved once into 8-bit RGB tuples before any drawing happens.
"""

from matplotlib import colors as mcolors

RGB = tuple[int, int, int]


def is_color(value: str) -> bool:
    """Return True if matplotlib can interpret ``value`` as a colour."""
    return mcolors.is_color_like(value)


def parse_color(value: str) -> RGB:
    """Convert a colour string to an 8-bit (r, g, b) tuple.

    Raises:
        ValueError: If the string is not a recognised colour.
    """
    r, g, b = mcolors.to_rgb(value)
    return (round(r * 255), round(g * 255), round(b * 255))
