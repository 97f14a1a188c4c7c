from enum import Enum


class TokenGroup(Enum):
    """Categories of design tokens, keyed by their dataset group name."""

    BORDER = "border"               # border-radius, border-width
    BREAKPOINTS = "breakpoints"     # media query widths
    COLOR = "color"                 # fills, text, borders, icons
    FONT = "font"                   # families, sizes, weights, line heights
    HEIGHT = "height"
    MOTION = "motion"               # durations, easings, keyframes
    SHADOW = "shadow"
    SPACE = "space"                 # margin, padding, gap
    TEXT = "text"                   # composite typography variants
    WIDTH = "width"
    Z_INDEX = "zIndex"

    @classmethod
    def from_name(cls, name: str) -> "TokenGroup | None":
        """Return the group whose dataset name is ``name``, if any."""
        try:
            return cls(name)
        except ValueError:
            return None
