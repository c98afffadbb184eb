from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .config import DEFAULT_SETTINGS, OverlaySettings
from .platforms import safe_zone_pct


class PlacementAnchor(str, Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"

    @classmethod
    def parse(cls, value: Union["PlacementAnchor", str]) -> "PlacementAnchor":
        """Accept an anchor or its string form ("top-left", "top_left", "Top Left")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown placement anchor: {value!r}") from None


@dataclass(frozen=True)
class PlacementRect:
    """Where the logo goes, in canvas pixels. May extend past the canvas edge."""

    x: float
    y: float
    size: float

    def box(self) -> Tuple[int, int, int, int]:
        """Integer (x, y, width, height), as drawn."""
        edge = max(1, int(round(self.size)))
        return int(round(self.x)), int(round(self.y)), edge, edge


def calc_rect(
    canvas_w: float,
    canvas_h: float,
    platform: Optional[str],
    anchor: Union[PlacementAnchor, str],
    settings: OverlaySettings = DEFAULT_SETTINGS,
) -> PlacementRect:
    anchor = PlacementAnchor.parse(anchor)
    pad = canvas_w * safe_zone_pct(platform, default=settings.default_safe_zone)
    size = canvas_w * settings.logo_scale

    if anchor is PlacementAnchor.CENTER:
        # Center ignores the safe zone entirely.
        return PlacementRect(x=canvas_w / 2 - size / 2, y=canvas_h / 2 - size / 2, size=size)

    left = pad
    right = canvas_w - size - pad
    top = pad
    bottom = canvas_h - size - pad

    x, y = {
        PlacementAnchor.TOP_LEFT: (left, top),
        PlacementAnchor.TOP_RIGHT: (right, top),
        PlacementAnchor.BOTTOM_LEFT: (left, bottom),
        PlacementAnchor.BOTTOM_RIGHT: (right, bottom),
    }[anchor]
    return PlacementRect(x=x, y=y, size=size)
