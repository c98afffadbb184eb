import logging
import math
from enum import Enum
from typing import Optional

from .raster import Box, PillowRasterService, RasterService, Surface

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_BUDGET = 2000
DEFAULT_CONTRAST_THRESHOLD = 0.55


class LogoTone(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def rgb(self):
        return (255, 255, 255) if self is LogoTone.WHITE else (0, 0, 0)

    def opposite(self) -> "LogoTone":
        return LogoTone.BLACK if self is LogoTone.WHITE else LogoTone.WHITE


def clamp_box(surface_w: int, surface_h: int, x: float, y: float, w: float, h: float) -> Box:
    """
    Clamp a rectangle to the surface; returns (left, top, right, bottom).

    Coordinates are rounded the same way `PlacementRect.box` rounds them.

    Width and height below one pixel are raised to one pixel, so the result
    always covers at least one pixel of the surface.
    """
    w = max(1, int(round(w)))
    h = max(1, int(round(h)))
    x = int(round(x))
    y = int(round(y))
    left = min(max(x, 0), surface_w - 1)
    top = min(max(y, 0), surface_h - 1)
    right = min(surface_w, max(left + 1, x + w))
    bottom = min(surface_h, max(top + 1, y + h))
    return left, top, right, bottom


def sample_stride(width: int, height: int, budget: int = DEFAULT_SAMPLE_BUDGET) -> int:
    area = width * height
    if area <= budget:
        return 1
    return max(1, math.ceil(math.sqrt(area / budget)))


def sample_brightness(
    surface: Surface,
    x: float,
    y: float,
    w: float,
    h: float,
    budget: int = DEFAULT_SAMPLE_BUDGET,
    raster: Optional[RasterService] = None,
) -> float:
    """
    Mean luminance of the pixels under a rectangle, in [0, 1].

    Per-pixel luminance is (0.299 R + 0.587 G + 0.114 B) / 255. Large regions
    are read on a regular grid so roughly `budget` pixels are visited; the
    result is always a plain mean over the visited pixels.
    """
    raster = raster or PillowRasterService()
    left, top, right, bottom = clamp_box(surface.width, surface.height, x, y, w, h)
    step = sample_stride(right - left, bottom - top, budget)
    pixels = raster.read_pixels(surface, (left, top, right, bottom), step=step)

    total = 0.0
    for r, g, b in pixels:
        total += (0.299 * r + 0.587 * g + 0.114 * b) / 255
    brightness = total / len(pixels)

    logger.debug(
        "Sampled %d px in (%d, %d, %d, %d) step=%d -> brightness=%.3f",
        len(pixels), left, top, right, bottom, step, brightness,
    )
    return brightness


def choose_tone(brightness: float, threshold: float = DEFAULT_CONTRAST_THRESHOLD) -> LogoTone:
    """White on dark backgrounds; the threshold itself counts as light."""
    return LogoTone.WHITE if brightness < threshold else LogoTone.BLACK
