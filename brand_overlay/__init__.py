"""
Brand overlay engine: stamps a business logo onto a generated social image.

Modules:
- core: compositor (decode, sample, recolor, draw, encode)
- session: overlay session state and toggle / reposition controller
- luminance: background brightness sampling and logo tone choice
- monochrome: white / black logo recoloring with alpha preserved
- placement: safe-zone anchor geometry
- platforms: per-platform safe zones, aspect ratios and post URLs
- render: logo and drop-shadow drawing
- raster: Pillow-backed decode / surface / encode layer
- config: tunables, overridable from the environment
- errors: error kinds surfaced to callers
"""

from .config import OverlaySettings, load_settings
from .core import LogoCompositor
from .errors import (
    BrandOverlayError,
    ImageDecodeError,
    LogoMissingError,
    SurfaceUnavailableError,
)
from .luminance import LogoTone, choose_tone, sample_brightness
from .monochrome import to_monochrome
from .placement import PlacementAnchor, PlacementRect, calc_rect
from .platforms import PLATFORMS, PlatformSpec, resolve_platform
from .session import OverlayController, OverlaySession

__all__ = [
    "BrandOverlayError",
    "ImageDecodeError",
    "LogoCompositor",
    "LogoMissingError",
    "LogoTone",
    "OverlayController",
    "OverlaySession",
    "OverlaySettings",
    "PLATFORMS",
    "PlacementAnchor",
    "PlacementRect",
    "PlatformSpec",
    "SurfaceUnavailableError",
    "calc_rect",
    "choose_tone",
    "load_settings",
    "resolve_platform",
    "sample_brightness",
    "to_monochrome",
]
