import math
from typing import Optional

from PIL import Image, ImageFilter

from .config import DEFAULT_SETTINGS, OverlaySettings
from .luminance import LogoTone
from .placement import PlacementRect
from .raster import PillowRasterService, RasterService, Surface


def shadow_blur_radius(canvas_w: int, settings: OverlaySettings = DEFAULT_SETTINGS) -> float:
    return max(settings.min_shadow_blur, canvas_w * settings.shadow_blur_ratio)


def build_shadow(
    logo: Image.Image,
    tone: LogoTone,
    blur_radius: float,
    opacity: float,
) -> Image.Image:
    """
    Blurred silhouette of `logo` in `tone`, padded so the blur isn't clipped.

    The returned image is larger than the logo by `pad` pixels on every side,
    where pad = ceil(2 * blur_radius).
    """
    pad = int(math.ceil(blur_radius * 2))
    alpha = logo.getchannel("A").point(lambda p: int(p * opacity))

    silhouette = Image.new("RGBA", (logo.width + 2 * pad, logo.height + 2 * pad), tone.rgb + (0,))
    mask = Image.new("L", silhouette.size, 0)
    mask.paste(alpha, (pad, pad))
    silhouette.putalpha(mask)
    return silhouette.filter(ImageFilter.GaussianBlur(blur_radius))


def draw_logo(
    surface: Surface,
    logo: Image.Image,
    rect: PlacementRect,
    tone: LogoTone,
    opacity: float = 1.0,
    settings: OverlaySettings = DEFAULT_SETTINGS,
    raster: Optional[RasterService] = None,
) -> None:
    """
    Draw a monochrome logo with its drop shadow onto `surface` in place.

    The shadow uses the opposite tone and goes down first; the logo is drawn
    over it, both scaled to the rect's size and multiplied by `opacity`.
    """
    raster = raster or PillowRasterService()
    x, y, edge, _ = rect.box()

    scaled = logo.convert("RGBA")
    if scaled.size != (edge, edge):
        scaled = scaled.resize((edge, edge), Image.LANCZOS)

    blur = shadow_blur_radius(surface.width, settings)
    shadow = build_shadow(scaled, tone.opposite(), blur, settings.shadow_opacity)
    pad = (shadow.width - edge) // 2
    raster.draw(surface, shadow, x - pad, y - pad, shadow.width, shadow.height, opacity=opacity)

    raster.draw(surface, scaled, x, y, edge, edge, opacity=opacity)
