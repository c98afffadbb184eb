import asyncio
import logging
from typing import Optional, Union

from .config import DEFAULT_SETTINGS, OverlaySettings
from .errors import ImageDecodeError
from .luminance import choose_tone, sample_brightness
from .monochrome import to_monochrome
from .placement import PlacementAnchor, calc_rect
from .raster import ImagePayload, PillowRasterService, RasterImage, RasterService, normalize_payload
from .render import draw_logo

logger = logging.getLogger(__name__)


class LogoCompositor:
    """
    Stamps a business logo onto a generated image:
    - decode the base image and copy it onto a fresh surface
    - work out the logo rect from the platform safe zone and anchor
    - sample the background under the rect and pick a white or black logo
    - decode the logo, recolor it, draw it (with shadow) and encode as PNG

    Each call owns its surface, so concurrent calls never share pixels.
    """

    def __init__(
        self,
        raster: Optional[RasterService] = None,
        settings: Optional[OverlaySettings] = None,
    ) -> None:
        self.raster = raster or PillowRasterService()
        self.settings = settings or DEFAULT_SETTINGS

    async def compose(
        self,
        base_image: ImagePayload,
        logo: ImagePayload,
        platform: Optional[str],
        anchor: Union[PlacementAnchor, str],
    ) -> ImagePayload:
        anchor = PlacementAnchor.parse(anchor)

        base = await self._decode(base_image, source="base")

        surface = self.raster.new_surface(base.width, base.height)
        self.raster.draw(surface, base, 0, 0, base.width, base.height)

        rect = calc_rect(surface.width, surface.height, platform, anchor, self.settings)
        brightness = sample_brightness(
            surface,
            rect.x,
            rect.y,
            rect.size,
            rect.size,
            budget=self.settings.sample_budget,
            raster=self.raster,
        )
        tone = choose_tone(brightness, self.settings.contrast_threshold)

        logo_img = await self._decode(logo, source="logo")
        mono = to_monochrome(logo_img, tone)

        opacity = self.settings.watermark_opacity if anchor is PlacementAnchor.CENTER else 1.0
        draw_logo(surface, mono, rect, tone, opacity=opacity, settings=self.settings, raster=self.raster)

        logger.info(
            "🎨 Composed logo overlay: platform=%s anchor=%s brightness=%.3f tone=%s",
            platform, anchor.value, brightness, tone.value,
        )
        return self.raster.encode(surface)

    async def _decode(self, payload: ImagePayload, source: str) -> RasterImage:
        if not payload:
            raise ImageDecodeError(source, "payload is empty")
        # Bare base64 gets a data URL prefix before decoding.
        payload = normalize_payload(payload)
        try:
            return await asyncio.to_thread(self.raster.decode, payload)
        except (ValueError, OSError) as err:
            raise ImageDecodeError(source, str(err)) from err
