import logging
from typing import Optional, Union

from .core import LogoCompositor
from .errors import BrandOverlayError, LogoMissingError
from .placement import PlacementAnchor
from .raster import ImagePayload

logger = logging.getLogger(__name__)


class OverlaySession:
    """
    Overlay state for one generated post.

    `pristine` is the image as it came back from the generator. It is fixed
    for the life of the session; a new base image means a new session.
    `current` is what the caller should display and is only rebound by
    `OverlayController`.
    """

    def __init__(
        self,
        pristine: ImagePayload,
        platform: Optional[str],
        logo: Optional[ImagePayload] = None,
    ) -> None:
        self._pristine = pristine
        self.platform = platform
        self.logo = logo
        self.current: ImagePayload = pristine
        self.enabled = False
        self.anchor = PlacementAnchor.BOTTOM_RIGHT
        self.error: Optional[str] = None
        # Bumped on every compose request and on disable; results carrying an
        # older number are dropped.
        self._sequence = 0

    @property
    def pristine(self) -> ImagePayload:
        return self._pristine

    @property
    def has_logo(self) -> bool:
        return bool(self.logo)

    def _next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def _is_latest(self, sequence: int) -> bool:
        return sequence == self._sequence


class OverlayController:
    """
    Applies toggle / reposition actions to an `OverlaySession`.

    Every composition reads from the session's pristine image, never from
    `current`, so repositioning can't stack one overlay on another.
    """

    def __init__(self, compositor: Optional[LogoCompositor] = None) -> None:
        self.compositor = compositor or LogoCompositor()

    def start(
        self,
        base_image: ImagePayload,
        platform: Optional[str],
        logo: Optional[ImagePayload] = None,
    ) -> OverlaySession:
        """New base image available: overlay off, no error, current = pristine."""
        logger.info("New base image for platform=%s (logo %s)", platform, "present" if logo else "absent")
        return OverlaySession(base_image, platform, logo)

    def set_logo(self, session: OverlaySession, logo: Optional[ImagePayload]) -> None:
        session.logo = logo

    async def enable(
        self,
        session: OverlaySession,
        anchor: Optional[Union[PlacementAnchor, str]] = None,
    ) -> Optional[ImagePayload]:
        """
        Turn the overlay on at `anchor` (or the session's last anchor).

        Raises LogoMissingError when the session has no logo. Returns the
        committed image, or None when a newer request superseded this one.
        """
        if not session.has_logo:
            err = LogoMissingError()
            session.error = str(err)
            logger.warning("Overlay enable refused: no logo available")
            raise err

        if anchor is not None:
            session.anchor = PlacementAnchor.parse(anchor)
        return await self._recompose(session)

    def disable(self, session: OverlaySession) -> ImagePayload:
        # Invalidate anything still in flight.
        session._next_sequence()
        session.enabled = False
        session.current = session.pristine
        session.error = None
        logger.info("Overlay disabled")
        return session.current

    async def change_anchor(
        self,
        session: OverlaySession,
        anchor: Union[PlacementAnchor, str],
    ) -> Optional[ImagePayload]:
        """Move the logo. While the overlay is off this only records the anchor."""
        session.anchor = PlacementAnchor.parse(anchor)
        if not session.enabled:
            return None
        return await self._recompose(session)

    async def _recompose(self, session: OverlaySession) -> Optional[ImagePayload]:
        sequence = session._next_sequence()
        anchor = session.anchor
        try:
            result = await self.compositor.compose(
                session.pristine,
                session.logo,
                session.platform,
                anchor,
            )
        except BrandOverlayError as err:
            if session._is_latest(sequence):
                session.error = f"Couldn't apply your logo: {err}"
            logger.warning("Overlay compose failed (anchor=%s): %s", anchor.value, err)
            raise

        if not session._is_latest(sequence):
            logger.debug("Dropping stale overlay result #%d (anchor=%s)", sequence, anchor.value)
            return None

        session.current = result
        session.enabled = True
        session.error = None
        return result
