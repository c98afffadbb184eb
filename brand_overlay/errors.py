"""
Error kinds raised by the overlay engine.

Nothing here retries. Errors reach the immediate caller; the session
controller records a user-facing message before re-raising.
"""

from typing import Any, Dict, Optional


class BrandOverlayError(Exception):
    """Base class for every error the overlay engine raises."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": str(self),
            "details": self.details,
        }


class LogoMissingError(BrandOverlayError):
    """Overlay was requested but the business profile has no logo."""

    def __init__(self, message: str = "Upload a logo to your business profile to use the brand overlay.") -> None:
        super().__init__(message, code="LOGO_MISSING")


class ImageDecodeError(BrandOverlayError):
    """An image payload could not be decoded. `source` is "base" or "logo"."""

    def __init__(self, source: str, reason: Optional[str] = None) -> None:
        message = f"Could not decode {source} image"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code="IMAGE_DECODE_ERROR", details={"source": source})
        self.source = source


class SurfaceUnavailableError(BrandOverlayError):
    """A drawing surface of the requested size could not be allocated."""

    def __init__(self, width: int, height: int, reason: Optional[str] = None) -> None:
        message = f"No drawing surface available for {width}x{height}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            code="SURFACE_UNAVAILABLE",
            details={"width": width, "height": height},
        )
