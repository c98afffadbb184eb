"""
Thin raster layer over Pillow.

Everything that touches encoded bytes lives here: payload normalization,
decoding into an RGBA image, surface allocation, pixel reads and PNG encoding.
The rest of the package only sees `Image.Image` objects.
"""

import base64
import binascii
import io
from typing import List, Protocol, Tuple, Union

from PIL import Image, UnidentifiedImageError

from .errors import SurfaceUnavailableError

ImagePayload = Union[str, bytes]
RasterImage = Image.Image
Surface = Image.Image
Box = Tuple[int, int, int, int]

DATA_URL_PREFIX = "data:"
PNG_MIME = "image/png"


def normalize_payload(payload: ImagePayload, mime: str = PNG_MIME) -> ImagePayload:
    """
    Turn a bare base64 string into a data URL.

    Data URLs and raw bytes are returned unchanged.
    """
    if isinstance(payload, (bytes, bytearray)):
        return payload
    text = payload.strip()
    if text.startswith(DATA_URL_PREFIX):
        return text
    return f"data:{mime};base64,{text}"


def payload_to_bytes(payload: ImagePayload) -> bytes:
    if isinstance(payload, (bytes, bytearray)):
        data = bytes(payload)
    else:
        text = normalize_payload(payload)
        header, sep, body = text.partition(",")
        if not sep or ";base64" not in header:
            raise ValueError("payload is not a base64 data URL")
        # MIME-style encoders wrap lines; whitespace carries no data.
        body = "".join(body.split())
        try:
            data = base64.b64decode(body, validate=True)
        except binascii.Error as err:
            raise ValueError(f"invalid base64: {err}") from err
    if not data:
        raise ValueError("payload is empty")
    return data


def bytes_to_payload(data: bytes, mime: str = PNG_MIME) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


class RasterService(Protocol):
    def decode(self, payload: ImagePayload) -> RasterImage: ...

    def new_surface(self, width: int, height: int) -> Surface: ...

    def draw(
        self,
        surface: Surface,
        image: RasterImage,
        x: int,
        y: int,
        width: int,
        height: int,
        opacity: float = 1.0,
    ) -> None: ...

    def read_pixels(self, surface: Surface, box: Box, step: int = 1) -> List[Tuple[int, int, int]]: ...

    def encode(self, surface: Surface) -> ImagePayload: ...


class PillowRasterService:
    """`RasterService` backed by Pillow. Surfaces are RGBA images."""

    def decode(self, payload: ImagePayload) -> RasterImage:
        data = payload_to_bytes(payload)
        stream = io.BytesIO(data)
        try:
            img = Image.open(stream)
            img.verify()
            stream.seek(0)
            img = Image.open(stream)
            return img.convert("RGBA")
        except Image.DecompressionBombError as err:
            raise ValueError(f"image too large: {err}") from err
        except (UnidentifiedImageError, OSError, SyntaxError) as err:
            raise ValueError(f"unreadable image data: {err}") from err

    def new_surface(self, width: int, height: int) -> Surface:
        if width <= 0 or height <= 0:
            raise SurfaceUnavailableError(width, height, "dimensions must be positive")
        try:
            return Image.new("RGBA", (width, height), (0, 0, 0, 0))
        except (MemoryError, ValueError) as err:
            raise SurfaceUnavailableError(width, height, str(err)) from err

    def draw(
        self,
        surface: Surface,
        image: RasterImage,
        x: int,
        y: int,
        width: int,
        height: int,
        opacity: float = 1.0,
    ) -> None:
        """Alpha-composite `image`, scaled to width x height, onto `surface` in place."""
        layer_img = image.convert("RGBA")
        if layer_img.size != (width, height):
            layer_img = layer_img.resize((width, height), Image.LANCZOS)
        if opacity < 1.0:
            alpha = layer_img.getchannel("A").point(lambda p: int(p * opacity))
            layer_img.putalpha(alpha)

        # Full-size layer so negative or overhanging positions clip cleanly.
        layer = Image.new("RGBA", surface.size, (0, 0, 0, 0))
        layer.paste(layer_img, (x, y))
        surface.alpha_composite(layer)

    def read_pixels(self, surface: Surface, box: Box, step: int = 1) -> List[Tuple[int, int, int]]:
        """
        RGB values of the (left, top, right, bottom) region, row-major.

        With `step` > 1 only every step-th column of every step-th row is read.
        """
        region = surface.crop(box).convert("RGB")
        px = region.load()
        width, height = region.size
        return [px[i, j] for j in range(0, height, step) for i in range(0, width, step)]

    def encode(self, surface: Surface) -> ImagePayload:
        buf = io.BytesIO()
        surface.save(buf, format="PNG")
        return bytes_to_payload(buf.getvalue())
