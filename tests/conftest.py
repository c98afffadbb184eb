import base64
import io

import pytest
from PIL import Image

from brand_overlay.raster import bytes_to_payload


def png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def to_payload(img: Image.Image) -> str:
    return bytes_to_payload(png_bytes(img))


def decode_payload(payload: str) -> Image.Image:
    _, _, body = payload.partition(",")
    return Image.open(io.BytesIO(base64.b64decode(body))).convert("RGBA")


@pytest.fixture
def dark_base():
    return to_payload(Image.new("RGB", (200, 200), (0, 0, 0)))


@pytest.fixture
def light_base():
    return to_payload(Image.new("RGB", (200, 200), (255, 255, 255)))


@pytest.fixture
def gradient_base():
    """Left half black, right half white, so anchors land on different tones."""
    img = Image.new("RGB", (200, 200), (0, 0, 0))
    img.paste((255, 255, 255), (100, 0, 200, 200))
    return to_payload(img)


@pytest.fixture
def logo_image():
    # Opaque red square with a transparent border.
    img = Image.new("RGBA", (16, 16), (0, 0, 0, 0))
    img.paste((220, 30, 30, 255), (2, 2, 14, 14))
    return img


@pytest.fixture
def logo_payload(logo_image):
    return to_payload(logo_image)


@pytest.fixture
def bare_logo_payload(logo_image):
    return base64.b64encode(png_bytes(logo_image)).decode("ascii")
