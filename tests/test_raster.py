import base64

import pytest
from PIL import Image

from brand_overlay.errors import SurfaceUnavailableError
from brand_overlay.raster import PillowRasterService, normalize_payload, payload_to_bytes

from .conftest import png_bytes, to_payload


@pytest.fixture
def raster():
    return PillowRasterService()


def test_normalize_bare_base64():
    assert normalize_payload("iVBORw0KGgo=") == "data:image/png;base64,iVBORw0KGgo="


def test_normalize_leaves_data_urls_and_bytes_alone():
    url = "data:image/jpeg;base64,/9j/4AAQ"
    assert normalize_payload(url) == url
    assert normalize_payload(b"\x89PNG") == b"\x89PNG"


def test_payload_to_bytes_rejects_garbage():
    with pytest.raises(ValueError):
        payload_to_bytes("not base64 at all!")
    with pytest.raises(ValueError):
        payload_to_bytes("")
    with pytest.raises(ValueError):
        payload_to_bytes("data:image/png,rawtext")


def test_decode_accepts_every_payload_form(raster):
    img = Image.new("RGB", (5, 3), (10, 20, 30))
    raw = png_bytes(img)
    for payload in (raw, to_payload(img), base64.b64encode(raw).decode("ascii")):
        decoded = raster.decode(payload)
        assert decoded.mode == "RGBA"
        assert decoded.size == (5, 3)
        assert decoded.getpixel((0, 0)) == (10, 20, 30, 255)


def test_decode_rejects_non_image(raster):
    with pytest.raises(ValueError):
        raster.decode(base64.b64encode(b"hello world").decode("ascii"))


def test_new_surface(raster):
    surface = raster.new_surface(4, 2)
    assert surface.size == (4, 2)
    assert surface.mode == "RGBA"


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-1, 5)])
def test_new_surface_rejects_empty(raster, width, height):
    with pytest.raises(SurfaceUnavailableError):
        raster.new_surface(width, height)


def test_draw_scales_and_clips(raster):
    surface = raster.new_surface(10, 10)
    raster.draw(surface, Image.new("RGBA", (2, 2), (255, 0, 0, 255)), -2, -2, 6, 6)
    assert surface.getpixel((0, 0)) == (255, 0, 0, 255)
    assert surface.getpixel((3, 3)) == (255, 0, 0, 255)
    assert surface.getpixel((4, 4)) == (0, 0, 0, 0)


def test_draw_with_opacity(raster):
    surface = Image.new("RGBA", (4, 4), (0, 0, 0, 255))
    raster.draw(surface, Image.new("RGBA", (4, 4), (255, 255, 255, 255)), 0, 0, 4, 4, opacity=0.5)
    r, g, b, a = surface.getpixel((1, 1))
    assert 120 <= r <= 135
    assert a == 255


def test_read_pixels_with_step(raster):
    surface = Image.new("RGBA", (10, 10), (1, 2, 3, 255))
    assert len(raster.read_pixels(surface, (0, 0, 10, 10))) == 100
    assert len(raster.read_pixels(surface, (0, 0, 10, 10), step=3)) == 16
    assert raster.read_pixels(surface, (0, 0, 1, 1)) == [(1, 2, 3)]


def test_encode_is_lossless_png(raster):
    surface = Image.effect_noise((20, 20), 80).convert("RGBA")
    payload = raster.encode(surface)
    assert payload.startswith("data:image/png;base64,")
    assert raster.decode(payload).tobytes() == surface.tobytes()
    assert raster.encode(surface) == payload


def test_decode_accepts_line_wrapped_base64(raster):
    img = Image.new("RGB", (40, 40), (10, 20, 30))
    wrapped = base64.encodebytes(png_bytes(img)).decode("ascii")
    assert "\n" in wrapped

    for payload in (wrapped, "data:image/png;base64," + wrapped):
        decoded = raster.decode(payload)
        assert decoded.size == (40, 40)
        assert decoded.getpixel((5, 5)) == (10, 20, 30, 255)


def test_decode_turns_oversized_images_into_value_error(raster, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(ValueError, match="too large"):
        raster.decode(to_payload(Image.new("RGB", (200, 200))))
