from PIL import Image

from brand_overlay.luminance import LogoTone
from brand_overlay.monochrome import to_monochrome


def _logo():
    img = Image.new("RGBA", (3, 1))
    img.putpixel((0, 0), (10, 20, 30, 255))
    img.putpixel((1, 0), (200, 100, 50, 128))
    img.putpixel((2, 0), (1, 2, 3, 0))
    return img


def test_white():
    out = to_monochrome(_logo(), LogoTone.WHITE)
    assert list(out.getdata()) == [
        (255, 255, 255, 255),
        (255, 255, 255, 128),
        (1, 2, 3, 0),
    ]


def test_black():
    out = to_monochrome(_logo(), "black")
    assert list(out.getdata()) == [
        (0, 0, 0, 255),
        (0, 0, 0, 128),
        (1, 2, 3, 0),
    ]


def test_alpha_preserved_for_every_pixel():
    logo = Image.new("RGBA", (16, 16))
    for i in range(16):
        for j in range(16):
            logo.putpixel((i, j), (i * 16, j * 16, 7, (i * 16 + j) % 256))

    out = to_monochrome(logo, LogoTone.WHITE)

    assert out.getchannel("A").tobytes() == logo.getchannel("A").tobytes()
    for src, dst in zip(logo.getdata(), out.getdata()):
        if src[3] > 0:
            assert dst[:3] == (255, 255, 255)
        else:
            assert dst == src


def test_input_not_mutated_and_output_is_stable():
    logo = _logo()
    before = logo.tobytes()

    first = to_monochrome(logo, LogoTone.BLACK)
    second = to_monochrome(logo, LogoTone.BLACK)

    assert logo.tobytes() == before
    assert first.tobytes() == second.tobytes()
    assert first is not logo


def test_non_rgba_logo_is_treated_as_opaque():
    out = to_monochrome(Image.new("RGB", (4, 4), (90, 90, 90)), LogoTone.BLACK)
    assert out.mode == "RGBA"
    assert set(out.getdata()) == {(0, 0, 0, 255)}
