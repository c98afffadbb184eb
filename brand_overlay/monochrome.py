from typing import Union

from PIL import Image

from .luminance import LogoTone


def to_monochrome(logo: Image.Image, target: Union[LogoTone, str]) -> Image.Image:
    """
    Return a copy of `logo` with every visible pixel forced to pure white or black.

    Alpha is carried over untouched. Fully transparent pixels keep whatever
    color they had. The input image is never modified.
    """
    tone = LogoTone(target)
    src = logo.convert("RGBA")
    alpha = src.getchannel("A")

    value = tone.rgb[0]
    solid = Image.new("L", src.size, value)
    colored = Image.merge("RGBA", (solid, solid, solid, alpha))

    visible = alpha.point(lambda p: 255 if p > 0 else 0)
    return Image.composite(colored, src, visible)
