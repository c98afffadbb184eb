import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

AspectRatio = Tuple[int, int]

DEFAULT_SAFE_ZONE = 0.10

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

ASPECT_RATIOS: Dict[str, AspectRatio] = {
    "1:1": (1, 1),
    "3:4": (3, 4),
    "4:3": (4, 3),
    "9:16": (9, 16),
    "16:9": (16, 9),
}


@dataclass(frozen=True)
class PlatformSpec:
    name: str
    id: str
    aspect: str
    # Padding as a fraction of canvas width, keeps the logo clear of platform UI.
    safe_zone: float
    post_url: str


PLATFORMS: Dict[str, PlatformSpec] = {
    spec.id: spec
    for spec in (
        PlatformSpec("Facebook", "facebook", "1:1", 0.08, "https://www.facebook.com/sharer/sharer.php?u="),
        PlatformSpec("Instagram", "instagram", "1:1", 0.10, "https://www.instagram.com"),
        PlatformSpec("X (Twitter)", "twitter", "16:9", 0.08, "https://twitter.com/intent/tweet?text="),
        PlatformSpec("LinkedIn", "linkedin", "16:9", 0.08, "https://www.linkedin.com/sharing/share-offsite/?url="),
        PlatformSpec("TikTok", "tiktok", "9:16", 0.18, "https://www.tiktok.com/upload"),
        PlatformSpec("Google Business Profile", "google_business", "4:3", 0.08, "https://business.google.com/posts"),
        PlatformSpec("WhatsApp", "whatsapp", "1:1", 0.10, "https://wa.me/?text="),
        PlatformSpec("Telegram", "telegram", "1:1", 0.08, "https://t.me/share/url?url=&text="),
    )
}

# Spellings seen in the wild that do not key to a display name or id.
_ALIASES: Dict[str, str] = {
    "x": "twitter",
    "x-twitter": "twitter",
    "twitter-x": "twitter",
    "google-business": "google_business",
    "gbp": "google_business",
}


def _platform_key(text: str) -> str:
    # "X (Twitter)" -> "x-twitter", "google_business" -> "google-business"
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


_BY_KEY: Dict[str, str] = dict(_ALIASES)
for _spec in PLATFORMS.values():
    _BY_KEY[_platform_key(_spec.name)] = _spec.id
    _BY_KEY[_platform_key(_spec.id)] = _spec.id


def resolve_platform(identifier: Optional[str]) -> Optional[PlatformSpec]:
    """
    Look up a platform by display name or id.

    Case and punctuation are ignored, so "X (Twitter)", "x/twitter" and
    "twitter" all resolve to the same entry. Unknown identifiers give None.
    """
    if not identifier:
        return None
    platform_id = _BY_KEY.get(_platform_key(identifier))
    if platform_id is None:
        return None
    return PLATFORMS[platform_id]


def safe_zone_pct(identifier: Optional[str], default: float = DEFAULT_SAFE_ZONE) -> float:
    spec = resolve_platform(identifier)
    return spec.safe_zone if spec is not None else default


def canvas_size(identifier: Optional[str], long_edge: int = 1200) -> Tuple[int, int]:
    """
    Pixel size of a canvas at the platform's aspect ratio.

    The longer side is fixed to `long_edge`; unknown platforms are square.
    """
    spec = resolve_platform(identifier)
    target_w, target_h = ASPECT_RATIOS[spec.aspect] if spec is not None else (1, 1)
    if target_w >= target_h:
        width = long_edge
        height = int(long_edge * (target_h / target_w))
    else:
        height = long_edge
        width = int(long_edge * (target_w / target_h))
    return width, height
