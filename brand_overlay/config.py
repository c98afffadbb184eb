import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from dotenv import load_dotenv


ENV_PREFIX = "BRAND_OVERLAY_"


@dataclass(frozen=True)
class OverlaySettings:
    """
    Tunables for logo placement and contrast.

    Defaults reproduce the stock behaviour; every field can be overridden
    through a `BRAND_OVERLAY_<FIELD>` environment variable.
    """

    # Logo edge length as a fraction of canvas width.
    logo_scale: float = 0.18
    # Brightness below this gets a white logo, anything else black.
    contrast_threshold: float = 0.55
    # Opacity for the center anchor (watermark).
    watermark_opacity: float = 0.35
    # Upper bound on pixels visited when sampling brightness.
    sample_budget: int = 2000
    # Safe zone for platforms missing from the table.
    default_safe_zone: float = 0.10
    shadow_blur_ratio: float = 0.004
    min_shadow_blur: float = 2.0
    shadow_opacity: float = 0.6


DEFAULT_SETTINGS = OverlaySettings()


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    use_dotenv: bool = True,
) -> OverlaySettings:
    """
    Build settings from the environment.

    A local .env file is loaded first when `use_dotenv` is set (e.g.
    BRAND_OVERLAY_CONTRAST_THRESHOLD=0.5). Pass `environ` to read from a
    mapping other than os.environ.
    """
    if use_dotenv:
        load_dotenv()
    env = os.environ if environ is None else environ

    overrides = {}
    for field in fields(OverlaySettings):
        var = ENV_PREFIX + field.name.upper()
        raw = env.get(var)
        if raw is None or raw.strip() == "":
            continue
        cast = int if field.type in (int, "int") else float
        try:
            overrides[field.name] = cast(raw.strip())
        except ValueError as err:
            raise ValueError(f"{var} must be a number, got {raw!r}") from err

    return replace(DEFAULT_SETTINGS, **overrides)
