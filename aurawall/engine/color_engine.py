#!/usr/bin/env python3
"""
Color Engine for the Wallpaper Engine

Hex/HSL parsing and conversion, clamping, hue/saturation/lightness shifting and
WCAG luminance helpers. Colors travel through the engine as a tagged value
(HexColor | HslColor) and are only turned back into markup strings by css().
"""

import math
import re
from typing import Annotated, Any, Literal, Tuple, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from aurawall.core import get_logger
from aurawall.utils.numbers import fmt_num, js_round

log = get_logger("aurawall.color_engine")

_HEX_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_NON_NUMERIC = re.compile(r"[^\d.]")
HSL_PRECISION = 2


def clamp(value: float, lo: float, hi: float) -> float:
    """
    Saturate value into [lo, hi].

    NaN is not comparable, so max(lo, nan) keeps lo: clamp(nan, lo, hi) == lo.
    """
    return min(hi, max(lo, value))


def jitter(value: float, amount: float, rng) -> float:
    """Offset value by a uniform draw in [-amount/2, amount/2)."""
    return value + (rng.next() * amount - (amount / 2))


# ============================================================================
# COLOR VALUES
# ============================================================================


class HexColor(BaseModel):
    """#rrggbb color, always lower-case and six digits once validated."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["hex"] = "hex"
    value: str = "#000000"

    @field_validator("value", mode="before")
    @classmethod
    def normalize_hex(cls, v: Any) -> str:
        text = str(v).strip()
        if not _HEX_PATTERN.match(text):
            log.debug(f"Unsupported hex color {text!r}, falling back to black")
            return "#000000"
        text = text.lower()
        if len(text) == 4:
            text = "#" + "".join(c + c for c in text[1:])
        return text

    def css(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.css()


class HslColor(BaseModel):
    """HSL triple with hue in [0, 360) and saturation/lightness in [0, 100]."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["hsl"] = "hsl"
    h: float = 0
    s: float = 0
    l: float = 0

    @field_validator("h")
    @classmethod
    def wrap_hue(cls, v: float) -> float:
        h = v % 360
        # tiny negative inputs round up to exactly 360.0
        return 0.0 if h >= 360 else h

    @field_validator("s", "l")
    @classmethod
    def clamp_percent(cls, v: float) -> float:
        return clamp(v, 0, 100)

    def css(self) -> str:
        return f"hsl({fmt_num(self.h)}, {fmt_num(self.s)}%, {fmt_num(self.l)}%)"

    def __str__(self) -> str:
        return self.css()


Color = Annotated[Union[HexColor, HslColor], Field(discriminator="kind")]


def hsl(h: float, s: float, l: float) -> HslColor:
    return HslColor(h=h, s=s, l=l)


# ============================================================================
# PARSING & CONVERSION
# ============================================================================


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert #rgb / #rrggbb to an RGB tuple (black for anything else)."""
    text = hex_color.strip()
    if not _HEX_PATTERN.match(text):
        return (0, 0, 0)
    digits = text[1:]
    if len(digits) == 3:
        digits = "".join(c + c for c in digits)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_hsl(hex_color: Union[str, HexColor]) -> HslColor:
    """
    Convert a hex color to HSL, rounded to HSL_PRECISION decimals so that
    converting back lands within one unit per RGB channel.

    Strings that are not 4 or 7 characters long fall back to black instead of
    raising.
    """
    text = hex_color.value if isinstance(hex_color, HexColor) else str(hex_color).strip()
    if len(text) not in (4, 7) or not _HEX_PATTERN.match(text):
        return HslColor()

    r, g, b = (c / 255 for c in hex_to_rgb(text))
    cmin, cmax = min(r, g, b), max(r, g, b)
    delta = cmax - cmin

    if delta == 0:
        h = 0.0
    elif cmax == r:
        h = math.fmod((g - b) / delta, 6)
    elif cmax == g:
        h = (b - r) / delta + 2
    else:
        h = (r - g) / delta + 4

    h = h * 60
    if h < 0:
        h += 360
    l = (cmax + cmin) / 2
    s = 0 if delta == 0 else delta / (1 - abs(2 * l - 1))
    return HslColor(
        h=round(h, HSL_PRECISION),
        s=round(s * 100, HSL_PRECISION),
        l=round(l * 100, HSL_PRECISION),
    )


def hsl_to_rgb(color: HslColor) -> Tuple[int, int, int]:
    s = color.s / 100
    l = color.l / 100
    c = (1 - abs(2 * l - 1)) * s
    hp = color.h / 60
    x = c * (1 - abs(math.fmod(hp, 2) - 1))
    if hp < 1:
        r, g, b = c, x, 0.0
    elif hp < 2:
        r, g, b = x, c, 0.0
    elif hp < 3:
        r, g, b = 0.0, c, x
    elif hp < 4:
        r, g, b = 0.0, x, c
    elif hp < 5:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    m = l - c / 2
    return tuple(int(clamp(js_round((v + m) * 255), 0, 255)) for v in (r, g, b))


def hsl_to_hex(color: HslColor) -> HexColor:
    return HexColor(value=rgb_to_hex(*hsl_to_rgb(color)))


def parse_hsl(text: str) -> HslColor:
    """
    Parse an "hsl(h, s%, l%)"-style string.

    Every character that is not a digit or a dot is treated as a separator, so
    the grammar is not validated. Fewer than three numbers gives black.
    """
    parts = _NON_NUMERIC.sub(" ", text).split()
    if len(parts) < 3:
        return HslColor()
    try:
        h = float(parts[0])
        s = int(float(parts[1]))
        l = int(float(parts[2]))
    except ValueError:
        return HslColor()
    return HslColor(h=h, s=s, l=l)


def format_hsl(h: float, s: float, l: float) -> str:
    return hsl(h, s, l).css()


def parse_color(value: Any) -> Union[HexColor, HslColor]:
    """Turn a markup string (or an already-typed color) into a Color."""
    if isinstance(value, (HexColor, HslColor)):
        return value
    if isinstance(value, dict):
        if value.get("kind") == "hsl" or "h" in value:
            return HslColor(**value)
        return HexColor(**value)
    text = str(value).strip()
    if text.startswith("#"):
        return HexColor(value=text)
    return parse_hsl(text)


def to_hsl(color: Any) -> HslColor:
    color = parse_color(color)
    if isinstance(color, HslColor):
        return color
    return hex_to_hsl(color)


def coerce_color(value: Any) -> Any:
    """Pydantic before-validator letting models accept plain color strings."""
    if isinstance(value, str):
        return parse_color(value)
    return value


ColorField = Annotated[Color, BeforeValidator(coerce_color)]


def shift_color(color: Any, d_hue: float, d_sat: float, d_light: float) -> HslColor:
    """Add deltas in HSL space; hue wraps modulo 360, s/l are clamped."""
    base = to_hsl(color)
    return HslColor(h=base.h + d_hue, s=base.s + d_sat, l=base.l + d_light)


# ============================================================================
# LUMINANCE & CONTRAST
# ============================================================================


def relative_luminance(color: Any) -> float:
    """WCAG 2.1 relative luminance of any Color."""
    color = parse_color(color)
    if isinstance(color, HslColor):
        r, g, b = hsl_to_rgb(color)
    else:
        r, g, b = hex_to_rgb(color.value)

    def gamma_correct(c: int) -> float:
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * gamma_correct(r) + 0.7152 * gamma_correct(g) + 0.0722 * gamma_correct(b)


def contrast_ratio(fg: Any, bg: Any) -> float:
    """Contrast ratio between two colors (1.0 to 21.0, higher is better)."""
    l1 = relative_luminance(fg)
    l2 = relative_luminance(bg)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)
