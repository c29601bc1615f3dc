"""
Unit and value converters
Turn Figma measurements and colours into CSS-ready token values
"""

import math
from typing import List, Optional, Sequence

from figma2theme.core.exception.exceptions import TokenConversionError
from figma2theme.figma.nodes import Color, Effect, Paint, TypeStyle
from figma2theme.tokens.types import ShadowValue

BASE_FONT_SIZE = 16
DECIMAL_PLACES = 5

SHADOW_EFFECT_TYPES = ("DROP_SHADOW", "INNER_SHADOW")

TEXT_DECORATIONS = {
    "UNDERLINE": "underline",
    "STRIKETHROUGH": "line-through",
}

TEXT_TRANSFORMS = {
    "UPPER": "uppercase",
    "LOWER": "lowercase",
    "TITLE": "capitalize",
}


def format_number(value: float, places: int = DECIMAL_PLACES) -> str:
    """
    Format a number without trailing zeros

    >>> format_number(0.125)
    '0.125'
    >>> format_number(30.0)
    '30'
    """
    text = f"{round(value, places):.{places}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def px(value: float) -> str:
    return f"{format_number(value)}px"


def _relative(value: float, unit: str) -> str:
    if value == 0:
        return "0"
    # sub-pixel values don't make sense as fractions of the base font size
    if abs(value) <= 1:
        return px(value)
    return f"{format_number(value / BASE_FONT_SIZE)}{unit}"


def px_to_rem(value: float) -> str:
    return _relative(value, "rem")


def px_to_em(value: float) -> str:
    return _relative(value, "em")


def line_height_value(style: TypeStyle) -> str:
    """
    Convert the line height of a text style

    PIXELS -> rem, FONT_SIZE_% -> unitless decimal, INTRINSIC_% -> "normal"

    Raises:
        TokenConversionError: the line height unit isn't one of the above
    """
    unit = style.line_height_unit
    if unit == "PIXELS":
        return px_to_rem(style.line_height_px)
    if unit == "FONT_SIZE_%":
        return format_number((style.line_height_percent_font_size or 0) / 100)
    if unit == "INTRINSIC_%":
        return "normal"
    raise TokenConversionError(f"Unsupported line height unit {unit!r}")


def letter_spacing_ratio(style: TypeStyle) -> float:
    if not style.font_size:
        raise TokenConversionError("Can't calculate letter spacing for a font size of 0")
    return round(style.letter_spacing / style.font_size, 3)


def letter_spacing_value(style: TypeStyle) -> str:
    """Letter spacing relative to the font size (e.g. -0.025em)"""
    ratio = letter_spacing_ratio(style)
    text = format_number(ratio, 3)
    return "0" if text == "0" else f"{text}em"


def _channel(value: float) -> int:
    return min(255, max(0, math.floor(value * 255 + 0.5)))


def rgba_to_hex(color: Color, opacity: float = 1.0) -> str:
    """
    Convert 0-1 colour channels to a lowercase hex string

    The alpha channel is appended only when the colour isn't fully opaque.
    """
    hex_value = "#" + "".join(f"{_channel(c):02x}" for c in (color.r, color.g, color.b))
    alpha = _channel(color.a * opacity)
    if alpha != 255:
        hex_value += f"{alpha:02x}"
    return hex_value


def shadow_to_value(effect: Effect) -> ShadowValue:
    color = effect.color or Color(0, 0, 0, 1)
    return ShadowValue(
        inset=effect.type == "INNER_SHADOW",
        color=rgba_to_hex(color),
        offset_x=px(effect.offset_x),
        offset_y=px(effect.offset_y),
        blur=px(effect.radius),
        spread=px(effect.spread),
    )


def shadows_from_effects(effects: Sequence[Effect]) -> List[ShadowValue]:
    """
    Convert the visible shadow effects of a style

    Figma paints the first effect on top, so the list is reversed to match
    the CSS box-shadow stacking order.
    """
    return [
        shadow_to_value(e)
        for e in reversed(effects)
        if e.visible and e.type in SHADOW_EFFECT_TYPES
    ]


def font_style_value(style: TypeStyle) -> str:
    return "italic" if style.italic else "normal"


def font_weight_value(style: TypeStyle) -> str:
    return format_number(style.font_weight)


def text_decoration_value(style: TypeStyle) -> str:
    return TEXT_DECORATIONS.get(style.text_decoration, "none")


def text_transform_value(style: TypeStyle) -> str:
    return TEXT_TRANSFORMS.get(style.text_case, "none")


def solid_fill_colour(fills: Sequence[Paint]) -> Optional[str]:
    """Hex value of the first visible solid paint, or None"""
    for paint in fills:
        if paint.type == "SOLID" and paint.visible and paint.color is not None:
            return rgba_to_hex(paint.color, paint.opacity)
    return None
