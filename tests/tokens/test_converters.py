import pytest

from figma2theme.core.exception.exceptions import TokenConversionError
from figma2theme.figma.nodes import Color, Effect, Paint, TypeStyle
from figma2theme.tokens import converters


class TestNumbers:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.125, "0.125"), (30.0, "30"), (-0.0000001, "0"), (0.208333331, "0.20833"), (-2.5, "-2.5")],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert converters.format_number(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0"), (0.5, "0.5px"), (1, "1px"), (2, "0.125rem"), (24, "1.5rem"), (10, "0.625rem"), (-8, "-0.5rem")],
    )
    def test_px_to_rem(self, value: float, expected: str) -> None:
        assert converters.px_to_rem(value) == expected

    def test_px_to_em(self) -> None:
        assert converters.px_to_em(480) == "30em"
        assert converters.px_to_em(0) == "0"


class TestColours:
    def test_opaque_colour(self) -> None:
        assert converters.rgba_to_hex(Color(94 / 255, 88 / 255, 88 / 255)) == "#5e5858"

    def test_alpha_is_appended(self) -> None:
        assert converters.rgba_to_hex(Color(1, 1, 1, 0.3)) == "#ffffff4d"

    def test_paint_opacity(self) -> None:
        assert converters.rgba_to_hex(Color(0, 0, 0), opacity=0.5) == "#00000080"

    def test_channels_are_clamped(self) -> None:
        assert converters.rgba_to_hex(Color(1.2, -0.1, 0)) == "#ff0000"

    def test_first_visible_solid_fill(self) -> None:
        # Given
        fills = [
            Paint(type="GRADIENT_LINEAR"),
            Paint(type="SOLID", color=Color(1, 0, 0), visible=False),
            Paint(type="SOLID", color=Color(0, 0, 1)),
        ]

        # When / Then
        assert converters.solid_fill_colour(fills) == "#0000ff"
        assert converters.solid_fill_colour([]) is None


class TestShadows:
    def test_visible_shadows_in_reverse_order(self) -> None:
        # Given
        effects = [
            Effect(type="DROP_SHADOW", color=Color(0.1, 0.2, 0.3, 0.3), offset_x=1, offset_y=2, radius=4),
            Effect(type="INNER_SHADOW", color=Color(0, 0, 0, 1), offset_y=-1, radius=2, spread=1),
            Effect(type="LAYER_BLUR", radius=10),
            Effect(type="DROP_SHADOW", color=Color(1, 0, 0, 1), visible=False),
        ]

        # When
        shadows = converters.shadows_from_effects(effects)

        # Then
        assert len(shadows) == 2
        inner, drop = shadows
        assert inner.inset is True
        assert inner.to_css() == "inset 0px -1px 2px 1px #000000"
        assert drop.inset is False
        assert drop.color == "#1a334d4d"
        assert (drop.offset_x, drop.offset_y, drop.blur, drop.spread) == ("1px", "2px", "4px", "0px")


class TestTypography:
    def test_line_height_pixels(self) -> None:
        style = TypeStyle(line_height_unit="PIXELS", line_height_px=24)
        assert converters.line_height_value(style) == "1.5rem"

    def test_line_height_percent(self) -> None:
        style = TypeStyle(line_height_unit="FONT_SIZE_%", line_height_percent_font_size=175)
        assert converters.line_height_value(style) == "1.75"

    def test_line_height_intrinsic(self) -> None:
        assert converters.line_height_value(TypeStyle(line_height_unit="INTRINSIC_%")) == "normal"

    def test_line_height_unknown_unit(self) -> None:
        with pytest.raises(TokenConversionError):
            converters.line_height_value(TypeStyle(line_height_unit="AUTO"))

    def test_letter_spacing(self) -> None:
        assert converters.letter_spacing_value(TypeStyle(font_size=16, letter_spacing=-0.4)) == "-0.025em"
        assert converters.letter_spacing_value(TypeStyle(font_size=16, letter_spacing=0)) == "0"
        assert converters.letter_spacing_value(TypeStyle(font_size=12, letter_spacing=1)) == "0.083em"

    def test_letter_spacing_without_font_size(self) -> None:
        with pytest.raises(TokenConversionError):
            converters.letter_spacing_ratio(TypeStyle(font_size=0, letter_spacing=1))

    def test_text_properties(self) -> None:
        style = TypeStyle(italic=True, font_weight=600, text_decoration="STRIKETHROUGH", text_case="TITLE")

        assert converters.font_style_value(style) == "italic"
        assert converters.font_weight_value(style) == "600"
        assert converters.text_decoration_value(style) == "line-through"
        assert converters.text_transform_value(style) == "capitalize"
        assert converters.text_transform_value(TypeStyle()) == "none"
