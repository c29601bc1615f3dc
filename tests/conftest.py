import pytest

from figma2theme.figma.nodes import Color, Effect, FigmaFile, TypeStyle
from figma2theme.tokens.assembly import extract_tokens
from figma2theme.tokens.types import OptimizedSvg, SvgInfo, Token, TokenDictionary
from tests.factories import (
    create_canvas,
    create_colour,
    create_component,
    create_figma_file,
    create_file_styles,
    create_grid_style,
    create_rectangle,
    create_shadow,
    create_text,
    create_text_style,
    solid,
)

ARROW_SVG = (
    '<svg width="24" height="24" viewBox="0 0 24 24" fill="none" xmlns="http://www.w3.org/2000/svg">'
    '<path d="M12 16l-6-6h12z" fill="#1A1A1A"/></svg>'
)


@pytest.fixture
def arrow_icon() -> Token:
    return Token(None, OptimizedSvg(data=ARROW_SVG, info=SvgInfo(width="24", height="24")))


@pytest.fixture
def design_file() -> FigmaFile:
    """Figma file with every token page filled in"""
    registry, styled_nodes = create_file_styles(
        create_colour("black", solid(0, 0, 0)),
        create_colour("custom/grey/500", solid(0.369, 0.345, 0.345)),
        create_shadow(
            "shadow-md",
            [Effect(type="DROP_SHADOW", color=Color(0, 0, 0, 0.25), offset_y=4, radius=8)],
        ),
        create_grid_style("page/base", count=4, gutter_size=16, offset=16),
        create_grid_style("page/md", count=12, gutter_size=16, offset=32),
        create_text_style("body", TypeStyle(font_family="Helvetica", font_size=16)),
        create_text_style(
            "heading/h1/base",
            TypeStyle(font_family="Georgia", font_size=32, font_weight=700),
        ),
        create_text_style(
            "heading/h1/md",
            TypeStyle(font_family="Georgia", font_size=48, font_weight=700),
        ),
    )
    colours, shadows, grids, texts = (
        styled_nodes[:2],
        styled_nodes[2:3],
        styled_nodes[3:5],
        styled_nodes[5:],
    )

    pages = [
        create_canvas(
            "📐 Breakpoints",
            [create_rectangle("breakpoint-md", width=640), create_rectangle("breakpoint-sm", width=480)],
        ),
        create_canvas("Colours", colours),
        create_canvas("Grids", grids),
        create_canvas("Icons", [create_component("icon/custom/down-arrow")]),
        create_canvas("Radii", [create_rectangle("radii-sm", corner_radius=2)]),
        create_canvas("Shadows", shadows),
        create_canvas("Sizes", [create_rectangle("size-lg", width=320)]),
        create_canvas(
            "Spacing",
            [create_component("space-1", height=4), create_rectangle("space-2", width=8)],
        ),
        create_canvas(
            "Typography",
            [
                create_text("font-heading", TypeStyle(font_family="Georgia")),
                create_text("font-body", TypeStyle(font_family="Helvetica")),
                create_text("fontSize-md", TypeStyle(font_size=16)),
                create_text(
                    "lineHeight-tight",
                    TypeStyle(line_height_unit="FONT_SIZE_%", line_height_percent_font_size=125),
                ),
                create_text("letterSpacing-wide", TypeStyle(font_size=16, letter_spacing=0.4)),
                *texts,
            ],
        ),
    ]
    return create_figma_file(pages, registry)


@pytest.fixture
def tokens(design_file, arrow_icon) -> TokenDictionary:
    return extract_tokens(design_file, lambda canvas: {"down-arrow": arrow_icon})
