"""
Design token extractors

One function per token category. Each one finds the token nodes on a page
canvas by naming convention, measures them and converts the measurements
into tokens. Scale-like categories are sorted by their measurement so the
output order is stable.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar

from figma2theme.core.exception.error_codes import ErrorCode
from figma2theme.core.exception.exceptions import (
    InvalidTokenPathError,
    Problem,
    StructuralError,
    TokenConversionError,
)
from figma2theme.figma.nodes import CanvasNode, LayoutGrid, StyleRegistry, TypeStyle
from figma2theme.tokens import converters
from figma2theme.tokens.matchers import (
    BREAKPOINT_PREFIX,
    FONT_PREFIX,
    FONT_SIZE_PREFIX,
    LETTER_SPACING_PREFIX,
    LINE_HEIGHT_PREFIX,
    RADII_PREFIX,
    SHADOW_PREFIX,
    SIZE_PREFIX,
    SPACE_PREFIX,
    PrefixMatcher,
    is_ignored_style,
    split_path,
    split_responsive_name,
    styles_of_type,
)
from figma2theme.tokens.node_walker import (
    find_components,
    find_frames,
    find_rectangles,
    find_texts,
)
from figma2theme.tokens.types import (
    GridStyleTokens,
    Token,
    TokenMap,
    TokenTree,
    TokenType,
    colour,
    dimension,
    validate_path,
)

logger = logging.getLogger(__name__)

# Breakpoint name used for styles that don't end with one
BASE_BREAKPOINT = "base"

REQUIRED_FONT_ROLES = ("heading", "body")

T = TypeVar("T")


def _collect(
    items: Iterable[T],
    matcher: PrefixMatcher,
    name: Callable[[T], str],
    measure: Callable[[T], Any],
) -> List[Tuple[str, Any]]:
    """Get the (key, measurement) pairs of every item whose name uses the prefix"""
    matched = []
    for item in items:
        key = matcher.match(name(item))
        if key is None:
            continue
        try:
            matched.append((key, measure(item)))
        except TokenConversionError as e:
            logger.warning(f'Skipping "{name(item)}": {e.message}')
    return matched


def _to_token_map(
    category: str,
    pairs: Iterable[Tuple[str, Any]],
    make_token: Callable[[Any], Token],
) -> TokenMap:
    """Build a category's tokens, the last of any duplicate keys wins"""
    tokens: TokenMap = {}
    for key, measurement in pairs:
        if key in tokens:
            logger.warning(
                f'Found more than one {category} token named "{key}", the last one found will be used'
            )
        tokens[key] = make_token(measurement)
    return tokens


def _sorted(pairs: List[Tuple[str, Any]]) -> List[Tuple[str, Any]]:
    return sorted(pairs, key=lambda pair: pair[1])


def get_breakpoints(canvas: CanvasNode) -> TokenMap:
    """Breakpoints from the widths of rectangles named "breakpoint-*" (em)"""
    pairs = _collect(
        find_rectangles(canvas),
        PrefixMatcher(BREAKPOINT_PREFIX),
        lambda r: r.name,
        lambda r: r.bounding_box.width,
    )
    return _to_token_map(
        "breakpoint", _sorted(pairs), lambda width: dimension(converters.px_to_em(width))
    )


def get_radii(canvas: CanvasNode) -> TokenMap:
    """Border radii from the corner radius of rectangles named "radii-*" (rem)"""
    pairs = _collect(
        find_rectangles(canvas),
        PrefixMatcher(RADII_PREFIX),
        lambda r: r.name,
        lambda r: r.corner_radius,
    )
    return _to_token_map(
        "radius", _sorted(pairs), lambda radius: dimension(converters.px_to_rem(radius))
    )


def get_sizes(canvas: CanvasNode) -> TokenMap:
    """Sizes from the widths of rectangles named "size-*" (rem)"""
    pairs = _collect(
        find_rectangles(canvas),
        PrefixMatcher(SIZE_PREFIX),
        lambda r: r.name,
        lambda r: r.bounding_box.width,
    )
    return _to_token_map(
        "size", _sorted(pairs), lambda size: dimension(converters.px_to_rem(size))
    )


def get_spacing(canvas: CanvasNode) -> TokenMap:
    """
    Spacing scale from nodes named "space-*" (rem)

    Components are measured by their height, rectangles by their width.
    """
    matcher = PrefixMatcher(SPACE_PREFIX)
    pairs = _collect(
        find_components(canvas), matcher, lambda c: c.name, lambda c: c.bounding_box.height
    )
    pairs += _collect(
        find_rectangles(canvas), matcher, lambda r: r.name, lambda r: r.bounding_box.width
    )
    return _to_token_map(
        "spacing", _sorted(pairs), lambda space: dimension(converters.px_to_rem(space))
    )


def get_font_families(canvas: CanvasNode) -> TokenMap:
    """
    Font families from text nodes named "font-*"

    Raises:
        StructuralError: the "font-heading" or "font-body" text nodes are missing
    """
    pairs = _collect(
        find_texts(canvas),
        PrefixMatcher(FONT_PREFIX),
        lambda t: t.name,
        lambda t: t.style.font_family,
    )
    fonts = _to_token_map(
        "font", pairs, lambda family: Token(TokenType.FONT_FAMILY, family)
    )

    problems = [
        Problem(
            f'{role.capitalize()} font not found in "Typography" page',
            f'- Please add a text element named "{FONT_PREFIX}{role}".',
        )
        for role in REQUIRED_FONT_ROLES
        if role not in fonts
    ]
    if problems:
        raise StructuralError(ErrorCode.MISSING_FONT_ROLES, problems)
    return fonts


def get_font_sizes(canvas: CanvasNode) -> TokenMap:
    """Font sizes from text nodes named "fontSize-*" (rem)"""
    pairs = _collect(
        find_texts(canvas),
        PrefixMatcher(FONT_SIZE_PREFIX),
        lambda t: t.name,
        lambda t: t.style.font_size,
    )
    return _to_token_map(
        "font size", _sorted(pairs), lambda size: dimension(converters.px_to_rem(size))
    )


def get_line_heights(canvas: CanvasNode) -> TokenMap:
    """Line heights from "lineHeight-*" text nodes"""
    pairs = _collect(
        find_texts(canvas),
        PrefixMatcher(LINE_HEIGHT_PREFIX),
        lambda t: t.name,
        lambda t: converters.line_height_value(t.style),
    )
    return _to_token_map(
        "line height", pairs, lambda value: Token(TokenType.STRING, value)
    )


def get_letter_spacing(canvas: CanvasNode) -> TokenMap:
    """Letter spacing from text nodes named "letterSpacing-*" (em, relative to the font size)"""
    pairs = _collect(
        find_texts(canvas),
        PrefixMatcher(LETTER_SPACING_PREFIX),
        lambda t: t.name,
        lambda t: (converters.letter_spacing_ratio(t.style), converters.letter_spacing_value(t.style)),
    )
    return _to_token_map(
        "letter spacing", _sorted(pairs), lambda measured: dimension(measured[1])
    )


def _insert(tree: TokenTree, name: str, path: List[str], token: Any) -> None:
    try:
        tree.insert(path, token)
    except InvalidTokenPathError as e:
        logger.warning(f'Skipping style "{name}": {e.message}')


def get_colours(canvas: CanvasNode, styles: StyleRegistry) -> TokenTree:
    """
    Colours from the fill styles used by rectangles

    Style names are split on "/" to build nested colour scales
    (e.g. "custom/grey/500"). Styles starting with "_" are ignored.
    """
    fill_styles = {
        style_id: name
        for style_id, name in styles_of_type(styles, "FILL").items()
        if not is_ignored_style(name)
    }

    colours = TokenTree()
    for rectangle in find_rectangles(canvas):
        style_id = rectangle.styles.get("fill")
        if style_id not in fill_styles:
            continue
        name = fill_styles[style_id]
        value = converters.solid_fill_colour(rectangle.fills)
        if value is None:
            logger.warning(f'Colour style "{name}" has no solid fill, skipping...')
            continue
        _insert(colours, name, split_path(name), colour(value))

    logger.debug(f"Found {len(list(colours.leaves()))} colours")
    return colours


def get_shadows(canvas: CanvasNode, styles: StyleRegistry) -> TokenMap:
    """Box shadows from the effect styles named "shadow-*" used by rectangles"""
    matcher = PrefixMatcher(SHADOW_PREFIX)
    shadow_styles: Dict[str, str] = {}
    for style_id, name in styles_of_type(styles, "EFFECT").items():
        key = matcher.match(name)
        if key is not None:
            shadow_styles[style_id] = key

    pairs = []
    for rectangle in find_rectangles(canvas):
        style_id = rectangle.styles.get("effect")
        if style_id not in shadow_styles:
            continue
        shadows = converters.shadows_from_effects(rectangle.effects)
        if not shadows:
            logger.warning(
                f'Shadow style "{SHADOW_PREFIX}{shadow_styles[style_id]}" has no visible shadows, skipping...'
            )
            continue
        pairs.append((shadow_styles[style_id], shadows))

    return _to_token_map("shadow", pairs, lambda value: Token(TokenType.SHADOW, value))


def flatten_responsive(values: Mapping[str, Any]) -> Any:
    """
    Collapse a breakpoint -> value mapping to a single value when every breakpoint agrees

    {"base": "1rem", "md": "1rem"} -> "1rem"
    """
    distinct = list(values.values())
    if distinct and all(v == distinct[0] for v in distinct):
        return distinct[0]
    return dict(values)


class ResponsiveStyles:
    """
    Accumulates the property values of "name/breakpoint" styles

    Each style path maps to {property: {breakpoint: value}}.
    """

    def __init__(self, category: str):
        self.category = category
        self._styles: Dict[Tuple[str, ...], Dict[str, Dict[str, Any]]] = {}

    def add(self, style_name: str, values: Mapping[str, Any]) -> None:
        path, breakpoint = split_responsive_name(style_name)
        try:
            key = validate_path(path)
        except InvalidTokenPathError as e:
            logger.warning(f'Skipping {self.category} style "{style_name}": {e.message}')
            return
        breakpoint = breakpoint or BASE_BREAKPOINT

        properties = self._styles.setdefault(key, {})
        if any(breakpoint in per_bp for per_bp in properties.values()):
            logger.warning(
                f'Found more than one {self.category} style named "{style_name}", '
                "the last one found will be used"
            )
        for prop, value in values.items():
            properties.setdefault(prop, {})[breakpoint] = value

    def flattened(self) -> Iterable[Tuple[Tuple[str, ...], Dict[str, Any]]]:
        for key, properties in self._styles.items():
            yield key, {prop: flatten_responsive(v) for prop, v in properties.items()}


def _column_grid(grids: Iterable[LayoutGrid]) -> Optional[LayoutGrid]:
    for grid in grids:
        if grid.pattern == "COLUMNS" and grid.visible:
            return grid
    return None


def get_grid_styles(canvas: CanvasNode, styles: StyleRegistry) -> TokenTree:
    """
    Grid styles from the column layout grids of frames and components

    A style named "page/md" defines the "page" grid at the "md" breakpoint.
    """
    grid_styles = styles_of_type(styles, "GRID")
    accumulated = ResponsiveStyles("grid")

    for node in find_frames(canvas) + find_components(canvas):
        style_id = node.styles.get("grid")
        if style_id not in grid_styles:
            continue
        name = grid_styles[style_id]
        grid = _column_grid(node.layout_grids)
        if grid is None:
            logger.warning(f'Grid style "{name}" has no column grid, skipping...')
            continue
        accumulated.add(
            name,
            {
                "columns": grid.count,
                "gutter": converters.px_to_rem(grid.gutter_size),
                "margin": converters.px_to_rem(grid.offset),
            },
        )

    tree = TokenTree()
    for key, values in accumulated.flattened():
        tree.insert(
            key,
            GridStyleTokens(
                columns=Token(TokenType.NUMBER, values["columns"]),
                gutter=dimension(values["gutter"]),
                margin=dimension(values["margin"]),
            ),
        )
    return tree


def text_style_values(style: TypeStyle) -> Dict[str, str]:
    """
    CSS properties of a Figma text style

    Raises:
        TokenConversionError: the line height or letter spacing can't be converted
    """
    return {
        "fontFamily": style.font_family,
        "fontSize": converters.px_to_rem(style.font_size),
        "fontStyle": converters.font_style_value(style),
        "fontWeight": converters.font_weight_value(style),
        "letterSpacing": converters.letter_spacing_value(style),
        "lineHeight": converters.line_height_value(style),
        "textDecorationLine": converters.text_decoration_value(style),
        "textTransform": converters.text_transform_value(style),
    }


def get_text_styles(canvas: CanvasNode, styles: StyleRegistry) -> TokenTree:
    """
    Typography tokens from the text styles used by text nodes

    Styles sharing a name with different breakpoint suffixes (e.g. "h1/base",
    "h1/md") are merged into one responsive style. Properties that are the
    same at every breakpoint are collapsed to a single value.
    """
    text_styles = styles_of_type(styles, "TEXT")
    accumulated = ResponsiveStyles("text")

    for text in find_texts(canvas):
        style_id = text.styles.get("text")
        if style_id not in text_styles:
            continue
        name = text_styles[style_id]
        try:
            values = text_style_values(text.style)
        except TokenConversionError as e:
            logger.warning(f'Skipping text style "{name}": {e.message}')
            continue
        accumulated.add(name, values)

    tree = TokenTree()
    for key, values in accumulated.flattened():
        tree.insert(key, Token(TokenType.TYPOGRAPHY, values))
    return tree
