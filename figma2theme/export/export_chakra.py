"""
Chakra UI exporter
Writes a theme module (index.ts) and the icon components (icons.tsx)
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from figma2theme.core.exception.exceptions import ExportError
from figma2theme.export.export_css import shadows_to_css
from figma2theme.export.templating import ExportContext, PathLike, render_template
from figma2theme.tokens.types import OptimizedSvg, TokenDictionary

logger = logging.getLogger(__name__)

SVG_CONTENT_PATTERN = re.compile(r"<svg\b[^>]*>(.*)</svg>", re.IGNORECASE | re.DOTALL)
# Shape elements whose colours are replaced so the icon follows the text colour
SHAPE_TAG_PATTERN = re.compile(r"<(path|rect|ellipse)\b([^>]*?)(/?)>", re.DOTALL)
STROKE_PATTERN = re.compile(r'(?<![\w-])stroke\s*=\s*("[^"]*"|\'[^\']*\')')
FILL_PATTERN = re.compile(r'(?<![\w-])fill\s*=\s*("[^"]*"|\'[^\']*\')')
ATTRIBUTE_PATTERN = re.compile(r'([\w:.-]+)\s*=\s*("[^"]*"|\'[^\']*\')')
TAG_ATTRIBUTES_PATTERN = re.compile(r"<([\w:-]+)((?:\s+[\w:.-]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)\s*(/?)>")

# JSX names for attributes that don't follow the kebab-case -> camelCase rule
JSX_ATTRIBUTE_NAMES = {
    "class": "className",
    "xlink:href": "xlinkHref",
    "xml:space": "xmlSpace",
    "xmlns:xlink": "xmlnsXlink",
}

MONO_FONT_STACK = '"Courier New", Courier, monospace'


@dataclass(frozen=True)
class ChakraIcon:
    name: str
    view_box: str
    path: str


def icon_component_name(key: str) -> str:
    """down-arrow -> DownArrowIcon"""
    words = [w for w in re.split(r"[^a-zA-Z0-9]+", key) if w]
    return "".join(w[0].upper() + w[1:] for w in words) + "Icon"


def _camel_case(name: str) -> str:
    if name in JSX_ATTRIBUTE_NAMES:
        return JSX_ATTRIBUTE_NAMES[name]
    head, *rest = re.split(r"[-:]", name)
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _style_to_jsx(style: str) -> str:
    declarations = []
    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        value = value.strip().replace("'", "\\'")
        declarations.append(f"{_camel_case(prop.strip())}: '{value}'")
    return "{{ " + ", ".join(declarations) + " }}"


def _jsx_attributes(attributes: str) -> str:
    converted = []
    for name, quoted in ATTRIBUTE_PATTERN.findall(attributes):
        if name == "style":
            converted.append(f"style={_style_to_jsx(quoted[1:-1])}")
        else:
            converted.append(f"{_camel_case(name)}={quoted}")
    return "".join(f" {a}" for a in converted)


def svg_to_jsx(svg: str) -> str:
    """Convert the attribute names of SVG markup to their JSX spelling"""

    def convert(match: re.Match) -> str:
        tag, attributes, closing = match.groups()
        return f"<{tag}{_jsx_attributes(attributes)}{' /' if closing else ''}>"

    return TAG_ATTRIBUTES_PATTERN.sub(convert, svg)


def _recolour_shape(match: re.Match) -> str:
    tag, attributes, closing = match.groups()
    attributes = STROKE_PATTERN.sub('stroke="currentColor"', attributes)
    if FILL_PATTERN.search(attributes):
        attributes = FILL_PATTERN.sub('fill="currentColor"', attributes)
    else:
        # a shape without a fill defaults to black
        attributes = attributes.rstrip() + ' fill="none"'
    return f"<{tag}{attributes}{closing}>"


def process_icon(key: str, icon: OptimizedSvg) -> ChakraIcon:
    """
    Turn an optimized SVG into the parts of a Chakra icon component

    The <svg> wrapper is dropped (Chakra adds its own using the viewBox) and
    the shape colours are replaced with currentColor.
    """
    match = SVG_CONTENT_PATTERN.search(icon.data)
    if match is None:
        raise ExportError(f'The icon "{key}" is not a valid SVG')
    content = SHAPE_TAG_PATTERN.sub(_recolour_shape, match.group(1).strip())
    return ChakraIcon(
        name=icon_component_name(key),
        view_box=f"0 0 {icon.info.width} {icon.info.height}",
        path=svg_to_jsx(content),
    )


def process_icons(tokens: TokenDictionary) -> List[ChakraIcon]:
    return [process_icon(key, token.value) for key, token in tokens.icons.items()]


def tokens_to_chakra(tokens: TokenDictionary) -> Dict[str, Any]:
    """Combine the design tokens with the default Chakra UI values"""
    values = tokens.to_values()
    typography = values["typography"]
    return {
        "breakpoints": values["breakpoints"],
        "colours": values["colours"],
        "radii": {"none": "0", **values["radii"], "full": "9999px"},
        "shadows": {
            **{name: shadows_to_css(shadow) for name, shadow in values["shadows"].items()},
            "none": "none",
        },
        "spacing": {"px": "1px", "0": "0", **values["spacing"]},
        "sizes": {"full": "100%", **values["sizes"]},
        "typography": {
            "fonts": {
                **{name: f'"{font}", sans-serif' for name, font in typography["fonts"].items()},
                "mono": MONO_FONT_STACK,
            },
            "fontSizes": typography["fontSizes"],
            "lineHeights": typography["lineHeights"],
            "letterSpacing": typography["letterSpacing"],
        },
        "textStyles": values["textStyles"],
        "gridStyles": values["gridStyles"],
    }


def export_chakra(
    tokens: TokenDictionary,
    output_dir: PathLike,
    context: ExportContext,
) -> List[Path]:
    """Write the Chakra UI theme (index.ts) and icons (icons.tsx)"""
    output_dir = Path(output_dir)
    chakra = tokens_to_chakra(tokens)
    icons = process_icons(tokens)
    logger.debug(f"Generated {len(icons)} icon components")

    return [
        render_template("index.ts.jinja2", output_dir / "index.ts", chakra=chakra, context=context),
        render_template("icons.tsx.jinja2", output_dir / "icons.tsx", icons=icons, context=context),
    ]
