"""
Tailwind exporter
Writes tailwind.config.js, plus a tailwind.config.local.js for local edits
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from figma2theme.core.exception.exceptions import ExportError
from figma2theme.export.export_css import shadows_to_css
from figma2theme.export.templating import ExportContext, PathLike, render_template
from figma2theme.tokens.types import TokenDictionary, TokenTree

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "tailwind.config.js"
LOCAL_CONFIG_FILE_NAME = "tailwind.config.local.js"

BASE_BREAKPOINT_SIZE = "0px"


def style_value_at_breakpoint(breakpoint: str, value: Any) -> Any:
    """Pick the value of a (possibly responsive) style property at one breakpoint"""
    if isinstance(value, Mapping):
        return value.get(breakpoint)
    if isinstance(value, (list, tuple)):
        raise ExportError("Cannot handle array value for responsive textStyles")
    return value


def flat_text_styles(text_styles: TokenTree) -> Dict[str, Dict[str, Any]]:
    """Text style path -> properties, nested names joined with "-" (heading/h1 -> heading-h1)"""
    return {"-".join(path): token.to_value() for path, token in text_styles.leaves()}


def generate_responsive_text_styles(
    styles: Mapping[str, Mapping[str, Any]],
    breakpoints: Mapping[str, str],
) -> Dict[str, Dict[str, Dict[str, Any]]]:
    """
    Translate responsive text styles into one @media block per breakpoint

    Args:
        styles: Text style name -> properties (scalar or breakpoint -> value)
        breakpoints: Breakpoint name -> min width ("base" is added as 0px)

    Returns:
        {"@media (min-width: 30em)": {".style-body": {"fontSize": "1rem", ...}}}
    """
    all_breakpoints = {"base": BASE_BREAKPOINT_SIZE, **breakpoints}
    definitions: Dict[str, Dict[str, Dict[str, Any]]] = {}
    for breakpoint, size in all_breakpoints.items():
        media: Dict[str, Dict[str, Any]] = {}
        for style_name, style in styles.items():
            properties = {}
            for prop, value in style.items():
                at_breakpoint = style_value_at_breakpoint(breakpoint, value)
                if at_breakpoint is not None:
                    properties[prop] = at_breakpoint
            media[f".style-{style_name}"] = properties
        definitions[f"@media (min-width: {size})"] = media
    return definitions


def tokens_to_tailwind(tokens: TokenDictionary) -> Dict[str, Any]:
    values = tokens.to_values()
    typography = values["typography"]
    return {
        "content": [],
        "theme": {
            "screens": values["breakpoints"],
            "colors": {
                "transparent": "transparent",
                "current": "currentColor",
                **values["colours"],
            },
            "borderRadius": {
                "none": "0",
                "full": "9999px",
                **values["radii"],
            },
            "spacing": values["spacing"],
            "dropShadow": {
                name: shadows_to_css(shadow) for name, shadow in values["shadows"].items()
            },
            # Tailwind expects a list of font names per family
            "fontFamily": {name: [font] for name, font in typography["fonts"].items()},
            "fontSize": typography["fontSizes"],
            "lineHeight": typography["lineHeights"],
            "letterSpacing": typography["letterSpacing"],
        },
        "componentDefinitions": generate_responsive_text_styles(
            flat_text_styles(tokens.text_styles), values["breakpoints"]
        ),
    }


def export_tailwind(
    tokens: TokenDictionary,
    output_dir: PathLike,
    context: ExportContext,
) -> List[Path]:
    """
    Write the Tailwind config

    tailwind.config.js is always overwritten, tailwind.config.local.js is
    only written if it doesn't exist yet.
    """
    output_dir = Path(output_dir)
    tailwind = tokens_to_tailwind(tokens)

    written = [
        render_template(
            "tailwind.config.js.jinja2",
            output_dir / CONFIG_FILE_NAME,
            tailwind=tailwind,
            context=context,
        )
    ]

    local_config = output_dir / LOCAL_CONFIG_FILE_NAME
    if local_config.exists():
        logger.info(f"Keeping the existing {LOCAL_CONFIG_FILE_NAME}")
    else:
        written.append(
            render_template(
                "tailwind.config.local.js.jinja2",
                local_config,
                tailwind=tailwind,
                context=context,
            )
        )
    return written
