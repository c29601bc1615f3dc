"""
CSS variables exporter
Writes every design token as a custom property on :root
"""

from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from figma2theme.export.templating import ExportContext, PathLike, kebab_case, render_template
from figma2theme.tokens.types import TokenDictionary

OUTPUT_FILE_NAME = "tokens.css"

# Categories that can't be expressed as a single CSS value
SKIPPED_CATEGORIES = ("icons", "textStyles")


def shadows_to_css(shadows: Iterable[Mapping[str, Any]]) -> str:
    """Convert a list of shadow values to a CSS box-shadow value"""
    css = []
    for shadow in shadows:
        inset = "inset " if shadow["inset"] else ""
        css.append(
            f"{inset}{shadow['offsetX']} {shadow['offsetY']} {shadow['blur']} "
            f"{shadow['spread']} {shadow['color']}"
        )
    return ", ".join(css)


def variable_name(path: Iterable[str]) -> str:
    return "-".join(kebab_case(segment) for segment in path)


def _flatten(value: Any, path: Tuple[str, ...], variables: List[Tuple[str, str]]) -> None:
    if isinstance(value, list):
        variables.append((variable_name(path), shadows_to_css(value)))
    elif isinstance(value, Mapping):
        for key, child in value.items():
            _flatten(child, path + (str(key),), variables)
    else:
        variables.append((variable_name(path), str(value)))


def css_variables(tokens: TokenDictionary) -> List[Tuple[str, str]]:
    """
    Get the (variable name, value) of every token

    Responsive values get one variable per breakpoint, suffixed with the
    breakpoint name (e.g. --grid-styles-page-columns-md).
    """
    variables: List[Tuple[str, str]] = []
    for category, values in tokens.to_values().items():
        if category in SKIPPED_CATEGORIES:
            continue
        _flatten(values, (category,), variables)
    return variables


def export_css(
    tokens: TokenDictionary,
    output_dir: PathLike,
    context: Optional[ExportContext] = None,
) -> Path:
    """Write the design tokens to tokens.css"""
    return render_template(
        "tokens.css.jinja2",
        Path(output_dir) / OUTPUT_FILE_NAME,
        variables=css_variables(tokens),
        context=context,
    )
