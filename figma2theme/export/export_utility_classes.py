"""
Utility classes exporter
Writes one class per spacing token and margin property, using the CSS variables
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from figma2theme.export.export_css import variable_name
from figma2theme.export.templating import ExportContext, PathLike, render_template
from figma2theme.tokens.types import TokenDictionary

OUTPUT_FILE_NAME = "utilities.css"


@dataclass(frozen=True)
class Utility:
    name: str
    token_category: str
    css_property: str


UTILITIES = (
    Utility("margin", "spacing", "margin"),
    Utility("margin-block", "spacing", "margin-block"),
    Utility("margin-inline", "spacing", "margin-inline"),
    Utility("margin-block-start", "spacing", "margin-block-start"),
    Utility("margin-inline-end", "spacing", "margin-inline-end"),
    Utility("margin-block-end", "spacing", "margin-block-end"),
    Utility("margin-inline-start", "spacing", "margin-inline-start"),
)


@dataclass(frozen=True)
class UtilityClass:
    class_name: str
    css_property: str
    variable: str


def utility_classes(tokens: TokenDictionary) -> List[UtilityClass]:
    """e.g. .margin-block-4 { margin-block: var(--spacing-4); }"""
    categories = {"spacing": tokens.spacing}
    classes = []
    for utility in UTILITIES:
        for key in categories[utility.token_category]:
            classes.append(
                UtilityClass(
                    class_name=f"{utility.name}-{key}",
                    css_property=utility.css_property,
                    variable=variable_name((utility.token_category, key)),
                )
            )
    return classes


def export_utility_classes(
    tokens: TokenDictionary,
    output_dir: PathLike,
    context: Optional[ExportContext] = None,
) -> Path:
    """Write the spacing utility classes to utilities.css"""
    return render_template(
        "utilities.css.jinja2",
        Path(output_dir) / OUTPUT_FILE_NAME,
        classes=utility_classes(tokens),
        context=context,
    )
