"""
Template rendering for the theme exporters
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateError

from figma2theme.core.exception.exceptions import ExportError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ExportContext:
    """Metadata written into the generated file headers"""

    tool_version: str
    figma_file_key: str = ""
    version_description: str = "latest"


def to_js(value: Any, indent: Optional[int] = 2) -> str:
    """Serialise a value as a JavaScript literal"""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def kebab_case(name: str) -> str:
    """fontSizes -> font-sizes, custom/grey -> custom-grey"""
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name)
    return re.sub(r"[^a-zA-Z0-9]+", "-", name).strip("-").lower()


def create_environment(template_dir: PathLike = TEMPLATE_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["to_js"] = to_js
    env.filters["kebab"] = kebab_case
    return env


_environment: Optional[Environment] = None


def get_environment() -> Environment:
    global _environment
    if _environment is None:
        _environment = create_environment()
    return _environment


def write_file(output_path: PathLike, contents: str) -> Path:
    """Write a generated file, creating its directory if needed"""
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
    except OSError as e:
        raise ExportError(
            f"Unable to write {path}: {e}",
            suggestions=["- Please check the output directory is writable."],
        ) from e
    logger.debug(f"Wrote {path}")
    return path


def render_template(template_name: str, output_path: PathLike, **data: Any) -> Path:
    """
    Render a template and write the result to the output path

    Args:
        template_name: File name of the template in the templates directory
        output_path: Where to write the rendered file
        **data: Template variables

    Returns:
        The written file path
    """
    try:
        contents = get_environment().get_template(template_name).render(**data)
    except TemplateError as e:
        raise ExportError(f"Unable to render the {template_name} template: {e}") from e
    return write_file(output_path, contents)
