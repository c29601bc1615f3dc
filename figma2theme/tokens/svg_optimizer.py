"""
SVG Optimizer Module
Minifies the SVG icons rendered by Figma and reads their dimensions
"""

import logging
import re
from typing import Optional, Tuple

from scour import scour as scour_lib

from figma2theme.core.exception.exceptions import SvgOptimizationError
from figma2theme.tokens.types import OptimizedSvg, SvgInfo

logger = logging.getLogger(__name__)

SVG_TAG_PATTERN = re.compile(r"<svg\b[^>]*>", re.IGNORECASE | re.DOTALL)
ATTRIBUTE_PATTERN = r'(?<![\w-]){name}\s*=\s*["\']([^"\']*)["\']'
VIEWBOX_PATTERN = re.compile(r'\bviewBox\s*=\s*["\']([^"\']*)["\']')


def _attribute(tag: str, name: str) -> Optional[str]:
    match = re.search(ATTRIBUTE_PATTERN.format(name=name), tag)
    return match.group(1).strip() if match else None


def _strip_px(value: str) -> str:
    return value[:-2] if value.endswith("px") else value


class SvgOptimizer:
    """Wraps scour with the options used for icon markup"""

    def __init__(self):
        self.options = scour_lib.sanitizeOptions()
        self.options.strip_comments = True
        self.options.strip_xml_prolog = True
        self.options.remove_metadata = True
        self.options.remove_descriptive_elements = True
        self.options.shorten_ids = True
        self.options.indent_type = "none"
        self.options.newlines = False
        # Figma always exports a viewBox, keep width/height as they are
        self.options.enable_viewboxing = False

    def optimize(self, svg: str) -> OptimizedSvg:
        """
        Optimize an SVG rendered by Figma

        Args:
            svg: SVG markup from the Figma image export

        Returns:
            The optimized markup with its width and height

        Raises:
            SvgOptimizationError: the markup is not SVG or scour failed to parse it
        """
        if not svg or not SVG_TAG_PATTERN.search(svg):
            raise SvgOptimizationError("The image is not an SVG document")

        try:
            data = scour_lib.scourString(svg, self.options).strip()
        except Exception as e:
            raise SvgOptimizationError(f"Failed to optimize the SVG: {e}") from e

        width, height = self.read_dimensions(data)
        return OptimizedSvg(data=data, info=SvgInfo(width=width, height=height))

    @staticmethod
    def read_dimensions(svg: str) -> Tuple[str, str]:
        """Read the width and height of the root <svg> element, falling back to its viewBox"""
        tag_match = SVG_TAG_PATTERN.search(svg)
        if not tag_match:
            raise SvgOptimizationError("The image is not an SVG document")
        tag = tag_match.group(0)

        width = _attribute(tag, "width")
        height = _attribute(tag, "height")
        if width and height:
            return _strip_px(width), _strip_px(height)

        view_box = VIEWBOX_PATTERN.search(tag)
        if view_box:
            parts = re.split(r"[\s,]+", view_box.group(1).strip())
            if len(parts) == 4:
                logger.debug(f"Reading the SVG dimensions from its viewBox: {view_box.group(1)}")
                return parts[2], parts[3]

        raise SvgOptimizationError("The SVG has no width, height or viewBox")
