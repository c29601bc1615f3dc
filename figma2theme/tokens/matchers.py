"""
Naming convention matchers
Recognise token nodes and styles by the prefixes and paths in their names
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from figma2theme.figma.nodes import CanvasNode, DocumentNode, StyleRegistry, canvases

logger = logging.getLogger(__name__)

BREAKPOINT_PREFIX = "breakpoint-"
RADII_PREFIX = "radii-"
SHADOW_PREFIX = "shadow-"
SIZE_PREFIX = "size-"
SPACE_PREFIX = "space-"
FONT_PREFIX = "font-"
FONT_SIZE_PREFIX = "fontSize-"
LINE_HEIGHT_PREFIX = "lineHeight-"
LETTER_SPACING_PREFIX = "letterSpacing-"
ICON_PREFIX = "icon/custom/"

PATH_DELIMITER = "/"
IGNORE_MARKER = "_"

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def normalise_page_name(name: str) -> str:
    """Lowercase a page name and drop everything that isn't a letter or digit (e.g. emojis)"""
    return _NON_ALPHANUMERIC.sub("", name.lower())


def find_page(document: DocumentNode, names: Iterable[str]) -> Optional[CanvasNode]:
    """
    Find a page canvas by name

    Args:
        document: Figma document
        names: Accepted names for the page (e.g. "Icons" and "Icons&Media")

    Returns:
        The first canvas whose normalised name equals one of the normalised names
    """
    wanted = {normalise_page_name(n) for n in names}
    for canvas in canvases(document):
        if normalise_page_name(canvas.name) in wanted:
            return canvas
    return None


class PrefixMatcher:
    """Match names starting with a literal, case-sensitive prefix"""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def matches(self, name: str) -> bool:
        return name.startswith(self.prefix)

    def match(self, name: str) -> Optional[str]:
        """
        Strip the prefix from a name

        Returns:
            The remaining key, or None if the name doesn't use the prefix or
            nothing is left after it
        """
        if not self.matches(name):
            return None
        key = name[len(self.prefix):].strip()
        if not key:
            logger.warning(
                f'Found "{name}" without a name after the "{self.prefix}" prefix, skipping...'
            )
            return None
        return key


def split_path(name: str) -> List[str]:
    return name.split(PATH_DELIMITER)


def split_responsive_name(name: str) -> Tuple[List[str], Optional[str]]:
    """
    Split a style name into its path and breakpoint

    "body" -> (["body"], None)
    "h1/md" -> (["h1"], "md")
    "heading/h1/md" -> (["heading", "h1"], "md")
    """
    segments = split_path(name)
    if len(segments) < 2:
        return segments, None
    return segments[:-1], segments[-1].strip()


def is_ignored_style(name: str) -> bool:
    return name.startswith(IGNORE_MARKER)


def styles_of_type(registry: StyleRegistry, style_type: str) -> Dict[str, str]:
    """Get the style ID -> name mapping of every style of one type (FILL, EFFECT, TEXT, GRID)"""
    return {
        style_id: meta.name
        for style_id, meta in registry.items()
        if meta.style_type == style_type
    }
