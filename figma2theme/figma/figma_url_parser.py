"""
Figma URL Parser
Parse Figma file URLs to extract the file key, node ID and version
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse

logger = logging.getLogger(__name__)

# Figma file key is always after /file/ or /design/
FILE_KEY_PATTERN = re.compile(r"figma\.com/(?:file|design|proto)/([a-zA-Z0-9]+)")


@dataclass(frozen=True)
class ParsedFigmaUrl:
    file_key: Optional[str]
    node_id: Optional[str] = None
    version: Optional[str] = None


def parse_figma_url(url: str) -> ParsedFigmaUrl:
    """
    Parse a Figma file URL

    Args:
        url: Figma file URL (e.g. https://www.figma.com/file/abc123/Design-System)

    Returns:
        ParsedFigmaUrl, with file_key None if the URL is not a Figma file URL
    """
    url = unquote(url.strip())

    match = FILE_KEY_PATTERN.search(url)
    file_key = match.group(1) if match else None

    parsed = urlparse(url)
    query_str = parsed.query.replace("\\", "")
    logger.debug(f"Query string: {query_str}")
    qs = parse_qs(query_str)

    node_id = None
    if "node-id" in qs:
        # Convert node-id format from "795-156" to "795:156"
        node_id = qs["node-id"][0].replace("-", ":")
    elif parsed.fragment:
        frag = parse_qs(parsed.fragment)
        if "node-id" in frag:
            node_id = frag["node-id"][0].replace("-", ":")

    version = qs["version-id"][0] if "version-id" in qs else None

    return ParsedFigmaUrl(file_key=file_key, node_id=node_id, version=version)
