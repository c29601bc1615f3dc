"""
Icon extraction
Renders the custom icon components as SVG and optimizes them
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from figma2theme.core.exception.exceptions import SvgOptimizationError
from figma2theme.figma.figma_api_client import FigmaApiClient
from figma2theme.figma.nodes import CanvasNode
from figma2theme.tokens.matchers import ICON_PREFIX
from figma2theme.tokens.node_walker import find_components
from figma2theme.tokens.svg_optimizer import SvgOptimizer
from figma2theme.tokens.types import Token, TokenMap

logger = logging.getLogger(__name__)


def find_icon_components(canvas: CanvasNode) -> List[Tuple[str, str]]:
    """
    Get the (name, node ID) of every component named "icon/custom/*"

    Components without a name after the prefix are skipped with a warning.
    """
    icons = []
    for component in find_components(canvas):
        if not component.name.startswith(ICON_PREFIX):
            continue
        name = component.name[len(ICON_PREFIX):].strip()
        if not name:
            logger.warning(
                "Found a custom icon with an invalid name, skipping...\n"
                f'- Please find any components in the Figma file named "{ICON_PREFIX}" and give '
                f'them a proper name (e.g. "{ICON_PREFIX}close-button")'
            )
            continue
        icons.append((name, component.id))
    return icons


def get_icons(
    api_client: FigmaApiClient,
    file_key: str,
    canvas: CanvasNode,
    optimizer: Optional[SvgOptimizer] = None,
) -> TokenMap:
    """
    Extract the custom icons from the icons page

    All the icons are rendered in a single request, then the SVG files are
    downloaded concurrently and optimized one by one.

    Args:
        api_client: Figma API client
        file_key: Figma file key
        canvas: The icons page
        optimizer: SVG optimizer (a default one is created if not given)

    Returns:
        Icon name -> icon token

    Raises:
        FigmaApiError: rendering or downloading the icons failed
    """
    icons = find_icon_components(canvas)
    if not icons:
        return {}

    optimizer = optimizer or SvgOptimizer()
    node_ids = [node_id for _, node_id in icons]
    logger.info(f"Rendering {len(node_ids)} icons...")
    image_urls = api_client.get_images(file_key, node_ids, format="svg", scale=1)

    urls: Dict[str, str] = {}
    for name, node_id in icons:
        url = image_urls.get(node_id)
        if not url:
            logger.warning(f'Figma did not render the icon "{name}", skipping...')
            continue
        urls[node_id] = url

    svgs = asyncio.run(api_client.download_svgs(urls))

    tokens: TokenMap = {}
    for name, node_id in icons:
        if node_id not in svgs:
            continue
        try:
            optimized = optimizer.optimize(svgs[node_id])
        except SvgOptimizationError as e:
            logger.warning(f'Skipping the icon "{name}": {e.message}')
            continue
        if name in tokens:
            logger.warning(
                f'Found more than one icon named "{name}", the last one found will be used'
            )
        tokens[name] = Token(None, optimized)

    logger.debug(f"Extracted {len(tokens)} icons")
    return tokens
