"""
Token assembly
Finds the token pages of a Figma file and runs every extractor over them
"""

import logging
from typing import Callable, Dict, Optional, Tuple

from figma2theme.core.exception.error_codes import ErrorCode
from figma2theme.core.exception.exceptions import Problem, StructuralError
from figma2theme.figma.figma_api_client import FigmaApiClient
from figma2theme.figma.nodes import CanvasNode, DocumentNode, FigmaFile
from figma2theme.tokens import extractors
from figma2theme.tokens.icons import get_icons
from figma2theme.tokens.matchers import find_page
from figma2theme.tokens.svg_optimizer import SvgOptimizer
from figma2theme.tokens.types import TokenDictionary, TokenMap, TypographyTokens

logger = logging.getLogger(__name__)

# Page key -> accepted page names
PAGE_NAMES: Dict[str, Tuple[str, ...]] = {
    "breakpoints": ("Breakpoints",),
    "colours": ("Colours",),
    "grids": ("Grids",),
    "icons": ("Icons", "Icons&Media"),
    "radii": ("Radii",),
    "shadows": ("Shadows",),
    "sizes": ("Sizes",),
    "spacing": ("Spacing",),
    "typography": ("Typography",),
}

OPTIONAL_PAGES = frozenset({"sizes"})

IconLoader = Callable[[CanvasNode], TokenMap]


def find_canvases(document: DocumentNode) -> Dict[str, Optional[CanvasNode]]:
    """
    Find the canvas of every token page

    Raises:
        StructuralError: one or more required pages are missing (all of them are reported)
    """
    pages: Dict[str, Optional[CanvasNode]] = {}
    problems = []
    for key, names in PAGE_NAMES.items():
        canvas = find_page(document, names)
        if canvas is None and key not in OPTIONAL_PAGES:
            problems.append(
                Problem(
                    f'Page "{names[0]}" not found in the Figma file',
                    f'- Please make sure the Figma file has a page named "{names[0]}".',
                )
            )
        elif canvas is None:
            logger.debug(f'Optional page "{names[0]}" not found, skipping')
        pages[key] = canvas

    if problems:
        raise StructuralError(ErrorCode.MISSING_PAGES, problems)
    return pages


def extract_tokens(figma_file: FigmaFile, icon_loader: IconLoader) -> TokenDictionary:
    """
    Build the token dictionary of a Figma file

    The offline extractors run first, so a structural problem is reported
    before any icon is requested.

    Args:
        figma_file: Fetched Figma file
        icon_loader: Called with the icons page to extract the icon tokens
    """
    pages = find_canvases(figma_file.document)
    styles = figma_file.styles
    typography = pages["typography"]

    fonts = extractors.get_font_families(typography)
    sizes_page = pages["sizes"]

    tokens = TokenDictionary(
        breakpoints=extractors.get_breakpoints(pages["breakpoints"]),
        colours=extractors.get_colours(pages["colours"], styles),
        grid_styles=extractors.get_grid_styles(pages["grids"], styles),
        radii=extractors.get_radii(pages["radii"]),
        shadows=extractors.get_shadows(pages["shadows"], styles),
        sizes=extractors.get_sizes(sizes_page) if sizes_page is not None else {},
        spacing=extractors.get_spacing(pages["spacing"]),
        typography=TypographyTokens(
            fonts=fonts,
            font_sizes=extractors.get_font_sizes(typography),
            line_heights=extractors.get_line_heights(typography),
            letter_spacing=extractors.get_letter_spacing(typography),
        ),
        text_styles=extractors.get_text_styles(typography, styles),
    )
    tokens.icons = icon_loader(pages["icons"])
    return tokens


def import_tokens_from_figma(
    api_key: str,
    file_key: str,
    version: Optional[str] = None,
    api_client: Optional[FigmaApiClient] = None,
    optimizer: Optional[SvgOptimizer] = None,
) -> TokenDictionary:
    """
    Fetch a Figma file and extract its design tokens

    Args:
        api_key: Figma personal access token
        file_key: Figma file key
        version: Optional version ID to pin the file to
        api_client: Client to use instead of creating one from the API key
        optimizer: SVG optimizer for the icons

    Returns:
        The complete token dictionary

    Raises:
        FigmaApiError: the file or the icons couldn't be fetched
        StructuralError: required pages or fonts are missing
    """
    api_client = api_client or FigmaApiClient(api_key)
    logger.info("Fetching the Figma file...")
    figma_file = api_client.get_file(file_key, version)
    logger.info(f'Extracting design tokens from "{figma_file.name}"...')

    return extract_tokens(
        figma_file,
        lambda canvas: get_icons(api_client, file_key, canvas, optimizer),
    )
