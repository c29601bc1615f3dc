from enum import Enum


class ErrorCode(str, Enum):
    # Configuration
    MISSING_API_KEY = "Missing Figma API key"
    MISSING_FILE_URL = "Missing Figma file URL"
    INVALID_FILE_URL = "Invalid Figma file URL"
    INVALID_RC_FILE = "Invalid config file"

    # Figma REST API
    FIGMA_AUTH_FAILED = "Figma rejected the API key"
    FIGMA_FILE_NOT_FOUND = "Figma file not found"
    FIGMA_REQUEST_FAILED = "Figma request failed"
    ICON_RENDER_FAILED = "Figma icon render failed"
    ICON_DOWNLOAD_FAILED = "Icon download failed"

    # Document structure
    MISSING_PAGES = "Required pages missing"
    MISSING_FONT_ROLES = "Required fonts missing"

    # Token conversion
    UNSUPPORTED_VALUE = "Unsupported style value"
    INVALID_TOKEN_PATH = "Invalid token name"
    INVALID_TOKEN_VALUE = "Invalid token value"
    SVG_OPTIMIZATION_FAILED = "SVG optimization failed"

    # Export
    EXPORT_FAILED = "Theme export failed"
