__version__ = "1.0.0"

from figma2theme.tokens.assembly import import_tokens_from_figma  # noqa: E402
from figma2theme.tokens.types import TokenDictionary  # noqa: E402

__all__ = ["__version__", "import_tokens_from_figma", "TokenDictionary"]
