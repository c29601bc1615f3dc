import json
from pathlib import Path

from figma2theme.export.templating import PathLike, write_file
from figma2theme.tokens.types import TokenDictionary

OUTPUT_FILE_NAME = "tokens.json"


def export_json(tokens: TokenDictionary, output_dir: PathLike) -> Path:
    """Write the design tokens to tokens.json"""
    contents = json.dumps(tokens.to_dict(), indent=2, ensure_ascii=False)
    return write_file(Path(output_dir) / OUTPUT_FILE_NAME, contents + "\n")
