import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from figma2theme.core.exception.error_codes import ErrorCode
from figma2theme.core.exception.exceptions import ConfigurationError
from figma2theme.figma.figma_url_parser import parse_figma_url


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Figma credentials (CLI arguments override these)
    FIGMA_API_KEY: str | None = None
    FIGMA_FILE_URL: str | None = None

    # Figma REST API
    FIGMA_API_BASE_URL: str = "https://api.figma.com/v1"
    FIGMA_API_TIMEOUT: int = 30
    FIGMA_DOWNLOAD_TIMEOUT: int = 30
    FIGMA_WORKER_COUNT: int = 4

    # Logging
    LOG_LEVEL: str = "INFO"
    APP_NAME: str = "figma2theme"

    RC_FILE_NAME: str = ".figma2themerc"


settings = Settings()


def get_setting() -> Settings:
    return settings


@dataclass(frozen=True)
class FigmaConfig:
    api_key: str
    file_key: str
    version: Optional[str] = None


def _read_rc_file(path: Path) -> dict:
    """Read the `apiKey` and `fileUrl` options from the rc file, if it exists."""
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            ErrorCode.INVALID_RC_FILE,
            f"Unable to read the config file at {path}: {e}",
            suggestions=[f"- Make sure {path.name} contains valid JSON."],
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            ErrorCode.INVALID_RC_FILE,
            f"The config file at {path} must contain a JSON object.",
        )
    return data


def resolve_figma_config(
    api_key: Optional[str] = None,
    file_url: Optional[str] = None,
    version: Optional[str] = None,
    config: Optional[Settings] = None,
    cwd: Optional[Path] = None,
) -> FigmaConfig:
    """
    Resolve the Figma credentials

    Priority: CLI arguments > environment variables (.env) > rc file

    Raises:
        ConfigurationError: the API key or file URL is missing or malformed
    """
    config = config or get_setting()
    rc_path = Path(cwd or os.getcwd()) / config.RC_FILE_NAME
    rc_values: Optional[dict] = None

    def rc() -> dict:
        nonlocal rc_values
        if rc_values is None:
            rc_values = _read_rc_file(rc_path)
        return rc_values

    resolved_key = api_key or config.FIGMA_API_KEY or rc().get("apiKey") or ""
    if not resolved_key:
        raise ConfigurationError(
            ErrorCode.MISSING_API_KEY,
            "Please provide a value for the API key.",
            suggestions=[
                '- An API key can be created in the "Personal Access Tokens" section of the Figma settings.',
                "- Provide the value through the CLI arguments (--api-key), the environment variables "
                f"(FIGMA_API_KEY) or the {config.RC_FILE_NAME} config file (apiKey).",
            ],
        )

    resolved_url = file_url or config.FIGMA_FILE_URL or rc().get("fileUrl") or ""
    if not resolved_url:
        raise ConfigurationError(
            ErrorCode.MISSING_FILE_URL,
            "Please provide a value for the Figma file URL.",
            suggestions=[
                '- The URL of a Figma file can be copied by pressing "Share" and then "Copy link".',
                "- Provide the value through the CLI arguments (--file-url), the environment variables "
                f"(FIGMA_FILE_URL) or the {config.RC_FILE_NAME} config file (fileUrl).",
            ],
        )

    parsed = parse_figma_url(resolved_url)
    if not parsed.file_key:
        raise ConfigurationError(
            ErrorCode.INVALID_FILE_URL,
            "Your Figma file URL seems to be invalid.",
            suggestions=[
                f"- The URL we found was: {resolved_url}",
                '- The URL of a Figma file can be copied by pressing "Share" and then "Copy link".',
            ],
        )

    return FigmaConfig(
        api_key=resolved_key,
        file_key=parsed.file_key,
        version=version or parsed.version,
    )
