"""
figma2theme CLI
Extract design tokens from a Figma file and generate theme files
"""

import functools
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from colorama import Fore, Style, init

from figma2theme import __version__
from figma2theme.core.config import FigmaConfig, resolve_figma_config
from figma2theme.core.exception.exceptions import ServiceException
from figma2theme.core.log.logging import get_logging
from figma2theme.export.export_chakra import export_chakra
from figma2theme.export.export_css import export_css
from figma2theme.export.export_json import export_json
from figma2theme.export.export_tailwind import export_tailwind
from figma2theme.export.export_utility_classes import export_utility_classes
from figma2theme.export.templating import ExportContext
from figma2theme.figma.figma_api_client import FigmaApiClient
from figma2theme.tokens.assembly import import_tokens_from_figma
from figma2theme.tokens.types import TokenDictionary

# Colour output on Windows terminals
init()

logger = get_logging()

Exporter = Callable[[TokenDictionary, Path, ExportContext], object]


def report_error(error: ServiceException) -> None:
    logger.error(f"{Fore.RED}{Style.BRIGHT}{error.message}{Style.RESET_ALL}")
    for suggestion in error.suggestions:
        logger.warning(f"{Fore.YELLOW}{suggestion}{Style.RESET_ALL}")


def error_boundary(command: Callable) -> Callable:
    """Report errors raised by a command and exit with status 1"""

    @functools.wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except ServiceException as e:
            report_error(e)
            sys.exit(1)
        except Exception as e:
            logger.error(f"{Fore.RED}Unexpected error: {e}{Style.RESET_ALL}")
            logger.debug("Traceback", exc_info=True)
            sys.exit(1)

    return wrapper


def figma_options(default_output: str) -> Callable:
    """Options shared by every generate command"""

    def decorator(command: Callable) -> Callable:
        options = [
            click.option(
                "--output", "-o", default=default_output, show_default=True,
                help="Specify the output directory",
            ),
            click.option("--api-key", help="Specify the Figma API key"),
            click.option("--file-url", help="Specify the URL of the Figma file"),
            click.option("--file-version", help="Specify the version ID of the Figma file"),
        ]
        for option in reversed(options):
            command = option(command)
        return command

    return decorator


def describe_version(api_client: FigmaApiClient, config: FigmaConfig) -> str:
    """Label of the pinned file version, used in the generated file headers"""
    if not config.version:
        return "latest"
    for version in api_client.get_versions(config.file_key):
        if version.id == config.version:
            label = version.label or version.created_at
            return f"{label}: {version.description}" if version.description else label
    return config.version


def generate(
    exporter: Exporter,
    description: str,
    output: str,
    api_key: Optional[str],
    file_url: Optional[str],
    file_version: Optional[str],
) -> None:
    config = resolve_figma_config(api_key, file_url, file_version)
    api_client = FigmaApiClient(config.api_key)

    logger.info(f"{Style.BRIGHT}Importing design tokens from the Figma file...{Style.RESET_ALL}")
    tokens = import_tokens_from_figma(
        config.api_key, config.file_key, config.version, api_client=api_client
    )
    context = ExportContext(
        tool_version=__version__,
        figma_file_key=config.file_key,
        version_description=describe_version(api_client, config),
    )

    output_dir = Path(output).resolve()
    logger.info(f'{Style.BRIGHT}Exporting {description} to "{output}"...{Style.RESET_ALL}')
    exporter(tokens, output_dir, context)
    logger.info(f"{Fore.GREEN}Done!{Style.RESET_ALL}")


@click.group()
@click.version_option(__version__, prog_name="figma2theme")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs")
def cli(verbose: bool) -> None:
    """Extract design tokens from a Figma file and use them to generate a theme"""
    if verbose:
        get_logging("DEBUG")


@cli.command("generate-chakra")
@figma_options("./theme")
@error_boundary
def generate_chakra(output, api_key, file_url, file_version) -> None:
    """Output a Chakra UI theme"""
    generate(export_chakra, "Chakra UI theme", output, api_key, file_url, file_version)


@cli.command("generate-json")
@figma_options("./")
@error_boundary
def generate_json(output, api_key, file_url, file_version) -> None:
    """Output a JSON file"""
    generate(
        lambda tokens, output_dir, context: export_json(tokens, output_dir),
        "JSON tokens",
        output,
        api_key,
        file_url,
        file_version,
    )


@cli.command("generate-css")
@figma_options("./")
@error_boundary
def generate_css(output, api_key, file_url, file_version) -> None:
    """Output a CSS file of custom properties"""
    generate(export_css, "CSS variables", output, api_key, file_url, file_version)


@cli.command("generate-utility-classes")
@figma_options("./")
@error_boundary
def generate_utility_classes(output, api_key, file_url, file_version) -> None:
    """Output a CSS file of utility classes"""
    generate(
        export_utility_classes, "utility classes", output, api_key, file_url, file_version
    )


@cli.command("generate-tailwind")
@figma_options("./")
@error_boundary
def generate_tailwind(output, api_key, file_url, file_version) -> None:
    """Output a Tailwind config"""
    generate(export_tailwind, "Tailwind config", output, api_key, file_url, file_version)


@cli.command()
@click.option("--api-key", help="Specify the Figma API key")
@click.option("--file-url", help="Specify the URL of the Figma file")
@error_boundary
def versions(api_key: Optional[str], file_url: Optional[str]) -> None:
    """List the versions of the Figma file"""
    config = resolve_figma_config(api_key, file_url)
    api_client = FigmaApiClient(config.api_key)
    for version in api_client.get_versions(config.file_key):
        label = f" {Fore.CYAN}{version.label}{Style.RESET_ALL}" if version.label else ""
        description = f" - {version.description}" if version.description else ""
        click.echo(f"{version.id}  {version.created_at}{label}{description}")


if __name__ == "__main__":
    cli()
