"""Command line interface for project.toml management."""

import json
import logging
import os
import sys
from typing import NoReturn

import click

from src.features.config.constants import COMPONENT_CLI, PROJECT_TOML_ENV
from src.features.config.discovery import find_project_root
from src.features.config.error_hints import format_config_error
from src.features.config.errors import ConfigError
from src.features.config.keys import get_value, list_keys
from src.features.config.loader import load
from src.features.config.location import (
    ConfigLocation,
    Discovery,
    ExplicitPath,
    LoadedConfig,
    RemoteURL,
)
from src.features.observability.logging import configure_logging, get_logger


EXIT_ERROR = 1

CONFIGURATION_VALID = "Configuration valid"
USE_HELP_MESSAGE = "Use --help for available commands"


def select_location(
    config_path: str | None,
    url: str | None,
    from_env: bool,
) -> ConfigLocation:
    """Pick the location hint implied by the command line options.

    An explicit URL wins over the environment, which wins over an explicit
    path. Without any of them the project root is discovered from the cwd.
    """
    if url:
        return RemoteURL(url=url)
    if from_env:
        return RemoteURL()
    if config_path:
        return ExplicitPath(path=config_path)
    return Discovery(start_dir=os.curdir)


def format_value(value: object) -> str:
    """Render a config value for stdout: strings bare, everything else as JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str, ensure_ascii=False)


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(EXIT_ERROR)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version="0.1.0")
@click.option(
    "--config",
    "config_path",
    type=str,
    default=None,
    help="Path to project.toml file (auto-discovered if not specified).",
)
@click.option(
    "--url",
    type=str,
    default=None,
    help="Load the configuration from an HTTP(S) URL.",
)
@click.option(
    "--from-env",
    is_flag=True,
    help=f"Load the configuration from the URL in ${PROJECT_TOML_ENV}.",
)
@click.option(
    "--validate",
    is_flag=True,
    help="Validate configuration file syntax and structure.",
)
@click.option(
    "--get",
    "get_key",
    type=str,
    default=None,
    help="Get configuration value (dot notation: project.name).",
)
@click.option(
    "--list",
    "list_all",
    is_flag=True,
    help="List all configuration keys.",
)
@click.option(
    "--find-root",
    is_flag=True,
    help="Find and display project root directory.",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON format for logs (default: true).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def cli(  # noqa: PLR0913
    config_path: str | None,
    url: str | None,
    from_env: bool,
    validate: bool,
    get_key: str | None,
    list_all: bool,
    find_root: bool,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Configurator - project configuration management tool.

    Exit codes: 0 on success, 1 on any error (file not found, invalid
    syntax, key not found).
    """
    configure_logging(
        level=logging.DEBUG if verbose else logging.WARNING,
        json_format=json_logs,
    )
    log = get_logger(COMPONENT_CLI)

    if find_root:
        try:
            root = find_project_root(os.curdir)
        except ConfigError as e:
            _fail(format_config_error(e))
        click.echo(f"Project root: {root.root_dir}")
        click.echo(f"Config file: {root.config_path}")
        return

    location = select_location(config_path, url, from_env)
    try:
        loaded: LoadedConfig[dict[str, object]] = load(location, dict[str, object])
    except ConfigError as e:
        log.debug("config_load_failed", **e.to_dict())
        _fail(format_config_error(e))

    config = loaded.value

    if validate:
        click.echo(CONFIGURATION_VALID)
        return

    if list_all:
        for key in list_keys(config):
            click.echo(key)
        return

    if get_key:
        value = get_value(config, get_key)
        if value is None:
            _fail(f"Key not found: {get_key}")
        click.echo(format_value(value))
        return

    click.echo(f"Configuration loaded from: {loaded.source.origin}")
    click.echo(USE_HELP_MESSAGE)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
