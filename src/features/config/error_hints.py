"""Error hints for configuration loading failures.

Provides user-friendly hints with actionable remediation steps
for each class of loading error.
"""

from typing import Final

from src.features.config.constants import PROJECT_CONFIG_FILE, PROJECT_TOML_ENV
from src.features.config.errors import (
    ConfigError,
    ConfigErrorClass,
    ConfigParseError,
)


# Mapping of error classes to user-friendly hints
ERROR_HINTS: Final[dict[ConfigErrorClass, str]] = {
    ConfigErrorClass.PATH_TRAVERSAL: (
        "Relative paths must stay inside the current directory. "
        "Use an absolute path instead."
    ),
    ConfigErrorClass.WORKING_DIR_UNAVAILABLE: (
        "The current directory may have been removed. cd into an existing directory."
    ),
    ConfigErrorClass.IO: (
        "The file does not exist or is not readable. Check the file path."
    ),
    ConfigErrorClass.PARSE: (
        "Invalid TOML or a value of the wrong type. Check quoting, brackets and "
        "field types."
    ),
    ConfigErrorClass.MARKER_NOT_FOUND: (
        f"No {PROJECT_CONFIG_FILE} in this directory or any parent. "
        "Pass --config or run from inside a project."
    ),
    ConfigErrorClass.REQUEST: (
        "URLs must start with http:// or https:// and name a host."
    ),
    ConfigErrorClass.TRANSPORT: (
        "The server could not be reached in time. Check the host and your network."
    ),
    ConfigErrorClass.STATUS: "The server did not return the config. Check the URL.",
    ConfigErrorClass.SOURCE_UNSET: (
        f"Pass a URL or set the {PROJECT_TOML_ENV} environment variable."
    ),
}

DEFAULT_HINT: Final[str] = "Check the configuration source and try again."


def get_error_hint(error_class: ConfigErrorClass) -> str:
    """Get a user-friendly hint for an error class.

    Args:
        error_class: Classification of the failure.

    Returns:
        A user-friendly hint string.
    """
    return ERROR_HINTS.get(error_class, DEFAULT_HINT)


def format_config_error(error: ConfigError, *, include_hint: bool = True) -> str:
    """Format a loading error with optional hint.

    Field-level validation errors are listed one per line.

    Args:
        error: The error to format.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    lines = [str(error)]
    if isinstance(error, ConfigParseError):
        lines.extend(f"    - {err['loc']}: {err['msg']}" for err in error.errors)
    if include_hint:
        lines.append(f"    Hint: {get_error_hint(error.error_class)}")
    return "\n".join(lines)
