"""Configuration loading from paths, project discovery and URLs.

Loader entry points are imported from ``src.features.config.loader``; this
package stays importable by the fetch layer, which raises its errors.
"""

from src.features.config.constants import PROJECT_CONFIG_FILE, PROJECT_TOML_ENV
from src.features.config.decoder import decode
from src.features.config.discovery import ProjectRoot, find_project_root
from src.features.config.errors import (
    ConfigError,
    ConfigErrorClass,
    ConfigIOError,
    ConfigParseError,
    MarkerNotFoundError,
    PathTraversalError,
    RequestError,
    SourceUnsetError,
    StatusError,
    TransportError,
    WorkingDirUnavailableError,
)
from src.features.config.location import (
    ConfigLocation,
    Discovery,
    ExplicitPath,
    LoadedConfig,
    RemoteURL,
    ResolvedSource,
)
from src.features.config.paths import resolve_path


__all__ = [
    # Building blocks
    "decode",
    "find_project_root",
    "resolve_path",
    # Models
    "ConfigLocation",
    "Discovery",
    "ExplicitPath",
    "LoadedConfig",
    "ProjectRoot",
    "RemoteURL",
    "ResolvedSource",
    # Errors
    "ConfigError",
    "ConfigErrorClass",
    "ConfigIOError",
    "ConfigParseError",
    "MarkerNotFoundError",
    "PathTraversalError",
    "RequestError",
    "SourceUnsetError",
    "StatusError",
    "TransportError",
    "WorkingDirUnavailableError",
    # Constants
    "PROJECT_CONFIG_FILE",
    "PROJECT_TOML_ENV",
]
