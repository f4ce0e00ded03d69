"""Configuration loading from explicit paths, project discovery or URLs.

Each entry point resolves a raw payload from disk or the network and hands
it to the decoder:

- load_from_path: clean path -> read file -> decode
- load_from_project_root: find project.toml upward -> load_from_path
- load_from_url_or_env: explicit URL or PROJECT_TOML -> fetch -> decode
- load: any ConfigLocation variant, returning the value and its source

Errors propagate unchanged as ConfigError subclasses; nothing is retried.
"""

import os
from pathlib import Path
from typing import TypeVar

import structlog

from src.features.config.constants import (
    COMPONENT_CONFIG,
    OP_LOAD_CONFIG,
    OP_READ_FILE,
    OP_RESOLVE_URL,
    PROJECT_TOML_ENV,
)
from src.features.config.decoder import decode
from src.features.config.discovery import find_project_root
from src.features.config.errors import ConfigError, ConfigIOError, SourceUnsetError
from src.features.config.location import (
    ConfigLocation,
    Discovery,
    ExplicitPath,
    LoadedConfig,
    RemoteURL,
    ResolvedSource,
)
from src.features.config.paths import resolve_path
from src.features.fetch.client import RemoteFetcher
from src.features.fetch.redact import redact_url
from src.settings.app import AppSettings, get_settings


T = TypeVar("T")

logger = structlog.get_logger()


def load_from_path(path: str | os.PathLike[str], target: type[T]) -> T:
    """Read a TOML config file and decode it into ``target``.

    Args:
        path: Absolute path, or a path inside the working directory.
        target: Type to decode into.

    Returns:
        The decoded configuration.

    Raises:
        PathTraversalError: If a relative path escapes the working directory.
        WorkingDirUnavailableError: If the working directory is unavailable.
        ConfigIOError: If the file cannot be read.
        ConfigParseError: If the file cannot be decoded into ``target``.
    """
    source = read_file_source(path)
    return decode(source.payload, target)


def load_from_project_root(
    start_dir: str | os.PathLike[str], target: type[T]
) -> tuple[str, T]:
    """Find project.toml above ``start_dir`` and decode it into ``target``.

    Args:
        start_dir: Directory to start the upward search from.
        target: Type to decode into.

    Returns:
        Tuple of (project root directory, decoded configuration).

    Raises:
        MarkerNotFoundError: If no ancestor holds project.toml.
        ConfigError: Any load_from_path error, wrapped in the "load config"
            operation and with ``project_root`` set to the directory found.
    """
    root = find_project_root(start_dir)

    try:
        value = load_from_path(root.config_path, target)
    except ConfigError as e:
        e.add_context(OP_LOAD_CONFIG, root.root_dir)
        raise

    return root.root_dir, value


def load_from_url(
    url: str, target: type[T], fetcher: RemoteFetcher | None = None
) -> T:
    """Fetch a TOML config over HTTP and decode it into ``target``.

    Args:
        url: HTTP or HTTPS URL of the configuration document.
        target: Type to decode into.
        fetcher: Optional fetcher, defaults to a new RemoteFetcher.

    Returns:
        The decoded configuration.

    Raises:
        RequestError: If the URL is not a valid request target.
        TransportError: If the request cannot complete in time.
        StatusError: If the server does not answer 200.
        ConfigParseError: If the payload cannot be decoded.
    """
    source = fetch_url_source(url, fetcher)
    return decode(source.payload, target)


def load_from_url_or_env(
    target: type[T],
    url: str | None = None,
    settings: AppSettings | None = None,
    fetcher: RemoteFetcher | None = None,
) -> T:
    """Load a remote config from ``url`` or the PROJECT_TOML setting.

    Args:
        target: Type to decode into.
        url: Explicit URL; takes precedence over the setting.
        settings: Settings to read PROJECT_TOML from. Read from the
            environment when omitted.
        fetcher: Optional fetcher, defaults to a new RemoteFetcher.

    Returns:
        The decoded configuration.

    Raises:
        SourceUnsetError: If neither a URL nor PROJECT_TOML is set. No
            request is attempted in that case.
    """
    resolved_url = resolve_config_url(url, settings)
    return load_from_url(resolved_url, target, fetcher)


def resolve_config_url(
    url: str | None = None, settings: AppSettings | None = None
) -> str:
    """Pick the config URL from an explicit value or the settings.

    Args:
        url: Explicit URL. Empty strings count as unset.
        settings: Settings to fall back to.

    Returns:
        The URL to fetch.

    Raises:
        SourceUnsetError: If no URL is available.
    """
    if url:
        return url

    if settings is None:
        settings = get_settings()

    env_url = settings.config_url
    if env_url is None:
        raise SourceUnsetError(PROJECT_TOML_ENV, OP_RESOLVE_URL)

    return env_url


def read_file_source(
    path: str | os.PathLike[str], project_root: str | None = None
) -> ResolvedSource:
    """Clean ``path`` and read its bytes.

    Args:
        path: Path to read.
        project_root: Discovered project root, when the path came from one.

    Returns:
        ResolvedSource holding the absolute path and payload.

    Raises:
        ConfigIOError: If the file is missing or unreadable.
    """
    clean_path = resolve_path(path)

    try:
        payload = Path(clean_path).read_bytes()
    except OSError as e:
        raise ConfigIOError(clean_path, OP_READ_FILE, e.strerror or str(e)) from e

    source = ResolvedSource.from_file(clean_path, payload, project_root)
    logger.info(
        "config_file_loaded",
        component=COMPONENT_CONFIG,
        file_path=clean_path,
        file_sha256=source.sha256,
        bytes=source.size,
    )
    return source


def fetch_url_source(
    url: str, fetcher: RemoteFetcher | None = None
) -> ResolvedSource:
    """Fetch the payload at ``url``.

    Args:
        url: URL to fetch.
        fetcher: Optional fetcher, defaults to a new RemoteFetcher.

    Returns:
        ResolvedSource holding the redacted URL and payload.
    """
    if fetcher is None:
        fetcher = RemoteFetcher()

    payload = fetcher.fetch(url)
    source = ResolvedSource.from_url(redact_url(url), payload)
    logger.info(
        "config_url_loaded",
        component=COMPONENT_CONFIG,
        url=source.origin,
        file_sha256=source.sha256,
        bytes=source.size,
    )
    return source


def resolve_source(
    location: ConfigLocation,
    settings: AppSettings | None = None,
    fetcher: RemoteFetcher | None = None,
) -> ResolvedSource:
    """Turn a location hint into a payload and its origin.

    Args:
        location: One of ExplicitPath, Discovery or RemoteURL.
        settings: Settings consulted when a RemoteURL carries no URL.
        fetcher: Fetcher used for RemoteURL locations.

    Returns:
        The resolved source.
    """
    if isinstance(location, ExplicitPath):
        return read_file_source(location.path)

    if isinstance(location, Discovery):
        root = find_project_root(location.start_dir)
        try:
            return read_file_source(root.config_path, project_root=root.root_dir)
        except ConfigError as e:
            e.add_context(OP_LOAD_CONFIG, root.root_dir)
            raise

    if isinstance(location, RemoteURL):
        return fetch_url_source(resolve_config_url(location.url, settings), fetcher)

    msg = f"Unsupported config location: {type(location).__name__}"
    raise TypeError(msg)


def load(
    location: ConfigLocation,
    target: type[T],
    settings: AppSettings | None = None,
    fetcher: RemoteFetcher | None = None,
) -> LoadedConfig[T]:
    """Load a configuration from any location hint.

    Args:
        location: One of ExplicitPath, Discovery or RemoteURL.
        target: Type to decode into.
        settings: Settings consulted when a RemoteURL carries no URL.
        fetcher: Fetcher used for RemoteURL locations.

    Returns:
        LoadedConfig with the decoded value and its source.
    """
    source = resolve_source(location, settings, fetcher)

    try:
        value = decode(source.payload, target)
    except ConfigError as e:
        if source.project_root is not None:
            e.add_context(OP_LOAD_CONFIG, source.project_root)
        raise

    return LoadedConfig(value=value, source=source)
