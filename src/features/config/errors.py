"""Error types for configuration loading.

Every failure raised by the loader is a ``ConfigError`` subclass carrying the
operation that produced it, so callers can tell "could not read" from
"could not parse" from "could not fetch" without inspecting messages.
"""

from enum import Enum


ErrorDetails = dict[str, str | int | bool | None]


class ConfigErrorClass(str, Enum):
    """Classification of configuration loading errors.

    - PATH_TRAVERSAL: Relative path escapes the working directory
    - WORKING_DIR_UNAVAILABLE: Working directory cannot be determined
    - IO: Config file missing or unreadable
    - PARSE: Malformed payload or field type mismatch
    - MARKER_NOT_FOUND: Upward search reached the filesystem root
    - REQUEST: URL cannot be turned into a request
    - TRANSPORT: Request could not complete (DNS, refused, timeout)
    - STATUS: Response status other than 200
    - SOURCE_UNSET: Neither a URL nor the environment variable is set
    """

    PATH_TRAVERSAL = "PATH_TRAVERSAL"
    WORKING_DIR_UNAVAILABLE = "WORKING_DIR_UNAVAILABLE"
    IO = "IO"
    PARSE = "PARSE"
    MARKER_NOT_FOUND = "MARKER_NOT_FOUND"
    REQUEST = "REQUEST"
    TRANSPORT = "TRANSPORT"
    STATUS = "STATUS"
    SOURCE_UNSET = "SOURCE_UNSET"


class ConfigError(Exception):
    """Base exception for configuration loading errors.

    Provides structured error information for logging and CLI reporting.
    Enclosing operations added with ``add_context`` prefix the message,
    outermost first.
    """

    error_class: ConfigErrorClass

    def __init__(
        self,
        message: str,
        operation: str,
        details: ErrorDetails | None = None,
    ) -> None:
        """Initialize the configuration error.

        Args:
            message: Human-readable error message.
            operation: Name of the operation that failed.
            details: Additional structured error details.
        """
        super().__init__(f"{operation}: {message}")
        self.message = message
        self.operation = operation
        self.details = details or {}
        self.context: list[str] = []
        self.project_root: str | None = None

    def __str__(self) -> str:
        return ": ".join([*self.context, self.operation, self.message])

    def add_context(self, operation: str, project_root: str | None = None) -> None:
        """Record an enclosing operation, and the project root if known.

        Args:
            operation: Name of the enclosing operation.
            project_root: Discovered project root directory.
        """
        self.context.insert(0, operation)
        if project_root is not None:
            self.project_root = project_root

    def to_dict(self) -> dict[str, str | None | list[str] | ErrorDetails]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "operation": self.operation,
            "context": list(self.context),
            "message": self.message,
            "project_root": self.project_root,
            "details": self.details,
        }


class PathTraversalError(ConfigError):
    """Raised when a relative path resolves outside the working directory."""

    error_class = ConfigErrorClass.PATH_TRAVERSAL

    def __init__(self, path: str, operation: str) -> None:
        """Initialize the error with the offending path.

        Args:
            path: The path as supplied by the caller.
            operation: Name of the operation that failed.
        """
        super().__init__(
            f"path is outside the current directory: {path!r}",
            operation,
            details={"path": path},
        )
        self.path = path


class WorkingDirUnavailableError(ConfigError):
    """Raised when the current working directory cannot be determined."""

    error_class = ConfigErrorClass.WORKING_DIR_UNAVAILABLE


class ConfigIOError(ConfigError):
    """Raised when a config file is missing or cannot be read."""

    error_class = ConfigErrorClass.IO

    def __init__(self, path: str, operation: str, reason: str) -> None:
        """Initialize the error.

        Args:
            path: Absolute path that could not be read.
            operation: Name of the operation that failed.
            reason: Underlying OS error message.
        """
        super().__init__(
            f"{path}: {reason}",
            operation,
            details={"path": path},
        )
        self.path = path


class ConfigParseError(ConfigError):
    """Raised when a payload is not valid TOML or does not fit the target.

    Syntax errors carry the parser's line and column when known; type
    mismatches carry the offending field locations.
    """

    error_class = ConfigErrorClass.PARSE

    def __init__(
        self,
        message: str,
        operation: str,
        line: int | None = None,
        column: int | None = None,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        """Initialize the parse error.

        Args:
            message: Underlying parser diagnostic.
            operation: Name of the operation that failed.
            line: Line number where parsing failed.
            column: Column number where parsing failed.
            errors: Field-level validation errors.
        """
        details: ErrorDetails = {}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, operation, details=details)
        self.line = line
        self.column = column
        self.errors = errors or []


class MarkerNotFoundError(ConfigError):
    """Raised when no ancestor directory contains the marker file."""

    error_class = ConfigErrorClass.MARKER_NOT_FOUND

    def __init__(self, start_dir: str, marker: str, operation: str) -> None:
        """Initialize the error.

        Args:
            start_dir: Directory the search started from.
            marker: Marker filename that was searched for.
            operation: Name of the operation that failed.
        """
        super().__init__(
            f"{marker} not found",
            operation,
            details={"start_dir": start_dir, "marker": marker},
        )
        self.start_dir = start_dir
        self.marker = marker


class RequestError(ConfigError):
    """Raised when a URL cannot be turned into a valid HTTP request."""

    error_class = ConfigErrorClass.REQUEST


class TransportError(ConfigError):
    """Raised when an HTTP request cannot complete."""

    error_class = ConfigErrorClass.TRANSPORT


class StatusError(ConfigError):
    """Raised when the response status is anything other than 200."""

    error_class = ConfigErrorClass.STATUS

    def __init__(self, status_code: int, url: str, operation: str) -> None:
        """Initialize the error with the observed status.

        Args:
            status_code: HTTP status code returned by the server.
            url: Redacted URL that was requested.
            operation: Name of the operation that failed.
        """
        super().__init__(
            f"unexpected HTTP status: {status_code}",
            operation,
            details={"status_code": status_code, "url": url},
        )
        self.status_code = status_code
        self.url = url


class SourceUnsetError(ConfigError):
    """Raised when no URL is given and the environment variable is unset."""

    error_class = ConfigErrorClass.SOURCE_UNSET

    def __init__(self, env_var: str, operation: str) -> None:
        """Initialize the error.

        Args:
            env_var: Name of the environment variable that was consulted.
            operation: Name of the operation that failed.
        """
        super().__init__(
            f"no config URL given and {env_var} is not set",
            operation,
            details={"env_var": env_var},
        )
        self.env_var = env_var
