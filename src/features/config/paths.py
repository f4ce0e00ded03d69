"""Path cleaning and traversal checks for config file locations."""

import os

from src.features.config.constants import OP_RESOLVE_PATH
from src.features.config.errors import PathTraversalError, WorkingDirUnavailableError


def resolve_path(path: str | os.PathLike[str]) -> str:
    """Clean a config path and reject relative paths that escape the cwd.

    Cleaning is purely lexical: ``.`` and ``..`` segments, repeated
    separators and trailing separators are removed without consulting the
    filesystem, so symlinks are not followed.

    Args:
        path: Absolute or working-directory-relative path. An empty string
            means the working directory itself.

    Returns:
        Absolute, canonical path.

    Raises:
        PathTraversalError: If a relative path resolves outside the working
            directory.
        WorkingDirUnavailableError: If the working directory cannot be read.
    """
    raw = os.fspath(path) or os.curdir

    if os.path.isabs(raw):
        return _clean(raw)

    try:
        working_dir = os.getcwd()
    except OSError as e:
        msg = f"get working directory: {e}"
        raise WorkingDirUnavailableError(msg, OP_RESOLVE_PATH) from e

    cleaned = _clean(os.path.join(working_dir, raw))
    relative = os.path.relpath(cleaned, working_dir)

    if _is_upward(relative):
        raise PathTraversalError(raw, OP_RESOLVE_PATH)

    return cleaned


def _is_upward(relative: str) -> bool:
    """Check whether a relative path starts with a parent-directory segment."""
    return relative == os.pardir or relative.startswith(os.pardir + os.sep)


def _clean(path: str) -> str:
    """Normalize ``path`` lexically, folding leading slashes into one."""
    cleaned = os.path.normpath(path)
    # POSIX normpath keeps exactly two leading slashes
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned
