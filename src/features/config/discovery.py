"""Project root discovery by upward search for the marker file."""

import os

import structlog
from pydantic import BaseModel, ConfigDict, Field

from src.features.config.constants import (
    COMPONENT_CONFIG,
    OP_FIND_ROOT,
    PROJECT_CONFIG_FILE,
)
from src.features.config.errors import MarkerNotFoundError, WorkingDirUnavailableError


logger = structlog.get_logger()


class ProjectRoot(BaseModel):
    """A discovered project root and the marker file found inside it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_dir: str = Field(min_length=1, description="Directory holding the marker")
    config_path: str = Field(min_length=1, description="Full path to the marker")


def find_project_root(start_dir: str | os.PathLike[str]) -> ProjectRoot:
    """Walk up from ``start_dir`` until a directory holds ``project.toml``.

    The start directory itself is checked first and the first hit wins. The
    search stops when the parent of the current directory is the directory
    itself, i.e. the filesystem root has been checked.

    Args:
        start_dir: Directory to start from. Relative paths are taken against
            the working directory.

    Returns:
        ProjectRoot with the matching directory and marker path.

    Raises:
        MarkerNotFoundError: If no ancestor holds the marker.
        WorkingDirUnavailableError: If a relative start directory is given
            and the working directory cannot be read.
    """
    try:
        start = os.path.abspath(os.fspath(start_dir))
    except OSError as e:
        msg = f"get working directory: {e}"
        raise WorkingDirUnavailableError(msg, OP_FIND_ROOT) from e

    current = start
    checked = 0

    while True:
        candidate = os.path.join(current, PROJECT_CONFIG_FILE)
        checked += 1
        if os.path.exists(candidate):
            logger.debug(
                "project_root_found",
                component=COMPONENT_CONFIG,
                root_dir=current,
                config_path=candidate,
                dirs_checked=checked,
            )
            return ProjectRoot(root_dir=current, config_path=candidate)

        parent = os.path.dirname(current)
        if parent == current:
            raise MarkerNotFoundError(start, PROJECT_CONFIG_FILE, OP_FIND_ROOT)

        current = parent
