"""Configuration location hints and the sources they resolve to."""

import hashlib
from dataclasses import dataclass
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from src.features.config.constants import SOURCE_KIND_FILE, SOURCE_KIND_URL


T = TypeVar("T")


class ExplicitPath(BaseModel):
    """Load from a file path, absolute or relative to the working directory."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["path"] = "path"
    path: str


class Discovery(BaseModel):
    """Search upward from ``start_dir`` for the project marker file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["discovery"] = "discovery"
    start_dir: str


class RemoteURL(BaseModel):
    """Fetch over HTTP.

    When ``url`` is None the URL is taken from the PROJECT_TOML setting.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["url"] = "url"
    url: str | None = None


ConfigLocation = Annotated[
    ExplicitPath | Discovery | RemoteURL,
    Field(discriminator="kind"),
]


class ResolvedSource(BaseModel):
    """Where a payload came from and the raw bytes read from it.

    Produced once per load call and never cached.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["file", "url"]
    origin: Annotated[
        str, Field(min_length=1, description="Absolute path or redacted URL")
    ]
    payload: bytes = Field(default=b"", description="Raw configuration bytes")
    sha256: str = Field(description="Hex SHA-256 of the payload")
    project_root: str | None = Field(
        default=None, description="Discovered root, for discovery loads"
    )

    @classmethod
    def from_file(
        cls, path: str, payload: bytes, project_root: str | None = None
    ) -> "ResolvedSource":
        """Build a source for a payload read from disk."""
        return cls(
            kind=SOURCE_KIND_FILE,
            origin=path,
            payload=payload,
            sha256=compute_checksum(payload),
            project_root=project_root,
        )

    @classmethod
    def from_url(cls, url: str, payload: bytes) -> "ResolvedSource":
        """Build a source for a payload fetched over HTTP."""
        return cls(
            kind=SOURCE_KIND_URL,
            origin=url,
            payload=payload,
            sha256=compute_checksum(payload),
        )

    @property
    def size(self) -> int:
        """Get the payload size in bytes."""
        return len(self.payload)


@dataclass(frozen=True)
class LoadedConfig(Generic[T]):
    """A decoded configuration together with its resolved source.

    Attributes:
        value: The decoded configuration.
        source: Where the payload came from.
    """

    value: T
    source: ResolvedSource


def compute_checksum(payload: bytes) -> str:
    """Compute SHA-256 checksum of a payload."""
    return hashlib.sha256(payload).hexdigest()
