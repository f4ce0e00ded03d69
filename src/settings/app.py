"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.features.config.constants import PROJECT_TOML_ENV


class AppSettings(BaseSettings):
    """Environment configuration consumed by the config loader."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=True, populate_by_name=True
    )

    project_toml: str | None = Field(default=None, validation_alias=PROJECT_TOML_ENV)

    @property
    def config_url(self) -> str | None:
        """Return the configured URL, treating blank values as unset."""
        if self.project_toml is None:
            return None
        url = self.project_toml.strip()
        return url or None


def get_settings() -> AppSettings:
    """Get a settings instance read from the current environment."""
    return AppSettings()
