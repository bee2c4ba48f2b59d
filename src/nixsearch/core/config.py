"""nixsearch configuration.

Settings are loaded from init arguments, ``NIXSEARCH_`` environment
variables, a ``.env`` file and finally JSON config files
(``nixsearch.json`` in the working directory, then
``~/.config/nixsearch/config.json``).

Example:
    >>> from nixsearch.core.config import get_settings
    >>> settings = get_settings(mapping_schema_version=45)
    >>> settings.mapping_schema_version
    45
    >>> settings.max_retries
    5
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_URL = "https://search.nixos.org/backend"
USER_CONFIG_FILE = Path.home() / ".config" / "nixsearch" / "config.json"


class Settings(BaseSettings):
    """Client settings.

    Example:
        >>> from nixsearch.core.config import Settings
        >>> s = Settings(username="user", password="secret")
        >>> s.url
        'https://search.nixos.org/backend'
        >>> s.timeout
        30.0
    """

    model_config = SettingsConfigDict(
        env_prefix="NIXSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        # later files take precedence
        json_file=(USER_CONFIG_FILE, Path("nixsearch.json")),
        extra="ignore",
    )

    # Backend
    url: str = Field(default=DEFAULT_URL, description="Elasticsearch backend URL")
    username: str | None = Field(default=None, description="Basic auth username")
    password: str | None = Field(default=None, description="Basic auth password")
    mapping_schema_version: int = Field(default=44, ge=1, description="Index mapping schema version")

    # Resilience
    timeout: float = Field(default=30.0, gt=0.0, description="Per-attempt request timeout in seconds")
    max_retries: int = Field(default=5, ge=0, description="Retries after the first attempt")
    max_retry_timeout: float = Field(
        default=120.0, gt=0.0, description="Total time budget for a retry sequence in seconds"
    )

    # Query shape
    aggregation_size: int = Field(default=20, ge=1, le=10000, description="Buckets per facet")

    # Diagnostics
    enable_debug_mode: bool = Field(default=False, description="Log query bodies and responses")
    log_level: str = Field(default="WARNING", description="Logging level")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from nixsearch.core.config import get_settings
        >>> s = get_settings(timeout=5.0)
        >>> s.timeout
        5.0
    """
    return Settings(**overrides)
