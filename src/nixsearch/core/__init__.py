"""Core configuration, logging and exceptions."""

from nixsearch.core.config import Settings, get_settings
from nixsearch.core.exceptions import (
    ChannelResolutionError,
    NixSearchError,
    SearchRequestError,
    ValidationError,
)
from nixsearch.core.logging import configure_logging

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Exceptions
    "NixSearchError",
    "ValidationError",
    "ChannelResolutionError",
    "SearchRequestError",
]
