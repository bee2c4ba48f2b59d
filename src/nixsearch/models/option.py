"""NixOS option documents.

Example:
    >>> from nixsearch.models.option import NixOption
    >>> opt = NixOption.model_validate({
    ...     "option_name": "services.nginx.enable",
    ...     "option_type": "boolean",
    ... })
    >>> opt.name
    'services.nginx.enable'
"""

from __future__ import annotations

from pydantic import Field

from nixsearch.models.base import FlakeDocument
from nixsearch.models.fields import OptionField


class NixOption(FlakeDocument):
    """A NixOS module option."""

    name: str = Field(alias=OptionField.NAME.value)
    description: str | None = Field(default=None, alias=OptionField.DESCRIPTION.value)
    type: str | None = Field(default=None, alias=OptionField.TYPE.value)
    default: str | None = Field(default=None, alias=OptionField.DEFAULT.value)
    example: str | None = Field(default=None, alias=OptionField.EXAMPLE.value)
    source: str | None = Field(default=None, alias=OptionField.SOURCE.value)
    # Either a single flake name or a path of names; excluded from output
    flake: str | list[str] | None = Field(default=None, alias=OptionField.FLAKE.value, exclude=True)
