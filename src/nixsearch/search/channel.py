"""NixOS channel value type.

A channel is the suffix of a backend index alias, e.g. ``nixos-unstable``,
``nixos-24.11`` or ``group-manual`` (flakes). Users name channels with a
keyword (``unstable``, ``stable``, ``beta``, ``flakes``) which is resolved
against the channels discovered on the backend.

Example:
    >>> from nixsearch.search.channel import NixChannel
    >>> discovered = [NixChannel.from_value(v) for v in ("nixos-24.05", "nixos-24.11")]
    >>> NixChannel.parse("stable", discovered).value
    'nixos-24.11'
    >>> str(NixChannel.UNSTABLE)
    'nixos-unstable'
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar

from nixsearch.core.exceptions import ChannelResolutionError, ValidationError

UNSTABLE_VALUE = "nixos-unstable"
FLAKES_VALUE = "group-manual"

KEYWORDS = ("unstable", "stable", "beta", "flakes")

_STABLE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*-\d+\.\d+$")
_BETA_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*-\d+\.\d+-beta$")


@dataclass(frozen=True)
class NixChannel:
    """A NixOS release channel.

    Equality and hashing compare the raw value exactly (case-sensitive).

    Example:
        >>> from nixsearch.search.channel import NixChannel
        >>> NixChannel.from_value("nixos-24.11").is_stable
        True
        >>> NixChannel.from_value("nixos-25.05-beta").is_beta
        True
        >>> NixChannel.FLAKES.is_flakes
        True
    """

    value: str

    UNSTABLE: ClassVar[NixChannel]
    FLAKES: ClassVar[NixChannel]

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Channel value must be a non-empty string", parameter="value")

    @classmethod
    def from_value(cls, value: str) -> NixChannel:
        """Create a channel from a raw alias suffix such as ``nixos-24.11``.

        Raises:
            ValidationError: If ``value`` is empty or whitespace.
        """
        return cls(value)

    @classmethod
    def parse(
        cls,
        name: str,
        available_channels: Sequence[NixChannel] | None = None,
    ) -> NixChannel:
        """Resolve a channel keyword against discovered channels.

        ``stable`` and ``beta`` pick the greatest matching value by plain
        string comparison. This assumes release numbers share a digit width
        (``24.05`` < ``24.11``), which holds for NixOS releases.

        Args:
            name: One of ``unstable``, ``stable``, ``beta``, ``flakes``
                (case-insensitive).
            available_channels: Channels discovered on the backend.

        Raises:
            ValidationError: If ``name`` is not a known keyword.
            ChannelResolutionError: If no discovered channel matches.
        """
        keyword = (name or "").strip().lower()
        if keyword not in KEYWORDS:
            raise ValidationError(
                f"Invalid channel '{name}'. Valid values: {', '.join(KEYWORDS)}",
                parameter="channel",
            )

        if not available_channels:
            raise ChannelResolutionError(
                f"Cannot resolve '{keyword}' channel without available channels. "
                "Discover channels first."
            )

        predicate = _PREDICATES[keyword]
        matches = [c for c in available_channels if predicate(c)]
        if not matches:
            raise ChannelResolutionError(f"No {keyword} channel found in available channels.")

        if keyword in ("stable", "beta"):
            return max(matches, key=lambda c: c.value)
        return matches[0]

    @property
    def is_unstable(self) -> bool:
        """Whether this is the rolling ``nixos-unstable`` channel."""
        return self.value == UNSTABLE_VALUE

    @property
    def is_flakes(self) -> bool:
        """Whether this is the flakes group."""
        return self.value == FLAKES_VALUE

    @property
    def is_stable(self) -> bool:
        """Whether this is a numbered release such as ``nixos-24.11``."""
        return _STABLE_PATTERN.match(self.value) is not None

    @property
    def is_beta(self) -> bool:
        """Whether this is a release preview such as ``nixos-25.05-beta``."""
        return _BETA_PATTERN.match(self.value) is not None

    def __str__(self) -> str:
        return self.value


NixChannel.UNSTABLE = NixChannel(UNSTABLE_VALUE)
NixChannel.FLAKES = NixChannel(FLAKES_VALUE)

_PREDICATES: dict[str, Callable[[NixChannel], bool]] = {
    "unstable": lambda c: c.is_unstable,
    "stable": lambda c: c.is_stable,
    "beta": lambda c: c.is_beta,
    "flakes": lambda c: c.is_flakes,
}
