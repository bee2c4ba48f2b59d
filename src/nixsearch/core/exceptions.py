"""Custom exceptions.

nixsearch uses a small hierarchy of exceptions so callers can tell a bad
argument from an unresolvable channel or a failed backend query:

Example:
    >>> from nixsearch.core.exceptions import (
    ...     ChannelResolutionError,
    ...     NixSearchError,
    ...     ValidationError,
    ... )
    >>> isinstance(ValidationError("bad size"), NixSearchError)
    True
    >>> try:
    ...     raise ChannelResolutionError("no stable channel")
    ... except NixSearchError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: ChannelResolutionError
"""

from __future__ import annotations


class NixSearchError(Exception):
    """Base exception for nixsearch.

    Example:
        >>> from nixsearch.core.exceptions import NixSearchError
        >>> e = NixSearchError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class ValidationError(NixSearchError, ValueError):
    """A caller-supplied argument is out of range or unrecognized.

    Never retried. ``parameter`` names the offending argument when known.

    Example:
        >>> from nixsearch.core.exceptions import ValidationError
        >>> e = ValidationError("size must be positive", parameter="size")
        >>> e.parameter
        'size'
        >>> isinstance(e, ValueError)
        True
    """

    def __init__(self, message: str, parameter: str | None = None) -> None:
        self.parameter = parameter
        super().__init__(message)


class ChannelResolutionError(NixSearchError, RuntimeError):
    """A recognized channel keyword has no match among discovered channels.

    Example:
        >>> from nixsearch.core.exceptions import ChannelResolutionError
        >>> raise ChannelResolutionError("no beta")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ChannelResolutionError: no beta
    """


class SearchRequestError(NixSearchError):
    """The search backend reported a failed query.

    The message always starts with ``"Search request failed: "``. The
    backend's native exception, if any, is kept in ``original_exception``
    and chained as ``__cause__`` by the raiser.

    Example:
        >>> from nixsearch.core.exceptions import SearchRequestError
        >>> e = SearchRequestError("Search request failed: index missing")
        >>> e.original_exception is None
        True
    """

    def __init__(self, message: str, original_exception: BaseException | None = None) -> None:
        self.original_exception = original_exception
        super().__init__(message)
