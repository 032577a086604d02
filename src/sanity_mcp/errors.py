"""Error taxonomy for identifier resolution, action building and store access."""

from __future__ import annotations


class SanityMcpError(Exception):
    """Base class for every error raised by this package."""


class InvalidIdentifier(SanityMcpError):
    """A document or release identifier string is malformed."""


class InvalidOperation(SanityMcpError):
    """The request is semantically impossible, e.g. versioning a version."""


class ValidationError(SanityMcpError):
    """Required fields are missing or contradict each other."""


class DateParseError(SanityMcpError):
    """A date string could not be resolved to a concrete timestamp."""


class NotFound(SanityMcpError):
    """A referenced document or release does not exist in the store."""


class ActionRejected(SanityMcpError):
    """The store declined a transaction of actions."""

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


class TransportError(SanityMcpError):
    """The store could not be reached or answered with an unusable response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
