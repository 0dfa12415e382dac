"""Client error taxonomy — no internal deps.

None of these derive from ``ValueError`` so that raising one inside a pydantic
validator propagates unchanged instead of being folded into a
``ValidationError``.
"""

from __future__ import annotations


class TensorZeroClientError(Exception):
    """Base class for every error raised by this package."""


class UnknownVariantError(TensorZeroClientError):
    """A strict family was asked to decode a missing or unregistered discriminator."""

    def __init__(self, family: str, discriminator: str | None) -> None:
        self.family = family
        self.discriminator = discriminator
        if discriminator is None:
            message = f"{family} payload has no discriminator"
        else:
            message = f"unknown {family} type: {discriminator!r}"
        super().__init__(message)


class MalformedContentError(TensorZeroClientError):
    """A known variant is missing a mandatory field or carries an invalid one."""

    def __init__(self, family: str, discriminator: str | None, reason: str) -> None:
        self.family = family
        self.discriminator = discriminator
        self.reason = reason
        super().__init__(f"malformed {family} ({discriminator or 'untyped'}): {reason}")


class TensorZeroError(TensorZeroClientError):
    """The gateway answered, but reported a failure."""

    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        super().__init__(f"TensorZeroError (status code {status_code}): {text}")

    @property
    def is_retryable(self) -> bool:
        """Server-side or rate-limit failure. Informational only; nothing here retries."""
        return self.status_code >= 500 or self.status_code == 429


class TensorZeroInternalError(TensorZeroClientError):
    """Client-side invariant violation. Always a bug."""


class TransportError(TensorZeroClientError):
    """The request could not be completed or its response could not be read."""
