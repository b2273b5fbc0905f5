from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GatewayError(Exception):
    """Base for every failure coming back from the REST backend."""

    message: str
    status_code: Optional[int] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class TransportError(GatewayError):
    """The request never completed, returned non-2xx, or had an unusable body.

    `server_message` holds the envelope message when the error body had one.
    """

    server_message: Optional[str] = None


@dataclass
class DomainError(GatewayError):
    """The backend answered with `success: false`."""


@dataclass
class FormError(Exception):
    """A submitted form is missing required input; nothing was sent."""

    message: str
    missing: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return self.message


class UnknownSectionError(ValueError):
    pass


def user_message(err: GatewayError, fallback: str) -> str:
    """Text to show the user for a failed action."""
    if isinstance(err, DomainError):
        return err.message or fallback
    if isinstance(err, TransportError):
        return err.server_message or fallback
    return fallback
