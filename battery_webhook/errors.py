"""
Error taxonomy and delivery outcome for webhook sends.

Every send returns an Outcome. A failed Outcome carries exactly one
WebhookError whose kind tells the caller what went wrong:

- SYSTEM: the HTTP exchange did not complete (bad URL, encoding, network)
- SERVICE: the exchange completed but the remote reported an error
- DECODE: a service error body did not match the service's error schema
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Kinds of delivery failure."""

    SYSTEM = "system"
    SERVICE = "service"
    DECODE = "decode"


class WebhookError(Exception):
    """Base class for every delivery failure."""

    kind: ErrorKind


class WebhookSystemError(WebhookError):
    """The request could not be built, sent, or answered."""

    kind = ErrorKind.SYSTEM

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


class WebhookServiceError(WebhookError):
    """The remote service answered with a JSON object describing an error."""

    kind = ErrorKind.SERVICE

    def __init__(self, body: str, raw: Optional[bytes] = None, status: Optional[int] = None):
        """
        Initialize a service error.

        Args:
            body: Response body as text
            raw: Response body exactly as received
            status: HTTP status of the response, kept for diagnostics only
        """
        super().__init__(body)
        self.body = body
        self.raw = raw if raw is not None else body.encode("utf-8")
        self.status = status


class WebhookDecodeError(WebhookError):
    """A service error body could not be decoded into the service's schema."""

    kind = ErrorKind.DECODE

    def __init__(self, body: str, reason: str):
        super().__init__(f"could not decode service error ({reason}): {body}")
        self.body = body
        self.reason = reason


@dataclass(frozen=True)
class Outcome:
    """Result of a single delivery attempt."""

    error: Optional[WebhookError] = None

    @classmethod
    def success(cls) -> "Outcome":
        """Outcome of a delivered and accepted payload."""
        return cls()

    @classmethod
    def failure(cls, error: WebhookError) -> "Outcome":
        """Outcome of a failed delivery carrying its error."""
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """True when the payload was delivered and accepted."""
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Kind of the carried error, None on success."""
        return self.error.kind if self.error is not None else None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error
