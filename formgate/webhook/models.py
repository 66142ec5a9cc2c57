"""Value types passed into and out of the webhook handler."""

from __future__ import annotations

import dataclasses as dc
import enum

UNAUTHORIZED_MESSAGE = "Unauthorized"
ACCEPTED_MESSAGE = "Typeform response stored"


@dc.dataclass(frozen=True, slots=True)
class WebhookDelivery:
    """One inbound delivery as read off the wire.

    Attributes
    ----------
    body
        The complete request body, read once and never re-encoded.
    signature
        Value of the ``Typeform-Signature`` header, ``None`` when absent.

    """

    body: bytes
    signature: str | None = None


class OutcomeKind(enum.StrEnum):
    """How a delivery was resolved."""

    ACCEPTED = "accepted"
    UNAUTHORIZED = "unauthorized"
    PROCESSING_FAILED = "processing_failed"


@dc.dataclass(frozen=True, slots=True)
class WebhookOutcome:
    """Result of handling a delivery.

    Authentication failures always carry the same generic message.
    Processing failures carry the underlying error text, since the sender
    has already proven it holds the secret.
    """

    kind: OutcomeKind
    message: str
    event_id: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the delivery was stored."""
        return self.kind is OutcomeKind.ACCEPTED

    @classmethod
    def accepted(cls, event_id: str) -> WebhookOutcome:
        """Return the outcome for a stored delivery."""
        return cls(OutcomeKind.ACCEPTED, ACCEPTED_MESSAGE, event_id)

    @classmethod
    def unauthorized(cls) -> WebhookOutcome:
        """Return the outcome for any authentication failure."""
        return cls(OutcomeKind.UNAUTHORIZED, UNAUTHORIZED_MESSAGE)

    @classmethod
    def processing_failed(cls, message: str) -> WebhookOutcome:
        """Return the outcome for a malformed body or sink failure."""
        return cls(OutcomeKind.PROCESSING_FAILED, message)
