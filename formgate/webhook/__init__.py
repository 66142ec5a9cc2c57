"""Typeform webhook handling: payload decoding, outcomes, and orchestration."""

from __future__ import annotations

from .handler import TypeformWebhookHandler
from .models import OutcomeKind, WebhookDelivery, WebhookOutcome
from .payload import PayloadError, TypeformEnvelope, build_record, decode_envelope

__all__ = [
    "OutcomeKind",
    "PayloadError",
    "TypeformEnvelope",
    "TypeformWebhookHandler",
    "WebhookDelivery",
    "WebhookOutcome",
    "build_record",
    "decode_envelope",
]
