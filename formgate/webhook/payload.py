"""Decoding Typeform webhook bodies into ingestion records."""

from __future__ import annotations

import typing as typ

import msgspec

from formgate.bronze.records import IngestionRecord


class PayloadError(ValueError):
    """Raised when an authenticated body cannot be turned into a record."""

    @classmethod
    def invalid_json(cls, detail: str) -> PayloadError:
        """Return an error for a body that is not well-formed JSON."""
        return cls(f"Invalid JSON payload: {detail}")

    @classmethod
    def invalid_shape(cls, detail: str) -> PayloadError:
        """Return an error for JSON missing required Typeform fields."""
        return cls(f"Unexpected payload shape: {detail}")


class FormResponse(msgspec.Struct, kw_only=True):
    """The ``form_response`` object of a Typeform delivery.

    Only the members needed to index the row are declared; everything else
    stays in the verbatim payload.
    """

    token: str
    hidden: typ.Any = None


class TypeformEnvelope(msgspec.Struct, kw_only=True):
    """Top-level Typeform webhook body."""

    event_id: str
    form_response: FormResponse

    @property
    def user_id(self) -> str | None:
        """The ``user_id`` hidden field, or ``None`` when it was not sent."""
        hidden = self.form_response.hidden
        if not isinstance(hidden, dict):
            return None
        value = hidden.get("user_id")
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)


def decode_envelope(body: bytes) -> TypeformEnvelope:
    """Decode ``body`` into a :class:`TypeformEnvelope`.

    Raises
    ------
    PayloadError
        If the body is not UTF-8 JSON or lacks ``event_id`` or
        ``form_response.token``.

    """
    try:
        return msgspec.json.decode(body, type=TypeformEnvelope)
    except msgspec.ValidationError as exc:
        raise PayloadError.invalid_shape(str(exc)) from exc
    except msgspec.DecodeError as exc:
        raise PayloadError.invalid_json(str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise PayloadError.invalid_json(str(exc)) from exc


def build_record(body: bytes) -> IngestionRecord:
    """Build the Bronze record for an already verified body.

    The record keeps ``body`` itself as its payload rather than a
    re-encoding of the decoded envelope.
    """
    envelope = decode_envelope(body)
    return IngestionRecord(
        external_event_id=envelope.event_id,
        response_token=envelope.form_response.token,
        user_id=envelope.user_id,
        payload=body,
    )


__all__ = [
    "FormResponse",
    "PayloadError",
    "TypeformEnvelope",
    "build_record",
    "decode_envelope",
]
