"""Ingestion records bound for the Bronze ``raw_responses_delta`` table."""

from __future__ import annotations

import dataclasses as dc

import msgspec

BRONZE_SCHEMA = "bronze"
RAW_RESPONSES_TABLE = "raw_responses_delta"

SOURCE_PLATFORM = "typeform"
INGESTION_METHOD = "webhook"


@dc.dataclass(frozen=True, slots=True)
class IngestionRecord:
    """One authenticated delivery, ready to be inserted.

    ``payload`` holds the request body exactly as it was received and
    verified. Sinks must store these bytes rather than a re-encoded copy so
    the row can be re-verified or re-parsed later.
    """

    external_event_id: str
    response_token: str
    payload: bytes
    user_id: str | None = None
    source_platform: str = SOURCE_PLATFORM
    ingestion_method: str = INGESTION_METHOD
    is_processed: bool = False

    @property
    def payload_text(self) -> str:
        """The verbatim payload decoded as UTF-8."""
        return self.payload.decode("utf-8")


class _RawResponseRow(msgspec.Struct, kw_only=True):
    """Wire shape of a ``raw_responses_delta`` row."""

    user_id: str | None
    source_platform: str
    external_event_id: str
    response_token: str
    ingestion_method: str
    payload: msgspec.Raw
    is_processed: bool


def encode_row(record: IngestionRecord) -> bytes:
    """Encode ``record`` as a JSON row object.

    The payload is embedded as raw JSON, so the ``payload`` member of the
    output is byte-for-byte the delivered body.
    """
    row = _RawResponseRow(
        user_id=record.user_id,
        source_platform=record.source_platform,
        external_event_id=record.external_event_id,
        response_token=record.response_token,
        ingestion_method=record.ingestion_method,
        payload=msgspec.Raw(record.payload),
        is_processed=record.is_processed,
    )
    return msgspec.json.encode(row)


__all__ = [
    "BRONZE_SCHEMA",
    "INGESTION_METHOD",
    "RAW_RESPONSES_TABLE",
    "SOURCE_PLATFORM",
    "IngestionRecord",
    "encode_row",
]
