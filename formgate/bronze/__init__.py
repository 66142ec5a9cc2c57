"""Bronze layer primitives: ingestion records and the sinks that store them."""

from __future__ import annotations

from .errors import SinkError
from .postgrest import PostgrestResponseSink
from .records import (
    BRONZE_SCHEMA,
    INGESTION_METHOD,
    RAW_RESPONSES_TABLE,
    SOURCE_PLATFORM,
    IngestionRecord,
    encode_row,
)
from .sink import ResponseSink
from .sqlalchemy_sink import SqlAlchemyResponseSink
from .storage import RawResponseDelta, create_bronze_engine, init_bronze_storage

__all__ = [
    "BRONZE_SCHEMA",
    "INGESTION_METHOD",
    "RAW_RESPONSES_TABLE",
    "SOURCE_PLATFORM",
    "IngestionRecord",
    "PostgrestResponseSink",
    "RawResponseDelta",
    "ResponseSink",
    "SinkError",
    "SqlAlchemyResponseSink",
    "create_bronze_engine",
    "init_bronze_storage",
    "encode_row",
]
