"""SQLAlchemy adapter for the Bronze sink."""

from __future__ import annotations

import typing as typ

from sqlalchemy.exc import SQLAlchemyError

from formgate.bronze.errors import SinkError
from formgate.bronze.storage import RawResponseDelta

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from formgate.bronze.records import IngestionRecord


class SqlAlchemyResponseSink:
    """Append-only writer for ``bronze.raw_responses_delta``.

    Each insert runs in its own session and transaction. Duplicate
    ``external_event_id`` values are stored as separate rows.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Store the session factory used for inserts."""
        self._session_factory = session_factory

    async def insert(self, record: IngestionRecord) -> None:
        """Insert ``record``, wrapping driver failures in :class:`SinkError`."""
        async with self._session_factory() as session:
            session.add(
                RawResponseDelta(
                    user_id=record.user_id,
                    source_platform=record.source_platform,
                    external_event_id=record.external_event_id,
                    response_token=record.response_token,
                    ingestion_method=record.ingestion_method,
                    payload=record.payload_text,
                    is_processed=record.is_processed,
                )
            )
            try:
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise SinkError.database_error(exc) from exc
