"""ResponseSink protocol for persisting ingestion records.

This module defines the port through which the webhook handler writes
authenticated deliveries. Adapters implement it for the Supabase data API
(:mod:`formgate.bronze.postgrest`) and for direct database access through
SQLAlchemy (:mod:`formgate.bronze.sqlalchemy_sink`).

The protocol is ``runtime_checkable`` so the runtime and tests can assert
that an injected object satisfies it.

Usage
-----
>>> from formgate.bronze.sink import ResponseSink
>>> from formgate.bronze.postgrest import PostgrestResponseSink
>>> isinstance(PostgrestResponseSink(), ResponseSink)
True

"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from formgate.bronze.records import IngestionRecord


@typ.runtime_checkable
class ResponseSink(typ.Protocol):
    """Protocol for inserting one ingestion record per call.

    Implementations insert into ``bronze.raw_responses_delta`` and do not
    retry. Any failure is reported by raising
    :class:`formgate.bronze.errors.SinkError`.

    """

    async def insert(self, record: IngestionRecord) -> None:
        """Insert ``record`` into the Bronze table.

        Parameters
        ----------
        record
            The authenticated delivery to persist.

        Raises
        ------
        SinkError
            If the record could not be stored.

        """
        ...
