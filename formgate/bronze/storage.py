"""Persistence model for the Bronze ``raw_responses_delta`` table."""

from __future__ import annotations

import datetime as dt
import typing as typ

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.schema import CreateSchema

from formgate.bronze.records import BRONZE_SCHEMA, RAW_RESPONSES_TABLE

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

_SQLITE = "sqlite"


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp for column defaults."""
    return dt.datetime.now(dt.UTC)


class Base(DeclarativeBase):
    """Declarative base for Bronze models."""


class RawResponseDelta(Base):
    """Append-only row holding one verified form-provider delivery.

    ``payload`` stores the delivered body as text, unchanged, so it can be
    re-verified against its signature or re-parsed downstream. Downstream
    consumers flip ``is_processed``; this service only inserts.
    """

    __tablename__ = RAW_RESPONSES_TABLE
    __table_args__ = (
        Index("ix_raw_responses_delta_external_event_id", "external_event_id"),
        Index("ix_raw_responses_delta_is_processed", "is_processed"),
        {"schema": BRONZE_SCHEMA},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str | None] = mapped_column(String(255), default=None)
    source_platform: Mapped[str] = mapped_column(String(32))
    external_event_id: Mapped[str] = mapped_column(String(255))
    response_token: Mapped[str] = mapped_column(String(255))
    ingestion_method: Mapped[str] = mapped_column(String(32))
    payload: Mapped[str] = mapped_column(Text())
    is_processed: Mapped[bool] = mapped_column(Boolean, default=False)
    received_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


def create_bronze_engine(database_url: str, **kwargs: typ.Any) -> AsyncEngine:
    """Create an async engine able to address the ``bronze`` schema.

    SQLite has no schemas, so on SQLite URLs the ``bronze`` qualifier is
    translated away and the table lives in the main database.
    """
    if database_url.startswith(_SQLITE):
        options = dict(kwargs.pop("execution_options", {}))
        options["schema_translate_map"] = {BRONZE_SCHEMA: None}
        kwargs["execution_options"] = options
    return create_async_engine(database_url, **kwargs)


async def init_bronze_storage(engine: AsyncEngine) -> None:
    """Create the ``bronze`` schema and tables if they are absent."""
    async with engine.begin() as conn:
        if conn.dialect.name != _SQLITE:
            await conn.execute(CreateSchema(BRONZE_SCHEMA, if_not_exists=True))
        await conn.run_sync(Base.metadata.create_all)
