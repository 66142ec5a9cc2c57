"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from formgate.bronze import create_bronze_engine, init_bronze_storage
from formgate.config import (
    SECRET_ENV_VAR,
    SUPABASE_KEY_ENV_VAR,
    SUPABASE_URL_ENV_VAR,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host credentials out of every test."""
    for variable in (
        SECRET_ENV_VAR,
        SUPABASE_URL_ENV_VAR,
        SUPABASE_KEY_ENV_VAR,
        "FORMGATE_DATABASE_URL",
    ):
        monkeypatch.delenv(variable, raising=False)


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path,
) -> typ.AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Yield a session factory bound to a fresh SQLite Bronze store."""
    engine = create_bronze_engine(f"sqlite+aiosqlite:///{tmp_path / 'bronze.db'}")
    try:
        await init_bronze_storage(engine)
        yield async_sessionmaker(engine, expire_on_commit=False)
    finally:
        await engine.dispose()
