"""Supabase data API (PostgREST) adapter for the Bronze sink.

Supabase exposes non-default schemas through PostgREST profile headers: a
write into ``bronze`` must carry ``Content-Profile: bronze``. The small
client here makes that scoping a step that has to happen before a table can
be named (``client.schema("bronze").table("raw_responses_delta")``), so a
request can never be built against a table with the profile missing.

Credentials are resolved through a config source on every insert, which
lets the service role key rotate without a restart.

Usage
-----
Insert through the sink::

    sink = PostgrestResponseSink()  # reads SUPABASE_* on each insert
    await sink.insert(record)
    await sink.aclose()

"""

from __future__ import annotations

import collections.abc as cabc

import httpx

from formgate.bronze.errors import SinkError
from formgate.bronze.records import (
    BRONZE_SCHEMA,
    RAW_RESPONSES_TABLE,
    IngestionRecord,
    encode_row,
)
from formgate.config import SupabaseConfig
from formgate.errors import ConfigError

_HTTP_ERROR_STATUS_THRESHOLD = 400

SupabaseConfigSource = cabc.Callable[[], SupabaseConfig]


def _error_detail(response: httpx.Response) -> str | None:
    """Pull PostgREST's ``message`` field out of an error response."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class PostgrestTable:
    """A table inside a profile-scoped PostgREST schema."""

    def __init__(self, scope: PostgrestSchema, name: str) -> None:
        """Bind the table ``name`` to an already scoped schema."""
        self._scope = scope
        self.name = name

    @property
    def url(self) -> str:
        """Endpoint for this table."""
        return f"{self._scope.client.config.rest_url}/{self.name}"

    async def insert(self, body: bytes) -> None:
        """POST a pre-encoded JSON row and raise on any failure."""
        client = self._scope.client
        headers = {
            **client.auth_headers(),
            "Content-Profile": self._scope.name,
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }
        try:
            response = await client.http.post(
                self.url,
                content=body,
                headers=headers,
                timeout=client.config.timeout_s,
            )
        except (httpx.HTTPError, UnicodeEncodeError) as exc:
            # Header values httpx cannot encode fail before anything is sent.
            raise SinkError.transport_error(exc) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise SinkError.http_error(response.status_code, _error_detail(response))


class PostgrestSchema:
    """PostgREST schema selected via profile headers."""

    def __init__(self, client: PostgrestClient, name: str) -> None:
        """Scope ``client`` to schema ``name``."""
        self.client = client
        self.name = name

    def table(self, name: str) -> PostgrestTable:
        """Return the table ``name`` within this schema."""
        return PostgrestTable(self, name)


class PostgrestClient:
    """Minimal PostgREST client; only inserts are supported."""

    def __init__(self, config: SupabaseConfig, http: httpx.AsyncClient) -> None:
        """Bind credentials to a shared HTTP client."""
        self.config = config
        self.http = http

    def auth_headers(self) -> dict[str, str]:
        """Headers authenticating as the service role."""
        key = self.config.service_role_key
        return {"apikey": key, "Authorization": f"Bearer {key}"}

    def schema(self, name: str) -> PostgrestSchema:
        """Scope subsequent table operations to schema ``name``."""
        return PostgrestSchema(self, name)


class PostgrestResponseSink:
    """:class:`~formgate.bronze.sink.ResponseSink` over the Supabase data API."""

    def __init__(
        self,
        config_source: SupabaseConfigSource = SupabaseConfig.from_env,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Store the config source and an optional shared HTTP client.

        Parameters
        ----------
        config_source
            Callable returning Supabase credentials; called on every insert.
        http_client
            Client to reuse. When omitted, one is created on first use and
            closed by :meth:`aclose`.

        """
        self._config_source = config_source
        self._owns_client = http_client is None
        self._client = http_client

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def insert(self, record: IngestionRecord) -> None:
        """Insert ``record`` into ``bronze.raw_responses_delta``."""
        try:
            config = self._config_source()
        except ConfigError as exc:
            raise SinkError.not_configured(exc) from exc

        client = PostgrestClient(config, self._http())
        # The schema scope has to exist before the table is named.
        table = client.schema(BRONZE_SCHEMA).table(RAW_RESPONSES_TABLE)
        await table.insert(encode_row(record))


__all__ = [
    "PostgrestClient",
    "PostgrestResponseSink",
    "PostgrestSchema",
    "PostgrestTable",
    "SupabaseConfigSource",
]
