"""Unit tests for the Supabase data API sink."""

from __future__ import annotations

import json
import secrets
import typing as typ

import httpx
import pytest

from formgate.bronze.errors import SinkError
from formgate.bronze.postgrest import PostgrestClient, PostgrestResponseSink
from formgate.bronze.records import IngestionRecord
from formgate.config import SUPABASE_KEY_ENV_VAR, SUPABASE_URL_ENV_VAR, SupabaseConfig
from tests.helpers.deliveries import SCENARIO_BODY

_KEY = secrets.token_hex(8)
_CONFIG = SupabaseConfig(url="https://proj.supabase.test", service_role_key=_KEY)


def _record(payload: bytes = SCENARIO_BODY) -> IngestionRecord:
    return IngestionRecord(
        external_event_id="ev1",
        response_token="tok1",
        user_id="u1",
        payload=payload,
    )


def _make_sink(
    responses: list[httpx.Response],
    *,
    config_source: typ.Callable[[], SupabaseConfig] = lambda: _CONFIG,
) -> tuple[PostgrestResponseSink, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return responses[len(requests) - 1]

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    sink = PostgrestResponseSink(config_source, http_client=http_client)
    return sink, requests


class TestPostgrestResponseSink:
    """Tests for PostgrestResponseSink.insert."""

    @pytest.mark.asyncio
    async def test_posts_row_to_bronze_table(self) -> None:
        """The row is POSTed to raw_responses_delta under the bronze profile."""
        sink, requests = _make_sink([httpx.Response(201)])

        await sink.insert(_record())

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == (
            "https://proj.supabase.test/rest/v1/raw_responses_delta"
        )
        assert request.headers["Content-Profile"] == "bronze"
        assert request.headers["apikey"] == _KEY
        assert request.headers["Authorization"] == f"Bearer {_KEY}"
        assert request.headers["Prefer"] == "return=minimal"
        row = json.loads(request.content)
        assert row["external_event_id"] == "ev1"
        assert row["response_token"] == "tok1"
        assert row["user_id"] == "u1"
        assert row["source_platform"] == "typeform"
        assert row["ingestion_method"] == "webhook"
        assert row["is_processed"] is False

    @pytest.mark.asyncio
    async def test_payload_bytes_are_spliced_verbatim(self) -> None:
        """The payload member of the request is the delivered body itself."""
        payload = b'{ "event_id" : "ev1",\n  "form_response": {"token": "tok1"} }'
        sink, requests = _make_sink([httpx.Response(201)])

        await sink.insert(_record(payload))

        assert b'"payload":' + payload in requests[0].content

    @pytest.mark.asyncio
    async def test_http_error_carries_postgrest_message(self) -> None:
        """PostgREST error bodies surface their message."""
        error = httpx.Response(
            404,
            json={
                "code": "42P01",
                "message": 'relation "bronze.raw_responses_delta" does not exist',
            },
        )
        sink, _ = _make_sink([error])

        with pytest.raises(SinkError) as excinfo:
            await sink.insert(_record())

        assert excinfo.value.status_code == 404
        assert str(excinfo.value) == (
            'Data API HTTP 404: relation "bronze.raw_responses_delta" does not exist'
        )

    @pytest.mark.asyncio
    async def test_http_error_with_plain_body(self) -> None:
        """Non-JSON error bodies are used as the detail."""
        sink, _ = _make_sink([httpx.Response(502, text="Bad Gateway")])
        with pytest.raises(SinkError, match="Data API HTTP 502: Bad Gateway"):
            await sink.insert(_record())

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        """Connection failures become SinkError."""

        def _boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_boom))
        sink = PostgrestResponseSink(lambda: _CONFIG, http_client=http_client)

        with pytest.raises(SinkError, match="request failed"):
            await sink.insert(_record())

    @pytest.mark.asyncio
    async def test_unencodable_key_is_a_sink_error(self) -> None:
        """A key that cannot be sent as a header fails as a SinkError."""
        config = SupabaseConfig(url="https://x.test", service_role_key="k\u00e9y")
        sink, requests = _make_sink(
            [httpx.Response(201)], config_source=lambda: config
        )

        with pytest.raises(SinkError, match="request failed"):
            await sink.insert(_record())
        assert requests == []

    @pytest.mark.asyncio
    async def test_missing_configuration(self) -> None:
        """Absent SUPABASE_* variables fail the insert, not the process."""
        sink = PostgrestResponseSink(SupabaseConfig.from_env)
        with pytest.raises(SinkError, match="not configured"):
            await sink.insert(_record())
        await sink.aclose()

    @pytest.mark.asyncio
    async def test_config_read_per_insert(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Credentials are resolved for each insert."""
        monkeypatch.setenv(SUPABASE_URL_ENV_VAR, "https://one.supabase.test")
        monkeypatch.setenv(SUPABASE_KEY_ENV_VAR, "key-one")
        sink, requests = _make_sink(
            [httpx.Response(201), httpx.Response(201)],
            config_source=SupabaseConfig.from_env,
        )

        await sink.insert(_record())
        monkeypatch.setenv(SUPABASE_URL_ENV_VAR, "https://two.supabase.test")
        monkeypatch.setenv(SUPABASE_KEY_ENV_VAR, "key-two")
        await sink.insert(_record())

        assert [r.url.host for r in requests] == [
            "one.supabase.test",
            "two.supabase.test",
        ]
        assert [r.headers["apikey"] for r in requests] == ["key-one", "key-two"]

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self) -> None:
        """Only owned clients are closed."""
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda _: httpx.Response(201))
        )
        sink = PostgrestResponseSink(lambda: _CONFIG, http_client=http_client)
        await sink.aclose()
        assert http_client.is_closed is False
        await http_client.aclose()


class TestPostgrestClient:
    """Tests for schema and table scoping."""

    def test_table_url_under_schema(self) -> None:
        """Tables resolve beneath the REST root of the project."""
        client = PostgrestClient(_CONFIG, httpx.AsyncClient())
        table = client.schema("bronze").table("raw_responses_delta")
        assert table.url == "https://proj.supabase.test/rest/v1/raw_responses_delta"
        assert table.name == "raw_responses_delta"

    def test_table_requires_schema_scope(self) -> None:
        """Tables are only reachable through a schema scope."""
        client = PostgrestClient(_CONFIG, httpx.AsyncClient())
        assert not hasattr(client, "table")
