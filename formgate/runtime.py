"""formgate runtime entrypoint.

This module provides the ASGI application factory used by Granian
(``formgate.runtime:create_app``) and a ``main()`` that starts the server.

The webhook route is always wired. The sink is chosen from the
environment:

- ``FORMGATE_DATABASE_URL`` set: rows are written directly through
  SQLAlchemy. The ``bronze`` schema and table must already exist.
- otherwise: rows are written through the Supabase data API using
  ``SUPABASE_URL`` and ``SUPABASE_SERVICE_ROLE_KEY``, read on every insert.

``TYPEFORM_SECRET`` is read on every delivery.

Server settings:

- ``FORMGATE_HOST``: Bind address (default ``0.0.0.0``)
- ``FORMGATE_PORT``: Listen port (default ``8080``)
- ``FORMGATE_LOG_LEVEL``: Log level (default ``INFO``)

Run the service directly with ``python -m formgate.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from formgate.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

    from formgate.bronze.sink import ResponseSink

__all__ = ["DATABASE_URL_ENV_VAR", "build_sink", "create_app", "main"]

logger = get_logger(__name__)

DATABASE_URL_ENV_VAR = "FORMGATE_DATABASE_URL"

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
    except ValueError:
        port = None
    if port is None or not (_MIN_PORT <= port <= _MAX_PORT):
        log_error(
            logger,
            "Invalid FORMGATE_PORT value: %r (must be %d-%d)",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
        )
        raise SystemExit(1)
    return port


def build_sink() -> ResponseSink:
    """Build the Bronze sink selected by the environment."""
    database_url = os.environ.get(DATABASE_URL_ENV_VAR, "").strip()
    if database_url:
        from sqlalchemy.ext.asyncio import async_sessionmaker

        from formgate.bronze.sqlalchemy_sink import SqlAlchemyResponseSink
        from formgate.bronze.storage import create_bronze_engine

        engine = create_bronze_engine(database_url)
        return SqlAlchemyResponseSink(
            async_sessionmaker(engine, expire_on_commit=False)
        )

    from formgate.bronze.postgrest import PostgrestResponseSink

    return PostgrestResponseSink()


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application with the webhook route wired.

    Returns
    -------
    falcon.asgi.App
        Application serving ``/health``, ``/ready`` and
        ``POST /webhooks/typeform``.

    """
    from formgate.api.app import AppDependencies
    from formgate.api.app import create_app as _create_api_app
    from formgate.webhook.handler import TypeformWebhookHandler

    handler = TypeformWebhookHandler(build_sink())
    return _create_api_app(AppDependencies(webhook_handler=handler))


def main() -> None:
    """Start the formgate server using Granian.

    Reads ``FORMGATE_HOST``, ``FORMGATE_PORT``, and ``FORMGATE_LOG_LEVEL``
    from the environment and starts the ASGI server.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("FORMGATE_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("FORMGATE_PORT", "8080"))
    log_level_str = os.environ.get("FORMGATE_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid FORMGATE_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting formgate on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "formgate.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
