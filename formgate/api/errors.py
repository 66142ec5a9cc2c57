"""Falcon error handlers for the API layer.

Authentication and processing failures are resolved by the webhook handler
and rendered by the resource. The handler here covers everything else: an
unexpected exception is logged with its traceback and answered with a JSON
500, so one failing request never takes down the worker.

Usage
-----
Register on the Falcon app::

    app.add_error_handler(Exception, handle_unexpected_error)

Falcon picks the most specific registered handler, so its built-in
``HTTPError`` handling (404s, 405s) is unaffected.

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from formgate.logging import get_logger, log_exception

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["INTERNAL_ERROR_MESSAGE", "handle_unexpected_error"]

INTERNAL_ERROR_MESSAGE = "Internal server error"

logger = get_logger(__name__)


async def handle_unexpected_error(
    req: Request,
    resp: Response,
    ex: Exception,
    _params: dict[str, typ.Any],
) -> None:
    """Map an unhandled exception to an HTTP 500 JSON response.

    Parameters
    ----------
    req
        Falcon request; its method and path are logged.
    resp
        Falcon response whose status and media are set.
    ex
        The unhandled exception.
    _params
        URI template parameters (unused).

    """
    log_exception(logger, f"Unhandled error serving {req.method} {req.path}", ex)
    resp.status = HTTPStatus.INTERNAL_SERVER_ERROR
    resp.media = {"error": INTERNAL_ERROR_MESSAGE}
