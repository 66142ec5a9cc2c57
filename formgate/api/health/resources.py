"""Liveness and readiness probe resources.

Both probes are stateless: they do not touch the sink or read the signing
secret, so they stay green while the data API is unreachable. Each
delivery reports its own sink failures instead.

Usage
-----
Register probe endpoints on the Falcon app::

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]


class _StaticProbe:
    """Probe answering GET with a fixed ``{"status": ...}`` body."""

    status_text: typ.ClassVar[str]

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Respond with HTTP 200 and the probe's status text."""
        resp.media = {"status": self.status_text}
        resp.status = HTTPStatus.OK


class HealthResource(_StaticProbe):
    """Liveness probe returning ``{"status": "ok"}``."""

    status_text = "ok"


class ReadyResource(_StaticProbe):
    """Readiness probe returning ``{"status": "ready"}``."""

    status_text = "ready"
