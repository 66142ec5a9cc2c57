"""Falcon resource for inbound Typeform webhooks.

``POST /webhooks/typeform`` reads the body once as raw bytes, hands it to
:class:`~formgate.webhook.handler.TypeformWebhookHandler` together with the
``Typeform-Signature`` header, and renders the handler's outcome.

Usage
-----
Register the resource on the Falcon app::

    app.add_route("/webhooks/typeform", TypeformWebhookResource(handler))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from formgate.signature import SIGNATURE_HEADER
from formgate.webhook.models import OutcomeKind, WebhookDelivery, WebhookOutcome

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from formgate.webhook.handler import TypeformWebhookHandler

__all__ = ["TypeformWebhookResource", "render_outcome"]

_STATUS_BY_KIND: dict[OutcomeKind, HTTPStatus] = {
    OutcomeKind.ACCEPTED: HTTPStatus.OK,
    OutcomeKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    OutcomeKind.PROCESSING_FAILED: HTTPStatus.BAD_REQUEST,
}


def render_outcome(outcome: WebhookOutcome) -> tuple[HTTPStatus, dict[str, typ.Any]]:
    """Map a handler outcome to an HTTP status and JSON body.

    Parameters
    ----------
    outcome
        Result returned by the webhook handler.

    Returns
    -------
    tuple[HTTPStatus, dict[str, Any]]
        ``200 {"ok": true, "message": ...}`` on success, otherwise
        ``401`` or ``400`` with ``{"error": ...}``.

    """
    status = _STATUS_BY_KIND[outcome.kind]
    if outcome.ok:
        return status, {"ok": True, "message": outcome.message}
    return status, {"error": outcome.message}


class TypeformWebhookResource:
    """Resource accepting Typeform form-response deliveries."""

    def __init__(self, handler: TypeformWebhookHandler) -> None:
        """Configure the resource with the delivery handler."""
        self._handler = handler

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /webhooks/typeform.

        Parameters
        ----------
        req
            Falcon request carrying the signed body.
        resp
            Falcon response populated from the handler outcome.

        """
        body = await req.stream.read()
        delivery = WebhookDelivery(
            body=body,
            signature=req.get_header(SIGNATURE_HEADER),
        )
        outcome = await self._handler.handle(delivery)
        resp.status, resp.media = render_outcome(outcome)
