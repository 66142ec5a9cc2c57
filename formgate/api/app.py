"""Application factory for the formgate Falcon ASGI application.

``create_app()`` always registers the health probes. When a webhook
handler is supplied it also registers ``POST /webhooks/typeform``.

Usage
-----
Create a probe-only app::

    app = create_app()

Create the full app::

    from formgate.api.app import AppDependencies, create_app

    deps = AppDependencies(webhook_handler=TypeformWebhookHandler(sink))
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from formgate.api.errors import handle_unexpected_error
from formgate.api.health.resources import HealthResource, ReadyResource

if typ.TYPE_CHECKING:
    from formgate.webhook.handler import TypeformWebhookHandler

__all__ = ["TYPEFORM_WEBHOOK_ROUTE", "AppDependencies", "create_app"]

TYPEFORM_WEBHOOK_ROUTE = "/webhooks/typeform"


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Collaborators for the Falcon application.

    Attributes
    ----------
    webhook_handler
        Handler for Typeform deliveries. When ``None`` the webhook route is
        not registered.

    """

    webhook_handler: TypeformWebhookHandler | None = None


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional collaborators. Without a webhook handler only ``/health``
        and ``/ready`` are available.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    app = falcon.asgi.App()

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    if dependencies is not None and dependencies.webhook_handler is not None:
        from formgate.api.webhooks.resources import TypeformWebhookResource

        app.add_route(
            TYPEFORM_WEBHOOK_ROUTE,
            TypeformWebhookResource(dependencies.webhook_handler),
        )

    app.add_error_handler(Exception, handle_unexpected_error)

    return app
