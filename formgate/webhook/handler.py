"""Request orchestration for Typeform webhook deliveries.

Each delivery runs the same linear sequence: check that a signature and a
secret are both present, verify the signature over the raw body, decode
the body, and insert a single Bronze record. Nothing is retried and no
state is kept between deliveries.

Usage
-----
Handle a delivery against a sink::

    handler = TypeformWebhookHandler(sink)  # secret read from TYPEFORM_SECRET
    outcome = await handler.handle(WebhookDelivery(body=raw, signature=sig))

"""

from __future__ import annotations

import typing as typ

from formgate.bronze.errors import SinkError
from formgate.config import env_secret_source
from formgate.logging import get_logger, log_error, log_info, log_warning
from formgate.signature import verify_signature
from formgate.webhook.models import WebhookOutcome
from formgate.webhook.payload import PayloadError, build_record

if typ.TYPE_CHECKING:
    from formgate.bronze.sink import ResponseSink
    from formgate.config import SecretSource
    from formgate.webhook.models import WebhookDelivery

__all__ = ["TypeformWebhookHandler"]

logger = get_logger(__name__)


class TypeformWebhookHandler:
    """Authenticate Typeform deliveries and store them in the Bronze layer."""

    def __init__(
        self,
        sink: ResponseSink,
        secret_source: SecretSource | None = None,
    ) -> None:
        """Configure the handler.

        Parameters
        ----------
        sink
            Destination for authenticated records.
        secret_source
            Callable returning the signing secret; called once per
            delivery. Defaults to reading ``TYPEFORM_SECRET``.

        """
        self._sink = sink
        self._secret_source = secret_source or env_secret_source()

    async def handle(self, delivery: WebhookDelivery) -> WebhookOutcome:
        """Resolve ``delivery`` to an outcome, inserting at most one record."""
        secret = self._secret_source()
        if not delivery.signature or not secret:
            return self._reject(delivery)
        if not verify_signature(delivery.signature, delivery.body, secret):
            return self._reject(delivery)

        try:
            record = build_record(delivery.body)
            await self._sink.insert(record)
        except (PayloadError, SinkError) as exc:
            log_error(logger, "Typeform delivery processing failed: %s", exc)
            return WebhookOutcome.processing_failed(str(exc))

        log_info(
            logger,
            "Stored Typeform delivery %s (%d bytes)",
            record.external_event_id,
            len(delivery.body),
        )
        return WebhookOutcome.accepted(record.external_event_id)

    @staticmethod
    def _reject(delivery: WebhookDelivery) -> WebhookOutcome:
        # Only request metadata is logged; never the claimed signature.
        log_warning(
            logger,
            "Rejected unauthenticated Typeform delivery (%d bytes)",
            len(delivery.body),
        )
        return WebhookOutcome.unauthorized()
