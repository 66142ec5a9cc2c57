"""Typeform webhook signature computation and verification.

Typeform signs each delivery with HMAC-SHA256 over the raw request body,
keyed by the UTF-8 bytes of the form's secret, and sends the result in the
``Typeform-Signature`` header as ``sha256=<base64 digest>``. The digest is
standard, padded Base64 rather than hex.

Verification must run over the body exactly as received: decoding and
re-encoding the JSON can reorder keys or change whitespace and so change
the digest.

Usage
-----
>>> sig = compute_signature(b'{"event_id":"ev1"}', "s3cret")
>>> sig.startswith("sha256=")
True
>>> verify_signature(sig, b'{"event_id":"ev1"}', "s3cret")
True
>>> verify_signature(sig, b'{"event_id":"ev2"}', "s3cret")
False

"""

from __future__ import annotations

import base64
import hashlib
import hmac

SIGNATURE_HEADER = "Typeform-Signature"
SIGNATURE_PREFIX = "sha256="


def _as_bytes(body: bytes | str) -> bytes:
    return body.encode("utf-8") if isinstance(body, str) else body


def compute_signature(body: bytes | str, secret: str) -> str:
    """Return the ``Typeform-Signature`` value for ``body`` under ``secret``.

    Parameters
    ----------
    body
        Raw request body. Text is encoded as UTF-8 before hashing.
    secret
        Shared signing secret configured on the Typeform webhook.

    Returns
    -------
    str
        ``sha256=`` followed by the Base64-encoded HMAC-SHA256 digest.

    """
    digest = hmac.new(
        secret.encode("utf-8"),
        _as_bytes(body),
        hashlib.sha256,
    ).digest()
    return SIGNATURE_PREFIX + base64.b64encode(digest).decode("ascii")


def verify_signature(
    claimed: str | None,
    body: bytes | str,
    secret: str | None,
) -> bool:
    """Return whether ``claimed`` is the valid signature of ``body``.

    A missing claimed signature, a missing or empty secret, and a mismatch
    all return ``False``; callers cannot tell these cases apart. The final
    comparison runs in constant time over the UTF-8 bytes of both strings.
    """
    if not claimed or not secret:
        return False
    expected = compute_signature(body, secret)
    return hmac.compare_digest(expected.encode("utf-8"), claimed.encode("utf-8"))


__all__ = [
    "SIGNATURE_HEADER",
    "SIGNATURE_PREFIX",
    "compute_signature",
    "verify_signature",
]
