"""Unit tests for Typeform signature computation and verification.

Run with:
    pytest tests/unit/test_signature.py
"""

from __future__ import annotations

import pytest

from formgate.signature import SIGNATURE_PREFIX, compute_signature, verify_signature
from tests.helpers.deliveries import OTHER_SECRET, SCENARIO_BODY, SECRET

# RFC 4231 test case 2, Base64-encoded.
_RFC4231_KEY = "Jefe"
_RFC4231_DATA = b"what do ya want for nothing?"
_RFC4231_SIGNATURE = "sha256=W9zBRr9gdU5qBCQmCJV1x1oAPwidJzmDnexYuWTsOEM="


class TestComputeSignature:
    """Tests for compute_signature."""

    def test_matches_known_vector(self) -> None:
        """The digest is HMAC-SHA256, Base64 encoded, with the sha256= prefix."""
        assert compute_signature(_RFC4231_DATA, _RFC4231_KEY) == _RFC4231_SIGNATURE

    def test_is_base64_not_hex(self) -> None:
        """A SHA-256 digest in padded Base64 is 44 characters long."""
        signature = compute_signature(SCENARIO_BODY, SECRET)
        encoded = signature.removeprefix(SIGNATURE_PREFIX)
        assert signature.startswith(SIGNATURE_PREFIX)
        assert len(encoded) == 44, "expected padded Base64 of a 32-byte digest"
        assert encoded.endswith("=")

    def test_text_body_signs_as_utf8(self) -> None:
        """Text bodies are signed over their UTF-8 bytes."""
        text = '{"answer":"café"}'
        assert compute_signature(text, SECRET) == compute_signature(
            text.encode("utf-8"), SECRET
        )

    def test_is_deterministic(self) -> None:
        """Identical inputs always produce the identical signature."""
        assert compute_signature(SCENARIO_BODY, SECRET) == compute_signature(
            SCENARIO_BODY, SECRET
        )


class TestVerifySignature:
    """Tests for verify_signature."""

    def test_accepts_matching_signature(self) -> None:
        """A signature computed with the shared secret verifies."""
        signature = compute_signature(SCENARIO_BODY, SECRET)
        assert verify_signature(signature, SCENARIO_BODY, SECRET) is True

    def test_verification_is_deterministic(self) -> None:
        """Repeated verification of the same inputs gives the same answer."""
        signature = compute_signature(SCENARIO_BODY, SECRET)
        results = {verify_signature(signature, SCENARIO_BODY, SECRET) for _ in range(5)}
        assert results == {True}

    def test_rejects_signature_from_other_secret(self) -> None:
        """A correct signature for a different secret fails."""
        signature = compute_signature(SCENARIO_BODY, OTHER_SECRET)
        assert verify_signature(signature, SCENARIO_BODY, SECRET) is False

    @pytest.mark.parametrize("index", range(len(SCENARIO_BODY)))
    def test_any_flipped_byte_fails(self, index: int) -> None:
        """Changing any single body byte invalidates the signature."""
        signature = compute_signature(SCENARIO_BODY, SECRET)
        tampered = bytearray(SCENARIO_BODY)
        tampered[index] ^= 0x01
        assert verify_signature(signature, bytes(tampered), SECRET) is False

    def test_reformatted_json_fails(self) -> None:
        """Re-serialising the body with different whitespace breaks the signature."""
        signature = compute_signature(SCENARIO_BODY, SECRET)
        reformatted = SCENARIO_BODY.replace(b":", b": ")
        assert verify_signature(signature, reformatted, SECRET) is False

    def test_rejects_hex_encoded_digest(self) -> None:
        """A hex digest with the right prefix is not accepted."""
        import hashlib
        import hmac

        hex_digest = hmac.new(
            SECRET.encode(), SCENARIO_BODY, hashlib.sha256
        ).hexdigest()
        assert verify_signature(f"sha256={hex_digest}", SCENARIO_BODY, SECRET) is False

    def test_rejects_missing_prefix(self) -> None:
        """The Base64 digest alone, without sha256=, is rejected."""
        bare = compute_signature(SCENARIO_BODY, SECRET).removeprefix(SIGNATURE_PREFIX)
        assert verify_signature(bare, SCENARIO_BODY, SECRET) is False

    @pytest.mark.parametrize("claimed", [None, ""])
    def test_rejects_missing_signature(self, claimed: str | None) -> None:
        """Absent or empty claimed signatures are rejected."""
        assert verify_signature(claimed, SCENARIO_BODY, SECRET) is False

    @pytest.mark.parametrize("secret", [None, ""])
    def test_rejects_missing_secret(self, secret: str | None) -> None:
        """Verification fails closed without a secret."""
        signature = compute_signature(SCENARIO_BODY, "")
        assert verify_signature(signature, SCENARIO_BODY, secret) is False

    def test_non_ascii_claim_is_rejected_not_raised(self) -> None:
        """A garbage header with non-ASCII text compares as a mismatch."""
        assert verify_signature("sha256=éé", SCENARIO_BODY, SECRET) is False
