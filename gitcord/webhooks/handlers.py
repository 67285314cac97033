"""Webhook signature validation."""

from __future__ import annotations

import hashlib
import hmac

from gitcord.errors import AuthError
from gitcord.webhooks.models import InboundWebhook

SIGNATURE_PREFIX = "sha256="


def compute_signature(body: bytes, secret: str) -> str:
    """Return the ``X-Hub-Signature-256`` value GitHub would send for *body*."""
    return SIGNATURE_PREFIX + hmac.new(
        secret.encode(), body, hashlib.sha256
    ).hexdigest()


def verify_signature(body: bytes, signature: str | None, secret: str | None) -> bool:
    """Validate a GitHub webhook HMAC-SHA256 signature.

    *body* must be the exact bytes received on the wire. Returns False if
    either the secret or the signature is missing.
    """
    if not secret:
        return False
    if not signature:
        return False
    expected = compute_signature(body, secret)
    return hmac.compare_digest(expected.encode(), signature.encode("utf-8", "replace"))


def authenticate(inbound: InboundWebhook, secret: str | None) -> None:
    """Raise :class:`AuthError` unless *inbound* carries a valid signature."""
    if not inbound.signature:
        raise AuthError("No signature provided")
    if not verify_signature(inbound.raw_body, inbound.signature, secret):
        raise AuthError("Invalid signature")
