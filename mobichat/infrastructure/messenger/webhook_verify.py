from __future__ import annotations

import hashlib
import hmac
import logging


logger = logging.getLogger(__name__)

_SIGNATURE_PREFIX = "sha256="
_RELAXED_ENVS = {"dev", "local"}


def check_subscription(mode: str | None, token: str | None, challenge: str | None, expected_token: str | None) -> str | None:
    """
    Answer Meta's subscription handshake.

    Returns the challenge to echo back, or None when the request is not a
    subscribe call or the verify token does not match.
    """
    if mode != "subscribe" or not expected_token:
        return None
    if not token or not hmac.compare_digest(token, expected_token):
        return None
    return challenge or ""


def check_signature(body: bytes, signature_header: str | None, app_secret: str | None, env: str) -> bool:
    """Validate X-Hub-Signature-256 against the raw request body."""
    if not signature_header:
        if env.lower() in _RELAXED_ENVS:
            logger.warning("Missing signature header; accepting outside production", extra={"reason": env})
            return True
        return False

    if not app_secret:
        logger.error("Signature header present but META_APP_SECRET is not set")
        return False

    if not signature_header.lower().startswith(_SIGNATURE_PREFIX):
        return False

    received = signature_header[len(_SIGNATURE_PREFIX):]
    expected = hmac.new(app_secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, received)
