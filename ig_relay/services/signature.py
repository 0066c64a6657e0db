"""X-Hub-Signature-256 payload signature checks."""

import hashlib
import hmac

from ig_relay.constants import SIGNATURE_PREFIX


def compute_signature(body: bytes, app_secret: str) -> str:
    """Return the header value Meta would send for ``body``."""
    digest = hmac.new(app_secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(body: bytes, signature: str | None, app_secret: str) -> bool:
    """
    Verify the X-Hub-Signature-256 header using HMAC SHA256.

    Args:
        body: The raw request body
        signature: Header value including the 'sha256=' prefix, if sent
        app_secret: The app secret used to sign deliveries

    Returns:
        True if the signature matches the body
    """
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        return False

    return hmac.compare_digest(compute_signature(body, app_secret), signature)
