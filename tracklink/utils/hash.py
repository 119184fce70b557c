"""Hash utility functions for Tracklink."""

import base64
import hashlib
import hmac


def compute_hmac_sha256_base64(key: bytes, data: bytes) -> str:
    """
    Compute a base64-encoded HMAC-SHA256 digest.

    Args:
        key: Shared secret
        data: Raw bytes to sign, exactly as received

    Returns:
        Standard base64 encoding of the digest
    """
    digest = hmac.new(key, data, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")
