"""
Tests for hash utilities.
"""

import base64
import hashlib
import hmac

from tracklink.utils.hash import compute_hmac_sha256_base64


def test_matches_reference_hmac():
    body = b'{"name": "#1001.1"}'
    expected = base64.b64encode(hmac.new(b"secret", body, hashlib.sha256).digest())
    assert compute_hmac_sha256_base64(b"secret", body) == expected.decode()


def test_known_vector():
    # RFC 4231 test case 2
    digest = compute_hmac_sha256_base64(b"Jefe", b"what do ya want for nothing?")
    assert digest == "W9zBRr9gdU5qBCQmCJV1x1oAPwidJzmDnexYuWTsOEM="
