"""URL signing for business-tier (client id + private key) requests.

References:
- Digital signatures: https://developers.google.com/maps/documentation/distance-matrix/digital-signature
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from urllib.parse import urlsplit

from matrix_errors import InvalidConfiguration  # type: ignore


def decode_private_key(private_key: str) -> bytes:
    """Decode a URL-safe base64 private key (padding optional)."""
    key = private_key.strip().translate(str.maketrans("-_", "+/"))
    key += "=" * (-len(key) % 4)
    try:
        return base64.b64decode(key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidConfiguration(
            "google_business_api_private_key is not valid URL-safe base64."
        ) from e


def sign(path_and_query: str, private_key: str) -> str:
    """Return the URL-safe base64 HMAC-SHA1 signature of `path_and_query`."""
    digest = hmac.new(
        decode_private_key(private_key),
        path_and_query.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


def add_signature(url: str, private_key: str) -> str:
    """Append `&signature=...` computed over the path and query of `url`."""
    parts = urlsplit(url)
    signature = sign(f"{parts.path}?{parts.query}", private_key)
    return f"{url}&signature={signature}"
