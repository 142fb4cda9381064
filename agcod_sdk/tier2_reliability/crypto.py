"""
agcod_sdk.tier2_reliability.crypto
───────────────────────────────────
Hashing and HMAC primitives for request signing. Application code never
calls hashlib/hmac directly; the signer goes through these helpers.
"""
from __future__ import annotations

import hashlib
import hmac


def _bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def sha256_hex(data: str | bytes) -> str:
    """Return the lowercase hex SHA-256 digest of *data*."""
    return hashlib.sha256(_bytes(data)).hexdigest()


def hmac_sha256(key: str | bytes, data: str | bytes) -> bytes:
    """Return the raw HMAC-SHA256 digest of *data* under *key*."""
    return hmac.new(_bytes(key), _bytes(data), hashlib.sha256).digest()


def hmac_sign(key: str | bytes, data: str | bytes) -> str:
    """Return a hex-encoded HMAC-SHA256 signature for *data* using *key*."""
    return hmac.new(_bytes(key), _bytes(data), hashlib.sha256).hexdigest()


__all__ = ["sha256_hex", "hmac_sha256", "hmac_sign"]
