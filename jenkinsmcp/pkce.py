"""PKCE (RFC 7636) verifier, challenge and state helpers."""

import base64
import hashlib
import secrets


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def generate_verifier() -> str:
    """Return a random 43-character PKCE code verifier."""
    return _b64url(secrets.token_bytes(32))


def challenge_from_verifier(verifier: str) -> str:
    """Derive the S256 code challenge from a verifier."""
    return _b64url(hashlib.sha256(verifier.encode("utf-8")).digest())


def generate_state() -> str:
    """Return a random state value for CSRF protection."""
    return _b64url(secrets.token_bytes(16))