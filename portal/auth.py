"""Authentication and security utilities."""

import hmac
import secrets
from typing import Optional

from common.constants import PREMIUM_KEY_PREFIX, PREMIUM_KEY_RANDOM_BYTES


def tokens_match(supplied: Optional[str], expected: str) -> bool:
    """
    Exact, case-sensitive comparison of a supplied secret against the
    configured one, in constant time.

    Args:
        supplied: Token from the request, or None if absent
        expected: Configured secret

    Returns:
        True only if both strings are identical
    """
    if supplied is None:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def generate_premium_key() -> str:
    """
    Generate a new premium key with the recognizable prefix.

    Returns:
        Key string in format: {prefix}{16 url-safe random characters}
    """
    return f"{PREMIUM_KEY_PREFIX}{secrets.token_urlsafe(PREMIUM_KEY_RANDOM_BYTES)}"


def generate_session_token() -> str:
    """
    Generate an unguessable session token.

    Returns:
        43-character url-safe token (256 bits of randomness)
    """
    return secrets.token_urlsafe(32)
