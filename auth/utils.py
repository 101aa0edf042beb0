from typing import Optional

BEARER_PREFIX = 'Bearer '


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    """Return the raw token of an ``Authorization: Bearer <token>`` header.

    The token is returned unchanged so it can be forwarded to the identity
    provider as-is. Missing or non-Bearer headers yield ``None``."""
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None
