"""Identity provider adapters.

The backend never verifies bearer tokens itself. It hands the token to an
identity provider and gets back either an :class:`Identity` or ``None``
(anonymous). Two providers exist:

1. `SupabaseIdentityProvider` - forwards the token to Supabase Auth's
   ``/auth/v1/user`` endpoint. This is the production provider.
2. `LocalIdentityProvider` - resolves tokens minted by this app through
   Flask-JWT-Extended. Used for local development and the test-suite.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import requests
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError


@dataclass(frozen=True)
class Identity:
    """Authenticated requester as reported by the identity provider."""
    id: str
    user_metadata: dict = field(default_factory=dict)


class SupabaseIdentityProvider:
    def __init__(self, url: str, anon_key: str, timeout: float = 5.0):
        self.url = (url or '').rstrip('/')
        self.anon_key = anon_key
        self.timeout = timeout

    def get_user(self, token: str) -> Optional[Identity]:
        try:
            response = requests.get(
                f'{self.url}/auth/v1/user',
                headers={
                    'Authorization': f'Bearer {token}',
                    'apikey': self.anon_key or '',
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            current_app.logger.warning(f'Identity provider unreachable: {str(exc)}')
            return None

        if response.status_code != 200:
            return None

        try:
            data = response.json()
        except ValueError:
            current_app.logger.warning('Identity provider returned a non-JSON body')
            return None

        user_id = data.get('id')
        if not user_id:
            return None
        return Identity(id=str(user_id), user_metadata=data.get('user_metadata') or {})


class LocalIdentityProvider:
    METADATA_CLAIM = 'user_metadata'

    def issue_token(self, user_id: str, user_metadata: Optional[dict] = None, expires_delta=None) -> str:
        """Mint a token the way an external provider would."""
        return create_access_token(
            identity=str(user_id),
            additional_claims={self.METADATA_CLAIM: user_metadata or {}},
            expires_delta=expires_delta,
        )

    def get_user(self, token: str) -> Optional[Identity]:
        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException) as exc:
            current_app.logger.debug(f'Rejected local token: {str(exc)}')
            return None
        return Identity(id=str(claims['sub']), user_metadata=claims.get(self.METADATA_CLAIM) or {})


def build_identity_provider(config):
    """Create the provider named by ``IDENTITY_PROVIDER``."""
    name = config.get('IDENTITY_PROVIDER', 'supabase')
    if name == 'local':
        return LocalIdentityProvider()
    if name == 'supabase':
        return SupabaseIdentityProvider(
            config.get('SUPABASE_URL'),
            config.get('SUPABASE_ANON_KEY'),
            timeout=config.get('IDENTITY_TIMEOUT', 5.0),
        )
    raise ValueError(f'Unknown identity provider: {name}')


def get_identity_provider():
    return current_app.extensions['identity_provider']
