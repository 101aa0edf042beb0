"""
Bearer token handling and identity providers.

Covers:
- Authorization header parsing
- Supabase provider: success, rejected token, unreachable service
- Local provider round trip and provider selection
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from auth.identity import (
    LocalIdentityProvider,
    SupabaseIdentityProvider,
    build_identity_provider,
)
from auth.utils import extract_bearer_token


def test_extract_bearer_token():
    assert extract_bearer_token('Bearer abc.def') == 'abc.def'
    assert extract_bearer_token('Basic abc') is None
    assert extract_bearer_token('Bearer ') is None
    assert extract_bearer_token(None) is None


@patch('auth.identity.requests.get')
def test_supabase_provider_returns_identity(mock_get, app):
    mock_get.return_value = MagicMock(status_code=200)
    mock_get.return_value.json.return_value = {
        'id': 'u1', 'user_metadata': {'name': 'Kim'}
    }
    provider = SupabaseIdentityProvider('https://project.supabase.co/', 'anon', timeout=2)

    identity = provider.get_user('token-123')

    assert identity.id == 'u1'
    assert identity.user_metadata == {'name': 'Kim'}
    args, kwargs = mock_get.call_args
    assert args[0] == 'https://project.supabase.co/auth/v1/user'
    assert kwargs['headers']['Authorization'] == 'Bearer token-123'
    assert kwargs['headers']['apikey'] == 'anon'
    assert kwargs['timeout'] == 2


@patch('auth.identity.requests.get')
def test_supabase_provider_rejected_token(mock_get, app):
    mock_get.return_value = MagicMock(status_code=401)
    provider = SupabaseIdentityProvider('https://project.supabase.co', 'anon')
    assert provider.get_user('bad') is None


@patch('auth.identity.requests.get')
def test_supabase_provider_unreachable(mock_get, app, caplog):
    mock_get.side_effect = requests.ConnectionError('down')
    provider = SupabaseIdentityProvider('https://project.supabase.co', 'anon')
    assert provider.get_user('token') is None
    assert 'Identity provider unreachable: down' in caplog.text


def test_local_provider_round_trip(app):
    provider = LocalIdentityProvider()
    token = provider.issue_token('u1', {'name': 'Kim'})

    identity = provider.get_user(token)

    assert identity.id == 'u1'
    assert identity.user_metadata == {'name': 'Kim'}
    assert provider.get_user('garbage') is None


def test_build_identity_provider():
    assert isinstance(build_identity_provider({'IDENTITY_PROVIDER': 'local'}), LocalIdentityProvider)
    provider = build_identity_provider({
        'IDENTITY_PROVIDER': 'supabase', 'SUPABASE_URL': 'https://x.supabase.co', 'SUPABASE_ANON_KEY': 'k'
    })
    assert isinstance(provider, SupabaseIdentityProvider)
    with pytest.raises(ValueError):
        build_identity_provider({'IDENTITY_PROVIDER': 'ldap'})


def test_health(client):
    assert client.get('/health').get_json() == {'status': 'ok'}
