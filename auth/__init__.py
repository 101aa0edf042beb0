from .identity import Identity, build_identity_provider, get_identity_provider
from .decorators import auth_optional, auth_required

__all__ = [
    'Identity',
    'build_identity_provider',
    'get_identity_provider',
    'auth_optional',
    'auth_required'
]
