"""Outbound clients for services hosted outside this application."""
from .auth_provider import AuthError, AuthProvider, AuthSessionResult, HostedAuthProvider, Identity

__all__ = [
    "AuthError",
    "AuthProvider",
    "AuthSessionResult",
    "HostedAuthProvider",
    "Identity",
]
