"""Authentication facades.

Thin delegating wrappers around injected auth backends. docbond does not
authenticate or authorize anything itself.
"""
from __future__ import annotations

from docbond.auth.auth import Auth, AuthService
from docbond.auth.observable import Observable
from docbond.auth.server_auth import ServerAuth, ServerAuthService
from docbond.auth.types import (
    AuthError,
    AuthErrorCode,
    AuthProvider,
    SignData,
    UserCredentials,
)

__all__ = [
    "Auth",
    "AuthService",
    "ServerAuth",
    "ServerAuthService",
    "Observable",
    "AuthError",
    "AuthErrorCode",
    "AuthProvider",
    "SignData",
    "UserCredentials",
]
