"""Client-side authentication facade.

``Auth`` forwards every call to the registered ``AuthService`` and
re-broadcasts its auth state changes to local subscribers. It holds no
authentication logic of its own.

Example
-------
::

    Auth.register_auth_service(FirebaseAuthService(app))
    unsubscribe = Auth.instance().on_auth_state_change(print)
    credentials = await Auth.instance().login(SignData(email=..., password=...))
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar, Optional

from docbond.auth.observable import Observable
from docbond.auth.types import AuthProvider, SignData, UserCredentials
from docbond.errors import NotRegisteredError

logger = logging.getLogger(__name__)

AuthStateCallback = Callable[[Optional[UserCredentials]], None]


class AuthService(ABC):
    """Interface every authentication backend implements."""

    @abstractmethod
    async def sign_up(self, sign_data: SignData) -> UserCredentials: ...

    @abstractmethod
    async def login(self, sign_data: SignData) -> UserCredentials: ...

    @abstractmethod
    async def logout(self) -> None: ...

    @abstractmethod
    async def link_additional_provider(self, provider: AuthProvider) -> Any: ...

    @abstractmethod
    async def unlink_provider(self, provider: AuthProvider) -> Any: ...

    @abstractmethod
    def on_auth_state_change(self, on_change: AuthStateCallback) -> Any: ...


class Auth(AuthService):
    """Process-wide facade over the registered ``AuthService``.

    Parameters
    ----------
    service:
        The backend to delegate to.
    """

    _service: ClassVar[Optional[AuthService]] = None
    _instance: ClassVar[Optional["Auth"]] = None

    def __init__(self, service: AuthService) -> None:
        self._delegate = service
        self._on_auth_state_change: Observable[Optional[UserCredentials]] = Observable()
        service.on_auth_state_change(self._auth_state_changed)

    @classmethod
    def register_auth_service(cls, service: AuthService) -> None:
        """Install ``service``; a different service discards the current instance."""
        if cls._service is not service:
            cls._service = service
            cls._instance = None
            logger.debug("Registered auth service %s", type(service).__name__)

    @classmethod
    def instance(cls) -> "Auth":
        """Return the shared facade, built on first use.

        Raises
        ------
        NotRegisteredError
            If no auth service was registered.
        """
        if cls._service is None:
            raise NotRegisteredError(
                "auth service", "Call Auth.register_auth_service() before using Auth."
            )
        if cls._instance is None:
            cls._instance = cls(cls._service)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._service = None
        cls._instance = None

    async def sign_up(self, sign_data: SignData) -> UserCredentials:
        return await self._delegate.sign_up(sign_data)

    async def login(self, sign_data: SignData) -> UserCredentials:
        return await self._delegate.login(sign_data)

    async def logout(self) -> None:
        await self._delegate.logout()

    async def link_additional_provider(self, provider: AuthProvider) -> Any:
        return await self._delegate.link_additional_provider(provider)

    async def unlink_provider(self, provider: AuthProvider) -> Any:
        return await self._delegate.unlink_provider(provider)

    def on_auth_state_change(self, on_change: AuthStateCallback) -> Callable[[], None]:
        """Subscribe to auth state changes; returns an unsubscribe function."""
        return self._on_auth_state_change.subscribe(on_change)

    def remove_auth_state_change(self, on_change: AuthStateCallback) -> None:
        self._on_auth_state_change.unsubscribe(on_change)

    def _auth_state_changed(self, credentials: Optional[UserCredentials]) -> None:
        self._on_auth_state_change.notify(credentials)
