"""Server-side user administration facade."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from docbond.auth.types import UserCredentials
from docbond.errors import NotRegisteredError

logger = logging.getLogger(__name__)

CustomCredentials = dict[str, Any]


class ServerAuthService(ABC):
    """Interface of privileged, server-side user management backends."""

    @abstractmethod
    async def set_custom_credentials(
        self, user_id: str, custom_credentials: CustomCredentials
    ) -> None: ...

    @abstractmethod
    async def get_user(self, user_id: str) -> UserCredentials: ...

    @abstractmethod
    async def update_user(self, user_id: str, credentials: UserCredentials) -> UserCredentials: ...


class ServerAuth(ServerAuthService):
    """Process-wide facade over the registered ``ServerAuthService``."""

    _service: ClassVar[Optional[ServerAuthService]] = None
    _instance: ClassVar[Optional["ServerAuth"]] = None

    def __init__(self, service: ServerAuthService) -> None:
        self._delegate = service

    @classmethod
    def register_server_auth_service(cls, service: ServerAuthService) -> None:
        if cls._service is not service:
            cls._service = service
            cls._instance = None
            logger.debug("Registered server auth service %s", type(service).__name__)

    @classmethod
    def instance(cls) -> "ServerAuth":
        """Return the shared facade.

        Raises
        ------
        NotRegisteredError
            If no server auth service was registered.
        """
        if cls._service is None:
            raise NotRegisteredError(
                "server auth service",
                "Call ServerAuth.register_server_auth_service() first.",
            )
        if cls._instance is None:
            cls._instance = cls(cls._service)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._service = None
        cls._instance = None

    async def get_user(self, user_id: str) -> UserCredentials:
        return await self._delegate.get_user(user_id)

    async def update_user(self, user_id: str, credentials: UserCredentials) -> UserCredentials:
        return await self._delegate.update_user(user_id, credentials)

    async def set_custom_credentials(
        self, user_id: str, custom_credentials: CustomCredentials
    ) -> None:
        await self._delegate.set_custom_credentials(user_id, custom_credentials)
