"""Value types shared by the authentication facades."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class AuthProvider(Enum):
    """Identity providers an auth service may support."""

    EMAIL = "email"
    GOOGLE = "google"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    GITHUB = "github"


class AuthErrorCode(Enum):
    WRONG_PASSWORD = "wrongPassword"
    POPUP_CLOSED_BY_USER = "popupClosedByUser"
    USER_NOT_FOUND = "userNotFound"
    INVALID_EMAIL = "invalidEmail"


@dataclass(frozen=True)
class SignData:
    """Credentials submitted to sign up or log in."""

    auth_provider: AuthProvider = AuthProvider.EMAIL
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    verification_link: Optional[str] = None


@dataclass
class UserCredentials:
    """The identity an auth service reports for a signed-in user."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    phone_number: Optional[str] = None
    picture_url: Optional[str] = None
    email_verified: bool = False
    custom_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthError(Exception):
    """A failure reported by an auth service.

    Parameters
    ----------
    code:
        Machine-readable failure kind.
    message:
        Human-readable description.
    """

    code: AuthErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))
