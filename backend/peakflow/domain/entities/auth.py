"""Identity value objects handed out by the auth provider."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SessionEvent(str, Enum):
    """Session lifecycle events reported by the auth provider / client."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str | None = None

    @property
    def display_name(self) -> str:
        """Name shown on content the user creates: the email's local part."""
        if self.email:
            local = self.email.split("@")[0]
            if local:
                return local
        return "Anonymous"


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    user: AuthUser
    expires_at: datetime | None = None


@dataclass(frozen=True)
class AuthSnapshot:
    """Immutable view of who is signed in, handed to consumers."""

    session: AuthSession | None = None
    is_admin: bool = False
    loading: bool = False

    @property
    def user(self) -> AuthUser | None:
        return self.session.user if self.session else None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None
