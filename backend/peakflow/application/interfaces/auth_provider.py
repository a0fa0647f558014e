"""Port for the hosted authentication provider."""

from abc import ABC, abstractmethod

from peakflow.domain.entities import AuthSession


class AuthProvider(ABC):
    """Resolves access tokens into sessions and revokes them.

    Implementations return None for tokens the provider rejects and raise
    AuthProviderError when the provider itself cannot be reached.
    """

    @abstractmethod
    async def get_session(self, access_token: str) -> AuthSession | None:
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        ...

    async def aclose(self) -> None:
        """Release any held connections."""
        return None
