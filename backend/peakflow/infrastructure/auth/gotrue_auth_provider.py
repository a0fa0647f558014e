"""GoTrue auth client — implements the AuthProvider interface.

Talks to a GoTrue-compatible REST API (``{auth_url}/user`` and
``{auth_url}/logout``) with httpx. Identity lives with the provider; this
adapter only resolves bearer tokens to users and revokes them.
"""

import logging
from datetime import datetime, timezone

import httpx

from peakflow.application.interfaces import AuthProvider
from peakflow.domain.entities import AuthSession, AuthUser
from peakflow.domain.exceptions import AuthProviderError

logger = logging.getLogger(__name__)

_REJECTED = (401, 403)


class GoTrueAuthProvider(AuthProvider):
    """Infrastructure adapter — connects to the hosted auth API.

    A shared httpx.AsyncClient is created lazily and reused; pass one in
    to control transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_headers(self, access_token: str) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {access_token}"}
        if self._api_key:
            headers["apikey"] = self._api_key
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def get_session(self, access_token: str) -> AuthSession | None:
        try:
            response = await self._get_client().get(
                f"{self._base_url}/user",
                headers=self._get_headers(access_token),
            )
        except httpx.HTTPError as exc:
            logger.error("Auth provider unreachable: %s", exc)
            raise AuthProviderError(0, str(exc)) from exc

        if response.status_code in _REJECTED:
            logger.debug("Auth provider rejected token (%d)", response.status_code)
            return None
        if response.status_code != 200:
            raise AuthProviderError(response.status_code, response.text)

        data = response.json()
        user_id = data.get("id")
        if not user_id:
            raise AuthProviderError(response.status_code, "User payload has no id")
        return AuthSession(
            access_token=access_token,
            user=AuthUser(id=user_id, email=data.get("email")),
            expires_at=_parse_expiry(data.get("expires_at")),
        )

    async def sign_out(self, access_token: str) -> None:
        try:
            response = await self._get_client().post(
                f"{self._base_url}/logout",
                headers=self._get_headers(access_token),
            )
        except httpx.HTTPError as exc:
            raise AuthProviderError(0, str(exc)) from exc

        # An already-invalid token is as signed out as it gets.
        if response.status_code in _REJECTED or response.status_code < 300:
            return
        raise AuthProviderError(response.status_code, response.text)

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None


def _parse_expiry(value: object) -> datetime | None:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return None
