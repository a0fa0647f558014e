"""Auth context — the single source of truth for who is signed in.

One context is created per client connection (or request), explicitly
initialised with the caller's access token and explicitly closed when the
connection ends. Consumers read an immutable ``AuthSnapshot`` and may
subscribe to be told when it changes.
"""

import logging
from collections.abc import Callable

from peakflow.application.interfaces import AuthProvider, UserRoleRepository
from peakflow.domain.entities import AuthSession, AuthSnapshot, SessionEvent
from peakflow.domain.exceptions import AuthProviderError

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[AuthSnapshot], None]


class AuthContext:

    def __init__(self, provider: AuthProvider, roles: UserRoleRepository):
        self._provider = provider
        self._roles = roles
        self._snapshot = AuthSnapshot(loading=True)
        self._listeners: list[SnapshotListener] = []
        self._closed = False

    @property
    def snapshot(self) -> AuthSnapshot:
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def initialize(self, access_token: str | None) -> AuthSnapshot:
        """Resolve any existing session for ``access_token``."""
        await self.handle_session_change(SessionEvent.INITIAL_SESSION, access_token)
        return self._snapshot

    async def handle_session_change(self, event: SessionEvent, access_token: str | None) -> AuthSnapshot:
        """Apply a sign-in, sign-out, or token refresh.

        The admin lookup only re-runs when the user identity changes.
        """
        if self._closed:
            raise RuntimeError("AuthContext is closed")

        session: AuthSession | None = None
        if event != SessionEvent.SIGNED_OUT and access_token:
            try:
                session = await self._provider.get_session(access_token)
            except AuthProviderError:
                logger.exception("Auth provider failed while resolving session (%s)", event.value)
                session = None

        previous = self._snapshot
        previous_user_id = previous.user.id if previous.user else None
        new_user_id = session.user.id if session else None

        if new_user_id is None:
            is_admin = False
        elif new_user_id == previous_user_id and not previous.loading:
            is_admin = previous.is_admin
        else:
            user_role = await self._roles.get_by_user_id(new_user_id)
            is_admin = user_role is not None and user_role.is_admin

        self._set(AuthSnapshot(session=session, is_admin=is_admin, loading=False))
        logger.debug("Auth %s → user=%s admin=%s", event.value, new_user_id, is_admin)
        return self._snapshot

    async def sign_out(self) -> None:
        """Revoke the current session with the provider and clear local state."""
        session = self._snapshot.session
        if session is not None:
            try:
                await self._provider.sign_out(session.access_token)
            except AuthProviderError:
                logger.exception("Auth provider sign-out failed; clearing local session anyway")
        self._set(AuthSnapshot(session=None, is_admin=False, loading=False))

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()

    def _set(self, snapshot: AuthSnapshot) -> None:
        changed = snapshot != self._snapshot
        self._snapshot = snapshot
        if changed:
            for listener in list(self._listeners):
                listener(snapshot)
