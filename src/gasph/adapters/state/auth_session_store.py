"""Local mirror of the identity service session."""

import logging

from pydantic import ValidationError

from gasph.adapters.state.json_file_store import JsonFileStore
from gasph.domain.models.user_profile import AuthSession

logger = logging.getLogger(__name__)

SESSION_KEY = "session"


class AuthSessionStore:
    """Holds the signed-in session, persisted between runs.

    The session is issued elsewhere; this store only mirrors it.
    """

    def __init__(self, store: JsonFileStore) -> None:
        self._store = store
        self._session: AuthSession | None = None
        self._loaded = False

    def load(self) -> None:
        """Read the persisted session, discarding it when malformed."""
        raw = self._store.get(SESSION_KEY)
        self._session = None
        if raw:
            try:
                self._session = AuthSession.model_validate(raw)
            except ValidationError:
                logger.warning("Discarding malformed persisted session")
        self._loaded = True

    def current(self) -> AuthSession | None:
        if not self._loaded:
            self.load()
        return self._session

    def access_token(self) -> str | None:
        session = self.current()
        return session.access_token if session else None

    def set(self, session: AuthSession) -> None:
        self._session = session
        self._loaded = True
        self._store.set(SESSION_KEY, session.model_dump(mode="json"))
        logger.info(f"Session stored for user {session.user_id}")

    def clear(self) -> None:
        self._session = None
        self._loaded = True
        self._store.remove(SESSION_KEY)
