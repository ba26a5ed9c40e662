"""Durable home of the operator's session.

The store is passed explicitly to whatever needs it; there is no module-level
instance. Only :class:`~visa_console.services.auth_service.AuthGateway` calls
``persist`` and ``clear``. Everyone else reads, or subscribes to be told when
the session changes (``None`` means it is gone).
"""

from __future__ import annotations

import json
import logging
from typing import Callable, List, Optional

from visa_console.config import PROFILE_STORAGE_KEY, TOKEN_STORAGE_KEY
from visa_console.models import Session
from visa_console.utils.storage import KeyValueStorage

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Session]], None]


class SessionStore:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.generation = 0
        self._listeners: List[SessionListener] = []

    def token(self) -> Optional[str]:
        return self.storage.get(TOKEN_STORAGE_KEY) or None

    def load(self) -> Optional[Session]:
        token = self.token()
        if not token:
            return None
        profile = {}
        raw = self.storage.get(PROFILE_STORAGE_KEY)
        if raw:
            try:
                profile = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Stored user profile is not valid JSON; ignoring it")
        if not isinstance(profile, dict):
            profile = {}
        return Session(
            token=token,
            email=str(profile.get("email") or ""),
            role=str(profile.get("role") or ""),
        )

    def persist(self, session: Session) -> None:
        self.storage.set(TOKEN_STORAGE_KEY, session.token)
        self.storage.set(PROFILE_STORAGE_KEY, json.dumps(session.profile()))
        self.generation += 1
        self._notify(session)

    def clear(self) -> None:
        self.storage.delete(TOKEN_STORAGE_KEY)
        self.storage.delete(PROFILE_STORAGE_KEY)
        self.generation += 1
        self._notify(None)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, session: Optional[Session]) -> None:
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                logger.exception("Session listener %r failed", listener)
