from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import httpx
from pydantic import ValidationError as SchemaError

from visa_console.config import LOGIN_PATH, MESSAGES
from visa_console.errors import AuthError, ConsoleError, InvalidCredentials, NetworkError, ValidationError
from visa_console.models import LoginResponse, Session
from visa_console.services.http_client import ClientFactory, body_message, client_factory_for, read_json
from visa_console.services.session_store import SessionListener, SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    session: Optional[Session] = None
    error: Optional[ConsoleError] = None

    @property
    def ok(self) -> bool:
        return self.session is not None and self.error is None


class AuthGateway:
    """Login, logout and bearer headers; the only writer of the SessionStore.

    Every call is a single attempt. Failures come back inside ``LoginResult``
    rather than being raised.
    """

    def __init__(self, settings, store: SessionStore, client_factory: Optional[ClientFactory] = None):
        self.settings = settings
        self.store = store
        self.client_factory = client_factory or client_factory_for(settings)

    def login(self, email: str, password: str) -> LoginResult:
        email = (email or "").strip()
        if not email or not password:
            return LoginResult(error=ValidationError(MESSAGES["login_missing_fields"]))

        # A logout or 401 while this call is outstanding bumps the generation.
        generation = self.store.generation
        url = self.settings.auth_url(LOGIN_PATH)
        logger.info("Signing in %s", email)
        try:
            with self.client_factory() as client:
                response = client.post(url, json={"email": email, "password": password})
        except httpx.RequestError as e:
            logger.warning("Login request failed: %s", e)
            return LoginResult(error=NetworkError(MESSAGES["network"]))

        if generation != self.store.generation:
            logger.warning("Discarding login response for %s; session changed while it was in flight", email)
            return LoginResult(error=AuthError(MESSAGES["login_interrupted"]))

        body = read_json(response)
        if not response.is_success:
            message = body_message(body, "message", "error") or MESSAGES["login_invalid"]
            logger.info("Login rejected for %s (HTTP %s)", email, response.status_code)
            return LoginResult(error=InvalidCredentials(message))

        try:
            parsed = LoginResponse.model_validate(body if isinstance(body, dict) else {})
        except SchemaError as e:
            logger.warning("Malformed login response: %s", e)
            return LoginResult(error=InvalidCredentials(MESSAGES["login_invalid"]))
        if not parsed.idToken:
            return LoginResult(error=InvalidCredentials(MESSAGES["login_no_token"]))

        session = Session(token=parsed.idToken, email=parsed.email or email, role=parsed.role or "")
        self.store.persist(session)
        logger.info("Signed in %s (role=%s)", session.email, session.role or "-")
        return LoginResult(session=session)

    def logout(self) -> None:
        if self.store.token() is not None:
            logger.info("Signing out")
        self.store.clear()

    def handle_unauthorized(self) -> None:
        logger.warning("Backend answered 401; clearing session")
        self.store.clear()

    def auth_header(self) -> Dict[str, str]:
        # No Content-Type here: httpx writes the multipart boundary itself.
        token = self.store.token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def is_authenticated(self) -> bool:
        return self.store.token() is not None

    def current_session(self) -> Optional[Session]:
        return self.store.load()

    def current_token(self) -> Optional[str]:
        return self.store.token()

    def is_current(self, token: Optional[str]) -> bool:
        return token is not None and self.store.token() == token

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        return self.store.subscribe(listener)
