"""Tests for wiring one console per browser session."""

from __future__ import annotations

import httpx
import pytest

from visa_console.context import ConsoleContext
from visa_console.settings import Settings


def _admin_login(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"idToken": "t1", "email": "a@b.com", "role": "admin"})


def test_default_backend_keeps_sessions_apart(backend, monkeypatch):
    monkeypatch.delenv("SESSION_BACKEND", raising=False)
    backend.handler = _admin_login
    settings = Settings(api_base_url="https://api.test", auth_base_url="https://auth.test")

    operator = ConsoleContext.build(settings, client_factory=backend.factory())
    visitor = ConsoleContext.build(settings, client_factory=backend.factory())
    assert operator.gateway.login("a@b.com", "x").ok

    assert not visitor.gateway.is_authenticated()
    assert visitor.gateway.auth_header() == {}


@pytest.mark.parametrize("session_backend", ["memory", "file"])
def test_each_context_has_its_own_session(backend, tmp_path, session_backend):
    backend.handler = _admin_login
    settings = Settings(
        api_base_url="https://api.test",
        auth_base_url="https://auth.test",
        session_backend=session_backend,
        app_storage_dir=str(tmp_path),
    )
    operator = ConsoleContext.build(settings, client_factory=backend.factory())
    visitor = ConsoleContext.build(settings, client_factory=backend.factory())

    assert operator.gateway.login("a@b.com", "x").ok
    assert operator.gateway.auth_header() == {"Authorization": "Bearer t1"}
    assert not visitor.gateway.is_authenticated()

    visitor.gateway.logout()
    assert operator.gateway.is_authenticated()
    assert not operator.session_ended
