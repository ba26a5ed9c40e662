"""Shared pytest fixtures for the console tests."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Callable, Dict, List

import httpx
import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from visa_console.context import ConsoleContext  # noqa: E402
from visa_console.settings import Settings  # noqa: E402
from visa_console.utils.storage import MemoryKeyValueStorage  # noqa: E402

PDF_BYTES = b"%PDF-1.4 test document"


class FakeUpload:
    """Stand-in for a browser upload (Streamlit's UploadedFile has the same shape)."""

    def __init__(self, name: str = "grant.pdf", type: str = "application/pdf", data: bytes = PDF_BYTES):
        self.name = name
        self.type = type
        self.size = len(data)
        self._data = data

    def getvalue(self) -> bytes:
        return self._data


class RecordingBackend:
    """httpx MockTransport that remembers every request it answered."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda req: httpx.Response(
            200, json={"ok": True}
        )
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.handler(request)

    def factory(self):
        return lambda: httpx.Client(transport=self.transport)


def multipart_parts(request: httpx.Request) -> Dict[str, bytes]:
    boundary = request.headers["content-type"].split("boundary=")[1].encode()
    parts: Dict[str, bytes] = {}
    for chunk in request.content.split(b"--" + boundary):
        chunk = chunk.strip(b"\r\n")
        if not chunk or chunk == b"--":
            continue
        head, _, body = chunk.partition(b"\r\n\r\n")
        match = re.search(rb'name="([^"]+)"', head)
        parts[match.group(1).decode()] = body
    return parts


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        api_base_url="https://api.test",
        auth_base_url="https://auth.test/",
        session_backend="memory",
    )


@pytest.fixture()
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture()
def storage() -> MemoryKeyValueStorage:
    return MemoryKeyValueStorage()


@pytest.fixture()
def ctx(settings, storage, backend) -> ConsoleContext:
    return ConsoleContext.build(settings, storage=storage, client_factory=backend.factory())


@pytest.fixture()
def signed_in(ctx, backend) -> ConsoleContext:
    """Context with an admin session already established through the gateway."""
    previous = backend.handler
    backend.handler = lambda req: httpx.Response(
        200, json={"idToken": "t1", "email": "a@b.com", "role": "admin"}
    )
    assert ctx.gateway.login("a@b.com", "x").ok
    backend.handler = previous
    backend.requests.clear()
    return ctx
