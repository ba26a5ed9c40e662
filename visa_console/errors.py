"""Error taxonomy shared by the gateway, the forms and the submission controller.

Components hand these back inside result objects (``LoginResult``,
``SubmissionOutcome``) instead of raising them across their boundary.
"""

from __future__ import annotations

from typing import Optional


class ConsoleError(Exception):
    recoverable = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ConsoleError):
    """A local precondition failed; no request was sent."""


class AuthError(ConsoleError):
    """Missing or rejected credential; the operator must sign in again."""

    recoverable = False


class InvalidCredentials(AuthError):
    pass


class ServerError(ConsoleError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(ConsoleError):
    """No response was obtained (DNS, refused connection, timeout)."""
