from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from visa_console.config import CONDITION_FIELDS
from visa_console.errors import ConsoleError


@dataclass(frozen=True)
class Session:
    token: str
    email: str = ""
    role: str = ""

    def profile(self) -> Dict[str, str]:
        return {"email": self.email, "role": self.role}


class LoginResponse(BaseModel):
    """Body of a /admin/login response; extra keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    idToken: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class PdfAttachment:
    name: str
    size_bytes: int
    mime_type: str
    raw_bytes: bytes = field(repr=False)

    def as_upload(self) -> tuple:
        """(filename, content, content_type) tuple for an httpx ``files`` part."""
        return (self.name, self.raw_bytes, self.mime_type)


@dataclass
class ConditionRecord:
    code: str = ""
    description: str = ""
    details: str = ""
    reference: str = ""

    def is_filled(self) -> bool:
        return bool(self.code.strip()) and bool(self.description.strip())

    def to_dict(self) -> Dict[str, str]:
        return {k: getattr(self, k) for k in CONDITION_FIELDS}


class SubmissionState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCESS = "success"
    RECOVERABLE_ERROR = "recoverable_error"
    SESSION_EXPIRED = "session_expired"


@dataclass(frozen=True)
class SubmissionOutcome:
    state: SubmissionState
    message: str = ""
    created_at: float = field(default_factory=time.time)
    error: Optional[ConsoleError] = None
    response: Optional[Any] = field(default=None, repr=False)

    @property
    def is_error(self) -> bool:
        return self.state in (SubmissionState.RECOVERABLE_ERROR, SubmissionState.SESSION_EXPIRED)

    @classmethod
    def idle(cls) -> "SubmissionOutcome":
        return cls(SubmissionState.IDLE)
