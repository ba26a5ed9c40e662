"""Single-slot PDF intake shared by both submission forms.

Drops and picker selections go through the same path: only the first file is
considered, and it is accepted only when the browser reported
``application/pdf``. Size is left to the backend to police.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from visa_console.config import MESSAGES, PDF_MIME_TYPE
from visa_console.models import PdfAttachment

logger = logging.getLogger(__name__)


class IntakeRejection(str, Enum):
    NOT_A_PDF = "NotAPdf"


RejectionListener = Callable[[IntakeRejection], None]


def rejection_message(reason: IntakeRejection) -> str:
    if reason is IntakeRejection.NOT_A_PDF:
        return MESSAGES["not_a_pdf"]
    return str(reason.value)


def _read_bytes(upload: Any) -> bytes:
    if hasattr(upload, "getvalue"):
        return upload.getvalue()
    data = upload.read()
    if hasattr(upload, "seek"):
        upload.seek(0)
    return data


class FileIntake:
    def __init__(self) -> None:
        self.selected: Optional[PdfAttachment] = None
        self.drag_active = False
        self._listeners: List[RejectionListener] = []

    def subscribe(self, listener: RejectionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_drag_enter(self) -> None:
        self.drag_active = True

    def on_drag_over(self) -> None:
        self.drag_active = True

    def on_drag_leave(self) -> None:
        self.drag_active = False

    def on_drop(self, files: Sequence[Any]) -> Optional[IntakeRejection]:
        self.drag_active = False
        return self._accept(files, source="drop")

    def on_browse(self, files: Sequence[Any]) -> Optional[IntakeRejection]:
        return self._accept(files, source="browse")

    def remove(self) -> None:
        self.selected = None

    def _accept(self, files: Sequence[Any], source: str) -> Optional[IntakeRejection]:
        files = list(files or [])
        if not files:
            return None
        upload = files[0]
        if len(files) > 1:
            logger.debug("Ignoring %d extra file(s) from %s", len(files) - 1, source)

        name = getattr(upload, "name", "") or "document.pdf"
        mime_type = getattr(upload, "type", "") or ""
        logger.info("File from %s: %s (%s)", source, name, mime_type or "unknown type")
        if mime_type != PDF_MIME_TYPE:
            for listener in list(self._listeners):
                listener(IntakeRejection.NOT_A_PDF)
            return IntakeRejection.NOT_A_PDF

        raw = _read_bytes(upload)
        size = getattr(upload, "size", None)
        self.selected = PdfAttachment(
            name=name,
            size_bytes=int(size) if size is not None else len(raw),
            mime_type=mime_type,
            raw_bytes=raw,
        )
        return None
