from __future__ import annotations

from typing import List, Optional

from visa_console.config import DOCUMENT_STATUS_LABELS, STATUS_ICONS, STATUS_LABELS
from visa_console.forms.file_intake import FileIntake
from visa_console.models import PdfAttachment


def status_icon(label: str) -> str:
    return STATUS_ICONS.get(label, "⏳")


class DocumentStatusForm:
    """User email, visa type and status label, plus the PDF to attach."""

    def __init__(self, intake: Optional[FileIntake] = None):
        self.intake = intake or FileIntake()
        self.email = ""
        self.status = ""
        self.visa_type = ""

    @property
    def attachment(self) -> Optional[PdfAttachment]:
        return self.intake.selected

    def set_field(self, key: str, value: str) -> None:
        if key not in DOCUMENT_STATUS_LABELS:
            raise KeyError(f"Unknown document status field: {key}")
        setattr(self, key, value)

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.email.strip():
            missing.append(DOCUMENT_STATUS_LABELS["email"])
        if not self.visa_type.strip():
            missing.append(DOCUMENT_STATUS_LABELS["visa_type"])
        if self.status not in STATUS_LABELS:
            missing.append(DOCUMENT_STATUS_LABELS["status"])
        if self.attachment is None:
            missing.append("PDF document")
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def reset(self) -> None:
        self.email = ""
        self.status = ""
        self.visa_type = ""
        self.intake.remove()
