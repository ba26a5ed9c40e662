from __future__ import annotations

from typing import Any, Dict, List, Optional

from visa_console.config import (
    CONDITION_FIELDS,
    CONDITIONS_PAYLOAD_KEY,
    VISA_DETAIL_FIELDS,
    VISA_DETAIL_KEYS,
)
from visa_console.forms.file_intake import FileIntake
from visa_console.models import ConditionRecord, PdfAttachment


class VisaDetailsForm:
    """Visa-grant record: email, 20 fixed fields, condition rows and one PDF.

    Condition rows are addressed by list position. Rows are only appended or
    removed, never reordered, so an index stays valid for the row the operator
    is looking at. Completeness is checked at submit time only.
    """

    def __init__(self, intake: Optional[FileIntake] = None):
        self.intake = intake or FileIntake()
        self.email = ""
        self.fields: Dict[str, str] = {}
        self.conditions: List[ConditionRecord] = []
        self.submitted = False
        self._clear_record()

    @property
    def attachment(self) -> Optional[PdfAttachment]:
        return self.intake.selected

    def set_email(self, value: str) -> None:
        self.email = value

    def set_field(self, key: str, value: str) -> None:
        if key not in self.fields:
            raise KeyError(f"Unknown visa detail field: {key}")
        self.fields[key] = value

    def add_condition(self) -> None:
        self.conditions.append(ConditionRecord())

    def remove_condition(self, index: int) -> bool:
        """Remove the row at ``index``; refused while only one row is left
        or when ``index`` is not a row position."""
        if len(self.conditions) <= 1 or not 0 <= index < len(self.conditions):
            return False
        del self.conditions[index]
        return True

    def set_condition_field(self, index: int, key: str, value: str) -> None:
        if key not in CONDITION_FIELDS:
            raise KeyError(f"Unknown condition field: {key}")
        setattr(self.conditions[index], key, value)

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.email.strip():
            missing.append("Email")
        for f in VISA_DETAIL_FIELDS:
            if not self.fields[f["key"]].strip():
                missing.append(f["label"])
        if self.attachment is None:
            missing.append("PDF document")
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def to_submission_payload(self) -> Dict[str, Any]:
        # Rows without a code and description are dropped even when details or
        # reference were typed in; the backend only stores complete conditions.
        payload: Dict[str, Any] = {"email": self.email}
        payload.update(self.fields)
        payload[CONDITIONS_PAYLOAD_KEY] = [c.to_dict() for c in self.conditions if c.is_filled()]
        return payload

    def mark_submitted(self) -> None:
        """Clear the record after a successful submit; email and banner stay."""
        self._clear_record()
        self.submitted = True

    def reset(self) -> None:
        self._clear_record()
        self.email = ""
        self.submitted = False

    def _clear_record(self) -> None:
        self.fields = {key: "" for key in VISA_DETAIL_KEYS}
        self.conditions = [ConditionRecord()]
        self.intake.remove()
