"""The two submissions the console makes, described for the SubmissionController.

A workflow binds a form to an endpoint: it knows how to check the form, how to
lay it out as multipart parts, what to say on success or failure, and what to
clear afterwards. The controller owns everything else.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Protocol, Tuple

from visa_console.config import MESSAGES, UPLOAD_DOC_PATH, VISA_DETAILS_PATH
from visa_console.forms.document_status import DocumentStatusForm
from visa_console.forms.visa_details import VisaDetailsForm
from visa_console.services.http_client import body_message

PDF_LABEL = "PDF document"

Multipart = Tuple[Dict[str, str], Dict[str, tuple]]


class SubmissionWorkflow(Protocol):
    name: str
    endpoint: str
    success_message: str

    def precondition_error(self) -> Optional[str]:
        ...

    def build_multipart(self) -> Multipart:
        ...

    def error_message(self, status_code: int, body: Any) -> str:
        ...

    def on_success(self) -> None:
        ...

    def reset(self) -> None:
        ...


def missing_fields_message(missing: List[str]) -> Optional[str]:
    if not missing:
        return None
    labels = [m for m in missing if m != PDF_LABEL]
    if not labels:
        return MESSAGES["missing_pdf"]
    message = f"Please fill in: {', '.join(labels)}."
    if PDF_LABEL in missing:
        message = f"{message} {MESSAGES['missing_pdf']}"
    return message


def _http_fallback(status_code: int) -> str:
    return f"HTTP error! status: {status_code}"


class DocumentStatusWorkflow:
    name = "document_status"
    endpoint = UPLOAD_DOC_PATH
    success_message = MESSAGES["document_success"]

    def __init__(self, form: DocumentStatusForm):
        self.form = form

    def precondition_error(self) -> Optional[str]:
        return missing_fields_message(self.form.missing_fields())

    def build_multipart(self) -> Multipart:
        data = {
            "email": self.form.email,
            "status": self.form.status,
            "visa_type": self.form.visa_type,
        }
        files = {"file": self.form.attachment.as_upload()}
        return data, files

    def error_message(self, status_code: int, body: Any) -> str:
        return f"Error: {body_message(body, 'message') or _http_fallback(status_code)}"

    def on_success(self) -> None:
        self.form.reset()

    def reset(self) -> None:
        self.form.reset()


class VisaDetailsWorkflow:
    name = "visa_details"
    endpoint = VISA_DETAILS_PATH
    success_message = MESSAGES["visa_success"]

    def __init__(self, form: VisaDetailsForm):
        self.form = form

    def precondition_error(self) -> Optional[str]:
        return missing_fields_message(self.form.missing_fields())

    def build_multipart(self) -> Multipart:
        data = {"payload": json.dumps(self.form.to_submission_payload())}
        files = {"pdf": self.form.attachment.as_upload()}
        return data, files

    def error_message(self, status_code: int, body: Any) -> str:
        detail = None
        if isinstance(body, dict) and body.get("detail"):
            detail = json.dumps(body["detail"])
        reason = body_message(body, "message") or detail or _http_fallback(status_code)
        return f"Submission failed: {reason}"

    def on_success(self) -> None:
        self.form.mark_submitted()

    def reset(self) -> None:
        self.form.reset()
