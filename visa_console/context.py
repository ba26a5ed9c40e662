from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from visa_console.forms.document_status import DocumentStatusForm
from visa_console.forms.visa_details import VisaDetailsForm
from visa_console.models import Session, SubmissionState
from visa_console.services.auth_service import AuthGateway
from visa_console.services.http_client import ClientFactory
from visa_console.services.session_store import SessionStore
from visa_console.services.submission_service import SubmissionController
from visa_console.services.workflows import DocumentStatusWorkflow, VisaDetailsWorkflow
from visa_console.settings import Settings
from visa_console.utils.storage import KeyValueStorage, create_storage

logger = logging.getLogger(__name__)


@dataclass
class ConsoleContext:
    """Everything one operator's browser session works with, wired together."""

    settings: Settings
    store: SessionStore
    gateway: AuthGateway
    document_form: DocumentStatusForm
    visa_form: VisaDetailsForm
    document_controller: SubmissionController
    visa_controller: SubmissionController
    session_ended: bool = field(default=False)

    @classmethod
    def build(
        cls,
        settings: Settings,
        storage: Optional[KeyValueStorage] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> "ConsoleContext":
        store = SessionStore(storage if storage is not None else create_storage(settings))
        gateway = AuthGateway(settings, store, client_factory=client_factory)
        document_form = DocumentStatusForm()
        visa_form = VisaDetailsForm()
        ctx = cls(
            settings=settings,
            store=store,
            gateway=gateway,
            document_form=document_form,
            visa_form=visa_form,
            document_controller=SubmissionController(DocumentStatusWorkflow(document_form), gateway),
            visa_controller=SubmissionController(VisaDetailsWorkflow(visa_form), gateway),
        )
        gateway.subscribe(ctx._on_session_change)
        return ctx

    @property
    def controllers(self):
        return (self.document_controller, self.visa_controller)

    def _on_session_change(self, session: Optional[Session]) -> None:
        if session is None:
            logger.info("Session ended; pages will ask for sign-in")
            self.session_ended = True
            return
        self.session_ended = False
        # A fresh sign-in makes forms stopped by an expired session editable again.
        for controller in self.controllers:
            if controller.state is SubmissionState.SESSION_EXPIRED:
                controller.acknowledge()
