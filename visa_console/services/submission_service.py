"""Request/response state machine shared by both submission pages.

    IDLE -> IN_FLIGHT -> SUCCESS | RECOVERABLE_ERROR | SESSION_EXPIRED

SUCCESS is left only through ``reset()``. RECOVERABLE_ERROR keeps every input
and allows another ``submit()``. SESSION_EXPIRED means the operator has to sign
in again; ``acknowledge()`` returns to IDLE with the form intact afterwards.
Nothing is retried.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from visa_console.config import MESSAGES
from visa_console.errors import AuthError, ConsoleError, NetworkError, ServerError, ValidationError
from visa_console.models import SubmissionOutcome, SubmissionState
from visa_console.services.auth_service import AuthGateway
from visa_console.services.http_client import ClientFactory, read_json
from visa_console.services.workflows import SubmissionWorkflow

logger = logging.getLogger(__name__)

SUBMITTABLE_STATES = (SubmissionState.IDLE, SubmissionState.RECOVERABLE_ERROR)


class SubmissionController:
    def __init__(
        self,
        workflow: SubmissionWorkflow,
        gateway: AuthGateway,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.workflow = workflow
        self.gateway = gateway
        self.client_factory = client_factory or gateway.client_factory
        self.outcome = SubmissionOutcome.idle()

    @property
    def state(self) -> SubmissionState:
        return self.outcome.state

    @property
    def in_flight(self) -> bool:
        return self.state is SubmissionState.IN_FLIGHT

    @property
    def can_submit(self) -> bool:
        return self.state in SUBMITTABLE_STATES

    def submit(self) -> SubmissionOutcome:
        name = self.workflow.name
        if not self.can_submit:
            logger.debug("Ignoring %s submit while %s", name, self.state.value)
            return self.outcome

        problem = self.workflow.precondition_error()
        if problem:
            logger.info("%s submit blocked: %s", name, problem)
            return self._fail(ValidationError(problem))

        token = self.gateway.current_token()
        if not token:
            self.gateway.logout()
            return self._fail(AuthError(MESSAGES["auth_required"]))

        data, files = self.workflow.build_multipart()
        url = self.gateway.settings.api_url(self.workflow.endpoint)
        self.outcome = SubmissionOutcome(SubmissionState.IN_FLIGHT)
        logger.info("Submitting %s to %s", name, url)
        try:
            with self.client_factory() as client:
                response = client.post(url, data=data, files=files, headers=self.gateway.auth_header())
        except httpx.RequestError as e:
            logger.warning("%s submit got no response: %s", name, e)
            return self._fail(NetworkError(MESSAGES["network"]))
        except Exception:
            logger.exception("%s submit failed unexpectedly", name)
            return self._fail(ConsoleError(MESSAGES["unexpected"]))

        return self._handle_response(response, token)

    def _handle_response(self, response: httpx.Response, token: str) -> SubmissionOutcome:
        name = self.workflow.name
        status = response.status_code

        if status == 401:
            # Only the session that sent the request is dropped; a newer one survives.
            if self.gateway.is_current(token):
                self.gateway.handle_unauthorized()
            return self._fail(AuthError(MESSAGES["session_expired"]))

        if not self.gateway.is_current(token):
            logger.warning("Discarding %s response (HTTP %s); session changed while in flight", name, status)
            return self._fail(AuthError(MESSAGES["session_changed"]))

        body = read_json(response)
        if not response.is_success:
            logger.info("%s rejected with HTTP %s", name, status)
            return self._fail(ServerError(self.workflow.error_message(status, body), status))

        if body is None:
            logger.warning("%s got HTTP %s with an unreadable body", name, status)
            return self._fail(ServerError(MESSAGES["unreadable_response"].format(status=status), status))

        self.workflow.on_success()
        logger.info("%s accepted (HTTP %s)", name, status)
        self.outcome = SubmissionOutcome(SubmissionState.SUCCESS, self.workflow.success_message, response=body)
        return self.outcome

    def reset(self) -> None:
        self.workflow.reset()
        self.outcome = SubmissionOutcome.idle()

    def acknowledge(self) -> None:
        if self.outcome.is_error:
            self.outcome = SubmissionOutcome.idle()

    def notice_expired(self, now: Optional[float] = None, ttl: float = 5.0) -> bool:
        """Error notices fade after ``ttl`` seconds; success banners stay."""
        if not self.outcome.is_error:
            return False
        now = time.time() if now is None else now
        return now - self.outcome.created_at >= ttl

    def _fail(self, error: ConsoleError) -> SubmissionOutcome:
        state = SubmissionState.RECOVERABLE_ERROR if error.recoverable else SubmissionState.SESSION_EXPIRED
        self.outcome = SubmissionOutcome(state, error.message, error=error)
        return self.outcome
