from __future__ import annotations

import streamlit as st

from visa_console.forms.file_intake import FileIntake, rejection_message
from visa_console.models import SubmissionState
from visa_console.services.submission_service import SubmissionController
from visa_console.utils.pdf_preview import get_page_count, render_pdf_page_png_bytes
from visa_console.utils.storage import format_bytes


def form_version(name: str) -> int:
    """Widget-key generation for a form; bumping it redraws inputs from the model."""
    versions = st.session_state.setdefault("form_versions", {})
    return versions.setdefault(name, 0)


def bump_form_version(name: str) -> None:
    versions = st.session_state.setdefault("form_versions", {})
    versions[name] = versions.get(name, 0) + 1


def render_outcome(controller: SubmissionController, ttl: float) -> None:
    if controller.notice_expired(ttl=ttl):
        controller.acknowledge()
    outcome = controller.outcome
    if outcome.state is SubmissionState.SUCCESS:
        st.success(outcome.message, icon="✅")
    elif outcome.state is SubmissionState.RECOVERABLE_ERROR:
        st.error(outcome.message, icon="❌")
    elif outcome.state is SubmissionState.SESSION_EXPIRED:
        st.warning(outcome.message, icon="🔒")


def pdf_intake(intake: FileIntake, key: str, disabled: bool = False) -> None:
    """Uploader feeding a FileIntake; the intake, not the widget, holds the file.

    The uploader is cleared after every change so the card below always shows
    what will actually be sent.
    """
    nonce_key = f"{key}__nonce"
    rejection_key = f"{key}__rejection"
    widget_key = f"{key}__{st.session_state.setdefault(nonce_key, 0)}"

    def _on_change() -> None:
        files = st.session_state.get(widget_key) or []
        reason = intake.on_drop(files)
        if reason is not None:
            st.session_state[rejection_key] = rejection_message(reason)
        else:
            st.session_state.pop(rejection_key, None)
        st.session_state[nonce_key] += 1

    st.file_uploader(
        "Drag and drop a PDF file here, or click to browse",
        accept_multiple_files=True,
        key=widget_key,
        on_change=_on_change,
        disabled=disabled,
        help="PDF files only (full file will be uploaded). Only the first file is used.",
    )

    if st.session_state.get(rejection_key):
        st.error(st.session_state[rejection_key], icon="❌")

    attachment = intake.selected
    if attachment is None:
        st.caption("No PDF selected yet.")
        return

    with st.container(border=True):
        info, preview = st.columns([2, 1])
        with info:
            st.markdown(f"**File ready for upload:** {attachment.name}")
            st.caption(f"Size: {format_bytes(attachment.size_bytes)}")
            try:
                st.caption(f"Pages: {get_page_count(attachment.raw_bytes)}")
            except Exception:
                st.caption("Pages: (could not be read locally; the server will decide)")
            if st.button("Remove PDF", key=f"{key}__remove", disabled=disabled):
                intake.remove()
                st.session_state.pop(rejection_key, None)
                st.rerun()
        with preview:
            try:
                st.image(render_pdf_page_png_bytes(attachment.raw_bytes, 1, zoom=0.6), caption="Page 1")
            except Exception:
                st.caption("Preview unavailable.")
