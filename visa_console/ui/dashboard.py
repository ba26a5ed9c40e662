from __future__ import annotations

import streamlit as st

from visa_console.config import STATUS_LABELS
from visa_console.context import ConsoleContext
from visa_console.forms.document_status import status_icon
from visa_console.models import SubmissionState
from visa_console.ui.widgets import bump_form_version, form_version, pdf_intake, render_outcome

FORM_NAME = "document_status"


def render_document_review(ctx: ConsoleContext) -> None:
    form = ctx.document_form
    controller = ctx.document_controller
    locked = not controller.can_submit
    v = form_version(FORM_NAME)

    st.subheader("📄 Document Review & Status Update")
    st.caption("Upload user documents and update their verification status")

    form.set_field(
        "email",
        st.text_input("✉️ User Email Address", value=form.email, placeholder="user@example.com",
                      key=f"ds_{v}_email", disabled=locked),
    )
    form.set_field(
        "visa_type",
        st.text_input("💳 Visa Type", value=form.visa_type,
                      placeholder="e.g., Tourist Visa, Student Visa, Work Visa",
                      key=f"ds_{v}_visa_type", disabled=locked),
    )

    st.markdown("**⬆️ Document Upload**")
    pdf_intake(form.intake, key=f"ds_{v}_pdf", disabled=locked)

    options = [""] + list(STATUS_LABELS)
    current = form.status if form.status in STATUS_LABELS else ""
    status = st.selectbox(
        f"{status_icon(form.status)} User Status",
        options,
        index=options.index(current),
        format_func=lambda s: f"{status_icon(s)} {s}" if s else "-- Select Status --",
        key=f"ds_{v}_status",
        disabled=locked,
    )
    form.set_field("status", status)

    if st.button("Upload Document & Update Status", type="primary", disabled=locked,
                 use_container_width=True):
        with st.spinner("Uploading Document..."):
            outcome = controller.submit()
        if outcome.state is SubmissionState.SUCCESS:
            bump_form_version(FORM_NAME)
        st.rerun()

    render_outcome(controller, ctx.settings.error_notice_ttl_seconds)

    if controller.state is SubmissionState.SUCCESS:
        if st.button("Start new upload"):
            controller.reset()
            bump_form_version(FORM_NAME)
            st.rerun()
