from __future__ import annotations

import streamlit as st

from visa_console.config import CONDITION_FIELDS, CONDITION_PLACEHOLDERS, VISA_DETAIL_FIELDS
from visa_console.context import ConsoleContext
from visa_console.models import SubmissionState
from visa_console.ui.widgets import bump_form_version, form_version, pdf_intake, render_outcome

FORM_NAME = "visa_details"


def _render_conditions(ctx: ConsoleContext, v: int, locked: bool) -> None:
    form = ctx.visa_form
    st.markdown("**Visa conditions**")
    st.caption("Rows without both a code and a description are not submitted.")
    for idx, cond in enumerate(form.conditions):
        with st.container(border=True):
            head, remove = st.columns([5, 1])
            head.markdown(f"Condition {idx + 1}")
            if remove.button("Remove", key=f"vd_{v}_cond_{idx}_remove",
                             disabled=locked or len(form.conditions) <= 1):
                form.remove_condition(idx)
                # Rows below shift up; redraw every input from the model.
                bump_form_version(FORM_NAME)
                st.rerun()
            cols = st.columns(2)
            for i, key in enumerate(CONDITION_FIELDS):
                value = cols[i % 2].text_input(
                    key.capitalize(),
                    value=getattr(cond, key),
                    placeholder=CONDITION_PLACEHOLDERS[key],
                    key=f"vd_{v}_cond_{idx}_{key}",
                    disabled=locked,
                )
                form.set_condition_field(idx, key, value)
    if st.button("➕ Add condition", key=f"vd_{v}_add", disabled=locked):
        form.add_condition()
        st.rerun()


def render_vevo(ctx: ConsoleContext) -> None:
    form = ctx.visa_form
    controller = ctx.visa_controller
    locked = not controller.can_submit
    v = form_version(FORM_NAME)

    header, action = st.columns([4, 1])
    header.subheader("Visa Details Submitted" if form.submitted else "Enter Visa Details")
    if form.submitted and action.button("Submit another"):
        controller.reset()
        bump_form_version(FORM_NAME)
        st.rerun()

    render_outcome(controller, ctx.settings.error_notice_ttl_seconds)

    form.set_email(
        st.text_input("Email", value=form.email, placeholder="Enter email address",
                      key=f"vd_{v}_email", disabled=locked)
    )

    if form.submitted:
        st.info(f"Details for {form.email} were saved. Use **Submit another** to enter a new record.")
        return

    cols = st.columns(2)
    for i, f in enumerate(VISA_DETAIL_FIELDS):
        value = cols[i % 2].text_input(
            f["label"],
            value=form.fields[f["key"]],
            placeholder=f["placeholder"],
            key=f"vd_{v}_{f['key']}",
            disabled=locked,
        )
        form.set_field(f["key"], value)

    _render_conditions(ctx, v, locked)

    st.markdown("**Visa grant PDF**")
    pdf_intake(form.intake, key=f"vd_{v}_pdf", disabled=locked)

    if st.button("Submit visa details", type="primary", disabled=locked, use_container_width=True):
        with st.spinner("Submitting..."):
            outcome = controller.submit()
        if outcome.state is SubmissionState.SUCCESS:
            bump_form_version(FORM_NAME)
        st.rerun()
