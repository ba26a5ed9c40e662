from __future__ import annotations

import streamlit as st

from visa_console.context import ConsoleContext


def render_login(ctx: ConsoleContext) -> None:
    st.title("🛡️ Admin Login")
    st.caption("Sign in to your dashboard")

    if ctx.session_ended:
        st.info("Your session has ended. Please sign in again.")

    with st.form("login", clear_on_submit=False):
        email = st.text_input("Email Address", placeholder="admin@example.com")
        password = st.text_input("Password", type="password", placeholder="Enter your password")
        submitted = st.form_submit_button("Sign In", type="primary", use_container_width=True)

    if submitted:
        with st.spinner("Signing in..."):
            result = ctx.gateway.login(email, password)
        if result.ok:
            st.rerun()
        else:
            st.error(result.error.message)

    st.caption("Secure admin access only")
