from __future__ import annotations

import streamlit as st

from visa_console.context import ConsoleContext
from visa_console.logging import configure_logging, logger
from visa_console.settings import load_settings
from visa_console.ui.dashboard import render_document_review
from visa_console.ui.debug import debug_panel
from visa_console.ui.login_page import render_login
from visa_console.ui.vevo_panel import render_vevo

PAGES = {
    "📄 Document review": render_document_review,
    "🛂 VEVO details": render_vevo,
}


def get_context() -> ConsoleContext:
    """One wired-up console per browser session, built on first run."""
    if "console" not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_level)
        st.session_state.console = ConsoleContext.build(settings)
        logger.info("Console ready (api=%s, session backend=%s)", settings.api_base_url, settings.session_backend)
    return st.session_state.console


st.set_page_config(page_title="Visa Admin Console", layout="wide")

ctx = get_context()

if ctx.settings.debug_panel:
    debug_panel(ctx)

# Route guard: nothing past this point renders without a session.
if not ctx.gateway.is_authenticated():
    render_login(ctx)
    st.stop()

session = ctx.gateway.current_session()
st.sidebar.markdown("### Admin Dashboard")
st.sidebar.caption(f"Signed in as **{session.email or 'unknown'}**" + (f" ({session.role})" if session.role else ""))
page = st.sidebar.radio("Panel", list(PAGES), key="page")
if st.sidebar.button("Sign Out"):
    ctx.gateway.logout()
    ctx.session_ended = False
    st.rerun()

st.title("Admin Dashboard")
try:
    PAGES[page](ctx)
except Exception as e:
    logger.exception("Panel %s failed", page)
    st.error("Something went wrong while rendering this panel. See traceback below.")
    st.exception(e)
