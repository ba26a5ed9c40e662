"""Visa admin console package backing the Streamlit app.

Modules are organized into:
- config / settings: constants, endpoints and environment-driven settings
- services: session store, auth gateway, submission workflows and controller
- forms: in-memory form models and the PDF intake slot
- utils: storage and PDF preview helpers
- ui: Streamlit pages and widgets
"""
