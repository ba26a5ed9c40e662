from __future__ import annotations

# ---------------------------
# Backend endpoints
# ---------------------------
# Paths are joined onto the base URLs from settings.

LOGIN_PATH = "/admin/login"
UPLOAD_DOC_PATH = "/upload/doc"
VISA_DETAILS_PATH = "/visa/user_details"


# ---------------------------
# Session storage keys
# ---------------------------
TOKEN_STORAGE_KEY = "authToken"
PROFILE_STORAGE_KEY = "userData"


# ---------------------------
# Attachments
# ---------------------------
PDF_MIME_TYPE = "application/pdf"


# ---------------------------
# Document status workflow
# ---------------------------
# Case-sensitive; the backend stores the label as sent.
STATUS_LABELS = (
    "Processing",
    "Visa grant",
    "Immi Refusal",
    "Finalized",
    "Pending",
    "Hold",
)

STATUS_ICONS = {
    "Processing": "⏳",
    "Visa grant": "✅",
    "Immi Refusal": "❌",
    "Finalized": "✅",
    "Pending": "⏳",
    "Hold": "🔒",
}

DOCUMENT_STATUS_LABELS = {
    "email": "User email address",
    "visa_type": "Visa type",
    "status": "User status",
}


# ---------------------------
# Visa details (VEVO) workflow
# ---------------------------
# Order is display order only; the payload is a flat mapping.
VISA_DETAIL_FIELDS = [
    {"key": "visaGrantNumber", "label": "Visa grant number", "placeholder": "e.g., 218957952581"},
    {"key": "currentDateTime", "label": "Current date and time", "placeholder": "e.g., Thursday August 21, 2025 15:10:22 (AEST) Canberra, Australia (GMT +1000)"},
    {"key": "familyName", "label": "Family name", "placeholder": "e.g., SHYAM LAL"},
    {"key": "visaDescription", "label": "Visa description", "placeholder": "e.g., VISITOR"},
    {"key": "documentNumber", "label": "Document number", "placeholder": "e.g., U9355845"},
    {"key": "countryOfPassport", "label": "Country of Passport", "placeholder": "e.g., INDIA"},
    {"key": "visaClass", "label": "Visa class / subclass", "placeholder": "e.g., FA / 600"},
    {"key": "visaStream", "label": "Visa stream", "placeholder": "e.g., Tourist"},
    {"key": "visaApplicant", "label": "Visa applicant", "placeholder": "e.g., Primary"},
    {"key": "visaGrantDate", "label": "Visa grant date", "placeholder": "e.g., 14 March 2025"},
    {"key": "visaExpiryDate", "label": "Visa expiry date", "placeholder": "e.g., 14 March 2028"},
    {"key": "location", "label": "Location", "placeholder": "e.g., Offshore"},
    {"key": "visaStatus", "label": "Visa status", "placeholder": "e.g., In Effect"},
    {"key": "entriesAllowed", "label": "Entries allowed", "placeholder": "e.g., Multiple entries ..."},
    {"key": "mustNotArriveAfter", "label": "Must not arrive after", "placeholder": "e.g., 14 March 2028"},
    {"key": "periodOfStay", "label": "Period of stay", "placeholder": "e.g., 03 months on each arrival"},
    {"key": "workEntitlements", "label": "Work entitlements", "placeholder": "e.g., The Visa Holder does not have Work Entitlements"},
    {"key": "workplaceRights", "label": "Workplace rights", "placeholder": "Workplace info..."},
    {"key": "workplaceRightsLink", "label": "Workplace rights Link", "placeholder": "https://..."},
    {"key": "studyEntitlements", "label": "Study entitlements", "placeholder": "Study entitlements..."},
]

VISA_DETAIL_KEYS = tuple(f["key"] for f in VISA_DETAIL_FIELDS)

CONDITION_FIELDS = ("code", "description", "details", "reference")
CONDITION_PLACEHOLDERS = {
    "code": "e.g., 8101",
    "description": "Brief description",
    "details": "Additional details",
    "reference": "Reference link",
}

# Backend key for the filtered condition list inside the JSON payload part.
CONDITIONS_PAYLOAD_KEY = "visaConditions"


# ---------------------------
# User-facing messages
# ---------------------------
MESSAGES = {
    "login_missing_fields": "Please fill in all fields",
    "login_invalid": "Invalid email or password",
    "login_no_token": "Authentication token not received",
    "login_interrupted": "Sign-in was interrupted. Please try again.",
    "network": "Network error. Please check your connection and try again.",
    "auth_required": "Authentication required. Please login again.",
    "session_expired": "Session expired. Please login again.",
    "not_a_pdf": "Please select a PDF file only",
    "missing_pdf": "Please select a PDF file before submitting.",
    "session_changed": "Your session changed while the request was in flight. Please login again.",
    "unexpected": "Submission failed unexpectedly. Please try again.",
    "unreadable_response": "The server response could not be read (HTTP {status}). Please try again.",
    "document_success": "Document uploaded and user status updated successfully.",
    "visa_success": "Visa details submitted successfully! Your information has been saved.",
}
