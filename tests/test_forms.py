"""Tests for the visa-details and document-status form models."""

from __future__ import annotations

import pytest

from tests.conftest import FakeUpload
from visa_console.config import VISA_DETAIL_KEYS
from visa_console.forms.document_status import DocumentStatusForm, status_icon
from visa_console.forms.visa_details import VisaDetailsForm
from visa_console.models import ConditionRecord


def _filled_visa_form() -> VisaDetailsForm:
    form = VisaDetailsForm()
    form.set_email("holder@example.com")
    for key in VISA_DETAIL_KEYS:
        form.set_field(key, f"value of {key}")
    form.intake.on_browse([FakeUpload()])
    return form


def test_visa_form_has_twenty_fixed_fields_and_one_condition():
    form = VisaDetailsForm()

    assert len(form.fields) == 20
    assert list(form.fields) == list(VISA_DETAIL_KEYS)
    assert form.conditions == [ConditionRecord()]


def test_set_field_rejects_unknown_keys():
    form = VisaDetailsForm()

    with pytest.raises(KeyError):
        form.set_field("nickname", "x")
    with pytest.raises(KeyError):
        form.set_condition_field(0, "severity", "high")


def test_remove_condition_never_empties_the_list():
    form = VisaDetailsForm()

    assert form.remove_condition(0) is False
    assert len(form.conditions) == 1

    form.add_condition()
    form.add_condition()
    form.set_condition_field(1, "code", "8201")
    form.set_condition_field(2, "code", "8501")

    assert form.remove_condition(1) is True
    assert [c.code for c in form.conditions] == ["", "8501"]
    assert form.remove_condition(0) is True
    assert form.remove_condition(0) is False
    assert [c.code for c in form.conditions] == ["8501"]


def test_remove_condition_rejects_positions_outside_the_list():
    form = VisaDetailsForm()
    form.add_condition()
    form.set_condition_field(1, "code", "8501")

    assert form.remove_condition(-1) is False
    assert form.remove_condition(2) is False
    assert [c.code for c in form.conditions] == ["", "8501"]


def test_missing_fields_lists_labels_in_display_order():
    form = VisaDetailsForm()
    form.set_field("familyName", "SHYAM LAL")

    missing = form.missing_fields()

    assert missing[0] == "Email"
    assert missing[1] == "Visa grant number"
    assert "Family name" not in missing
    assert missing[-1] == "PDF document"
    assert not form.is_complete()


def test_whitespace_only_values_are_incomplete():
    form = _filled_visa_form()
    assert form.is_complete()

    form.set_field("visaStream", "   ")

    assert form.missing_fields() == ["Visa stream"]


def test_payload_drops_conditions_without_code_and_description():
    form = _filled_visa_form()
    form.set_condition_field(0, "code", "8101")
    form.set_condition_field(0, "description", "No work")
    form.add_condition()
    form.set_condition_field(1, "code", "8201")
    form.set_condition_field(1, "details", "typed but dropped")
    form.set_condition_field(1, "reference", "https://example.com")
    form.add_condition()
    form.set_condition_field(2, "code", "  ")
    form.set_condition_field(2, "description", "blank code")

    payload = form.to_submission_payload()

    assert payload["visaConditions"] == [
        {"code": "8101", "description": "No work", "details": "", "reference": ""}
    ]


def test_payload_keeps_filled_conditions_verbatim_and_flattens_fields():
    form = _filled_visa_form()
    form.set_condition_field(0, "code", " 8101 ")
    form.set_condition_field(0, "description", "No work ")
    form.set_condition_field(0, "reference", "ref")

    payload = form.to_submission_payload()

    assert payload["email"] == "holder@example.com"
    assert payload["familyName"] == "value of familyName"
    assert set(payload) == {"email", "visaConditions", *VISA_DETAIL_KEYS}
    assert payload["visaConditions"] == [
        {"code": " 8101 ", "description": "No work ", "details": "", "reference": "ref"}
    ]


def test_mark_submitted_keeps_email_only():
    form = _filled_visa_form()
    form.add_condition()

    form.mark_submitted()

    assert form.submitted
    assert form.email == "holder@example.com"
    assert all(v == "" for v in form.fields.values())
    assert form.conditions == [ConditionRecord()]
    assert form.attachment is None

    form.reset()
    assert form.email == ""
    assert not form.submitted


def test_document_status_requires_known_label():
    form = DocumentStatusForm()
    form.set_field("email", "user@example.com")
    form.set_field("visa_type", "Student Visa")
    form.set_field("status", "visa grant")
    form.intake.on_browse([FakeUpload()])

    assert form.missing_fields() == ["User status"]

    form.set_field("status", "Visa grant")
    assert form.is_complete()

    form.reset()
    assert form.missing_fields() == ["User email address", "Visa type", "User status", "PDF document"]


def test_status_icons():
    assert status_icon("Visa grant") == "✅"
    assert status_icon("Immi Refusal") == "❌"
    assert status_icon("Hold") == "🔒"
    assert status_icon("") == "⏳"
