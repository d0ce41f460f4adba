"""
Unit Tests for the Validation Gate policies.
"""

import pytest

from intake.backend.forms.state import bind_field, cancellation_defaults, refund_defaults
from intake.backend.forms.validation import (
    REFUND_REQUIRED_FIELDS,
    accept_all,
    all_fields_present,
    get_policy,
    required_fields_present,
)

CANCELLATION_VALUES = {
    "full_name": "Jane Doe",
    "billing_address": "1 Main St",
    "cell_phone": "555-0100",
    "home_phone": "555-0101",
    "cancellation_reason": "No Longer Needed",
    "remote_software": "AnyDesk",
    "remote_id": "123 456 789",
    "remote_pass": "abc123",
}


def _filled_cancellation() -> dict:
    state = cancellation_defaults()
    for name, value in CANCELLATION_VALUES.items():
        bind_field(state, name, value)
    return state


class TestAllFieldsPresent:
    """Cancellation policy: every field non-empty after trimming."""

    def test_open_when_all_filled(self):
        assert all_fields_present(_filled_cancellation()) is True

    def test_closed_on_defaults(self):
        assert all_fields_present(cancellation_defaults()) is False

    @pytest.mark.parametrize("field", list(CANCELLATION_VALUES))
    def test_closed_when_any_single_field_empty(self, field):
        state = _filled_cancellation()
        state[field] = ""

        assert all_fields_present(state) is False

    @pytest.mark.parametrize("blank", [" ", "\t", "  \n "])
    def test_whitespace_only_counts_as_empty(self, blank):
        state = _filled_cancellation()
        state["remote_pass"] = blank

        assert all_fields_present(state) is False


class TestRequiredFieldsPresent:
    """Refund required_fields policy."""

    def _filled_refund(self) -> dict:
        state = refund_defaults()
        for name in REFUND_REQUIRED_FIELDS:
            if isinstance(state[name], bool):
                bind_field(state, name, checked=True)
            else:
                bind_field(state, name, "x")
        return state

    def test_open_when_required_filled_and_optional_empty(self):
        policy = required_fields_present(REFUND_REQUIRED_FIELDS)

        assert policy(self._filled_refund()) is True

    def test_closed_when_declaration_unchecked(self):
        policy = required_fields_present(REFUND_REQUIRED_FIELDS)
        state = self._filled_refund()
        state["customer_declaration"] = False

        assert policy(state) is False

    def test_closed_when_bank_name_blank(self):
        policy = required_fields_present(REFUND_REQUIRED_FIELDS)
        state = self._filled_refund()
        state["bank_name"] = "   "

        assert policy(state) is False

    def test_unknown_field_counts_as_missing(self):
        policy = required_fields_present(["no_such_field"])

        assert policy(refund_defaults()) is False


class TestAcceptAll:
    def test_open_on_empty_refund_form(self):
        assert accept_all(refund_defaults()) is True


class TestGetPolicy:
    def test_named_policies(self):
        assert get_policy("all_fields") is all_fields_present
        assert get_policy("accept_all") is accept_all
        assert get_policy("required_fields")(refund_defaults()) is False

    def test_unknown_name_raises(self):
        with pytest.raises(KeyError):
            get_policy("strict")
