"""
Unit Tests for Form State and the Field Binder.
"""

import pytest

from intake.backend.core.exceptions import ValidationError
from intake.backend.forms.state import (
    REASON_KEYS,
    REASONS_FIELD,
    bind_field,
    cancellation_defaults,
    refund_defaults,
)


class TestDefaults:
    """Tests for page default factories."""

    def test_cancellation_has_eight_fields(self):
        state = cancellation_defaults()

        assert len(state) == 8
        assert state["full_name"] == ""
        assert state["cancellation_reason"] == "Not Compatible"
        assert state["remote_software"] == "Alpemix"

    def test_refund_reasons_cover_fixed_keys_all_false(self):
        reasons = refund_defaults()[REASONS_FIELD]

        assert tuple(reasons) == REASON_KEYS
        assert len(reasons) == 7
        assert not any(reasons.values())

    def test_refund_checkboxes_start_unchecked(self):
        state = refund_defaults()

        assert state["policy_acknowledgment"] is False
        assert state["customer_declaration"] is False

    def test_factories_return_independent_copies(self):
        first = refund_defaults()
        second = refund_defaults()

        first[REASONS_FIELD]["other"] = True

        assert second[REASONS_FIELD]["other"] is False


class TestBindField:
    """Tests for bind_field."""

    def test_stores_raw_string(self):
        state = cancellation_defaults()

        bind_field(state, "full_name", "  Jane Doe  ")

        assert state["full_name"] == "  Jane Doe  "

    def test_accepts_empty_value(self):
        state = cancellation_defaults()
        bind_field(state, "full_name", "Jane")

        bind_field(state, "full_name", "")

        assert state["full_name"] == ""

    def test_select_accepts_value_outside_choices(self):
        state = cancellation_defaults()

        bind_field(state, "remote_software", "Something Else")

        assert state["remote_software"] == "Something Else"

    def test_checkbox_stores_boolean(self):
        state = refund_defaults()

        bind_field(state, "policy_acknowledgment", checked=True)

        assert state["policy_acknowledgment"] is True

    def test_checkbox_ignores_value(self):
        state = refund_defaults()

        bind_field(state, "customer_declaration", value="on", checked=False)

        assert state["customer_declaration"] is False

    def test_reason_updates_only_its_flag(self):
        state = refund_defaults()
        bind_field(state, "reason_billing_error", checked=True)

        bind_field(state, "reason_other", checked=True)
        bind_field(state, "reason_billing_error", checked=False)

        reasons = state[REASONS_FIELD]
        assert reasons["other"] is True
        assert reasons["billing_error"] is False
        assert sum(reasons.values()) == 1

    def test_unknown_field_raises(self):
        state = cancellation_defaults()

        with pytest.raises(ValidationError) as exc_info:
            bind_field(state, "favourite_colour", "blue")

        assert exc_info.value.details == {"field": "favourite_colour"}

    def test_unknown_reason_raises(self):
        state = refund_defaults()

        with pytest.raises(ValidationError):
            bind_field(state, "reason_bored", checked=True)

    def test_reason_on_page_without_reasons_raises(self):
        state = cancellation_defaults()

        with pytest.raises(ValidationError):
            bind_field(state, "reason_other", checked=True)

    def test_reasons_mapping_cannot_be_overwritten(self):
        state = refund_defaults()

        with pytest.raises(ValidationError):
            bind_field(state, REASONS_FIELD, "everything")

    def test_returns_same_state(self):
        state = cancellation_defaults()

        assert bind_field(state, "remote_id", "123") is state
