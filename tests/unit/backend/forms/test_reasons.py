"""
Unit Tests for the Reason Formatter.
"""

import itertools

from intake.backend.forms.reasons import NONE_SELECTED, REASON_LABELS, format_refund_reasons
from intake.backend.forms.state import REASON_KEYS


def test_none_selected_when_all_false():
    assert format_refund_reasons({key: False for key in REASON_KEYS}) == "None selected"


def test_none_selected_for_empty_mapping():
    assert format_refund_reasons({}) == NONE_SELECTED


def test_single_reason():
    assert format_refund_reasons({"duplicate_charge": True}) == "Duplicate Charge"


def test_all_reasons_in_declared_order():
    result = format_refund_reasons({key: True for key in reversed(REASON_KEYS)})

    assert result == (
        "Accidental Purchase, Duplicate Charge, Product Not as Described, "
        "Technical Issues, Subscription Cancellation, Billing Error, Other"
    )


def test_order_independent_of_input_order():
    chosen = ["other", "technical_issues", "accidental_purchase"]
    expected = "Accidental Purchase, Technical Issues, Other"

    for order in itertools.permutations(chosen):
        assert format_refund_reasons({key: True for key in order}) == expected


def test_false_flags_are_skipped():
    reasons = {"billing_error": True, "other": False, "duplicate_charge": False}

    assert format_refund_reasons(reasons) == "Billing Error"


def test_labels_cover_every_reason_key():
    assert tuple(key for key, _ in REASON_LABELS) == REASON_KEYS
