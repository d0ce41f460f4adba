"""Reason Formatter: flatten the refund reason flags into one display string."""

from collections.abc import Mapping

REASON_LABELS: tuple[tuple[str, str], ...] = (
    ("accidental_purchase", "Accidental Purchase"),
    ("duplicate_charge", "Duplicate Charge"),
    ("product_not_as_described", "Product Not as Described"),
    ("technical_issues", "Technical Issues"),
    ("subscription_cancellation", "Subscription Cancellation"),
    ("billing_error", "Billing Error"),
    ("other", "Other"),
)

NONE_SELECTED = "None selected"


def format_refund_reasons(reasons: Mapping[str, bool]) -> str:
    # Declaration order, never the order of the incoming mapping
    labels = [label for key, label in REASON_LABELS if reasons.get(key)]
    return ", ".join(labels) if labels else NONE_SELECTED
