"""
Form State.

Per-page mapping of field name to the value the user last entered, and the
binder that applies one input-change event to it.

A value is one of:
    str              - text inputs, selects, dates, textareas
    bool             - checkboxes
    dict[str, bool]  - the refund page's multi-select reasons

Field sets are fixed per page: the defaults factories below are the single
source of truth for which names exist and what type each one holds.
"""

from typing import Any

from intake.backend.core.exceptions import ValidationError

FormValue = str | bool | dict[str, bool]
FormState = dict[str, FormValue]

REASON_PREFIX = "reason_"
REASONS_FIELD = "refund_reasons"

# =============================================================================
# Choice lists (select options). Binding never enforces these.
# =============================================================================

CANCELLATION_REASONS = (
    "Not Compatible",
    "Software Not Working",
    "No Longer Needed",
)

REMOTE_SOFTWARE = (
    "Alpemix",
    "Ultra Viewer",
    "Chromebook",
    "AnyDesk",
    "Hoptodesk",
    "Teamviewer",
)

CUSTOMER_TYPES = ("Individual", "Business", "Education", "Government")

PURCHASE_CHANNELS = ("Store", "Partner", "Online", "Enterprise Agreement")

PRODUCT_CATEGORIES = {
    "Paid Antivirus & Security Suites": (
        "Norton Antivirus / Norton 360",
        "McAfee Total Protection / McAfee Antivirus",
        "Bitdefender Antivirus / Total Security",
        "Trend Micro Antivirus / Internet Security",
        "Kaspersky Anti-Virus / Total Security",
    ),
    "Free or Free-Tier Antivirus": (
        "Avast Free Antivirus / Avast Ultimate",
        "AVG AntiVirus Free",
        "Microsoft Defender Antivirus",
        "Avira Free Security",
    ),
    "Other Security Tools": (
        "ESET NOD32 Antivirus",
        "Malwarebytes",
        "TotalAV Antivirus",
        "Sophos Home",
        "Webroot SecureAnywhere",
        "Quick Heal AntiVirus Pro",
        "K7 Antivirus Premium",
        "360 Total Security",
        "ClamAV",
        "Immunet",
    ),
}

PAYMENT_METHODS = ("Credit Card", "Debit Card", "PayPal", "Bank Transfer", "Other")

# =============================================================================
# Defaults
# =============================================================================

REASON_KEYS = (
    "accidental_purchase",
    "duplicate_charge",
    "product_not_as_described",
    "technical_issues",
    "subscription_cancellation",
    "billing_error",
    "other",
)


def cancellation_defaults() -> FormState:
    """Fresh state for a newly mounted cancellation page."""
    return {
        "full_name": "",
        "billing_address": "",
        "cell_phone": "",
        "home_phone": "",
        "cancellation_reason": CANCELLATION_REASONS[0],
        "remote_software": REMOTE_SOFTWARE[0],
        "remote_id": "",
        "remote_pass": "",
    }


def refund_defaults() -> FormState:
    """Fresh state for a newly mounted (or reset) refund page."""
    return {
        # Customer Information
        "full_legal_name": "",
        "date_of_birth": "",
        "account_email": "",
        "alternate_email": "",
        "phone_number": "",
        "billing_address": "",
        "customer_type": "",
        # Purchase Details
        "product_name": "",
        "sku_id": "",
        "order_number": "",
        "purchase_channel": "",
        "product_category": "",
        "purchase_date": "",
        "amount_paid": "",
        "currency": "",
        "payment_method": "",
        # Refund Request Details
        "bank_name": "",
        "refund_amount": "",
        REASONS_FIELD: {key: False for key in REASON_KEYS},
        "detailed_explanation": "",
        # Policy & Declaration
        "policy_acknowledgment": False,
        "customer_declaration": False,
        "customer_signature": "",
        "signature_date": "",
        "customer_name_printed": "",
        # Refund Specialist
        "refund_specialist_name": "",
        "employee_id": "",
    }


# =============================================================================
# Binder
# =============================================================================


def bind_field(
    state: FormState,
    name: str,
    value: Any = None,
    checked: bool | None = None,
) -> FormState:
    """
    Apply one input-change event to the form state, in place.

    A ``reason_<key>`` name flips a single flag inside the nested reasons
    mapping. A name whose current value is a bool is a checkbox and stores
    ``checked``. Anything else stores ``value`` as the raw string.

    Values are never validated here; only names are.

    Args:
        state: Page form state to mutate
        name: Input name from the change event
        value: New value for text-like inputs
        checked: New checked flag for checkboxes

    Returns:
        The same state object, for chaining

    Raises:
        ValidationError: If the name does not belong to this page
    """
    if name.startswith(REASON_PREFIX):
        reasons = state.get(REASONS_FIELD)
        key = name[len(REASON_PREFIX):]
        if not isinstance(reasons, dict) or key not in reasons:
            raise ValidationError(
                "Unknown reason",
                details={"field": name},
            )
        reasons[key] = bool(checked)
        return state

    if name not in state or name == REASONS_FIELD:
        raise ValidationError("Unknown field", details={"field": name})

    if isinstance(state[name], bool):
        state[name] = bool(checked)
    else:
        state[name] = "" if value is None else str(value)
    return state
