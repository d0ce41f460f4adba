"""
Message Composer.

Renders a refund page's state into the Markdown text posted to Telegram.
The output is opaque text; delivery treats it as a single payload.

Required fields are rendered verbatim, even when empty. Optional fields
that are empty render as ``N/A``.
"""

from datetime import datetime

from intake.backend.core.utils import utc_now
from intake.backend.forms.reasons import format_refund_reasons
from intake.backend.forms.state import REASONS_FIELD, FormState

PLACEHOLDER = "N/A"
DIVIDER = "━" * 22
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def _text(state: FormState, name: str) -> str:
    value = state.get(name, "")
    return value if isinstance(value, str) else ""


def _optional(state: FormState, name: str) -> str:
    return _text(state, name) or PLACEHOLDER


def compose_refund_message(
    state: FormState,
    hostname: str,
    submitted_at: datetime | None = None,
    include_specialist: bool = True,
) -> str:
    """
    Render the full refund request as one multi-line message.

    Args:
        state: Refund page form state
        hostname: Host the request was submitted from
        submitted_at: Submission time, defaults to now (UTC)
        include_specialist: Whether to render the REFUND SPECIALIST section

    Returns:
        Message text with Markdown emphasis on section headers
    """
    submitted_at = submitted_at or utc_now()
    reasons = state.get(REASONS_FIELD)
    amount = f"{_optional(state, 'amount_paid')} {_text(state, 'currency')}".rstrip()

    lines = [
        "🔔 *NEW REFUND REQUEST*",
        DIVIDER,
        "",
        "👤 *CUSTOMER INFORMATION*",
        f"• Full Legal Name: {_text(state, 'full_legal_name')}",
        f"• Date of Birth: {_text(state, 'date_of_birth')}",
        f"• Account Email: {_text(state, 'account_email')}",
        f"• Alternate Email: {_optional(state, 'alternate_email')}",
        f"• Phone Number: {_optional(state, 'phone_number')}",
        f"• Billing Address: {_optional(state, 'billing_address')}",
        f"• Customer Type: {_text(state, 'customer_type')}",
        "",
        "🛒 *PURCHASE DETAILS*",
        f"• Product/Service: {_text(state, 'product_name')}",
        f"• SKU/License ID: {_optional(state, 'sku_id')}",
        f"• Order Number: {_optional(state, 'order_number')}",
        f"• Purchase Channel: {_text(state, 'purchase_channel')}",
        f"• Product Category: {_text(state, 'product_category')}",
        f"• Purchase Date: {_optional(state, 'purchase_date')}",
        f"• Amount Paid: {amount}",
        f"• Payment Method: {_optional(state, 'payment_method')}",
        "",
        "💰 *REFUND REQUEST DETAILS*",
        f"• Bank Name: {_text(state, 'bank_name')}",
        f"• Refund Amount: {_text(state, 'refund_amount')}",
        f"• Reasons: {format_refund_reasons(reasons if isinstance(reasons, dict) else {})}",
        f"• Explanation: {_optional(state, 'detailed_explanation')}",
        "",
        "✍️ *DECLARATION*",
        f"• Signature: {_optional(state, 'customer_signature')}",
        f"• Date: {_optional(state, 'signature_date')}",
        f"• Printed Name: {_text(state, 'customer_name_printed')}",
    ]

    if include_specialist:
        lines += [
            "",
            "👤 *REFUND SPECIALIST*",
            f"• Refund Specialist Name: {_optional(state, 'refund_specialist_name')}",
            f"• Employee ID: {_optional(state, 'employee_id')}",
        ]

    lines += [
        "",
        DIVIDER,
        f"📅 Submitted: {submitted_at.strftime(TIMESTAMP_FORMAT)}",
        f"🌐 Source: {hostname}",
    ]

    return "\n".join(lines)
