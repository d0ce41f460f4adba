"""
Validation Gate.

Pure predicates deciding whether a page's submit action is enabled.
No messages are produced; a closed gate simply disables submission.

Policies are registered by name so that page variants can pick one from
forms.yaml instead of duplicating the page.
"""

from collections.abc import Callable, Iterable

from intake.backend.forms.state import FormState

ValidationPolicy = Callable[[FormState], bool]

REFUND_REQUIRED_FIELDS = (
    "full_legal_name",
    "account_email",
    "product_name",
    "bank_name",
    "refund_amount",
    "policy_acknowledgment",
    "customer_declaration",
    "customer_name_printed",
)


def _is_present(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip() != ""
    return bool(value)


def all_fields_present(state: FormState) -> bool:
    """True iff every field is non-empty after trimming."""
    return all(_is_present(value) for value in state.values())


def required_fields_present(fields: Iterable[str]) -> ValidationPolicy:
    """Build a policy that checks only the given fields."""
    names = tuple(fields)

    def policy(state: FormState) -> bool:
        return all(_is_present(state.get(name)) for name in names)

    return policy


def accept_all(state: FormState) -> bool:
    """Always open. Empty forms pass."""
    return True


def get_policy(name: str, required: Iterable[str] = REFUND_REQUIRED_FIELDS) -> ValidationPolicy:
    """
    Look up a validation policy by its configured name.

    Args:
        name: all_fields, required_fields, or accept_all
        required: Field names checked by the required_fields policy

    Raises:
        KeyError: If the policy name is unknown
    """
    if name == "all_fields":
        return all_fields_present
    if name == "required_fields":
        return required_fields_present(required)
    if name == "accept_all":
        return accept_all
    raise KeyError(f"Unknown validation policy: {name}")
