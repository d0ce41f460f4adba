"""
Page Schemas.

Pydantic schemas for intake page API request/response validation.
"""

from pydantic import BaseModel, Field

from intake.backend.forms.submission import SubmissionOutcome


class FieldChange(BaseModel):
    """One input-change event: text inputs send value, checkboxes send checked."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Input name, e.g. full_name or reason_billing_error",
        examples=["full_name"],
    )
    value: str | None = Field(
        default=None,
        max_length=10000,
        description="New value for text-like inputs",
    )
    checked: bool | None = Field(
        default=None,
        description="New checked state for checkboxes",
    )


class WaitNotice(BaseModel):
    """Static notice shown once a cancellation request is in."""

    title: str
    message: str
    follow_up: str


class PageResponse(BaseModel):
    """Schema for an intake page in API responses."""

    id: str = Field(description="Page identifier")
    page: str = Field(description="Page kind")
    fields: dict[str, str | bool | dict[str, bool]] = Field(description="Current form state")
    can_submit: bool = Field(description="Whether the submit control is enabled")
    outcome: SubmissionOutcome = Field(description="Submission lifecycle state")


class CancellationPageResponse(PageResponse):
    notice: WaitNotice | None = None


class RefundPageResponse(PageResponse):
    reference_number: str | None = Field(
        default=None,
        description="Reference shown on the success view",
    )
    allow_submit_another: bool = False


class CancellationOptions(BaseModel):
    cancellation_reasons: list[str]
    remote_software: list[str]


class RefundOptions(BaseModel):
    customer_types: list[str]
    purchase_channels: list[str]
    product_categories: dict[str, list[str]]
    payment_methods: list[str]
    refund_reasons: dict[str, str]
