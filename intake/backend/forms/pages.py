"""
Intake Pages.

A page is one mounted form: its field state, its validation policy, and its
submission outcome. Pages are independent of each other and live only in
process memory.

    CancellationPage - eight contact and remote-access fields; submitting
                       shows a static wait notice, no network call
    RefundPage       - multi-section refund request; optionally delivered
                       to Telegram, optionally resettable after success

Usage:
    page = RefundPage.from_config(get_app_config().forms.refund)
    page.bind("full_legal_name", "Jane Doe")
    page.bind("reason_billing_error", checked=True)
    outcome = await page.submit(hostname="forms.example.com", delivery=client)
"""

import copy
import uuid
from typing import Any, ClassVar

from intake.backend.core.config_schema import CancellationPageSchema, NoticeSchema, RefundPageSchema
from intake.backend.core.exceptions import ConflictError
from intake.backend.core.logging import get_logger, log_with_source
from intake.backend.core.utils import epoch_millis
from intake.backend.forms.composer import compose_refund_message
from intake.backend.forms.state import FormState, bind_field, cancellation_defaults, refund_defaults
from intake.backend.forms.submission import SubmissionEvent, SubmissionOutcome, advance
from intake.backend.forms.validation import ValidationPolicy, all_fields_present, get_policy
from intake.backend.services.delivery import DeliveryClient

logger = get_logger(__name__)

DELIVERY_DISABLED = "disabled"
DELIVERY_GATED = "gated"


class IntakePage:
    """Shared behaviour of every intake page."""

    kind: ClassVar[str] = ""

    def __init__(self, policy: ValidationPolicy) -> None:
        self.id = str(uuid.uuid4())
        self.state: FormState = self.defaults()
        self.outcome = SubmissionOutcome.IDLE
        self._policy = policy

    @staticmethod
    def defaults() -> FormState:
        raise NotImplementedError

    @property
    def is_valid(self) -> bool:
        """Validation gate over the current state."""
        return self._policy(self.state)

    @property
    def can_submit(self) -> bool:
        """Submit control enabled: gate open and nothing in flight."""
        return self.outcome is SubmissionOutcome.IDLE and self.is_valid

    def bind(self, name: str, value: Any = None, checked: bool | None = None) -> None:
        """
        Apply one input-change event.

        Raises:
            ConflictError: If the page already shows its success view
            ValidationError: If the field name is unknown
        """
        if self.outcome is SubmissionOutcome.SUCCEEDED:
            raise ConflictError("Page has already been submitted")
        bind_field(self.state, name, value, checked)

    def _begin_submit(self) -> bool:
        """Enter submitting if allowed. Closed gate or re-entry is a no-op."""
        if not self.can_submit:
            log_with_source(
                logger,
                "forms",
                "debug",
                "Submit ignored",
                page=self.kind,
                page_id=self.id,
                outcome=self.outcome.value,
                gate_open=self.is_valid,
            )
            return False
        self.outcome = advance(self.outcome, SubmissionEvent.SUBMIT)
        return True

    def _finish_submit(self, completed: bool) -> None:
        event = SubmissionEvent.COMPLETED if completed else SubmissionEvent.FAILED
        self.outcome = advance(self.outcome, event)
        log_with_source(
            logger,
            "forms",
            "info",
            "Page submitted" if completed else "Page submission did not complete",
            page=self.kind,
            page_id=self.id,
            outcome=self.outcome.value,
        )

    def view(self) -> dict[str, Any]:
        """Serializable snapshot of the page."""
        return {
            "id": self.id,
            "page": self.kind,
            "fields": copy.deepcopy(self.state),
            "can_submit": self.can_submit,
            "outcome": self.outcome,
        }


class CancellationPage(IntakePage):
    """Cancellation intake. Success is the terminal wait notice."""

    kind = "cancellation"

    def __init__(self, policy: ValidationPolicy = all_fields_present, notice: NoticeSchema | None = None) -> None:
        super().__init__(policy)
        self.notice = notice

    @staticmethod
    def defaults() -> FormState:
        return cancellation_defaults()

    @classmethod
    def from_config(cls, config: CancellationPageSchema) -> "CancellationPage":
        return cls(policy=get_policy(config.validation_policy), notice=config.notice)

    async def submit(self) -> SubmissionOutcome:
        if self._begin_submit():
            self._finish_submit(True)
        return self.outcome

    def view(self) -> dict[str, Any]:
        data = super().view()
        if self.outcome is SubmissionOutcome.SUCCEEDED and self.notice is not None:
            data["notice"] = self.notice.model_dump()
        return data


class RefundPage(IntakePage):
    """
    Refund request intake.

    Variants, all from forms.yaml:
        delivery_mode="disabled"  - succeed immediately, nothing is sent
        delivery_mode="gated"     - compose and deliver; succeed only if
                                    delivery reports True, else back to idle
        allow_submit_another      - whether success can be reset to a blank form
    """

    kind = "refund"

    def __init__(
        self,
        policy: ValidationPolicy,
        delivery_mode: str = DELIVERY_DISABLED,
        allow_submit_another: bool = True,
        include_specialist: bool = True,
    ) -> None:
        super().__init__(policy)
        self.delivery_mode = delivery_mode
        self.allow_submit_another = allow_submit_another
        self.include_specialist = include_specialist
        self.reference_number: str | None = None

    @staticmethod
    def defaults() -> FormState:
        return refund_defaults()

    @classmethod
    def from_config(cls, config: RefundPageSchema) -> "RefundPage":
        return cls(
            policy=get_policy(config.validation_policy),
            delivery_mode=config.delivery_mode,
            allow_submit_another=config.allow_submit_another,
            include_specialist=config.include_specialist,
        )

    def compose(self, hostname: str) -> str:
        return compose_refund_message(
            self.state,
            hostname,
            include_specialist=self.include_specialist,
        )

    async def submit(self, hostname: str = "", delivery: DeliveryClient | None = None) -> SubmissionOutcome:
        """
        Run one submission attempt.

        Args:
            hostname: Requesting hostname, rendered into the message and
                used to pick delivery credentials
            delivery: Client used when delivery_mode is gated

        Returns:
            Outcome after the attempt
        """
        if self.delivery_mode == DELIVERY_GATED and delivery is None:
            raise ValueError("Gated refund pages need a delivery client")

        if not self._begin_submit():
            return self.outcome

        delivered = False
        try:
            if self.delivery_mode == DELIVERY_GATED:
                delivered = await delivery.send(self.compose(hostname), hostname)
            else:
                delivered = True
        finally:
            # An escaping error must not leave the page stuck in submitting
            if delivered:
                self.reference_number = str(epoch_millis())
            self._finish_submit(delivered)
        return self.outcome

    def submit_another(self) -> None:
        """
        Return a succeeded page to a blank, idle form.

        Raises:
            ConflictError: If the variant has no reset path or the page
                has not succeeded
        """
        if not self.allow_submit_another:
            raise ConflictError("Submitting another request is not available")
        self.outcome = advance(self.outcome, SubmissionEvent.RESET)
        self.state = self.defaults()
        self.reference_number = None
        log_with_source(logger, "forms", "info", "Page reset", page=self.kind, page_id=self.id)

    def view(self) -> dict[str, Any]:
        data = super().view()
        data["reference_number"] = self.reference_number
        data["allow_submit_another"] = (
            self.allow_submit_another and self.outcome is SubmissionOutcome.SUCCEEDED
        )
        return data
