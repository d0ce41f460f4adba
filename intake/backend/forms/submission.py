"""
Submission State Machine.

Page-level submission outcome as an explicit enumeration with a
transition table:

    idle ──submit──▶ submitting ──completed──▶ succeeded
                         │                        │
                       failed                   reset
                         ▼                        ▼
                        idle                     idle

There is no failed state: a failed delivery returns the page to idle.
Whether ``reset`` is reachable is decided by the page variant.
"""

from enum import Enum

from intake.backend.core.exceptions import ConflictError


class SubmissionOutcome(str, Enum):
    """Where a page is in its submission lifecycle."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"


class SubmissionEvent(str, Enum):
    """Inputs that move a page between outcomes."""

    SUBMIT = "submit"
    COMPLETED = "completed"
    FAILED = "failed"
    RESET = "reset"


TRANSITIONS: dict[tuple[SubmissionOutcome, SubmissionEvent], SubmissionOutcome] = {
    (SubmissionOutcome.IDLE, SubmissionEvent.SUBMIT): SubmissionOutcome.SUBMITTING,
    (SubmissionOutcome.SUBMITTING, SubmissionEvent.COMPLETED): SubmissionOutcome.SUCCEEDED,
    (SubmissionOutcome.SUBMITTING, SubmissionEvent.FAILED): SubmissionOutcome.IDLE,
    (SubmissionOutcome.SUCCEEDED, SubmissionEvent.RESET): SubmissionOutcome.IDLE,
}


def advance(outcome: SubmissionOutcome, event: SubmissionEvent) -> SubmissionOutcome:
    """
    Apply an event to an outcome.

    Raises:
        ConflictError: If the event is not valid from the current outcome
    """
    try:
        return TRANSITIONS[(outcome, event)]
    except KeyError:
        raise ConflictError(
            f"Cannot {event.value} while {outcome.value}"
        ) from None
