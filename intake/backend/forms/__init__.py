# Form pages package
from intake.backend.forms.pages import CancellationPage, IntakePage, RefundPage
from intake.backend.forms.submission import SubmissionEvent, SubmissionOutcome

__all__ = [
    "CancellationPage",
    "IntakePage",
    "RefundPage",
    "SubmissionEvent",
    "SubmissionOutcome",
]
