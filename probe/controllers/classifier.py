"""
Probe Outcome Classifier

Decides whether one target's outcome counts towards the quorum, and
files non-successful outcomes into a diagnostic category.

The category only drives logging. The pass/fail signal is binary: a
target is successful iff the run finished with exactly 0% packet loss.
"""

from probe.constants import OutcomeCategory, ParseStatus
from probe.models import ClassifiedOutcome, PingParseOutput, ProbeOutcome


def is_successful(result: PingParseOutput) -> bool:
    """Check if a parsed run finished cleanly with no packet loss"""
    return result.status == ParseStatus.FINISHED and result.loss == 0


def classify_outcome(outcome: ProbeOutcome) -> ClassifiedOutcome:
    """
    Classify one probe outcome.

    Args:
        outcome: Parsed result or process failure for one target

    Returns:
        ClassifiedOutcome with category and a human-readable detail:
        - NO_EXIT_CODE: the error itself
        - EXITED_WITH_OUTPUT: captured stdout, or stderr if stdout is empty
        - PACKET_LOSS: the loss percentage (empty if unknown)
    """
    if outcome.is_process_failure:
        if outcome.exit_code is None:
            return ClassifiedOutcome(
                outcome=outcome,
                category=OutcomeCategory.NO_EXIT_CODE,
                detail=str(outcome.error),
            )
        return ClassifiedOutcome(
            outcome=outcome,
            category=OutcomeCategory.EXITED_WITH_OUTPUT,
            detail=outcome.raw_output.strip(),
        )

    if outcome.result is not None and is_successful(outcome.result):
        return ClassifiedOutcome(outcome=outcome, category=OutcomeCategory.SUCCESSFUL)

    loss = outcome.result.loss if outcome.result is not None else None
    return ClassifiedOutcome(
        outcome=outcome,
        category=OutcomeCategory.PACKET_LOSS,
        detail=_format_loss(loss),
    )


def _format_loss(loss) -> str:
    if loss is None:
        return ""
    # 100.0 -> "100", 33.3 -> "33.3"
    return f"{loss:g}"
