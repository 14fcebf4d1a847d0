"""
Quorum Evaluator

Aggregates classified outcomes for one IP version into a pass/fail.
A version passes when at least PING_QUORUM targets succeeded, so a
single misbehaving target never marks the family as unsupported.
"""

from typing import Sequence

from config.settings import PING_QUORUM
from probe.models import ClassifiedOutcome, RoundVerdict


def evaluate_quorum(
    ip_version: int,
    outcomes: Sequence[ClassifiedOutcome],
    quorum: int = PING_QUORUM,
) -> RoundVerdict:
    """
    Evaluate the quorum rule for one IP version.

    Args:
        ip_version: 4 or 6
        outcomes: One classified outcome per target
        quorum: Minimum number of successful targets

    Returns:
        RoundVerdict with success_count in [0, len(outcomes)]

    Example:
        verdict = evaluate_quorum(4, classified)
        if verdict.passed:
            print(f"IPv4 OK ({verdict.success_count}/{len(classified)})")
    """
    success_count = sum(1 for outcome in outcomes if outcome.successful)

    return RoundVerdict(
        ip_version=ip_version,
        success_count=success_count,
        passed=success_count >= quorum,
        outcomes=list(outcomes),
    )
