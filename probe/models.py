"""
Probe Data Models

Plain data carried between the runner, parser, classifier and the
status manager.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from probe.constants import PROBE_TYPE_PING, OutcomeCategory, ParseStatus


@dataclass(frozen=True)
class PingOptions:
    """One ping request"""

    ip_version: int
    target: str
    packets: int
    in_progress_updates: bool = False
    type: str = PROBE_TYPE_PING

    def __post_init__(self):
        if self.ip_version not in (4, 6):
            raise ValueError(f"Unsupported IP version: {self.ip_version}")
        if self.packets < 1:
            raise ValueError(f"Packet count must be positive: {self.packets}")


@dataclass
class PingStats:
    """Summary statistics of a finished ping run"""

    total: Optional[int] = None
    rcv: Optional[int] = None
    drop: Optional[int] = None
    loss: Optional[float] = None  # percent
    min: Optional[float] = None  # ms
    avg: Optional[float] = None
    max: Optional[float] = None


@dataclass
class PingParseOutput:
    """Structured view of raw ping output"""

    status: ParseStatus
    raw_output: str
    resolved_address: Optional[str] = None
    resolved_hostname: Optional[str] = None
    stats: Optional[PingStats] = None

    @property
    def loss(self) -> Optional[float]:
        return self.stats.loss if self.stats else None


@dataclass
class ProbeOutcome:
    """
    Result of probing one target.

    Exactly one of `result` (the process exited cleanly and its output
    was parsed) or `error` (the process failed) is set.
    """

    target: str
    ip_version: int
    result: Optional[PingParseOutput] = None
    error: Optional[Exception] = None
    exit_code: Optional[int] = None
    raw_output: str = ""

    @property
    def is_process_failure(self) -> bool:
        return self.error is not None


@dataclass
class ClassifiedOutcome:
    """A probe outcome with its verdict and diagnostic category"""

    outcome: ProbeOutcome
    category: OutcomeCategory
    detail: str = ""

    @property
    def successful(self) -> bool:
        return self.category == OutcomeCategory.SUCCESSFUL


@dataclass
class RoundVerdict:
    """Quorum evaluation for one IP version"""

    ip_version: int
    success_count: int
    passed: bool
    outcomes: List[ClassifiedOutcome] = field(default_factory=list)

    @property
    def failures(self) -> List[ClassifiedOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.successful]


@dataclass
class RoundResult:
    """Both IP version verdicts of one testing round"""

    ipv4: RoundVerdict
    ipv6: RoundVerdict

    @property
    def any_passed(self) -> bool:
        return self.ipv4.passed or self.ipv6.passed

    @classmethod
    def failed(cls) -> "RoundResult":
        """Round in which no probe could be evaluated"""
        return cls(
            ipv4=RoundVerdict(ip_version=4, success_count=0, passed=False),
            ipv6=RoundVerdict(ip_version=6, success_count=0, passed=False),
        )
