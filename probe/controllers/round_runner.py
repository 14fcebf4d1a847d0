"""
Dual-Stack Round Runner

Runs one testing round: an IPv4 and an IPv6 ping test side by side,
each probing every fixed target concurrently.

Every probe is awaited whatever happens to its siblings. A failing
target is recorded as a failed outcome, it never cancels the others.
"""

import asyncio
import logging
from typing import Callable, Sequence

from config.settings import PING_QUORUM, PING_TARGETS, STATUS_NUMBER_OF_PACKETS
from probe.constants import OutcomeCategory, ParseStatus
from probe.controllers.classifier import classify_outcome
from probe.controllers.quorum import evaluate_quorum
from probe.interfaces.ping_runner_interface import (
    PingCommandError,
    PingRunnerInterface,
)
from probe.models import (
    PingOptions,
    PingParseOutput,
    ProbeOutcome,
    RoundResult,
    RoundVerdict,
)
from probe.utils.ping_parser import parse


class DualStackRoundRunner:
    """
    Executes ping tests for both IP versions.

    Usage:
        runner = DualStackRoundRunner(SystemPingRunner())
        result = await runner.run_round()
        print(result.ipv4.passed, result.ipv6.passed)
    """

    def __init__(
        self,
        ping_runner: PingRunnerInterface,
        targets: Sequence[str] = PING_TARGETS,
        packets: int = STATUS_NUMBER_OF_PACKETS,
        quorum: int = PING_QUORUM,
        parser: Callable[[str], PingParseOutput] = parse,
    ):
        """
        Initialize round runner.

        Args:
            ping_runner: Executes individual probes
            targets: Hosts probed for each IP version
            packets: Packets per probe
            quorum: Successful targets needed for a version to pass
            parser: Turns raw probe output into PingParseOutput
        """
        self.logger = logging.getLogger(__name__)
        self.ping_runner = ping_runner
        self.targets = tuple(targets)
        self.packets = packets
        self.quorum = quorum
        self.parser = parser

    async def run_round(self) -> RoundResult:
        """Run the IPv4 and IPv6 tests concurrently and wait for both"""
        ipv4, ipv6 = await asyncio.gather(
            self.ping_test(4),
            self.ping_test(6),
        )
        return RoundResult(ipv4=ipv4, ipv6=ipv6)

    async def ping_test(self, ip_version: int) -> RoundVerdict:
        """
        Probe every target over one IP version and apply the quorum rule.

        Never raises for probe failures, they only lower the success count.
        """
        requests = [
            PingOptions(
                ip_version=ip_version,
                target=target,
                packets=self.packets,
                in_progress_updates=False,
            )
            for target in self.targets
        ]

        results = await asyncio.gather(
            *(self.ping_runner.run(options) for options in requests),
            return_exceptions=True,
        )

        outcomes = [
            self._to_outcome(options, result)
            for options, result in zip(requests, results)
        ]
        verdict = evaluate_quorum(
            ip_version,
            [classify_outcome(outcome) for outcome in outcomes],
            quorum=self.quorum,
        )

        self._log_verdict(verdict)
        return verdict

    def _to_outcome(self, options: PingOptions, result) -> ProbeOutcome:
        if isinstance(result, PingCommandError):
            return ProbeOutcome(
                target=options.target,
                ip_version=options.ip_version,
                error=result,
                exit_code=result.exit_code,
                raw_output=result.output,
            )

        if isinstance(result, Exception):
            return ProbeOutcome(
                target=options.target,
                ip_version=options.ip_version,
                error=result,
            )

        if isinstance(result, BaseException):
            # Cancellation and interpreter exit are not probe failures
            raise result

        try:
            parsed = self.parser(result)
        except Exception as e:
            # Unreadable output only fails this target
            self.logger.error(
                f"Could not parse IPv{options.ip_version} ping output "
                f"for {options.target}: {e}",
            )
            parsed = PingParseOutput(status=ParseStatus.FAILED, raw_output=result)

        return ProbeOutcome(
            target=options.target,
            ip_version=options.ip_version,
            result=parsed,
            raw_output=result,
        )

    def _log_verdict(self, verdict: RoundVerdict):
        version = verdict.ip_version
        pass_text = f". IPv{version} tests pass" if verdict.passed else ""

        for failure in verdict.failures:
            target = failure.outcome.target

            if failure.category == OutcomeCategory.NO_EXIT_CODE:
                self.logger.warning(
                    f"IPv{version} ping test unsuccessful{pass_text}: "
                    f"{target}: {failure.detail}",
                )
            elif failure.category == OutcomeCategory.EXITED_WITH_OUTPUT:
                self.logger.warning(
                    f"IPv{version} ping test unsuccessful: {target} "
                    f"{failure.detail}{pass_text}.",
                )
            else:
                self.logger.warning(
                    f"IPv{version} ping test unsuccessful: {target} "
                    f"{failure.detail}% packet loss{pass_text}.",
                )

        result_text = "passed" if verdict.passed else "failed"
        self.logger.debug(
            f"IPv{version} ping tests {result_text} "
            f"({verdict.success_count}/{len(verdict.outcomes)} targets)",
        )
