"""
Dual-Stack Round Runner Tests

Tests for DualStackRoundRunner showing:
- Requests sent for every target and IP version
- Quorum scenarios across both families
- Settle-all: failing probes never cancel their siblings
- IPv4 and IPv6 probes in flight at the same time

To run:
    pytest tests/probe/controllers/test_round_runner.py -v
"""

import asyncio

import pytest

from probe.constants import OutcomeCategory, ParseStatus
from probe.controllers.round_runner import DualStackRoundRunner
from probe.interfaces.ping_runner_interface import PingRunnerInterface
from probe.implementations.mock_ping_runner import build_ping_output
from probe.utils.ping_parser import parse


class GatedPingRunner(PingRunnerInterface):
    """Holds every probe until the gate opens"""

    def __init__(self):
        self.gate = asyncio.Event()
        self.in_flight = 0

    def is_available(self) -> bool:
        return True

    async def run(self, options):
        self.in_flight += 1
        await self.gate.wait()
        return build_ping_output(options.target, options.ip_version)


# =============================================================================
# REQUEST TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_round_probes_every_target_on_both_versions(round_runner, mock_ping_runner, targets):
    await round_runner.run_round()

    for version in (4, 6):
        calls = mock_ping_runner.get_calls(ip_version=version)
        assert sorted(call.target for call in calls) == sorted(targets)
        for call in calls:
            assert call.type == "ping"
            assert call.packets == 3
            assert call.in_progress_updates is False


# =============================================================================
# SCENARIO TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_ipv4_clean_ipv6_lossy(round_runner, mock_ping_runner, targets):
    """IPv4 targets answer cleanly, every IPv6 target loses packets."""
    for target in targets:
        mock_ping_runner.set_packet_loss(target, loss_percent=20, ip_version=6)

    result = await round_runner.run_round()

    assert result.ipv4.passed is True
    assert result.ipv4.success_count == 3
    assert result.ipv6.passed is False
    assert result.ipv6.success_count == 0
    assert result.any_passed is True
    assert all(
        failure.category == OutcomeCategory.PACKET_LOSS for failure in result.ipv6.failures
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_all_probes_exit_non_zero(round_runner, mock_ping_runner, targets):
    for target in targets:
        mock_ping_runner.set_error(target, exit_code=1, stdout="100% packet loss")

    result = await round_runner.run_round()

    assert result.ipv4.passed is False
    assert result.ipv6.passed is False
    assert result.any_passed is False
    for verdict in (result.ipv4, result.ipv6):
        assert verdict.success_count == 0
        assert all(
            failure.category == OutcomeCategory.EXITED_WITH_OUTPUT
            for failure in verdict.failures
        )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_quorum_tolerates_one_failed_target(round_runner, mock_ping_runner, targets):
    mock_ping_runner.set_error(targets[0], exit_code=2, stderr="unknown host", ip_version=4)

    verdict = await round_runner.ping_test(4)

    assert verdict.success_count == 2
    assert verdict.passed is True
    assert [failure.outcome.target for failure in verdict.failures] == [targets[0]]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_two_failed_targets_fail_the_version(round_runner, mock_ping_runner, targets):
    mock_ping_runner.set_error(targets[0], exit_code=1, ip_version=6)
    mock_ping_runner.set_packet_loss(targets[1], loss_percent=50, ip_version=6)

    verdict = await round_runner.ping_test(6)

    assert verdict.success_count == 1
    assert verdict.passed is False


# =============================================================================
# SETTLE-ALL TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unexpected_exception_is_a_failed_outcome(round_runner, mock_ping_runner, targets):
    """Test an arbitrary exception is absorbed and siblings still complete."""
    mock_ping_runner.set_exception(targets[1], ValueError("boom"), ip_version=4)

    verdict = await round_runner.ping_test(4)

    assert len(mock_ping_runner.get_calls(ip_version=4)) == 3
    assert verdict.success_count == 2
    failure = verdict.failures[0]
    assert failure.category == OutcomeCategory.NO_EXIT_CODE
    assert failure.outcome.target == targets[1]
    assert "boom" in failure.detail


@pytest.mark.unit
@pytest.mark.asyncio
async def test_spawn_failure_has_no_exit_code(round_runner, mock_ping_runner, targets):
    for target in targets:
        mock_ping_runner.set_error(target, exit_code=None)

    verdict = await round_runner.ping_test(4)

    assert verdict.passed is False
    assert {failure.category for failure in verdict.failures} == {
        OutcomeCategory.NO_EXIT_CODE,
    }


@pytest.mark.unit
@pytest.mark.asyncio
async def test_parser_error_only_fails_that_target(mock_ping_runner, targets, caplog):
    """Test unreadable output on one IPv4 target leaves the rest of the round intact."""
    broken = targets[0]

    def flaky_parse(raw_output):
        if broken in raw_output and "192.0.2.1" in raw_output:
            raise ValueError("unparseable")
        return parse(raw_output)

    round_runner = DualStackRoundRunner(mock_ping_runner, packets=3, parser=flaky_parse)

    result = await round_runner.run_round()

    assert result.ipv4.success_count == 2
    assert result.ipv4.passed is True
    assert result.ipv6.success_count == 3
    assert result.ipv6.passed is True

    failure = result.ipv4.failures[0]
    assert failure.outcome.target == broken
    assert failure.outcome.result.status == ParseStatus.FAILED
    assert failure.category == OutcomeCategory.PACKET_LOSS
    assert "unparseable" in caplog.text

@pytest.mark.unit
@pytest.mark.asyncio
async def test_failures_are_logged(round_runner, mock_ping_runner, targets, caplog):
    mock_ping_runner.set_packet_loss(targets[0], loss_percent=100, ip_version=4)
    mock_ping_runner.set_error(targets[1], exit_code=1, stdout="host down", ip_version=4)
    mock_ping_runner.set_error(targets[2], exit_code=None, ip_version=4)

    await round_runner.ping_test(4)

    assert f"{targets[0]} 100% packet loss" in caplog.text
    assert "host down" in caplog.text
    assert "Retrying" not in caplog.text


@pytest.mark.unit
@pytest.mark.asyncio
async def test_probes_of_both_versions_run_concurrently(targets):
    """Test all six probes are in flight before any of them completes."""
    runner = GatedPingRunner()
    round_runner = DualStackRoundRunner(runner, packets=3)

    task = asyncio.ensure_future(round_runner.run_round())
    for _ in range(100):
        if runner.in_flight == 2 * len(targets):
            break
        await asyncio.sleep(0)

    assert runner.in_flight == 2 * len(targets)
    assert not task.done()

    runner.gate.set()
    result = await task

    assert result.ipv4.passed is True
    assert result.ipv6.passed is True
