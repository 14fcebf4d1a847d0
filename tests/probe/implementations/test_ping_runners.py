"""
Ping Runner Implementation Tests

SystemPingRunner is exercised with a patched subprocess factory, so no
ping binary or network is needed.

To run:
    pytest tests/probe/implementations/test_ping_runners.py -v
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from probe.constants import ParseStatus
from probe.implementations.mock_ping_runner import MockPingRunner, build_ping_output
from probe.implementations.system_ping_runner import SystemPingRunner, build_ping_command
from probe.interfaces.ping_runner_interface import PingCommandError
from probe.models import PingOptions
from probe.utils.ping_parser import parse


def fake_process(returncode=0, stdout=b"", stderr=b""):
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


@pytest.fixture
def options():
    return PingOptions(ip_version=6, target="k.root-servers.net", packets=3)


# =============================================================================
# COMMAND TESTS
# =============================================================================


@pytest.mark.unit
def test_build_ping_command(options):
    command = build_ping_command(options)

    assert command[:2] == ["ping", "-6"]
    assert command[command.index("-c") + 1] == "3"
    assert command[-1] == "k.root-servers.net"
    assert "unbuffer" not in command


@pytest.mark.unit
def test_build_ping_command_with_progress_uses_unbuffer():
    options = PingOptions(ip_version=4, target="ns1.dns.nl", packets=1, in_progress_updates=True)

    assert build_ping_command(options)[:3] == ["unbuffer", "ping", "-4"]


@pytest.mark.unit
@pytest.mark.parametrize("kwargs", [{"ip_version": 5, "packets": 1}, {"ip_version": 4, "packets": 0}])
def test_ping_options_validation(kwargs):
    with pytest.raises(ValueError):
        PingOptions(target="ns1.dns.nl", **kwargs)


# =============================================================================
# SYSTEM RUNNER TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_system_runner_returns_stdout(options):
    output = build_ping_output("k.root-servers.net", ip_version=6)
    process = fake_process(stdout=output.encode())

    with patch(
        "probe.implementations.system_ping_runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=process),
    ) as spawn:
        result = await SystemPingRunner().run(options)

    assert result == output
    assert list(spawn.call_args.args) == build_ping_command(options)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_system_runner_non_zero_exit(options):
    process = fake_process(returncode=1, stdout=b"100% packet loss", stderr=b"")

    with patch(
        "probe.implementations.system_ping_runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=process),
    ):
        with pytest.raises(PingCommandError) as exc_info:
            await SystemPingRunner().run(options)

    assert exc_info.value.exit_code == 1
    assert exc_info.value.output == "100% packet loss"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_system_runner_spawn_failure_has_no_exit_code(options):
    with patch(
        "probe.implementations.system_ping_runner.asyncio.create_subprocess_exec",
        AsyncMock(side_effect=FileNotFoundError("ping")),
    ):
        with pytest.raises(PingCommandError) as exc_info:
            await SystemPingRunner().run(options)

    assert exc_info.value.exit_code is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_system_runner_killed_by_signal_has_no_exit_code(options):
    with patch(
        "probe.implementations.system_ping_runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=fake_process(returncode=-9)),
    ):
        with pytest.raises(PingCommandError) as exc_info:
            await SystemPingRunner().run(options)

    assert exc_info.value.exit_code is None
    assert "signal 9" in str(exc_info.value)


@pytest.mark.unit
def test_system_runner_availability():
    with patch("probe.implementations.system_ping_runner.shutil.which", return_value=None):
        assert SystemPingRunner().is_available() is False
    with patch("probe.implementations.system_ping_runner.shutil.which", return_value="/bin/ping"):
        assert SystemPingRunner().is_available() is True


# =============================================================================
# MOCK RUNNER TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_mock_runner_default_is_clean(options):
    result = parse(await MockPingRunner().run(options))

    assert result.status == ParseStatus.FINISHED
    assert result.loss == 0
    assert result.resolved_address == "2001:db8::1"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_mock_runner_scripting_per_version():
    runner = MockPingRunner()
    runner.set_packet_loss("ns1.dns.nl", loss_percent=50, ip_version=6)

    ipv4 = parse(await runner.run(PingOptions(ip_version=4, target="ns1.dns.nl", packets=3)))
    ipv6 = parse(await runner.run(PingOptions(ip_version=6, target="ns1.dns.nl", packets=3)))

    assert ipv4.loss == 0
    assert ipv6.loss == 50
    assert [call.ip_version for call in runner.get_calls()] == [4, 6]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_mock_runner_error_and_reset(options):
    runner = MockPingRunner()
    runner.set_error(options.target, exit_code=2, stderr="unknown host")

    with pytest.raises(PingCommandError) as exc_info:
        await runner.run(options)
    assert exc_info.value.output == "unknown host"

    runner.reset()
    assert runner.get_calls() == []
    assert parse(await runner.run(options)).loss == 0
