"""
Status Manager

Drives the probe status: a one-time dependency gate, then a testing
round every STATUS_CHECK_INTERVAL seconds until stopped.

Round lifecycle:
    run round -> READY if either IP version passed, else PING_TEST_FAILED
              -> update IPv4/IPv6 support flags
              -> schedule the next round (always, whatever the outcome)

Scheduling runs on the asyncio event loop. The only scheduling state is
the timer handle of the next round: it is set while a round is pending
and cleared when it fires or when stop() cancels it.

stop() does not abort a round already in flight. Its probes run to
completion and the result is discarded.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Optional

from config.settings import STATUS_CHECK_INTERVAL
from core.dependencies import has_required_dependencies
from core.state_machine import Status, StatusStateMachine
from probe.controllers.round_runner import DualStackRoundRunner
from probe.interfaces.ping_runner_interface import PingRunnerInterface
from probe.models import RoundResult
from transport.interfaces.emitter_interface import StatusEmitterInterface

DependencyCheck = Callable[[], Awaitable[bool]]


class StatusManagerNotInitializedError(RuntimeError):
    """get_status_manager() called before init_status_manager()"""
    pass


class StatusManager(StatusStateMachine):
    """
    Status state machine plus the periodic ping test scheduler.

    Usage:
        manager = StatusManager(emitter, SystemPingRunner())
        await manager.start()   # runs the first round immediately
        ...
        manager.stop(Status.SIGTERM)
    """

    def __init__(
        self,
        emitter: StatusEmitterInterface,
        ping_runner: Optional[PingRunnerInterface] = None,
        round_runner: Optional[DualStackRoundRunner] = None,
        dependency_check: DependencyCheck = has_required_dependencies,
        interval: float = STATUS_CHECK_INTERVAL,
    ):
        """
        Initialize status manager.

        Args:
            emitter: Transport for status and support flag events
            ping_runner: Executes probes (used if round_runner is None)
            round_runner: Pre-built round runner, or None to create one
            dependency_check: Coroutine function, True if tools are present
            interval: Seconds between the end of a round and the next one

        Raises:
            ValueError: If neither ping_runner nor round_runner is given
        """
        if ping_runner is None and round_runner is None:
            raise ValueError("StatusManager needs a ping_runner or a round_runner")

        super().__init__(emitter)
        self.logger = logging.getLogger(__name__)

        self.round_runner = round_runner or DualStackRoundRunner(ping_runner)
        self.dependency_check = dependency_check
        self.interval = interval

        # Handle of the next scheduled round, None when nothing is pending
        self._timer: Optional[asyncio.TimerHandle] = None
        self._round_task: Optional[asyncio.Task] = None
        self._stopped = False

        self.round_count = 0
        self.last_round_time: Optional[float] = None
        self.last_result: Optional[RoundResult] = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def start(self):
        """
        Check dependencies once, then run the first round right away.

        If a dependency is missing the status becomes UNBUFFER_MISSING and
        no round is ever run. The check is not retried.
        """
        has_required = await self.dependency_check()

        if self._stopped:
            return

        if not has_required:
            self.update_status(Status.UNBUFFER_MISSING, "required dependencies missing")
            return

        await self.run_test()

    def stop(self, status: Status = Status.SIGTERM):
        """
        Set the final status and cancel the pending round.

        Safe to call at any time, including while a round is in flight.
        """
        self._stopped = True
        self.update_status(status, "stopped")
        self._cancel_pending_round()

    def _cancel_pending_round(self):
        """Stop scheduling without touching the status"""
        self._stopped = True

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self.logger.debug("Cancelled pending ping test round")

    def is_stopped(self) -> bool:
        return self._stopped

    def has_pending_round(self) -> bool:
        """Check if a future round is scheduled"""
        return self._timer is not None

    @property
    def current_round(self) -> Optional[asyncio.Task]:
        """Task of the round started by the timer, if any"""
        return self._round_task

    # =========================================================================
    # ROUNDS
    # =========================================================================

    async def run_test(self):
        """Run one round, publish its outcome and schedule the next one"""
        try:
            result = await self.round_runner.run_round()
        except Exception as e:
            self.logger.error(f"Ping test round crashed: {e}", exc_info=True)
            result = RoundResult.failed()

        if self._stopped:
            self.logger.info("Status manager stopped, discarding ping test result")
            return

        self.round_count += 1
        self.last_round_time = time.time()
        self.last_result = result

        if result.any_passed:
            self.update_status(Status.READY, "ping test passed")
        else:
            self.update_status(Status.PING_TEST_FAILED, "ping test failed")
            self.logger.warning(
                f"Both ping tests failed due to bad internet connection. "
                f"Retrying in {self._interval_text()}. "
                f"Probe temporarily disconnected.",
            )

        self.update_ipv4_supported(result.ipv4.passed)
        self.update_ipv6_supported(result.ipv6.passed)

        for verdict in (result.ipv4, result.ipv6):
            if not verdict.passed:
                self.logger.warning(
                    f"IPv{verdict.ip_version} ping tests failed. "
                    f"Retrying in {self._interval_text()}. "
                    f"Probe marked as not supporting IPv{verdict.ip_version}.",
                )

        self._schedule_next_round()

    def _schedule_next_round(self):
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.interval, self._on_timer)
        self.logger.debug(f"Next ping test round in {self._interval_text()}")

    def _on_timer(self):
        self._timer = None
        if self._stopped:
            return
        self._round_task = asyncio.ensure_future(self.run_test())

    def _interval_text(self) -> str:
        if self.interval >= 60:
            return f"{self.interval / 60:g} minutes"
        return f"{self.interval:g} seconds"

    def get_status_info(self) -> Dict:
        """Get detailed status information for debugging/monitoring"""
        info = super().get_status_info()
        info.update({
            "round_count": self.round_count,
            "last_round_time": self.last_round_time,
            "round_pending": self.has_pending_round(),
            "stopped": self._stopped,
        })
        return info


# =============================================================================
# PROCESS-WIDE INSTANCE
# =============================================================================

_status_manager: Optional[StatusManager] = None


def init_status_manager(
    emitter: StatusEmitterInterface,
    ping_runner: Optional[PingRunnerInterface] = None,
    **kwargs,
) -> StatusManager:
    """
    Create the process-wide status manager.

    Calling it again replaces the previous instance, whose pending round
    is cancelled so only one manager keeps probing.
    """
    global _status_manager

    if _status_manager is not None:
        logging.getLogger(__name__).warning("Replacing existing StatusManager")
        _status_manager._cancel_pending_round()

    _status_manager = StatusManager(emitter, ping_runner, **kwargs)
    return _status_manager


def get_status_manager() -> StatusManager:
    """
    Get the process-wide status manager.

    Raises:
        StatusManagerNotInitializedError: If init_status_manager() was not
            called first
    """
    if _status_manager is None:
        raise StatusManagerNotInitializedError("StatusManager is not initialized yet")
    return _status_manager


def reset_status_manager():
    """Drop the process-wide instance (tests)"""
    global _status_manager

    if _status_manager is not None:
        _status_manager._cancel_pending_round()
    _status_manager = None
