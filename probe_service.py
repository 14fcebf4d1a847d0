"""
Probe Service

Main entry point for the connectivity probe.
Wires the transport, the ping runner and the status manager together and
runs until SIGTERM/SIGINT.

Status Flow:
    INITIALIZING → (dependency check) → UNBUFFER_MISSING (terminal)
                         ↓
                  READY ⇄ PING_TEST_FAILED   (re-evaluated every 10 minutes)
                         ↓
                      SIGTERM (on shutdown)

Status and IPv4/IPv6 support flags are pushed to the server on every
change and re-sent in full after each reconnection.
"""

import asyncio
import logging
import logging.handlers
import signal
import sys
from pathlib import Path
from typing import Optional

from socketio.exceptions import ConnectionError as SocketConnectionError

from config.settings import (
    EMITTER_MODE,
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_SERVICE_FILE,
    PING_RUNNER_MODE,
)
from core.state_machine import Status
from probe import ProbeFactory, StatusManager, init_status_manager
from probe.interfaces.ping_runner_interface import PingRunnerInterface
from transport import SocketIOEmitter, create_emitter
from transport.interfaces.emitter_interface import StatusEmitterInterface


class ProbeService:
    """
    Main service coordinator.

    Usage:
        service = ProbeService()
        asyncio.run(service.run())  # Blocks until shutdown
    """

    def __init__(
        self,
        emitter: Optional[StatusEmitterInterface] = None,
        ping_runner: Optional[PingRunnerInterface] = None,
        **manager_kwargs,
    ):
        """
        Initialize service.

        Args:
            emitter: Status transport, or None to create from settings
            ping_runner: Probe executor, or None to create from settings
            manager_kwargs: Extra StatusManager arguments (tests)
        """
        self.logger = logging.getLogger(__name__)
        self.logger.info("Initializing Probe Service...")

        self.emitter = emitter or create_emitter(mode=EMITTER_MODE)
        self.ping_runner = ping_runner or ProbeFactory.create_ping_runner(
            mode=PING_RUNNER_MODE,
        )

        self.status_manager: StatusManager = init_status_manager(
            self.emitter,
            self.ping_runner,
            **manager_kwargs,
        )

        self._shutdown_event: Optional[asyncio.Event] = None

    async def run(self):
        """Connect, start probing and wait for a shutdown signal"""
        self._shutdown_event = asyncio.Event()
        self._register_signal_handlers()

        await self._connect_transport()

        self.logger.info("Probe Service started")
        await self.status_manager.start()
        self.logger.info(f"Initial status: {self.status_manager.get_status().value}")

        await self._shutdown_event.wait()
        await self._shutdown()

    def request_shutdown(self, status: Status = Status.SIGTERM):
        """Stop probing and let run() return"""
        self.status_manager.stop(status)
        if self._shutdown_event is not None:
            self._shutdown_event.set()

    async def _connect_transport(self):
        if not isinstance(self.emitter, SocketIOEmitter):
            return

        self.emitter.on_connect(self.status_manager.send_all)
        try:
            await self.emitter.connect()
        except SocketConnectionError as e:
            # Keep probing, status is re-sent once a connection is made
            self.logger.error(f"Could not connect to server: {e}")

    def _register_signal_handlers(self):
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(signum, self._signal_handler, signum)
            except NotImplementedError:
                self.logger.warning(f"Cannot handle {signum.name} on this platform")

    def _signal_handler(self, signum: signal.Signals):
        self.logger.info(f"Received signal {signum.name}, shutting down...")
        self.request_shutdown(Status.SIGTERM)

    async def _shutdown(self):
        self.logger.info("Shutting down Probe Service...")

        if isinstance(self.emitter, SocketIOEmitter):
            await self.emitter.disconnect()

        self.logger.info("Probe Service shutdown complete")


def setup_logging():
    """
    Setup logging with rotation.

    Logs to both console and file with rotation:
    - Daily rotation
    - Keep LOG_BACKUP_COUNT days of logs
    """
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)

    log_format = logging.Formatter("%(asctime)s %(levelname)s %(message)s | %(name)s")

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    log_file = Path(LOG_DIR) / LOG_SERVICE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        # Fallback to local logs directory if the system one is not writable
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / "probe-service.log"
        logger.warning(f"Cannot write to {log_file}, using fallback: {fallback_log}")
        logger.info(
            f"To fix: sudo mkdir -p {LOG_DIR} && sudo chown $(whoami) {LOG_DIR}",
        )

        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(fallback_log),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(log_format)
    logger.addHandler(file_handler)


def main():
    """
    Main entry point for the service.

    Sets up logging and runs the service.
    """
    setup_logging()

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("Connectivity Probe Service Starting")
    logger.info("=" * 60)

    try:
        service = ProbeService()
        asyncio.run(service.run())
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
