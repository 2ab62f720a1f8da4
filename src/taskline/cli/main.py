# src/taskline/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts connectors:
- TCP server in a background thread (optional),
- console REPL in the main thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.tcp_server import ServerBackgroundRunner, start_server_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    if not settings.server_enabled and not settings.console_enabled:
        logger.error("Both the TCP server and the console are disabled; nothing to run.")
        return 1

    server_runner: ServerBackgroundRunner | None = None
    if settings.server_enabled:
        server_runner = start_server_in_background(state)
        if server_runner is None:
            logger.error("TCP server failed to start on %s:%d.", settings.host, settings.port)
            return 1

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        if settings.console_enabled:
            # The REPL handles Ctrl+C / EOF itself.
            run_console_loop(state)
            stop_main.set()
        else:
            try:
                signal.signal(signal.SIGINT, _handle_signal)
                signal.signal(signal.SIGTERM, _handle_signal)
            except (ValueError, OSError):
                # Not in the main thread, or the platform lacks SIGTERM.
                logger.debug("Signal handlers not installed.", exc_info=True)

            logger.info("Console disabled. Serving TCP only. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        if server_runner is not None:
            server_runner.stop()
            server_runner.join(timeout=10.0)
        logger.info("Bye.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
