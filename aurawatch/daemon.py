"""
Main daemon entry point for Aurawatch.
"""

import argparse
import signal
import sys
import time
from typing import Any

from aurawatch.config import Config, load_config
from aurawatch.logging_config import get_logger, setup_logging
from aurawatch.session import AuraSession

logger = get_logger(__name__)


class AurawatchDaemon:
    """Main daemon class that runs a watch session until stopped."""

    def __init__(self, config_path: str | None = None, config: Config | None = None) -> None:
        """
        Initialize the daemon.

        Args:
            config_path: Path to configuration file
            config: Already loaded configuration (takes precedence)
        """
        if config is None:
            config = load_config(config_path) if config_path else Config()
        self.config = config
        self.session = AuraSession(self.config)
        self.running = False

    def start(self) -> None:
        """Start the daemon and block until stopped."""
        logger.info("Starting Aurawatch daemon")
        self.running = True
        self.session.start()
        logger.info("Aurawatch daemon running")

        try:
            while self.running:
                time.sleep(1)
        except KeyboardInterrupt:
            logger.info("Shutdown signal received")
            self.stop()

    def stop(self) -> None:
        """Stop the daemon."""
        if not self.running:
            return
        logger.info("Stopping Aurawatch daemon")
        self.running = False
        self.session.stop()
        logger.info("Aurawatch daemon stopped")


def main() -> None:
    """Entry point for the daemon."""
    parser = argparse.ArgumentParser(description="Aurawatch log watching daemon")
    parser.add_argument(
        '--config',
        help='Path to configuration file (built-in defaults if not specified)'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Log level (default: INFO)'
    )
    parser.add_argument(
        '--log-file',
        help='Optional log file, or directory for aurawatch.log (console only if not specified)'
    )
    args = parser.parse_args()

    setup_logging(level=args.log_level, log_file=args.log_file)

    daemon = AurawatchDaemon(args.config)

    def signal_handler(_sig: int, _frame: Any) -> None:
        logger.info("Shutdown signal received")
        daemon.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        daemon.start()
    except Exception:
        logger.critical("Fatal error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
