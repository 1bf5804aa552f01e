"""
Logging utilities for abs_investigator CLI.

Provides logging setup and header printing functions.
"""

import logging
import time
from pathlib import Path

from abs_investigator.utils.tqdm_logging import setup_tqdm_logging

# Third-party loggers that clutter console output
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(
    script_name: str,
    execute: bool = False,
    log_dir: Path = Path("logs"),
    verbose: bool = False,
) -> logging.Logger:
    """
    Set up logging for a command.

    Both modes configure the ``abs_investigator`` package logger, so progress
    messages from the investigator reach the console as well.

    Args:
        script_name: Name of the command (for log file naming)
        execute: If True, log to file + console. If False, only console.
        log_dir: Directory for log files
        verbose: Show DEBUG messages on the console

    Returns:
        Logger for the command itself
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    package_logger = logging.getLogger("abs_investigator")
    package_logger.setLevel(logging.DEBUG)
    package_logger.handlers = []
    package_logger.propagate = False

    if execute:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{script_name}_{timestamp}.log"

        # Flush after each record so the log survives an interrupted run
        class FlushingFileHandler(logging.FileHandler):
            def emit(self, record):
                super().emit(record)
                self.flush()

        file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        package_logger.addHandler(file_handler)

    # Console output goes through tqdm.write so progress bars stay intact
    setup_tqdm_logging(package_logger, console_level=console_level)

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.ERROR)

    logger = package_logger.getChild(f"cli.{script_name}")
    if execute:
        logger.info(f"Log file: {log_file}")
    return logger


def print_dry_run_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard dry-run header.

    Args:
        title: Title for the dry-run section
        logger: Optional logger instance
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(f"{title} (Dry Run)")
    logger.info("=" * 70)


def print_execute_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard execute mode header.

    Args:
        title: Title for the execute section
        logger: Optional logger instance
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(title)
    logger.info("=" * 70)
