"""
Tqdm-compatible logging.

Routes console log records through ``tqdm.write()`` so that fan-out progress
bars and log lines do not break each other up.
"""

import logging
import sys
from typing import TextIO

from tqdm import tqdm


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes through tqdm.write().

    Usage:
        handler = TqdmLoggingHandler(level=logging.INFO)
        logger.addHandler(handler)
    """

    def __init__(self, level: int = logging.NOTSET, stream: TextIO | None = None):
        super().__init__(level)
        # None means whatever sys.stderr is at emit time
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream or sys.stderr)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def setup_tqdm_logging(
    logger_instance: logging.Logger,
    console_level: int = logging.INFO,
    use_tqdm_handler: bool = True,
) -> logging.Handler:
    """
    Replace a logger's console handlers with a tqdm-compatible one.

    File handlers are left in place.

    Args:
        logger_instance: Logger to configure
        console_level: Minimum level for console output
        use_tqdm_handler: If False, fall back to a plain StreamHandler on stderr

    Returns:
        The added console handler
    """
    for handler in logger_instance.handlers[:]:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            logger_instance.removeHandler(handler)
        elif isinstance(handler, TqdmLoggingHandler):
            logger_instance.removeHandler(handler)

    if use_tqdm_handler:
        handler = TqdmLoggingHandler(level=console_level)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(console_level)

    handler.setFormatter(logging.Formatter("%(message)s"))
    logger_instance.addHandler(handler)
    return handler
