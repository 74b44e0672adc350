"""Logging setup for applications embedding the kernel.

Kernel modules only create module-level loggers; nothing in the package
installs handlers on import. Applications opt in by calling
``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Libraries behind geomkit.interop that log below WARNING
QUIET_LOGGERS = ('shapely', 'fontTools')


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Route kernel log records to stderr and, optionally, a file.

    Replaces whatever handlers the root logger had, so calling it again
    reconfigures instead of duplicating output. Unknown level names fall
    back to INFO.

    Args:
        level: Level name such as 'DEBUG' or 'WARNING'.
        log_file: Path of an extra log file, or None for stderr only.

    Example:
        Tracing path joins and engine calls::

            from geomkit.logging_config import configure_logging
            configure_logging(level='DEBUG', log_file='geomkit.log')
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')
