"""Logging setup for the jtc command line.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by :func:`jtc.cli.main`.
"""

import logging
import sys

LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def level_for(verbosity: int = 0, quiet: bool = False) -> int:
    """Map ``-v`` counts and ``-q`` to a logging level (default WARNING)."""

    if quiet:
        return logging.ERROR
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0, quiet: bool = False, *, all_to_stderr: bool = False) -> None:
    """Send DEBUG/INFO records to stdout and WARNING+ to stderr.

    With ``all_to_stderr`` every record goes to stderr, which keeps stdout
    clean for machine-readable output.
    """

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level_for(verbosity, quiet))
    formatter = logging.Formatter(LOG_FORMAT)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setFormatter(formatter)
    if all_to_stderr:
        root.addHandler(stderr_handler)
        return

    stderr_handler.setLevel(logging.WARNING)
    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING - 1))
    stdout_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)
