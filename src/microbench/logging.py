"""Console and file handlers for the ``microbench`` logger.

Library modules log through ``logging.getLogger("microbench")`` and
never add handlers; only the CLI calls :func:`setup_logging`.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "microbench"


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach fresh handlers to the microbench logger and return it.

    The console follows the verbosity flags (*verbose* wins over
    *quiet*).  A *log_file* always receives DEBUG records with
    timestamps.  Handlers from an earlier call are closed first.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(_console_level(verbose, quiet))
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
