# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

import logging
from pathlib import Path

from rich.logging import RichHandler

LOG = logging.getLogger(__name__)
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
# Libraries that log request details, including auth headers, at debug level
NOISY_LOGGERS = ("urllib3",)


def setup_root_logging(verbose: bool = False) -> logging.Logger:
    """Install a rich console handler on the root logger.

    :param verbose: log at debug level on the console when True
    :return: the root logger
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    console_handler = RichHandler(show_path=False, rich_tracebacks=verbose)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger


def setup_logging(logfile: Path | None = None, verbose: bool = False) -> None:
    """Configure console logging and, optionally, a debug log file."""
    logger = setup_root_logging(verbose)
    if logfile is None:
        return

    logfile.parent.mkdir(parents=True, exist_ok=True)
    for handler in list(logger.handlers):
        if (
            isinstance(handler, logging.FileHandler)
            and handler.baseFilename == str(logfile.absolute())
        ):
            logger.removeHandler(handler)
            handler.close()
    file_handler = logging.FileHandler(logfile)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(file_handler)
    LOG.debug(f"Logging to {logfile}")
