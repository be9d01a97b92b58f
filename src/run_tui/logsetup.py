from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "run_tui"


def setup_logger(path: str, verbose: bool = False) -> logging.Logger:
    """Send run_tui logs to a rotating file.

    The terminal belongs to the TUI, so there is no stream handler; without a
    path the package logger stays silent.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    if not path:
        log.addHandler(logging.NullHandler())
        return log
    fmt = logging.Formatter("%(asctime)sZ %(levelname)s %(name)s %(message)s")
    handler = RotatingFileHandler(path, maxBytes=5*1024*1024, backupCount=5)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(fmt)
    log.addHandler(handler)
    log.propagate = False
    return log
