import logging
import sys

from dashboard.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing `[NAME] message` lines to stdout.
    The handler is attached once, so repeated calls for the same name are safe.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{name.upper()}] %(message)s"))
        log.addHandler(h)
    return log
