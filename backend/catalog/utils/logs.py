import logging
import sys

from catalog.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing to stdout with a bracketed prefix, e.g.
    ``[CATALOG.PRODUCTS] product registered id=...``.
    Handlers are attached only once per name.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{name.upper()}] %(message)s"))
        log.addHandler(h)
        log.propagate = False
    return log
