import logging
import sys
from typing import Optional

from inventory_api.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stdout handler to the package logger; module loggers propagate to it."""
    log = logging.getLogger("inventory_api")
    log.setLevel((level or settings.LOG_LEVEL).upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(h)
    return log
