"""
Logging setup shared by scripts and long-running processes.
"""

import logging
import sys
from datetime import datetime

from moneyball.config import LOG_LEVEL, LOG_FORMAT
from moneyball.utils.time_utils import APP_TZ


# Custom formatter to render record times in the application timezone
class AppTimeFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        ct = datetime.fromtimestamp(record.created, APP_TZ)
        if datefmt:
            s = ct.strftime(datefmt)
        else:
            t = ct.strftime("%Y-%m-%d %H:%M:%S")
            s = "%s,%03d" % (t, record.msecs)
        return s


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Install a single stream handler on the root logger."""
    formatter = AppTimeFormatter(LOG_FORMAT)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = [handler]
    return root_logger
