"""
Logging utilities for the Essay Grader.

Each package area logs to the console and to its own dated file under
LOGS_DIR. Modules call ``logging.getLogger(__name__)`` and their records
reach the handlers of the closest configured ancestor below.
"""
import logging
import sys
from datetime import datetime
from typing import Optional

from ..config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    propagate: bool = True
) -> logging.Logger:
    """
    Console logger, plus a file handler when ``log_file`` is given.

    Calling it again for a configured name returns the existing logger
    without adding handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = propagate
    if logger.handlers:
        return logger

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(settings.LOGS_DIR / log_file, encoding='utf-8'), level)
    return logger


def dated_log_file(prefix: str) -> str:
    return f"{prefix}_{datetime.now().strftime('%Y%m%d')}.log"


grading_logger = setup_logger('essay_grader.grader', dated_log_file('grading'), propagate=False)
storage_logger = setup_logger('essay_grader.storage', dated_log_file('storage'), propagate=False)
ocr_logger = setup_logger('essay_grader.ocr', dated_log_file('ocr'), propagate=False)

# Everything else in the package
logger = setup_logger('essay_grader', dated_log_file('app'), propagate=False)
