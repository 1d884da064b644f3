"""
Essay Grader - scanned essay transcription and rubric grading
"""

from .config import settings
from .core import logger

__all__ = [
    "settings",
    "logger",
]
