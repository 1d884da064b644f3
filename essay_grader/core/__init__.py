# Core package
from .constants import (
    Messages,
    FileLimits,
    ScoreScale,
    IMAGE_EXTENSIONS,
    TRANSCRIPT_EXTENSION,
    PROCESSED_PREFIX,
    LINK_INDEX_FILE,
)
from .exceptions import (
    BaseAPIException,
    ValidationError,
    NotFoundError,
    CollaboratorError,
    FileProcessingError,
    ArtifactLookupError,
    GradingError,
    NoJsonFoundError,
    MalformedJsonError,
    UnmatchedCriterionError,
    AmbiguousCriterionError,
    InvalidScoreError,
)
from .logger import logger, setup_logger, grading_logger, storage_logger, ocr_logger

__all__ = [
    # Constants
    "Messages",
    "FileLimits",
    "ScoreScale",
    "IMAGE_EXTENSIONS",
    "TRANSCRIPT_EXTENSION",
    "PROCESSED_PREFIX",
    "LINK_INDEX_FILE",
    # Exceptions
    "BaseAPIException",
    "ValidationError",
    "NotFoundError",
    "CollaboratorError",
    "FileProcessingError",
    "ArtifactLookupError",
    "GradingError",
    "NoJsonFoundError",
    "MalformedJsonError",
    "UnmatchedCriterionError",
    "AmbiguousCriterionError",
    "InvalidScoreError",
    # Logging
    "logger",
    "setup_logger",
    "grading_logger",
    "storage_logger",
    "ocr_logger",
]
