"""
Custom exceptions for the Essay Grader API

Every core operation either returns a complete result or raises exactly one
of these. The app-level handler in ``essay_grader.main`` turns them into
``{"success": false, "error": ..., "error_code": ...}`` responses.
"""
from typing import Any, Iterable, Optional

from fastapi import HTTPException, status

UNPROCESSABLE = 422


class BaseAPIException(HTTPException):
    """Base exception for all API errors"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str = None,
        headers: dict = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def __str__(self) -> str:
        return str(self.detail)


class ValidationError(BaseAPIException):
    """Missing or malformed request fields"""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(BaseAPIException):
    """Referenced rubric, assessment, grade or folder is absent"""

    def __init__(self, resource: str, identifier: str = None):
        detail = f"{resource} not found"
        if identifier:
            detail = f"{resource} '{identifier}' not found"
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier


class CollaboratorError(BaseAPIException):
    """Text-recognition or text-generation call failed or returned unusable content"""

    def __init__(self, service: str, reason: str = None):
        detail = f"{service} call failed"
        if reason:
            detail += f": {reason}"
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code="COLLABORATOR_ERROR"
        )
        self.service = service


class FileProcessingError(BaseAPIException):
    """Error processing an uploaded file"""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            status_code=UNPROCESSABLE,
            detail=f"Could not process file '{filename}': {reason}",
            error_code="FILE_PROCESSING_ERROR"
        )


class ArtifactLookupError(BaseAPIException):
    """Essay folder could not be listed"""

    def __init__(self, folder: str, reason: str = None):
        detail = f"Could not list essay folder '{folder}'"
        if reason:
            detail += f": {reason}"
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="ARTIFACT_LOOKUP_ERROR"
        )
        self.folder = folder


# ===== Grading failures =====

class GradingError(BaseAPIException):
    """Base for parse/match/validate failures of a single grading attempt"""

    def __init__(self, detail: str, error_code: str):
        super().__init__(
            status_code=UNPROCESSABLE,
            detail=detail,
            error_code=error_code
        )


class NoJsonFoundError(GradingError):
    """Assistant reply contains no '{'"""

    def __init__(self):
        super().__init__("Assistant reply contains no JSON object", "NO_JSON_FOUND")


class MalformedJsonError(GradingError):
    """Assistant reply contains braces but no parseable JSON object"""

    def __init__(self, reason: str = None):
        detail = "Assistant reply contains malformed JSON"
        if reason:
            detail += f": {reason}"
        super().__init__(detail, "MALFORMED_JSON")


class UnmatchedCriterionError(GradingError):
    """No assistant key matches a rubric criterion"""

    def __init__(self, title: str):
        super().__init__(f"No score returned for criterion '{title}'", "UNMATCHED_CRITERION")
        self.title = title


class AmbiguousCriterionError(GradingError):
    """Several assistant keys normalize to the same criterion title"""

    def __init__(self, title: str, keys: Iterable[str]):
        self.title = title
        self.keys = list(keys)
        super().__init__(
            f"Criterion '{title}' matched several keys: {', '.join(self.keys)}",
            "AMBIGUOUS_CRITERION"
        )


class InvalidScoreError(GradingError):
    """Matched score is not a finite number on the assistant scale"""

    def __init__(self, title: str, score: Any, reason: Optional[str] = None):
        detail = f"Invalid score {score!r} for criterion '{title}'"
        if reason:
            detail += f": {reason}"
        super().__init__(detail, "INVALID_SCORE")
        self.title = title
        self.score = score
