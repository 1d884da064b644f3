# Services package
from .folder_service import folder_service, FolderService
from .transcription_service import transcription_service, TranscriptionService
from .grading_service import grading_service, GradingService
from .export_service import export_service, ExportService

__all__ = [
    "folder_service",
    "FolderService",
    "transcription_service",
    "TranscriptionService",
    "grading_service",
    "GradingService",
    "export_service",
    "ExportService",
]
