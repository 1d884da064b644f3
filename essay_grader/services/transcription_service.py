"""
Transcription Service
Upload -> preprocess -> text recognition -> assistant correction
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import settings
from ..core import (
    BaseAPIException,
    CollaboratorError,
    FileLimits,
    Messages,
    PROCESSED_PREFIX,
    TRANSCRIPT_EXTENSION,
    ValidationError,
)
from ..grader.artifact_linker import record_link
from ..grader.image_processing import preprocess_file
from ..grader.prompts import CORRECTION_SYSTEM_PROMPT
from ..llm import LLMFactory
from ..ocr import clean_text, text_recognizer
from ..utils import ensure_directory, generate_timestamp_id, get_file_extension, is_valid_image, safe_filename
from .folder_service import folder_service

logger = logging.getLogger(__name__)


class TranscriptionService:
    """Turns an uploaded essay scan into corrected text"""

    def __init__(self, recognizer=None, generator=None, folders=None):
        self.uploads_dir = ensure_directory(settings.uploads_dir)
        self.recognizer = recognizer or text_recognizer
        self.folders = folders or folder_service
        self._generator = generator

    @property
    def generator(self):
        """Text-generation collaborator, built from settings on first use"""
        if self._generator is None:
            self._generator = LLMFactory.get_default()
        return self._generator

    @generator.setter
    def generator(self, value):
        self._generator = value

    def correct_text(self, text: str) -> str:
        """Fix grammar, punctuation and spelling without changing meaning"""
        try:
            return self.generator.complete(
                CORRECTION_SYSTEM_PROMPT,
                text,
                temperature=settings.CORRECTION_TEMPERATURE,
            )
        except BaseAPIException:
            raise
        except Exception as e:
            logger.error(f"Correction request failed: {e}")
            raise CollaboratorError("text-generation", str(e)) from e

    def _check_upload(self, filename: Optional[str], content: bytes) -> str:
        if not filename:
            raise ValidationError(Messages.FILE_REQUIRED)
        if not is_valid_image(filename):
            raise ValidationError(Messages.INVALID_FILE_TYPE)
        if not content:
            raise ValidationError(Messages.FILE_REQUIRED)
        if len(content) > FileLimits.MAX_IMAGE_SIZE:
            raise ValidationError(Messages.FILE_TOO_LARGE)
        return safe_filename(filename)

    def transcribe(
        self,
        filename: Optional[str],
        content: bytes,
        folder: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Transcribe one uploaded image.

        Without ``folder`` every intermediate file is removed afterwards.
        With ``folder`` the original image and the corrected transcript
        ``<id>.txt`` are kept there and linked to each other.

        Returns:
            {"rawText", "correctedText", "transcriptFile", "imageFile"}
        """
        filename = self._check_upload(filename, content)
        essay_id = Path(filename).stem
        extension = get_file_extension(filename)

        target_dir = self.folders.folder_path(folder) if folder else None
        if target_dir is not None and (target_dir / f"{essay_id}{TRANSCRIPT_EXTENSION}").exists():
            essay_id = generate_timestamp_id(essay_id)

        image_file = f"{essay_id}{extension}"
        input_path = (target_dir or self.uploads_dir) / (
            image_file if target_dir else f"{generate_timestamp_id('upload')}{extension}"
        )
        processed_path = self.uploads_dir / f"{PROCESSED_PREFIX}{generate_timestamp_id(essay_id)}.png"

        input_path.write_bytes(content)
        logger.info(f"Received upload {filename} ({len(content)} bytes)")

        try:
            preprocess_file(input_path, processed_path, settings.PREPROCESS_WIDTH)
            raw_text = clean_text(self.recognizer.recognize(processed_path))
            corrected_text = self.correct_text(raw_text)
        except Exception:
            if target_dir is not None:
                input_path.unlink(missing_ok=True)
            raise
        finally:
            processed_path.unlink(missing_ok=True)
            if target_dir is None:
                input_path.unlink(missing_ok=True)

        transcript_file = None
        if target_dir is not None:
            transcript_file = f"{essay_id}{TRANSCRIPT_EXTENSION}"
            (target_dir / transcript_file).write_text(corrected_text, encoding="utf-8")
            record_link(target_dir, transcript_file, image_file)
            logger.info(f"Stored transcript {transcript_file} in folder {folder}")

        return {
            "rawText": raw_text,
            "correctedText": corrected_text,
            "transcriptFile": transcript_file,
            "imageFile": image_file if target_dir is not None else None,
        }


# Singleton instance
transcription_service = TranscriptionService()
