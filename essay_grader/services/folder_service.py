"""
Folder Service
Essay folders and the transcript/image pairs inside them
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..config import settings
from ..core import Messages, NotFoundError, ValidationError, TRANSCRIPT_EXTENSION
from ..grader.artifact_linker import link_artifact, list_folder
from ..utils import ensure_directory

logger = logging.getLogger(__name__)


def check_name(name: str, what: str = "Folder") -> str:
    """Reject names that would escape their parent directory"""
    if not name or not name.strip():
        raise ValidationError(f"{what} name is required")
    if "/" in name or "\\" in name or name in (".", "..") or name.startswith("."):
        raise ValidationError(Messages.INVALID_FOLDER_NAME)
    return name


class FolderService:
    """Service for essay folders"""

    def __init__(self, essays_dir: Optional[Path] = None):
        self.essays_dir = ensure_directory(essays_dir or settings.essays_dir)

    def folder_path(self, name: str) -> Path:
        """Existing folder by name"""
        path = self.essays_dir / check_name(name)
        if not path.is_dir():
            raise NotFoundError("Folder", name)
        return path

    def list_folders(self) -> List[str]:
        return sorted(
            p.name for p in self.essays_dir.iterdir()
            if p.is_dir() and not p.name.startswith(".")
        )

    def create_folder(self, name: str) -> str:
        path = self.essays_dir / check_name(name)
        path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created essay folder: {name}")
        return name

    def list_essays(self, name: str) -> List[Dict[str, str]]:
        """Transcripts in a folder with the image each one links to"""
        folder = self.folder_path(name)
        return [
            {"transcript": filename, "image": link_artifact(folder, filename)}
            for filename in list_folder(folder)
            if filename.endswith(TRANSCRIPT_EXTENSION)
        ]

    def transcript_path(self, name: str, essay_file: str) -> Path:
        folder = self.folder_path(name)
        check_name(essay_file, "Essay file")
        path = folder / essay_file
        if not essay_file.endswith(TRANSCRIPT_EXTENSION) or not path.is_file():
            raise NotFoundError("Essay", essay_file)
        return path

    def read_transcript(self, name: str, essay_file: str) -> str:
        return self.transcript_path(name, essay_file).read_text(encoding="utf-8")


# Singleton instance
folder_service = FolderService()
