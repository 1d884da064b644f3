"""
Folder API routes
Essay folders and their transcript/image pairs
"""
from fastapi import APIRouter

from ..core import Messages
from ..schemas import (
    EssayListResponse,
    EssayTextResponse,
    FolderCreate,
    FolderListResponse,
)
from ..services import folder_service

router = APIRouter()


@router.get("", response_model=FolderListResponse)
def list_folders():
    folders = folder_service.list_folders()
    return FolderListResponse(folders=folders, total=len(folders))


@router.post("")
def create_folder(request: FolderCreate):
    name = folder_service.create_folder(request.name)
    return {"success": True, "folder": name, "message": Messages.FOLDER_CREATED}


@router.get("/{folder}/essays", response_model=EssayListResponse)
def list_essays(folder: str):
    """Transcripts in a folder, each with its linked scan"""
    essays = folder_service.list_essays(folder)
    return EssayListResponse(folder=folder, essays=essays, total=len(essays))


@router.get("/{folder}/essays/{essay_file}", response_model=EssayTextResponse)
def get_essay(folder: str, essay_file: str):
    text = folder_service.read_transcript(folder, essay_file)
    return EssayTextResponse(folder=folder, essayFile=essay_file, text=text)
