"""
Upload API routes
Handles essay scan uploads and transcription
"""
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from ..core import Messages
from ..schemas import UploadResponse
from ..services import transcription_service

router = APIRouter()


@router.post("", response_model=UploadResponse)
async def upload_essay(
    file: UploadFile = File(...),
    folder: Optional[str] = Form(None)
):
    """
    Upload a scanned essay, run OCR and correct the transcription.
    When a folder is given the image and transcript are kept there.
    """
    content = await file.read()
    result = await run_in_threadpool(
        transcription_service.transcribe, file.filename, content, folder
    )
    return UploadResponse(message=Messages.UPLOAD_SUCCESS, **result)
