"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


# ===== Upload Schemas =====
class UploadResponse(BaseModel):
    success: bool = True
    message: str
    rawText: str
    correctedText: str
    transcriptFile: Optional[str] = None
    imageFile: Optional[str] = None


# ===== Folder Schemas =====
class FolderCreate(BaseModel):
    name: str = Field(..., description="Folder name, no path separators")


class FolderListResponse(BaseModel):
    folders: List[str]
    total: int


class EssayPair(BaseModel):
    transcript: str
    image: str


class EssayListResponse(BaseModel):
    folder: str
    essays: List[EssayPair]
    total: int


class EssayTextResponse(BaseModel):
    folder: str
    essayFile: str
    text: str


# ===== Assessment Schemas =====
class AssessmentCreate(BaseModel):
    name: str
    folder: str
    rubric: str = Field(..., description="Name of an existing rubric")
    description: str = ""


# ===== Grading Schemas =====
class GradeSubmit(BaseModel):
    grades: Dict[str, Any] = Field(..., description="Criterion title -> score in its range")
    comments: Optional[str] = None


class AutoGradeRequest(BaseModel):
    comments: Optional[str] = None


class AutoGradeResponse(BaseModel):
    success: bool = True
    grade: Dict[str, Any]
    rawScores: Dict[str, float]
    expanded: Dict[str, int]
    imageFile: str


class GradeKeysResponse(BaseModel):
    assessment: str
    essays: List[str]
    total: int
