"""
Grading API routes
Assistant grading, manual grades and grade export
"""
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..core import Messages
from ..schemas import AutoGradeRequest, AutoGradeResponse, GradeKeysResponse, GradeSubmit
from ..services import export_service, grading_service

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/{assessment}", response_model=GradeKeysResponse)
def list_graded_essays(assessment: str):
    essays = grading_service.list_grade_keys(assessment)
    return GradeKeysResponse(assessment=assessment, essays=essays, total=len(essays))


@router.get("/{assessment}/export")
def export_grades(assessment: str):
    """Download all grades of an assessment as an Excel workbook"""
    path = export_service.export_grades(assessment)
    return FileResponse(path, media_type=XLSX_MEDIA_TYPE, filename=path.name)


@router.post("/{assessment}/essays/{essay_file}/auto", response_model=AutoGradeResponse)
def auto_grade(assessment: str, essay_file: str, request: Optional[AutoGradeRequest] = None):
    """Score a stored transcript with the assistant and save the grade"""
    comments = request.comments if request else None
    result = grading_service.auto_grade(assessment, essay_file, comments)
    return AutoGradeResponse(
        grade=result["record"].to_document(),
        rawScores=result["raw_scores"],
        expanded=result["expanded"],
        imageFile=result["image_file"],
    )


@router.put("/{assessment}/essays/{essay_file}")
def submit_grade(assessment: str, essay_file: str, request: GradeSubmit):
    """Save a manual grade; replaces any earlier grade for the essay"""
    record = grading_service.submit_grade(assessment, essay_file, request.grades, request.comments)
    return {"success": True, "grade": record.to_document(), "message": Messages.GRADE_SAVED}


@router.get("/{assessment}/essays/{essay_file}")
def get_grade(assessment: str, essay_file: str):
    return grading_service.get_grade(assessment, essay_file).to_document()
