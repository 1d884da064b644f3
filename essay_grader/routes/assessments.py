"""
Assessment API routes
"""
from fastapi import APIRouter

from ..core import Messages
from ..schemas import AssessmentCreate
from ..services import grading_service

router = APIRouter()


@router.get("")
def list_assessments():
    assessments = [a.to_document() for a in grading_service.list_assessments()]
    return {"assessments": assessments, "total": len(assessments)}


@router.post("")
def create_assessment(request: AssessmentCreate):
    """Bind a rubric to a folder of essays"""
    assessment = grading_service.create_assessment(request.model_dump())
    return {
        "success": True,
        "assessment": assessment.to_document(),
        "message": Messages.ASSESSMENT_CREATED
    }


@router.get("/{name}")
def get_assessment(name: str):
    return grading_service.get_assessment(name).to_document()
