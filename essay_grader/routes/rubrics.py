"""
Rubric API routes
"""
from typing import Any, Dict

from fastapi import APIRouter, Body

from ..core import Messages
from ..services import grading_service

router = APIRouter()


@router.get("")
def list_rubrics():
    rubrics = [r.to_document() for r in grading_service.list_rubrics()]
    return {"rubrics": rubrics, "total": len(rubrics)}


@router.post("")
def save_rubric(payload: Dict[str, Any] = Body(...)):
    """
    Save a rubric ``{name, criteria: [{title, range: [min, max]}]}``.
    An existing rubric with the same name is replaced.
    """
    rubric = grading_service.save_rubric(payload)
    return {"success": True, "rubric": rubric.to_document(), "message": Messages.RUBRIC_SAVED}


@router.get("/{name}")
def get_rubric(name: str):
    return grading_service.get_rubric(name).to_document()
