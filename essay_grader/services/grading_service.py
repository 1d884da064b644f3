"""
Grading Service
Rubrics, assessments and grade records on top of the record store
"""
import logging
from typing import Any, Dict, List, Optional

from ..config import settings
from ..core import ValidationError
from ..grader import RubricGrader, link_artifact
from ..llm import LLMFactory
from ..models import Assessment, GradeRecord, Rubric
from ..storage import RecordStore, create_record_store
from .folder_service import FolderService, check_name, folder_service

logger = logging.getLogger(__name__)


def check_grades(grades: Dict[str, Any], rubric: Rubric) -> Dict[str, int]:
    """Manual grades must cover exactly the rubric titles, each within its range"""
    missing = [t for t in rubric.titles if t not in grades]
    if missing:
        raise ValidationError(f"Missing grades for: {', '.join(missing)}")
    unknown = [k for k in grades if rubric.criterion(k) is None]
    if unknown:
        raise ValidationError(f"Unknown criteria: {', '.join(unknown)}")

    for criterion in rubric.criteria:
        value = grades[criterion.title]
        if not criterion.min <= value <= criterion.max:
            raise ValidationError(
                f"Grade {value} for '{criterion.title}' is outside "
                f"[{criterion.min}, {criterion.max}]"
            )
    return dict(grades)


class GradingService:
    """Service for rubric grading and record management"""

    def __init__(
        self,
        store: RecordStore,
        folders: Optional[FolderService] = None,
        generator=None
    ):
        self.store = store
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

    # ===== Rubrics =====

    def save_rubric(self, data: Dict[str, Any]) -> Rubric:
        rubric = Rubric.from_document(data)
        return self.store.put_rubric(rubric)

    def get_rubric(self, name: str) -> Rubric:
        return self.store.get_rubric(name)

    def list_rubrics(self) -> List[Rubric]:
        return self.store.list_rubrics()

    # ===== Assessments =====

    def create_assessment(self, data: Dict[str, Any]) -> Assessment:
        """Validate references and append; duplicate names are allowed"""
        assessment = Assessment.from_document(data)
        check_name(assessment.name, "Assessment")
        self.folders.folder_path(assessment.folder)
        self.store.get_rubric(assessment.rubric)
        return self.store.append_assessment(assessment)

    def get_assessment(self, name: str) -> Assessment:
        return self.store.find_assessment(name)

    def list_assessments(self) -> List[Assessment]:
        return self.store.list_assessments()

    # ===== Grades =====

    def auto_grade(
        self,
        assessment_name: str,
        essay_file: str,
        comments: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Grade a stored transcript with the assistant and persist the result.

        Nothing is written unless every criterion was matched and expanded.
        """
        assessment = self.store.find_assessment(assessment_name)
        rubric = self.store.get_rubric(assessment.rubric)
        essay_text = self.folders.read_transcript(assessment.folder, essay_file)

        grader = RubricGrader(self.generator, temperature=settings.GRADING_TEMPERATURE)
        result = grader.generate_grade(essay_text, rubric)
        image_file = link_artifact(self.folders.folder_path(assessment.folder), essay_file)

        record = GradeRecord(essay_file=essay_file, grades=result.expanded, comments=comments)
        self.store.put_grade(assessment_name, record)
        logger.info(f"Auto-graded {essay_file} under '{assessment_name}': {result.expanded}")

        return {
            "record": record,
            "raw_scores": result.raw_scores,
            "expanded": result.expanded,
            "image_file": image_file,
        }

    def submit_grade(
        self,
        assessment_name: str,
        essay_file: str,
        grades: Dict[str, Any],
        comments: Optional[str] = None
    ) -> GradeRecord:
        """Store a manually entered grade, replacing any previous one"""
        assessment = self.store.find_assessment(assessment_name)
        rubric = self.store.get_rubric(assessment.rubric)
        record = GradeRecord.from_document(
            {"essayFile": essay_file, "grades": grades, "comments": comments}
        )
        check_grades(record.grades, rubric)
        return self.store.put_grade(assessment_name, record)

    def get_grade(self, assessment_name: str, essay_file: str) -> GradeRecord:
        return self.store.get_grade(assessment_name, essay_file)

    def list_grade_keys(self, assessment_name: str) -> List[str]:
        self.store.find_assessment(assessment_name)
        return self.store.list_grade_keys(assessment_name)


# Singleton instance
grading_service = GradingService(create_record_store())
