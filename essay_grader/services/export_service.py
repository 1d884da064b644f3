"""
Export Service
Writes an assessment's grades to an Excel workbook
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font

from ..config import settings
from ..core import NotFoundError
from ..models import Assessment, GradeRecord, Rubric
from ..utils import ensure_directory, safe_filename
from .grading_service import GradingService, grading_service

logger = logging.getLogger(__name__)


class ExportService:
    """Service for grade exports"""

    def __init__(self, grading: GradingService, exports_dir: Optional[Path] = None):
        self.grading = grading
        self.exports_dir = exports_dir or settings.DATA_DIR / "exports"

    def build_workbook(
        self,
        assessment: Assessment,
        rubric: Rubric,
        records: List[GradeRecord]
    ) -> Workbook:
        wb = Workbook()

        # Summary sheet
        ws_summary = wb.active
        ws_summary.title = "Summary"

        rows = [
            ("Assessment", assessment.name),
            ("Folder", assessment.folder),
            ("Rubric", rubric.name),
            ("Graded Essays", len(records)),
        ]
        for criterion in rubric.criteria:
            values = [r.grades[criterion.title] for r in records if criterion.title in r.grades]
            average = round(sum(values) / len(values), 2) if values else None
            rows.append((f"Average {criterion.title} [{criterion.min}-{criterion.max}]", average))

        for row_idx, (label, value) in enumerate(rows, 1):
            ws_summary.cell(row=row_idx, column=1, value=label).font = Font(bold=True)
            ws_summary.cell(row=row_idx, column=2, value=value)

        # Grades sheet
        ws_grades = wb.create_sheet("Grades")
        headers = ["Essay File", *rubric.titles, "Total", "Comments", "Graded At"]
        ws_grades.append(headers)

        for col in range(1, len(headers) + 1):
            ws_grades.cell(row=1, column=col).font = Font(bold=True)

        for r in records:
            scores = [r.grades.get(title) for title in rubric.titles]
            total = sum(s for s in scores if s is not None)
            ws_grades.append([r.essay_file, *scores, total, r.comments or "", r.graded_at])

        # Auto-adjust column width
        for col in ws_grades.columns:
            max_len = max(len(str(cell.value)) if cell.value is not None else 0 for cell in col)
            ws_grades.column_dimensions[col[0].column_letter].width = max_len + 2

        return wb

    def export_grades(self, assessment_name: str) -> Path:
        """Export every grade of an assessment; returns the workbook path"""
        assessment = self.grading.get_assessment(assessment_name)
        rubric = self.grading.get_rubric(assessment.rubric)
        records = self.grading.store.list_grades(assessment_name)
        if not records:
            raise NotFoundError("Grades for assessment", assessment_name)

        wb = self.build_workbook(assessment, rubric, records)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"grades_{safe_filename(assessment_name)}_{timestamp}.xlsx"
        file_path = ensure_directory(self.exports_dir) / filename
        wb.save(file_path)

        logger.info(f"Exported {len(records)} grades to Excel: {filename}")
        return file_path


# Singleton instance
export_service = ExportService(grading_service)
