"""
Unit tests for domain records
"""
import pytest

from essay_grader.core.exceptions import ValidationError
from essay_grader.models import Assessment, Criterion, GradeRecord, Rubric


class TestRubric:

    def test_round_trip_document_shape(self):
        doc = {
            "name": "R1",
            "criteria": [{"title": "Clarity", "range": [0, 10], "description": "Clear prose"}],
        }
        rubric = Rubric.from_document(doc)
        assert rubric.criteria[0].min == 0
        assert rubric.criteria[0].max == 10
        assert rubric.to_document() == doc

    def test_empty_criteria_rejected(self):
        with pytest.raises(ValidationError):
            Rubric.from_document({"name": "R1", "criteria": []})

    def test_duplicate_titles_rejected(self):
        with pytest.raises(ValidationError):
            Rubric.from_document({
                "name": "R1",
                "criteria": [
                    {"title": "Clarity", "range": [0, 10]},
                    {"title": "Clarity", "range": [0, 5]},
                ],
            })

    @pytest.mark.parametrize("bounds", [[5, 5], [10, 0], [0], [0, 1, 2], [0.5, 3], ["0", "10"]])
    def test_invalid_range_rejected(self, bounds):
        with pytest.raises(ValidationError):
            Criterion.from_document({"title": "Clarity", "range": bounds})

    def test_rubric_is_immutable(self, rubric):
        with pytest.raises(Exception):
            rubric.name = "R2"

    def test_lookup_by_title(self, rubric):
        assert rubric.criterion("Grammar").range == (0, 20)
        assert rubric.criterion("Missing") is None


class TestAssessment:

    def test_document_uses_camel_case(self):
        assessment = Assessment(name="Essay 1", folder="period-3", rubric="R1")
        doc = assessment.to_document()
        assert set(doc) == {"name", "folder", "rubric", "description", "createdAt"}
        assert doc["description"] == ""

    def test_missing_fields_rejected(self):
        with pytest.raises(ValidationError):
            Assessment.from_document({"name": "Essay 1"})


class TestGradeRecord:

    def test_document_shape(self):
        record = GradeRecord.from_document({"essayFile": "42.txt", "grades": {"Clarity": 5}})
        doc = record.to_document()
        assert set(doc) == {"essayFile", "grades", "comments", "gradedAt"}
        assert doc["comments"] is None
        assert GradeRecord.from_document(doc) == record

    @pytest.mark.parametrize("value", [True, "3", 3.0])
    def test_grades_must_be_integers(self, value):
        with pytest.raises(ValidationError):
            GradeRecord.from_document({"essayFile": "42.txt", "grades": {"Clarity": value}})
