"""
Unit tests for the record store backends
"""
import json
import threading

import pytest

from essay_grader.core.exceptions import NotFoundError
from essay_grader.models import Assessment, GradeRecord, Rubric
from essay_grader.storage import InMemoryRecordStore, JsonFileRecordStore


@pytest.fixture(params=["json", "memory"])
def store(request, tmp_path):
    if request.param == "json":
        return JsonFileRecordStore(tmp_path / "records")
    return InMemoryRecordStore()


class TestAssessments:

    def test_append_and_list(self, store):
        store.append_assessment(Assessment(name="A", folder="f1", rubric="R1"))
        store.append_assessment(Assessment(name="B", folder="f2", rubric="R1"))
        assert [a.name for a in store.list_assessments()] == ["A", "B"]

    def test_duplicate_names_kept(self, store):
        store.append_assessment(Assessment(name="A", folder="f1", rubric="R1"))
        store.append_assessment(Assessment(name="A", folder="f2", rubric="R1"))
        assessments = store.list_assessments()
        assert [a.folder for a in assessments] == ["f1", "f2"]
        assert store.find_assessment("A").folder == "f1"

    def test_find_missing(self, store):
        with pytest.raises(NotFoundError):
            store.find_assessment("missing")

    def test_empty(self, store):
        assert store.list_assessments() == []


class TestRubrics:

    def test_put_get(self, store, rubric):
        store.put_rubric(rubric)
        assert store.get_rubric("R1") == rubric

    def test_put_overwrites(self, store, rubric):
        store.put_rubric(rubric)
        replacement = Rubric.from_document({
            "name": "R1",
            "criteria": [{"title": "Voice", "range": [0, 3]}],
        })
        store.put_rubric(replacement)
        assert store.get_rubric("R1").titles == ["Voice"]
        assert len(store.list_rubrics()) == 1

    def test_get_missing(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get_rubric("missing")
        assert exc_info.value.status_code == 404


class TestGrades:

    def test_last_writer_wins(self, store):
        store.put_grade("A", GradeRecord(essay_file="e1", grades={"Clarity": 3}))
        store.put_grade("A", GradeRecord(essay_file="e1", grades={"Clarity": 9}, comments="regraded"))
        record = store.get_grade("A", "e1")
        assert record.grades == {"Clarity": 9}
        assert record.comments == "regraded"
        assert store.list_grade_keys("A") == ["e1"]

    def test_keys_scoped_by_assessment(self, store):
        store.put_grade("A", GradeRecord(essay_file="2.txt", grades={"Clarity": 1}))
        store.put_grade("A", GradeRecord(essay_file="1.txt", grades={"Clarity": 2}))
        store.put_grade("B", GradeRecord(essay_file="3.txt", grades={"Clarity": 3}))
        assert store.list_grade_keys("A") == ["1.txt", "2.txt"]
        assert store.list_grade_keys("B") == ["3.txt"]
        assert store.list_grade_keys("C") == []
        assert [r.essay_file for r in store.list_grades("A")] == ["1.txt", "2.txt"]

    def test_get_missing(self, store):
        with pytest.raises(NotFoundError):
            store.get_grade("A", "e1")

    def test_keys_differing_in_unsafe_characters(self, store):
        store.put_grade("A", GradeRecord(essay_file="a:b.txt", grades={"Clarity": 1}))
        store.put_grade("A", GradeRecord(essay_file="a_b.txt", grades={"Clarity": 9}))
        assert store.get_grade("A", "a:b.txt").grades == {"Clarity": 1}
        assert store.get_grade("A", "a_b.txt").grades == {"Clarity": 9}
        assert store.list_grade_keys("A") == ["a:b.txt", "a_b.txt"]

    def test_assessments_differing_in_unsafe_characters(self, store):
        store.put_grade("Unit?", GradeRecord(essay_file="e1.txt", grades={"Clarity": 2}))
        assert store.list_grade_keys("Unit_") == []
        assert store.list_grade_keys("Unit?") == ["e1.txt"]
        with pytest.raises(NotFoundError):
            store.get_grade("Unit_", "e1.txt")

    def test_dot_names_stay_inside_store(self, tmp_path):
        store = JsonFileRecordStore(tmp_path / "records")
        store.put_grade("..", GradeRecord(essay_file="..", grades={"Clarity": 2}))
        assert store.get_grade("..", "..").grades == {"Clarity": 2}
        assert not (tmp_path / "records" / "...json").exists()
        assert sorted(p.name for p in (tmp_path / "records" / "grades").iterdir()) == ["%2E."]

    def test_returned_records_are_copies(self, store):
        store.put_grade("A", GradeRecord(essay_file="e1", grades={"Clarity": 3}))
        store.get_grade("A", "e1").grades["Clarity"] = 0
        assert store.get_grade("A", "e1").grades == {"Clarity": 3}

    def test_concurrent_appends_not_lost(self, store):
        def worker(i):
            store.append_assessment(Assessment(name=f"A{i}", folder="f", rubric="R1"))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(store.list_assessments()) == 20


class TestJsonLayout:
    """Documents on disk keep stable field names"""

    def test_files(self, tmp_path, rubric):
        store = JsonFileRecordStore(tmp_path)
        store.append_assessment(Assessment(name="A", folder="f", rubric="R1", description="d"))
        store.put_rubric(rubric)
        store.put_grade("A", GradeRecord(essay_file="42.txt", grades={"Clarity": 5}))

        assessments = json.loads((tmp_path / "assessments.json").read_text(encoding="utf-8"))
        assert set(assessments[0]) == {"name", "folder", "rubric", "description", "createdAt"}

        rubrics = json.loads((tmp_path / "rubrics.json").read_text(encoding="utf-8"))
        assert rubrics["R1"]["criteria"][0] == {"title": "Clarity", "range": [0, 10]}

        grade = json.loads((tmp_path / "grades" / "A" / "42.txt.json").read_text(encoding="utf-8"))
        assert grade["essayFile"] == "42.txt"
        assert grade["grades"] == {"Clarity": 5}

    def test_reopened_store_sees_data(self, tmp_path, rubric):
        JsonFileRecordStore(tmp_path).put_rubric(rubric)
        assert JsonFileRecordStore(tmp_path).get_rubric("R1") == rubric
