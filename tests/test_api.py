"""
API tests against the FastAPI app with in-memory records and fake collaborators
"""
import pytest
from fastapi.testclient import TestClient

from conftest import FakeGenerator, FakeRecognizer, png_bytes
from essay_grader.main import app
from essay_grader.services import folder_service, grading_service, transcription_service
from essay_grader.storage import InMemoryRecordStore

RUBRIC = {
    "name": "R1",
    "criteria": [
        {"title": "Clarity", "range": [0, 10]},
        {"title": "Grammar", "range": [0, 20]},
    ],
}


@pytest.fixture
def client(tmp_path, monkeypatch):
    essays_dir = tmp_path / "essays"
    essays_dir.mkdir()
    uploads_dir = tmp_path / "uploads"
    uploads_dir.mkdir()

    monkeypatch.setattr(folder_service, "essays_dir", essays_dir)
    monkeypatch.setattr(grading_service, "store", InMemoryRecordStore())
    monkeypatch.setattr(grading_service, "_generator", FakeGenerator(reply='{"Clarity": 5, "Grammar": 3}'))
    monkeypatch.setattr(transcription_service, "uploads_dir", uploads_dir)
    monkeypatch.setattr(transcription_service, "recognizer", FakeRecognizer())
    monkeypatch.setattr(transcription_service, "_generator", FakeGenerator(reply="This is a sample essay."))

    with TestClient(app) as c:
        yield c


@pytest.fixture
def assessment(client):
    client.post("/api/folders", json={"name": "class-a"})
    client.post("/api/upload", files={"file": ("42.png", png_bytes(), "image/png")}, data={"folder": "class-a"})
    client.post("/api/rubrics", json=RUBRIC)
    response = client.post("/api/assessments", json={"name": "Essay 1", "folder": "class-a", "rubric": "R1"})
    assert response.status_code == 200
    return "Essay 1"


class TestBasics:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestUpload:

    def test_upload_without_folder(self, client):
        response = client.post("/api/upload", files={"file": ("scan.png", png_bytes(), "image/png")})
        assert response.status_code == 200
        body = response.json()
        assert body["rawText"] == "Ths is a sampel essay."
        assert body["correctedText"] == "This is a sample essay."
        assert body["transcriptFile"] is None

    def test_upload_wrong_type(self, client):
        response = client.post("/api/upload", files={"file": ("notes.txt", b"text", "text/plain")})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "VALIDATION_ERROR"

    def test_upload_unknown_folder(self, client):
        response = client.post(
            "/api/upload",
            files={"file": ("scan.png", png_bytes(), "image/png")},
            data={"folder": "missing"},
        )
        assert response.status_code == 404

    def test_correction_failure(self, client, monkeypatch):
        monkeypatch.setattr(transcription_service, "_generator", FakeGenerator(error=RuntimeError("down")))
        response = client.post("/api/upload", files={"file": ("scan.png", png_bytes(), "image/png")})
        assert response.status_code == 502


class TestFolders:

    def test_list_essays(self, client, assessment):
        response = client.get("/api/folders/class-a/essays")
        assert response.status_code == 200
        assert response.json()["essays"] == [{"transcript": "42.txt", "image": "42.png"}]

    def test_read_essay(self, client, assessment):
        response = client.get("/api/folders/class-a/essays/42.txt")
        assert response.json()["text"] == "This is a sample essay."

    def test_list_folders(self, client, assessment):
        assert client.get("/api/folders").json()["folders"] == ["class-a"]

    def test_invalid_name(self, client):
        response = client.post("/api/folders", json={"name": ".hidden"})
        assert response.status_code == 400


class TestRubricsAndAssessments:

    def test_invalid_rubric(self, client):
        response = client.post("/api/rubrics", json={"name": "Bad", "criteria": []})
        assert response.status_code == 400

    def test_get_rubric(self, client, assessment):
        assert client.get("/api/rubrics/R1").json() == RUBRIC

    def test_missing_rubric(self, client):
        response = client.get("/api/rubrics/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_assessment_with_missing_rubric(self, client):
        client.post("/api/folders", json={"name": "class-b"})
        response = client.post("/api/assessments", json={"name": "X", "folder": "class-b", "rubric": "nope"})
        assert response.status_code == 404

    def test_list_assessments(self, client, assessment):
        body = client.get("/api/assessments").json()
        assert body["total"] == 1
        assert body["assessments"][0]["rubric"] == "R1"


class TestGrading:

    def test_auto_grade(self, client, assessment):
        response = client.post(f"/api/grading/{assessment}/essays/42.txt/auto")
        assert response.status_code == 200
        body = response.json()
        assert body["expanded"] == {"Clarity": 10, "Grammar": 10}
        assert body["imageFile"] == "42.png"
        assert body["grade"]["essayFile"] == "42.txt"

        stored = client.get(f"/api/grading/{assessment}/essays/42.txt").json()
        assert stored["grades"] == {"Clarity": 10, "Grammar": 10}
        assert client.get(f"/api/grading/{assessment}").json()["essays"] == ["42.txt"]

    def test_auto_grade_unmatched(self, client, assessment, monkeypatch):
        monkeypatch.setattr(grading_service, "_generator", FakeGenerator(reply='{"Clarity": 5}'))
        response = client.post(f"/api/grading/{assessment}/essays/42.txt/auto")
        assert response.status_code == 422
        assert response.json()["error_code"] == "UNMATCHED_CRITERION"
        assert client.get(f"/api/grading/{assessment}").json()["essays"] == []

    def test_manual_grade(self, client, assessment):
        response = client.put(
            f"/api/grading/{assessment}/essays/42.txt",
            json={"grades": {"Clarity": 4, "Grammar": 12}, "comments": "ok"},
        )
        assert response.status_code == 200
        stored = client.get(f"/api/grading/{assessment}/essays/42.txt").json()
        assert stored["grades"] == {"Clarity": 4, "Grammar": 12}
        assert stored["comments"] == "ok"

    def test_manual_grade_out_of_range(self, client, assessment):
        response = client.put(
            f"/api/grading/{assessment}/essays/42.txt",
            json={"grades": {"Clarity": 40, "Grammar": 12}},
        )
        assert response.status_code == 400

    def test_missing_grade(self, client, assessment):
        assert client.get(f"/api/grading/{assessment}/essays/42.txt").status_code == 404

    def test_export(self, client, assessment):
        client.put(f"/api/grading/{assessment}/essays/42.txt", json={"grades": {"Clarity": 4, "Grammar": 12}})
        response = client.get(f"/api/grading/{assessment}/export")
        assert response.status_code == 200
        assert response.content[:2] == b"PK"

    def test_export_without_grades(self, client, assessment):
        assert client.get(f"/api/grading/{assessment}/export").status_code == 404
