"""
Record Store
============
Keyed persistence for assessments, rubrics and grade records.

Layout of the JSON-file backend::

    <root>/assessments.json                       [Assessment, ...]
    <root>/rubrics.json                           {name: Rubric}
    <root>/grades/<assessment>/<essay file>.json  GradeRecord (names percent-encoded)

Writes to the same collection or grade key are serialized with a
per-key lock; the last write wins.
"""

import copy
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import quote

from ..config import settings
from ..core.exceptions import NotFoundError
from ..models import Assessment, GradeRecord, Rubric
from ..utils import ensure_directory, read_json, write_json

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Contract shared by every record store backend"""

    # ===== Assessments =====

    @abstractmethod
    def append_assessment(self, assessment: Assessment) -> Assessment:
        """Append without a uniqueness check; duplicate names are kept"""

    @abstractmethod
    def list_assessments(self) -> List[Assessment]:
        """All assessments in insertion order"""

    def find_assessment(self, name: str) -> Assessment:
        """First assessment with ``name``"""
        for assessment in self.list_assessments():
            if assessment.name == name:
                return assessment
        raise NotFoundError("Assessment", name)

    # ===== Rubrics =====

    @abstractmethod
    def put_rubric(self, rubric: Rubric) -> Rubric:
        """Store under ``rubric.name``, silently replacing any previous one"""

    @abstractmethod
    def get_rubric(self, name: str) -> Rubric:
        """Raises NotFoundError if absent"""

    @abstractmethod
    def list_rubrics(self) -> List[Rubric]:
        """All rubrics"""

    # ===== Grades =====

    @abstractmethod
    def put_grade(self, assessment_name: str, record: GradeRecord) -> GradeRecord:
        """Store under (assessment, record.essay_file); last write wins"""

    @abstractmethod
    def get_grade(self, assessment_name: str, essay_file: str) -> GradeRecord:
        """Raises NotFoundError if absent"""

    @abstractmethod
    def list_grade_keys(self, assessment_name: str) -> List[str]:
        """Essay files graded under an assessment, sorted"""

    def list_grades(self, assessment_name: str) -> List[GradeRecord]:
        return [
            self.get_grade(assessment_name, essay_file)
            for essay_file in self.list_grade_keys(assessment_name)
        ]


def encode_key(name: str) -> str:
    """Reversible file-name form of a record key; no two keys share one"""
    encoded = quote(name, safe="")
    if encoded.startswith("."):
        encoded = "%2E" + encoded[1:]
    return encoded


class KeyedLocks:
    """Lazily created lock per key"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[str, ...], threading.Lock] = {}

    def __call__(self, *key: str) -> threading.Lock:
        with self._guard:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]


class JsonFileRecordStore(RecordStore):
    """
    Record store backed by JSON documents on disk.
    """

    def __init__(self, root: Union[str, Path]):
        """
        Initialize the store.

        Args:
            root: Directory holding the documents (created if missing)
        """
        self.root = ensure_directory(root)
        self.assessments_file = self.root / "assessments.json"
        self.rubrics_file = self.root / "rubrics.json"
        self.grades_dir = self.root / "grades"
        self._lock = KeyedLocks()

    # ===== Assessments =====

    def _read_assessments(self) -> List[dict]:
        if not self.assessments_file.exists():
            return []
        return read_json(self.assessments_file)

    def append_assessment(self, assessment: Assessment) -> Assessment:
        with self._lock("assessments"):
            documents = self._read_assessments()
            documents.append(assessment.to_document())
            write_json(self.assessments_file, documents)
        logger.info(f"Appended assessment '{assessment.name}' ({len(documents)} total)")
        return assessment

    def list_assessments(self) -> List[Assessment]:
        with self._lock("assessments"):
            documents = self._read_assessments()
        return [Assessment.from_document(doc) for doc in documents]

    # ===== Rubrics =====

    def _read_rubrics(self) -> Dict[str, dict]:
        if not self.rubrics_file.exists():
            return {}
        return read_json(self.rubrics_file)

    def put_rubric(self, rubric: Rubric) -> Rubric:
        with self._lock("rubrics"):
            documents = self._read_rubrics()
            if rubric.name in documents:
                logger.info(f"Replacing rubric '{rubric.name}'")
            documents[rubric.name] = rubric.to_document()
            write_json(self.rubrics_file, documents)
        logger.info(f"Saved rubric '{rubric.name}' with {len(rubric.criteria)} criteria")
        return rubric

    def get_rubric(self, name: str) -> Rubric:
        with self._lock("rubrics"):
            document = self._read_rubrics().get(name)
        if document is None:
            raise NotFoundError("Rubric", name)
        return Rubric.from_document(document)

    def list_rubrics(self) -> List[Rubric]:
        with self._lock("rubrics"):
            documents = self._read_rubrics()
        return [Rubric.from_document(doc) for doc in documents.values()]

    # ===== Grades =====

    def _grade_dir(self, assessment_name: str) -> Path:
        return self.grades_dir / encode_key(assessment_name)

    def _grade_path(self, assessment_name: str, essay_file: str) -> Path:
        return self._grade_dir(assessment_name) / f"{encode_key(essay_file)}.json"

    def put_grade(self, assessment_name: str, record: GradeRecord) -> GradeRecord:
        path = self._grade_path(assessment_name, record.essay_file)
        with self._lock("grades", assessment_name, record.essay_file):
            ensure_directory(path.parent)
            write_json(path, record.to_document())
        logger.info(f"Saved grade for '{record.essay_file}' under '{assessment_name}'")
        return record

    def get_grade(self, assessment_name: str, essay_file: str) -> GradeRecord:
        path = self._grade_path(assessment_name, essay_file)
        with self._lock("grades", assessment_name, essay_file):
            if not path.exists():
                raise NotFoundError("Grade", f"{assessment_name}/{essay_file}")
            document = read_json(path)
        if document.get("essayFile") != essay_file:
            raise NotFoundError("Grade", f"{assessment_name}/{essay_file}")
        return GradeRecord.from_document(document)

    def list_grade_keys(self, assessment_name: str) -> List[str]:
        directory = self._grade_dir(assessment_name)
        if not directory.exists():
            return []
        keys = []
        for path in directory.glob("*.json"):
            document = read_json(path)
            keys.append(document["essayFile"])
        return sorted(keys)


class InMemoryRecordStore(RecordStore):
    """
    Record store kept in process memory. Documents are copied on the way
    in and out so callers never share state with the store.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._assessments: List[dict] = []
        self._rubrics: Dict[str, dict] = {}
        self._grades: Dict[Tuple[str, str], dict] = {}

    def append_assessment(self, assessment: Assessment) -> Assessment:
        with self._lock:
            self._assessments.append(assessment.to_document())
        return assessment

    def list_assessments(self) -> List[Assessment]:
        with self._lock:
            documents = copy.deepcopy(self._assessments)
        return [Assessment.from_document(doc) for doc in documents]

    def put_rubric(self, rubric: Rubric) -> Rubric:
        with self._lock:
            self._rubrics[rubric.name] = rubric.to_document()
        return rubric

    def get_rubric(self, name: str) -> Rubric:
        with self._lock:
            document: Optional[dict] = copy.deepcopy(self._rubrics.get(name))
        if document is None:
            raise NotFoundError("Rubric", name)
        return Rubric.from_document(document)

    def list_rubrics(self) -> List[Rubric]:
        with self._lock:
            documents = copy.deepcopy(list(self._rubrics.values()))
        return [Rubric.from_document(doc) for doc in documents]

    def put_grade(self, assessment_name: str, record: GradeRecord) -> GradeRecord:
        with self._lock:
            self._grades[(assessment_name, record.essay_file)] = record.to_document()
        return record

    def get_grade(self, assessment_name: str, essay_file: str) -> GradeRecord:
        with self._lock:
            document = copy.deepcopy(self._grades.get((assessment_name, essay_file)))
        if document is None:
            raise NotFoundError("Grade", f"{assessment_name}/{essay_file}")
        return GradeRecord.from_document(document)

    def list_grade_keys(self, assessment_name: str) -> List[str]:
        with self._lock:
            return sorted(essay for name, essay in self._grades if name == assessment_name)


def create_record_store() -> RecordStore:
    """Default store under settings.DATA_DIR/records"""
    return JsonFileRecordStore(settings.records_dir)
