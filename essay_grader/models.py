"""
Domain records persisted by the record store

Field aliases keep the stored JSON shapes stable:
    Assessment  {name, folder, rubric, description, createdAt}
    Rubric      {name, criteria: [{title, range: [min, max], ...}]}
    GradeRecord {essayFile, grades, comments, gradedAt}
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from .core.exceptions import ValidationError


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string"""
    return datetime.now(timezone.utc).isoformat()


class Record(BaseModel):
    """Base class with document conversion helpers"""

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, data: Any):
        """Build a record from a stored or submitted document, raising ValidationError"""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or cls.__name__}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(f"Invalid {cls.__name__}: {errors}") from e

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Criterion(Record):
    """One gradable dimension of a rubric"""

    model_config = ConfigDict(extra="allow", frozen=True)

    title: str = Field(..., min_length=1)
    range: Tuple[StrictInt, StrictInt]

    @field_validator("range")
    @classmethod
    def _check_bounds(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        low, high = value
        if low >= high:
            raise ValueError(f"range minimum {low} must be below maximum {high}")
        return value

    @property
    def min(self) -> int:
        return self.range[0]

    @property
    def max(self) -> int:
        return self.range[1]


class Rubric(Record):
    """Named, ordered set of criteria; new versions are new names"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    criteria: List[Criterion] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_unique_titles(self) -> "Rubric":
        seen = set()
        for criterion in self.criteria:
            if criterion.title in seen:
                raise ValueError(f"duplicate criterion title '{criterion.title}'")
            seen.add(criterion.title)
        return self

    @property
    def titles(self) -> List[str]:
        return [c.title for c in self.criteria]

    def criterion(self, title: str) -> Optional[Criterion]:
        for c in self.criteria:
            if c.title == title:
                return c
        return None


class Assessment(Record):
    """A grading exercise binding a rubric to a folder of essays"""

    name: str = Field(..., min_length=1)
    folder: str = Field(..., min_length=1)
    rubric: str = Field(..., min_length=1)
    description: str = ""
    created_at: str = Field(default_factory=utc_timestamp, alias="createdAt")


class GradeRecord(Record):
    """Persisted scoring outcome for one essay under one assessment"""

    essay_file: str = Field(..., min_length=1, alias="essayFile")
    grades: Dict[str, StrictInt]
    comments: Optional[str] = None
    graded_at: str = Field(default_factory=utc_timestamp, alias="gradedAt")
