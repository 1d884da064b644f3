"""
Rubric Matcher & Score Expander
Turns an assistant's free-form grading reply into rubric-keyed scores
rescaled into each criterion's declared range.
"""
import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional

from ..core.constants import ScoreScale
from ..core.exceptions import (
    AmbiguousCriterionError,
    BaseAPIException,
    CollaboratorError,
    InvalidScoreError,
    UnmatchedCriterionError,
)
from ..models import Rubric
from .key_normalizer import normalize
from .prompts import GRADING_SYSTEM_PROMPT, build_grading_prompt
from .response_parser import extract_json_object

logger = logging.getLogger(__name__)


@dataclass
class GradeResult:
    """Outcome of one grading attempt"""
    raw_scores: Dict[str, float] = field(default_factory=dict)
    expanded: Dict[str, int] = field(default_factory=dict)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero"""
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def expand_score(score: float, low: int, high: int) -> int:
    """
    Linearly rescale a 1-5 assistant score into [low, high].

    1 maps to ``low`` and 5 maps to ``high``.
    """
    span = ScoreScale.RAW_MAX - ScoreScale.RAW_MIN
    fraction = (score - ScoreScale.RAW_MIN) / span
    return round_half_up(fraction * (high - low) + low)


def validate_score(title: str, score: Any) -> float:
    """Accept only finite numbers on the assistant scale"""
    if isinstance(score, bool) or not isinstance(score, Real):
        raise InvalidScoreError(title, score, "not a number")
    try:
        finite = math.isfinite(score)
    except OverflowError:
        finite = False
    if not finite:
        raise InvalidScoreError(title, score, "not finite")
    if not ScoreScale.RAW_MIN <= score <= ScoreScale.RAW_MAX:
        raise InvalidScoreError(
            title, score,
            f"outside {ScoreScale.RAW_MIN}-{ScoreScale.RAW_MAX}"
        )
    return score


def find_key(title: str, raw_scores: Mapping[str, Any]) -> str:
    """
    Find the assistant key that scores ``title``.

    An exact key wins. Otherwise keys are compared after normalization;
    more than one normalized match is treated as ambiguous.
    """
    if title in raw_scores:
        return title

    expected = normalize(title)
    candidates: List[str] = [k for k in raw_scores if normalize(k) == expected]
    if not candidates:
        raise UnmatchedCriterionError(title)
    if len(candidates) > 1:
        raise AmbiguousCriterionError(title, candidates)
    return candidates[0]


def match_scores(raw_scores: Mapping[str, Any], rubric: Rubric) -> Dict[str, float]:
    """Map every rubric title to its validated assistant score"""
    matched = {}
    for criterion in rubric.criteria:
        key = find_key(criterion.title, raw_scores)
        if key != criterion.title:
            logger.debug(f"Criterion '{criterion.title}' matched key '{key}'")
        matched[criterion.title] = validate_score(criterion.title, raw_scores[key])
    return matched


def expand_scores(raw_scores: Mapping[str, Any], rubric: Rubric) -> GradeResult:
    """Match, validate and rescale; all criteria or nothing"""
    matched = match_scores(raw_scores, rubric)
    expanded = {
        c.title: expand_score(matched[c.title], c.min, c.max)
        for c in rubric.criteria
    }
    return GradeResult(raw_scores=matched, expanded=expanded)


class RubricGrader:
    """
    Grades essay text against a rubric with a text-generation assistant.

    The generator is any object with
    ``complete(system_prompt, user_prompt, temperature=None) -> str``;
    see ``essay_grader.llm.providers``.
    """

    def __init__(self, generator, temperature: Optional[float] = None):
        self.generator = generator
        self.temperature = temperature

    def request_scores(self, essay_text: str, rubric: Rubric) -> str:
        """Single, non-retried call to the assistant"""
        prompt = build_grading_prompt(essay_text, rubric)
        try:
            reply = self.generator.complete(
                GRADING_SYSTEM_PROMPT, prompt, temperature=self.temperature
            )
        except BaseAPIException:
            raise
        except Exception as e:
            logger.error(f"Grading request failed: {e}")
            raise CollaboratorError("text-generation", str(e)) from e

        if not isinstance(reply, str):
            raise CollaboratorError("text-generation", "reply contained no text")
        return reply

    def generate_grade(self, essay_text: str, rubric: Rubric) -> GradeResult:
        """
        Score ``essay_text`` against every criterion of ``rubric``.

        Raises:
            CollaboratorError: the assistant call failed
            NoJsonFoundError, MalformedJsonError: unusable reply
            UnmatchedCriterionError, AmbiguousCriterionError: key matching failed
            InvalidScoreError: a matched score is not a finite 1-5 number
        """
        logger.info(f"Grading essay ({len(essay_text)} chars) with rubric '{rubric.name}'")
        reply = self.request_scores(essay_text, rubric)
        logger.info(f"Raw assistant reply: {reply[:500]}")

        raw_scores = extract_json_object(reply)
        result = expand_scores(raw_scores, rubric)

        logger.info(f"Expanded scores for rubric '{rubric.name}': {result.expanded}")
        return result


def generate_grade(essay_text: str, rubric: Rubric, generator) -> GradeResult:
    """Functional form of ``RubricGrader(generator).generate_grade``"""
    return RubricGrader(generator).generate_grade(essay_text, rubric)
