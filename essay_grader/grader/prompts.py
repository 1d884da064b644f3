"""
Prompt templates for the text-generation assistant
"""
import json

from ..models import Rubric

CORRECTION_SYSTEM_PROMPT = (
    "You are a helpful assistant that corrects grammar, punctuation, and "
    "spelling errors in OCR-transcribed essays without changing meaning."
)

GRADING_SYSTEM_PROMPT = (
    "You are an experienced teacher grading student essays against a rubric. "
    "You answer with a single JSON object and nothing else."
)

GRADING_PROMPT = """Grade the essay below against each rubric criterion.

RUBRIC CRITERIA:
{criteria}

RULES:
1. Rate every criterion on a whole-number scale from 1 (poor) to 5 (excellent)
2. Return strictly a flat JSON object, one key per criterion
3. Use the criterion titles exactly as written above as the keys, without numbering
4. Do not add commentary, markdown or any other keys

EXAMPLE OUTPUT:
{example}

ESSAY:
{essay}"""


def format_criteria(rubric: Rubric) -> str:
    """One line per criterion: ordinal position and title"""
    return "\n".join(
        f"Criterion {i}: {criterion.title}"
        for i, criterion in enumerate(rubric.criteria, 1)
    )


def build_grading_prompt(essay_text: str, rubric: Rubric) -> str:
    example = json.dumps({title: 3 for title in rubric.titles}, ensure_ascii=False)
    return GRADING_PROMPT.format(
        criteria=format_criteria(rubric),
        example=example,
        essay=essay_text.strip(),
    )
