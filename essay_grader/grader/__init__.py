"""
Grader Module
Scores essay text against a rubric and links transcripts to their scans

Usage:
    from essay_grader.grader import RubricGrader, link_artifact

    grader = RubricGrader(generator)
    result = grader.generate_grade(essay_text, rubric)
    result.expanded        # {"Clarity": 5, ...}

    image = link_artifact("data/essays/period-3", "42.txt")
"""

from .response_parser import extract_json_object

from .key_normalizer import normalize

from .score_expander import (
    GradeResult,
    RubricGrader,
    expand_score,
    expand_scores,
    find_key,
    generate_grade,
    match_scores,
    round_half_up,
    validate_score,
)

from .artifact_linker import (
    base_id,
    guess_image,
    link_artifact,
    list_folder,
    read_links,
    record_link,
)

from .prompts import build_grading_prompt, CORRECTION_SYSTEM_PROMPT

__all__ = [
    # Parsing
    "extract_json_object",
    "normalize",
    # Scoring
    "GradeResult",
    "RubricGrader",
    "expand_score",
    "expand_scores",
    "find_key",
    "generate_grade",
    "match_scores",
    "round_half_up",
    "validate_score",
    # Artifact linking
    "base_id",
    "guess_image",
    "link_artifact",
    "list_folder",
    "read_links",
    "record_link",
    # Prompts
    "build_grading_prompt",
    "CORRECTION_SYSTEM_PROMPT",
]
