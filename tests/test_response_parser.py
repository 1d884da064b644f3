"""
Unit tests for the response parser
"""
import pytest

from essay_grader.core.exceptions import MalformedJsonError, NoJsonFoundError
from essay_grader.grader import extract_json_object


class TestExtractJsonObject:
    """Extracting a JSON object from free text"""

    def test_object_surrounded_by_prose(self):
        assert extract_json_object('blah blah {"Clarity": 3} trailing') == {"Clarity": 3}

    def test_clean_reply(self):
        assert extract_json_object('{"Clarity": 3, "Grammar": 5}') == {"Clarity": 3, "Grammar": 5}

    def test_markdown_fence(self):
        reply = 'Here are the scores:\n```json\n{"Clarity": 4}\n```\nGood luck!'
        assert extract_json_object(reply) == {"Clarity": 4}

    def test_nested_object_returns_outermost(self):
        reply = 'x {"scores": {"Clarity": 2}, "note": "ok"} y'
        assert extract_json_object(reply) == {"scores": {"Clarity": 2}, "note": "ok"}

    def test_braces_inside_strings(self):
        reply = '{"Clarity": 3, "comment": "uses } and { freely"} and more }'
        assert extract_json_object(reply) == {"Clarity": 3, "comment": "uses } and { freely"}

    def test_first_object_wins(self):
        assert extract_json_object('{"a": 1} then {"b": 2}') == {"a": 1}

    def test_skips_stray_brace_before_object(self):
        assert extract_json_object('scores { below: {"Clarity": 5}') == {"Clarity": 5}

    def test_no_brace_raises(self):
        with pytest.raises(NoJsonFoundError):
            extract_json_object("I cannot grade this essay.")

    def test_empty_text_raises(self):
        with pytest.raises(NoJsonFoundError):
            extract_json_object("")

    def test_malformed_object_raises(self):
        with pytest.raises(MalformedJsonError):
            extract_json_object("{'Clarity': 3}")

    def test_unterminated_object_raises(self):
        with pytest.raises(MalformedJsonError):
            extract_json_object('{"Clarity": 3')

    def test_error_codes(self):
        with pytest.raises(NoJsonFoundError) as exc_info:
            extract_json_object("none")
        assert exc_info.value.error_code == "NO_JSON_FOUND"
        assert exc_info.value.status_code == 422
