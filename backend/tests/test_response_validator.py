"""
Tests for parsing and validating the model's reply.
"""

import json

import pytest

from voicegrade.core.errors import MalformedResponseError
from voicegrade.services.response_validator import parse_analysis_response, strip_code_fences


class TestStripCodeFences:
    def test_plain_json_unchanged(self):
        assert strip_code_fences('{"a": 1}') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_surrounding_whitespace(self):
        assert strip_code_fences('  \n```json\n{"a": 1}\n```\n  ') == '{"a": 1}'


class TestParseAnalysisResponse:
    def test_valid_reply(self, valid_reply_text):
        result = parse_analysis_response(valid_reply_text)
        assert result.grade_prediction.letter_grade == "B+"
        assert result.grade_prediction.numeric_grade == 88
        assert result.grade_prediction.confidence == "high"
        assert len(result.inline_comments) == 3
        assert result.inline_comments[2].start_index == 0
        assert result.inline_comments[2].end_index == 0
        assert result.next_steps[0].startswith("Add one close reading")

    def test_fenced_reply(self, valid_reply_text):
        fenced = parse_analysis_response(f"```json\n{valid_reply_text}\n```")
        assert fenced == parse_analysis_response(valid_reply_text)

    def test_reserializes_to_same_content(self, valid_reply):
        result = parse_analysis_response(json.dumps(valid_reply))
        again = parse_analysis_response(result.model_dump_json())
        assert again == result

    @pytest.mark.parametrize("raw", ["", "   ", "not json at all", "[1, 2, 3]", '"just a string"'])
    def test_not_an_object(self, raw):
        with pytest.raises(MalformedResponseError) as exc:
            parse_analysis_response(raw)
        assert exc.value.public_message == "Failed to analyze essay"

    def test_raw_reply_kept_for_logging(self):
        with pytest.raises(MalformedResponseError) as exc:
            parse_analysis_response("Sorry, I can't help with that.")
        assert exc.value.raw_reply == "Sorry, I can't help with that."

    def test_unknown_category_rejected(self, valid_reply):
        valid_reply["inline_comments"][0]["category"] = "grammar"
        with pytest.raises(MalformedResponseError):
            parse_analysis_response(json.dumps(valid_reply))

    def test_unknown_confidence_rejected(self, valid_reply):
        valid_reply["grade_prediction"]["confidence"] = "certain"
        with pytest.raises(MalformedResponseError):
            parse_analysis_response(json.dumps(valid_reply))

    def test_enum_values_normalized(self, valid_reply):
        valid_reply["grade_prediction"]["confidence"] = " HIGH "
        valid_reply["inline_comments"][0]["category"] = "Thesis"
        valid_reply["inline_comments"][0]["severity"] = "PRAISE"
        result = parse_analysis_response(json.dumps(valid_reply))
        assert result.grade_prediction.confidence == "high"
        assert result.inline_comments[0].category == "thesis"
        assert result.inline_comments[0].severity == "praise"

    def test_missing_grade_prediction_rejected(self, valid_reply):
        del valid_reply["grade_prediction"]
        with pytest.raises(MalformedResponseError):
            parse_analysis_response(json.dumps(valid_reply))

    def test_missing_end_comment_rejected(self, valid_reply):
        del valid_reply["end_comment"]
        with pytest.raises(MalformedResponseError):
            parse_analysis_response(json.dumps(valid_reply))

    def test_missing_lists_default_to_empty(self, valid_reply):
        del valid_reply["next_steps"]
        valid_reply["inline_comments"] = None
        del valid_reply["grade_prediction"]["strengths"]
        result = parse_analysis_response(json.dumps(valid_reply))
        assert result.next_steps == []
        assert result.inline_comments == []
        assert result.grade_prediction.strengths == []

    def test_numeric_grade_clamped(self, valid_reply):
        valid_reply["grade_prediction"]["numeric_grade"] = 104.5
        result = parse_analysis_response(json.dumps(valid_reply))
        assert result.grade_prediction.numeric_grade == 100

        valid_reply["grade_prediction"]["numeric_grade"] = -3
        result = parse_analysis_response(json.dumps(valid_reply))
        assert result.grade_prediction.numeric_grade == 0

    def test_non_numeric_grade_rejected(self, valid_reply):
        valid_reply["grade_prediction"]["numeric_grade"] = "a lot"
        with pytest.raises(MalformedResponseError):
            parse_analysis_response(json.dumps(valid_reply))

    def test_non_finite_grade_rejected(self, valid_reply):
        text = json.dumps(valid_reply).replace('"numeric_grade": 88', '"numeric_grade": NaN')
        with pytest.raises(MalformedResponseError):
            parse_analysis_response(text)

    def test_bad_indices_become_zero(self, valid_reply):
        valid_reply["inline_comments"][0]["start_index"] = "abc"
        valid_reply["inline_comments"][0]["end_index"] = None
        valid_reply["inline_comments"][1]["start_index"] = -5
        result = parse_analysis_response(json.dumps(valid_reply))
        assert result.inline_comments[0].start_index == 0
        assert result.inline_comments[0].end_index == 0
        assert result.inline_comments[1].start_index == 0

    def test_comment_without_text_rejected(self, valid_reply):
        valid_reply["inline_comments"][0]["excerpt"] = ""
        valid_reply["inline_comments"][0]["comment"] = "  "
        with pytest.raises(MalformedResponseError):
            parse_analysis_response(json.dumps(valid_reply))

    def test_excerpt_only_comment_accepted(self, valid_reply):
        valid_reply["inline_comments"][0]["comment"] = None
        result = parse_analysis_response(json.dumps(valid_reply))
        assert result.inline_comments[0].comment == ""
