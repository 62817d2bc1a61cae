"""
Tests for POST /api/v1/analyze.

The model is mocked; everything else (auth, validation, persistence) is real.
"""

import json
import time
from unittest.mock import AsyncMock, Mock, patch

import pytest
from cryptography.fernet import Fernet

from voicegrade.core.config import get_config
from voicegrade.core.security import SESSION_SALT, get_encryption_key
from voicegrade.models import Essay, EssayStatus, GradePrediction, InlineComment, Student

ANALYZE_URL = "/api/v1/analyze"


def _mock_llm(reply=None, error=None):
    llm = Mock()
    if error is not None:
        llm.complete = AsyncMock(side_effect=error)
    else:
        llm.complete = AsyncMock(return_value=reply)
    return patch("voicegrade.services.essay_analysis.get_llm_provider", return_value=llm), llm


@pytest.fixture
def payload(school, teacher, sample_essay):
    return {
        "essay_text": sample_essay,
        "prompt": "Analyze how Shakespeare presents ambition in Macbeth.",
        "class_name": "AP Literature",
        "school_id": school.id,
        "teacher_id": teacher.id,
    }


class TestAnalyzeSuccess:
    def test_returns_result_and_persists(
        self, client, db_session, auth_headers, payload, teacher_profile, valid_reply_text
    ):
        patcher, llm = _mock_llm(valid_reply_text)
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["teacher_name"] == "Ms. Rivera"
        assert data["school_name"] == "Lincoln High School"
        assert data["result"]["grade_prediction"]["letter_grade"] == "B+"
        assert len(data["result"]["inline_comments"]) == 3

        essay = db_session.query(Essay).filter(Essay.id == data["essay_id"]).one()
        assert essay.status == EssayStatus.COMPLETED
        assert essay.student.auth_user_id == "auth-user-1"
        assert db_session.query(InlineComment).filter(InlineComment.essay_id == essay.id).count() == 3
        assert db_session.query(GradePrediction).filter(GradePrediction.essay_id == essay.id).count() == 1

        # One model call carrying the compiled profile
        assert llm.complete.await_count == 1
        system_prompt = llm.complete.await_args.kwargs["system_prompt"]
        assert "Thesis 0.90 (heavy emphasis)" in system_prompt

    def test_fenced_reply_accepted(self, client, auth_headers, payload, valid_reply_text):
        patcher, _ = _mock_llm(f"```json\n{valid_reply_text}\n```")
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)
        assert response.status_code == 200

    def test_teacher_without_profile_uses_fallback(
        self, client, auth_headers, payload, valid_reply_text
    ):
        patcher, llm = _mock_llm(valid_reply_text)
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)
        assert response.status_code == 200
        assert "none recorded yet" in llm.complete.await_args.kwargs["system_prompt"]

    def test_session_cookie_accepted(self, client, auth_headers, payload, valid_reply_text):
        token = auth_headers["Authorization"].split(" ", 1)[1]
        client.cookies.set(get_config().auth.cookie_name, token)
        patcher, _ = _mock_llm(valid_reply_text)
        with patcher:
            response = client.post(ANALYZE_URL, json=payload)
        assert response.status_code == 200


class TestAnalyzeAuth:
    def test_missing_session(self, client, payload):
        response = client.post(ANALYZE_URL, json=payload)
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_session_checked_before_body(self, client, db_session):
        response = client.post(
            ANALYZE_URL, content="{bad", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert db_session.query(Essay).count() == 0

    def test_garbage_token(self, client, payload):
        response = client.post(
            ANALYZE_URL, json=payload, headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    def test_expired_token(self, client, db_session, payload):
        fernet = Fernet(get_encryption_key(salt=SESSION_SALT))
        issued_at = int(time.time()) - get_config().auth.session_ttl - 60
        token = fernet.encrypt_at_time(
            json.dumps({"sub": "auth-user-1"}).encode(), issued_at
        ).decode()

        response = client.post(
            ANALYZE_URL, json=payload, headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert db_session.query(Essay).count() == 0


class TestAnalyzeValidation:
    @pytest.mark.parametrize("field", ["essay_text", "prompt", "school_id", "teacher_id"])
    def test_missing_required_field(self, client, db_session, auth_headers, payload, field):
        del payload[field]
        patcher, llm = _mock_llm("{}")
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert "Missing required fields" in response.json()["error"]
        assert llm.complete.await_count == 0
        assert db_session.query(Essay).count() == 0

    def test_whitespace_essay_rejected(self, client, auth_headers, payload):
        payload["essay_text"] = "   \n  "
        response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)
        assert response.status_code == 400

    def test_invalid_body(self, client, auth_headers):
        response = client.post(
            ANALYZE_URL,
            content="{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request: JSON decode error"}

    def test_non_object_body(self, client, auth_headers):
        response = client.post(ANALYZE_URL, json=["essay"], headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request")

    @pytest.mark.parametrize("field", ["teacher_id", "school_id"])
    def test_unknown_teacher_or_school(self, client, db_session, auth_headers, payload, field):
        payload[field] = "00000000-0000-0000-0000-000000000000"
        patcher, llm = _mock_llm("{}")
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Teacher or school not found"}
        assert llm.complete.await_count == 0
        assert db_session.query(Essay).count() == 0


class TestAnalyzeFailures:
    def test_malformed_reply_marks_essay_failed(self, client, db_session, auth_headers, payload):
        patcher, _ = _mock_llm("Here is my feedback: the essay is good!")
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to analyze essay"}

        db_session.expire_all()
        essay = db_session.query(Essay).one()
        assert essay.status == EssayStatus.FAILED
        assert "not valid JSON" in essay.error_message
        assert db_session.query(InlineComment).count() == 0
        assert db_session.query(GradePrediction).count() == 0

    def test_schema_violation_marks_essay_failed(
        self, client, db_session, auth_headers, payload, valid_reply
    ):
        valid_reply["inline_comments"][0]["severity"] = "catastrophic"
        patcher, _ = _mock_llm(json.dumps(valid_reply))
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 500
        db_session.expire_all()
        assert db_session.query(Essay).one().status == EssayStatus.FAILED
        assert db_session.query(InlineComment).count() == 0

    def test_upstream_error_marks_essay_failed(self, client, db_session, auth_headers, payload):
        patcher, llm = _mock_llm(error=TimeoutError("model timed out"))
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to analyze essay"}
        assert llm.complete.await_count == 1

        db_session.expire_all()
        essay = db_session.query(Essay).one()
        assert essay.status == EssayStatus.FAILED
        assert "model timed out" in essay.error_message

    def test_empty_reply_is_upstream_error(self, client, db_session, auth_headers, payload):
        patcher, _ = _mock_llm("")
        with patcher:
            response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 500
        db_session.expire_all()
        assert db_session.query(Essay).one().error_message == "Model returned no text content"

    def test_missing_api_key(self, client, db_session, auth_headers, payload, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        response = client.post(ANALYZE_URL, json=payload, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to analyze essay"}
        db_session.expire_all()
        essay = db_session.query(Essay).one()
        assert essay.status == EssayStatus.FAILED
        assert essay.error_message.startswith("Model not configured")

    def test_student_row_reused(self, client, db_session, auth_headers, payload, valid_reply_text):
        patcher, _ = _mock_llm(valid_reply_text)
        with patcher:
            client.post(ANALYZE_URL, json=payload, headers=auth_headers)
            client.post(ANALYZE_URL, json=payload, headers=auth_headers)
        assert db_session.query(Student).count() == 1
        assert db_session.query(Essay).count() == 2
