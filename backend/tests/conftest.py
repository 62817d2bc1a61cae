"""
Test configuration and fixtures
"""

import json
import os
import sys
import tempfile

# Environment must be in place before voicegrade caches its config
_TEST_ROOT = tempfile.mkdtemp(prefix="voicegrade-tests-")
os.environ["LOGS_DIR"] = os.path.join(_TEST_ROOT, "logs")
os.environ["DATA_DIR"] = os.path.join(_TEST_ROOT, "data")
os.environ["VOICEGRADE_SECRET_KEY"] = "test-secret-key"
os.environ.pop("VOICEGRADE_CONFIG", None)

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from voicegrade.core.database import create_sqlite_engine, drop_db, get_db, init_db
from voicegrade.core.security import issue_session_token
from voicegrade.models import School, SchoolType, Teacher, TeacherProfile


@pytest.fixture
def engine():
    """In-memory SQLite shared across connections."""
    engine = create_sqlite_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Database session for a single test."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(db_session):
    """Test client using the test database session."""
    from voicegrade.main import app

    def get_db_override():
        yield db_session

    app.dependency_overrides[get_db] = get_db_override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Authorization header for a signed-in student."""
    token = issue_session_token("auth-user-1", email="sam@example.com", display_name="Sam Student")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers():
    """Authorization header for a second student."""
    token = issue_session_token("auth-user-2", email="alex@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def operator_headers(monkeypatch):
    """Authorization header for an operator listed in auth.admin_user_ids."""
    from voicegrade.core.config import get_config

    monkeypatch.setattr(get_config().auth, "admin_user_ids", ["operator-1"])
    token = issue_session_token("operator-1", email="ops@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def school(db_session):
    school = School(name="Lincoln High School", location="Portland, OR", type=SchoolType.PUBLIC)
    db_session.add(school)
    db_session.commit()
    db_session.refresh(school)
    return school


@pytest.fixture
def teacher(db_session, school):
    teacher = Teacher(
        school_id=school.id,
        name="Ms. Rivera",
        department="English",
        subjects=["AP Literature", "English 10"],
        grading_style="Demanding on analysis, generous on voice",
    )
    db_session.add(teacher)
    db_session.commit()
    db_session.refresh(teacher)
    return teacher


@pytest.fixture
def teacher_profile(db_session, teacher):
    profile = TeacherProfile(
        teacher_id=teacher.id,
        strictness_score=0.8,
        thesis_weight=0.9,
        evidence_weight=0.6,
        analysis_weight=0.85,
        mechanics_weight=0.3,
        style_weight=0.5,
        tone_keywords=["direct", "encouraging"],
        common_phrases=["Dig deeper here.", "So what?"],
        avg_grade=84.5,
        most_common_grade="B+",
        training_essay_count=42,
        model_version="v1",
        confidence_score=0.72,
    )
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


@pytest.fixture
def sample_essay():
    """A ~220 word essay."""
    return (
        "In Macbeth, Shakespeare presents ambition as a force that corrupts even the most "
        "honorable of men. At the start of the play Macbeth is celebrated as a loyal and brave "
        "soldier, praised by Duncan as a worthy gentleman. Yet once the witches plant the idea "
        "that he will be king, his ambition begins to overpower his judgment. Lady Macbeth feeds "
        "this ambition, questioning his manhood and urging him to seize the crown by force.\n\n"
        "The murder of Duncan marks the turning point. Macbeth hesitates, imagining a dagger "
        "before him, which shows that his conscience is still alive. However, ambition wins, and "
        "after the deed he cannot say amen, a sign that he has cut himself off from grace. From "
        "this moment each crime leads to another, as he orders the deaths of Banquo and the "
        "family of Macduff to protect his stolen throne.\n\n"
        "By the end of the play Macbeth is isolated and numb. When he hears of his wife's death "
        "he calls life a tale told by an idiot, full of sound and fury, signifying nothing. "
        "Shakespeare suggests that unchecked ambition does not lead to greatness but to "
        "emptiness. Macbeth gains the crown but loses everything that gave his life meaning, "
        "which is the true tragedy of the play and its warning to every reader."
    )


@pytest.fixture
def valid_reply():
    """A model reply that passes validation, as a dict."""
    return {
        "grade_prediction": {
            "letter_grade": "B+",
            "numeric_grade": 88,
            "confidence": "high",
            "reasoning": [
                "Clear thesis about ambition",
                "Good use of key scenes",
                "Analysis could go deeper",
            ],
            "strengths": ["Strong structure", "Apt quotations"],
            "weaknesses": ["Thin analysis of Lady Macbeth", "Conclusion repeats the thesis"],
        },
        "inline_comments": [
            {
                "excerpt": "Shakespeare presents ambition as a force that corrupts even the most honorable of men",
                "comment": "Clear, arguable thesis. Good start.",
                "category": "thesis",
                "severity": "praise",
                "start_index": 13,
                "end_index": 98,
            },
            {
                "excerpt": "Lady Macbeth feeds this ambition",
                "comment": "How exactly? Quote her and unpack the language.",
                "category": "evidence",
                "severity": "suggestion",
                "start_index": 340,
                "end_index": 372,
            },
            {
                "excerpt": "he cannot say amen",
                "comment": "Great detail. So what does losing grace mean for his choices?",
                "category": "analysis",
                "severity": "concern",
            },
        ],
        "end_comment": "Sam, this is a focused essay with a clear line of argument.\n\n"
        "Push your analysis further: every quotation needs a sentence on why it matters.",
        "next_steps": [
            "Add one close reading of Lady Macbeth's language",
            "Rewrite the conclusion to extend the thesis",
        ],
    }


@pytest.fixture
def valid_reply_text(valid_reply):
    return json.dumps(valid_reply)
