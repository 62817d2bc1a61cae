"""
Initialize database: create all tables. Run once manually before first app launch.

Usage (from backend directory):
  python -m scripts.init_db

The application does not create or migrate the database on startup.

Tables Created:
  - schools, teachers, teacher_profiles: directory and grading profiles
  - students: accounts linked to auth provider identities
  - essays: submissions and their analysis status
  - grade_predictions, inline_comments, end_comments: analysis results
  - settings: AI provider configuration
"""

from voicegrade.core.database import init_db
from voicegrade.core.logging import get_logger

logger = get_logger()


def main():
    logger.info("Initializing database (create tables)...")
    init_db()
    logger.info(
        "Database initialization complete. Run the application with: "
        "python -m uvicorn voicegrade.main:app --host 0.0.0.0 --port 8090"
    )


if __name__ == "__main__":
    main()
