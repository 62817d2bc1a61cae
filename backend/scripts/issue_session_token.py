"""
Mint a session token for local development.

In production, tokens are issued by the identity provider sharing
VOICEGRADE_SECRET_KEY with this service.

Usage (from backend directory):
  python -m scripts.issue_session_token --user-id abc123 --email student@example.com
"""

import argparse

from voicegrade.core.security import issue_session_token


def main():
    parser = argparse.ArgumentParser(description="Mint a VoiceGrade session token")
    parser.add_argument("--user-id", required=True, help="Auth provider user id")
    parser.add_argument("--email", default=None)
    parser.add_argument("--name", default=None, help="Display name")
    args = parser.parse_args()

    print(issue_session_token(args.user_id, email=args.email, display_name=args.name))


if __name__ == "__main__":
    main()
