"""
Mark essays stuck in "analyzing" as failed.

An essay stays in analyzing if the process dies between recording the essay
and storing its results. Run periodically (e.g. from cron).

Usage (from backend directory):
  python -m scripts.fail_stale_essays --minutes 15
"""

import argparse

from voicegrade.core.database import session_scope
from voicegrade.core.logging import get_logger
from voicegrade.services import EssayStore

logger = get_logger()

DEFAULT_STALE_MINUTES = 15


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--minutes",
        type=int,
        default=DEFAULT_STALE_MINUTES,
        help=f"Age after which an analyzing essay counts as stuck (default {DEFAULT_STALE_MINUTES})",
    )
    args = parser.parse_args()

    with session_scope() as db:
        count = EssayStore(db).fail_stale_essays(args.minutes)
    logger.info("Stale essay sweep done: %d essays marked failed", count)


if __name__ == "__main__":
    main()
