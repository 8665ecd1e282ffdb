# src/open_court/scripts/maintenance.py
"""Operator commands for healing and rebuilding Open Court state.

Every command is idempotent and safe to run while the API is serving:
resolution goes through the same conditional transition as live votes, and
stats and reputation are recomputed from scratch rather than adjusted.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from open_court.core.settings import settings
from open_court.db.session import SessionLocal
from open_court.services.exceptions import CourtError
from open_court.services.juror_stats import recompute_all_juror_stats
from open_court.services.reputation import sync_all_reputations, sync_user_reputation
from open_court.services.verdicts import VerdictService

logger = logging.getLogger("open_court.maintenance")


def resolve_pending(db: Session) -> None:
    resolved = VerdictService().resolve_pending_reports(db)
    print(f"[maintenance] resolved {resolved} pending report(s)")


def recompute_stats(db: Session) -> None:
    count = recompute_all_juror_stats(db)
    print(f"[maintenance] recomputed stats for {count} juror(s)")


def sync_reputation(db: Session, user_id: int | None) -> None:
    if user_id is None:
        count = sync_all_reputations(db)
        print(f"[maintenance] synced reputation for {count} user(s)")
        return
    snapshot = sync_user_reputation(db, user_id)
    print(f"[maintenance] user {user_id} reputation is now {snapshot.reputation}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="open-court-maintenance",
        description="Repair and rebuild Open Court derived state",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        "resolve-pending",
        help="Re-evaluate every pending report against the resolution policy.",
    )
    subparsers.add_parser(
        "recompute-stats",
        help="Rebuild juror stats from resolved verdict history.",
    )
    sync = subparsers.add_parser(
        "sync-reputation",
        help="Recompute reputation from post and comment scores.",
    )
    sync.add_argument(
        "--user-id",
        type=int,
        default=None,
        help="Only sync this user (defaults to every user)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper())

    db = SessionLocal()
    try:
        if args.command == "resolve-pending":
            resolve_pending(db)
        elif args.command == "recompute-stats":
            recompute_stats(db)
        else:
            sync_reputation(db, args.user_id)
    except CourtError as exc:
        print(f"[maintenance] ERROR: {exc.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
