"""Synchronise official draw results into the configured database.

Runs the same cursor-driven sync as ``POST /api/sync`` without the HTTP
layer, e.g. from a cron entry.

Usage:
  python scripts/sync_draws.py                 # every ENABLED_LOTTERY_CODES entry
  python scripts/sync_draws.py --code dlt --code ssq
  python scripts/sync_draws.py --code dlt --page 3 --limit 50
  python scripts/sync_draws.py --code dlt --reset
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from atmolotto import create_app
from atmolotto.errors import AppError
from atmolotto.services.sync_service import SyncService


logger = logging.getLogger("atmolotto.scripts.sync_draws")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch lottery draw results and upsert them")
    parser.add_argument("--code", dest="codes", action="append", default=None, help="Lottery code (repeatable)")
    parser.add_argument("--page", type=int, default=None, help="Sync one explicit page instead of the cursor")
    parser.add_argument("--limit", type=int, default=50)
    parser.add_argument("--max-pages", dest="max_pages", type=int, default=None)
    parser.add_argument("--reset", action="store_true", help="Mark history incomplete before syncing")
    args = parser.parse_args(argv)

    overrides = {}
    if args.max_pages is not None:
        overrides["SYNC_MAX_PAGES"] = int(args.max_pages)

    app = create_app(overrides)
    codes = args.codes or list(app.config["ENABLED_LOTTERY_CODES"])
    service = SyncService.from_config(app.config)
    session = app.extensions["session_factory"]()

    failures = 0
    try:
        for code in codes:
            try:
                if args.reset:
                    service.reset(session, code)
                if args.page is not None:
                    outcome = service.sync_page(session, code, int(args.page), int(args.limit))
                else:
                    outcome = service.sync(session, code)
            except AppError as exc:
                failures += 1
                logger.error("[%s] %s", code, exc.message)
                session.rollback()
                continue

            session.commit()
            logger.info(
                "[%s] mode=%s fetched=%d inserted=%d updated=%d complete=%s%s",
                code,
                outcome.mode,
                outcome.fetched,
                outcome.inserted,
                outcome.updated,
                outcome.history_complete,
                f" error={outcome.error}" if outcome.error else "",
            )
    finally:
        session.close()

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
