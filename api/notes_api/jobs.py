"""Batch job: deactivate accounts that have not signed in for a while.

Run it from cron or a scheduler:

    notes-deactivate-inactive
    # or
    python scripts/deactivate_inactive_accounts.py

``INACTIVE_DAYS`` (default 90) sets how long an account may go without a
sign-in before it is deactivated.
"""
import logging
import os
import sys
from datetime import datetime, timedelta
from typing import Optional

from . import store_accounts
from .db import SessionLocal, transaction
from .models import utcnow

logger = logging.getLogger(__name__)

DEFAULT_INACTIVE_DAYS = 90
INACTIVE_DAYS = int(os.environ.get("INACTIVE_DAYS", str(DEFAULT_INACTIVE_DAYS)))


def run_deactivate_inactive_accounts(now: Optional[datetime] = None, inactive_days: int = INACTIVE_DAYS) -> int:
    """Deactivate active accounts whose last sign-in is older than ``inactive_days``.

    Returns the number of accounts deactivated by this run.
    """
    threshold = (now or utcnow()) - timedelta(days=inactive_days)
    logger.info("deactivating accounts with last login before %s", threshold.isoformat())
    db = SessionLocal()
    try:
        with transaction(db):
            count = store_accounts.deactivate_by_last_login_before(db, threshold)
    finally:
        db.close()
    logger.info("deactivated %d accounts", count)
    return count


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(name)s:%(levelname)s] %(message)s",
    )
    logger.info("starting job: deactivate-inactive-accounts")
    try:
        count = run_deactivate_inactive_accounts()
    except Exception:
        logger.exception("job failed")
        return 1
    logger.info("job completed successfully: %d accounts deactivated", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
