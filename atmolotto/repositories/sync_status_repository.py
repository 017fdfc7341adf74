"""Repository layer for sync cursors."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from atmolotto.models.base import utcnow
from atmolotto.models.sync_status import SyncStatus


class SyncStatusRepository:
    """Read and coalesce-merge the per-lottery sync cursor."""

    def get(self, session: Session, lottery_code: str) -> SyncStatus | None:
        stmt = select(SyncStatus).where(SyncStatus.lottery_code == lottery_code)
        return session.scalars(stmt).first()

    def merge_update(
        self,
        session: Session,
        lottery_code: str,
        *,
        last_synced_issue: str | None = None,
        last_synced_date: date | None = None,
        oldest_synced_issue: str | None = None,
        is_history_complete: bool | None = None,
    ) -> SyncStatus:
        """Record a successful fetch batch.

        ``None`` arguments keep the stored value. The row is created on first
        use; every call bumps ``sync_count`` and ``last_sync_at``.
        """

        now = utcnow()
        status = self.get(session, lottery_code)
        if status is None:
            status = SyncStatus(
                lottery_code=lottery_code,
                last_synced_issue=last_synced_issue,
                last_synced_date=last_synced_date,
                oldest_synced_issue=oldest_synced_issue,
                is_history_complete=bool(is_history_complete),
                last_sync_at=now,
                sync_count=1,
            )
            session.add(status)
            session.flush()
            return status

        if last_synced_issue is not None:
            status.last_synced_issue = last_synced_issue
        if last_synced_date is not None:
            status.last_synced_date = last_synced_date
        if oldest_synced_issue is not None:
            status.oldest_synced_issue = oldest_synced_issue
        if is_history_complete is not None:
            status.is_history_complete = is_history_complete

        status.last_sync_at = now
        status.sync_count = int(status.sync_count or 0) + 1
        status.updated_at = now
        session.flush()
        return status
