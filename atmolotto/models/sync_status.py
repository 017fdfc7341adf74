"""Per-lottery synchronisation cursor."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from atmolotto.models.base import Base, TimestampMixin


class SyncStatus(TimestampMixin, Base):
    """Newest/oldest issue synced, backfill completeness and a sync counter."""

    __tablename__ = "sync_status"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lottery_code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    last_synced_issue: Mapped[str | None] = mapped_column(String(30), nullable=True)
    last_synced_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    oldest_synced_issue: Mapped[str | None] = mapped_column(String(30), nullable=True)
    is_history_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_sync_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sync_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
