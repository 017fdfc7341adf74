"""Repository layer for the draw corpus."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from atmolotto.models.base import utcnow
from atmolotto.models.lottery_result import LotteryResult


def join_numbers(numbers: Iterable[int] | None) -> str | None:
    if not numbers:
        return None
    return ",".join(str(int(n)) for n in numbers)


@dataclass(frozen=True)
class DrawInput:
    """A normalised draw, ready to be written to the corpus."""

    lottery_code: str
    issue: str
    draw_date: date
    main_numbers: tuple[int, ...]
    extra_numbers: tuple[int, ...] = ()
    draw_date_time: str | None = None
    prize_pool: int | None = None
    total_sales: int | None = None
    raw_data: dict[str, Any] | None = field(default=None, compare=False)


@dataclass
class UpsertStats:
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0

    @property
    def written(self) -> int:
        return self.inserted + self.updated


class LotteryResultRepository:
    """Insert-or-merge and read operations for draws."""

    def get_by_issue(self, session: Session, lottery_code: str, issue: str) -> LotteryResult | None:
        stmt = select(LotteryResult).where(
            LotteryResult.lottery_code == lottery_code,
            LotteryResult.issue == issue,
        )
        return session.scalars(stmt).first()

    def upsert_many(self, session: Session, draws: Iterable[DrawInput]) -> UpsertStats:
        """Insert new draws and backfill optional fields of known ones.

        An existing row only receives values for optional fields that are
        currently null; required fields and non-null values are left alone,
        so replaying a batch is a no-op.
        """

        stats = UpsertStats()
        batch: dict[tuple[str, str], LotteryResult] = {}

        for draw in draws:
            key = (draw.lottery_code, draw.issue)
            existing = batch.get(key) or self.get_by_issue(session, *key)

            if existing is None:
                row = LotteryResult(
                    lottery_code=draw.lottery_code,
                    issue=draw.issue,
                    draw_date=draw.draw_date,
                    draw_date_time=draw.draw_date_time,
                    main_numbers=join_numbers(draw.main_numbers) or "",
                    extra_numbers=join_numbers(draw.extra_numbers),
                    prize_pool=draw.prize_pool,
                    total_sales=draw.total_sales,
                    raw_data=draw.raw_data,
                )
                session.add(row)
                batch[key] = row
                stats.inserted += 1
                continue

            batch[key] = existing
            changed = False
            for name in LotteryResult.MERGEABLE_FIELDS:
                incoming = getattr(draw, name)
                if incoming is not None and getattr(existing, name) is None:
                    setattr(existing, name, incoming)
                    changed = True

            if changed:
                existing.updated_at = utcnow()
                stats.updated += 1
            else:
                stats.unchanged += 1

        session.flush()
        return stats

    def list_results(
        self,
        session: Session,
        lottery_code: str,
        *,
        limit: int = 10,
        offset: int = 0,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[LotteryResult]:
        """Newest first, optionally restricted to an inclusive date range."""

        stmt = select(LotteryResult).where(LotteryResult.lottery_code == lottery_code)
        if start_date is not None:
            stmt = stmt.where(LotteryResult.draw_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(LotteryResult.draw_date <= end_date)

        stmt = (
            stmt.order_by(LotteryResult.draw_date.desc(), LotteryResult.issue.desc())
            .limit(int(limit))
            .offset(int(offset))
        )
        return list(session.scalars(stmt).all())

    def list_corpus(self, session: Session, lottery_code: str, limit: int = 10_000) -> Sequence[LotteryResult]:
        return self.list_results(session, lottery_code, limit=limit, offset=0)

    def latest(self, session: Session, lottery_code: str) -> LotteryResult | None:
        rows = self.list_results(session, lottery_code, limit=1)
        return rows[0] if rows else None

    def count(
        self,
        session: Session,
        lottery_code: str,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(LotteryResult).where(LotteryResult.lottery_code == lottery_code)
        if start_date is not None:
            stmt = stmt.where(LotteryResult.draw_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(LotteryResult.draw_date <= end_date)
        return int(session.scalar(stmt) or 0)
