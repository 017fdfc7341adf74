"""Historical draw results.

One row per (lottery_code, issue). Winning numbers are stored as
comma-joined strings because the count differs per lottery format.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import JSON, BigInteger, Date, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from atmolotto.models.base import Base, TimestampMixin


def split_numbers(raw: str | None) -> list[int]:
    if not raw:
        return []
    return [int(part) for part in raw.split(",") if part.strip()]


class LotteryResult(TimestampMixin, Base):
    """One official draw."""

    __tablename__ = "lottery_results"
    __table_args__ = (
        UniqueConstraint("lottery_code", "issue", name="uq_lottery_results_code_issue"),
        Index("ix_lottery_results_code_date", "lottery_code", "draw_date"),
    )

    # Optional fields that a later sync may backfill.
    MERGEABLE_FIELDS = ("draw_date_time", "prize_pool", "total_sales", "raw_data")

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lottery_code: Mapped[str] = mapped_column(String(20), nullable=False)
    issue: Mapped[str] = mapped_column(String(30), nullable=False)
    draw_date: Mapped[date] = mapped_column(Date, nullable=False)
    draw_date_time: Mapped[str | None] = mapped_column(String(30), nullable=True)

    main_numbers: Mapped[str] = mapped_column(String(100), nullable=False)
    extra_numbers: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Money in cents
    prize_pool: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    total_sales: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    raw_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    @property
    def main(self) -> list[int]:
        return split_numbers(self.main_numbers)

    @property
    def extra(self) -> list[int]:
        return split_numbers(self.extra_numbers)

    def __repr__(self) -> str:
        return f"<LotteryResult {self.lottery_code}:{self.issue} {self.main_numbers}+{self.extra_numbers}>"
