"""Single-ticket check against a lottery's draw history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from atmolotto.lottery_types import default_draw_time
from atmolotto.repositories.lottery_result_repository import LotteryResultRepository
from atmolotto.services.prize_tiers import (
    DLT_PRIZES,
    PrizeTable,
    Ticket,
    WinningDraw,
    get_prize_table,
    match_ticket,
)


@dataclass(frozen=True)
class WinningRecord:
    issue: str
    draw_date: str
    winning_front: list[int]
    winning_back: list[int]
    front_matched: list[int]
    back_matched: list[int]
    level: int
    prize_name: str


@dataclass(frozen=True)
class TicketCheck:
    lottery_code: str
    has_winning: bool
    total_checked: int
    evaluable: bool = True
    highest_level: int = 0
    highest_prize_name: str | None = None
    total_winnings_at_highest: int = 0
    winnings: list[WinningRecord] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)
    message: str | None = None


def check_ticket(
    ticket: Ticket,
    draws: Sequence[WinningDraw],
    table: PrizeTable = DLT_PRIZES,
    max_records: int = 10,
) -> TicketCheck:
    """Find every draw the ticket would have won and report the best tier.

    ``winnings`` holds at most ``max_records`` draws at the best tier, in
    corpus order; ``total_winnings_at_highest`` is the uncapped count.
    """

    by_level: dict[int, list[WinningRecord]] = {}
    best = 0

    for draw in draws:
        match = match_ticket(ticket, draw, table)
        if match.tier == 0:
            continue

        by_level.setdefault(match.tier, []).append(
            WinningRecord(
                issue=draw.issue,
                draw_date=draw.draw_date,
                winning_front=list(draw.front),
                winning_back=list(draw.back),
                front_matched=match.front_matched,
                back_matched=match.back_matched,
                level=match.tier,
                prize_name=table.name(match.tier),
            )
        )
        if best == 0 or match.tier < best:
            best = match.tier

    if best == 0:
        return TicketCheck(
            lottery_code=table.lottery_code,
            has_winning=False,
            total_checked=len(draws),
            message="No winning draw found",
        )

    top = by_level[best]
    return TicketCheck(
        lottery_code=table.lottery_code,
        has_winning=True,
        total_checked=len(draws),
        highest_level=best,
        highest_prize_name=table.name(best),
        total_winnings_at_highest=len(top),
        winnings=top[:max_records],
        stats={table.name(level): len(records) for level, records in sorted(by_level.items())},
    )


class CheckService:
    """Load the corpus for a lottery code and run :func:`check_ticket`."""

    def __init__(self, repository: LotteryResultRepository | None = None) -> None:
        self._repo = repository or LotteryResultRepository()

    def check(
        self,
        session: Session,
        lottery_code: str,
        ticket: Ticket,
        *,
        corpus_limit: int = 10_000,
        max_records: int = 10,
    ) -> TicketCheck:
        table = get_prize_table(lottery_code)
        rows = self._repo.list_corpus(session, table.lottery_code, limit=corpus_limit)
        if not rows:
            return TicketCheck(
                lottery_code=table.lottery_code,
                has_winning=False,
                total_checked=0,
                evaluable=False,
                message="No historical draws yet; sync draw data first",
            )

        draws = [WinningDraw.from_result(r, default_draw_time(table.lottery_code)) for r in rows]
        return check_ticket(ticket, draws, table, max_records=max_records)
