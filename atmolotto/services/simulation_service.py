"""Batch simulation: many tickets against a lottery's whole draw corpus."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from atmolotto.errors import ValidationError
from atmolotto.lottery_types import default_draw_time, get_lottery_type
from atmolotto.repositories.lottery_result_repository import LotteryResultRepository
from atmolotto.services.prize_tiers import (
    DLT_PRIZES,
    HasNumbers,
    PrizeTable,
    Ticket,
    WinningDraw,
    evaluate_tier,
    get_prize_table,
)
from atmolotto.services.random_service import GeneratedNumbers, RandomService


@dataclass(frozen=True)
class LevelStat:
    count: int
    name: str
    amount: int


@dataclass(frozen=True)
class TicketOutcome:
    ticket_index: int
    highest_level: int  # 0 = never won
    level_counts: dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class BatchSummary:
    total_tickets: int
    total_issues_checked: int
    winning_tickets: int
    level_stats: dict[int, LevelStat]
    total_prize: int
    total_cost: int
    return_rate: float
    win_rate: float


@dataclass(frozen=True)
class BatchSimulation:
    results: list[TicketOutcome]
    summary: BatchSummary


@dataclass(frozen=True)
class BatchCheckResult:
    """Service-level result; ``evaluable`` is False when the corpus is empty."""

    lottery_code: str
    evaluable: bool
    simulation: BatchSimulation
    message: str | None = None


@dataclass(frozen=True)
class RandomSimulationResult(BatchCheckResult):
    """A batch check whose tickets were drawn from random.org."""

    generated: list[GeneratedNumbers] = field(default_factory=list)


def simulate_batch(
    tickets: Sequence[HasNumbers],
    draws: Sequence[HasNumbers],
    table: PrizeTable = DLT_PRIZES,
    unit_price: int = 2,
) -> BatchSimulation:
    """Evaluate every (ticket, draw) pair.

    ``level_stats`` counts hits over all pairs, not just each ticket's best,
    so one ticket can contribute several prizes. Complexity is
    O(len(tickets) * len(draws)).
    """

    tier_counts: dict[int, int] = {tier: 0 for tier in table.tiers}
    results: list[TicketOutcome] = []
    winning_tickets = 0

    for index, ticket in enumerate(tickets):
        level_counts: dict[int, int] = {}
        best = 0

        for draw in draws:
            tier = evaluate_tier(ticket, draw, table)
            if tier == 0:
                continue
            level_counts[tier] = level_counts.get(tier, 0) + 1
            tier_counts[tier] += 1
            if best == 0 or tier < best:
                best = tier

        if best:
            winning_tickets += 1
        results.append(TicketOutcome(ticket_index=index, highest_level=best, level_counts=level_counts))

    level_stats = {
        tier: LevelStat(count=count, name=table.name(tier), amount=table.amount(tier))
        for tier, count in tier_counts.items()
    }
    total_prize = sum(stat.count * stat.amount for stat in level_stats.values())
    total_cost = len(tickets) * int(unit_price)

    summary = BatchSummary(
        total_tickets=len(tickets),
        total_issues_checked=len(draws),
        winning_tickets=winning_tickets,
        level_stats=level_stats,
        total_prize=total_prize,
        total_cost=total_cost,
        return_rate=(total_prize / total_cost * 100) if total_cost > 0 else 0.0,
        win_rate=(winning_tickets / len(tickets) * 100) if tickets else 0.0,
    )
    return BatchSimulation(results=results, summary=summary)


class SimulationService:
    """Load a lottery's corpus and run :func:`simulate_batch` over it."""

    def __init__(self, repository: LotteryResultRepository | None = None) -> None:
        self._repo = repository or LotteryResultRepository()

    def batch_check(
        self,
        session: Session,
        lottery_code: str,
        tickets: Sequence[Ticket],
        *,
        unit_price: int = 2,
        corpus_limit: int = 10_000,
    ) -> BatchCheckResult:
        table = get_prize_table(lottery_code)
        rows = self._repo.list_corpus(session, table.lottery_code, limit=corpus_limit)
        draws = [WinningDraw.from_result(r, default_draw_time(table.lottery_code)) for r in rows]

        simulation = simulate_batch(tickets, draws, table, unit_price=unit_price)
        if not draws:
            return BatchCheckResult(
                lottery_code=table.lottery_code,
                evaluable=False,
                simulation=simulation,
                message="No historical draws yet; sync draw data first",
            )
        return BatchCheckResult(lottery_code=table.lottery_code, evaluable=True, simulation=simulation)

    def simulate_random(
        self,
        session: Session,
        lottery_code: str,
        count: int,
        random_service: RandomService,
        *,
        unit_price: int = 2,
        corpus_limit: int = 10_000,
    ) -> RandomSimulationResult:
        """Generate ``count`` tickets with random.org and batch-check them.

        Nothing is requested from random.org when the corpus is empty.

        Raises:
            RandomProviderError: random.org failed for any ticket.
        """

        if int(count) < 1:
            raise ValidationError(message="count must be >= 1", details={"count": ["Must be >= 1"]})

        table = get_prize_table(lottery_code)
        lottery_type = get_lottery_type(table.lottery_code)
        rows = self._repo.list_corpus(session, table.lottery_code, limit=corpus_limit)
        if not rows:
            return RandomSimulationResult(
                lottery_code=table.lottery_code,
                evaluable=False,
                simulation=simulate_batch([], [], table, unit_price=unit_price),
                message="No historical draws yet; sync draw data first",
            )

        generated = [random_service.lottery_numbers(lottery_type) for _ in range(int(count))]
        tickets = [Ticket.of(g.numbers, g.special_numbers) for g in generated]
        draws = [WinningDraw.from_result(r, default_draw_time(table.lottery_code)) for r in rows]
        return RandomSimulationResult(
            lottery_code=table.lottery_code,
            evaluable=True,
            simulation=simulate_batch(tickets, draws, table, unit_price=unit_price),
            generated=generated,
        )
