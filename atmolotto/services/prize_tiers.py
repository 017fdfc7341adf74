"""Prize-tier decision tables and the pure tier evaluator.

A table is a flat, ordered list of ``(tier, {(front, back), ...})`` rules.
Rules are tried top-down and the first one containing the match-count pair
wins; a pair matched by no rule is tier 0 (no prize).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from atmolotto.errors import ValidationError


Rule = tuple[int, frozenset[tuple[int, int]]]


class HasNumbers(Protocol):
    front: Sequence[int]
    back: Sequence[int]


@dataclass(frozen=True)
class Ticket:
    """A user- or generator-supplied selection. Never persisted."""

    front: tuple[int, ...]
    back: tuple[int, ...] = ()

    @classmethod
    def of(cls, front: Iterable[int], back: Iterable[int] | None = None) -> "Ticket":
        return cls(tuple(int(n) for n in front), tuple(int(n) for n in (back or ())))


@dataclass(frozen=True)
class MatchResult:
    tier: int
    front_matched: list[int]
    back_matched: list[int]


@dataclass(frozen=True)
class PrizeTable:
    """Ordered tier rules plus display names and payouts (yuan) per tier."""

    lottery_code: str
    rules: tuple[Rule, ...]
    names: dict[int, str]
    amounts: dict[int, int]

    @property
    def tiers(self) -> list[int]:
        return [tier for tier, _ in self.rules]

    def name(self, tier: int) -> str:
        return self.names.get(tier, "未中奖")

    def amount(self, tier: int) -> int:
        return int(self.amounts.get(tier, 0))


def _rule(tier: int, *pairs: tuple[int, int]) -> Rule:
    return tier, frozenset(pairs)


_TIER_NAMES = {
    1: "一等奖",
    2: "二等奖",
    3: "三等奖",
    4: "四等奖",
    5: "五等奖",
    6: "六等奖",
    7: "七等奖",
    8: "八等奖",
    9: "九等奖",
}

# Tiers 1 and 2 are pari-mutuel; the amounts are average estimates.
DLT_PRIZES = PrizeTable(
    lottery_code="dlt",
    rules=(
        _rule(1, (5, 2)),
        _rule(2, (5, 1)),
        _rule(3, (5, 0)),
        _rule(4, (4, 2)),
        _rule(5, (4, 1)),
        _rule(6, (3, 2), (4, 0)),
        _rule(7, (3, 1), (2, 2)),
        _rule(8, (3, 0), (1, 2), (2, 1)),
        _rule(9, (0, 2), (1, 1), (2, 0)),
    ),
    names=dict(_TIER_NAMES),
    amounts={
        1: 5_000_000,
        2: 100_000,
        3: 10_000,
        4: 3_000,
        5: 300,
        6: 200,
        7: 100,
        8: 15,
        9: 5,
    },
)

SSQ_PRIZES = PrizeTable(
    lottery_code="ssq",
    rules=(
        _rule(1, (6, 1)),
        _rule(2, (6, 0)),
        _rule(3, (5, 1)),
        _rule(4, (5, 0), (4, 1)),
        _rule(5, (4, 0), (3, 1)),
        _rule(6, (2, 1), (1, 1), (0, 1)),
    ),
    names={tier: _TIER_NAMES[tier] for tier in range(1, 7)},
    amounts={
        1: 5_000_000,
        2: 150_000,
        3: 3_000,
        4: 200,
        5: 10,
        6: 5,
    },
)

PRIZE_TABLES: dict[str, PrizeTable] = {t.lottery_code: t for t in (DLT_PRIZES, SSQ_PRIZES)}


def tier_for_counts(front_count: int, back_count: int, table: PrizeTable = DLT_PRIZES) -> int:
    """Map a (front, back) match-count pair to a tier; 0 means no prize."""

    pair = (int(front_count), int(back_count))
    for tier, pairs in table.rules:
        if pair in pairs:
            return tier
    return 0


def match_ticket(ticket: HasNumbers, draw: HasNumbers, table: PrizeTable = DLT_PRIZES) -> MatchResult:
    """Compare one ticket with one draw's winning numbers."""

    winning_front = set(draw.front)
    winning_back = set(draw.back)
    front_matched = [n for n in ticket.front if n in winning_front]
    back_matched = [n for n in ticket.back if n in winning_back]

    return MatchResult(
        tier=tier_for_counts(len(front_matched), len(back_matched), table),
        front_matched=front_matched,
        back_matched=back_matched,
    )


def evaluate_tier(ticket: HasNumbers, draw: HasNumbers, table: PrizeTable = DLT_PRIZES) -> int:
    return match_ticket(ticket, draw, table).tier


@dataclass(frozen=True)
class WinningDraw:
    """The parts of a stored draw the evaluator needs."""

    issue: str
    draw_date: str
    front: tuple[int, ...]
    back: tuple[int, ...] = ()

    @classmethod
    def from_result(cls, result: object, default_time: str = "21:30:00") -> "WinningDraw":
        """Build from a ``LotteryResult`` row (or anything shaped like one)."""

        draw_date_time = getattr(result, "draw_date_time", None)
        if not draw_date_time:
            draw_date_time = f"{getattr(result, 'draw_date')} {default_time}"
        return cls(
            issue=str(getattr(result, "issue")),
            draw_date=str(draw_date_time),
            front=tuple(getattr(result, "main")),
            back=tuple(getattr(result, "extra")),
        )


def get_prize_table(lottery_code: str) -> PrizeTable:
    table = PRIZE_TABLES.get((lottery_code or "").strip().lower())
    if table is None:
        raise ValidationError(
            message=f"Prize checks are not supported for lottery code: {lottery_code}",
            details={"code": [f"Must be one of {'|'.join(PRIZE_TABLES)}"]},
        )
    return table
