"""Turn heterogeneous provider rows into :class:`DrawInput`.

Numbers arrive space- or comma-delimited and often zero padded ("06 08"),
money as display strings ("2.85亿", "3500万", "1,234.50") and dates with a
trailing weekday ("2026-01-18 星期六").
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from atmolotto.lottery_types import LotteryType
from atmolotto.repositories.lottery_result_repository import DrawInput


_DATE_RE = re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})")
_TIME_RE = re.compile(r"\b(\d{1,2}):(\d{2})(?::(\d{2}))?\b")
_SPLIT_RE = re.compile(r"[\s,，+|]+")

_MONEY_UNITS = (
    ("亿", Decimal(100_000_000)),
    ("万", Decimal(10_000)),
    ("元", Decimal(1)),
)


def parse_numbers(raw: Any) -> tuple[int, ...]:
    """Parse "19 21 29", "19,21,29" or ``[19, "21"]`` into ints.

    Raises:
        ValueError: a token is not an integer.
    """

    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        tokens: Iterable[Any] = raw
    else:
        tokens = [t for t in _SPLIT_RE.split(str(raw).strip()) if t]
    return tuple(int(str(t).strip()) for t in tokens)


def parse_money(raw: Any) -> int | None:
    """Money display string -> integer cents; ``None`` when absent or unparsable."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return int((Decimal(str(raw)) * 100).quantize(Decimal(1)))

    text = str(raw).replace(",", "").replace("，", "").strip()
    if not text:
        return None

    multiplier = Decimal(1)
    for unit, factor in _MONEY_UNITS:
        if unit in text:
            text = text.replace(unit, "")
            multiplier *= factor
    text = text.strip().lstrip("¥￥")

    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return int((value * multiplier * 100).quantize(Decimal(1)))


def parse_draw_date(raw: Any) -> date:
    """Extract the calendar date from "2026-01-18", "2026-01-18 星期六", ...

    Raises:
        ValueError: no date found.
    """

    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    match = _DATE_RE.search(str(raw or ""))
    if not match:
        raise ValueError(f"Unrecognised draw date: {raw!r}")
    year, month, day = (int(g) for g in match.groups())
    return date(year, month, day)


def draw_date_time(draw_date: date, raw_time: Any) -> str | None:
    """Full ``YYYY-MM-DD HH:MM:SS`` when the payload carries a clock, else ``None``.

    Readers fall back to the format's scheduled draw time; storing ``None``
    lets a later payload with the exact time backfill it.
    """

    match = _TIME_RE.search(str(raw_time or ""))
    if not match:
        return None
    hour, minute, second = match.group(1), match.group(2), match.group(3) or "00"
    return f"{draw_date.isoformat()} {int(hour):02d}:{minute}:{second}"


def build_draw(
    lottery_type: LotteryType,
    *,
    issue: Any,
    raw_date: Any,
    main: Iterable[int],
    extra: Iterable[int] = (),
    raw_time: Any = None,
    prize_pool: Any = None,
    total_sales: Any = None,
    raw_data: dict[str, Any] | None = None,
) -> DrawInput:
    """Validate counts against the lottery format and build a ``DrawInput``.

    Raises:
        ValueError: missing issue or a wrong number of main/extra numbers.
    """

    issue_text = str(issue or "").strip()
    if not issue_text:
        raise ValueError("Missing issue")

    main_numbers = tuple(main)
    extra_numbers = tuple(extra)
    if len(main_numbers) != lottery_type.main_count:
        raise ValueError(
            f"{lottery_type.code} issue {issue_text}: expected {lottery_type.main_count} main numbers, "
            f"got {len(main_numbers)}"
        )
    # Extra numbers are optional (some feeds omit the qlc special number).
    if lottery_type.has_extra and extra_numbers and len(extra_numbers) != lottery_type.extra_count:
        raise ValueError(
            f"{lottery_type.code} issue {issue_text}: expected {lottery_type.extra_count} extra numbers, "
            f"got {len(extra_numbers)}"
        )

    day = parse_draw_date(raw_date)
    return DrawInput(
        lottery_code=lottery_type.code,
        issue=issue_text,
        draw_date=day,
        draw_date_time=draw_date_time(day, raw_time),
        main_numbers=main_numbers,
        extra_numbers=extra_numbers if lottery_type.has_extra else (),
        prize_pool=parse_money(prize_pool),
        total_sales=parse_money(total_sales),
        raw_data=raw_data,
    )
