"""Supported lottery formats.

Counts and ranges are fixed per lottery code; providers and validators read
them from here.
"""

from __future__ import annotations

from dataclasses import dataclass

from atmolotto.errors import ValidationError


@dataclass(frozen=True)
class LotteryType:
    code: str
    name: str
    category: str  # "sports" | "welfare"
    main_count: int
    main_min: int
    main_max: int
    extra_count: int = 0
    extra_min: int = 0
    extra_max: int = 0
    draw_time: str = "21:30:00"
    draw_days: tuple[int, ...] = ()  # 0 = Sunday
    aa1_code: str | None = None
    huiniao_code: str | None = None

    @property
    def has_extra(self) -> bool:
        return self.extra_count > 0


LOTTERY_TYPES: dict[str, LotteryType] = {
    t.code: t
    for t in (
        LotteryType("dlt", "大乐透", "sports", 5, 1, 35, 2, 1, 12, "21:30:00", (1, 3, 6), "dlt", "dlt"),
        LotteryType("ssq", "双色球", "welfare", 6, 1, 33, 1, 1, 16, "21:15:00", (0, 2, 4), "ssq", "ssq"),
        LotteryType("pl3", "排列3", "sports", 3, 0, 9, draw_time="21:30:00", draw_days=(0, 1, 2, 3, 4, 5, 6), aa1_code="pls", huiniao_code="pl3"),
        LotteryType("pl5", "排列5", "sports", 5, 0, 9, draw_time="21:30:00", draw_days=(0, 1, 2, 3, 4, 5, 6), aa1_code="plw", huiniao_code="pl5"),
        LotteryType("qxc", "七星彩", "sports", 7, 0, 9, draw_time="21:30:00", draw_days=(0, 2, 5), aa1_code="qxc", huiniao_code="qxc"),
        LotteryType("fc3d", "福彩3D", "welfare", 3, 0, 9, draw_time="21:15:00", draw_days=(0, 1, 2, 3, 4, 5, 6), aa1_code="fc3d", huiniao_code="fc3d"),
        LotteryType("qlc", "七乐彩", "welfare", 7, 1, 30, 1, 1, 30, "21:15:00", (1, 3, 5), "qlc", "qlc"),
    )
}


def get_lottery_type(code: str) -> LotteryType:
    """Look up a lottery format, raising ``ValidationError`` for unknown codes."""

    lottery_type = LOTTERY_TYPES.get((code or "").strip().lower())
    if lottery_type is None:
        raise ValidationError(
            message=f"Unsupported lottery code: {code}",
            details={"code": [f"Must be one of {'|'.join(LOTTERY_TYPES)}"]},
        )
    return lottery_type


def default_draw_time(code: str) -> str:
    lottery_type = LOTTERY_TYPES.get(code)
    return lottery_type.draw_time if lottery_type else "21:30:00"
