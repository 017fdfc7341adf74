"""Huiniao lottery API (secondary source, paginated, deep history)."""

from __future__ import annotations

import logging
from typing import Any

import requests

from atmolotto.errors import ProviderError
from atmolotto.lottery_types import LotteryType, get_lottery_type
from atmolotto.providers.base import PageResult, build_http_session, request_json
from atmolotto.providers.normalize import build_draw, parse_numbers


logger = logging.getLogger(__name__)

_COLUMNS = ("one", "two", "three", "four", "five", "six", "seven")


def split_columns(item: dict[str, Any], lottery_type: LotteryType) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Map the ``one``..``seven`` columns onto main/extra numbers.

    dlt: 5 + 2, ssq: 6 + 1; formats without extra numbers use the first
    ``main_count`` columns.
    """

    values = [item.get(col) for col in _COLUMNS]
    present = [v for v in values if v not in (None, "")]
    numbers = parse_numbers(present)

    main = numbers[: lottery_type.main_count]
    extra = numbers[lottery_type.main_count : lottery_type.main_count + lottery_type.extra_count]
    return main, extra


class HuiniaoProvider:
    name = "huiniao"

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 15.0,
        http: requests.Session | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + "/lotteryHistory"
        self._timeout = float(timeout_seconds)
        self._http = http or build_http_session()

    def fetch_page(self, lottery_code: str, page: int = 1, limit: int = 20) -> PageResult:
        lottery_type = get_lottery_type(lottery_code)
        if not lottery_type.huiniao_code:
            raise ProviderError(f"huiniao does not serve lottery code {lottery_code}", provider=self.name)

        params = {"type": lottery_type.huiniao_code, "page": int(page), "limit": int(limit)}
        logger.info("[huiniao] fetching %s", params)
        payload = request_json(
            self._http,
            "GET",
            self._url,
            provider=self.name,
            timeout_seconds=self._timeout,
            params=params,
        )

        body = payload.get("data") if isinstance(payload, dict) else None
        listing = body.get("data") if isinstance(body, dict) else None
        items = listing.get("list") if isinstance(listing, dict) else None
        if not isinstance(payload, dict) or str(payload.get("code")) != "1" or not isinstance(items, list):
            info = payload.get("info") if isinstance(payload, dict) else None
            raise ProviderError(info or "huiniao returned an unexpected payload", provider=self.name)

        draws = []
        skipped = 0
        for item in items:
            try:
                main, extra = split_columns(item, lottery_type)
                draws.append(
                    build_draw(
                        lottery_type,
                        issue=item.get("code"),
                        raw_date=item.get("day"),
                        raw_time=item.get("open_time"),
                        main=main,
                        extra=extra,
                        raw_data=dict(item),
                    )
                )
            except (AttributeError, TypeError, ValueError) as exc:
                skipped += 1
                logger.warning("[huiniao] skipping malformed %s row: %s", lottery_code, exc)

        total_count = listing.get("totalCount")
        logger.info("[huiniao] fetched %d %s draws (%d skipped)", len(draws), lottery_code, skipped)
        return PageResult(
            source=self.name,
            page=int(page),
            limit=int(limit),
            draws=draws,
            has_more=len(items) >= int(limit),
            total_count=int(total_count) if total_count is not None else None,
            skipped=skipped,
        )
