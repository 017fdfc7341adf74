"""AA1 lottery API (primary source).

Fast to publish new draws but returns a single, unpaginated list of recent
issues, newest first.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from atmolotto.errors import ProviderError
from atmolotto.lottery_types import get_lottery_type
from atmolotto.providers.base import PageResult, build_http_session, request_json
from atmolotto.providers.normalize import build_draw, parse_numbers


logger = logging.getLogger(__name__)


class AA1Provider:
    name = "aa1"

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 15.0,
        http: requests.Session | None = None,
    ) -> None:
        self._url = base_url
        self._timeout = float(timeout_seconds)
        self._http = http or build_http_session()

    def fetch_page(self, lottery_code: str, page: int = 1, limit: int = 20) -> PageResult:
        lottery_type = get_lottery_type(lottery_code)
        if not lottery_type.aa1_code:
            raise ProviderError(f"aa1 does not serve lottery code {lottery_code}", provider=self.name)
        if page != 1:
            raise ProviderError("aa1 only serves the first page", provider=self.name)

        logger.info("[aa1] fetching %s", lottery_type.aa1_code)
        payload = request_json(
            self._http,
            "POST",
            self._url,
            provider=self.name,
            timeout_seconds=self._timeout,
            json={"search_lottery": lottery_type.aa1_code},
        )

        if (
            not isinstance(payload, dict)
            or payload.get("status") != "success"
            or str(payload.get("code")) != "200"
            or not isinstance(payload.get("data"), list)
        ):
            raise ProviderError("aa1 returned an unexpected payload", provider=self.name)

        items: list[dict[str, Any]] = payload["data"]
        draws = []
        skipped = 0
        for item in items[: max(int(limit), 0)]:
            try:
                draws.append(
                    build_draw(
                        lottery_type,
                        issue=item.get("issue"),
                        raw_date=item.get("opentime"),
                        main=parse_numbers(item.get("drawnumber")),
                        extra=parse_numbers(item.get("trailnumber")),
                        total_sales=item.get("salemoney"),
                        prize_pool=item.get("poolmoney"),
                        raw_data=dict(item),
                    )
                )
            except (AttributeError, TypeError, ValueError) as exc:
                skipped += 1
                logger.warning("[aa1] skipping malformed %s row: %s", lottery_code, exc)

        logger.info("[aa1] fetched %d %s draws (%d skipped)", len(draws), lottery_code, skipped)
        returned = min(len(items), int(limit))
        return PageResult(
            source=self.name,
            page=1,
            limit=int(limit),
            draws=draws,
            has_more=returned >= int(limit),
            total_count=len(items),
            skipped=skipped,
        )
