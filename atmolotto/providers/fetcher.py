"""Primary/secondary orchestration over the draw providers."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from atmolotto.errors import ProviderError
from atmolotto.providers.aa1 import AA1Provider
from atmolotto.providers.base import DrawProvider, PageResult, build_http_session
from atmolotto.providers.huiniao import HuiniaoProvider
from atmolotto.repositories.lottery_result_repository import DrawInput


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryFetch:
    """Result of a multi-page walk.

    ``error`` is set when a page after the first failed; ``draws`` then still
    holds everything fetched before the failure.
    """

    draws: list[DrawInput] = field(default_factory=list)
    pages_fetched: int = 0
    exhausted: bool = False
    error: str | None = None

    @property
    def partial(self) -> bool:
        return self.error is not None


class DrawFetcher:
    """Try the primary provider first and fall back to the secondary.

    Only page 1 ever goes to the primary; deeper pages, and whole history
    walks, use the secondary alone so page numbers always refer to one
    provider's pagination.
    """

    def __init__(
        self,
        primary: DrawProvider,
        secondary: DrawProvider,
        *,
        page_delay_seconds: float = 0.3,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self._page_delay = float(page_delay_seconds)
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "DrawFetcher":
        http = build_http_session(
            retries=int(config.get("HTTP_RETRIES", 2)),
            backoff_factor=float(config.get("HTTP_BACKOFF_FACTOR", 0.3)),
        )
        timeout = float(config.get("HTTP_TIMEOUT_SECONDS", 15.0))
        return cls(
            AA1Provider(str(config["AA1_API_URL"]), timeout_seconds=timeout, http=http),
            HuiniaoProvider(str(config["HUINIAO_API_URL"]), timeout_seconds=timeout, http=http),
            page_delay_seconds=float(config.get("SYNC_PAGE_DELAY_SECONDS", 0.3)),
        )

    def fetch_page(self, lottery_code: str, page: int = 1, limit: int = 20) -> PageResult:
        primary_result: PageResult | None = None

        if page == 1:
            try:
                primary_result = self.primary.fetch_page(lottery_code, 1, limit)
                if primary_result.draws:
                    return primary_result
                logger.info("[%s] %s returned no draws, falling back", lottery_code, self.primary.name)
            except ProviderError as exc:
                logger.warning(
                    "[%s] %s failed (%s), falling back to %s",
                    lottery_code,
                    self.primary.name,
                    exc.message,
                    self.secondary.name,
                )

        try:
            return self.secondary.fetch_page(lottery_code, page, limit)
        except ProviderError:
            if primary_result is not None:
                # The primary answered (with nothing); report "no data" rather than an error.
                return primary_result
            raise

    def fetch_latest(self, lottery_code: str) -> DrawInput | None:
        result = self.fetch_page(lottery_code, 1, 1)
        return result.draws[0] if result.draws else None

    def fetch_all_history(
        self,
        lottery_code: str,
        *,
        start_page: int = 1,
        max_pages: int = 10,
        page_size: int = 50,
    ) -> HistoryFetch:
        """Walk the secondary provider's pages sequentially.

        Stops at a short page or after ``max_pages`` pages, sleeping between
        requests.

        Raises:
            ProviderError: the very first page failed.
        """

        draws: list[DrawInput] = []
        pages = 0
        page = max(int(start_page), 1)

        while pages < max_pages:
            try:
                result = self.secondary.fetch_page(lottery_code, page, page_size)
            except ProviderError as exc:
                if pages == 0:
                    raise
                logger.warning(
                    "[%s] history walk stopped at page %d after %d draws: %s",
                    lottery_code,
                    page,
                    len(draws),
                    exc.message,
                )
                return HistoryFetch(draws=draws, pages_fetched=pages, exhausted=False, error=exc.message)

            draws.extend(result.draws)
            pages += 1
            if not result.has_more:
                return HistoryFetch(draws=draws, pages_fetched=pages, exhausted=True)

            page += 1
            if pages < max_pages and self._page_delay > 0:
                self._sleep(self._page_delay)

        return HistoryFetch(draws=draws, pages_fetched=pages, exhausted=False)
