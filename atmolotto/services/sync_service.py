"""Draw-corpus synchronisation.

While a lottery's history is incomplete each run walks up to
``max_pages`` older pages from where the stored corpus ends; once complete,
runs only pull the newest page. Every successful batch is upserted and then
recorded on the sync cursor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from atmolotto.errors import ProviderError
from atmolotto.lottery_types import get_lottery_type
from atmolotto.models.sync_status import SyncStatus
from atmolotto.providers.fetcher import DrawFetcher, HistoryFetch
from atmolotto.repositories.lottery_result_repository import DrawInput, LotteryResultRepository, UpsertStats
from atmolotto.repositories.sync_status_repository import SyncStatusRepository


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncOutcome:
    lottery_code: str
    mode: str  # "history" | "incremental" | "page"
    success: bool = True
    fetched: int = 0
    inserted: int = 0
    updated: int = 0
    latest_issue: str | None = None
    oldest_issue: str | None = None
    history_complete: bool | None = None
    has_more: bool | None = None
    source: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class SyncStatusView:
    lottery_code: str
    status: SyncStatus | None
    record_count: int


class SyncService:
    def __init__(
        self,
        fetcher: DrawFetcher,
        repository: LotteryResultRepository | None = None,
        status_repository: SyncStatusRepository | None = None,
        *,
        page_size: int = 50,
        max_pages: int = 10,
        incremental_limit: int = 20,
    ) -> None:
        self._fetcher = fetcher
        self._repo = repository or LotteryResultRepository()
        self._status_repo = status_repository or SyncStatusRepository()
        self._page_size = int(page_size)
        self._max_pages = int(max_pages)
        self._incremental_limit = int(incremental_limit)

    @classmethod
    def from_config(cls, config: Mapping[str, Any], fetcher: DrawFetcher | None = None) -> "SyncService":
        return cls(
            fetcher or DrawFetcher.from_config(config),
            page_size=int(config.get("SYNC_PAGE_SIZE", 50)),
            max_pages=int(config.get("SYNC_MAX_PAGES", 10)),
            incremental_limit=int(config.get("SYNC_INCREMENTAL_LIMIT", 20)),
        )

    def sync(self, session: Session, lottery_code: str) -> SyncOutcome:
        """Run one cursor-driven sync for a lottery code.

        Raises:
            ProviderError: nothing could be fetched from either provider.
        """

        code = get_lottery_type(lottery_code).code
        status = self._status_repo.get(session, code)
        if status is None or not status.is_history_complete:
            return self._sync_history(session, code)
        return self._sync_incremental(session, code)

    def sync_many(self, session: Session, lottery_codes: Iterable[str]) -> dict[str, SyncOutcome]:
        """Sync several codes; a provider failure on one does not stop the rest."""

        outcomes: dict[str, SyncOutcome] = {}
        for code in lottery_codes:
            try:
                outcomes[code] = self.sync(session, code)
            except ProviderError as exc:
                logger.warning("[%s] sync failed: %s", code, exc.message)
                outcomes[code] = SyncOutcome(lottery_code=code, mode="failed", success=False, error=exc.message)
        return outcomes

    def sync_page(self, session: Session, lottery_code: str, page: int = 1, limit: int = 50) -> SyncOutcome:
        """Fetch and store one explicit page (manual backfill)."""

        code = get_lottery_type(lottery_code).code
        logger.info("[%s] syncing page %d (limit %d)", code, page, limit)
        result = self._fetcher.fetch_page(code, page, limit)

        if not result.draws:
            return SyncOutcome(lottery_code=code, mode="page", has_more=False, source=result.source)

        stats = self._repo.upsert_many(session, result.draws)
        latest, oldest = result.draws[0], result.draws[-1]
        self._status_repo.merge_update(
            session,
            code,
            last_synced_issue=latest.issue if page == 1 else None,
            last_synced_date=latest.draw_date if page == 1 else None,
            oldest_synced_issue=oldest.issue,
            is_history_complete=len(result.draws) < limit,
        )
        return SyncOutcome(
            lottery_code=code,
            mode="page",
            fetched=len(result.draws),
            inserted=stats.inserted,
            updated=stats.updated,
            latest_issue=latest.issue,
            oldest_issue=oldest.issue,
            history_complete=len(result.draws) < limit,
            has_more=len(result.draws) >= limit,
            source=result.source,
        )

    def status(self, session: Session, lottery_code: str) -> SyncStatusView:
        code = get_lottery_type(lottery_code).code
        return SyncStatusView(
            lottery_code=code,
            status=self._status_repo.get(session, code),
            record_count=self._repo.count(session, code),
        )

    def reset(self, session: Session, lottery_code: str) -> SyncStatus:
        """Mark history incomplete so the next sync backfills again. Keeps stored draws."""

        code = get_lottery_type(lottery_code).code
        return self._status_repo.merge_update(session, code, is_history_complete=False)

    def _sync_history(self, session: Session, code: str) -> SyncOutcome:
        stored = self._repo.count(session, code)
        start_page = stored // self._page_size + 1
        history, stats = self._walk(session, code, start_page)
        rescanned = False

        if start_page > 1 and stats.inserted == 0 and history.draws and not history.exhausted and not history.partial:
            # Draws published since the last run shifted the provider's pages.
            logger.info("[%s] pages from %d were already stored, rescanning from page 1", code, start_page)
            start_page, rescanned = 1, True
            history, rescan = self._walk(session, code, start_page)
            stats.updated += rescan.updated
            stats.inserted += rescan.inserted
            stats.unchanged += rescan.unchanged

        latest, oldest = _edges(history.draws)
        self._status_repo.merge_update(
            session,
            code,
            last_synced_issue=latest.issue if latest and start_page == 1 else None,
            last_synced_date=latest.draw_date if latest and start_page == 1 else None,
            oldest_synced_issue=oldest.issue if oldest and not rescanned else None,
            is_history_complete=history.exhausted,
        )
        logger.info(
            "[%s] history sync done: fetched=%d inserted=%d complete=%s",
            code,
            len(history.draws),
            stats.inserted,
            history.exhausted,
        )
        return SyncOutcome(
            lottery_code=code,
            mode="history",
            fetched=len(history.draws),
            inserted=stats.inserted,
            updated=stats.updated,
            latest_issue=latest.issue if latest else None,
            oldest_issue=oldest.issue if oldest else None,
            history_complete=history.exhausted,
            has_more=not history.exhausted,
            source=self._fetcher.secondary.name,
            error=history.error,
        )

    def _walk(self, session: Session, code: str, start_page: int) -> tuple[HistoryFetch, UpsertStats]:
        logger.info("[%s] history walk from page %d", code, start_page)
        history = self._fetcher.fetch_all_history(
            code,
            start_page=start_page,
            max_pages=self._max_pages,
            page_size=self._page_size,
        )
        return history, self._repo.upsert_many(session, history.draws)

    def _sync_incremental(self, session: Session, code: str) -> SyncOutcome:
        logger.info("[%s] incremental sync", code)
        result = self._fetcher.fetch_page(code, 1, self._incremental_limit)
        stats = self._repo.upsert_many(session, result.draws)
        latest, _ = _edges(result.draws)

        self._status_repo.merge_update(
            session,
            code,
            last_synced_issue=latest.issue if latest else None,
            last_synced_date=latest.draw_date if latest else None,
        )
        logger.info("[%s] incremental sync done: fetched=%d inserted=%d", code, len(result.draws), stats.inserted)
        return SyncOutcome(
            lottery_code=code,
            mode="incremental",
            fetched=len(result.draws),
            inserted=stats.inserted,
            updated=stats.updated,
            latest_issue=latest.issue if latest else None,
            history_complete=True,
            source=result.source,
        )


def _edges(draws: list[DrawInput]) -> tuple[DrawInput | None, DrawInput | None]:
    if not draws:
        return None, None
    return draws[0], draws[-1]
