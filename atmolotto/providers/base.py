"""Shared pieces for the lottery-draw HTTP providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from atmolotto.errors import ProviderError
from atmolotto.repositories.lottery_result_repository import DrawInput


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageResult:
    """One page of normalised draws, newest first.

    ``has_more`` uses the short-page heuristic: fewer rows than requested
    means the provider has nothing older.
    """

    source: str
    page: int
    limit: int
    draws: list[DrawInput] = field(default_factory=list)
    has_more: bool = False
    total_count: int | None = None
    skipped: int = 0


class DrawProvider(Protocol):
    name: str

    def fetch_page(self, lottery_code: str, page: int = 1, limit: int = 20) -> PageResult:
        """Fetch one page; raise :class:`ProviderError` on any upstream failure."""
        ...


def build_http_session(retries: int = 2, backoff_factor: float = 0.3) -> requests.Session:
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "POST"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=4, pool_maxsize=4)

    session = requests.Session()
    session.headers.update({"User-Agent": "Mozilla/5.0", "Accept": "application/json"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def request_json(
    http: requests.Session,
    method: str,
    url: str,
    *,
    provider: str,
    timeout_seconds: float,
    **kwargs: Any,
) -> Any:
    """Perform a request and decode JSON, mapping every failure to ``ProviderError``."""

    try:
        resp = http.request(method, url, timeout=timeout_seconds, **kwargs)
        resp.raise_for_status()
        return resp.json()
    except requests.Timeout as exc:
        raise ProviderError(f"{provider} timed out after {timeout_seconds}s", provider=provider) from exc
    except requests.HTTPError as exc:
        status = getattr(exc.response, "status_code", None)
        raise ProviderError(f"{provider} returned HTTP {status}", provider=provider) from exc
    except ValueError as exc:
        raise ProviderError(f"{provider} returned a non-JSON body", provider=provider) from exc
    except requests.RequestException as exc:
        raise ProviderError(f"{provider} request failed: {exc}", provider=provider) from exc
