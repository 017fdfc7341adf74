"""Third-party lottery-draw providers."""

from atmolotto.providers.aa1 import AA1Provider
from atmolotto.providers.base import DrawProvider, PageResult
from atmolotto.providers.fetcher import DrawFetcher, HistoryFetch
from atmolotto.providers.huiniao import HuiniaoProvider

__all__ = [
    "AA1Provider",
    "DrawFetcher",
    "DrawProvider",
    "HistoryFetch",
    "HuiniaoProvider",
    "PageResult",
]
