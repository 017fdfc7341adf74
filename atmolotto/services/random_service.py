"""True-random numbers from random.org (atmospheric noise).

random.org answers ``format=plain`` requests with one integer per line. A
response with the wrong number of values, a non-integer line or a value
outside the requested range is an error, never silently truncated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import requests

from atmolotto.errors import RandomProviderError, ValidationError
from atmolotto.lottery_types import LOTTERY_TYPES, LotteryType
from atmolotto.providers.base import build_http_session


logger = logging.getLogger(__name__)

MAX_RANDOM_VALUE = 1_000_000_000
MAX_REQUEST_COUNT = 10_000


class RandomOrgClient:
    def __init__(
        self,
        base_url: str = "https://www.random.org/integers/",
        *,
        timeout_seconds: float = 15.0,
        http: requests.Session | None = None,
    ) -> None:
        self._url = base_url
        self._timeout = float(timeout_seconds)
        self._http = http or build_http_session(retries=1)

    def fetch_integers(self, count: int, minimum: int, maximum: int) -> list[int]:
        """Return exactly ``count`` integers in ``[minimum, maximum]``.

        Raises:
            ValidationError: invalid request bounds.
            RandomProviderError: transport failure or unusable response.
        """

        if not 1 <= count <= MAX_REQUEST_COUNT:
            raise ValidationError(message=f"count must be within 1..{MAX_REQUEST_COUNT}")
        if minimum > maximum:
            raise ValidationError(message="min must be <= max")
        if minimum < -MAX_RANDOM_VALUE or maximum > MAX_RANDOM_VALUE:
            raise ValidationError(message=f"bounds must be within ±{MAX_RANDOM_VALUE}")

        params = {
            "num": count,
            "min": minimum,
            "max": maximum,
            "col": 1,
            "base": 10,
            "format": "plain",
            "rnd": "new",
        }
        try:
            resp = self._http.get(self._url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise RandomProviderError(f"Network error: {exc}") from exc

        if not resp.ok:
            raise RandomProviderError(f"random.org request failed: {resp.status_code} {resp.reason}")

        text = resp.text or ""
        if "Error:" in text:
            raise RandomProviderError(f"random.org error: {text.strip()}")

        numbers: list[int] = []
        for line in text.strip().splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                numbers.append(int(line))
            except ValueError as exc:
                raise RandomProviderError(f"Malformed random.org response line: {line!r}") from exc

        if len(numbers) != count:
            raise RandomProviderError(
                f"Unexpected number of values (expected {count}, got {len(numbers)})",
                details={"expected": count, "actual": len(numbers)},
            )
        if any(n < minimum or n > maximum for n in numbers):
            raise RandomProviderError("random.org returned a value outside the requested range")
        return numbers


@dataclass(frozen=True)
class GeneratedNumbers:
    lottery_code: str
    numbers: list[int]
    special_numbers: list[int]
    generated_at: str


@dataclass(frozen=True)
class CoinFlip:
    result: str  # "heads" | "tails"
    raw: int


@dataclass(frozen=True)
class DiceRoll:
    values: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.values)


class RandomService:
    """Lottery sets, coins, dice and bounded integers built on random.org."""

    def __init__(self, client: RandomOrgClient | None = None) -> None:
        self._client = client or RandomOrgClient()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "RandomService":
        return cls(
            RandomOrgClient(
                str(config.get("RANDOM_ORG_URL", "https://www.random.org/integers/")),
                timeout_seconds=float(config.get("HTTP_TIMEOUT_SECONDS", 15.0)),
            )
        )

    def unique_numbers(self, count: int, minimum: int, maximum: int) -> list[int]:
        """Draw ``count`` distinct integers, sorted.

        Over-requests to absorb duplicates and tops up once if still short.
        """

        pool = maximum - minimum + 1
        if count > pool:
            raise ValidationError(message=f"Cannot draw {count} unique numbers from [{minimum}, {maximum}]")

        first = self._client.fetch_integers(min(count * 3, pool), minimum, maximum)
        unique = list(dict.fromkeys(first))

        if len(unique) < count:
            needed = count - len(unique)
            extra = self._client.fetch_integers(needed * 2, minimum, maximum)
            unique = list(dict.fromkeys(unique + extra))
            if len(unique) < count:
                raise RandomProviderError("Not enough unique random numbers; please retry")

        return sorted(unique[:count])

    def lottery_numbers(self, lottery_type: LotteryType) -> GeneratedNumbers:
        numbers = self.unique_numbers(lottery_type.main_count, lottery_type.main_min, lottery_type.main_max)
        special: list[int] = []
        if lottery_type.extra_count == 1:
            special = self._client.fetch_integers(1, lottery_type.extra_min, lottery_type.extra_max)
        elif lottery_type.extra_count > 1:
            special = self.unique_numbers(lottery_type.extra_count, lottery_type.extra_min, lottery_type.extra_max)

        return GeneratedNumbers(
            lottery_code=lottery_type.code,
            numbers=numbers,
            special_numbers=special,
            generated_at=datetime.now().isoformat(timespec="seconds"),
        )

    def daletu(self) -> GeneratedNumbers:
        return self.lottery_numbers(LOTTERY_TYPES["dlt"])

    def shuangseqiu(self) -> GeneratedNumbers:
        return self.lottery_numbers(LOTTERY_TYPES["ssq"])

    def coin(self) -> CoinFlip:
        raw = self._client.fetch_integers(1, 0, 1)[0]
        return CoinFlip(result="heads" if raw == 0 else "tails", raw=raw)

    def dice(self, count: int = 1) -> DiceRoll:
        if not 1 <= count <= 6:
            raise ValidationError(message="Dice count must be within 1..6", details={"count": ["Must be 1..6"]})
        return DiceRoll(values=self._client.fetch_integers(count, 1, 6))

    def integer(self, upper: int) -> int:
        """One integer in ``[0, upper]``."""

        if not 5 <= upper <= MAX_RANDOM_VALUE:
            raise ValidationError(
                message=f"Range must be within 5..{MAX_RANDOM_VALUE}",
                details={"max": [f"Must be 5..{MAX_RANDOM_VALUE}"]},
            )
        return self._client.fetch_integers(1, 0, upper)[0]
