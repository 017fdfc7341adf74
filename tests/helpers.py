"""Fakes shared by the test modules."""

from __future__ import annotations

from typing import Any

import requests

from atmolotto.db import create_app_engine, create_session_factory
from atmolotto.models import Base


class DummyResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: str | None = None, json_error: bool = False):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else ""
        self.reason = "OK" if status_code < 400 else "Error"
        self._json_error = json_error

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}", response=self)  # type: ignore[arg-type]

    def json(self) -> Any:
        if self._json_error:
            raise ValueError("not json")
        return self._payload


class DummySession:
    """Records calls and replays queued responses (or raises queued exceptions)."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def _next(self, **call: Any) -> Any:
        self.calls.append(call)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        return self._next(method=method, url=url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> Any:
        return self._next(method="GET", url=url, **kwargs)


def memory_session():
    engine = create_app_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    return create_session_factory(engine)()


def random_org_answer(*values: int) -> DummyResponse:
    """A random.org ``format=plain`` body."""

    return DummyResponse(text="\n".join(str(v) for v in values) + "\n")


def dlt_ticket_answers(front, back) -> list[DummyResponse]:
    """random.org answers that make the generator produce exactly ``front`` + ``back``.

    Five distinct front numbers are requested as 15 values, two back numbers as 6.
    """

    return [
        random_org_answer(*front, *[front[0]] * (15 - len(front))),
        random_org_answer(*back, *[back[0]] * (6 - len(back))),
    ]
