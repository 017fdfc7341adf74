"""Draw synchronisation routes (cron / manual backfill)."""

from __future__ import annotations

import hmac

from flask import Blueprint, current_app, request

from atmolotto.db import get_session
from atmolotto.errors import UnauthorizedError
from atmolotto.schemas.sync import SyncOutcomeSchema, SyncPageRequestSchema, SyncStatusSchema, SyncStatusViewSchema
from atmolotto.services.sync_service import SyncService
from atmolotto.utils.responses import ok


sync_bp = Blueprint("sync", __name__)

_page_request = SyncPageRequestSchema()
_outcome_schema = SyncOutcomeSchema()
_status_schema = SyncStatusSchema()
_status_view_schema = SyncStatusViewSchema()


def _service() -> SyncService:
    service = current_app.extensions.get("sync_service")
    if service is None:
        service = SyncService.from_config(current_app.config)
        current_app.extensions["sync_service"] = service
    return service


@sync_bp.before_request
def _require_cron_secret() -> None:
    secret = str(current_app.config.get("CRON_SECRET") or "")
    if not secret:
        return
    supplied = request.headers.get("Authorization", "")
    if not hmac.compare_digest(supplied, f"Bearer {secret}"):
        raise UnauthorizedError()


@sync_bp.post("")
def sync_enabled():
    codes = list(current_app.config["ENABLED_LOTTERY_CODES"])
    outcomes = _service().sync_many(get_session(), codes)
    return ok({code: _outcome_schema.dump(outcome) for code, outcome in outcomes.items()})


@sync_bp.post("/<code>")
def sync_code(code: str):
    data = _page_request.load(request.get_json(silent=True) or {})
    session = get_session()
    if data.get("page") is None:
        outcome = _service().sync(session, code)
    else:
        outcome = _service().sync_page(session, code, int(data["page"]), int(data["limit"]))
    return ok(_outcome_schema.dump(outcome))


@sync_bp.get("/<code>/status")
def sync_status(code: str):
    return ok(_status_view_schema.dump(_service().status(get_session(), code)))


@sync_bp.post("/<code>/reset")
def reset_sync(code: str):
    return ok(_status_schema.dump(_service().reset(get_session(), code)))
