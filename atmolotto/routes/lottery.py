"""Lottery formats, draw history, ticket-check and simulation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from atmolotto.db import get_session
from atmolotto.errors import ValidationError
from atmolotto.lottery_types import LOTTERY_TYPES
from atmolotto.repositories.lottery_result_repository import LotteryResultRepository
from atmolotto.routes.random import get_random_service
from atmolotto.schemas.lottery_result import (
    HistoryQuerySchema,
    LatestQuerySchema,
    LotteryResultSchema,
    LotteryTypeSchema,
)
from atmolotto.schemas.ticket import (
    BatchCheckRequestSchema,
    BatchCheckResponseSchema,
    CheckRequestSchema,
    RandomSimulationResponseSchema,
    SimulateRequestSchema,
    TicketCheckSchema,
)
from atmolotto.services.check_service import CheckService
from atmolotto.services.prize_tiers import Ticket
from atmolotto.services.simulation_service import SimulationService
from atmolotto.utils.responses import ok


lottery_bp = Blueprint("lottery", __name__)

_repo = LotteryResultRepository()
_check_service = CheckService(_repo)
_simulation_service = SimulationService(_repo)

_history_query = HistoryQuerySchema()
_latest_query = LatestQuerySchema()
_result_schema = LotteryResultSchema()
_results_schema = LotteryResultSchema(many=True)
_types_schema = LotteryTypeSchema(many=True)
_check_request = CheckRequestSchema()
_check_response = TicketCheckSchema()
_batch_request = BatchCheckRequestSchema()
_batch_response = BatchCheckResponseSchema()
_simulate_request = SimulateRequestSchema()
_simulate_response = RandomSimulationResponseSchema()

MAX_HISTORY_LIMIT = 100


@lottery_bp.get("/types")
def list_lottery_types():
    return ok(_types_schema.dump(list(LOTTERY_TYPES.values())))


@lottery_bp.get("/latest")
def latest_draw():
    args = _latest_query.load(request.args.to_dict())
    result = _repo.latest(get_session(), args["code"])
    if result is None:
        return ok(None, message="No draw data yet")
    return ok(_result_schema.dump(result))


@lottery_bp.get("/history")
def draw_history():
    args = _history_query.load(request.args.to_dict())
    session = get_session()
    code = args["code"]
    limit = min(int(args["limit"]), MAX_HISTORY_LIMIT)
    offset = int(args["offset"])

    if args.get("issue"):
        found = _repo.get_by_issue(session, code, str(args["issue"]))
        results = [found] if found is not None else []
        total = len(results)
    else:
        results = _repo.list_results(
            session,
            code,
            limit=limit,
            offset=offset,
            start_date=args.get("start_date"),
            end_date=args.get("end_date"),
        )
        total = _repo.count(session, code, start_date=args.get("start_date"), end_date=args.get("end_date"))

    return ok(
        _results_schema.dump(results),
        pagination={
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": offset + len(results) < total,
        },
    )


@lottery_bp.post("/check")
def check_ticket():
    payload = request.get_json(silent=True) or {}
    data = _check_request.load(payload)

    result = _check_service.check(
        get_session(),
        data["code"],
        Ticket.of(data["front_numbers"], data["back_numbers"]),
        corpus_limit=int(current_app.config["MAX_CORPUS_DRAWS"]),
    )
    return ok(_check_response.dump(result))


@lottery_bp.post("/batch-check")
def batch_check():
    payload = request.get_json(silent=True) or {}
    data = _batch_request.load(payload)

    max_tickets = int(current_app.config["MAX_BATCH_TICKETS"])
    if len(data["tickets"]) > max_tickets:
        raise ValidationError(
            message=f"At most {max_tickets} tickets per batch",
            details={"tickets": [f"Must be <= {max_tickets}"]},
        )

    tickets = [Ticket.of(t["front"], t["back"]) for t in data["tickets"]]
    result = _simulation_service.batch_check(
        get_session(),
        data["code"],
        tickets,
        unit_price=int(current_app.config["TICKET_PRICE"]),
        corpus_limit=int(current_app.config["MAX_CORPUS_DRAWS"]),
    )
    return ok(_batch_response.dump(result))


@lottery_bp.post("/simulate")
def simulate_random_tickets():
    data = _simulate_request.load(request.get_json(silent=True) or {})

    max_tickets = int(current_app.config["MAX_BATCH_TICKETS"])
    if int(data["count"]) > max_tickets:
        raise ValidationError(
            message=f"At most {max_tickets} tickets per simulation",
            details={"count": [f"Must be <= {max_tickets}"]},
        )

    result = _simulation_service.simulate_random(
        get_session(),
        data["code"],
        int(data["count"]),
        get_random_service(),
        unit_price=int(current_app.config["TICKET_PRICE"]),
        corpus_limit=int(current_app.config["MAX_CORPUS_DRAWS"]),
    )
    return ok(_simulate_response.dump(result))
