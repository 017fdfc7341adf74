"""Schemas for the ticket check / batch-check API."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from atmolotto.lottery_types import LOTTERY_TYPES, LotteryType
from atmolotto.schemas.random import GeneratedNumbersSchema
from atmolotto.services.prize_tiers import PRIZE_TABLES


def ticket_errors(lottery_type: LotteryType, front: list[int], back: list[int]) -> list[str]:
    """Human-readable problems with one ticket, empty when it is valid."""

    errors: list[str] = []
    groups = (
        ("front", front, lottery_type.main_count, lottery_type.main_min, lottery_type.main_max),
        ("back", back, lottery_type.extra_count, lottery_type.extra_min, lottery_type.extra_max),
    )
    for label, numbers, count, lo, hi in groups:
        if len(numbers) != count:
            errors.append(f"{label} numbers must be exactly {count} numbers")
            continue
        if len(set(numbers)) != len(numbers):
            errors.append(f"{label} numbers must be unique")
        if any(n < lo or n > hi for n in numbers):
            errors.append(f"{label} numbers must be within {lo}..{hi}")
    return errors


class TicketSchema(Schema):
    front = fields.List(fields.Integer(), required=True)
    back = fields.List(fields.Integer(), required=True)


class CheckRequestSchema(Schema):
    code = fields.String(required=False, load_default="dlt", validate=validate.OneOf(list(PRIZE_TABLES)))
    front_numbers = fields.List(fields.Integer(), required=True)
    back_numbers = fields.List(fields.Integer(), required=True)

    @validates_schema
    def _validate_ticket(self, data, **kwargs):  # type: ignore[no-untyped-def]
        lottery_type = LOTTERY_TYPES.get(str(data.get("code") or "dlt"))
        if lottery_type is None:
            return
        errors = ticket_errors(lottery_type, data.get("front_numbers") or [], data.get("back_numbers") or [])
        if errors:
            raise ValidationError({"ticket": errors})


class BatchCheckRequestSchema(Schema):
    code = fields.String(required=False, load_default="dlt", validate=validate.OneOf(list(PRIZE_TABLES)))
    tickets = fields.List(
        fields.Nested(TicketSchema),
        required=True,
        validate=validate.Length(min=1, error="Provide at least one ticket"),
    )

    @validates_schema
    def _validate_tickets(self, data, **kwargs):  # type: ignore[no-untyped-def]
        lottery_type = LOTTERY_TYPES.get(str(data.get("code") or "dlt"))
        if lottery_type is None:
            return
        bad: dict[str, list[str]] = {}
        for i, ticket in enumerate(data.get("tickets") or []):
            errors = ticket_errors(lottery_type, ticket.get("front") or [], ticket.get("back") or [])
            if errors:
                bad[f"ticket {i + 1}"] = errors
        if bad:
            raise ValidationError({"tickets": bad})


class WinningRecordSchema(Schema):
    issue = fields.String()
    draw_date = fields.String(data_key="drawDate")
    winning_front = fields.List(fields.Integer(), data_key="winningFront")
    winning_back = fields.List(fields.Integer(), data_key="winningBack")
    front_matched = fields.List(fields.Integer(), data_key="frontMatched")
    back_matched = fields.List(fields.Integer(), data_key="backMatched")
    level = fields.Integer()
    prize_name = fields.String(data_key="prizeName")


class TicketCheckSchema(Schema):
    lottery_code = fields.String(data_key="code")
    evaluable = fields.Boolean()
    has_winning = fields.Boolean(data_key="hasWinning")
    total_checked = fields.Integer(data_key="totalChecked")
    highest_level = fields.Integer(data_key="highestLevel")
    highest_prize_name = fields.String(data_key="highestPrizeName", allow_none=True)
    total_winnings_at_highest = fields.Integer(data_key="totalWinningsAtHighest")
    winnings = fields.List(fields.Nested(WinningRecordSchema))
    stats = fields.Dict(keys=fields.String(), values=fields.Integer())
    message = fields.String(allow_none=True)


class LevelStatSchema(Schema):
    count = fields.Integer()
    name = fields.String()
    amount = fields.Integer()


class TicketOutcomeSchema(Schema):
    ticket_index = fields.Integer(data_key="ticketIndex")
    highest_level = fields.Integer(data_key="highestLevel")
    level_counts = fields.Dict(keys=fields.Integer(), values=fields.Integer(), data_key="levelCounts")


class BatchSummarySchema(Schema):
    total_tickets = fields.Integer(data_key="totalTickets")
    total_issues_checked = fields.Integer(data_key="totalIssuesChecked")
    winning_tickets = fields.Integer(data_key="winningTickets")
    level_stats = fields.Dict(keys=fields.Integer(), values=fields.Nested(LevelStatSchema), data_key="levelStats")
    total_prize = fields.Integer(data_key="totalPrize")
    total_cost = fields.Integer(data_key="totalCost")
    return_rate = fields.Float(data_key="returnRate")
    win_rate = fields.Float(data_key="winRate")


class BatchCheckResponseSchema(Schema):
    lottery_code = fields.String(data_key="code")
    evaluable = fields.Boolean()
    message = fields.String(allow_none=True)
    results = fields.List(fields.Nested(TicketOutcomeSchema), attribute="simulation.results")
    summary = fields.Nested(BatchSummarySchema, attribute="simulation.summary")


class SimulateRequestSchema(Schema):
    code = fields.String(required=False, load_default="dlt", validate=validate.OneOf(list(PRIZE_TABLES)))
    count = fields.Integer(required=False, load_default=100, validate=validate.Range(min=1))


class RandomSimulationResponseSchema(BatchCheckResponseSchema):
    generated = fields.List(fields.Nested(GeneratedNumbersSchema), data_key="generatedNumbers")
