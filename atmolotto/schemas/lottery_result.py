"""Schemas for draw history, latest-draw and lottery-format endpoints."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from atmolotto.lottery_types import LOTTERY_TYPES, LotteryType, default_draw_time
from atmolotto.models.lottery_result import LotteryResult
from atmolotto.services.prize_tiers import PRIZE_TABLES


class HistoryQuerySchema(Schema):
    code = fields.String(required=True, validate=validate.OneOf(list(LOTTERY_TYPES)))
    limit = fields.Integer(required=False, load_default=10, validate=validate.Range(min=1))
    offset = fields.Integer(required=False, load_default=0, validate=validate.Range(min=0))
    issue = fields.String(required=False, load_default=None)
    start_date = fields.Date(required=False, load_default=None)
    end_date = fields.Date(required=False, load_default=None)

    @validates_schema
    def _validate_range(self, data, **kwargs):  # type: ignore[no-untyped-def]
        start, end = data.get("start_date"), data.get("end_date")
        if start and end and start > end:
            raise ValidationError({"start_date": ["start_date must be <= end_date"]})


class LatestQuerySchema(Schema):
    code = fields.String(required=True, validate=validate.OneOf(list(LOTTERY_TYPES)))


class LotteryResultSchema(Schema):
    issue = fields.String()
    draw_date = fields.Date(data_key="drawDate")
    draw_date_time = fields.Method("_draw_date_time", data_key="drawDateTime")
    main = fields.List(fields.Integer(), data_key="mainNumbers")
    extra = fields.List(fields.Integer(), data_key="extraNumbers")
    prize_pool = fields.Integer(data_key="prizePool", allow_none=True)
    total_sales = fields.Integer(data_key="totalSales", allow_none=True)

    def _draw_date_time(self, obj: LotteryResult) -> str:
        if obj.draw_date_time:
            return obj.draw_date_time
        return f"{obj.draw_date.isoformat()} {default_draw_time(obj.lottery_code)}"


class LotteryTypeSchema(Schema):
    code = fields.String()
    name = fields.String()
    category = fields.String()
    main_count = fields.Integer(data_key="mainCount")
    main_min = fields.Integer(data_key="mainMin")
    main_max = fields.Integer(data_key="mainMax")
    extra_count = fields.Integer(data_key="extraCount")
    extra_min = fields.Integer(data_key="extraMin")
    extra_max = fields.Integer(data_key="extraMax")
    draw_time = fields.String(data_key="drawTime")
    draw_days = fields.List(fields.Integer(), data_key="drawDays")
    checkable = fields.Method("_checkable")

    def _checkable(self, obj: LotteryType) -> bool:
        return obj.code in PRIZE_TABLES
