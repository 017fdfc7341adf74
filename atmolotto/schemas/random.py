"""Schemas for the random-number API."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from atmolotto.services.random_service import MAX_RANDOM_VALUE


class DiceQuerySchema(Schema):
    count = fields.Integer(required=False, load_default=1, validate=validate.Range(min=1, max=6))


class IntegerQuerySchema(Schema):
    max = fields.Integer(required=False, load_default=100, validate=validate.Range(min=5, max=MAX_RANDOM_VALUE))


class GeneratedNumbersSchema(Schema):
    lottery_code = fields.String(data_key="type")
    numbers = fields.List(fields.Integer())
    special_numbers = fields.List(fields.Integer(), data_key="specialNumbers")
    generated_at = fields.String(data_key="timestamp")


class CoinFlipSchema(Schema):
    result = fields.String()
    raw = fields.Integer()


class DiceRollSchema(Schema):
    values = fields.List(fields.Integer())
    total = fields.Integer()
