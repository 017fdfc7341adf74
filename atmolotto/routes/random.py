"""Random-number routes backed by random.org."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from atmolotto.schemas.random import (
    CoinFlipSchema,
    DiceQuerySchema,
    DiceRollSchema,
    GeneratedNumbersSchema,
    IntegerQuerySchema,
)
from atmolotto.services.random_service import RandomService
from atmolotto.utils.responses import ok


random_bp = Blueprint("random", __name__)

_numbers_schema = GeneratedNumbersSchema()
_coin_schema = CoinFlipSchema()
_dice_schema = DiceRollSchema()
_dice_query = DiceQuerySchema()
_integer_query = IntegerQuerySchema()


def get_random_service() -> RandomService:
    service = current_app.extensions.get("random_service")
    if service is None:
        service = RandomService.from_config(current_app.config)
        current_app.extensions["random_service"] = service
    return service


@random_bp.get("/daletu")
def daletu():
    return ok(_numbers_schema.dump(get_random_service().daletu()))


@random_bp.get("/shuangseqiu")
def shuangseqiu():
    return ok(_numbers_schema.dump(get_random_service().shuangseqiu()))


@random_bp.get("/coin")
def coin():
    return ok(_coin_schema.dump(get_random_service().coin()))


@random_bp.get("/dice")
def dice():
    args = _dice_query.load(request.args.to_dict())
    return ok(_dice_schema.dump(get_random_service().dice(int(args["count"]))))


@random_bp.get("/integer")
def integer():
    args = _integer_query.load(request.args.to_dict())
    upper = int(args["max"])
    return ok({"value": get_random_service().integer(upper), "min": 0, "max": upper})
