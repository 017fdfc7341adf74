"""ORM models."""

from atmolotto.models.base import Base
from atmolotto.models.lottery_result import LotteryResult
from atmolotto.models.sync_status import SyncStatus

__all__ = ["Base", "LotteryResult", "SyncStatus"]
