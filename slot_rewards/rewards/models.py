"""Models for block reward classification."""

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from slot_rewards.helpers.models import RewardUnit
from slot_rewards.helpers.parsers import format_amount


class RewardStatus(StrEnum):
    """How the proposer was paid."""

    MEV = "mev"
    VANILLA = "vanilla"


class RewardResult(BaseModel):
    """Classified proposer reward for one execution block."""

    status: RewardStatus
    amount: Decimal
    unit: RewardUnit
    block_number: int

    model_config = ConfigDict(frozen=True)

    @property
    def reward(self) -> str:
        """Amount as a fixed-point string."""
        return format_amount(self.amount)


__all__ = ["RewardResult", "RewardStatus"]
