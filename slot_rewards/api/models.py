"""Response bodies of the HTTP API."""

from pydantic import BaseModel, Field

from slot_rewards.rewards.models import RewardStatus


class BlockRewardResponse(BaseModel):
    """Body of GET /blockreward/{slot}."""

    status: RewardStatus = Field(..., description="mev or vanilla")
    reward: str = Field(..., description="Reward as a fixed-point decimal string")


class SyncDutiesResponse(BaseModel):
    """Body of GET /syncduties/{slot}."""

    validators: list[str] = Field(..., description="Validator public keys")


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str


class HealthResponse(BaseModel):
    ok: bool = True


__all__ = [
    "BlockRewardResponse",
    "ErrorResponse",
    "HealthResponse",
    "SyncDutiesResponse",
]
