"""Pydantic models for beacon node API responses."""

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class ExecutionPayloadHeader(BaseModel):
    """Subset of the execution payload wrapped by a beacon block."""

    block_number: NonNegativeInt = Field(
        ..., description="Execution block number (decimal string upstream)"
    )
    block_hash: str | None = None
    fee_recipient: str | None = None

    model_config = ConfigDict(extra="ignore")


class BeaconBlockBody(BaseModel):
    execution_payload: ExecutionPayloadHeader

    model_config = ConfigDict(extra="ignore")


class BeaconBlockMessage(BaseModel):
    slot: NonNegativeInt = Field(..., description="Slot (decimal string upstream)")
    proposer_index: str | None = None
    body: BeaconBlockBody

    model_config = ConfigDict(extra="ignore")


class SignedBeaconBlock(BaseModel):
    message: BeaconBlockMessage

    model_config = ConfigDict(extra="ignore")


class BeaconBlockEnvelope(BaseModel):
    """Response of GET /eth/v2/beacon/blocks/{block_id}."""

    version: str | None = None
    execution_optimistic: bool | None = None
    finalized: bool | None = None
    data: SignedBeaconBlock

    model_config = ConfigDict(extra="ignore")

    @property
    def slot(self) -> int:
        """Slot of the block."""
        return self.data.message.slot

    @property
    def execution_block_number(self) -> int:
        """Execution block number wrapped by the beacon block."""
        return self.data.message.body.execution_payload.block_number


class SyncCommittee(BaseModel):
    """Validator indices of the sync committee for a state."""

    validators: list[str] = Field(..., description="Validator indices as strings")
    validator_aggregates: list[list[str]] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class SyncCommitteeResponse(BaseModel):
    """Response of GET /eth/v1/beacon/states/{state_id}/sync_committees."""

    execution_optimistic: bool | None = None
    finalized: bool | None = None
    data: SyncCommittee

    model_config = ConfigDict(extra="ignore")


class SyncDuty(BaseModel):
    """One sync committee duty assignment."""

    pubkey: str
    validator_index: str | None = None
    validator_sync_committee_indices: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class SyncDutiesResponse(BaseModel):
    """Response of POST /eth/v1/validator/duties/sync/{epoch}."""

    execution_optimistic: bool | None = None
    data: list[SyncDuty]

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "BeaconBlockEnvelope",
    "ExecutionPayloadHeader",
    "SyncCommittee",
    "SyncCommitteeResponse",
    "SyncDutiesResponse",
    "SyncDuty",
]
