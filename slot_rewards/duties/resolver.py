"""Sync committee duty resolution."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from slot_rewards.helpers.logging import get_logger
from slot_rewards.slots.resolver import epoch_for_slot


if TYPE_CHECKING:
    import httpx

    from slot_rewards.beacon.client import BeaconClient
    from slot_rewards.slots.resolver import SlotResolver


logger = get_logger(__name__)


class SyncDutyResult(BaseModel):
    """Public keys on sync committee duty for an epoch, in upstream order."""

    slot: int
    epoch: int
    validators: list[str]

    model_config = ConfigDict(frozen=True)


class SyncDutyResolver:
    """Resolves the validators on sync committee duty around a slot."""

    def __init__(
        self,
        beacon: "BeaconClient",
        client: "httpx.AsyncClient",
        slots: "SlotResolver",
    ) -> None:
        self.beacon = beacon
        self.client = client
        self.slots = slots

    async def resolve(self, slot_id: int | str) -> SyncDutyResult:
        """Public keys of the sync committee members for the slot's epoch.

        The committee is read from the state at the slot, then its indices
        are submitted to the duty endpoint for the epoch containing the slot.

        Args:
            slot_id: Slot number or "head"

        Returns:
            SyncDutyResult with public keys in duty response order

        Raises:
            InvalidRequest: If the slot is beyond the current head
            NotFound: If the state or duties are unknown upstream
            UpstreamUnavailable: If any upstream call fails
            DecodeError: If any upstream body has an unexpected shape
        """
        slot = await self.slots.checked_slot(slot_id)

        committee = await self.beacon.get_sync_committee(self.client, slot)
        epoch = epoch_for_slot(slot)
        duties = await self.beacon.get_sync_duties(
            self.client, epoch, committee.data.validators
        )

        pubkeys = [duty.pubkey for duty in duties.data]
        logger.info(
            "Slot %d (epoch %d): %d sync committee duties", slot, epoch, len(pubkeys)
        )
        return SyncDutyResult(slot=slot, epoch=epoch, validators=pubkeys)


__all__ = ["SyncDutyResolver", "SyncDutyResult"]
