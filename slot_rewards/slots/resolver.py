"""Slot resolution against the beacon chain.

Maps a slot to the execution block it wraps and checks requested slots
against the current head. The head is looked up on every call; nothing is
cached between requests.
"""

from typing import TYPE_CHECKING

from slot_rewards.errors import InvalidRequest
from slot_rewards.helpers.constants import HEAD_SLOT_ID, SLOTS_PER_EPOCH
from slot_rewards.helpers.logging import get_logger


if TYPE_CHECKING:
    import httpx

    from slot_rewards.beacon.client import BeaconClient
    from slot_rewards.beacon.models import BeaconBlockEnvelope


logger = get_logger(__name__)


def epoch_for_slot(slot: int) -> int:
    """Epoch containing a slot.

    Example:
        >>> epoch_for_slot(100)
        3
    """
    return slot // SLOTS_PER_EPOCH


def validate_slot_bound(requested: int, current: int) -> None:
    """Reject slots beyond the current head.

    Args:
        requested: Slot asked for by the caller
        current: Current head slot

    Raises:
        InvalidRequest: If requested is greater than current
    """
    if requested > current:
        msg = f"slot {requested} is beyond the current head slot {current}"
        raise InvalidRequest(msg)


class SlotResolver:
    """Resolves slots to beacon block envelopes and execution blocks."""

    def __init__(self, beacon: "BeaconClient", client: "httpx.AsyncClient") -> None:
        self.beacon = beacon
        self.client = client

    async def fetch_envelope(self, slot_id: int | str) -> "BeaconBlockEnvelope":
        """Fetch the beacon block envelope for a slot or "head"."""
        return await self.beacon.get_block(self.client, slot_id)

    async def current_slot(self) -> int:
        """Slot of the current head block."""
        envelope = await self.fetch_envelope(HEAD_SLOT_ID)
        return envelope.slot

    async def checked_slot(self, slot_id: int | str) -> int:
        """Resolve a slot identifier to a slot number no later than the head.

        "head" resolves to the current head slot itself.

        Raises:
            InvalidRequest: If the slot is beyond the current head
        """
        current = await self.current_slot()
        if slot_id == HEAD_SLOT_ID:
            return current
        slot = int(slot_id)
        validate_slot_bound(slot, current)
        return slot

    async def execution_block_number(self, slot_id: int | str) -> int:
        """Execution block number wrapped by the beacon block at a slot.

        The head bound is checked first, so a future slot never reaches the
        execution layer.

        Raises:
            InvalidRequest: If the slot is beyond the current head
            NotFound: If the slot has no beacon block (missed slot)
        """
        slot = await self.checked_slot(slot_id)
        envelope = await self.fetch_envelope(slot)
        block_number = envelope.execution_block_number
        logger.debug("Slot %d wraps execution block %d", slot, block_number)
        return block_number


__all__ = [
    "SlotResolver",
    "epoch_for_slot",
    "validate_slot_bound",
]
