"""Proposer reward classification.

A block whose extra_data carries the builder marker is treated as an MEV
block: the builder pays the proposer with the block's last transaction, so
that transfer's value is the reward. Any other block is vanilla: the proposer
keeps the priority fees, i.e. everything senders paid minus the burned base
fee.
"""

from typing import TYPE_CHECKING

from slot_rewards.errors import DataIntegrityAnomaly, UpstreamUnavailable
from slot_rewards.helpers.constants import BUILDER_EXTRA_DATA_MARKER
from slot_rewards.helpers.logging import get_logger
from slot_rewards.helpers.models import RewardUnit
from slot_rewards.rewards.models import RewardResult, RewardStatus


if TYPE_CHECKING:
    import httpx

    from slot_rewards.helpers.models import ExecutionBlock, Receipt
    from slot_rewards.helpers.rpc import RPCClient
    from slot_rewards.slots.resolver import SlotResolver


logger = get_logger(__name__)


def is_builder_block(extra_data: bytes) -> bool:
    """Whether a block's extra_data marks it as built by an external builder.

    This is a tagging convention of builder clients, not a protocol
    guarantee.

    Example:
        >>> is_builder_block(b"beaverbuild.org")
        True
        >>> is_builder_block(b"geth go1.21")
        False
    """
    return BUILDER_EXTRA_DATA_MARKER in extra_data


def mev_reward_wei(block: "ExecutionBlock") -> int:
    """Value of the block's last transaction, taken as the builder payment.

    Raises:
        DataIntegrityAnomaly: If the block has no transactions
    """
    if not block.transactions:
        msg = f"builder block {block.number} has no transactions to carry a payment"
        raise DataIntegrityAnomaly(msg)
    return block.transactions[-1].value


def vanilla_reward_wei(block: "ExecutionBlock", receipts: list["Receipt"]) -> int:
    """Fees paid by senders minus the base fee burned by the block.

    Raises:
        UpstreamUnavailable: If receipts do not cover every transaction
        DataIntegrityAnomaly: If the burned base fee exceeds the fees paid
    """
    if len(receipts) != len(block.transactions):
        msg = (
            f"block {block.number}: got {len(receipts)} receipts for "
            f"{len(block.transactions)} transactions"
        )
        raise UpstreamUnavailable(msg)

    fees = sum(receipt.fee for receipt in receipts)
    reward = fees - block.burned_fees
    if reward < 0:
        msg = (
            f"block {block.number}: burned base fee {block.burned_fees} "
            f"exceeds fees paid {fees}"
        )
        raise DataIntegrityAnomaly(msg)
    return reward


class RewardClassifier:
    """Classifies and computes the proposer reward of execution blocks."""

    def __init__(
        self,
        rpc: "RPCClient",
        client: "httpx.AsyncClient",
        *,
        mev_unit: RewardUnit = RewardUnit.ETH,
        vanilla_unit: RewardUnit = RewardUnit.GWEI,
    ) -> None:
        """Initialize the classifier.

        Args:
            rpc: Execution-layer RPC client
            client: HTTP client instance
            mev_unit: Unit MEV rewards are reported in
            vanilla_unit: Unit vanilla rewards are reported in
        """
        self.rpc = rpc
        self.client = client
        self.mev_unit = mev_unit
        self.vanilla_unit = vanilla_unit

    async def classify(self, block_number: int) -> RewardResult:
        """Classify a block and compute its proposer reward.

        Receipts are only fetched for vanilla blocks.

        Args:
            block_number: Execution block number

        Returns:
            RewardResult in the unit configured for its status

        Raises:
            NotFound: If the block does not exist
            UpstreamUnavailable: If the block or its receipts cannot be fetched
            DecodeError: If the upstream data has an unexpected shape
            DataIntegrityAnomaly: If the data yields no valid reward
        """
        block = await self.rpc.get_block_by_number(self.client, block_number)

        if is_builder_block(block.extra_data):
            status = RewardStatus.MEV
            unit = self.mev_unit
            wei = mev_reward_wei(block)
        else:
            status = RewardStatus.VANILLA
            unit = self.vanilla_unit
            receipts = await self.rpc.get_block_receipts(self.client, block.hash)
            wei = vanilla_reward_wei(block, receipts)

        result = RewardResult(
            status=status,
            amount=unit.from_wei(wei),
            unit=unit,
            block_number=block.number,
        )
        logger.info(
            "Block %d classified as %s, reward %s %s",
            block.number,
            status,
            result.reward,
            unit,
        )
        return result

    async def reward_for_slot(
        self, slots: "SlotResolver", slot_id: int | str
    ) -> RewardResult:
        """Resolve a slot to its execution block and classify it.

        Raises:
            InvalidRequest: If the slot is beyond the current head
        """
        block_number = await slots.execution_block_number(slot_id)
        return await self.classify(block_number)


__all__ = [
    "RewardClassifier",
    "is_builder_block",
    "mev_reward_wei",
    "vanilla_reward_wei",
]
