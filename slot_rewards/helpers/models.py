"""Common Pydantic models for execution-layer data used across the application."""

from decimal import Decimal, localcontext
from enum import StrEnum

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from slot_rewards.helpers.constants import DECIMAL_PRECISION, WEI_PER_ETH, WEI_PER_GWEI
from slot_rewards.helpers.parsers import parse_hex_bytes, parse_hex_int


def _hex_quantity(value: Any) -> Any:
    # JSON-RPC quantities are hex strings; ints pass through unchanged
    if isinstance(value, str):
        return parse_hex_int(value)
    return value


HexInt = Annotated[int, BeforeValidator(_hex_quantity)]
"""Integer decoded from a JSON-RPC hex quantity"""


def _hex_data(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return parse_hex_bytes(value)
    return value


HexBytes = Annotated[bytes, BeforeValidator(_hex_data)]
"""Bytes decoded from a JSON-RPC hex data string"""


class RewardUnit(StrEnum):
    """Output unit for rendered reward amounts."""

    WEI = "wei"
    GWEI = "gwei"
    ETH = "eth"

    @property
    def wei_per_unit(self) -> int:
        """Number of wei in one unit."""
        return {
            RewardUnit.WEI: 1,
            RewardUnit.GWEI: WEI_PER_GWEI,
            RewardUnit.ETH: WEI_PER_ETH,
        }[self]

    def from_wei(self, wei: int) -> Decimal:
        """Convert an integer wei amount to this unit, exactly.

        Args:
            wei: Amount in wei

        Returns:
            Decimal: Amount in this unit

        Example:
            >>> RewardUnit.GWEI.from_wei(855000)
            Decimal('0.000855')
        """
        with localcontext(prec=DECIMAL_PRECISION):
            return Decimal(wei) / Decimal(self.wei_per_unit)


class Transaction(BaseModel):
    """Transaction object from eth_getBlockByNumber with full transactions."""

    hash: str = Field(..., description="Transaction hash")
    value: HexInt = Field(..., description="Transferred value in wei")
    to: str | None = Field(default=None, description="Recipient address")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExecutionBlock(BaseModel):
    """Execution-layer block returned by eth_getBlockByNumber."""

    number: HexInt = Field(..., description="Block number")
    hash: str = Field(..., description="Block hash")
    extra_data: HexBytes = Field(
        default=b"", description="Extra data field", alias="extraData"
    )
    gas_used: HexInt = Field(..., description="Total gas used", alias="gasUsed")
    base_fee_per_gas: HexInt = Field(
        default=0,
        description="Base fee per gas, zero before London",
        alias="baseFeePerGas",
    )
    transactions: list[Transaction] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def burned_fees(self) -> int:
        """Base fee burned by this block in wei."""
        return self.gas_used * self.base_fee_per_gas


class Receipt(BaseModel):
    """Transaction receipt returned by eth_getBlockReceipts."""

    transaction_hash: str | None = Field(
        default=None, description="Transaction hash", alias="transactionHash"
    )
    effective_gas_price: HexInt = Field(
        ..., description="Price paid per gas in wei", alias="effectiveGasPrice"
    )
    gas_used: HexInt = Field(..., description="Gas used by the transaction", alias="gasUsed")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def fee(self) -> int:
        """Total fee paid by the sender in wei."""
        return self.effective_gas_price * self.gas_used


__all__ = [
    "ExecutionBlock",
    "HexBytes",
    "HexInt",
    "Receipt",
    "RewardUnit",
    "Transaction",
]
