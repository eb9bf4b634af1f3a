"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default="2.0", description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(
        default_factory=list, description="Method parameters"
    )
    id: int | str = Field(default=1, description="Request ID")


class JsonRpcError(BaseModel):
    """Error object of a failed JSON-RPC call."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response envelope."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: Any = None
    error: JsonRpcError | None = None

    model_config = ConfigDict(extra="ignore")


class EthGetBlockByNumberRequest(JsonRpcRequest):
    """JSON-RPC request for eth_getBlockByNumber."""

    method: str = Field(default="eth_getBlockByNumber", frozen=True)

    @classmethod
    def for_block(
        cls, block_number: int, *, full_transactions: bool = True
    ) -> Self:
        """Build the request for a block number."""
        return cls(params=[hex(block_number), full_transactions])


class EthGetBlockReceiptsRequest(JsonRpcRequest):
    """JSON-RPC request for eth_getBlockReceipts."""

    method: str = Field(default="eth_getBlockReceipts", frozen=True)

    @classmethod
    def for_block_hash(cls, block_hash: str) -> Self:
        """Build the request for a block hash."""
        return cls(params=[block_hash])


__all__ = [
    "EthGetBlockByNumberRequest",
    "EthGetBlockReceiptsRequest",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
]
