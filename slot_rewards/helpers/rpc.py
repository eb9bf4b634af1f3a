"""Ethereum JSON-RPC client utilities."""

from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from slot_rewards.errors import DecodeError, NotFound, UpstreamUnavailable
from slot_rewards.helpers.constants import DEFAULT_TIMEOUT, MAX_ATTEMPTS
from slot_rewards.helpers.http import post_json
from slot_rewards.helpers.logging import get_logger
from slot_rewards.helpers.models import ExecutionBlock, Receipt
from slot_rewards.helpers.rpc_models import (
    EthGetBlockByNumberRequest,
    EthGetBlockReceiptsRequest,
    JsonRpcRequest,
    JsonRpcResponse,
)


if TYPE_CHECKING:
    import httpx


logger = get_logger(__name__)

_receipts_adapter = TypeAdapter(list[Receipt])


class RPCClient:
    """Ethereum JSON-RPC client for block and receipt lookups."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            timeout: Default timeout for requests in seconds
            max_attempts: Attempts per call for transport-level failures

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout
        self.max_attempts = max_attempts

    async def call(
        self,
        client: "httpx.AsyncClient",
        request: JsonRpcRequest,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Make a single JSON-RPC call.

        Args:
            client: HTTP client instance
            request: JSON-RPC request model
            timeout: Optional timeout override

        Returns:
            RPC result value (may be None)

        Raises:
            UpstreamUnavailable: If the HTTP request fails or the response
                carries a JSON-RPC error object
            DecodeError: If the response is not a JSON-RPC envelope
        """
        body = await post_json(
            client,
            self.rpc_url,
            request.model_dump(),
            timeout=timeout or self.timeout,
            max_attempts=self.max_attempts,
        )

        try:
            response = JsonRpcResponse.model_validate(body)
        except ValidationError as e:
            msg = f"{request.method}: malformed JSON-RPC response"
            raise DecodeError(msg) from e

        if response.error is not None:
            msg = (
                f"{request.method}: RPC error {response.error.code}: "
                f"{response.error.message}"
            )
            raise UpstreamUnavailable(msg)

        return response.result

    async def get_block_by_number(
        self, client: "httpx.AsyncClient", block_number: int
    ) -> ExecutionBlock:
        """Get a block with full transaction objects.

        Args:
            client: HTTP client instance
            block_number: Execution block number

        Returns:
            ExecutionBlock model

        Raises:
            NotFound: If the node has no block at that height
            DecodeError: If the block does not match the expected shape
        """
        result = await self.call(
            client, EthGetBlockByNumberRequest.for_block(block_number)
        )
        if result is None:
            msg = f"execution block {block_number} not found"
            raise NotFound(msg)

        try:
            block = ExecutionBlock.model_validate(result)
        except ValidationError as e:
            msg = f"execution block {block_number}: unexpected block shape"
            raise DecodeError(msg) from e

        logger.debug(
            "Fetched block %d with %d transactions",
            block.number,
            len(block.transactions),
        )
        return block

    async def get_block_receipts(
        self, client: "httpx.AsyncClient", block_hash: str
    ) -> list[Receipt]:
        """Get every transaction receipt of a block.

        Args:
            client: HTTP client instance
            block_hash: Block hash

        Returns:
            Receipts in transaction order

        Raises:
            UpstreamUnavailable: If the node returns no receipts for the block
            DecodeError: If a receipt does not match the expected shape
        """
        result = await self.call(
            client, EthGetBlockReceiptsRequest.for_block_hash(block_hash)
        )
        if result is None:
            msg = f"receipts for block {block_hash} unavailable"
            raise UpstreamUnavailable(msg)

        try:
            return _receipts_adapter.validate_python(result)
        except ValidationError as e:
            msg = f"receipts for block {block_hash}: unexpected receipt shape"
            raise DecodeError(msg) from e


__all__ = ["RPCClient"]
