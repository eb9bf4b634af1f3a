"""Pytest configuration and shared fixtures for upstream-mocked tests."""

import pytest
import pytest_asyncio

from typing import TYPE_CHECKING, Any

import httpx

from slot_rewards.beacon.client import BeaconClient
from slot_rewards.helpers.config import Settings
from slot_rewards.helpers.http import create_http_client
from slot_rewards.helpers.rpc import RPCClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from pytest_httpx import HTTPXMock


BEACON_URL = "https://beacon.test"
RPC_URL = "https://rpc.test/key123"
BLOCK_HASH = "0x" + "ab" * 32


def beacon_block_body(slot: int, block_number: int) -> dict[str, Any]:
    """Build a GET /eth/v2/beacon/blocks response body."""
    return {
        "version": "deneb",
        "execution_optimistic": False,
        "finalized": True,
        "data": {
            "message": {
                "slot": str(slot),
                "proposer_index": "1234",
                "body": {
                    "execution_payload": {
                        "block_number": str(block_number),
                        "block_hash": BLOCK_HASH,
                        "fee_recipient": "0x" + "11" * 20,
                    },
                },
            },
            "signature": "0x" + "00" * 96,
        },
    }


def execution_block_body(
    block_number: int,
    *,
    extra_data: bytes = b"",
    values: list[int] | None = None,
    base_fee: int = 0,
    gas_used: int = 0,
    block_hash: str = BLOCK_HASH,
) -> dict[str, Any]:
    """Build an eth_getBlockByNumber result with full transactions."""
    return {
        "number": hex(block_number),
        "hash": block_hash,
        "extraData": "0x" + extra_data.hex(),
        "baseFeePerGas": hex(base_fee),
        "gasUsed": hex(gas_used),
        "miner": "0x" + "22" * 20,
        "transactions": [
            {
                "hash": "0x" + f"{i:064x}",
                "value": hex(value),
                "to": "0x" + "33" * 20,
            }
            for i, value in enumerate(values or [])
        ],
    }


def receipt_body(effective_gas_price: int, gas_used: int, index: int = 0) -> dict[str, Any]:
    """Build one eth_getBlockReceipts entry."""
    return {
        "transactionHash": "0x" + f"{index:064x}",
        "effectiveGasPrice": hex(effective_gas_price),
        "gasUsed": hex(gas_used),
        "status": "0x1",
    }


def rpc_payload(method: str, params: list[Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "method": method, "params": params, "id": 1}


class UpstreamMock:
    """Registers beacon and execution responses on pytest-httpx."""

    beacon_url = BEACON_URL
    rpc_url = RPC_URL
    block_hash = BLOCK_HASH

    def __init__(self, httpx_mock: "HTTPXMock") -> None:
        self.httpx_mock = httpx_mock

    def head(self, slot: int, block_number: int = 0) -> None:
        self.httpx_mock.add_response(
            method="GET",
            url=f"{BEACON_URL}/eth/v2/beacon/blocks/head",
            json=beacon_block_body(slot, block_number),
        )

    def beacon_block(
        self, slot: int, block_number: int = 0, *, status_code: int = 200
    ) -> None:
        body = (
            beacon_block_body(slot, block_number)
            if status_code == 200
            else {"code": status_code, "message": "NOT_FOUND: beacon block"}
        )
        self.httpx_mock.add_response(
            method="GET",
            url=f"{BEACON_URL}/eth/v2/beacon/blocks/{slot}",
            status_code=status_code,
            json=body,
        )

    def execution_block(
        self,
        block_number: int,
        *,
        extra_data: bytes = b"",
        values: list[int] | None = None,
        base_fee: int = 0,
        gas_used: int = 0,
    ) -> None:
        self.raw_execution_block(
            block_number,
            execution_block_body(
                block_number,
                extra_data=extra_data,
                values=values,
                base_fee=base_fee,
                gas_used=gas_used,
            ),
        )

    def raw_execution_block(
        self, block_number: int, result: dict[str, Any] | None
    ) -> None:
        self.httpx_mock.add_response(
            method="POST",
            url=RPC_URL,
            match_json=rpc_payload("eth_getBlockByNumber", [hex(block_number), True]),
            json={"jsonrpc": "2.0", "id": 1, "result": result},
        )

    def receipts(self, fees: list[tuple[int, int]] | None) -> None:
        """Register receipts as (effective_gas_price, gas_used) pairs, or None."""
        receipts = (
            None
            if fees is None
            else [receipt_body(price, gas, i) for i, (price, gas) in enumerate(fees)]
        )
        self.httpx_mock.add_response(
            method="POST",
            url=RPC_URL,
            match_json=rpc_payload("eth_getBlockReceipts", [BLOCK_HASH]),
            json={"jsonrpc": "2.0", "id": 1, "result": receipts},
        )

    def sync_committee(self, slot: int, validators: list[str]) -> None:
        self.httpx_mock.add_response(
            method="GET",
            url=f"{BEACON_URL}/eth/v1/beacon/states/{slot}/sync_committees",
            json={
                "execution_optimistic": False,
                "finalized": True,
                "data": {"validators": validators, "validator_aggregates": []},
            },
        )

    def sync_duties(
        self, epoch: int, validators: list[str], pubkeys: list[str]
    ) -> None:
        self.httpx_mock.add_response(
            method="POST",
            url=f"{BEACON_URL}/eth/v1/validator/duties/sync/{epoch}",
            match_json=validators,
            json={
                "execution_optimistic": False,
                "data": [
                    {
                        "pubkey": pubkey,
                        "validator_index": index,
                        "validator_sync_committee_indices": [str(i)],
                    }
                    for i, (index, pubkey) in enumerate(
                        zip(validators, pubkeys, strict=False)
                    )
                ],
            },
        )

    def rpc_requests(self) -> list[httpx.Request]:
        return self.httpx_mock.get_requests(url=RPC_URL)


@pytest.fixture
def upstream(httpx_mock: "HTTPXMock") -> UpstreamMock:
    """Upstream response registry bound to pytest-httpx."""
    return UpstreamMock(httpx_mock)


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the mocked upstreams."""
    return Settings(
        eth_rpc_url=RPC_URL,
        beacon_api_url=BEACON_URL,
        http_timeout=5.0,
    )


@pytest.fixture
def beacon() -> BeaconClient:
    """Beacon client for the mocked beacon node."""
    return BeaconClient(BEACON_URL, timeout=5.0)


@pytest.fixture
def rpc() -> RPCClient:
    """RPC client for the mocked execution node."""
    return RPCClient(RPC_URL, timeout=5.0)


@pytest_asyncio.fixture
async def http_client() -> "AsyncGenerator[httpx.AsyncClient]":
    """Pooled HTTP client, closed after the test."""
    async with create_http_client(timeout=5.0) as client:
        yield client
