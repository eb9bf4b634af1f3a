"""Beacon node REST API client."""

from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ValidationError

from slot_rewards.beacon.models import (
    BeaconBlockEnvelope,
    SyncCommitteeResponse,
    SyncDutiesResponse,
)
from slot_rewards.errors import DecodeError
from slot_rewards.helpers.constants import DEFAULT_TIMEOUT, MAX_ATTEMPTS
from slot_rewards.helpers.http import JsonResponse, get_json, post_json
from slot_rewards.helpers.logging import get_logger


if TYPE_CHECKING:
    import httpx


logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def _decode(model: type[M], body: JsonResponse, what: str) -> M:
    try:
        return model.model_validate(body)
    except ValidationError as e:
        msg = f"{what}: unexpected response shape"
        raise DecodeError(msg) from e


class BeaconClient:
    """Client for the standard beacon node API endpoints used by the service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        """Initialize beacon client.

        Args:
            base_url: Beacon node base URL (without /eth/...)
            timeout: Default timeout for requests in seconds
            max_attempts: Attempts per call for transport-level failures

        Raises:
            ValueError: If base_url is empty or None
        """
        if not base_url:
            msg = "Beacon API URL cannot be empty"
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def get_block(
        self, client: "httpx.AsyncClient", block_id: int | str
    ) -> BeaconBlockEnvelope:
        """Get the signed beacon block for a slot or "head".

        Args:
            client: HTTP client instance
            block_id: Slot number or block identifier such as "head"

        Returns:
            BeaconBlockEnvelope model

        Raises:
            NotFound: If the node has no block for the identifier
            UpstreamUnavailable: If the request fails
            DecodeError: If the body is not a post-merge block envelope
        """
        body = await get_json(
            client,
            self._url(f"/eth/v2/beacon/blocks/{block_id}"),
            timeout=self.timeout,
            max_attempts=self.max_attempts,
        )
        return _decode(BeaconBlockEnvelope, body, f"beacon block {block_id}")

    async def get_sync_committee(
        self, client: "httpx.AsyncClient", state_id: int | str
    ) -> SyncCommitteeResponse:
        """Get the sync committee validator indices for a state."""
        body = await get_json(
            client,
            self._url(f"/eth/v1/beacon/states/{state_id}/sync_committees"),
            timeout=self.timeout,
            max_attempts=self.max_attempts,
        )
        return _decode(SyncCommitteeResponse, body, f"sync committee {state_id}")

    async def get_sync_duties(
        self,
        client: "httpx.AsyncClient",
        epoch: int,
        validator_indices: list[str],
    ) -> SyncDutiesResponse:
        """Get sync committee duties for validator indices in an epoch.

        Args:
            client: HTTP client instance
            epoch: Epoch to query duties for
            validator_indices: Validator indices as strings

        Returns:
            SyncDutiesResponse model, duties in upstream order
        """
        logger.debug(
            "Requesting sync duties for %d validators in epoch %d",
            len(validator_indices),
            epoch,
        )
        body = await post_json(
            client,
            self._url(f"/eth/v1/validator/duties/sync/{epoch}"),
            validator_indices,
            timeout=self.timeout,
            max_attempts=self.max_attempts,
        )
        return _decode(SyncDutiesResponse, body, f"sync duties for epoch {epoch}")


__all__ = ["BeaconClient"]
