"""HTTP API exposing block rewards and sync duties per slot.

Handlers only parse the slot, call the resolvers and shape the response.
Every failure below them, expected or not, is turned into a JSON
{"error": ...} body by the exception handlers registered in create_app.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slot_rewards.api.models import (
    BlockRewardResponse,
    ErrorResponse,
    HealthResponse,
    SyncDutiesResponse,
)
from slot_rewards.beacon.client import BeaconClient
from slot_rewards.duties.resolver import SyncDutyResolver
from slot_rewards.errors import SlotRewardsError
from slot_rewards.helpers.config import Settings, load_settings
from slot_rewards.helpers.http import create_http_client
from slot_rewards.helpers.logging import get_logger
from slot_rewards.helpers.parsers import parse_slot_id
from slot_rewards.helpers.rpc import RPCClient
from slot_rewards.rewards.classifier import RewardClassifier
from slot_rewards.slots.resolver import SlotResolver


logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "internal error"

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Invalid or future slot"},
    404: {"model": ErrorResponse, "description": "No beacon block for slot"},
    500: {"model": ErrorResponse, "description": "Upstream or decoding failure"},
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the pooled upstream HTTP client for the lifetime of the app."""
    settings: Settings = app.state.settings
    async with create_http_client(timeout=settings.http_timeout) as client:
        app.state.http_client = client
        logger.info(
            "Serving slot rewards (mev unit: %s, vanilla unit: %s)",
            settings.mev_reward_unit,
            settings.vanilla_reward_unit,
        )
        yield


async def handle_slot_rewards_error(
    request: Request, exc: SlotRewardsError
) -> JSONResponse:
    """Render a SlotRewardsError as {"error": message} with its status."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        type(exc).__name__,
        exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing errors (unknown path, wrong method) as {"error": detail}."""
    logger.warning(
        "%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=exc.headers,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Render any other exception as a 500 with a generic JSON error body."""
    logger.exception(
        "%s %s -> 500 %s", request.method, request.url.path, type(exc).__name__
    )
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=INTERNAL_ERROR_MESSAGE).model_dump(),
    )


def get_slot_resolver(request: Request) -> SlotResolver:
    return SlotResolver(request.app.state.beacon, request.app.state.http_client)


def get_reward_classifier(request: Request) -> RewardClassifier:
    settings: Settings = request.app.state.settings
    return RewardClassifier(
        request.app.state.rpc,
        request.app.state.http_client,
        mev_unit=settings.mev_reward_unit,
        vanilla_unit=settings.vanilla_reward_unit,
    )


def get_sync_duty_resolver(
    request: Request,
    slots: Annotated[SlotResolver, Depends(get_slot_resolver)],
) -> SyncDutyResolver:
    return SyncDutyResolver(
        request.app.state.beacon, request.app.state.http_client, slots
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service settings, loaded from the environment when omitted

    Returns:
        Configured FastAPI app
    """
    settings = settings or load_settings()

    app = FastAPI(title="slot-rewards", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.beacon = BeaconClient(
        settings.beacon_api_url,
        timeout=settings.http_timeout,
        max_attempts=settings.max_attempts,
    )
    app.state.rpc = RPCClient(
        settings.eth_rpc_url,
        timeout=settings.http_timeout,
        max_attempts=settings.max_attempts,
    )
    app.add_exception_handler(SlotRewardsError, handle_slot_rewards_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse()

    @app.get(
        "/blockreward/{slot}",
        response_model=BlockRewardResponse,
        responses=ERROR_RESPONSES,
    )
    async def block_reward(
        slot: str,
        slots: Annotated[SlotResolver, Depends(get_slot_resolver)],
        classifier: Annotated[RewardClassifier, Depends(get_reward_classifier)],
    ) -> BlockRewardResponse:
        result = await classifier.reward_for_slot(slots, parse_slot_id(slot))
        return BlockRewardResponse(status=result.status, reward=result.reward)

    @app.get(
        "/syncduties/{slot}",
        response_model=SyncDutiesResponse,
        responses=ERROR_RESPONSES,
    )
    async def sync_duties(
        slot: str,
        duties: Annotated[SyncDutyResolver, Depends(get_sync_duty_resolver)],
    ) -> SyncDutiesResponse:
        result = await duties.resolve(parse_slot_id(slot))
        return SyncDutiesResponse(validators=result.validators)

    return app


__all__ = ["create_app"]
