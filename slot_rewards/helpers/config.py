"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from slot_rewards.helpers.constants import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_TIMEOUT,
    MAX_ATTEMPTS,
)
from slot_rewards.helpers.logging import LOG_LEVELS
from slot_rewards.helpers.models import RewardUnit


# Load environment variables from .env file
load_dotenv()


class Settings(BaseModel):
    """Immutable service configuration, built once at startup."""

    eth_rpc_url: str = Field(..., description="Execution-layer JSON-RPC endpoint")
    beacon_api_url: str = Field(..., description="Consensus-layer REST base URL")
    http_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_attempts: int = Field(default=MAX_ATTEMPTS, ge=1)
    api_host: str = DEFAULT_API_HOST
    api_port: int = Field(default=DEFAULT_API_PORT, ge=1, le=65535)
    log_level: str = "INFO"
    log_color: bool = False
    mev_reward_unit: RewardUnit = RewardUnit.ETH
    vanilla_reward_unit: RewardUnit = RewardUnit.GWEI

    model_config = ConfigDict(frozen=True)


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from slot_rewards.helpers.config import get_required_env

        rpc_url = get_required_env("ETH_RPC_URL")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key) or default


def get_float_env(key: str, default: float) -> float:
    """Get a float environment variable.

    Raises:
        ValueError: If the value is set but is not a number
    """
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        msg = f"{key} must be a number, got {raw!r}"
        raise ValueError(msg) from e


def get_int_env(key: str, default: int) -> int:
    """Get an integer environment variable.

    Raises:
        ValueError: If the value is set but is not an integer
    """
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        msg = f"{key} must be an integer, got {raw!r}"
        raise ValueError(msg) from e


def get_bool_env(key: str, *, default: bool = False) -> bool:
    """Get a boolean environment variable ("1", "true", "yes", "on" are true)."""
    raw = (os.getenv(key) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def get_eth_rpc_url(rpc_url: str | None = None) -> str:
    """Get Ethereum RPC URL from parameter or environment.

    Args:
        rpc_url: Optional RPC URL to use directly

    Returns:
        Ethereum RPC URL

    Raises:
        ValueError: If RPC URL is not provided and ETH_RPC_URL env var is not set
    """
    if rpc_url:
        return rpc_url

    return get_required_env("ETH_RPC_URL")


def get_beacon_api_url(beacon_url: str | None = None) -> str:
    """Get beacon API URL, falling back to the execution RPC URL.

    Hosted node providers commonly serve both APIs from one endpoint.

    Args:
        beacon_url: Optional beacon URL to use directly

    Returns:
        Beacon API base URL

    Raises:
        ValueError: If neither BEACON_API_URL nor ETH_RPC_URL is available
    """
    if beacon_url:
        return beacon_url

    env_beacon_url = os.getenv("BEACON_API_URL")
    if env_beacon_url:
        return env_beacon_url

    return get_eth_rpc_url()


def _reward_unit_env(key: str, default: RewardUnit) -> RewardUnit:
    raw = (os.getenv(key) or "").strip().lower()
    if not raw:
        return default
    try:
        return RewardUnit(raw)
    except ValueError as e:
        allowed = ", ".join(unit.value for unit in RewardUnit)
        msg = f"{key} must be one of: {allowed}"
        raise ValueError(msg) from e


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Returns:
        Settings: Frozen service configuration

    Raises:
        ValueError: If a required variable is missing or a value is malformed

    Example:
        ```python
        from slot_rewards.helpers.config import load_settings

        settings = load_settings()
        print(settings.beacon_api_url)
        ```
    """
    log_level = (get_optional_env("LOG_LEVEL", "INFO") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        msg = f"Invalid log level: {log_level}"
        raise ValueError(msg)

    return Settings(
        eth_rpc_url=get_eth_rpc_url(),
        beacon_api_url=get_beacon_api_url(),
        http_timeout=get_float_env("HTTP_TIMEOUT", DEFAULT_TIMEOUT),
        max_attempts=get_int_env("UPSTREAM_MAX_ATTEMPTS", MAX_ATTEMPTS),
        api_host=get_optional_env("API_HOST", DEFAULT_API_HOST) or DEFAULT_API_HOST,
        api_port=get_int_env("API_PORT", DEFAULT_API_PORT),
        log_level=log_level,
        log_color=get_bool_env("LOG_COLOR"),
        mev_reward_unit=_reward_unit_env("MEV_REWARD_UNIT", RewardUnit.ETH),
        vanilla_reward_unit=_reward_unit_env("VANILLA_REWARD_UNIT", RewardUnit.GWEI),
    )


__all__ = [
    "Settings",
    "get_beacon_api_url",
    "get_bool_env",
    "get_eth_rpc_url",
    "get_float_env",
    "get_int_env",
    "get_optional_env",
    "get_required_env",
    "load_settings",
]
