"""Entry point: run the slot rewards API with uvicorn."""

import uvicorn

from slot_rewards.api.app import create_app
from slot_rewards.helpers.config import load_settings
from slot_rewards.helpers.logging import get_logger, set_log_level


logger = get_logger(__name__)


def main() -> None:
    """Load settings from the environment and serve the API."""
    settings = load_settings()
    set_log_level(settings.log_level)

    app = create_app(settings)
    logger.info("Listening on %s:%d", settings.api_host, settings.api_port)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
