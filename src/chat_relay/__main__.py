"""Entry point for running the chat relay."""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from .config import get_settings
from .errors import ConfigError

logger = logging.getLogger(__name__)


def main():
    """Run the chat relay; exits before serving when PORT is missing."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        missing = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise ConfigError(f"Invalid or missing configuration: {missing}") from exc

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger.info(f"Starting chat relay on {settings.app_host}:{settings.app_port}")

    uvicorn.run(
        "chat_relay.api.app:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
