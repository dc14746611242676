import logging

import wireup

import billshare
from billshare.core.env_settings import EnvironmentSettings


def configure_logging(
    log_level: str,
) -> None:
    """Configure application-wide logging."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


async def initialize_services() -> wireup.AsyncContainer:
    """
    Load environment settings, configure logging, and set up the dependency injection container.

    :return: An initialized dependency injection container.
    """
    environment_config: EnvironmentSettings = EnvironmentSettings.load()
    configure_logging(environment_config.LOG_LEVEL)

    container: wireup.AsyncContainer = wireup.create_async_container(
        parameters=environment_config.model_dump(), service_modules=[billshare]
    )

    return container
