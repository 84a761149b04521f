"""
Extension entry point for the turn retry coordinator.

Hosts load the extension by calling install() with their extension API:

    from turn_retry.main import install
    install(host)
"""

import structlog

from turn_retry.config import Settings
from turn_retry.config import settings as default_settings
from turn_retry.host.protocol import HostAPI
from turn_retry.logging_config import configure_logging
from turn_retry.retry.coordinator import RetryCoordinator

logger = structlog.get_logger(__name__)


def install(host: HostAPI, settings: Settings | None = None) -> RetryCoordinator:
    """
    Configure logging and install the retry coordinator into `host`.

    Args:
        host: Host extension API
        settings: Settings override (defaults to environment-loaded settings)

    Returns:
        The installed RetryCoordinator
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT, settings.diagnostic_log_path)

    coordinator = RetryCoordinator(host, settings).install()

    logger.info(
        "Extension loaded",
        name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )
    return coordinator
