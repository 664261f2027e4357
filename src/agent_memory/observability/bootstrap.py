"""Apply observability settings to the logging and tracing managers."""

from agent_memory.config import MemorySettings, get_settings
from agent_memory.observability.logging import LoggingManager
from agent_memory.observability.tracing import TracingManager


def setup_observability(
    settings: MemorySettings | None = None,
    log_level: str | None = None,
) -> tuple[LoggingManager, TracingManager]:
    """Set up logging and tracing from settings.

    Logging is configured first so tracing setup logs go to the
    configured output.

    Args:
        settings: Settings to apply (process settings when omitted)
        log_level: Overrides LOG_LEVEL

    Returns:
        The logging and tracing managers
    """
    settings = settings or get_settings()
    obs_config = settings.observability

    logging_manager = LoggingManager.get_instance(
        config=obs_config,
        log_level=log_level or settings.log_level,
        log_format=settings.log_format,
    )
    logging_manager.setup()

    tracing_manager = TracingManager.get_instance(config=obs_config)

    return logging_manager, tracing_manager
