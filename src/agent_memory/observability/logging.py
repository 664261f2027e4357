"""Structured logging for the agent memory package."""

import logging
import sys
from typing import Any

import structlog

from agent_memory.config import ObservabilityConfig
from agent_memory.constants import LOG_PREVIEW_CHARS

logger = structlog.get_logger(__name__)


class LoggingManager:
    """Configures structlog for JSON or console output.

    Attributes:
        config: Observability configuration
        _initialized: Whether logging has been set up
    """

    _instance: "LoggingManager | None" = None

    def __init__(
        self,
        config: ObservabilityConfig | None = None,
        log_level: str = "INFO",
        log_format: str = "json",
    ) -> None:
        """Initialize the logging manager.

        Args:
            config: Observability configuration
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_format: Log format (json or text)
        """
        self.config = config or ObservabilityConfig()
        self.log_level = log_level.upper()
        self.log_format = log_format.lower()
        self._initialized = False

    @classmethod
    def get_instance(
        cls,
        config: ObservabilityConfig | None = None,
        log_level: str = "INFO",
        log_format: str = "json",
    ) -> "LoggingManager":
        """Get or create the singleton logging manager."""
        if cls._instance is None:
            cls._instance = cls(
                config=config,
                log_level=log_level,
                log_format=log_format,
            )
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (used by tests)."""
        cls._instance = None

    def setup(self) -> None:
        """Set up structured logging on stderr.

        JSON output is meant for log collectors; text output renders
        colored console lines for local work. When logging is disabled,
        every log call is dropped.
        """
        if self._initialized:
            return

        if not self.config.logging_enabled:
            structlog.configure(
                wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL + 1),
                logger_factory=structlog.PrintLoggerFactory(sys.stderr),
                cache_logger_on_first_use=False,
            )
            self._initialized = True
            return

        level = getattr(logging, self.log_level, logging.INFO)

        logging.basicConfig(
            format="%(message)s",
            stream=sys.stderr,
            level=level,
        )

        processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
        if self.log_format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(sys.stderr),
            cache_logger_on_first_use=True,
        )

        self._initialized = True
        logger.info(
            "Logging initialized",
            level=self.log_level,
            format=self.log_format,
        )

    @property
    def is_enabled(self) -> bool:
        """Check if logging is enabled and initialized."""
        return self._initialized and self.config.logging_enabled


def preview(text: str | None, limit: int = LOG_PREVIEW_CHARS) -> str | None:
    """Truncate text for log output."""
    if text is None:
        return None
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def log_memory_operation(
    operation: str,
    memory_key: str,
    provider: str,
    success: bool,
    latency_ms: float | None = None,
    error: str | None = None,
    **kwargs: Any,
) -> None:
    """Log a memory operation with structured context.

    Args:
        operation: Operation name (add, delete, search)
        memory_key: Memory module key
        provider: Provider name
        success: Whether the operation succeeded
        latency_ms: Operation latency in milliseconds
        error: Error message if failed
        **kwargs: Additional context
    """
    log = structlog.get_logger("memory.operation")
    if success:
        log.info(
            "Memory operation",
            operation=operation,
            memory_key=memory_key,
            provider=provider,
            latency_ms=latency_ms,
            **kwargs,
        )
    else:
        log.error(
            "Memory operation failed",
            operation=operation,
            memory_key=memory_key,
            provider=provider,
            error=error,
            latency_ms=latency_ms,
            **kwargs,
        )


def log_tool_execution(
    tool_name: str,
    success: bool,
    execution_time_ms: float | None = None,
    error: str | None = None,
    **kwargs: Any,
) -> None:
    """Log a tool execution with structured context.

    Args:
        tool_name: Name of the tool
        success: Whether execution was successful
        execution_time_ms: Execution time in milliseconds
        error: Error message if failed
        **kwargs: Additional context
    """
    log = structlog.get_logger("tool.execution")
    if success:
        log.info(
            "Tool executed",
            tool_name=tool_name,
            success=success,
            execution_time_ms=execution_time_ms,
            **kwargs,
        )
    else:
        log.error(
            "Tool execution failed",
            tool_name=tool_name,
            success=success,
            error=error,
            execution_time_ms=execution_time_ms,
            **kwargs,
        )
