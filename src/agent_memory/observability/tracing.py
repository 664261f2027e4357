"""OpenTelemetry tracing for memory operations."""

import sys
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from agent_memory.config import ObservabilityConfig, get_settings

logger = structlog.get_logger(__name__)


class TracingManager:
    """Manages OpenTelemetry tracing.

    Attributes:
        config: Observability configuration
        _tracer: OpenTelemetry tracer instance
        _initialized: Whether tracing has been set up
    """

    _instance: "TracingManager | None" = None

    def __init__(
        self,
        config: ObservabilityConfig | None = None,
        service_name: str = "agent-memory",
        exporter: Any = None,
    ) -> None:
        """Initialize the tracing manager.

        Args:
            config: Observability configuration
            service_name: Service name for traces
            exporter: Span exporter; console exporter when omitted
        """
        self.config = config or ObservabilityConfig()
        self.service_name = service_name
        self._exporter = exporter
        self._tracer: Any = None
        self._initialized = False

    @classmethod
    def get_instance(cls, config: ObservabilityConfig | None = None) -> "TracingManager":
        """Get or create the singleton tracing manager.

        The first call sets tracing up from `config`, or from the
        observability settings (TRACING_ENABLED, TRACE_SAMPLE_RATE) when
        no config is given.
        """
        if cls._instance is None:
            instance = cls(config=config or get_settings().observability)
            instance.setup()
            cls._instance = instance
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (used by tests)."""
        cls._instance = None

    def setup(self) -> None:
        """Set up a tracer provider with ratio sampling."""
        if not self.config.tracing_enabled:
            logger.debug("Tracing disabled by configuration")
            return

        if self._initialized:
            logger.debug("Tracing already initialized")
            return

        resource = Resource.create(
            {
                "service.name": self.service_name,
                "service.version": "0.1.0",
            }
        )
        provider = TracerProvider(
            resource=resource,
            sampler=TraceIdRatioBased(self.config.sample_rate),
        )
        provider.add_span_processor(
            SimpleSpanProcessor(self._exporter or ConsoleSpanExporter(out=sys.stderr))
        )

        # Global tracer provider is left untouched
        self._tracer = provider.get_tracer(self.service_name)
        self._initialized = True

        logger.info(
            "Tracing initialized",
            service_name=self.service_name,
            sample_rate=self.config.sample_rate,
        )

    @contextmanager
    def span(
        self,
        name: str,
        attributes: dict[str, Any] | None = None,
    ) -> Generator[Any, None, None]:
        """Create a trace span context.

        Yields:
            OpenTelemetry span or None if tracing disabled
        """
        if not self.is_enabled:
            yield None
            return

        with self._tracer.start_as_current_span(name) as span:
            if attributes:
                for key, value in attributes.items():
                    span.set_attribute(key, str(value))
            yield span

    @staticmethod
    def record_exception(span: Any, exception: Exception) -> None:
        """Record an exception on a span."""
        if span is not None:
            span.record_exception(exception)
            span.set_status(trace.Status(trace.StatusCode.ERROR, str(exception)))

    @property
    def is_enabled(self) -> bool:
        """Check if tracing is enabled and initialized."""
        return self._initialized and self._tracer is not None
