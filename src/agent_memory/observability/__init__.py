"""Logging and tracing for the agent memory package."""

from agent_memory.observability.decorators import logged_tool, traced
from agent_memory.observability.logging import (
    LoggingManager,
    log_memory_operation,
    log_tool_execution,
)
from agent_memory.observability.bootstrap import setup_observability
from agent_memory.observability.tracing import TracingManager

__all__ = [
    "LoggingManager",
    "TracingManager",
    "setup_observability",
    "logged_tool",
    "traced",
    "log_memory_operation",
    "log_tool_execution",
]
