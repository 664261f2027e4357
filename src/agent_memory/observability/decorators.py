"""Observability decorators for memory operations and agent tools."""

import functools
import inspect
import time
from typing import Any, Callable, ParamSpec, TypeVar

import structlog

from agent_memory.observability.logging import log_tool_execution
from agent_memory.observability.tracing import TracingManager

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def traced(
    name: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to trace function execution.

    Args:
        name: Span name (defaults to function name)
        attributes: Additional span attributes

    Returns:
        Decorated function
    """
    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        span_name = name or func.__qualname__

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            tracing = TracingManager.get_instance()

            if not tracing.is_enabled:
                return func(*args, **kwargs)

            with tracing.span(span_name, attributes) as span:
                try:
                    result = func(*args, **kwargs)
                    if span is not None:
                        span.set_attribute("success", True)
                    return result
                except Exception as e:
                    TracingManager.record_exception(span, e)
                    raise

        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            tracing = TracingManager.get_instance()

            if not tracing.is_enabled:
                return await func(*args, **kwargs)  # type: ignore

            with tracing.span(span_name, attributes) as span:
                try:
                    result = await func(*args, **kwargs)  # type: ignore
                    if span is not None:
                        span.set_attribute("success", True)
                    return result
                except Exception as e:
                    TracingManager.record_exception(span, e)
                    raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper

    return decorator


def logged_tool(
    func: Callable[P, R] | None = None,
    *,
    name: str | None = None,
    log_args: bool = True,
    log_result: bool = True,
    truncate_at: int = 200,
) -> Callable[P, R] | Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to log tool execution.

    Can be used with or without arguments:
        @logged_tool
        def my_tool(...): ...

        @logged_tool(log_result=False)
        def my_tool(...): ...

    Args:
        func: Function to decorate (when used without parentheses)
        name: Tool name for logs (defaults to function name)
        log_args: Whether to log function arguments
        log_result: Whether to log function result
        truncate_at: Maximum length for logged values

    Returns:
        Decorated function
    """
    def truncate(value: Any) -> str:
        s = str(value)
        if len(s) > truncate_at:
            return s[:truncate_at] + "..."
        return s

    def decorator(f: Callable[P, R]) -> Callable[P, R]:
        tool_name = name or f.__name__

        def start(args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
            log_data: dict[str, Any] = {"tool": tool_name}
            if log_args:
                log_data["args"] = truncate(args) if args else None
                log_data["kwargs"] = truncate(kwargs) if kwargs else None
            structlog.get_logger("tool").debug("Tool execution started", **log_data)
            return log_data

        def succeeded(log_data: dict[str, Any], result: Any, start_time: float) -> None:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            log_data["success"] = True
            log_data["execution_time_ms"] = round(elapsed_ms, 2)
            if log_result:
                log_data["result"] = truncate(result)
            structlog.get_logger("tool").info("Tool executed", **log_data)
            log_tool_execution(
                tool_name=tool_name,
                success=True,
                execution_time_ms=elapsed_ms,
            )

        def failed(error: Exception, start_time: float) -> None:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            structlog.get_logger("tool").error(
                "Tool execution failed",
                tool=tool_name,
                error=str(error),
                error_type=type(error).__name__,
                execution_time_ms=round(elapsed_ms, 2),
            )
            log_tool_execution(
                tool_name=tool_name,
                success=False,
                execution_time_ms=elapsed_ms,
                error=str(error),
            )

        @functools.wraps(f)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            log_data = start(args, kwargs)
            try:
                result = f(*args, **kwargs)
            except Exception as e:
                failed(e, start_time)
                raise
            succeeded(log_data, result, start_time)
            return result

        @functools.wraps(f)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            log_data = start(args, kwargs)
            try:
                result = await f(*args, **kwargs)  # type: ignore
            except Exception as e:
                failed(e, start_time)
                raise
            succeeded(log_data, result, start_time)
            return result

        if inspect.iscoroutinefunction(f):
            return async_wrapper  # type: ignore
        return sync_wrapper

    if func is not None:
        return decorator(func)
    return decorator
