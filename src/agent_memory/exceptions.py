"""Custom exceptions for the agent memory package."""

from typing import Any


class AgentMemoryError(Exception):
    """Base exception for agent memory errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MemoryConfigError(AgentMemoryError):
    """Raised when a memory module or provider is misconfigured."""

    pass


class InvalidMemoryKeyError(MemoryConfigError):
    """Raised when a memory key is not accepted.

    Keys may only contain letters, digits and `_`; some providers add
    restrictions of their own.
    """

    def __init__(
        self,
        key: str,
        reason: str = "use only letters, digits and underscores",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Invalid memory key {key!r}: {reason}", details)
        self.key = key
        self.reason = reason


class ProviderNotInstalledError(MemoryConfigError):
    """Raised when the library backing a provider is not installed."""

    def __init__(
        self,
        provider: str,
        extra: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"The {provider} memory provider requires extra dependencies. "
            f"Install with: pip install 'agent-memory[{extra}]'",
            details,
        )
        self.provider = provider
        self.extra = extra


class MemoryProviderError(AgentMemoryError):
    """Raised when a provider operation fails."""

    def __init__(
        self,
        message: str,
        provider: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.provider = provider
        self.operation = operation
