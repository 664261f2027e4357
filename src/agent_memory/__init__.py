"""Persistent, semantically searchable memory modules for AI agents."""

from agent_memory.config import (
    MemoryProviderType,
    MemorySettings,
    ObservabilityConfig,
    get_settings,
    reset_settings,
)
from agent_memory.exceptions import (
    AgentMemoryError,
    InvalidMemoryKeyError,
    MemoryConfigError,
    MemoryProviderError,
    ProviderNotInstalledError,
)
from agent_memory.memory import (
    InMemoryMemory,
    Memory,
    MemoryPromptBuilder,
    MemoryProvider,
    get_memory_provider,
)

__version__ = "0.1.0"

__all__ = [
    # Memory
    "Memory",
    "MemoryPromptBuilder",
    "MemoryProvider",
    "InMemoryMemory",
    "get_memory_provider",
    # Configuration
    "MemorySettings",
    "MemoryProviderType",
    "ObservabilityConfig",
    "get_settings",
    "reset_settings",
    # Exceptions
    "AgentMemoryError",
    "MemoryConfigError",
    "InvalidMemoryKeyError",
    "ProviderNotInstalledError",
    "MemoryProviderError",
]
