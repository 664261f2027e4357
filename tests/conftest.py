"""Pytest configuration and fixtures for agent memory tests."""

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch
from uuid import uuid4

import pytest
import structlog

from agent_memory.config import MemorySettings, ObservabilityConfig, reset_settings
from agent_memory.memory import HashingEmbeddingFunction, InMemoryMemory, Memory
from agent_memory.observability import LoggingManager, TracingManager


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path) -> Any:
    """Point settings at a temporary home and use hashing embeddings."""
    env = {
        "AGENT_MEMORY_HOME": str(tmp_path / "home"),
        "MEMORY_PROVIDER": "in-memory",
        "MEMORY_EMBEDDING_PROVIDER": "hashing",
        "TRACING_ENABLED": "false",
    }
    with patch.dict(os.environ, env, clear=False):
        reset_settings()
        yield
    reset_settings()
    LoggingManager.reset_instance()
    TracingManager.reset_instance()
    structlog.reset_defaults()


@pytest.fixture
def settings(tmp_path: Path) -> MemorySettings:
    """Create MemorySettings rooted in a temporary directory."""
    return MemorySettings(
        home=tmp_path / "home",
        provider="in-memory",
        embedding_provider="hashing",
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture
def observability_config() -> ObservabilityConfig:
    """Create a sample ObservabilityConfig for testing."""
    return ObservabilityConfig(
        tracing_enabled=False,
        logging_enabled=True,
        sample_rate=1.0,
    )


@pytest.fixture
def embedding_fn() -> HashingEmbeddingFunction:
    """Deterministic embedding function that needs no model download."""
    return HashingEmbeddingFunction()


@pytest.fixture
def in_memory_provider(embedding_fn: HashingEmbeddingFunction) -> InMemoryMemory:
    """Create an InMemoryMemory provider for testing."""
    return InMemoryMemory(embedding_fn=embedding_fn)


@pytest.fixture
def memory_key() -> str:
    """A memory key unique to the test, for backends that share process state."""
    return f"test_{uuid4().hex[:12]}"


@pytest.fixture
def memory(in_memory_provider: InMemoryMemory) -> Memory:
    """Create a Memory module backed by the in-memory provider."""
    return Memory(
        key="user_preferences",
        instructions="Store and retrieve information about user preferences.",
        provider=in_memory_provider,
    )


@pytest.fixture
def facts() -> list[str]:
    """Sample facts with distinct vocabulary."""
    return [
        "The user prefers dark mode in every editor",
        "The user lives in Seoul and commutes by subway",
        "The user is allergic to peanuts",
    ]
