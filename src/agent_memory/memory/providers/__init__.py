"""Memory providers and the name registry used to select them."""

import structlog

from agent_memory.config import MemoryProviderType, MemorySettings, get_settings
from agent_memory.exceptions import MemoryConfigError
from agent_memory.memory.embeddings import get_default_embedding_fn
from agent_memory.memory.providers.base import MemoryProvider
from agent_memory.memory.providers.chroma import (
    ChromaCloudMemory,
    ChromaEphemeralMemory,
    ChromaMemory,
    ChromaPersistentMemory,
)
from agent_memory.memory.providers.in_memory import InMemoryMemory
from agent_memory.memory.providers.lance import LanceMemory
from agent_memory.memory.providers.postgres import PostgresMemory
from agent_memory.memory.providers.qdrant import QdrantMemory

logger = structlog.get_logger(__name__)

PROVIDERS: dict[MemoryProviderType, type[MemoryProvider]] = {
    MemoryProviderType.CHROMA_DB: ChromaPersistentMemory,
    MemoryProviderType.CHROMA_EPHEMERAL: ChromaEphemeralMemory,
    MemoryProviderType.CHROMA_CLOUD: ChromaCloudMemory,
    MemoryProviderType.LANCEDB: LanceMemory,
    MemoryProviderType.POSTGRES: PostgresMemory,
    MemoryProviderType.QDRANT: QdrantMemory,
    MemoryProviderType.IN_MEMORY: InMemoryMemory,
}


def get_memory_provider(
    name: str | MemoryProviderType,
    settings: MemorySettings | None = None,
) -> MemoryProvider:
    """Build a provider from its registry name.

    Names are case-insensitive and `_` may be used for `-`
    (``"chroma_db"`` selects ``"chroma-db"``).

    Args:
        name: Provider name
        settings: Settings to build from (process settings when omitted)

    Returns:
        Provider instance with settings-derived configuration
    """
    try:
        provider_type = MemoryProviderType.parse(name)
    except ValueError as e:
        valid = sorted(p.value for p in MemoryProviderType)
        raise MemoryConfigError(
            f"Unknown memory provider {name!r}",
            details={"valid_providers": valid},
        ) from e

    settings = settings or get_settings()

    if provider_type == MemoryProviderType.CHROMA_DB:
        provider: MemoryProvider = ChromaPersistentMemory(path=settings.resolved_chroma_path)
    elif provider_type == MemoryProviderType.CHROMA_CLOUD:
        provider = ChromaCloudMemory(
            api_key=settings.chroma_cloud_api_key,
            tenant=settings.chroma_cloud_tenant,
            database=settings.chroma_cloud_database,
        )
    elif provider_type == MemoryProviderType.LANCEDB:
        provider = LanceMemory(
            uri=settings.resolved_lancedb_uri,
            embedding_fn=get_default_embedding_fn(settings),
        )
    elif provider_type == MemoryProviderType.POSTGRES:
        provider = PostgresMemory(
            connection_string=settings.postgres_url,
            embedding_fn=get_default_embedding_fn(settings),
        )
    elif provider_type == MemoryProviderType.QDRANT:
        provider = QdrantMemory(
            url=settings.qdrant_url,
            api_key=settings.qdrant_api_key,
            path=settings.resolved_qdrant_path,
            embedding_fn=get_default_embedding_fn(settings),
        )
    else:
        provider = PROVIDERS[provider_type]()

    logger.debug("Memory provider created", provider=provider.name)
    return provider


__all__ = [
    "PROVIDERS",
    "get_memory_provider",
    "MemoryProvider",
    "ChromaMemory",
    "ChromaEphemeralMemory",
    "ChromaPersistentMemory",
    "ChromaCloudMemory",
    "InMemoryMemory",
    "LanceMemory",
    "PostgresMemory",
    "QdrantMemory",
]
