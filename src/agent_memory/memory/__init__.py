"""Memory modules and the vector store providers behind them."""

from agent_memory.memory.embeddings import (
    EmbeddingFunction,
    HashingEmbeddingFunction,
    SentenceTransformerEmbeddingFunction,
    get_default_embedding_fn,
)
from agent_memory.memory.memory import Memory, validate_memory_key
from agent_memory.memory.models import MemoryRecord, MemorySearchResult
from agent_memory.memory.prompt import MemoryPromptBuilder
from agent_memory.memory.providers import (
    ChromaCloudMemory,
    ChromaEphemeralMemory,
    ChromaMemory,
    ChromaPersistentMemory,
    InMemoryMemory,
    LanceMemory,
    MemoryProvider,
    PostgresMemory,
    QdrantMemory,
    get_memory_provider,
)
from agent_memory.memory.retriever import MemoryRetriever

__all__ = [
    # Module
    "Memory",
    "validate_memory_key",
    "MemoryPromptBuilder",
    # Models
    "MemoryRecord",
    "MemorySearchResult",
    "MemoryRetriever",
    # Providers
    "MemoryProvider",
    "get_memory_provider",
    "ChromaMemory",
    "ChromaEphemeralMemory",
    "ChromaPersistentMemory",
    "ChromaCloudMemory",
    "InMemoryMemory",
    "LanceMemory",
    "PostgresMemory",
    "QdrantMemory",
    # Embeddings
    "EmbeddingFunction",
    "HashingEmbeddingFunction",
    "SentenceTransformerEmbeddingFunction",
    "get_default_embedding_fn",
]
