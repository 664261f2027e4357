"""ChromaDB memory providers.

`ChromaPersistentMemory` is the default provider: a file-based store under
the memory home directory. The ephemeral and cloud variants share the same
collection handling and differ only in how the client is built.
"""

import re
from pathlib import Path
from typing import Any, ClassVar

import chromadb
import structlog
from pydantic import Field, PrivateAttr

from agent_memory.config import get_settings
from agent_memory.constants import DEFAULT_COLLECTION_TEMPLATE
from agent_memory.exceptions import InvalidMemoryKeyError, MemoryConfigError
from agent_memory.memory.embeddings import EmbeddingCallable
from agent_memory.memory.models import new_memory_id
from agent_memory.memory.providers.base import MemoryProvider

logger = structlog.get_logger(__name__)

# Collection names: 3-512 chars of [a-zA-Z0-9._-], alphanumeric at both ends
_COLLECTION_NAME_PATTERN = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9._-]{1,510}[a-zA-Z0-9]")


class ChromaMemory(MemoryProvider):
    """Memory provider backed by a ChromaDB client.

    Pass any `chromadb` client as `client`. When `embedding_fn` is set,
    vectors are computed client-side; otherwise the collection's own
    embedding function is used.
    """

    name: ClassVar[str] = "chroma"

    client: Any = Field(default=None, description="chromadb client")
    collection_name: str = Field(
        default=DEFAULT_COLLECTION_TEMPLATE,
        description="Collection name template; {key} is the memory key",
    )
    embedding_fn: EmbeddingCallable | None = Field(default=None)

    _collections: dict[str, Any] = PrivateAttr(default_factory=dict)

    def get_client(self) -> Any:
        """Return the ChromaDB client, building it on first use."""
        if self.client is None:
            self.client = self._build_client()
        return self.client

    def _build_client(self) -> Any:
        raise MemoryConfigError(f"{type(self).__name__} requires a chromadb client")

    def get_collection(self, memory_key: str) -> Any:
        """Get or create the collection for a memory key."""
        collection = self._collections.get(memory_key)
        if collection is None:
            collection = self.get_client().get_or_create_collection(
                name=self.collection_name.format(key=memory_key),
                metadata={"hnsw:space": "cosine"},
            )
            self._collections[memory_key] = collection
        return collection

    def validate_key(self, memory_key: str) -> None:
        name = self.collection_name.format(key=memory_key)
        if not _COLLECTION_NAME_PATTERN.fullmatch(name):
            raise InvalidMemoryKeyError(
                memory_key,
                reason=(
                    f"ChromaDB collection name {name!r} must be 3-512 characters "
                    "and start and end with a letter or digit"
                ),
                details={"provider": self.name},
            )

    def _configure(self, memory_key: str) -> None:
        self.get_collection(memory_key)

    def _add(self, memory_key: str, content: str) -> str:
        memory_id = new_memory_id()
        kwargs: dict[str, Any] = {"ids": [memory_id], "documents": [content]}
        if self.embedding_fn is not None:
            kwargs["embeddings"] = self.embedding_fn([content])
        self.get_collection(memory_key).add(**kwargs)
        return memory_id

    def _delete(self, memory_key: str, memory_id: str) -> None:
        self.get_collection(memory_key).delete(ids=[memory_id])

    def _search(self, memory_key: str, query: str, n: int) -> dict[str, str]:
        collection = self.get_collection(memory_key)
        count = collection.count()
        if count == 0:
            return {}

        kwargs: dict[str, Any] = {"n_results": min(n, count)}
        if self.embedding_fn is not None:
            kwargs["query_embeddings"] = self.embedding_fn([query])
        else:
            kwargs["query_texts"] = [query]

        results = collection.query(**kwargs)
        ids = results["ids"][0]
        documents = results["documents"][0]
        return dict(zip(ids, documents))

    def get_stats(self) -> dict[str, Any]:
        stats = super().get_stats()
        stats["memory_counts"] = {
            key: collection.count() for key, collection in self._collections.items()
        }
        return stats


class ChromaEphemeralMemory(ChromaMemory):
    """ChromaDB running in-process; nothing is written to disk."""

    name: ClassVar[str] = "chroma-ephemeral"

    def _build_client(self) -> Any:
        return chromadb.EphemeralClient()


class ChromaPersistentMemory(ChromaMemory):
    """File-based ChromaDB store (the default provider)."""

    name: ClassVar[str] = "chroma-db"

    path: Path = Field(default_factory=lambda: get_settings().resolved_chroma_path)

    def _build_client(self) -> Any:
        path = self.path.expanduser()
        path.mkdir(parents=True, exist_ok=True)
        logger.info("Opening persistent ChromaDB", path=str(path))
        return chromadb.PersistentClient(path=str(path))


class ChromaCloudMemory(ChromaMemory):
    """Hosted ChromaDB."""

    name: ClassVar[str] = "chroma-cloud"

    api_key: str | None = Field(default_factory=lambda: get_settings().chroma_cloud_api_key)
    tenant: str = Field(default_factory=lambda: get_settings().chroma_cloud_tenant)
    database: str = Field(default_factory=lambda: get_settings().chroma_cloud_database)

    def _build_client(self) -> Any:
        if not self.api_key:
            raise MemoryConfigError(
                "api_key is required for the chroma-cloud provider. "
                "Set MEMORY_CHROMA_CLOUD_API_KEY environment variable."
            )
        return chromadb.CloudClient(
            tenant=self.tenant,
            database=self.database,
            api_key=self.api_key,
        )
