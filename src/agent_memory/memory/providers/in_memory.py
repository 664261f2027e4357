"""In-process memory provider for local development and testing."""

import threading
from typing import Any, ClassVar

import structlog
from pydantic import Field, PrivateAttr

from agent_memory.memory.embeddings import EmbeddingCallable, HashingEmbeddingFunction
from agent_memory.memory.models import MemoryRecord
from agent_memory.memory.providers.base import MemoryProvider
from agent_memory.memory.retriever import MemoryRetriever

logger = structlog.get_logger(__name__)


class InMemoryMemory(MemoryProvider):
    """In-process memory provider.

    This provider keeps facts in a dictionary and is suitable for:
    - Local development
    - Testing
    - Scratch agents whose memories need not survive a restart

    Note: Memories are lost when the process exits.
    """

    name: ClassVar[str] = "in-memory"

    embedding_fn: EmbeddingCallable = Field(default_factory=HashingEmbeddingFunction)

    # memory_key -> memory_id -> record (dicts keep insertion order)
    _store: dict[str, dict[str, MemoryRecord]] = PrivateAttr(default_factory=dict)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)
    _retriever: MemoryRetriever = PrivateAttr(default_factory=MemoryRetriever)

    def _configure(self, memory_key: str) -> None:
        with self._lock:
            self._store.setdefault(memory_key, {})

    def _add(self, memory_key: str, content: str) -> str:
        embedding = self.embedding_fn([content])[0]
        record = MemoryRecord(memory_key=memory_key, content=content, embedding=embedding)
        with self._lock:
            self._store[memory_key][record.memory_id] = record
        return record.memory_id

    def _delete(self, memory_key: str, memory_id: str) -> None:
        with self._lock:
            removed = self._store[memory_key].pop(memory_id, None)
        if removed is None:
            logger.debug("Memory not found for deletion", memory_key=memory_key, memory_id=memory_id)

    def _search(self, memory_key: str, query: str, n: int) -> dict[str, str]:
        with self._lock:
            records = list(self._store[memory_key].values())
        if not records:
            return {}

        query_embedding = self.embedding_fn([query])[0]
        results = self._retriever.rank(query_embedding, records, max_results=n)
        return {r.record.memory_id: r.record.content for r in results}

    def get_record(self, memory_key: str, memory_id: str) -> MemoryRecord | None:
        """Get a stored record by id."""
        return self._store.get(memory_key, {}).get(memory_id)

    def count(self, memory_key: str) -> int:
        """Number of facts stored under a key."""
        return len(self._store.get(memory_key, {}))

    def get_stats(self) -> dict[str, Any]:
        stats = super().get_stats()
        stats["memory_counts"] = {key: len(records) for key, records in self._store.items()}
        return stats
