"""Qdrant memory provider."""

from pathlib import Path
from typing import Any, ClassVar
from uuid import UUID

import structlog
from pydantic import Field

from agent_memory.config import get_settings
from agent_memory.constants import DEFAULT_COLLECTION_TEMPLATE
from agent_memory.exceptions import ProviderNotInstalledError
from agent_memory.memory.embeddings import (
    EmbeddingCallable,
    embedding_dimension,
    get_default_embedding_fn,
)
from agent_memory.memory.models import new_memory_id
from agent_memory.memory.providers.base import MemoryProvider

logger = structlog.get_logger(__name__)


class QdrantMemory(MemoryProvider):
    """Memory provider storing one Qdrant collection per memory key.

    Give a ready `client`, or a server `url` (plus `api_key`), or leave
    both unset to use Qdrant's local on-disk mode under `path`.
    """

    name: ClassVar[str] = "qdrant"

    client: Any = Field(default=None, description="qdrant_client.QdrantClient")
    url: str | None = Field(default_factory=lambda: get_settings().qdrant_url)
    api_key: str | None = Field(default_factory=lambda: get_settings().qdrant_api_key)
    path: Path = Field(default_factory=lambda: get_settings().resolved_qdrant_path)
    collection_name: str = Field(
        default=DEFAULT_COLLECTION_TEMPLATE,
        description="Collection name template; {key} is the memory key",
    )
    embedding_fn: EmbeddingCallable = Field(default_factory=get_default_embedding_fn)

    def get_client(self) -> Any:
        """Return the Qdrant client, building it on first use."""
        if self.client is None:
            try:
                from qdrant_client import QdrantClient
            except ImportError as e:
                raise ProviderNotInstalledError(self.name, "qdrant") from e

            if self.url:
                logger.info("Connecting to Qdrant", url=self.url)
                self.client = QdrantClient(url=self.url, api_key=self.api_key)
            else:
                path = self.path.expanduser()
                path.mkdir(parents=True, exist_ok=True)
                logger.info("Opening local Qdrant", path=str(path))
                self.client = QdrantClient(path=str(path))
        return self.client

    def _collection(self, memory_key: str) -> str:
        return self.collection_name.format(key=memory_key)

    def _configure(self, memory_key: str) -> None:
        client = self.get_client()
        from qdrant_client import models

        name = self._collection(memory_key)
        if not client.collection_exists(name):
            client.create_collection(
                collection_name=name,
                vectors_config=models.VectorParams(
                    size=embedding_dimension(self.embedding_fn),
                    distance=models.Distance.COSINE,
                ),
            )
            logger.info("Qdrant collection created", collection=name)

    def _add(self, memory_key: str, content: str) -> str:
        from qdrant_client import models

        memory_id = new_memory_id()
        vector = self.embedding_fn([content])[0]
        self.get_client().upsert(
            collection_name=self._collection(memory_key),
            points=[models.PointStruct(id=memory_id, vector=vector, payload={"text": content})],
        )
        return memory_id

    def _delete(self, memory_key: str, memory_id: str) -> None:
        from qdrant_client import models

        # Point ids are UUIDs; anything else cannot be stored
        try:
            UUID(memory_id)
        except ValueError:
            logger.debug("Ignoring delete of non-UUID id", memory_key=memory_key, memory_id=memory_id)
            return

        self.get_client().delete(
            collection_name=self._collection(memory_key),
            points_selector=models.PointIdsList(points=[memory_id]),
        )

    def _search(self, memory_key: str, query: str, n: int) -> dict[str, str]:
        vector = self.embedding_fn([query])[0]
        response = self.get_client().query_points(
            collection_name=self._collection(memory_key),
            query=vector,
            limit=n,
            with_payload=True,
        )
        return {str(point.id): point.payload["text"] for point in response.points}

    def get_stats(self) -> dict[str, Any]:
        stats = super().get_stats()
        client = self.get_client()
        stats["memory_counts"] = {
            key: client.count(collection_name=self._collection(key)).count
            for key in self._configured_keys
        }
        return stats
