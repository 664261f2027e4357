"""LanceDB memory provider."""

from typing import Any, ClassVar

import structlog
from pydantic import Field, PrivateAttr

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


def _quote(value: str) -> str:
    """Quote a string literal for a LanceDB filter expression."""
    return "'" + value.replace("'", "''") + "'"


class LanceMemory(MemoryProvider):
    """Memory provider backed by a LanceDB table per memory key.

    Rows hold `id`, `text` and a fixed-size `vector` column sized from the
    embedding function.
    """

    name: ClassVar[str] = "lancedb"

    uri: str = Field(default_factory=lambda: get_settings().resolved_lancedb_uri)
    table_name: str = Field(
        default=DEFAULT_COLLECTION_TEMPLATE,
        description="Table name template; {key} is the memory key",
    )
    embedding_fn: EmbeddingCallable = Field(default_factory=get_default_embedding_fn)

    _db: Any = PrivateAttr(default=None)
    _tables: dict[str, Any] = PrivateAttr(default_factory=dict)

    def get_db(self) -> Any:
        """Connect to the LanceDB database on first use."""
        if self._db is None:
            try:
                import lancedb
            except ImportError as e:
                raise ProviderNotInstalledError(self.name, "lancedb") from e
            logger.info("Connecting to LanceDB", uri=self.uri)
            self._db = lancedb.connect(self.uri)
        return self._db

    def get_table(self, memory_key: str) -> Any:
        """Open or create the table for a memory key."""
        table = self._tables.get(memory_key)
        if table is None:
            db = self.get_db()
            import pyarrow as pa

            schema = pa.schema(
                [
                    pa.field("id", pa.string()),
                    pa.field("text", pa.string()),
                    pa.field(
                        "vector",
                        pa.list_(pa.float32(), embedding_dimension(self.embedding_fn)),
                    ),
                ]
            )
            table = db.create_table(
                self.table_name.format(key=memory_key),
                schema=schema,
                exist_ok=True,
            )
            self._tables[memory_key] = table
        return table

    def _configure(self, memory_key: str) -> None:
        self.get_table(memory_key)

    def _add(self, memory_key: str, content: str) -> str:
        memory_id = new_memory_id()
        vector = self.embedding_fn([content])[0]
        self.get_table(memory_key).add([{"id": memory_id, "text": content, "vector": vector}])
        return memory_id

    def _delete(self, memory_key: str, memory_id: str) -> None:
        self.get_table(memory_key).delete(f"id = {_quote(memory_id)}")

    def _search(self, memory_key: str, query: str, n: int) -> dict[str, str]:
        table = self.get_table(memory_key)
        if table.count_rows() == 0:
            return {}

        vector = self.embedding_fn([query])[0]
        rows = table.search(vector).distance_type("cosine").limit(n).to_list()
        return {row["id"]: row["text"] for row in rows}

    def get_stats(self) -> dict[str, Any]:
        stats = super().get_stats()
        stats["uri"] = self.uri
        stats["memory_counts"] = {key: table.count_rows() for key, table in self._tables.items()}
        return stats
