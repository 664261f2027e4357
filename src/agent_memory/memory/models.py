"""Record models shared by memory providers."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


def new_memory_id() -> str:
    """Generate a memory identifier."""
    return str(uuid4())


class MemoryRecord(BaseModel):
    """A single stored fact.

    Attributes:
        memory_id: Unique memory identifier
        memory_key: Key of the memory module that owns the fact
        content: The natural-language fact
        embedding: Vector used for similarity search
        created_at: When the fact was stored
    """

    memory_id: str = Field(default_factory=new_memory_id)
    memory_key: str
    content: str
    embedding: list[float] | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """Convert record to dictionary (without the embedding)."""
        return {
            "memory_id": self.memory_id,
            "memory_key": self.memory_key,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
        }


class MemorySearchResult(BaseModel):
    """Result from memory similarity search."""

    record: MemoryRecord
    score: float = Field(ge=-1.0, le=1.0)

    def to_dict(self) -> dict[str, Any]:
        """Convert search result to dictionary."""
        return {
            "record": self.record.to_dict(),
            "score": self.score,
        }
