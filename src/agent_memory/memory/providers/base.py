"""Abstract base class for memory providers."""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import structlog
from pydantic import BaseModel, ConfigDict, PrivateAttr

from agent_memory.exceptions import AgentMemoryError, MemoryProviderError
from agent_memory.observability.decorators import traced
from agent_memory.observability.logging import log_memory_operation, preview

logger = structlog.get_logger(__name__)


class MemoryProvider(BaseModel, ABC):
    """Base class for vector-store backends of memory modules.

    A provider stores facts for any number of memory keys, each in its own
    collection or table. Subclasses implement the blocking backend calls
    (`_configure`, `_add`, `_delete`, `_search`); this class runs them off
    the event loop, checks that the key was configured, and wraps backend
    failures in `MemoryProviderError`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: ClassVar[str] = "base"

    _configured_keys: set[str] = PrivateAttr(default_factory=set)

    def configure(self, memory_key: str) -> None:
        """Create or open the backing collection for `memory_key`.

        Idempotent: configuring a key twice touches the backend once.

        Args:
            memory_key: Memory module key
        """
        if memory_key in self._configured_keys:
            return
        self.validate_key(memory_key)
        try:
            self._configure(memory_key)
        except AgentMemoryError:
            raise
        except Exception as e:
            logger.error(
                "Memory provider configuration failed",
                provider=self.name,
                memory_key=memory_key,
                error=str(e),
            )
            raise MemoryProviderError(
                f"Failed to configure {self.name} memory for key {memory_key!r}",
                provider=self.name,
                operation="configure",
                details={"error": str(e)},
            ) from e

        self._configured_keys.add(memory_key)
        logger.info("Memory provider configured", provider=self.name, memory_key=memory_key)

    def validate_key(self, memory_key: str) -> None:
        """Reject keys this backend cannot name a collection after.

        Raises:
            InvalidMemoryKeyError: if the key is not usable with this provider
        """

    def is_configured(self, memory_key: str) -> bool:
        """Check whether `configure` has run for `memory_key`."""
        return memory_key in self._configured_keys

    @traced("memory.add")
    async def add(self, memory_key: str, content: str) -> str:
        """Store a fact.

        Args:
            memory_key: Memory module key
            content: Natural-language fact

        Returns:
            Memory identifier
        """
        memory_id = await self._run("add", memory_key, self._add, memory_key, content)
        logger.debug(
            "Memory added",
            provider=self.name,
            memory_key=memory_key,
            memory_id=memory_id,
            content_preview=preview(content),
        )
        return memory_id

    @traced("memory.delete")
    async def delete(self, memory_key: str, memory_id: str) -> None:
        """Delete a fact. Unknown ids are ignored.

        Args:
            memory_key: Memory module key
            memory_id: Memory identifier
        """
        await self._run("delete", memory_key, self._delete, memory_key, memory_id)

    @traced("memory.search")
    async def search(self, memory_key: str, query: str, n: int) -> dict[str, str]:
        """Find the facts most similar to `query`.

        Args:
            memory_key: Memory module key
            query: Search text
            n: Maximum number of results

        Returns:
            Mapping of memory id to content, most similar first
        """
        results = await self._run("search", memory_key, self._search, memory_key, query, n)
        logger.debug(
            "Memory search completed",
            provider=self.name,
            memory_key=memory_key,
            query_preview=preview(query),
            count=len(results),
        )
        return results

    async def _run(self, operation: str, memory_key: str, func: Any, *args: Any) -> Any:
        if memory_key not in self._configured_keys:
            raise MemoryProviderError(
                f"Memory key {memory_key!r} is not configured for the {self.name} provider",
                provider=self.name,
                operation=operation,
            )

        start_time = time.perf_counter()
        try:
            result = await asyncio.to_thread(func, *args)
        except AgentMemoryError as e:
            log_memory_operation(
                operation,
                memory_key,
                self.name,
                success=False,
                latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=str(e),
            )
            raise
        except Exception as e:
            log_memory_operation(
                operation,
                memory_key,
                self.name,
                success=False,
                latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=str(e),
            )
            raise MemoryProviderError(
                f"{self.name} memory {operation} failed",
                provider=self.name,
                operation=operation,
                details={"memory_key": memory_key, "error": str(e)},
            ) from e

        log_memory_operation(
            operation,
            memory_key,
            self.name,
            success=True,
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return result

    @abstractmethod
    def _configure(self, memory_key: str) -> None:
        """Create or open the backend collection for a key."""

    @abstractmethod
    def _add(self, memory_key: str, content: str) -> str:
        """Insert a fact and return its id."""

    @abstractmethod
    def _delete(self, memory_key: str, memory_id: str) -> None:
        """Remove a fact if present."""

    @abstractmethod
    def _search(self, memory_key: str, query: str, n: int) -> dict[str, str]:
        """Return up to `n` facts ordered by similarity."""

    def get_stats(self) -> dict[str, Any]:
        """Get provider statistics."""
        return {
            "provider": self.name,
            "configured_keys": sorted(self._configured_keys),
        }
