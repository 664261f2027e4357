"""Memory modules: named, instruction-guided handles to a vector store.

A memory module is identified by a stable key, carries free-text
instructions for the agent, and is bound to a provider that stores and
retrieves facts by semantic similarity. The same key on the same provider
reaches the same facts in every conversation.

Example:
    >>> memory = Memory(
    ...     key="user_preferences",
    ...     instructions="Store and retrieve information about user preferences.",
    ... )
    >>> memory_id = await memory.add("The user prefers dark mode")
    >>> await memory.search("What theme does the user like?")
    {'6f1c...': 'The user prefers dark mode'}
"""

import re
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from agent_memory.config import get_settings
from agent_memory.exceptions import InvalidMemoryKeyError, MemoryConfigError
from agent_memory.memory.prompt import MemoryPromptBuilder
from agent_memory.memory.providers import MemoryProvider, get_memory_provider
from agent_memory.observability.logging import preview

if TYPE_CHECKING:
    from pydantic_ai import Tool

logger = structlog.get_logger(__name__)

_KEY_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def validate_memory_key(key: str) -> str:
    """Return `key` unchanged if it is a valid memory key.

    Raises:
        InvalidMemoryKeyError: if the key is empty or contains characters
            other than ASCII letters, digits and underscores
    """
    if not isinstance(key, str) or not _KEY_PATTERN.fullmatch(key):
        raise InvalidMemoryKeyError(str(key))
    return key


class Memory(BaseModel):
    """A memory module.

    Attributes:
        key: Stable, unique identifier of the stored facts
        instructions: Guidance for the agent on what to store and when to search
        provider: Backend that stores the facts
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str = Field(..., description="Unique identifier for the memory module")
    instructions: str = Field(
        default="",
        description="Explains what information to store and how to use it",
    )
    provider: MemoryProvider = Field(
        default=None,
        validate_default=True,
        description="Provider instance or name; the configured default when omitted",
    )

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        return validate_memory_key(v)

    @field_validator("provider", mode="before")
    @classmethod
    def resolve_provider(cls, v: Any) -> MemoryProvider:
        if v is None:
            return get_memory_provider(get_settings().provider)
        if isinstance(v, str):
            return get_memory_provider(v)
        if isinstance(v, MemoryProvider):
            return v
        raise MemoryConfigError(
            f"provider must be a MemoryProvider, a provider name or None, got {type(v).__name__}"
        )

    def model_post_init(self, __context: Any) -> None:
        self.provider.configure(self.key)
        logger.info(
            "Memory module initialized",
            memory_key=self.key,
            provider=self.provider.name,
        )

    def friendly_name(self) -> str:
        """Human-readable name for prompts and logs."""
        return f"Memory {self.key!r}"

    async def add(self, content: str) -> str:
        """Store a natural-language fact.

        Args:
            content: The fact to remember

        Returns:
            Memory identifier
        """
        if not content or not content.strip():
            raise ValueError("Memory content must not be empty")

        memory_id = await self.provider.add(self.key, content)
        logger.info(
            "Memory stored",
            memory_key=self.key,
            memory_id=memory_id,
            content_preview=preview(content),
        )
        return memory_id

    async def delete(self, memory_id: str) -> None:
        """Delete a stored fact. Unknown ids are ignored.

        Args:
            memory_id: Memory identifier
        """
        await self.provider.delete(self.key, memory_id)
        logger.info("Memory deleted", memory_key=self.key, memory_id=memory_id)

    async def search(self, query: str, n: int | None = None) -> dict[str, str]:
        """Find stored facts similar to `query`.

        Args:
            query: Search text
            n: Maximum number of results (settings default, 20, when omitted)

        Returns:
            Mapping of memory id to content, most similar first
        """
        if n is None:
            n = get_settings().default_search_results
        if n < 1:
            raise ValueError("n must be >= 1")

        return await self.provider.search(self.key, query, n)

    def get_prompt(self) -> str:
        """Prompt section describing this memory to an agent."""
        return MemoryPromptBuilder().build([self])

    def get_tools(self) -> list["Tool"]:
        """Agent tools to store, delete and search facts in this memory."""
        from agent_memory.tools.memory_tools import create_memory_tools

        return create_memory_tools(self)

    @property
    def tool_names(self) -> dict[str, str]:
        """Names of the tools returned by `get_tools`, by operation."""
        return {
            "store": f"store_memory_{self.key}",
            "delete": f"delete_memory_{self.key}",
            "search": f"search_memories_{self.key}",
        }
