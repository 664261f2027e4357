"""Agent tools bound to a memory module.

Each memory module yields three tools named after its key, so an agent
holding several memories can address each one separately:

- store_memory_<key>
- delete_memory_<key>
- search_memories_<key>
"""

from typing import TYPE_CHECKING, Any

import structlog
from pydantic_ai import Tool

from agent_memory.exceptions import AgentMemoryError
from agent_memory.observability.decorators import logged_tool

if TYPE_CHECKING:
    from agent_memory.memory.memory import Memory

logger = structlog.get_logger(__name__)


def _describe(memory: "Memory", action: str) -> str:
    description = f"{action} ({memory.friendly_name()})."
    if memory.instructions.strip():
        description += f" Memory instructions: {memory.instructions.strip()}"
    return description


def _error(tool_name: str, error: Exception) -> dict[str, Any]:
    logger.error("Memory tool failed", tool=tool_name, error=str(error))
    return {
        "status": "error",
        "message": str(error),
    }


def create_memory_tools(memory: "Memory") -> list[Tool]:
    """Build the store, delete and search tools for a memory module.

    Args:
        memory: Memory module the tools operate on

    Returns:
        pydantic-ai tools, in store/delete/search order
    """
    names = memory.tool_names

    @logged_tool(name=names["store"])
    async def store_memory(content: str) -> dict[str, Any]:
        """Store a fact so it can be recalled in future conversations.

        Args:
            content: The fact to remember, written as a standalone sentence
        """
        try:
            memory_id = await memory.add(content)
        except (AgentMemoryError, ValueError) as e:
            return _error(names["store"], e)
        return {
            "status": "success",
            "message": f"I'll remember that: {content}",
            "memory_id": memory_id,
        }

    @logged_tool(name=names["delete"])
    async def delete_memory(memory_id: str) -> dict[str, Any]:
        """Delete a stored fact that is wrong or no longer relevant.

        Args:
            memory_id: Identifier returned when the fact was stored or searched
        """
        try:
            await memory.delete(memory_id)
        except AgentMemoryError as e:
            return _error(names["delete"], e)
        return {
            "status": "success",
            "memory_id": memory_id,
        }

    @logged_tool(name=names["search"])
    async def search_memories(query: str, n: int | None = None) -> dict[str, Any]:
        """Search stored facts by meaning.

        Args:
            query: What to look for
            n: Maximum number of facts to return (configured default when omitted)
        """
        try:
            memories = await memory.search(query, n=n)
        except (AgentMemoryError, ValueError) as e:
            return _error(names["search"], e)
        return {
            "status": "success",
            "memories": memories,
            "count": len(memories),
        }

    return [
        Tool(
            store_memory,
            name=names["store"],
            description=_describe(memory, "Store a fact in memory"),
        ),
        Tool(
            delete_memory,
            name=names["delete"],
            description=_describe(memory, "Delete a fact from memory by its id"),
        ),
        Tool(
            search_memories,
            name=names["search"],
            description=_describe(memory, "Search memory for facts related to a query"),
        ),
    ]
