"""Prompt builder describing memory modules to an agent.

The rendered section lists each memory module with its instructions and
the tool names that operate on it, so an agent knows which memory to
consult and how.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agent_memory.memory.memory import Memory


class MemoryPromptBuilder:
    """Utility class for building the memory section of a system prompt.

    Example:
        >>> builder = MemoryPromptBuilder()
        >>> print(builder.build([memory]))
        [Memories]
        You have persistent memory modules. ...

        ## Memory 'user_preferences'
        - Key: user_preferences
        - Instructions: Store and retrieve information about user preferences.
        - Tools: store_memory_user_preferences, delete_memory_user_preferences,
          search_memories_user_preferences
    """

    MEMORIES_HEADER = "[Memories]"
    PREAMBLE = (
        "You have persistent memory modules. Facts stored in a memory are "
        "available in future conversations. Search a memory before answering "
        "questions it may cover, and store new facts that match its instructions."
    )
    NO_INSTRUCTIONS = "(none)"

    def build(self, memories: Sequence[Memory]) -> str:
        """Build the memory section for the given modules.

        Args:
            memories: Memory modules available to the agent

        Returns:
            Prompt text, or an empty string when there are no memories
        """
        if not memories:
            return ""

        parts = [f"{self.MEMORIES_HEADER}\n{self.PREAMBLE}"]
        for memory in memories:
            parts.append(self._format_memory(memory))
        return "\n\n".join(parts)

    def _format_memory(self, memory: Memory) -> str:
        names = memory.tool_names
        instructions = memory.instructions.strip() or self.NO_INSTRUCTIONS
        return "\n".join(
            [
                f"## {memory.friendly_name()}",
                f"- Key: {memory.key}",
                f"- Instructions: {instructions}",
                f"- Tools: {names['store']}, {names['delete']}, {names['search']}",
            ]
        )
