"""Agent tools for memory modules."""

from agent_memory.tools.memory_tools import create_memory_tools

__all__ = ["create_memory_tools"]
