"""Tests for memory modules."""

import os
from unittest.mock import patch

import pytest

from agent_memory.config import reset_settings
from agent_memory.exceptions import InvalidMemoryKeyError, MemoryConfigError
from agent_memory.memory import InMemoryMemory, Memory, MemoryPromptBuilder, validate_memory_key


class TestMemoryKey:
    """Test suite for memory key validation."""

    @pytest.mark.parametrize("key", ["user_preferences", "notes", "A1_b2", "_", "2024"])
    def test_valid_keys(self, key: str) -> None:
        """Test letters, digits and underscores are accepted."""
        assert validate_memory_key(key) == key

    @pytest.mark.parametrize("key", ["", "user-preferences", "user preferences", "naïve", "a.b", "x/y", "notes\n"])
    def test_invalid_keys_rejected(self, key: str) -> None:
        """Test keys with other characters are rejected, not rewritten."""
        with pytest.raises(InvalidMemoryKeyError) as exc_info:
            validate_memory_key(key)

        assert exc_info.value.key == key

    def test_memory_rejects_invalid_key(self, in_memory_provider: InMemoryMemory) -> None:
        """Test constructing a memory with an invalid key fails."""
        with pytest.raises(InvalidMemoryKeyError):
            Memory(key="bad key", provider=in_memory_provider)

        assert in_memory_provider.get_stats()["configured_keys"] == []

    def test_invalid_key_is_config_error(self) -> None:
        """Test key errors belong to the configuration error family."""
        with pytest.raises(MemoryConfigError):
            validate_memory_key("no-dashes")


class TestMemoryCreation:
    """Test suite for Memory construction and provider resolution."""

    def test_provider_instance_used_as_is(self, in_memory_provider: InMemoryMemory) -> None:
        """Test a provider instance is kept, not copied."""
        memory = Memory(key="notes", provider=in_memory_provider)

        assert memory.provider is in_memory_provider

    def test_provider_by_name(self) -> None:
        """Test a provider name is resolved through the registry."""
        memory = Memory(key="notes", provider="IN_MEMORY")

        assert isinstance(memory.provider, InMemoryMemory)

    def test_default_provider_from_settings(self) -> None:
        """Test omitting the provider uses MEMORY_PROVIDER."""
        memory = Memory(key="notes")

        assert isinstance(memory.provider, InMemoryMemory)

    def test_unknown_provider_name(self) -> None:
        """Test an unknown provider name raises MemoryConfigError."""
        with pytest.raises(MemoryConfigError) as exc_info:
            Memory(key="notes", provider="redis")

        assert "in-memory" in exc_info.value.details["valid_providers"]

    def test_invalid_provider_type(self) -> None:
        """Test a provider that is neither instance, name nor None is rejected."""
        with pytest.raises(MemoryConfigError):
            Memory(key="notes", provider=42)

    def test_instructions_default_empty(self, in_memory_provider: InMemoryMemory) -> None:
        """Test instructions are optional."""
        memory = Memory(key="notes", provider=in_memory_provider)

        assert memory.instructions == ""

    def test_configures_provider_once(self, in_memory_provider: InMemoryMemory) -> None:
        """Test construction configures the key on the provider exactly once."""
        with patch.object(InMemoryMemory, "_configure", autospec=True) as mock_configure:
            Memory(key="notes", provider=in_memory_provider)
            Memory(key="notes", provider=in_memory_provider)

        mock_configure.assert_called_once_with(in_memory_provider, "notes")
        assert in_memory_provider.is_configured("notes")

    def test_friendly_name(self, memory: Memory) -> None:
        """Test the human-readable name includes the key."""
        assert memory.friendly_name() == "Memory 'user_preferences'"


class TestMemoryOperations:
    """Test suite for add, delete and search."""

    @pytest.mark.asyncio
    async def test_add_returns_id(self, memory: Memory) -> None:
        """Test adding a fact returns its identifier."""
        memory_id = await memory.add("The user prefers dark mode")

        assert isinstance(memory_id, str)
        assert memory_id
        assert memory.provider.get_record("user_preferences", memory_id).content == (
            "The user prefers dark mode"
        )

    @pytest.mark.asyncio
    async def test_add_ids_are_unique(self, memory: Memory) -> None:
        """Test adding the same fact twice yields two ids."""
        first = await memory.add("The user prefers dark mode")
        second = await memory.add("The user prefers dark mode")

        assert first != second

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    async def test_add_empty_content(self, memory: Memory, content: str) -> None:
        """Test empty content is rejected."""
        with pytest.raises(ValueError):
            await memory.add(content)

    @pytest.mark.asyncio
    async def test_search_finds_related_fact(self, memory: Memory, facts: list[str]) -> None:
        """Test the most similar fact is returned first."""
        ids = [await memory.add(fact) for fact in facts]

        results = await memory.search("Which editor theme: dark mode?")

        assert list(results)[0] == ids[0]
        assert results[ids[0]] == facts[0]

    @pytest.mark.asyncio
    async def test_search_limits_results(self, memory: Memory, facts: list[str]) -> None:
        """Test n caps the number of results."""
        for fact in facts:
            await memory.add(fact)

        results = await memory.search("user", n=2)

        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_search_default_n_from_settings(self, memory: Memory, facts: list[str]) -> None:
        """Test the default result count comes from MEMORY_SEARCH_RESULTS."""
        for fact in facts:
            await memory.add(fact)

        with patch.dict(os.environ, {"MEMORY_SEARCH_RESULTS": "1"}):
            reset_settings()
            results = await memory.search("user")

        assert len(results) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("n", [0, -1])
    async def test_search_invalid_n(self, memory: Memory, n: int) -> None:
        """Test n below one is rejected."""
        with pytest.raises(ValueError):
            await memory.search("anything", n=n)

    @pytest.mark.asyncio
    async def test_search_empty_memory(self, memory: Memory) -> None:
        """Test searching an empty memory returns an empty mapping."""
        assert await memory.search("anything") == {}

    @pytest.mark.asyncio
    async def test_delete(self, memory: Memory) -> None:
        """Test a deleted fact is no longer found."""
        memory_id = await memory.add("The user is allergic to peanuts")

        await memory.delete(memory_id)

        assert await memory.search("peanuts") == {}

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, memory: Memory) -> None:
        """Test deleting an unknown id is a no-op."""
        memory_id = await memory.add("The user is allergic to peanuts")

        await memory.delete("does-not-exist")

        assert memory_id in await memory.search("peanuts")

    @pytest.mark.asyncio
    async def test_keys_are_isolated(self, in_memory_provider: InMemoryMemory) -> None:
        """Test memories with different keys do not see each other's facts."""
        work = Memory(key="work", provider=in_memory_provider)
        home = Memory(key="home", provider=in_memory_provider)

        await work.add("The quarterly report is due on Friday")

        assert await home.search("quarterly report") == {}
        assert len(await work.search("quarterly report")) == 1

    @pytest.mark.asyncio
    async def test_same_key_shares_facts(self, in_memory_provider: InMemoryMemory) -> None:
        """Test a new module with the same key reaches earlier facts."""
        first = Memory(key="notes", provider=in_memory_provider)
        memory_id = await first.add("The user's cat is named Miso")

        second = Memory(key="notes", provider=in_memory_provider)
        results = await second.search("cat name")

        assert results == {memory_id: "The user's cat is named Miso"}


class TestMemoryPrompt:
    """Test suite for prompt generation."""

    def test_prompt_describes_memory(self, memory: Memory) -> None:
        """Test the prompt includes key, instructions and tool names."""
        prompt = memory.get_prompt()

        assert MemoryPromptBuilder.MEMORIES_HEADER in prompt
        assert "## Memory 'user_preferences'" in prompt
        assert "- Key: user_preferences" in prompt
        assert "Store and retrieve information about user preferences." in prompt
        assert "store_memory_user_preferences" in prompt
        assert "delete_memory_user_preferences" in prompt
        assert "search_memories_user_preferences" in prompt

    def test_prompt_without_instructions(self, in_memory_provider: InMemoryMemory) -> None:
        """Test a placeholder is shown when instructions are empty."""
        memory = Memory(key="notes", provider=in_memory_provider)

        assert f"- Instructions: {MemoryPromptBuilder.NO_INSTRUCTIONS}" in memory.get_prompt()

    def test_builder_multiple_memories(self, in_memory_provider: InMemoryMemory) -> None:
        """Test the builder renders one section per memory in order."""
        work = Memory(key="work", provider=in_memory_provider)
        home = Memory(key="home", provider=in_memory_provider)

        prompt = MemoryPromptBuilder().build([work, home])

        assert prompt.count("## Memory") == 2
        assert prompt.index("'work'") < prompt.index("'home'")

    def test_builder_no_memories(self) -> None:
        """Test building with no memories gives an empty string."""
        assert MemoryPromptBuilder().build([]) == ""

    def test_tool_names(self, memory: Memory) -> None:
        """Test tool names are derived from the key."""
        assert memory.tool_names == {
            "store": "store_memory_user_preferences",
            "delete": "delete_memory_user_preferences",
            "search": "search_memories_user_preferences",
        }
