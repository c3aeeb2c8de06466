"""Process-scoped registry of guild configurations."""

from __future__ import annotations

import asyncio
from typing import Dict, Iterator, Optional

from storychain.errors import NoActiveStory, NotConfigured
from storychain.models import GuildConfig, StoryData


class ConfigRegistry:
    """Owns the guild id → :class:`GuildConfig` mapping.

    Mutators are plain synchronous methods and never suspend. Callers that
    need a read-modify-write sequence to stay uninterrupted across awaits
    hold :meth:`guard` for the guild while calling them.
    """

    def __init__(self):
        self._configs: Dict[int, GuildConfig] = {}
        self._locks: Dict[int, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._configs)

    def __iter__(self) -> Iterator[GuildConfig]:
        return iter(list(self._configs.values()))

    def guard(self, guild_id: int) -> asyncio.Lock:
        """Return the mutual-exclusion lock serialising mutations of one guild."""
        lock = self._locks.get(guild_id)
        if lock is None:
            lock = self._locks[guild_id] = asyncio.Lock()
        return lock

    def get(self, guild_id: int) -> Optional[GuildConfig]:
        return self._configs.get(guild_id)

    def get_or_create(self, guild_id: int) -> GuildConfig:
        config = self._configs.get(guild_id)
        if config is None:
            config = self._configs[guild_id] = GuildConfig(guild_id=guild_id)
        return config

    def bind_channel(self, guild_id: int, channel_id: int) -> int:
        """Bind the story channel and start a fresh story in it.

        Any words of a story still in progress are dropped without being
        archived. Returns how many were dropped.
        """
        config = self.get_or_create(guild_id)
        discarded = config.current_story.word_count if config.current_story else 0
        config.story_channel_id = channel_id
        config.current_story = StoryData(channel_id=channel_id)
        return discarded

    def reset_words(self, guild_id: int) -> int:
        """Clear the current story's words in place. Returns how many were cleared."""
        config = self.get_or_create(guild_id)
        if config.current_story is None:
            raise NoActiveStory()
        cleared = config.current_story.word_count
        config.current_story.words.clear()
        return cleared

    def disable(self, guild_id: int) -> int:
        """Unbind the story channel. Returns the id of the channel that was bound."""
        config = self.get_or_create(guild_id)
        if config.story_channel_id is None:
            raise NotConfigured()
        channel_id = config.story_channel_id
        config.story_channel_id = None
        config.current_story = None
        return channel_id
